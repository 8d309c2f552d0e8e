"""Input validation for simulation runs.

Every check here runs before the trial loop starts, so invalid input is
rejected outright instead of producing a zero-filled result that would read
as "0% chance".
"""

from typing import Sequence

from src.lottery_simulator.config import MAX_RANKED_CHOICES
from src.lottery_simulator.models import PriorityTier, RankedChoice


class InvalidInputError(Exception):
    """Raised when a ranked list, trial count or priority tier is invalid."""

    pass


def parse_priority_tier(value) -> PriorityTier:
    """Coerce *value* to a PriorityTier.

    Accepts a PriorityTier or its string value (case-insensitive).

    Raises:
        InvalidInputError: If *value* is not one of the five tiers.
    """
    if isinstance(value, PriorityTier):
        return value
    if isinstance(value, str):
        try:
            return PriorityTier(value.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(tier.value for tier in PriorityTier)
    raise InvalidInputError(
        f"Invalid priority tier: {value!r}. Must be one of: {valid}."
    )


def validate_num_trials(num_trials) -> None:
    """Trial count must be a positive integer."""
    if isinstance(num_trials, bool) or not isinstance(num_trials, int):
        raise InvalidInputError(
            f"num_trials must be an integer, got {type(num_trials).__name__}"
        )
    if num_trials <= 0:
        raise InvalidInputError(f"num_trials must be positive, got {num_trials}")


def validate_ranked_choices(ranked_choices: Sequence[RankedChoice]) -> None:
    """Check a ranked list before simulating it.

    Raises:
        InvalidInputError: If the list is empty, longer than
            MAX_RANKED_CHOICES, contains something other than a
            RankedChoice, has an invalid tier, or ranks the same school
            twice.
    """
    if not ranked_choices:
        raise InvalidInputError("Ranked list is empty; add at least one school")

    if len(ranked_choices) > MAX_RANKED_CHOICES:
        raise InvalidInputError(
            f"Ranked list has {len(ranked_choices)} schools "
            f"(max {MAX_RANKED_CHOICES})"
        )

    seen = set()
    for index, choice in enumerate(ranked_choices, start=1):
        if not isinstance(choice, RankedChoice):
            raise InvalidInputError(
                f"Choice {index} is not a RankedChoice: {choice!r}"
            )
        if not isinstance(choice.priority, PriorityTier):
            raise InvalidInputError(
                f"Choice {index} ({choice.school.dbn}) has invalid priority "
                f"{choice.priority!r}"
            )
        dbn = choice.school.dbn.upper()
        if dbn in seen:
            raise InvalidInputError(
                f"School {choice.school.dbn} appears more than once in the ranked list"
            )
        seen.add(dbn)
