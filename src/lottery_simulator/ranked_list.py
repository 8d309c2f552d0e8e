"""Ranked application builder - the family's editable list of choices."""

import logging
from typing import List, Optional, Tuple

from src.lottery_simulator.config import (
    DEFAULT_NUM_TRIALS,
    DEFAULT_PRIORITY,
    MAX_RANKED_CHOICES,
)
from src.lottery_simulator.lottery_engine import LotteryEngine
from src.lottery_simulator.models import OverallResult, RankedChoice, SimulationResult
from src.lottery_simulator.validation import InvalidInputError, parse_priority_tier
from src.school_data.models import School

logger = logging.getLogger(__name__)


class RankedApplication:
    """A family's ranked list of up to 12 schools.

    Order encodes preference (index 0 = first choice). Every edit keeps the
    list valid for :meth:`LotteryEngine.run_simulation`, apart from being
    empty.
    """

    def __init__(self, choices: Optional[List[RankedChoice]] = None):
        self._choices: List[RankedChoice] = []
        for choice in choices or []:
            self.add_school(choice.school, choice.priority)

    def __len__(self) -> int:
        return len(self._choices)

    @property
    def choices(self) -> List[RankedChoice]:
        """Copy of the current ranked list."""
        return list(self._choices)

    @property
    def ranked_dbns(self) -> List[str]:
        return [choice.school.dbn for choice in self._choices]

    @property
    def remaining_slots(self) -> int:
        return MAX_RANKED_CHOICES - len(self._choices)

    def add_school(self, school: School, priority=DEFAULT_PRIORITY) -> RankedChoice:
        """Append *school* as the lowest-ranked choice.

        Raises:
            InvalidInputError: If the list is full, the school is already
                ranked, or *priority* is not a valid tier.
        """
        if len(self._choices) >= MAX_RANKED_CHOICES:
            raise InvalidInputError(
                f"Cannot rank more than {MAX_RANKED_CHOICES} schools"
            )
        if school.dbn.upper() in {dbn.upper() for dbn in self.ranked_dbns}:
            raise InvalidInputError(f"{school.name} ({school.dbn}) is already ranked")

        choice = RankedChoice(school=school, priority=parse_priority_tier(priority))
        self._choices.append(choice)
        logger.debug(
            "Ranked #%d: %s (%s)", len(self._choices), school.dbn, choice.priority.value
        )
        return choice

    def remove_school(self, index: int) -> RankedChoice:
        """Remove and return the choice at *index*."""
        self._check_index(index)
        return self._choices.pop(index)

    def move_school(self, index: int, direction: str) -> bool:
        """Swap the choice at *index* with its neighbour.

        Args:
            index: Position of the choice to move.
            direction: ``"up"`` (towards first choice) or ``"down"``.

        Returns:
            False (and no change) when the move would leave the list.
        """
        self._check_index(index)
        if direction not in ("up", "down"):
            raise InvalidInputError(
                f"Invalid direction: {direction!r}. Must be 'up' or 'down'."
            )

        new_index = index - 1 if direction == "up" else index + 1
        if new_index < 0 or new_index >= len(self._choices):
            return False

        self._choices[index], self._choices[new_index] = (
            self._choices[new_index],
            self._choices[index],
        )
        return True

    def update_priority(self, index: int, priority) -> RankedChoice:
        """Replace the priority tier of the choice at *index*."""
        self._check_index(index)
        choice = RankedChoice(
            school=self._choices[index].school,
            priority=parse_priority_tier(priority),
        )
        self._choices[index] = choice
        return choice

    def run(
        self,
        engine: Optional[LotteryEngine] = None,
        num_trials: int = DEFAULT_NUM_TRIALS,
    ) -> Tuple[List[SimulationResult], OverallResult]:
        """Simulate the current list."""
        engine = engine or LotteryEngine()
        return engine.run_simulation(self._choices, num_trials)

    def _check_index(self, index: int):
        if not 0 <= index < len(self._choices):
            raise InvalidInputError(
                f"Choice index {index} out of range [0, {len(self._choices)})"
            )
