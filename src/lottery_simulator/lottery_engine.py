"""Monte Carlo estimate of a family's lottery outcomes.

Each trial walks the family's ranked list in preference order and stops at
the first school whose lottery the family wins. Schools are simulated
independently: every choice gets a fresh uniform draw in every trial, unlike
the real NYC lottery which gives each applicant one lottery number shared
across all schools. The estimate therefore does not model correlation
between a family's outcomes at different schools.
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from src.lottery_simulator.config import (
    DEFAULT_NUM_TRIALS,
    FIXED_ACCEPTANCE_PROBABILITIES,
    MAX_LOTTERY_ACCEPTANCE,
    WAITLIST_BASE,
    WAITLIST_CAP,
    WAITLIST_RATIO_FLOOR,
)
from src.lottery_simulator.demand_estimator import DemandEstimator
from src.lottery_simulator.models import (
    DemandProfile,
    OverallResult,
    PriorityTier,
    RankedChoice,
    SimulationResult,
    TrialOutcome,
    TrialStatus,
)
from src.lottery_simulator.validation import (
    InvalidInputError,
    validate_num_trials,
    validate_ranked_choices,
)
from src.school_data.scoring import round_half_up

logger = logging.getLogger(__name__)


def _percent(count: int, total: int) -> int:
    return round_half_up(count / total * 100)


class LotteryEngine:
    """Run Monte Carlo lottery simulations over a ranked list.

    Args:
        estimator: Source of demand profiles. Defaults to
            :class:`DemandEstimator`.
        rng: Random source exposing ``random() -> float in [0, 1)``.
            Each engine owns its stream; pass separate engines to
            concurrent callers.
        seed: Seed for a new ``random.Random`` when *rng* is not given.
    """

    def __init__(
        self,
        estimator: Optional[DemandEstimator] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.estimator = estimator or DemandEstimator()
        self.rng = rng if rng is not None else random.Random(seed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run_simulation(
        self,
        ranked_choices: Sequence[RankedChoice],
        num_trials: int = DEFAULT_NUM_TRIALS,
    ) -> Tuple[List[SimulationResult], OverallResult]:
        """Simulate *num_trials* independent lotteries for one application.

        Args:
            ranked_choices: 1 to 12 choices, index 0 = first preference.
            num_trials: Number of trials (positive).

        Returns:
            ``(results, overall)``: one :class:`SimulationResult` per choice
            in list order, and the :class:`OverallResult` summary.

        Raises:
            InvalidInputError: If the ranked list or trial count is invalid.
                Nothing is simulated in that case.
        """
        validate_ranked_choices(ranked_choices)
        validate_num_trials(num_trials)

        choices = list(ranked_choices)
        profiles = [
            self.estimator.estimate_demand(choice.school, choice.priority)
            for choice in choices
        ]
        results = [
            SimulationResult(choice=choice, rank=rank, total_simulations=num_trials)
            for rank, choice in enumerate(choices, start=1)
        ]

        logger.info(
            "Simulating %d ranked choices over %d trials", len(choices), num_trials
        )

        total_matched = 0
        total_waitlisted = 0
        for _ in range(num_trials):
            outcome = self.simulate_trial(choices, profiles)
            if outcome.status is TrialStatus.MATCHED:
                results[outcome.choice_index].matched_in_simulations += 1
                total_matched += 1
            elif outcome.status is TrialStatus.WAITLISTED:
                total_waitlisted += 1

        for result in results:
            result.acceptance_probability = _percent(
                result.matched_in_simulations, num_trials
            )

        overall = OverallResult(
            matched_school=self._most_likely_match(results),
            match_rate=_percent(total_matched, num_trials),
            waitlist_rate=_percent(total_waitlisted, num_trials),
            unmatched_rate=_percent(
                num_trials - total_matched - total_waitlisted, num_trials
            ),
        )

        logger.info(
            "Simulation complete: matched=%d%% waitlisted=%d%% unmatched=%d%% "
            "(most likely: %s)",
            overall.match_rate,
            overall.waitlist_rate,
            overall.unmatched_rate,
            overall.matched_school.dbn if overall.matched_school else "none",
        )
        return results, overall

    def simulate_trial(
        self,
        ranked_choices: Sequence[RankedChoice],
        profiles: Sequence[DemandProfile],
    ) -> TrialOutcome:
        """Play out one lottery for the whole ranked list.

        Choices are tried strictly in list order; the first success ends
        the trial. A trial with no success may still land on a waitlist,
        judged from the last choice tried.

        Raises:
            InvalidInputError: If there is not exactly one profile per choice.
        """
        if len(profiles) != len(ranked_choices):
            raise InvalidInputError(
                f"Got {len(profiles)} demand profiles for {len(ranked_choices)} choices"
            )

        for index, (choice, profile) in enumerate(zip(ranked_choices, profiles)):
            if self._wins_seat(choice.priority, profile):
                return TrialOutcome.matched(index)

        if profiles and self.rng.random() < self.waitlist_probability(profiles[-1]):
            return TrialOutcome.waitlisted()
        return TrialOutcome.unmatched()

    # ------------------------------------------------------------------
    # Probability rules
    # ------------------------------------------------------------------

    @staticmethod
    def lottery_acceptance_probability(profile: DemandProfile) -> float:
        """Seats per applicant in the tier, capped at 95%."""
        return min(
            MAX_LOTTERY_ACCEPTANCE,
            profile.estimated_seats / profile.estimated_applicants,
        )

    @staticmethod
    def waitlist_probability(profile: DemandProfile) -> float:
        """Chance of a waitlist offer; falls as the demand ratio rises.

        Formula::

            waitlist = min(0.5, 0.3 / max(0.5, demand_ratio))
        """
        return min(
            WAITLIST_CAP,
            WAITLIST_BASE / max(WAITLIST_RATIO_FLOOR, profile.demand_ratio),
        )

    def _wins_seat(self, priority: PriorityTier, profile: DemandProfile) -> bool:
        """Draw for a single choice.

        Sibling and zoned applicants win with a fixed probability whenever
        any seats remain (no draw is taken when none do). Other tiers enter
        a lottery against the applicants in their tier.
        """
        fixed = FIXED_ACCEPTANCE_PROBABILITIES.get(priority.value)
        if fixed is not None:
            return profile.estimated_seats > 0 and self.rng.random() < fixed
        return self.rng.random() < self.lottery_acceptance_probability(profile)

    @staticmethod
    def _most_likely_match(
        results: Sequence[SimulationResult],
    ) -> Optional[SimulationResult]:
        """Choice matched in the most trials; the first one wins ties."""
        best = None
        max_matches = 0
        for result in results:
            if result.matched_in_simulations > max_matches:
                max_matches = result.matched_in_simulations
                best = result
        return best


def run_simulation(
    ranked_choices: Sequence[RankedChoice],
    num_trials: int = DEFAULT_NUM_TRIALS,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> Tuple[List[SimulationResult], OverallResult]:
    """Run a simulation on a fresh engine (safe to call concurrently)."""
    engine = LotteryEngine(rng=rng, seed=seed)
    return engine.run_simulation(ranked_choices, num_trials)
