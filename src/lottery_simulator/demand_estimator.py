"""Seat/applicant estimation for a school and priority tier.

Approximates how competitive a seat is for an applicant in a given priority
tier from a school's static attributes. Demand is not measured: higher
composite scores and special programs are assumed to draw disproportionately
more applicants.
"""

import logging

from src.lottery_simulator.config import (
    DEFAULT_BASE_SEATS,
    DEFAULT_DEMAND_MULTIPLIER,
    DUAL_LANGUAGE_MULTIPLIER,
    ENROLLMENT_TO_SEATS_DIVISOR,
    GIFTED_TALENTED_MULTIPLIER,
    MAX_BASE_SEATS,
    MIN_BASE_SEATS,
    SCORE_DEMAND_MULTIPLIERS,
)
from src.lottery_simulator.models import DemandProfile, PriorityTier
from src.lottery_simulator.validation import parse_priority_tier
from src.school_data.models import School
from src.school_data.scoring import round_half_up

logger = logging.getLogger(__name__)


class DemandEstimator:
    """Estimate a DemandProfile for a (school, priority tier) pair.

    The estimate works in three steps:

    * **Seats** - one admission cohort, derived from total enrollment.
    * **Applicants** - seats scaled by a demand multiplier from the
      composite score and program flags, then split across tiers by the
      fixed tier population shares.
    * **Remaining seats** - seats left once every strictly higher-priority
      tier has been served.

    The estimator is deterministic and stateless.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def estimate_demand(self, school: School, tier: PriorityTier) -> DemandProfile:
        """Build the demand profile for *school* as seen from *tier*.

        Args:
            school: School attributes (enrollment, score, program flags).
            tier: The family's priority tier at this school.

        Returns:
            :class:`DemandProfile` with ``estimated_seats >= 0`` and
            ``estimated_applicants >= 1``.
        """
        tier = parse_priority_tier(tier)
        base_seats = self.base_seats(school)
        total_applicants = round_half_up(base_seats * self.demand_multiplier(school))

        applicants_in_tier = max(1, round_half_up(total_applicants * tier.share))
        applicants_ahead = sum(
            round_half_up(total_applicants * other.share)
            for other in PriorityTier
            if other.rank < tier.rank
        )

        estimated_seats = max(0, base_seats - applicants_ahead)

        profile = DemandProfile(
            estimated_seats=estimated_seats,
            estimated_applicants=applicants_in_tier,
            demand_ratio=applicants_in_tier / max(1, estimated_seats),
        )
        logger.debug(
            "Demand %s (%s): base_seats=%.1f total_applicants=%d ahead=%d -> %s",
            school.dbn, tier.value, base_seats, total_applicants,
            applicants_ahead, profile,
        )
        return profile

    @staticmethod
    def base_seats(school: School) -> float:
        """Seats in one admission cohort.

        ``enrollment / 8`` clamped to ``[18, 72]``; 36 when enrollment is
        unknown.
        """
        if not school.enrollment:
            return DEFAULT_BASE_SEATS
        seats = school.enrollment / ENROLLMENT_TO_SEATS_DIVISOR
        return max(MIN_BASE_SEATS, min(MAX_BASE_SEATS, seats))

    @staticmethod
    def demand_multiplier(school: School) -> float:
        """Applicants per seat across all tiers.

        Step function of the composite score, then x1.5 for a gifted and
        talented program and x1.3 for a dual-language program.
        """
        score = school.overall_score
        multiplier = DEFAULT_DEMAND_MULTIPLIER
        for threshold, value in SCORE_DEMAND_MULTIPLIERS:
            if score >= threshold:
                multiplier = value
                break

        if school.has_gifted_talented:
            multiplier *= GIFTED_TALENTED_MULTIPLIER
        if school.has_dual_language:
            multiplier *= DUAL_LANGUAGE_MULTIPLIER
        return multiplier


_default_estimator = DemandEstimator()


def estimate_demand(school: School, tier: PriorityTier) -> DemandProfile:
    """Module-level shortcut for :meth:`DemandEstimator.estimate_demand`."""
    return _default_estimator.estimate_demand(school, tier)
