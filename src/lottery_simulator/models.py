"""Data models for the lottery simulator."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from src.lottery_simulator.config import (
    PRIORITY_TIER_LABELS,
    PRIORITY_TIER_RANKS,
    PRIORITY_TIER_SHARES,
)
from src.school_data.models import School


class PriorityTier(str, Enum):
    """Admission priority a family holds at one school."""

    SIBLING = "sibling"
    ZONED = "zoned"
    DISTRICT = "district"
    BOROUGH = "borough"
    CITYWIDE = "citywide"

    @property
    def rank(self) -> int:
        """Processing order within a school's pool (1 = processed first)."""
        return PRIORITY_TIER_RANKS[self.value]

    @property
    def share(self) -> float:
        """Fraction of a school's applicants assumed to hold this tier."""
        return PRIORITY_TIER_SHARES[self.value]

    @property
    def label(self) -> str:
        return PRIORITY_TIER_LABELS[self.value]


@dataclass(frozen=True)
class RankedChoice:
    """One line of a family's application: a school and their priority there."""

    school: School
    priority: PriorityTier


@dataclass(frozen=True)
class DemandProfile:
    """How competitive a seat is for an applicant in one priority tier."""

    estimated_seats: float  # Seats left after higher-priority tiers; may be fractional
    estimated_applicants: int  # Applicants in the same tier (>= 1)
    demand_ratio: float  # Applicants per remaining seat


class TrialStatus(str, Enum):
    MATCHED = "matched"
    WAITLISTED = "waitlisted"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class TrialOutcome:
    """Result of a single simulated lottery.

    ``choice_index`` is the 0-based position of the matched choice and is
    only set when ``status`` is MATCHED.
    """

    status: TrialStatus
    choice_index: Optional[int] = None

    @classmethod
    def matched(cls, choice_index: int) -> "TrialOutcome":
        return cls(TrialStatus.MATCHED, choice_index)

    @classmethod
    def waitlisted(cls) -> "TrialOutcome":
        return cls(TrialStatus.WAITLISTED)

    @classmethod
    def unmatched(cls) -> "TrialOutcome":
        return cls(TrialStatus.UNMATCHED)


@dataclass
class SimulationResult:
    """Per-choice tally, finalized into a percentage after all trials."""

    choice: RankedChoice
    rank: int  # 1-based position in the ranked list
    total_simulations: int
    matched_in_simulations: int = 0
    acceptance_probability: int = 0  # Rounded percent

    @property
    def dbn(self) -> str:
        return self.choice.school.dbn

    @property
    def school_name(self) -> str:
        return self.choice.school.name

    @property
    def priority(self) -> PriorityTier:
        return self.choice.priority

    def to_dict(self) -> Dict:
        return {
            "dbn": self.dbn,
            "schoolName": self.school_name,
            "rank": self.rank,
            "priority": self.priority.value,
            "acceptanceProbability": self.acceptance_probability,
            "matchedInSimulations": self.matched_in_simulations,
            "totalSimulations": self.total_simulations,
        }


@dataclass
class OverallResult:
    """Aggregate outcome over every trial of a run."""

    matched_school: Optional[SimulationResult]  # Most frequently matched choice
    match_rate: int
    waitlist_rate: int
    unmatched_rate: int

    def to_dict(self) -> Dict:
        return {
            "matchedSchool": (
                self.matched_school.to_dict() if self.matched_school else None
            ),
            "matchRate": self.match_rate,
            "waitlistRate": self.waitlist_rate,
            "unmatchedRate": self.unmatched_rate,
        }
