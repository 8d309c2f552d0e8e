"""School record consumed by the lottery simulator."""

from dataclasses import dataclass
from typing import Optional

from src.school_data.scoring import calculate_overall_score


@dataclass(frozen=True)
class School:
    """A single school as exposed by the school data source.

    Records are treated as read-only inputs; nothing in the simulator
    mutates them.
    """

    dbn: str
    name: str
    district: Optional[int] = None
    grade_band: str = ""
    academics_score: int = 0
    climate_score: int = 0
    progress_score: int = 0
    enrollment: Optional[int] = None
    has_gifted_talented: bool = False
    has_dual_language: bool = False
    has_3k: bool = False
    has_prek: bool = False
    composite_score: Optional[int] = None  # Precomputed 0-100 score, if known

    @property
    def overall_score(self) -> int:
        """Composite 0-100 quality score."""
        if self.composite_score is not None:
            return self.composite_score
        return calculate_overall_score(self)
