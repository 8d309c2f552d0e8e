from src.school_data.ingestion import SchoolDataError, SchoolDataLoader
from src.school_data.models import School
from src.school_data.school_repository import SchoolRepository
from src.school_data.scoring import calculate_overall_score, get_score_label, round_half_up

__all__ = [
    "School",
    "SchoolDataError",
    "SchoolDataLoader",
    "SchoolRepository",
    "calculate_overall_score",
    "get_score_label",
    "round_half_up",
]
