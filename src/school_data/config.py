from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
SCHOOLS_FILE = DATA_DIR / "schools.csv"

# Composite score weights (must sum to 1.0)
OVERALL_SCORE_WEIGHTS = {
    "academics_score": 0.4,
    "climate_score": 0.3,
    "progress_score": 0.3,
}

# Score label thresholds, checked from highest to lowest
SCORE_LABELS = [
    (85, "Outstanding"),
    (70, "Strong"),
    (55, "Average"),
]
DEFAULT_SCORE_LABEL = "Below Average"

# Columns every school export must carry
REQUIRED_COLUMNS = ["dbn", "name"]

# Optional numeric columns (missing -> None / 0)
SCORE_COLUMNS = ["academics_score", "climate_score", "progress_score"]
NULLABLE_INT_COLUMNS = ["district", "enrollment", "composite_score"]

# Program flags, parsed from mixed spellings ("Yes", "true", 1, "X", ...)
BOOLEAN_COLUMNS = [
    "has_gifted_talented",
    "has_dual_language",
    "has_3k",
    "has_prek",
]
TRUTHY_VALUES = {"true", "t", "yes", "y", "1", "1.0", "x"}

# Lottery eligibility (3-K / Pre-K serving schools)
ELIGIBLE_GRADE_BANDS = {"ES"}
KINDERGARTEN_MARKER = "K"

# Search settings
SEARCH_RESULT_LIMIT = 50
