"""Composite school score helpers.

The composite score blends the three DOE survey sub-scores into a single
0-100 value used for display and for demand estimation.
"""

import math

from src.school_data.config import (
    DEFAULT_SCORE_LABEL,
    OVERALL_SCORE_WEIGHTS,
    SCORE_LABELS,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``);
    every count and percentage in this project rounds halves up instead
    (``round_half_up(2.5) == 3``).
    """
    return int(math.floor(value + 0.5))


def calculate_overall_score(school) -> int:
    """Weighted composite of academics, climate and progress scores."""
    total = sum(
        weight * (getattr(school, column) or 0)
        for column, weight in OVERALL_SCORE_WEIGHTS.items()
    )
    return round_half_up(total)


def get_score_label(score: float) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return DEFAULT_SCORE_LABEL
