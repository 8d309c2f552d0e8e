"""Shared fixtures for the lottery simulator test suite."""

import json

import pytest

from src.school_data.models import School
from src.school_data.school_repository import SchoolRepository

# ------------------------------------------------------------------
# School records - cheap to construct, no I/O
# ------------------------------------------------------------------

SAMPLE_SCHOOL_ROWS = [
    # dbn, name, district, grade_band, scores (acad, clim, prog), enrollment,
    # G&T, dual language, 3-K, Pre-K
    ("15K321", "P.S. 321 William Penn", 15, "ES", (95, 92, 90), 1400, False, False, False, True),
    ("15K039", "P.S. 039 Henry Bristow", 15, "ES", (80, 78, 75), 400, False, True, True, True),
    ("13K008", "P.S. 008 Robert Fulton", 13, "K-5", (88, 85, 84), 720, True, False, False, True),
    ("02M041", "P.S. 041 Greenwich Village", 2, "ES", (70, 65, 60), None, False, False, True, False),
    ("02M104", "J.H.S. 104 Simon Baruch", 2, "MS", (75, 70, 72), 1100, False, False, False, False),
    ("75X010", "Bronx Early Learning Center", 75, "3K", (50, 55, 45), 150, False, False, True, True),
]


def _row_to_record(row):
    (dbn, name, district, grade_band, scores, enrollment,
     gifted, dual, has_3k, has_prek) = row
    return {
        "dbn": dbn,
        "name": name,
        "district": district,
        "grade_band": grade_band,
        "academics_score": scores[0],
        "climate_score": scores[1],
        "progress_score": scores[2],
        "enrollment": enrollment,
        "has_gifted_talented": gifted,
        "has_dual_language": dual,
        "has_3k": has_3k,
        "has_prek": has_prek,
    }


@pytest.fixture
def sample_records():
    """School dicts shaped like the ``/api/schools`` response."""
    return [_row_to_record(row) for row in SAMPLE_SCHOOL_ROWS]


@pytest.fixture
def sample_schools(sample_records):
    return [School(**record) for record in sample_records]


@pytest.fixture
def repository(sample_schools):
    return SchoolRepository(sample_schools)


# ------------------------------------------------------------------
# Export files
# ------------------------------------------------------------------

@pytest.fixture
def schools_json(tmp_path, sample_records):
    """JSON export of the sample schools."""
    path = tmp_path / "schools.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path
