"""Tests for loading school exports (CSV / JSON)."""

import json
import textwrap

import pytest

from src.school_data.ingestion import SchoolDataError, SchoolDataLoader


def _write_csv(tmp_path, content, name="schools.csv"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


_BASIC_CSV = """
    DBN,Name,District,Grade_Band,Academics_Score,Climate_Score,Progress_Score,Enrollment,Has_Gifted_Talented,Has_Dual_Language,Has_3K,Has_PreK
    15k321 ,P.S. 321 William Penn,15,ES,95,92,90,1400,No,no,,Yes
    15K039,P.S. 039 Henry Bristow,15,ES,80,78,75,,FALSE,TRUE,1,x
    13K008,P.S. 008 Robert Fulton,13,K-5,88.4,85,84,720,yes,,0,Y
"""


# ── CSV ──────────────────────────────────────────────────────────────


class TestCsvLoading:
    @pytest.fixture
    def schools(self, tmp_path):
        return SchoolDataLoader(_write_csv(tmp_path, _BASIC_CSV)).load()

    def test_loads_every_row(self, schools):
        assert [s.dbn for s in schools] == ["15K321", "15K039", "13K008"]

    def test_dbn_normalized(self, schools):
        assert schools[0].dbn == "15K321"

    def test_names_preserved(self, schools):
        assert schools[0].name == "P.S. 321 William Penn"

    def test_numeric_columns(self, schools):
        first = schools[0]
        assert first.district == 15
        assert first.enrollment == 1400
        assert (first.academics_score, first.climate_score, first.progress_score) == (95, 92, 90)

    def test_scores_rounded_to_int(self, schools):
        assert schools[2].academics_score == 88

    def test_missing_enrollment_is_none(self, schools):
        assert schools[1].enrollment is None

    def test_boolean_flags(self, schools):
        penn, bristow, fulton = schools
        assert penn.has_gifted_talented is False
        assert penn.has_dual_language is False
        assert penn.has_3k is False
        assert penn.has_prek is True

        assert bristow.has_dual_language is True
        assert bristow.has_3k is True
        assert bristow.has_prek is True

        assert fulton.has_gifted_talented is True
        assert fulton.has_dual_language is False
        assert fulton.has_3k is False

    def test_grade_band(self, schools):
        assert schools[2].grade_band == "K-5"


class TestCsvCleaning:
    def test_duplicate_dbn_keeps_first(self, tmp_path):
        path = _write_csv(tmp_path, """
            dbn,name,enrollment
            01M015,First Copy,300
            01m015,Second Copy,500
        """)
        schools = SchoolDataLoader(path).load()
        assert len(schools) == 1
        assert schools[0].name == "First Copy"

    def test_blank_dbn_rows_dropped(self, tmp_path):
        path = _write_csv(tmp_path, """
            dbn,name
            01M015,Kept
            ,Missing DBN
        """)
        schools = SchoolDataLoader(path).load()
        assert [s.name for s in schools] == ["Kept"]

    def test_optional_columns_default(self, tmp_path):
        path = _write_csv(tmp_path, """
            dbn,name
            01M015,Bare School
        """)
        school = SchoolDataLoader(path).load()[0]
        assert school.district is None
        assert school.enrollment is None
        assert school.academics_score == 0
        assert school.grade_band == ""
        assert school.has_gifted_talented is False
        assert school.composite_score is None

    def test_composite_score_column(self, tmp_path):
        path = _write_csv(tmp_path, """
            dbn,name,composite_score
            01M015,Scored School,77
        """)
        school = SchoolDataLoader(path).load()[0]
        assert school.overall_score == 77


# ── JSON ─────────────────────────────────────────────────────────────


class TestJsonLoading:
    def test_list_payload(self, schools_json, sample_records):
        schools = SchoolDataLoader(schools_json).load()
        assert [s.dbn for s in schools] == [r["dbn"] for r in sample_records]

    def test_native_booleans(self, schools_json):
        schools = {s.dbn: s for s in SchoolDataLoader(schools_json).load()}
        assert schools["13K008"].has_gifted_talented is True
        assert schools["15K039"].has_dual_language is True
        assert schools["15K321"].has_3k is False

    def test_null_enrollment(self, schools_json):
        schools = {s.dbn: s for s in SchoolDataLoader(schools_json).load()}
        assert schools["02M041"].enrollment is None

    def test_wrapped_payload(self, tmp_path, sample_records):
        path = tmp_path / "schools.json"
        path.write_text(json.dumps({"schools": sample_records}), encoding="utf-8")
        assert len(SchoolDataLoader(path).load()) == len(sample_records)


# ── Errors ───────────────────────────────────────────────────────────


class TestLoaderErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SchoolDataLoader(tmp_path / "nope.csv").load()

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "schools.txt"
        path.write_text("dbn,name\n", encoding="utf-8")
        with pytest.raises(SchoolDataError, match="Unsupported"):
            SchoolDataLoader(path).load()

    def test_missing_required_column(self, tmp_path):
        path = _write_csv(tmp_path, """
            dbn,district
            01M015,1
        """)
        with pytest.raises(SchoolDataError, match="name"):
            SchoolDataLoader(path).load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "schools.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchoolDataError, match="Invalid JSON"):
            SchoolDataLoader(path).load()

    def test_json_without_school_list(self, tmp_path):
        path = tmp_path / "schools.json"
        path.write_text(json.dumps({"data": []}), encoding="utf-8")
        with pytest.raises(SchoolDataError, match="list of schools"):
            SchoolDataLoader(path).load()
