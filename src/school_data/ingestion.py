"""Loading school exports into School records.

Handles the quirks of the exports the web app produces:
- CSV dumps of the schools table and JSON dumps of ``/api/schools``
  (either a bare list or ``{"schools": [...]}``)
- DBNs with stray whitespace or lower-case letters
- Program flags spelled as booleans, "Yes"/"No", 1/0 or "X"
- Missing enrollment (kept as None, never 0)
"""

import json
import logging
import math
from pathlib import Path
from typing import List, Optional

import pandas as pd

from src.school_data.config import (
    BOOLEAN_COLUMNS,
    NULLABLE_INT_COLUMNS,
    REQUIRED_COLUMNS,
    SCORE_COLUMNS,
    TRUTHY_VALUES,
)
from src.school_data.models import School

logger = logging.getLogger(__name__)


class SchoolDataError(Exception):
    """Raised when a school export cannot be parsed."""


def _safe_int(val) -> Optional[int]:
    """Convert *val* to int, returning None for NaN/None/pd.NA."""
    if val is None or val is pd.NA:
        return None
    if isinstance(val, float) and math.isnan(val):
        return None
    return int(val)


class SchoolDataLoader:
    """Reads a school export file and normalizes it into School records."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[School]:
        """Read, clean and convert the export.

        Returns:
            List of School records in file order, one per unique DBN.

        Raises:
            FileNotFoundError: If the export does not exist.
            SchoolDataError: If the format is unsupported or required
                columns are missing.
        """
        df = self.read_frame()
        df = self.clean(df)
        schools = [self._row_to_school(row) for row in df.to_dict("records")]
        logger.info("Loaded %d schools from %s", len(schools), self.path.name)
        return schools

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def read_frame(self) -> pd.DataFrame:
        """Read the raw export into a DataFrame with lower-case columns."""
        if not self.path.exists():
            raise FileNotFoundError(f"School data file not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix == ".csv":
            df = pd.read_csv(self.path)
        elif suffix == ".json":
            df = self._read_json()
        else:
            raise SchoolDataError(
                f"Unsupported school data format {suffix!r} ({self.path.name}). "
                "Expected .csv or .json."
            )

        df.columns = [str(col).strip().lower() for col in df.columns]

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise SchoolDataError(
                f"{self.path.name} is missing required columns: {missing}"
            )
        return df

    def _read_json(self) -> pd.DataFrame:
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise SchoolDataError(f"Invalid JSON in {self.path.name}: {e}") from e

        if isinstance(payload, dict):
            payload = payload.get("schools")
        if not isinstance(payload, list):
            raise SchoolDataError(
                f"{self.path.name} must contain a list of schools "
                "or an object with a 'schools' list"
            )
        return pd.DataFrame(payload)

    # ------------------------------------------------------------------
    # Cleaning
    # ------------------------------------------------------------------
    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize identifiers, numeric columns and program flags."""
        out = df.copy()

        out = out.dropna(subset=["dbn"])
        out["dbn"] = out["dbn"].astype(str).str.strip().str.upper()
        no_dbn = out["dbn"] == ""
        if no_dbn.any():
            logger.warning("Dropping %d rows with blank DBN", no_dbn.sum())
            out = out[~no_dbn]

        dupes = out["dbn"].duplicated(keep="first")
        if dupes.any():
            logger.warning(
                "Dropping %d duplicate DBN rows: %s",
                dupes.sum(),
                sorted(out.loc[dupes, "dbn"].unique().tolist()),
            )
            out = out[~dupes]

        out["name"] = out["name"].fillna("").astype(str).str.strip()

        if "grade_band" in out.columns:
            out["grade_band"] = out["grade_band"].fillna("").astype(str).str.strip()
        else:
            out["grade_band"] = ""

        for col in SCORE_COLUMNS:
            if col in out.columns:
                out[col] = (
                    pd.to_numeric(out[col], errors="coerce").fillna(0).round().astype(int)
                )
            else:
                out[col] = 0

        for col in NULLABLE_INT_COLUMNS:
            if col in out.columns:
                out[col] = pd.to_numeric(out[col], errors="coerce").round()
            else:
                out[col] = float("nan")

        for col in BOOLEAN_COLUMNS:
            if col in out.columns:
                out[col] = (
                    out[col].astype(str).str.strip().str.lower().isin(TRUTHY_VALUES)
                )
            else:
                out[col] = False

        return out.reset_index(drop=True)

    @staticmethod
    def _row_to_school(row: dict) -> School:
        return School(
            dbn=row["dbn"],
            name=row["name"],
            district=_safe_int(row.get("district")),
            grade_band=row["grade_band"],
            academics_score=int(row["academics_score"]),
            climate_score=int(row["climate_score"]),
            progress_score=int(row["progress_score"]),
            enrollment=_safe_int(row.get("enrollment")),
            has_gifted_talented=bool(row["has_gifted_talented"]),
            has_dual_language=bool(row["has_dual_language"]),
            has_3k=bool(row["has_3k"]),
            has_prek=bool(row["has_prek"]),
            composite_score=_safe_int(row.get("composite_score")),
        )
