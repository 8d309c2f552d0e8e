"""In-memory school lookup used by the lottery simulator."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from src.school_data.config import (
    ELIGIBLE_GRADE_BANDS,
    KINDERGARTEN_MARKER,
    SCHOOLS_FILE,
    SEARCH_RESULT_LIMIT,
)
from src.school_data.ingestion import SchoolDataLoader
from src.school_data.models import School

logger = logging.getLogger(__name__)


class SchoolRepository:
    """Synchronous read-only access to school records.

    Given a DBN, returns that school's attributes; given a set of filters,
    returns a list of schools. Insertion order is preserved so that search
    results follow the order of the underlying export.
    """

    def __init__(self, schools: Iterable[School]):
        self._schools: Dict[str, School] = {}
        for school in schools:
            key = school.dbn.upper()
            if key in self._schools:
                logger.warning("Ignoring duplicate school %s", school.dbn)
                continue
            self._schools[key] = school

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> "SchoolRepository":
        """Build a repository from a CSV/JSON export (default ``data/schools.csv``)."""
        loader = SchoolDataLoader(path or SCHOOLS_FILE)
        return cls(loader.load())

    def __len__(self) -> int:
        return len(self._schools)

    def get_school(self, dbn: str) -> Optional[School]:
        """Look up a school by DBN (case-insensitive)."""
        return self._schools.get(dbn.strip().upper())

    def list_schools(self) -> List[School]:
        return list(self._schools.values())

    @staticmethod
    def is_lottery_eligible(school: School) -> bool:
        """Whether the school takes part in the 3-K / Pre-K lottery."""
        if school.has_3k or school.has_prek:
            return True
        grade_band = school.grade_band or ""
        return grade_band in ELIGIBLE_GRADE_BANDS or KINDERGARTEN_MARKER in grade_band

    def find_schools(
        self,
        query: str = "",
        district: Optional[int] = None,
        exclude_dbns: Iterable[str] = (),
        eligible_only: bool = True,
        limit: Optional[int] = SEARCH_RESULT_LIMIT,
    ) -> List[School]:
        """Search schools for the ranked-list picker.

        Args:
            query: Case-insensitive substring matched against name or DBN.
                Blank means no text filter.
            district: If provided, only schools in this district.
            exclude_dbns: DBNs already on the family's list.
            eligible_only: Restrict to lottery-eligible schools.
            limit: Maximum number of results (None for no limit).

        Returns:
            Matching schools in repository order.
        """
        needle = query.strip().lower()
        excluded = {dbn.strip().upper() for dbn in exclude_dbns}

        matches = []
        for school in self._schools.values():
            if eligible_only and not self.is_lottery_eligible(school):
                continue
            if district is not None and school.district != district:
                continue
            if needle and needle not in school.name.lower() and needle not in school.dbn.lower():
                continue
            if school.dbn.upper() in excluded:
                continue
            matches.append(school)
            if limit is not None and len(matches) >= limit:
                break

        logger.debug(
            "find_schools(query=%r, district=%s) -> %d results",
            query, district, len(matches),
        )
        return matches
