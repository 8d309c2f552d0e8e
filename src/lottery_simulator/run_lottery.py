"""Run the lottery simulator on a school export and a ranked list.

Usage:
    python -m src.lottery_simulator.run_lottery SCHOOLS_FILE CHOICES_FILE [OUTPUT_FILE]

The choices file is JSON::

    {
      "choices": [
        {"dbn": "15K321", "priority": "zoned"},
        {"dbn": "15K039", "priority": "district"}
      ],
      "num_trials": 1000,
      "seed": 42
    }

Examples:
    python -m src.lottery_simulator.run_lottery data/schools.csv my_list.json
    python -m src.lottery_simulator.run_lottery data/schools.json my_list.json out.json
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from src.logging_config import setup_logging
from src.lottery_simulator.config import DEFAULT_NUM_TRIALS, DEFAULT_PRIORITY
from src.lottery_simulator.lottery_engine import LotteryEngine
from src.lottery_simulator.ranked_list import RankedApplication
from src.lottery_simulator.validation import InvalidInputError
from src.school_data.school_repository import SchoolRepository

logger = logging.getLogger(__name__)


def load_choices_file(path: Path) -> Dict:
    """Read and sanity-check a choices JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Choices file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Invalid JSON in {path.name}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("choices"), list):
        raise InvalidInputError(f"{path.name} must be an object with a 'choices' list")
    return data


def build_application(
    repository: SchoolRepository,
    choice_entries: List[Dict],
) -> RankedApplication:
    """Resolve ``{"dbn", "priority"}`` entries against the repository.

    Raises:
        InvalidInputError: For unknown DBNs, bad tiers, duplicates or
            more than 12 entries.
    """
    application = RankedApplication()
    for position, entry in enumerate(choice_entries, start=1):
        if not isinstance(entry, dict) or not entry.get("dbn"):
            raise InvalidInputError(f"Choice {position} must have a 'dbn'")
        school = repository.get_school(str(entry["dbn"]))
        if school is None:
            raise InvalidInputError(f"Choice {position}: unknown school {entry['dbn']!r}")
        application.add_school(school, entry.get("priority", DEFAULT_PRIORITY))
    return application


def run_from_files(
    schools_path: Path,
    choices_path: Path,
    output_path: Path | None = None,
) -> Dict:
    """Load inputs, run the simulation and return the JSON-ready report.

    Args:
        schools_path: CSV/JSON school export.
        choices_path: Choices JSON (see module docstring).
        output_path: If provided, the report is also written here.

    Returns:
        Dict with ``metadata``, ``results`` and ``overall`` keys.
    """
    repository = SchoolRepository.from_file(Path(schools_path))
    request = load_choices_file(Path(choices_path))

    application = build_application(repository, request["choices"])
    num_trials = request.get("num_trials", DEFAULT_NUM_TRIALS)
    seed = request.get("seed")

    results, overall = application.run(LotteryEngine(seed=seed), num_trials)

    report = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "num_trials": num_trials,
            "seed": seed,
            "num_choices": len(application),
        },
        "results": [result.to_dict() for result in results],
        "overall": overall.to_dict(),
    }

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        logger.info("Wrote simulation report to %s", output_path)

    return report


def _print_summary(report: Dict) -> None:
    for result in report["results"]:
        print(
            f"#{result['rank']:>2} {result['dbn']:<8} {result['schoolName'][:40]:<40} "
            f"{result['priority']:<9} {result['acceptanceProbability']:>3}%"
        )
    overall = report["overall"]
    best = overall["matchedSchool"]
    print(
        f"Matched {overall['matchRate']}% | Waitlisted {overall['waitlistRate']}% "
        f"| Unmatched {overall['unmatchedRate']}%"
    )
    print(f"Most likely match: {best['schoolName'] if best else 'none'}")


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)

    schools_file = Path(sys.argv[1])
    choices_file = Path(sys.argv[2])
    output_file = Path(sys.argv[3]) if len(sys.argv) > 3 else None

    try:
        report = run_from_files(schools_file, choices_file, output_file)
        _print_summary(report)
    except Exception:
        logger.exception("Simulation failed")
        sys.exit(1)
