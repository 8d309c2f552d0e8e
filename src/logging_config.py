import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "lottery_simulator.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def _rotating_file_handler(log_dir: Path) -> logging.Handler:
    # Always DEBUG so per-school demand profiles land in the file
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
    )
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> None:
    """Configure root logging for the lottery simulator.

    Simulation summaries go to the console at *log_level*; the rotating
    file under *log_dir* (default ``logs/``) also receives DEBUG records.
    Does nothing if the root logger already has handlers (e.g. under pytest
    or when embedded in a web server that configured logging itself).
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    log_dir = DEFAULT_LOG_DIR if log_dir is None else Path(log_dir)
    console_level = getattr(logging, log_level.upper(), logging.INFO)

    # Root passes everything; each handler filters on its own level
    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in (_rotating_file_handler(log_dir), _console_handler(console_level)):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        "Logging initialized (console=%s, file=%s)",
        logging.getLevelName(console_level),
        log_dir / LOG_FILE_NAME,
    )
