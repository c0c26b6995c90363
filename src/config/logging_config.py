# src/config/logging_config.py

"""Per-run log files for flight_offers.

Every run writes ``logs/run_YYYYMMDD_HHMMSS.log``.  All ``flight_offers.*``
loggers (clustering, cache, pipeline, cli) share it, so the clustering and
merge decisions of one run read back in order.  Only the newest
``Settings.LOG_KEEP_RUNS`` run files are kept.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

PROJECT_LOGGER = "flight_offers"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _prune_old_runs(logs_dir: Path, keep: int, current: Path) -> int:
    """Delete all but the newest *keep* run logs; return how many went."""
    runs = sorted(p for p in logs_dir.glob("run_*.log") if p != current)
    stale = runs[: max(len(runs) - max(keep - 1, 0), 0)]
    for path in stale:
        path.unlink(missing_ok=True)
    return len(stale)


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Attach the run-file and stderr handlers to the project logger.

    Safe to call more than once: later calls keep the existing handlers
    and only return a fresh path.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    project = logging.getLogger(PROJECT_LOGGER)
    project.setLevel(logging.DEBUG)
    if project.handlers:
        return log_file

    pruned = _prune_old_runs(logs_dir, Settings.LOG_KEEP_RUNS, log_file)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    project.addHandler(file_handler)
    project.addHandler(console_handler)

    project.info("Logging to %s (%d old run logs pruned)", log_file, pruned)
    return log_file
