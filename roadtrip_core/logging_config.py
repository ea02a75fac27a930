"""
Logging setup for the road trip route optimizer.

Every module logs through a child of the ``roadtrip_core`` logger, obtained
with ``get_logger(__name__)``. Level conventions used across the package:

- DEBUG: per-step detail (greedy moves, matrix builds, search statistics)
- INFO: one line per solve, comparison tables, data file summaries
- WARNING: skipped CSV rows, unknown attractions, strategies with no route

The package logger does not propagate to the root logger, so the planner's
output stays on its own handlers when embedded in a larger application.
"""

import logging
import os
import sys
import time
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "roadtrip_core"
LOG_LEVEL_ENV = "ROADTRIP_LOG_LEVEL"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def level_from_env(default: int = logging.INFO) -> int:
    """Log level named by ``ROADTRIP_LOG_LEVEL`` (e.g. "DEBUG"), else ``default``.

    Unknown names fall back to ``default``.
    """
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    console: bool = True,
    detailed: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
) -> logging.Logger:
    """(Re)configure the ``roadtrip_core`` logger.

    Existing handlers are replaced, so calling this again (e.g. from the CLI
    after parsing ``--verbose``) changes the level of every module logger.

    Args:
        level: Level for the package logger and its handlers. None reads
            ``ROADTRIP_LOG_LEVEL`` and defaults to INFO.
        log_file: Optional rotating log file for long comparison runs
        console: Write to stdout
        detailed: Include file and line number in each record
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep

    Returns:
        The package logger

    Example:
        >>> setup_logging(level=logging.DEBUG, log_file=Path('roadtrip.log'))
        >>> get_logger("roadtrip_core.held_karp").debug("Held-Karp DP (12 waypoints)")
    """
    if level is None:
        level = level_from_env()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(DETAILED_FORMAT if detailed else DEFAULT_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger under ``roadtrip_core``.

    Package modules pass ``__name__`` and keep it as is; any other name
    (scripts, tests) is nested under the package logger.
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


class LogTimer:
    """Log how long a block took, and keep the duration on ``elapsed``.

    Example:
        >>> with LogTimer(logger, "Waypoint matrix (6x6)", level=logging.DEBUG) as timer:
        ...     matrix = WaypointMatrix.build(oracle, waypoints)
        >>> timer.elapsed
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.elapsed = time.perf_counter() - self.start_time
            self.logger.log(self.level, f"{self.operation}: {self.elapsed:.3f}s")
        return False


_default_logger = setup_logging()


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log a failure at ERROR, with its traceback at DEBUG.

    Used by the CLI for planner errors that end the run (bad data files,
    unknown cities), where the traceback is only useful with ``--verbose``.
    """
    logger.error(f"{message}: {exc}")
    logger.debug(
        "Traceback:\n" + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
