"""Logging configuration for boardsync."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "boardsync"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for(verbose: int) -> int:
    """Map a -v count to a logging level (0 and 1 are INFO, 2+ DEBUG)."""
    return logging.DEBUG if verbose >= 2 else logging.INFO


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> logging.Logger | None:
    """Configure the boardsync logger from verbosity and an optional file.

    Nothing is configured when neither is requested, so the engine stays
    silent when embedded. Calling it again replaces earlier handlers.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG). DEBUG also
            turns on store invariant checks after every mutation.
        log_file: Optional path to write logs to file
    """
    if verbose == 0 and log_file is None:
        return None

    level = level_for(verbose)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if verbose > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info("boardsync starting | %s | level=%s", timestamp, logging.getLevelName(level))
    logger.info("=" * 60)
    return logger
