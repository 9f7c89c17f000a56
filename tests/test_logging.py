"""Tests for logging setup."""

import logging
from pathlib import Path

import pytest

from boardsync.logging import LOGGER_NAME, level_for, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Leave the boardsync logger as other tests expect it."""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_silent_by_default(self):
        assert setup_logging() is None
        assert logging.getLogger(LOGGER_NAME).handlers == []

    @pytest.mark.parametrize(("verbose", "level"), [(0, logging.INFO), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)])
    def test_level_for(self, verbose: int, level: int):
        assert level_for(verbose) == level

    def test_verbose_logs_to_stderr(self):
        logger = setup_logging(verbose=2)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_log_file(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "boardsync.log"
        setup_logging(log_file=log_file)
        logging.getLogger("boardsync.services.board_service").info("Board loaded: b1")

        text = log_file.read_text()
        assert "boardsync starting" in text
        assert "boardsync.services.board_service - INFO - Board loaded: b1" in text

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path):
        setup_logging(verbose=1, log_file=tmp_path / "a.log")
        logger = setup_logging(verbose=1)
        assert len(logger.handlers) == 1
