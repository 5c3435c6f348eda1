"""Tests for core/logging.py."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from core.logging import LOGGER_NAME, setup_logging


def test_console_only_by_default():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING


def test_verbose_console_level():
    logger = setup_logging(verbose=True)
    assert logger.handlers[0].level == logging.DEBUG


def test_file_handler(tmp_path: Path):
    log_file = tmp_path / "logs" / "setup.log"
    logger = setup_logging(log_file=log_file)
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    logging.getLogger(f"{LOGGER_NAME}.steps").debug("probe claude: missing")
    for handler in logger.handlers:
        handler.flush()
    assert "probe claude: missing" in log_file.read_text()

    # Reconfigure so the file handler is closed before tmp_path cleanup
    setup_logging()


def test_repeated_setup_does_not_stack_handlers():
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1
