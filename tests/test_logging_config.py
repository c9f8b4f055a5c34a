"""Tests for the logging setup."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from comments_api.app.core.logging_config import setup_logging


@pytest.fixture
def bare_root_logger():
    """Give ``setup_logging`` a root logger without handlers, then restore it."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_console_only(bare_root_logger):
    setup_logging("debug")

    assert bare_root_logger.level == logging.DEBUG
    assert len(bare_root_logger.handlers) == 1
    assert isinstance(bare_root_logger.handlers[0], logging.StreamHandler)


def test_rotating_file_handler(bare_root_logger, tmp_path):
    logfile = tmp_path / "logs" / "comments.log"

    setup_logging("INFO", str(logfile), max_bytes=1024, backup_count=2)
    logging.getLogger("comments_api.test").info("Created comment %s", "c-1")

    file_handlers = [h for h in bare_root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2
    file_handlers[0].flush()
    assert "[INFO] comments_api.test: Created comment c-1" in logfile.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info(bare_root_logger):
    setup_logging("chatty")

    assert bare_root_logger.level == logging.INFO


def test_configures_only_once(bare_root_logger, tmp_path):
    setup_logging("INFO")
    setup_logging("DEBUG", str(tmp_path / "second.log"))

    assert len(bare_root_logger.handlers) == 1
    assert bare_root_logger.level == logging.INFO
