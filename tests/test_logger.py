"""Tests for logging configuration."""

import logging

import pytest
import structlog

from feedterm.utils import logger as logger_module
from feedterm.utils.logger import close_log_file, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    close_log_file()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_log_file_receives_events(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "feedterm.log"

    configure_logging(log_level="INFO", json_format=True, log_file=log_file)
    get_logger("test").info("Feed archived", url="https://example.com/feed.xml")
    close_log_file()

    content = log_file.read_text()
    assert '"event": "Feed archived"' in content
    assert '"logger": "test"' in content


def test_reconfiguring_closes_previous_log_file(tmp_path, restore_logging):
    configure_logging(log_file=tmp_path / "first.log")
    first = logger_module._log_file

    configure_logging(log_file=tmp_path / "second.log")

    assert first.closed
    assert not logger_module._log_file.closed


def test_close_log_file_is_idempotent(tmp_path, restore_logging):
    configure_logging(log_file=tmp_path / "feedterm.log")

    close_log_file()
    close_log_file()

    assert logger_module._log_file is None
