"""Tests for JSON logging configuration."""

import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from forum_relay.logging_config import LOGGING_CONFIG, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


def test_configure_logging_installs_json_formatter():
    configure_logging()
    handlers = logging.getLogger().handlers
    assert any(isinstance(h.formatter, JsonFormatter) for h in handlers)


def test_configure_logging_sets_level():
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_unknown_level_falls_back_to_info():
    configure_logging("LOUD")
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_does_not_mutate_base_config():
    configure_logging("ERROR")
    assert LOGGING_CONFIG["root"]["level"] == "INFO"
