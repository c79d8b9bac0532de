"""Tests for logging setup and target tagging of log records."""

from __future__ import annotations

import json
import logging

import pytest

from vestige_init.config import Config, LoggingConfig
from vestige_init.logging_setup import (
    StructuredFormatter,
    current_target,
    setup_logging,
    target_context,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("vestige_init", logging.WARNING, __file__, 1, message, None, None)


def test_target_context_sets_and_resets():
    assert current_target.get() == ""
    with target_context("cursor"):
        assert current_target.get() == "cursor"
    assert current_target.get() == ""


def test_structured_formatter_includes_target():
    record = _record()
    record.target = "vscode"
    payload = json.loads(StructuredFormatter().format(record))
    assert payload["message"] == "hello"
    assert payload["level"] == "WARNING"
    assert payload["target"] == "vscode"


def test_structured_formatter_omits_empty_target():
    record = _record()
    record.target = ""
    assert "target" not in json.loads(StructuredFormatter().format(record))


def test_setup_logging_json():
    setup_logging(Config(logging=LoggingConfig(format="json", level="INFO")))
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, StructuredFormatter)


def test_verbose_forces_debug():
    setup_logging(Config(), verbose=True)
    assert logging.getLogger().level == logging.DEBUG


def test_text_format_appends_target():
    setup_logging(Config())
    handler = logging.getLogger().handlers[0]
    record = _record("wrote file")
    with target_context("xcode"):
        handler.filter(record)
    assert handler.formatter.format(record) == "vestige_init: wrote file [xcode]"
