"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from skilldex.utils.logging import JSONFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(
        "skilldex.registry", logging.INFO, __file__, 1,
        "Loaded %d skill document(s)", (2,), None,
    )
    record.skills = 2
    data = json.loads(JSONFormatter().format(record))
    assert data["level"] == "INFO"
    assert data["logger"] == "skilldex.registry"
    assert data["message"] == "Loaded 2 skill document(s)"
    assert data["skills"] == 2


def test_setup_logging_json(capsys):
    setup_logging("debug", "json")
    logging.getLogger("skilldex.test").debug("hello", extra={"root": "skills"})
    line = capsys.readouterr().err.strip().splitlines()[-1]
    assert json.loads(line)["root"] == "skills"
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_only_configures_root():
    other = logging.getLogger("markdown_it")
    before = other.level
    setup_logging("INFO", "text")
    assert other.level == before
    assert len(logging.getLogger().handlers) == 1
