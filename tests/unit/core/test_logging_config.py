"""Tests for the structured logging setup."""

import json
import logging
import sys

import pytest

from colossus.core.logging_config import JSONFormatter, setup_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("colossus")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def _record(msg: str = "hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("colossus.metrics", logging.INFO, __file__, 12, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "colossus.metrics"
        assert entry["message"] == "hello world"
        assert "timestamp" in entry
        assert "context" not in entry

    def test_timestamp_from_record(self):
        record = _record()
        record.created = 1_772_366_400.0
        entry = json.loads(JSONFormatter().format(record))
        assert entry["timestamp"] == "2026-03-01T12:00:00+00:00"

    def test_context_fields(self):
        entry = json.loads(JSONFormatter().format(_record(ctx_sessions=7, other="ignored")))
        assert entry["context"] == {"ctx_sessions": 7}

    def test_exception(self):
        try:
            raise ValueError("bad history")
        except ValueError:
            record = logging.LogRecord("colossus", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))
        assert entry["exception"] == {"type": "ValueError", "message": "bad history"}


class TestSetupLogging:
    def test_json_handler(self, clean_logger):
        setup_logging(level="debug", fmt="json")

        assert len(clean_logger.handlers) == 1
        assert isinstance(clean_logger.handlers[0].formatter, JSONFormatter)
        assert clean_logger.level == logging.DEBUG

    def test_plain_handler(self, clean_logger):
        setup_logging(level="WARNING", fmt="plain")

        assert not isinstance(clean_logger.handlers[0].formatter, JSONFormatter)
        assert clean_logger.level == logging.WARNING

    def test_idempotent(self, clean_logger):
        setup_logging(fmt="json")
        setup_logging(fmt="json")
        assert len(clean_logger.handlers) == 1
