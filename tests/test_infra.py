"""
Tests for configuration and structured logging.
"""

import json
import logging

import pytest


class TestSettings:
    """Defaults when no PROXYLENS_* variables are set."""

    def test_defaults(self):
        from proxylens.config import settings
        assert settings.MAX_DEPTH == 3
        assert settings.PRECISION == 10
        assert settings.PLACEHOLDER == "—"
        assert settings.OVERALL_KIND == "overall"
        assert settings.MARK_TAG == "mark"

    def test_log_defaults(self):
        from proxylens.config import settings
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "json"

    def test_standard_headers(self):
        from proxylens.config import settings
        assert settings.STANDARD_HEADERS == ("USER-AGENT", "HOST", "ACCEPT", "ACCEPT-ENCODING")

    def test_settings_frozen(self):
        from dataclasses import FrozenInstanceError
        from proxylens.config import settings
        with pytest.raises(FrozenInstanceError):
            settings.MAX_DEPTH = 10

    def test_csv_parsing(self):
        from proxylens.config import _csv
        assert _csv(" via , X-Real-IP,,") == ("via", "X-Real-IP")


class TestLogging:
    """Structured logging tests."""

    def _record(self, msg="Test message"):
        return logging.LogRecord(
            name="proxylens.test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg=msg,
            args=(),
            exc_info=None,
        )

    def test_json_formatter(self):
        from proxylens.logging import JSONFormatter

        parsed = json.loads(JSONFormatter().format(self._record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_extra_fields(self):
        from proxylens.logging import JSONFormatter

        record = self._record("Scan budget exceeded")
        record.pattern = "a+"
        record.duration_ms = 251.3
        record.unrelated = "dropped"
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["pattern"] == "a+"
        assert parsed["duration_ms"] == 251.3
        assert "unrelated" not in parsed

    def test_get_logger(self):
        from proxylens.logging import get_logger
        log = get_logger("highlighter")
        assert log.name == "proxylens.highlighter"

    def test_setup_logging_text(self):
        from proxylens.logging import setup_logging, TextFormatter

        root = setup_logging("text")
        try:
            assert root.name == "proxylens"
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, TextFormatter)
        finally:
            root.handlers.clear()

    def test_setup_logging_defaults_from_settings(self):
        from proxylens.logging import setup_logging, JSONFormatter

        root = setup_logging()
        try:
            assert root.level == logging.INFO
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers.clear()

    def test_text_formatter_appends_context(self):
        from proxylens.logging import TextFormatter

        record = self._record("Highlight pattern unusable")
        record.pattern = "[a-"
        line = TextFormatter().format(record)
        assert line.endswith("Highlight pattern unusable [pattern='[a-']")

    def test_module_loggers_are_namespaced(self):
        from proxylens import formatter, highlighter
        assert formatter.logger.name == "proxylens.formatter"
        assert highlighter.logger.name == "proxylens.highlighter"
