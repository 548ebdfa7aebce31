"""
Unit tests for logging setup module.

This module contains tests for logging configuration, formatting,
and the logger-backed tracker log sink.
"""

import json
import logging
import logging.handlers
import tempfile
import pytest
from pathlib import Path
import sys

from fieldtrack.utils.logging_setup import (
    setup_logging,
    get_logger,
    JSONFormatter,
    LoggerSink,
    SINK_LEVELS
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Restore root logger handlers and level after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def make_record(msg="Test message", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="fieldtrack.change_detection.changes_tracker",
        level=level,
        pathname="/srv/app/handlers.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test suite for JSONFormatter class."""

    def test_standard_fields(self):
        formatter = JSONFormatter(datefmt='%Y-%m-%d %H:%M:%S')
        record = make_record(funcName="on_update", module="handlers")

        parsed = json.loads(formatter.format(record))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "fieldtrack.change_detection.changes_tracker"
        assert parsed["message"] == "Test message"
        assert parsed["module"] == "handlers"
        assert parsed["function"] == "on_update"
        assert parsed["line"] == 42
        assert "timestamp" in parsed

    def test_exception_is_included(self):
        formatter = JSONFormatter()

        try:
            raise ValueError("Test exception")
        except ValueError:
            record = make_record("Error occurred", logging.ERROR, sys.exc_info())

        parsed = json.loads(formatter.format(record))

        assert parsed["level"] == "ERROR"
        assert "ValueError: Test exception" in parsed["exception"]

    def test_extra_fields_are_included(self):
        formatter = JSONFormatter()
        record = make_record(schema_id="InvoiceItem", changed_fields=["MyNumber"])

        parsed = json.loads(formatter.format(record))

        assert parsed["schema_id"] == "InvoiceItem"
        assert parsed["changed_fields"] == ["MyNumber"]
        assert "msg" not in parsed
        assert "args" not in parsed

    def test_unknown_types_rendered_as_strings(self):
        formatter = JSONFormatter()
        record = make_record(payload=object())

        parsed = json.loads(formatter.format(record))

        assert parsed["payload"].startswith("<object object")


class TestSetupLogging:
    """Test suite for setup_logging function."""

    def test_setup_logging_development(self):
        """Test logging setup for development environment."""
        setup_logging(environment="development", log_level="DEBUG")

        logger = logging.getLogger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

        handler = logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout
        assert not isinstance(handler.formatter, JSONFormatter)

    def test_setup_logging_production(self):
        """Test logging setup for production environment."""
        setup_logging(environment="production", log_level="INFO")

        logger = logging.getLogger()
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_setup_logging_with_log_dir(self):
        """Test logging setup with log directory."""
        with tempfile.TemporaryDirectory() as temp_dir:
            setup_logging(environment="development", log_level="INFO", log_dir=temp_dir)

            logger = logging.getLogger()
            assert len(logger.handlers) == 2  # Console + File

            file_handlers = [h for h in logger.handlers
                             if isinstance(h, logging.handlers.RotatingFileHandler)]
            assert len(file_handlers) == 1
            assert (Path(temp_dir) / "fieldtrack_development.log").exists()

            for handler in file_handlers:
                handler.close()

    def test_setup_logging_removes_existing_handlers(self):
        """Test that setup_logging removes existing handlers."""
        logger = logging.getLogger()
        logger.handlers.clear()

        dummy_handler = logging.StreamHandler()
        logger.addHandler(dummy_handler)

        setup_logging(environment="development")
        assert len(logger.handlers) == 1
        assert logger.handlers[0] is not dummy_handler

    def test_setup_logging_invalid_level(self):
        """Test that setup_logging rejects invalid log levels."""
        with pytest.raises(AttributeError):
            setup_logging(environment="development", log_level="INVALID")


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_get_logger_returns_logger(self):
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_get_logger_same_name_returns_same_logger(self):
        """Test that get_logger returns the same logger for the same name."""
        assert get_logger("test.module") is get_logger("test.module")


class TestLoggerSink:
    """Test suite for LoggerSink adapter."""

    def test_default_logger_name(self):
        """Test that the sink logs to the fieldtrack.changes logger by default."""
        sink = LoggerSink()
        assert sink.logger.name == "fieldtrack.changes"

    def test_notice_is_logged_at_info(self, caplog):
        """Test that tracker 'notice' messages are logged at INFO."""
        sink = LoggerSink(get_logger("test.sink"))

        with caplog.at_level(logging.DEBUG, logger="test.sink"):
            sink("notice", "### MyNumber field changed: Numeric(1000, 1001)")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO
        assert "MyNumber field changed" in caplog.text

    @pytest.mark.parametrize("level_name,expected", [
        ("warn", logging.WARNING),
        ("WARNING", logging.WARNING),
        ("error", logging.ERROR),
        ("debug", logging.DEBUG),
        ("something-else", logging.INFO),
    ])
    def test_level_mapping(self, caplog, level_name, expected):
        """Test mapping of sink level names onto logging levels."""
        sink = LoggerSink(get_logger("test.sink.levels"))

        with caplog.at_level(logging.DEBUG, logger="test.sink.levels"):
            sink(level_name, "message")

        assert caplog.records[-1].levelno == expected

    def test_sink_levels_cover_notice(self):
        """Test that the notice level used by ChangesTracker is mapped."""
        assert SINK_LEVELS["notice"] == logging.INFO
