"""
Logging configuration for the fieldtrack change detection engine.

This module provides centralized logging setup with environment-specific
configuration, and the adapter that lets a standard ``logging.Logger`` act
as a tracker log sink.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import List, Optional
import json


# Level names used by log sinks, mapped onto the standard logging levels.
SINK_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_RESERVED_RECORD_KEYS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage',
    'taskName', 'message', 'asctime',
])


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Extra fields passed through ``logger.info(..., extra={...})``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def _build_formatter(environment: str) -> logging.Formatter:
    if environment == "production":
        return JSONFormatter(datefmt='%Y-%m-%d %H:%M:%S')
    return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def setup_logging(environment: str = "development",
                  log_level: str = "INFO",
                  log_dir: Optional[str] = None) -> None:
    """
    Set up root logging for applications embedding fieldtrack.

    Args:
        environment: Environment name (development/production)
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR)
        log_dir: Directory for log files (optional)
    """
    level = getattr(logging, log_level.upper())
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, f"fieldtrack_{environment}.log"),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        ))

    root = logging.getLogger()
    root.setLevel(level)
    # Replaces any handlers from an earlier call
    root.handlers = []
    for handler in handlers:
        handler.setFormatter(_build_formatter(environment))
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LoggerSink:
    """Callable log sink that forwards tracker notices to a ``logging.Logger``.

    ChangesTracker calls its sink as ``sink(level, message)`` with free-form
    level names such as ``"notice"``. This adapter maps those names onto the
    standard logging levels; unknown names are logged at INFO.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger("fieldtrack.changes")

    def __call__(self, level: str, message: str) -> None:
        self.logger.log(SINK_LEVELS.get(str(level).lower(), logging.INFO), message)
