"""
Utility modules for the fieldtrack change detection engine.

This module provides logging setup and the logger-backed log sink used by
ChangesTracker.
"""

from .logging_setup import setup_logging, get_logger, JSONFormatter, LoggerSink

__all__ = ["setup_logging", "get_logger", "JSONFormatter", "LoggerSink"]
