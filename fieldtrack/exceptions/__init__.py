"""
Custom exceptions for the fieldtrack change detection engine.

This module provides domain-specific exception classes for error handling
and debugging throughout the package.
"""

from .custom_exceptions import (
    FieldTrackBaseException,
    TrackerConfigurationError,
    SchemaLookupError,
)

__all__ = [
    "FieldTrackBaseException",
    "TrackerConfigurationError",
    "SchemaLookupError",
]
