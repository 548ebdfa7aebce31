"""
Custom exception classes for the fieldtrack change detection engine.

This module defines domain-specific exceptions to provide clear error handling
and debugging information throughout the package.
"""

from typing import Optional, Dict, Any


class FieldTrackBaseException(Exception):
    """Base exception class for all fieldtrack exceptions."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class TrackerConfigurationError(FieldTrackBaseException):
    """
    Exception raised when tracker configuration loading or validation fails.

    This exception is raised when:
    - Configuration files are missing or invalid
    - A requested configuration profile does not exist
    - Configuration values fail validation
    """
    pass


class SchemaLookupError(FieldTrackBaseException, LookupError):
    """
    Exception raised when a record's field schema cannot be resolved.

    This exception is raised when:
    - The schema catalog does not know the schema identifier
    - The record carries no schema identifier at all
    """
    pass
