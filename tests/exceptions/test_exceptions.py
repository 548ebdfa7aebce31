"""
Unit tests for custom exceptions module.

This module contains tests for the custom exception classes
and their context handling.
"""

import pytest
from fieldtrack.exceptions import (
    FieldTrackBaseException,
    TrackerConfigurationError,
    SchemaLookupError,
)


class TestFieldTrackBaseException:
    """Test suite for FieldTrackBaseException class."""

    def test_base_exception_without_context(self):
        """Test FieldTrackBaseException without context."""
        exception = FieldTrackBaseException("Test error message")

        assert str(exception) == "Test error message"
        assert exception.message == "Test error message"
        assert exception.context == {}

    def test_base_exception_with_context(self):
        """Test FieldTrackBaseException with context."""
        context = {"schema": "InvoiceItem", "field": "MyNumber"}
        exception = FieldTrackBaseException("Test error message", context)

        assert exception.message == "Test error message"
        assert exception.context == context
        assert "schema=InvoiceItem" in str(exception)
        assert "field=MyNumber" in str(exception)

    def test_base_exception_with_none_context(self):
        """Test FieldTrackBaseException with None context."""
        exception = FieldTrackBaseException("Test error message", None)

        assert str(exception) == "Test error message"
        assert exception.context == {}

    def test_base_exception_context_string_representation(self):
        """Test string representation with various context types."""
        context = {
            "string_value": "test",
            "int_value": 42,
            "bool_value": True,
            "none_value": None
        }
        exception = FieldTrackBaseException("Test error", context)

        error_str = str(exception)
        assert error_str.startswith("Test error (Context: ")
        assert "string_value=test" in error_str
        assert "int_value=42" in error_str
        assert "bool_value=True" in error_str
        assert "none_value=None" in error_str


class TestTrackerConfigurationError:
    """Test suite for TrackerConfigurationError class."""

    def test_configuration_error_inheritance(self):
        """Test that TrackerConfigurationError inherits from FieldTrackBaseException."""
        exception = TrackerConfigurationError("Configuration error")

        assert isinstance(exception, FieldTrackBaseException)
        assert isinstance(exception, Exception)

    def test_configuration_error_with_context(self):
        """Test TrackerConfigurationError with context."""
        context = {"path": "config/tracker_config.json", "profile": "invoices"}
        exception = TrackerConfigurationError("Invalid configuration", context)

        assert exception.message == "Invalid configuration"
        assert exception.context == context
        assert "profile=invoices" in str(exception)

    def test_configuration_error_can_be_caught_as_base_exception(self):
        """Test that TrackerConfigurationError can be caught as FieldTrackBaseException."""
        with pytest.raises(FieldTrackBaseException) as exc_info:
            raise TrackerConfigurationError("Test configuration error")

        assert isinstance(exc_info.value, TrackerConfigurationError)


class TestSchemaLookupError:
    """Test suite for SchemaLookupError class."""

    def test_schema_lookup_error_inheritance(self):
        """Test that SchemaLookupError is both a fieldtrack error and a LookupError."""
        exception = SchemaLookupError("Unknown schema 'Invoice'")

        assert isinstance(exception, FieldTrackBaseException)
        assert isinstance(exception, LookupError)

    def test_schema_lookup_error_can_be_caught_as_lookup_error(self):
        """Test that callers can catch SchemaLookupError as a plain LookupError."""
        with pytest.raises(LookupError) as exc_info:
            raise SchemaLookupError("Unknown schema 'Invoice'", {"available_schemas": []})

        assert exc_info.value.message == "Unknown schema 'Invoice'"
        assert "available_schemas=[]" in str(exc_info.value)

    def test_schema_lookup_error_is_not_configuration_error(self):
        """Test that schema failures and configuration failures stay distinct."""
        exception = SchemaLookupError("Record has no schema identifier")

        assert not isinstance(exception, TrackerConfigurationError)
