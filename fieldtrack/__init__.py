"""
fieldtrack: field-level change detection for mutable records

Decides whether a record's tracked fields changed meaningfully since a
baseline snapshot, so update handlers only save records that really changed
and never re-trigger themselves in an endless update loop.
"""

from .exceptions import FieldTrackBaseException, TrackerConfigurationError, SchemaLookupError
from .interfaces import FieldType, FieldDescriptor, SchemaCatalog, InMemorySchemaCatalog
from .change_detection import (
    ChangesTracker, ChangeDetectionResult, FieldChange, ErasedCompare,
    MISSING, DEFAULT_VALUES, TrackerConfig, compare
)
from .config import ConfigLoader
from .utils import LoggerSink, setup_logging

__version__ = "1.0.0"
__all__ = [
    'ChangesTracker', 'ChangeDetectionResult', 'FieldChange', 'ErasedCompare',
    'FieldType', 'FieldDescriptor', 'SchemaCatalog', 'InMemorySchemaCatalog',
    'MISSING', 'DEFAULT_VALUES', 'TrackerConfig', 'ConfigLoader', 'compare',
    'LoggerSink', 'setup_logging',
    'FieldTrackBaseException', 'TrackerConfigurationError', 'SchemaLookupError'
]
