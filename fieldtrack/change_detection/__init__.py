"""Change Detection System

This module decides whether a record changed meaningfully since a captured
baseline, using per-type equality rules and a configurable policy for fields
that were erased rather than reassigned.

Components:
- FieldType / ErasedCompare: Field type and erasure policy enums
- MISSING: Sentinel for absent record values
- TrackerConfig: Per-tracker configuration model
- ChangeDetectionResult / FieldChange / ErasureResolution: Result models
- compare / normalize_link: Type comparators
- ErasureResolver: Erasure policy state machine
- TrackedFieldSet: Subset of schema fields taking part in detection
- ChangesTracker: Core change detection engine

Usage:
    from fieldtrack.change_detection import ChangesTracker, ErasedCompare

    tracker = ChangesTracker(record, catalog, {"erasedCompare": ErasedCompare.FIX})
    record["Price"] = 120

    if tracker.changes_were_made():
        save(record)
"""

from .change_detection_models import (
    FieldType, ErasedCompare, MISSING, DEFAULT_VALUES, TrackerConfig,
    ErasureResolution, FieldChange, ChangeDetectionResult
)
from .comparators import compare, normalize_link
from .erasure_resolver import ErasureResolver
from .tracked_fields import TrackedFieldSet
from .changes_tracker import ChangesTracker

__all__ = [
    'FieldType', 'ErasedCompare', 'MISSING', 'DEFAULT_VALUES', 'TrackerConfig',
    'ErasureResolution', 'FieldChange', 'ChangeDetectionResult',
    'compare', 'normalize_link', 'ErasureResolver', 'TrackedFieldSet', 'ChangesTracker'
]
