"""
Changes Tracker

This module implements the orchestrating change detection engine. A
ChangesTracker is built once per before/after window (typically once per
update handler invocation): it snapshots the record, resolves the record's
field schema, and then answers whether any tracked field changed in a way
that warrants saving the record.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, MutableMapping, Optional, Union
import copy
import json
import logging

from ..exceptions import SchemaLookupError
from ..interfaces.schema_catalog import FieldDescriptor, SchemaCatalog, to_field_descriptors
from .change_detection_models import (
    ChangeDetectionResult, FieldChange, FieldType, MISSING, TrackerConfig
)
from .comparators import compare
from .erasure_resolver import ErasureResolver
from .tracked_fields import TrackedFieldSet

logger = logging.getLogger(__name__)

LogSink = Callable[[str, str], None]


def _render(value: Any) -> str:
    if value is MISSING:
        return "undefined"
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return repr(value)


class ChangesTracker:
    """Detects meaningful changes to a record's tracked fields.

    The record stays owned by the caller. The tracker only writes to it when
    the FIX erasure policy rewrites an erased field to its type default, so
    that the saved value matches what the next comparison will see.

    Example:
        tracker = ChangesTracker(record, catalog)
        record["Price"] = 120
        if tracker.changes_were_made():
            save(record)
    """

    def __init__(self, record: MutableMapping[str, Any],
                 schema_catalog: SchemaCatalog,
                 config: Union[TrackerConfig, Mapping[str, Any], None] = None,
                 *,
                 schema_id: Optional[str] = None,
                 log_sink: Optional[LogSink] = None):
        """Snapshot the record and resolve its field schema.

        Args:
            record: Live record, modified in place only by erasure fixes
            schema_catalog: Catalog resolving schema identifiers to fields
            config: TrackerConfig or a mapping of its fields (camelCase accepted)
            schema_id: Schema identifier; read from the record when omitted
            log_sink: Optional ``sink(level, message)`` notified of changes

        Raises:
            SchemaLookupError: If the schema identifier is missing or unknown
        """
        self._record = record
        self._baseline = MappingProxyType(copy.deepcopy(dict(record)))
        self._config = self._load_config(config)
        self._schema_id = schema_id if schema_id is not None else record.get(self._config.schema_id_field)
        self._fields = self._resolve_fields(schema_catalog, self._schema_id)
        self._tracked_fields = TrackedFieldSet(self._fields)
        self._erasure_resolver = ErasureResolver(self._config.erased_compare, self._config.default_values)
        self._log_sink = log_sink
        logger.debug("ChangesTracker initialized for schema %s with %d fields (erased_compare=%s)",
                     self._schema_id, len(self._fields), self._config.erased_compare.value)

    @staticmethod
    def _load_config(config: Union[TrackerConfig, Mapping[str, Any], None]) -> TrackerConfig:
        if config is None:
            return TrackerConfig()
        if isinstance(config, TrackerConfig):
            return config
        return TrackerConfig.model_validate(dict(config))

    @staticmethod
    def _resolve_fields(schema_catalog: SchemaCatalog, schema_id: Optional[str]) -> Dict[str, FieldDescriptor]:
        if schema_id is None:
            raise SchemaLookupError("Record has no schema identifier")
        try:
            descriptors = to_field_descriptors(schema_catalog.resolve_fields(schema_id))
        except KeyError as e:
            raise SchemaLookupError(f"Unknown schema '{schema_id}'") from e
        return {descriptor.field_id: descriptor for descriptor in descriptors}

    @property
    def record(self) -> MutableMapping[str, Any]:
        return self._record

    @property
    def baseline(self) -> Mapping[str, Any]:
        """Read-only snapshot of the record taken at construction."""
        return self._baseline

    @property
    def fields(self) -> Dict[str, FieldDescriptor]:
        return dict(self._fields)

    @property
    def schema_id(self) -> Optional[str]:
        return self._schema_id

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def tracked_fields(self) -> List[str]:
        return self._tracked_fields.as_list()

    def clear_tracked_fields(self) -> None:
        self._tracked_fields.clear()

    def add_tracked_fields(self, field_ids: Union[str, Iterable[str]]) -> None:
        """Track more fields; identifiers missing from the schema are ignored."""
        self._tracked_fields.add(field_ids)

    def remove_tracked_fields(self, field_ids: Union[str, Iterable[str]]) -> None:
        self._tracked_fields.remove(field_ids)

    def set_default_value(self, field_type: Union[FieldType, str], value: Any) -> None:
        """Override the value used to fix erased fields of one type, for this tracker only."""
        self._erasure_resolver.set_default_value(field_type, value)

    def get_field_type(self, field_id: str) -> Union[FieldType, str]:
        return self._fields[field_id].field_type

    def get_field_values(self, field_id: str):
        """Return ``(previous_value, current_value)``; absent values are ``MISSING``."""
        return self._baseline.get(field_id, MISSING), self._record.get(field_id, MISSING)

    def changes_were_made(self) -> bool:
        """Whether any tracked field differs from the baseline.

        Every tracked field is evaluated, so all erased fields get fixed and
        all differences get logged in a single call.
        """
        return self.detect_changes().changes_were_made

    def detect_changes(self) -> ChangeDetectionResult:
        """Run every tracked field through erasure resolution and comparison.

        Returns:
            ChangeDetectionResult listing changed, fixed and ignored fields
        """
        result = ChangeDetectionResult(schema_id=self._schema_id)
        for field_id in self._tracked_fields:
            change = self._evaluate_field(field_id, result)
            result.fields_compared += 1
            if change is not None:
                result.changed_fields.append(change)

        if result.changes_were_made:
            logger.debug("Changes detected for schema %s: %s",
                         self._schema_id, result.get_changed_field_ids())
        return result

    def compare_field(self, field_id: str) -> bool:
        """Run one field through the pipeline; True when it is unchanged."""
        return self._evaluate_field(field_id) is None

    def _evaluate_field(self, field_id: str,
                        result: Optional[ChangeDetectionResult] = None) -> Optional[FieldChange]:
        previous_value, current_value = self.get_field_values(field_id)
        field_type = self.get_field_type(field_id)

        resolution = self._erasure_resolver.resolve(field_id, field_type, previous_value, current_value)
        if resolution.record_was_mutated:
            self._apply_resolution(field_id, resolution.resolved_value)
            if result is not None:
                result.fixed_fields.append(field_id)
            if not compare(field_type, previous_value, resolution.resolved_value,
                           self._config.trim_to_compare):
                self._notify(f"### Field {field_id} was fixed: "
                             f"{self._type_name(field_type)}(undefined, {_render(resolution.resolved_value)})")
        if resolution.comparison_skipped:
            if result is not None:
                result.ignored_fields.append(field_id)
            return None

        current_value = resolution.resolved_value
        if compare(field_type, previous_value, current_value, self._config.trim_to_compare):
            return None

        self._notify(f"### {field_id} field changed: "
                     f"{self._type_name(field_type)}({_render(previous_value)}, {_render(current_value)})")
        return FieldChange(
            field_id=field_id,
            field_type=field_type,
            previous_value=previous_value,
            current_value=current_value
        )

    def _apply_resolution(self, field_id: str, value: Any) -> None:
        # The only place the tracker writes to the caller's record
        self._record[field_id] = value

    @staticmethod
    def _type_name(field_type: Union[FieldType, str]) -> str:
        return field_type.value if isinstance(field_type, FieldType) else str(field_type)

    def _notify(self, message: str) -> None:
        logger.debug(message)
        if self._log_sink is None:
            return
        try:
            self._log_sink("notice", message)
        except Exception as e:
            logger.warning("Change log sink failed: %s", e)
