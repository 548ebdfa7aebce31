"""
Erasure Resolver

An erased field is one whose baseline value was defined and whose current
value is absent, e.g. a property dropped by an object copy that omitted it.
Saving such a record restores the stored value, so the same change would be
detected again on the next update, looping forever. The resolver applies the
configured ``ErasedCompare`` policy before the type comparator runs:

- FIX: resolve to the type's default value, to be written to the record
- IGNORE: skip the comparison and report the field unchanged
- NONE: compare the absent value as-is
"""

from typing import Any, Dict, Mapping, Optional, Union
import copy
import logging

from .change_detection_models import (
    DEFAULT_VALUES, ErasedCompare, ErasureResolution, FieldType, MISSING, coerce_field_type
)

logger = logging.getLogger(__name__)


class ErasureResolver:
    """Applies an erasure policy to (baseline, current) value pairs.

    Holds its own deep copy of the per-type default values and hands out a
    fresh copy on every fix, so a mutable default written into one record
    never aliases the default or another record.
    """

    def __init__(self, policy: ErasedCompare = ErasedCompare.FIX,
                 default_values: Optional[Mapping[FieldType, Any]] = None):
        self.policy = ErasedCompare(policy)
        self._default_values: Dict[FieldType, Any] = dict(DEFAULT_VALUES)
        for field_type, value in (default_values or {}).items():
            self.set_default_value(field_type, value)

    @property
    def default_values(self) -> Dict[FieldType, Any]:
        return dict(self._default_values)

    def get_default_value(self, field_type: Union[FieldType, str]) -> Any:
        """Default for a field type; unknown types default to None."""
        return self._default_values.get(coerce_field_type(field_type))

    def set_default_value(self, field_type: Union[FieldType, str], value: Any) -> None:
        field_type = coerce_field_type(field_type)
        if not isinstance(field_type, FieldType):
            logger.debug("Ignoring default value for unknown field type %r", field_type)
            return
        self._default_values[field_type] = copy.deepcopy(value)

    @staticmethod
    def value_was_erased(previous: Any, current: Any) -> bool:
        return previous is not MISSING and current is MISSING

    def resolve(self, field_id: str, field_type: Union[FieldType, str],
                previous: Any, current: Any) -> ErasureResolution:
        """Resolve the current value of a field before comparison.

        Args:
            field_id: Field identifier
            field_type: Declared type of the field
            previous: Baseline value
            current: Live value (``MISSING`` when absent)

        Returns:
            ErasureResolution describing the value to compare and whether the
            record must be updated or the comparison skipped
        """
        if not self.value_was_erased(previous, current):
            return ErasureResolution(field_id=field_id, resolved_value=current)

        if self.policy == ErasedCompare.FIX:
            if not isinstance(coerce_field_type(field_type), FieldType):
                # No default for unknown types; the field stays absent
                logger.debug("Field %s of unknown type %r was erased, leaving it absent",
                             field_id, field_type)
                return ErasureResolution(field_id=field_id, resolved_value=current)
            default = copy.deepcopy(self.get_default_value(field_type))
            logger.debug("Field %s was erased, fixing to default %r", field_id, default)
            return ErasureResolution(
                field_id=field_id,
                resolved_value=default,
                record_was_mutated=True
            )

        if self.policy == ErasedCompare.IGNORE:
            logger.debug("Field %s was erased, ignoring", field_id)
            return ErasureResolution(
                field_id=field_id,
                resolved_value=current,
                comparison_skipped=True
            )

        return ErasureResolution(field_id=field_id, resolved_value=current)
