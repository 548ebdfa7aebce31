"""
Change Detection Data Models

This module defines the erasure policy enum, per-type default values, the
``MISSING`` sentinel used for absent record values, and the Pydantic models
returned by the change detection pipeline.
"""

from types import MappingProxyType
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..interfaces.schema_catalog import FieldType, coerce_field_type


class _Missing:
    """Type of the ``MISSING`` sentinel.

    A record field is absent when its key is not present or when it holds
    ``MISSING``. ``None`` is an explicit null and is never absent.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "MISSING"


MISSING = _Missing()


class ErasedCompare(str, Enum):
    """Policy applied when a field goes from a defined value to absent.

    Values:
        FIX: Overwrite the erased field with its type's default value
        IGNORE: Leave the field absent and report it as unchanged
        NONE: Leave the field absent and compare it as-is (always changed)
    """
    FIX = "fix"
    IGNORE = "ignore"
    NONE = "none"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            legacy_codes = {1: cls.FIX, 2: cls.IGNORE, 3: cls.NONE}
            return legacy_codes.get(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if lowered in (member.value, member.name.lower()):
                    return member
        return None


DEFAULT_VALUES = MappingProxyType({
    FieldType.TEXT: "",
    FieldType.NUMERIC: 0,
    FieldType.TRUE_FALSE: False,
    FieldType.DATE: None,
    FieldType.LINK: None,
})


class ErasureResolution(BaseModel):
    """Outcome of running one field through the erasure resolver.

    The resolver never touches the record itself. When ``record_was_mutated``
    is set, the tracker writes ``resolved_value`` back to the live record.
    """
    model_config = ConfigDict(frozen=True)

    field_id: str = Field(..., description="Field identifier that was resolved")
    resolved_value: Any = Field(
        default=MISSING,
        description="Value the comparator should see as the current value"
    )
    record_was_mutated: bool = Field(
        default=False,
        description="Whether resolved_value must be written to the live record"
    )
    comparison_skipped: bool = Field(
        default=False,
        description="Whether the field is reported unchanged without comparing"
    )


class FieldChange(BaseModel):
    """A tracked field whose current value differs from the baseline."""
    model_config = ConfigDict(frozen=True)

    field_id: str = Field(..., min_length=1, description="Changed field identifier")
    field_type: Union[FieldType, str] = Field(..., description="Declared field type")
    previous_value: Any = Field(default=MISSING, description="Baseline value")
    current_value: Any = Field(default=MISSING, description="Value that was compared")

    @field_validator('field_type')
    @classmethod
    def validate_field_type(cls, v):
        return coerce_field_type(v)


class ChangeDetectionResult(BaseModel):
    """Result of one change detection pass over a record's tracked fields."""
    schema_id: Optional[str] = Field(
        None,
        description="Schema identifier of the analysed record"
    )
    detection_timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When change detection was performed"
    )
    fields_compared: int = Field(
        default=0,
        ge=0,
        description="Number of tracked fields evaluated"
    )
    changed_fields: List[FieldChange] = Field(
        default_factory=list,
        description="Tracked fields that compared unequal to the baseline"
    )
    fixed_fields: List[str] = Field(
        default_factory=list,
        description="Erased fields rewritten to their type default"
    )
    ignored_fields: List[str] = Field(
        default_factory=list,
        description="Erased fields reported unchanged under the ignore policy"
    )

    @property
    def changes_were_made(self) -> bool:
        return bool(self.changed_fields)

    def get_changed_field_ids(self) -> List[str]:
        return [change.field_id for change in self.changed_fields]

    def get_change_summary(self) -> str:
        """Get a human-readable summary of the change detection results."""
        if not self.changes_were_made:
            summary = f"No changes detected ({self.fields_compared} fields compared)"
        else:
            summary = (f"{len(self.changed_fields)} of {self.fields_compared} fields changed: "
                       f"{', '.join(self.get_changed_field_ids())}")
        if self.fixed_fields:
            summary += f"; fixed erased fields: {', '.join(self.fixed_fields)}"
        if self.ignored_fields:
            summary += f"; ignored erased fields: {', '.join(self.ignored_fields)}"
        return summary


class TrackerConfig(BaseModel):
    """Configuration of a single ChangesTracker instance.

    Accepts snake_case names and the camelCase keys used by tracker
    configuration files (``erasedCompare``, ``trimToCompare`` ...).
    """
    erased_compare: ErasedCompare = Field(
        default=ErasedCompare.FIX,
        alias="erasedCompare",
        description="Policy for fields erased since the baseline"
    )
    trim_to_compare: bool = Field(
        default=False,
        alias="trimToCompare",
        description="Ignore leading/trailing whitespace when comparing text"
    )
    default_values: Dict[FieldType, Any] = Field(
        default_factory=dict,
        alias="defaultValues",
        description="Per field type overrides of the values used to fix erased fields"
    )
    schema_id_field: str = Field(
        default="schemaId",
        alias="schemaIdField",
        min_length=1,
        description="Record key holding the schema identifier"
    )

    @field_validator('erased_compare', mode='before')
    @classmethod
    def validate_erased_compare(cls, v):
        """Accept policy names and the legacy 1/2/3 codes."""
        return ErasedCompare(v)

    @field_validator('default_values', mode='before')
    @classmethod
    def validate_default_values(cls, v):
        if not isinstance(v, dict):
            return v
        return {FieldType(field_type): value for field_type, value in v.items()}

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "erasedCompare": "fix",
                "trimToCompare": True,
                "defaultValues": {"Numeric": -1},
                "schemaIdField": "schemaId"
            }
        }
    )
