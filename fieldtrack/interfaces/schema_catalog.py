"""Schema Catalog Interface

This module defines the field descriptor model and the abstract catalog that
ChangesTracker uses to resolve a record's schema identifier into typed field
descriptors. Catalogs are injected into the tracker; nothing in fieldtrack
reaches for a global registry.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import SchemaLookupError


def _squash(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


class FieldType(str, Enum):
    """Semantic field types understood by the comparators.

    Values match the type names used by record catalogs. Lookup is lenient:
    ``FieldType("TrueFalse")`` and ``FieldType("true_false")`` both resolve
    to ``TRUE_FALSE``.
    """
    TEXT = "Text"
    NUMERIC = "Numeric"
    TRUE_FALSE = "True/False"
    DATE = "Date"
    LINK = "Link"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = _squash(value)
            for member in cls:
                if key in (_squash(member.value), _squash(member.name)):
                    return member
        return None


def coerce_field_type(value: Union[FieldType, str]) -> Union[FieldType, str]:
    """Return the ``FieldType`` for a known type name, or the name unchanged."""
    if isinstance(value, FieldType):
        return value
    try:
        return FieldType(value)
    except ValueError:
        return value


class FieldDescriptor(BaseModel):
    """Identifier and semantic type of one schema field.

    Accepts both snake_case keys and the catalog's ``FieldId``/``Type`` keys.
    Type names that are not a known ``FieldType`` are kept as plain strings.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_id: str = Field(..., alias="FieldId", min_length=1, description="Field identifier")
    field_type: Union[FieldType, str] = Field(..., alias="Type", description="Semantic field type")

    @field_validator('field_type')
    @classmethod
    def validate_field_type(cls, v):
        return coerce_field_type(v)


FieldDescriptorInput = Union[FieldDescriptor, Mapping[str, Any]]


def to_field_descriptors(fields: Iterable[FieldDescriptorInput]) -> List[FieldDescriptor]:
    """Validate a sequence of descriptors or descriptor mappings."""
    return [
        field if isinstance(field, FieldDescriptor) else FieldDescriptor.model_validate(dict(field))
        for field in fields
    ]


class SchemaCatalog(ABC):
    """Abstract source of field schemas.

    Implementations must return the same fields for a schema identifier for
    as long as a tracker built on them is alive.
    """

    @abstractmethod
    def resolve_fields(self, schema_id: str) -> List[FieldDescriptor]:
        """Resolve a schema identifier to its ordered field descriptors.

        Args:
            schema_id: Schema identifier carried by the record

        Returns:
            List[FieldDescriptor]: Fields of the schema in declaration order

        Raises:
            SchemaLookupError: If the schema identifier is unknown
        """
        pass


class InMemorySchemaCatalog(SchemaCatalog):
    """Dictionary-backed catalog for embedding and tests."""

    def __init__(self, schemas: Optional[Mapping[str, Iterable[FieldDescriptorInput]]] = None):
        self._schemas: Dict[str, List[FieldDescriptor]] = {}
        for schema_id, fields in (schemas or {}).items():
            self.register(schema_id, fields)

    def register(self, schema_id: str, fields: Iterable[FieldDescriptorInput]) -> None:
        self._schemas[schema_id] = to_field_descriptors(fields)

    def resolve_fields(self, schema_id: str) -> List[FieldDescriptor]:
        if schema_id not in self._schemas:
            raise SchemaLookupError(
                f"Unknown schema '{schema_id}'",
                {"available_schemas": sorted(self._schemas)}
            )
        return list(self._schemas[schema_id])

    def __contains__(self, schema_id: object) -> bool:
        return schema_id in self._schemas
