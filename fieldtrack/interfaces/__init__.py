"""fieldtrack Interfaces

This package contains the schema catalog contract and the field descriptor
model shared by the change detection components.
"""

from .schema_catalog import (
    FieldType, FieldDescriptor, SchemaCatalog, InMemorySchemaCatalog,
    coerce_field_type, to_field_descriptors
)

__all__ = [
    'FieldType', 'FieldDescriptor', 'SchemaCatalog', 'InMemorySchemaCatalog',
    'coerce_field_type', 'to_field_descriptors'
]
