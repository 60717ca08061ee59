"""
Object schema definitions for CSV records.

Schemas are loaded once per run and are immutable thereafter.
"""

from jsv.schemas.model import (
    SUPPORTED_TYPES,
    FieldSpec,
    FieldType,
    Schema,
    load_schema,
    load_schema_file,
)

__all__ = [
    "SUPPORTED_TYPES",
    "FieldSpec",
    "FieldType",
    "Schema",
    "load_schema",
    "load_schema_file",
]
