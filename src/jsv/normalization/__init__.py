"""
Normalization layer turning raw CSV text into typed records.

Handles per-cell coercion and positional record assembly.
"""

from jsv.normalization.coercion import TypedValue, coerce_field
from jsv.normalization.records import (
    AssembledRecord,
    FieldError,
    assemble_record,
    check_header,
    describe_columns,
)

__all__ = [
    "AssembledRecord",
    "FieldError",
    "TypedValue",
    "assemble_record",
    "check_header",
    "coerce_field",
    "describe_columns",
]
