"""
Record assembly from a header and a raw CSV row.

Cells are zipped positionally with the header names and coerced one by
one. A failed cell is left out of the record instead of being replaced by a
default.
"""

from collections import Counter
from dataclasses import dataclass, field

from jsv.errors import CoercionError
from jsv.normalization.coercion import TypedValue, coerce_field
from jsv.schemas.model import FieldType, Schema
from jsv.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A cell that could not be coerced."""

    column: str
    raw: str
    message: str


@dataclass
class AssembledRecord:
    """Typed record for one CSV row."""

    values: dict[str, TypedValue] = field(default_factory=dict)
    extras: dict[str, TypedValue] = field(default_factory=dict)
    field_errors: list[FieldError] = field(default_factory=list)


def describe_columns(header: list[str], schema: Schema) -> dict[str, FieldType | None]:
    """
    Map each header column to its declared type.

    Args:
        header: Column names from the first CSV row.
        schema: Loaded schema.

    Returns:
        Column name to declared type, None for undeclared columns.
    """
    return {name: schema.field_type(name) for name in header}


def check_header(header: list[str], schema: Schema) -> bool:
    """
    Warn about header problems that make the record ambiguous.

    A column count that differs from the schema's property count only
    produces a warning, since a schema may describe a subset of the columns.
    A repeated column name also warns: only the last cell of that name ends
    up in the record.

    Returns:
        True if the counts match and every column name is unique.
    """
    ok = True
    if len(header) != len(schema.properties):
        log.warning(
            "Header/schema column count mismatch",
            columns=len(header),
            properties=len(schema.properties),
            undeclared=[name for name in header if name not in schema.properties],
        )
        ok = False

    duplicates = sorted(name for name, count in Counter(header).items() if count > 1)
    if duplicates:
        log.warning("Duplicate header columns", duplicates=duplicates)
        ok = False

    return ok


def assemble_record(header: list[str], cells: list[str], schema: Schema) -> AssembledRecord:
    """
    Build a typed record from one raw row.

    Columns are zipped up to the shorter of header and row. Declared columns
    go into `values`, which is what the validator sees; undeclared columns
    are coerced without a type hint and kept in `extras`.

    Args:
        header: Column names.
        cells: Raw text cells of the row.
        schema: Loaded schema.

    Returns:
        AssembledRecord with values, extras and per-field errors.
    """
    record = AssembledRecord()

    for name, raw in zip(header, cells):
        declared = schema.field_type(name)
        try:
            value = coerce_field(raw, declared)
        except CoercionError as e:
            record.field_errors.append(FieldError(column=name, raw=raw, message=e.reason))
            continue

        if name in schema.properties:
            record.values[name] = value
        else:
            record.extras[name] = value

    return record
