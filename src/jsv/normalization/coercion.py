"""
Text cell coercion.

Turns one untyped CSV cell into a JSON value. The declared column type is
consulted first: declared strings are always read as strings, everything
else is read as a JSON literal with a string fallback.
"""

import json
from typing import Any, NoReturn

from jsv.errors import CoercionError
from jsv.schemas.model import FieldType

TypedValue = str | int | float | bool | None


def _reject_constant(name: str) -> NoReturn:
    msg = f"non-standard JSON constant {name}"
    raise ValueError(msg)


def parse_literal(raw: str) -> TypedValue:
    """
    Parse text as a bare scalar JSON literal.

    Args:
        raw: Cell text, e.g. "42", "-1.5", "true", "null".

    Returns:
        The decoded integer, float, boolean or None.

    Raises:
        ValueError: If the text is not a scalar JSON literal. Arrays and
            objects count as failures, as do NaN and Infinity.
    """
    try:
        value: Any = json.loads(raw, parse_constant=_reject_constant)
    except RecursionError as e:
        msg = "literal nested too deeply"
        raise ValueError(msg) from e

    if isinstance(value, (dict, list)):
        msg = f"composite value of type {type(value).__name__}"
        raise ValueError(msg)
    if isinstance(value, str):
        # Cells like '"abc"' are left to the string fallback.
        msg = "quoted string is not a bare literal"
        raise ValueError(msg)
    return value


def parse_quoted(raw: str) -> str:
    """
    Wrap text in double quotes and parse it as exactly one JSON string.

    Raises:
        ValueError: If the wrapped text is not a single valid JSON string,
            e.g. it contains an unescaped double quote or a bad escape.
    """
    value = json.loads(f'"{raw}"')
    if not isinstance(value, str):  # pragma: no cover
        msg = "quoted literal did not decode to a string"
        raise ValueError(msg)
    return value


def coerce_field(raw: str, declared: FieldType | None) -> TypedValue:
    """
    Coerce a raw text cell into a typed value.

    Declared strings never go through literal parsing, so "0042" stays
    "0042". Any other declared type, or no declaration at all, tries a JSON
    literal first and falls back to a string.

    Args:
        raw: Cell text from the CSV row.
        declared: Declared type of the column, or None if undeclared.

    Returns:
        Typed value for the record.

    Raises:
        CoercionError: If neither policy can read the text.
    """
    if declared is FieldType.STRING:
        try:
            return parse_quoted(raw)
        except ValueError as e:
            raise CoercionError(raw, f"not a valid string literal ({e})") from e

    try:
        return parse_literal(raw)
    except ValueError:
        pass

    try:
        return parse_quoted(raw)
    except ValueError as e:
        raise CoercionError(raw, f"neither a JSON literal nor a valid string ({e})") from e
