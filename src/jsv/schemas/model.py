"""
Object schema model for CSV records.

A schema document is a JSON object whose `properties` describe one column
each. Only primitive field types are supported; composite kinds are rejected
when the schema is loaded, not when records are validated.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any

from jsonschema.exceptions import SchemaError as MetaSchemaError
from jsonschema.validators import Draft202012Validator, validator_for
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jsv.errors import SchemaError
from jsv.utils.logging import get_logger

log = get_logger(__name__)


class FieldType(str, Enum):
    """Primitive JSON types a CSV column may be declared as."""

    INTEGER = "integer"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


SUPPORTED_TYPES: tuple[str, ...] = tuple(sorted(t.value for t in FieldType))


class FieldSpec(BaseModel):
    """Definition of a single column in the schema's `properties`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default="", alias="$id", description="Field identifier URI")
    type: FieldType = Field(description="Declared primitive type")
    title: str = Field(default="", description="Human-readable field title")
    description: str = Field(default="", description="Field description")


class Schema(BaseModel):
    """
    Parsed object schema.

    Immutable after load. Field lookups are exact-match on the column name.
    The original JSON document is kept in `document` so the validator
    backend sees every keyword, not only the ones modelled here.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Schema title")
    description: str = Field(default="", description="Schema description")
    examples: list[Any] = Field(default_factory=list, description="Example records")
    required: frozenset[str] = Field(
        default_factory=frozenset, description="Names of required fields"
    )
    properties: dict[str, FieldSpec] = Field(description="Field definitions by name")
    document: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    def field_type(self, name: str) -> FieldType | None:
        """Return the declared type of a field, or None if it is not declared."""
        spec = self.properties.get(name)
        return spec.type if spec is not None else None


def _format_type(value: Any) -> str:
    if isinstance(value, str):
        return f"'{value}'"
    return json.dumps(value)


def _schema_error_message(error: ValidationError) -> str:
    """
    Build one report for every problem pydantic found.

    Illegal field types get one line each so a schema author can fix all of
    them in a single pass.
    """
    illegal: list[tuple[str, Any]] = []
    other: list[str] = []

    for err in error.errors():
        loc = err["loc"]
        if (
            len(loc) == 3
            and loc[0] == "properties"
            and loc[2] == "type"
            and err["type"] == "enum"
        ):
            illegal.append((str(loc[1]), err["input"]))
        else:
            where = ".".join(str(part) for part in loc) or "<root>"
            other.append(f"schema error: {where}: {err['msg']}")

    supported = ", ".join(f"'{t}'" for t in SUPPORTED_TYPES)
    lines = [
        f"schema error: field definition for '{name}' has illegal type "
        f"{_format_type(value)}. Only {supported} are supported."
        for name, value in sorted(illegal, key=lambda item: item[0])
    ]
    lines.extend(other)
    return "\n".join(lines)


def load_schema(document: Any) -> Schema:
    """
    Build a Schema from a parsed JSON document.

    Args:
        document: Decoded JSON value of the schema file.

    Returns:
        Validated, immutable Schema.

    Raises:
        SchemaError: If the document has the wrong shape, declares
            unsupported field types, or is not a valid JSON Schema.
    """
    if not isinstance(document, dict):
        msg = f"schema error: schema must be a JSON object, got {type(document).__name__}"
        raise SchemaError(msg)

    try:
        schema = Schema.model_validate({**document, "document": document})
    except ValidationError as e:
        raise SchemaError(_schema_error_message(e)) from e

    validator_cls = validator_for(document, default=Draft202012Validator)
    try:
        validator_cls.check_schema(document)
    except MetaSchemaError as e:
        msg = f"schema error: not a valid JSON Schema: {e.message}"
        raise SchemaError(msg) from e

    undeclared = sorted(schema.required.difference(schema.properties))
    if undeclared:
        log.warning("Required fields have no property definition", fields=undeclared)

    log.debug(
        "Loaded schema",
        title=schema.title,
        properties=len(schema.properties),
        required=sorted(schema.required),
    )
    return schema


def load_schema_file(path: Path) -> Schema:
    """
    Read and parse a schema document from disk.

    Args:
        path: Path to the JSON schema file.

    Returns:
        Validated Schema.

    Raises:
        SchemaError: If the file cannot be read, is not JSON, or fails
            validation in load_schema.
    """
    try:
        with path.open(encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        msg = f"failed to open schema file ({path}): {e.strerror or e}"
        raise SchemaError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"failed to parse schema as JSON ({path}): {e}"
        raise SchemaError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"failed to decode schema file ({path}): {e}"
        raise SchemaError(msg) from e

    return load_schema(document)
