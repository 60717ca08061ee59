"""
Schema validator backends.

The runner talks to a validator only through `RecordValidator`, so any
JSON Schema implementation can be plugged in. The default backend is the
`jsonschema` package.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from jsonschema.protocols import Validator
from jsonschema.validators import Draft202012Validator, validator_for

from jsv.normalization.coercion import TypedValue
from jsv.schemas.model import Schema


@dataclass(frozen=True)
class Violation:
    """A single mismatch between a record and a schema constraint."""

    path: str
    message: str
    keyword: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class RecordValidator(Protocol):
    """Checks a typed record against a schema."""

    def validate(self, record: dict[str, TypedValue], schema: Schema) -> list[Violation]:
        """Return every violation, or an empty list if the record conforms."""
        ...


class JsonSchemaValidator:
    """
    RecordValidator backed by the jsonschema library.

    The validator class is picked from the document's `$schema` keyword,
    defaulting to Draft 2020-12. The compiled validator is reused for as long
    as the same Schema instance is passed in.
    """

    def __init__(self) -> None:
        self._schema: Schema | None = None
        self._validator: Validator | None = None

    def _compiled(self, schema: Schema) -> Validator:
        if self._validator is None or self._schema is not schema:
            cls = validator_for(schema.document, default=Draft202012Validator)
            self._validator = cls(schema.document)
            self._schema = schema
        return self._validator

    def validate(self, record: dict[str, TypedValue], schema: Schema) -> list[Violation]:
        """
        Validate a typed record.

        Args:
            record: Field name to typed value.
            schema: Loaded schema.

        Returns:
            Violations sorted by path, then message.
        """
        validator = self._compiled(schema)
        instance: dict[str, Any] = dict(record)
        violations = [
            Violation(path=error.json_path, message=error.message, keyword=str(error.validator))
            for error in validator.iter_errors(instance)
        ]
        return sorted(violations, key=lambda v: (v.path, v.message))
