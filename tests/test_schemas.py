"""Tests for schema loading."""

import json
from pathlib import Path
from typing import Any

import pytest
from structlog.testing import capture_logs

from jsv.errors import SchemaError
from jsv.schemas import SUPPORTED_TYPES, FieldType, load_schema, load_schema_file


class TestLoadSchema:
    """Tests for load_schema."""

    def test_full_document(self, people_document: dict[str, Any]) -> None:
        """Test that every documented key is parsed."""
        schema = load_schema(people_document)
        assert schema.title == "People"
        assert schema.description == "One row per person"
        assert schema.examples == [{"id": 1, "name": "Alice"}]
        assert schema.required == frozenset({"id"})
        assert set(schema.properties) == {"id", "name"}
        assert schema.properties["id"].id == "#/properties/id"
        assert schema.properties["name"].title == "Name"

    def test_minimal_document(self) -> None:
        """Test that only properties and types are needed."""
        schema = load_schema(
            {"properties": {"id": {"type": "integer"}, "name": {"type": "string"}}}
        )
        assert schema.title == ""
        assert schema.required == frozenset()
        assert schema.field_type("id") is FieldType.INTEGER
        assert schema.field_type("name") is FieldType.STRING

    @pytest.mark.parametrize("type_name", SUPPORTED_TYPES)
    def test_all_supported_types_load(self, type_name: str) -> None:
        """Test that every supported primitive type is accepted."""
        schema = load_schema({"properties": {"col": {"type": type_name}}})
        assert schema.field_type("col") == FieldType(type_name)

    def test_lookup_is_exact_match(self, people_document: dict[str, Any]) -> None:
        """Test that field lookups do not fold case or strip whitespace."""
        schema = load_schema(people_document)
        assert schema.field_type("ID") is None
        assert schema.field_type(" id") is None
        assert schema.field_type("missing") is None

    def test_keeps_original_document(self, people_document: dict[str, Any]) -> None:
        """Test that the raw document is kept for the validator backend."""
        people_document["properties"]["id"]["minimum"] = 1
        schema = load_schema(people_document)
        assert schema.document["properties"]["id"]["minimum"] == 1

    def test_schema_is_immutable(self, people_document: dict[str, Any]) -> None:
        """Test that a loaded schema cannot be reassigned."""
        schema = load_schema(people_document)
        with pytest.raises(ValueError):
            schema.title = "Changed"  # type: ignore[misc]


class TestSchemaErrors:
    """Tests for schema-level errors."""

    def test_unsupported_types_reported_together(self) -> None:
        """Test that every illegal field type is named in one error."""
        document = {
            "properties": {
                "address": {"type": "object"},
                "birthday": {"type": "date"},
                "tags": {"type": "array"},
                "name": {"type": "string"},
            }
        }
        with pytest.raises(SchemaError) as exc_info:
            load_schema(document)

        message = str(exc_info.value)
        lines = message.splitlines()
        assert len(lines) == 3
        assert "'address' has illegal type 'object'" in lines[0]
        assert "'birthday' has illegal type 'date'" in lines[1]
        assert "'tags' has illegal type 'array'" in lines[2]
        assert "'name'" not in message

    def test_unknown_type_rejected(self) -> None:
        """Test that a type outside the JSON vocabulary is rejected."""
        with pytest.raises(SchemaError, match="'when' has illegal type 'datetime'"):
            load_schema({"properties": {"when": {"type": "datetime"}}})

    def test_missing_properties(self) -> None:
        """Test that a document without properties is rejected."""
        with pytest.raises(SchemaError, match="properties"):
            load_schema({"title": "Empty"})

    def test_field_without_type(self) -> None:
        """Test that a property entry must declare a type."""
        with pytest.raises(SchemaError, match=r"properties\.id\.type"):
            load_schema({"properties": {"id": {"title": "ID"}}})

    def test_malformed_field_entry(self) -> None:
        """Test that a property entry must be an object."""
        with pytest.raises(SchemaError, match=r"properties\.id"):
            load_schema({"properties": {"id": "integer"}})

    def test_document_not_an_object(self) -> None:
        """Test that a JSON array is not a schema."""
        with pytest.raises(SchemaError, match="must be a JSON object"):
            load_schema([{"type": "integer"}])

    def test_invalid_json_schema_keyword(self) -> None:
        """Test that the document is checked against the JSON Schema meta-schema."""
        document = {"properties": {"id": {"type": "integer", "minimum": "zero"}}}
        with pytest.raises(SchemaError, match="not a valid JSON Schema"):
            load_schema(document)

    def test_required_without_property_warns(self) -> None:
        """Test that an undeclared required field is a warning, not an error."""
        document = {"required": ["id", "email"], "properties": {"id": {"type": "integer"}}}
        with capture_logs() as logs:
            schema = load_schema(document)

        assert schema.required == frozenset({"id", "email"})
        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["fields"] == ["email"]


class TestLoadSchemaFile:
    """Tests for reading schema documents from disk."""

    def test_load_file(self, schema_file: Path) -> None:
        """Test loading a schema from a JSON file."""
        schema = load_schema_file(schema_file)
        assert schema.title == "People"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a schema error naming the path."""
        path = tmp_path / "nope.json"
        with pytest.raises(SchemaError, match="failed to open schema file") as exc_info:
            load_schema_file(path)
        assert str(path) in str(exc_info.value)

    def test_invalid_json(self, write_file) -> None:
        """Test that unparseable JSON is a schema error."""
        path = write_file("broken.json", '{"properties": ')
        with pytest.raises(SchemaError, match="failed to parse schema as JSON"):
            load_schema_file(path)

    def test_unsupported_type_in_file(self, write_file) -> None:
        """Test that type errors surface through the file loader."""
        path = write_file(
            "schema.json", json.dumps({"properties": {"meta": {"type": "object"}}})
        )
        with pytest.raises(SchemaError, match="'meta' has illegal type 'object'"):
            load_schema_file(path)
