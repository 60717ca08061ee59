"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from jsv.schemas import Schema, load_schema


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Run every test in an empty directory without jsv environment overrides."""
    monkeypatch.delenv("JSV_CONFIG", raising=False)
    monkeypatch.delenv("JSV_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()


@pytest.fixture
def people_document() -> dict[str, Any]:
    """Schema document with an integer id and a string name."""
    return {
        "title": "People",
        "description": "One row per person",
        "examples": [{"id": 1, "name": "Alice"}],
        "required": ["id"],
        "properties": {
            "id": {
                "$id": "#/properties/id",
                "type": "integer",
                "title": "ID",
                "description": "Numeric person id",
            },
            "name": {
                "$id": "#/properties/name",
                "type": "string",
                "title": "Name",
                "description": "Display name",
            },
        },
    }


@pytest.fixture
def people_schema(people_document: dict[str, Any]) -> Schema:
    """Loaded people schema."""
    return load_schema(people_document)


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper that writes text to a file under tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def schema_file(write_file, people_document: dict[str, Any]) -> Path:
    """People schema written to schema.json in the working directory."""
    return write_file("schema.json", json.dumps(people_document))
