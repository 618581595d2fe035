"""Tests for loading the bundled JSON Schema definition."""

from pathlib import Path

import pytest

from ai_context_schema import SCHEMA_FORMAT_VERSION
from ai_context_schema.exceptions import SchemaLoadError
from ai_context_schema.models import json_schema_loader
from ai_context_schema.validation.schema_validator import SchemaValidator


def test_bundled_schema_is_valid_draft7() -> None:
    schema = json_schema_loader.load_schema()

    json_schema_loader.compile_schema(schema)
    assert schema["required"] == ["id", "title", "description", "version", "category", "platforms"]


def test_patch_version_resolves_to_bundled_schema() -> None:
    major, minor, _ = SCHEMA_FORMAT_VERSION.split(".")

    assert json_schema_loader.resolve_schema_version(f"{major}.{minor}.99") == SCHEMA_FORMAT_VERSION


def test_unknown_major_version_fails_to_load() -> None:
    with pytest.raises(SchemaLoadError, match="not found"):
        json_schema_loader.load_schema("99.0.0")


def test_invalid_json_fails_to_load(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SchemaLoadError, match="Invalid JSON"):
        json_schema_loader.load_schema(path=path)


def test_invalid_schema_definition_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad-type.json"
    path.write_text('{"type": "no-such-type"}', encoding="utf-8")

    with pytest.raises(SchemaLoadError, match="Invalid JSON Schema definition"):
        SchemaValidator(schema_path=path)


def test_loaded_schemas_are_cached_until_cleared(tmp_path: Path) -> None:
    path = tmp_path / "cached.json"
    path.write_text('{"type": "object"}', encoding="utf-8")

    first = json_schema_loader.load_schema(path=path)
    path.write_text('{"type": "array"}', encoding="utf-8")

    assert json_schema_loader.load_schema(path=path) is first

    json_schema_loader.clear_cache()

    assert json_schema_loader.load_schema(path=path) == {"type": "array"}
