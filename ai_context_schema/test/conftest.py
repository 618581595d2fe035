"""Shared fixtures for context schema tests."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest
import yaml

from ai_context_schema.config import ValidatorConfig
from ai_context_schema.validation.schema_validator import SchemaValidator

DEFAULT_BODY = "# Test\n\nSome content with a code block:\n\n```js\nconsole.log(1)\n```"


def make_frontmatter(doc_id: str = "test", **overrides: Any) -> Dict[str, Any]:
    """Frontmatter of a minimal valid document; keys set to None are dropped."""
    frontmatter: Dict[str, Any] = {
        "id": doc_id,
        "title": "Test",
        "description": "A test schema that is long enough",
        "version": "1.0.0",
        "category": "test",
        "platforms": {"claude-code": {"compatible": True}},
    }
    frontmatter.update(overrides)
    return {key: value for key, value in frontmatter.items() if value is not None}


def make_document_text(doc_id: str = "test", body: str = DEFAULT_BODY, **overrides: Any) -> str:
    dumped = yaml.safe_dump(make_frontmatter(doc_id, **overrides), sort_keys=False)
    return f"---\n{dumped}---\n\n{body}"


@pytest.fixture(autouse=True)
def restore_package_logging():
    """The CLIs install handlers on the package logger; put the previous state back."""
    logger = logging.getLogger("ai_context_schema")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def validator() -> SchemaValidator:
    return SchemaValidator(ValidatorConfig())


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[..., Path]:
    """Write a document into tmp_path and return its path."""

    def _write(
        doc_id: str = "test",
        body: str = DEFAULT_BODY,
        file_name: Optional[str] = None,
        raw_text: Optional[str] = None,
        **overrides: Any,
    ) -> Path:
        path = tmp_path / (file_name or f"{doc_id}.yaml")
        path.parent.mkdir(parents=True, exist_ok=True)
        text = raw_text if raw_text is not None else make_document_text(doc_id, body, **overrides)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
