from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema.exceptions import ValidationError


JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None
    keyword: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _join_path(base: Optional[JsonPointer], token: str) -> JsonPointer:
    if not base:
        return f"/{_jp_escape(token)}"
    return f"{base}/{_jp_escape(token)}"


def _error_path(error: ValidationError) -> JsonPointer:
    path = "".join(f"/{_jp_escape(str(p))}" for p in error.absolute_path)
    if error.validator == "required" and isinstance(error.validator_value, list):
        # Point at the missing property rather than at its parent object.
        for name in error.validator_value:
            if error.message == f"{name!r} is a required property":
                return _join_path(path, str(name))
    return path


def _error_data(error: ValidationError) -> Optional[Dict[str, Any]]:
    if error.validator == "required":
        return None
    data: Dict[str, Any] = {"value": error.instance}
    if error.validator == "enum":
        data["allowedValues"] = list(error.validator_value)
    return data


def validate_against_schema(
    data: Any,
    validator: jsonschema.Draft7Validator,
) -> List[SchemaIssue]:
    """Validate data against a compiled JSON Schema.

    Unlike ``jsonschema.validate`` this reports every violated constraint,
    not only the first one.

    Args:
        data: Parsed frontmatter mapping
        validator: Compiled validator from ``json_schema_loader.compile_schema``

    Returns:
        List of SchemaIssue objects, one per violated constraint
    """
    if not isinstance(data, dict):
        return [SchemaIssue(message="Root must be a mapping/object", yaml_path="", keyword="type")]

    issues: List[SchemaIssue] = []
    # Stable order: by location, then in the order jsonschema reports them.
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    for error in errors:
        issues.append(
            SchemaIssue(
                message=error.message,
                yaml_path=_error_path(error),
                keyword=str(error.validator),
                data=_error_data(error),
            )
        )
    return issues
