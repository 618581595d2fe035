"""Tests for the schema validator."""

from pathlib import Path

import pytest

from ai_context_schema.config import ValidatorConfig
from ai_context_schema.exceptions import ValidationError
from ai_context_schema.validation import validate_paths
from ai_context_schema.validation.report import Severity
from ai_context_schema.validation.schema_validator import SchemaValidator

from conftest import DEFAULT_BODY, make_document_text


def _types(issues) -> list:
    return [issue.type for issue in issues]


def test_valid_document_has_no_issues(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text())

    assert result.valid
    assert result.errors == []
    assert result.warnings == []


def test_missing_version_is_structural_error(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(version=None))

    assert not result.valid
    version_errors = [e for e in result.errors if e.type == "schema_validation" and "version" in e.path]
    assert len(version_errors) == 1
    assert version_errors[0].path == "/version"
    assert "version" in version_errors[0].message


def test_structural_validation_reports_every_violation(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(title=None, description="short", category=None))

    paths = sorted(e.path for e in result.errors if e.type == "schema_validation")
    assert paths == ["/category", "/description", "/title"]


def test_enum_violation_carries_allowed_values(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(complexity="extreme"))

    [error] = result.errors
    assert error.path == "/complexity"
    assert error.data["value"] == "extreme"
    assert error.data["allowedValues"] == ["simple", "medium", "complex"]


def test_errors_carry_source_line(validator: SchemaValidator) -> None:
    text = (
        "---\nid: test\ntitle: Test\ndescription: A test schema that is long enough\n"
        "version: '1.0'\ncategory: test\nplatforms:\n  claude-code:\n    compatible: true\n---\n\n"
        + DEFAULT_BODY
    )
    result = validator.validate_text(text)

    version_errors = [e for e in result.errors if e.type == "invalid_version"]
    assert len(version_errors) == 1
    assert version_errors[0].line == 5


def test_non_kebab_case_id_is_rejected(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text("Not_Kebab"))

    assert "invalid_id" in _types(result.errors)


@pytest.mark.parametrize("version", ["1.2.0-beta", "1.2.0+build1", "1.2.0-rc1+abc", "10.20.30"])
def test_semantic_versions_are_accepted(validator: SchemaValidator, version: str) -> None:
    assert validator.validate_text(make_document_text(version=version)).valid


def test_cursor_auto_attached_without_globs(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(
        platforms={"cursor": {"compatible": True, "activation": "auto-attached"}},
    ))

    assert not result.valid
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.severity == Severity.ERROR
    assert error.type == "missing_globs"
    assert "globs" in error.message.lower()


def test_incompatible_platform_rules_are_skipped(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(
        platforms={
            "claude-code": {"compatible": True},
            "cursor": {"compatible": False, "activation": "auto-attached"},
        },
    ))

    assert result.valid


def test_copilot_priority_outside_range(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(
        platforms={"github-copilot": {"compatible": True, "priority": 11}},
    ))

    assert _types(result.errors) == ["invalid_priority"]


def test_claude_command_without_namespace_warns(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(
        platforms={"claude-code": {"compatible": True, "command": True}},
    ))

    assert result.valid
    assert _types(result.warnings) == ["missing_namespace"]


def test_requires_and_conflicts_must_be_disjoint(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(requires=["b", "c"], conflicts=["c", "b"]))

    [error] = [e for e in result.errors if e.type == "conflicting_relationships"]
    assert error.data == {"ids": ["b", "c"]}
    assert "b, c" in error.message


def test_self_requirement_is_a_cycle(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text("loop", requires=["loop"]))

    assert "cyclic_dependency" in _types(result.errors)


def test_content_heuristics_are_warnings(validator: SchemaValidator) -> None:
    result = validator.validate_text(make_document_text(body="plain text"))

    assert result.valid
    assert _types(result.warnings) == ["insufficient_content", "missing_headers", "missing_examples"]


def test_windsurf_size_boundary() -> None:
    """Estimated size equal to the limit passes, one more character warns."""
    validator = SchemaValidator(ValidatorConfig())
    platforms = {"windsurf": {"compatible": True}}
    base = len("# H\n```\n```\n") + len("Test") + 200
    filler = 6000 - base

    at_limit = "# H\n```\n```\n" + "x" * filler
    over_limit = at_limit + "x"

    at_result = validator.validate_text(make_document_text(body=at_limit, platforms=platforms))
    over_result = validator.validate_text(make_document_text(body=over_limit, platforms=platforms))

    assert "windsurf_size_warning" not in _types(at_result.warnings)
    assert "windsurf_size_warning" in _types(over_result.warnings)
    assert over_result.valid


def test_size_limit_is_configurable() -> None:
    validator = SchemaValidator(ValidatorConfig(size_limit=300))
    result = validator.validate_text(make_document_text(
        body=DEFAULT_BODY + "\n" + "x" * 100,
        platforms={"windsurf": {"compatible": True}},
    ))

    assert "windsurf_size_warning" in _types(result.warnings)


def test_validation_is_idempotent(validator: SchemaValidator) -> None:
    text = make_document_text(requires=["x"], conflicts=["x"], version="bad")

    first = validator.validate_text(text)
    second = validator.validate_text(text)

    assert first.to_dict() == second.to_dict()


def test_unparseable_text_gives_parse_error_result(validator: SchemaValidator) -> None:
    result = validator.validate_text("no frontmatter", source_label="inline.yaml")

    assert not result.valid
    assert result.document is None
    assert _types(result.errors) == ["parse_error"]
    assert result.errors[0].message.startswith("Failed to parse file:")


# ---- batches -----------------------------------------------------------------


def test_mutual_requirement_reports_cycle_on_both(validator: SchemaValidator, write_document) -> None:
    a = write_document("a", requires=["b"])
    b = write_document("b", requires=["a"])

    batch = validator.validate_files([a, b])

    for result in batch.results:
        cycle_errors = [e for e in result.errors if e.type == "cyclic_dependency"]
        assert len(cycle_errors) == 1
        assert cycle_errors[0].data == {"cycle": ["a", "b"]}


def test_cycle_detection_does_not_depend_on_order(validator: SchemaValidator, write_document) -> None:
    paths = [
        write_document("a", requires=["b"]),
        write_document("b", requires=["c"]),
        write_document("c", requires=["a"]),
        write_document("d", requires=["a"]),
    ]

    forward = validator.validate_files(paths)
    backward = validator.validate_files(list(reversed(paths)))

    def cyclic(batch) -> set:
        return {
            r.document.id for r in batch.results
            if "cyclic_dependency" in _types(r.errors)
        }

    assert cyclic(forward) == cyclic(backward) == {"a", "b", "c"}


def test_missing_relationship_targets(validator: SchemaValidator, write_document) -> None:
    path = write_document("lonely", requires=["gone"], suggests=["maybe"], supersedes=["old"])

    [result] = validator.validate_files([path]).results

    assert _types(result.errors) == ["missing_dependency"]
    assert sorted(_types(result.warnings)) == ["missing_superseded", "missing_suggestion"]


def test_relationships_resolve_within_batch(validator: SchemaValidator, write_document) -> None:
    base = write_document("base")
    child = write_document("child", requires=["base"], suggests=["base"])

    batch = validator.validate_files([child, base])

    assert batch.summary.valid == 2
    assert all(r.warnings == [] for r in batch.results)


def test_requirement_on_invalid_document_is_missing(validator: SchemaValidator, write_document) -> None:
    broken = write_document("broken", version=None)
    child = write_document("child", requires=["broken"])

    batch = validator.validate_files([broken, child])
    child_result = batch.results[1]

    assert _types(child_result.errors) == ["missing_dependency"]


def test_duplicate_ids_are_errors(validator: SchemaValidator, write_document) -> None:
    first = write_document("same", file_name="one.yaml")
    second = write_document("same", file_name="two.yaml")

    batch = validator.validate_files([first, second])

    assert batch.summary.invalid == 2
    for result in batch.results:
        assert _types(result.errors) == ["duplicate_id"]


def test_batch_with_malformed_files(validator: SchemaValidator, write_document) -> None:
    ids = [f"doc-{idx}" for idx in range(7)]
    paths = [
        write_document(doc_id, requires=[ids[(idx + 1) % 7]] if idx < 6 else [])
        for idx, doc_id in enumerate(ids)
    ]
    for idx in range(3):
        paths.append(write_document(
            file_name=f"broken-{idx}.yaml",
            raw_text="---\nid: [broken\n---\n\nbody\n",
        ))

    batch = validator.validate_files(paths)

    assert batch.summary.total == 10
    assert batch.summary.valid == 7
    assert batch.summary.invalid == 3
    assert batch.summary.error_types == {"parse_error": 3}
    assert [r.errors[0].type for r in batch.results[7:]] == ["parse_error"] * 3


def test_batch_to_dict_shape(validator: SchemaValidator, write_document) -> None:
    path = write_document("shape")

    data = validator.validate_files([path]).to_dict()

    [result] = data["results"]
    assert result["valid"] is True
    assert result["filePath"] == str(path)
    assert result["schema"]["id"] == "shape"
    assert result["schema"]["_content"] == DEFAULT_BODY
    assert data["summary"]["total"] == 1


def test_custom_schema_path(tmp_path: Path, write_document) -> None:
    schema_file = tmp_path / "strict.json"
    schema_file.write_text(
        '{"$schema": "http://json-schema.org/draft-07/schema#", "type": "object", "required": ["owner"]}',
        encoding="utf-8",
    )
    validator = SchemaValidator(ValidatorConfig(), schema_path=schema_file)

    result = validator.validate_file(write_document("custom"))

    assert [e.path for e in result.errors] == ["/owner"]


def test_validate_paths_discovers_nested_files(tmp_path: Path, write_document) -> None:
    write_document("top")
    write_document("nested", file_name="sub/dir/nested.yml")
    (tmp_path / "notes.md").write_text("# not a schema", encoding="utf-8")

    batch = validate_paths([tmp_path])

    assert sorted(r.document.id for r in batch.results) == ["nested", "top"]
    assert batch.summary.valid == 2


def test_validate_paths_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="Path does not exist"):
        validate_paths([tmp_path / "missing"])
