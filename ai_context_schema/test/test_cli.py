"""Tests for the command line entry points."""

import json
from pathlib import Path

import pytest

from ai_context_schema.compatibility import run_check
from ai_context_schema.validation import run_validate


def _run(main, argv: list) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


def test_validate_valid_directory_exits_zero(tmp_path: Path, write_document, capsys) -> None:
    write_document("one")
    write_document("two", requires=["one"])

    assert _run(run_validate.main, [str(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert "Validating 2 schema file(s)..." in out
    assert "Valid: 2" in out


def test_validate_invalid_file_exits_one(tmp_path: Path, write_document, capsys) -> None:
    path = write_document("bad", version=None)

    assert _run(run_validate.main, [str(path), "--warnings"]) == 1

    out = capsys.readouterr().out
    assert "Invalid: 1" in out
    assert "schema_validation" in out


def test_validate_json_output(tmp_path: Path, write_document, capsys) -> None:
    write_document("json-doc", body="tiny")

    assert _run(run_validate.main, [str(tmp_path), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["total"] == 1
    assert data["summary"]["warningTypes"]["insufficient_content"] == 1
    assert data["results"][0]["schema"]["id"] == "json-doc"


def test_validate_missing_path_exits_one(tmp_path: Path, capsys) -> None:
    assert _run(run_validate.main, [str(tmp_path / "missing")]) == 1
    assert "Path does not exist" in capsys.readouterr().err


def test_validate_empty_directory_exits_one(tmp_path: Path, capsys) -> None:
    assert _run(run_validate.main, [str(tmp_path)]) == 1
    assert "No schema files found" in capsys.readouterr().err


def test_check_exits_zero_without_errors(tmp_path: Path, write_document, capsys) -> None:
    write_document("compatible", platforms={"claude-code": {"compatible": True, "memory": True}})

    assert _run(run_check.main, [str(tmp_path), "--verbose"]) == 0

    out = capsys.readouterr().out
    assert "Total schemas: 1" in out
    assert "compatible: 100% (high)" in out


def test_check_exits_one_on_error_issue(tmp_path: Path, write_document, capsys) -> None:
    write_document("bad-priority", platforms={"cursor": {"compatible": True, "priority": "urgent"}})

    assert _run(run_check.main, [str(tmp_path), "--json"]) == 1

    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["issues"]["bySeverity"]["error"] == 1


def test_check_platform_filter_only_changes_display(tmp_path: Path, write_document, capsys) -> None:
    write_document("multi", platforms={"claude-code": {"compatible": True}, "cursor": {"compatible": True}})

    assert _run(run_check.main, [str(tmp_path), "--platform", "cursor"]) == 0

    out = capsys.readouterr().out
    assert "\ncursor:" in out
    assert "\nclaude-code:" not in out


def test_check_missing_directory_exits_one(tmp_path: Path, capsys) -> None:
    assert _run(run_check.main, [str(tmp_path / "missing")]) == 1
    assert "Directory not found" in capsys.readouterr().err


def test_validate_reports_issue_location(tmp_path: Path, write_document, capsys) -> None:
    path = write_document("located", version="1.0")

    assert _run(run_validate.main, [str(path)]) == 1

    out = capsys.readouterr().out
    assert f"({path}:5:10)" in out


def test_validate_platform_filter_only_changes_details(tmp_path: Path, write_document, capsys) -> None:
    cursor_doc = write_document("cursor-doc", platforms={"cursor": {"compatible": True}})
    claude_doc = write_document("claude-doc")

    assert _run(run_validate.main, [str(tmp_path), "--verbose", "--platform", "cursor"]) == 0

    out = capsys.readouterr().out
    assert "Total files: 2" in out
    assert f"📄 {cursor_doc}" in out
    assert f"📄 {claude_doc}" not in out
