"""Tests for semantic version helpers."""

import pytest

from ai_context_schema.utils.format_version import (
    SemanticVersion,
    is_semantic_version,
    parse_format_version,
    parse_version,
)


def test_parse_version_with_prerelease_and_build() -> None:
    version = parse_version("2.1.0-rc1+abc")

    assert version == SemanticVersion(2, 1, 0, "rc1", "abc")
    assert str(version) == "2.1.0-rc1+abc"


@pytest.mark.parametrize("raw", ["1.0", "1.0.0.0", "v1.0.0", "1.0.0-", "one.two.three", ""])
def test_parse_version_rejects_malformed(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_version(raw)


def test_parse_version_rejects_non_string() -> None:
    with pytest.raises(ValueError, match="must be a string"):
        parse_version(1.0)


@pytest.mark.parametrize("raw, expected", [("1.2.3", True), ("1.2", False), (1.2, False), (True, False)])
def test_is_semantic_version(raw, expected: bool) -> None:
    assert is_semantic_version(raw) is expected


def test_parse_format_version_strips_v_prefix() -> None:
    assert parse_format_version("v2.1.0") == SemanticVersion(2, 1, 0)
