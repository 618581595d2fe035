"""Tests for environment-driven configuration."""

import logging

import pytest

from ai_context_schema import SCHEMA_FORMAT_VERSION
from ai_context_schema.config import ValidatorConfig


def test_defaults() -> None:
    config = ValidatorConfig()

    assert config.schema_version == SCHEMA_FORMAT_VERSION
    assert config.size_limit == 6000
    assert config.min_content_length == 50


def test_from_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AI_CONTEXT_SCHEMA_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("AI_CONTEXT_SCHEMA_SIZE_LIMIT", "12000")
    monkeypatch.setenv("AI_CONTEXT_SCHEMA_SCHEMA_PATH", "/tmp/custom.json")

    config = ValidatorConfig.from_env()

    assert config.log_level == "DEBUG"
    assert config.size_limit == 12000
    assert config.schema_path == "/tmp/custom.json"


def test_empty_schema_path_means_bundled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AI_CONTEXT_SCHEMA_SCHEMA_PATH", "")

    assert ValidatorConfig.from_env().schema_path is None


def test_set_logging_only_touches_package_logger(capsys: pytest.CaptureFixture) -> None:
    root_handlers = logging.getLogger().handlers[:]

    logger = ValidatorConfig(log_level="DEBUG").set_logging()
    logger.getChild("test").info("to stdout")
    logger.getChild("test").warning("to stderr")

    captured = capsys.readouterr()
    assert "to stdout" in captured.out
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out
    assert logging.getLogger().handlers == root_handlers


def test_set_logging_twice_does_not_duplicate_handlers() -> None:
    ValidatorConfig().set_logging()
    logger = ValidatorConfig().set_logging()

    assert len(logger.handlers) == 2
