"""Tests for the YAML config loader and logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from blparse.telemetry import logger
from blparse.utils.config import load_config


def test_load_config_reads_mapping(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("report:\n  format: text\n", encoding="utf-8")
    assert load_config(path) == {"report": {"format": "text"}}


def test_load_config_empty_document(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_get_logger_requires_name() -> None:
    with pytest.raises(ValueError):
        logger.get_logger("")


def test_set_level_adjusts_hierarchy() -> None:
    root = logging.getLogger("blparse")
    previous = root.level
    try:
        logger.set_level("debug")
        assert logger.get_logger("blparse.language.grammar").getEffectiveLevel() == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_set_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        logger.set_level("chatty")


def test_load_config_checks_sections(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("input:\n  encoding: utf-8\nextra: {}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unknown section 'extra'"):
        load_config(path, sections=("input", "report"))


def test_load_config_sections_must_be_mappings(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("report: text\n", encoding="utf-8")
    with pytest.raises(ValueError, match="section 'report' must be a mapping"):
        load_config(path, sections=("input", "report"))


def test_logging_file_is_merged_per_entry(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv(logger.LEVEL_ENV_VAR, raising=False)
    path = tmp_path / "logging.yaml"
    path.write_text(
        "loggers:\n  blparse:\n    level: DEBUG\n    handlers: [console]\n", encoding="utf-8"
    )
    config = logger._load_config(path)
    assert config["loggers"]["blparse"]["level"] == "DEBUG"
    assert "console" in config["handlers"]
    assert config["root"]["level"] == "WARNING"


def test_logging_level_from_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(logger.LEVEL_ENV_VAR, "error")
    config = logger._load_config(tmp_path / "absent.yaml")
    assert config["loggers"]["blparse"]["level"] == "ERROR"
