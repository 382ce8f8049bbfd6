"""Logging helpers shared by the parser and the command-line front end."""

from __future__ import annotations

import copy
import logging
import logging.config
import os
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

import yaml

_CONFIG_LOCK = RLock()
_CONFIGURED = False

LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "logging.yaml"
LEVEL_ENV_VAR = "BLPARSE_LOG_LEVEL"
_CONFIG_KEYS = ("version", "disable_existing_loggers", "formatters", "handlers", "root", "loggers")

_DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "standard",
        }
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
    "loggers": {
        "blparse": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False,
        }
    },
}


def _read_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - guard rails for broken configs
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("blparse.telemetry").warning("failed to parse %s: %s", path, exc)
        return {}
    return data if isinstance(data, Mapping) else {}


def _load_config(path: Path = LOGGING_CONFIG_PATH) -> dict[str, Any]:
    """Merge ``path`` over the defaults, then apply ``BLPARSE_LOG_LEVEL``."""

    data = _read_file(path)
    merged = copy.deepcopy(_DEFAULT_CONFIG)
    for key in _CONFIG_KEYS:
        value = data.get(key)
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            # merged per entry: a file naming only loggers.blparse keeps the handlers
            merged[key].update(value)
        elif value is not None:
            merged[key] = value
    level = os.environ.get(LEVEL_ENV_VAR)
    if level:
        merged["loggers"].setdefault("blparse", {})["level"] = level.upper()
    return merged


def configure() -> None:
    """Ensure the logging subsystem is configured exactly once."""

    global _CONFIGURED
    with _CONFIG_LOCK:
        if _CONFIGURED:
            return
        logging.config.dictConfig(_load_config())
        _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured via ``configs/logging.yaml``."""

    if not isinstance(name, str) or not name:
        raise ValueError("logger name must be a non-empty string")
    configure()
    return logging.getLogger(name)


def set_level(level: str | int) -> None:
    """Adjust the level of the ``blparse`` logger hierarchy."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level}")
        level = resolved
    configure()
    logging.getLogger("blparse").setLevel(level)


__all__ = ["LEVEL_ENV_VAR", "LOGGING_CONFIG_PATH", "configure", "get_logger", "set_level"]
