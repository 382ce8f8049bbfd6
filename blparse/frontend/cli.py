"""Command-line interface: parse BL program files and report their shape."""

from __future__ import annotations

import argparse
import ast
import json
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from blparse.language import grammar
from blparse.language.errors import BLParseError
from blparse.telemetry.logger import get_logger, set_level
from blparse.utils.config import load_config

from .types import CONFIG_SECTIONS, ParserConfig, ParseSummary

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "blparse.yaml"

_LOGGER = get_logger("blparse.frontend.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blparse", description="Parse BL robot programs")
    parser.add_argument("files", nargs="+", type=Path, help="BL program files to parse")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None,
        help="Optional path to a front-end configuration YAML file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        metavar="KEY=VALUE",
        help="Override configuration values using dot notation (e.g. report.format=summary-json).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log parser progress at DEBUG level"
    )
    return parser


def load_configuration(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> ParserConfig:
    """Return a :class:`ParserConfig` from ``config_path`` and overrides."""

    data: Mapping[str, Any] | None = None
    if config_path is not None:
        data = load_config(config_path, sections=CONFIG_SECTIONS)
    return ParserConfig.from_mapping(data).merge(overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.verbose:
        set_level("DEBUG")

    try:
        config = load_configuration(args.config, overrides=_parse_overrides(args.overrides))
    except (OSError, ValueError) as exc:
        print(f"[blparse] error: {exc}", file=sys.stderr)
        return 1

    failures = 0
    for path in args.files:
        if not _parse_one(path, config):
            failures += 1
    _LOGGER.info("parsed %d file(s), %d failed", len(args.files), failures)
    return 1 if failures else 0


def _parse_one(path: Path, config: ParserConfig) -> bool:
    try:
        program = grammar.parse_file(path, encoding=config.input.encoding)
    except BLParseError as exc:
        _LOGGER.error("parse failed: %s", exc)
        print(f"[blparse] error: {exc}", file=sys.stderr)
        return False
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        _LOGGER.error("cannot read %s: %s", path, exc)
        print(f"[blparse] error: cannot read {path}: {exc}", file=sys.stderr)
        return False

    summary = ParseSummary.from_program(str(path), program)
    if config.report.format == "summary-json":
        print(json.dumps(summary.to_dict(), indent=2, sort_keys=True))
    else:
        text = summary.summary(list_instructions=config.report.list_instructions)
        print(f"[blparse] {path}: {text}")
    return True


def _parse_overrides(raw: Sequence[str] | None) -> Mapping[str, Any]:
    overrides: dict[str, Any] = {}
    if not raw:
        return overrides
    for item in raw:
        key, sep, value_text = item.partition("=")
        if not sep:
            raise ValueError(f"override '{item}' is missing '='")
        key_parts = [part for part in key.split(".") if part]
        if not key_parts:
            raise ValueError("override key must not be empty")
        cursor = overrides
        for part in key_parts[:-1]:
            cursor = cursor.setdefault(part, {})
            if not isinstance(cursor, dict):
                raise ValueError(f"override '{key}' conflicts with an existing value")
        cursor[key_parts[-1]] = _coerce_literal(value_text)
    return overrides


def _coerce_literal(value: str) -> Any:
    try:
        return ast.literal_eval(value)
    except (ValueError, SyntaxError):
        return value


if __name__ == "__main__":  # pragma: no cover - module entry point
    raise SystemExit(main())
