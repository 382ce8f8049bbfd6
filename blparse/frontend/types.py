"""Typed configuration and report objects for the ``blparse`` front end."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from typing import Any, Mapping

from blparse.language.ast import Program

CONFIG_SECTIONS = ("input", "report")
REPORT_FORMATS = ("text", "summary-json")


def _deep_update(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``updates`` recursively merged."""

    result: dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


@dataclass(slots=True)
class InputOptions:
    """How source files are read."""

    encoding: str = "utf-8"


@dataclass(slots=True)
class ReportOptions:
    """What gets printed for each successfully parsed file."""

    format: str = "text"
    list_instructions: bool = True


@dataclass(slots=True)
class ParserConfig:
    """Top-level front-end configuration bundle."""

    input: InputOptions = field(default_factory=InputOptions)
    report: ReportOptions = field(default_factory=ReportOptions)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ParserConfig":
        payload = dict(data or {})
        raw_input = payload.get("input")
        raw_report = payload.get("report")
        input_options = InputOptions()
        if isinstance(raw_input, Mapping) and raw_input.get("encoding"):
            encoding = str(raw_input["encoding"])
            try:
                codecs.lookup(encoding)
            except LookupError as exc:
                raise ValueError(f"input.encoding is not a known codec: {encoding!r}") from exc
            input_options.encoding = encoding
        report = ReportOptions()
        if isinstance(raw_report, Mapping):
            fmt = raw_report.get("format", report.format)
            if fmt not in REPORT_FORMATS:
                raise ValueError(
                    f"report.format must be one of {', '.join(REPORT_FORMATS)}, got {fmt!r}"
                )
            report.format = fmt
            report.list_instructions = bool(
                raw_report.get("list_instructions", report.list_instructions)
            )
        return cls(input=input_options, report=report)

    def merge(self, overrides: Mapping[str, Any] | None) -> "ParserConfig":
        if not overrides:
            return self
        return ParserConfig.from_mapping(_deep_update(self.to_dict(), overrides))

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": {"encoding": self.input.encoding},
            "report": {
                "format": self.report.format,
                "list_instructions": self.report.list_instructions,
            },
        }


@dataclass(slots=True)
class ParseSummary:
    """Shape of a parsed program, without the statement tree itself."""

    path: str
    program: str
    instructions: dict[str, int]
    body_statements: int

    @classmethod
    def from_program(cls, path: str, program: Program) -> "ParseSummary":
        return cls(
            path=path,
            program=program.name,
            instructions={name: len(body) for name, body in sorted(program.context.items())},
            body_statements=len(program.body),
        )

    def summary(self, *, list_instructions: bool = True) -> str:
        text = (
            f"program={self.program} instructions={len(self.instructions)} "
            f"body_statements={self.body_statements}"
        )
        if list_instructions and self.instructions:
            text += f" [{', '.join(self.instructions)}]"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "program": self.program,
            "instructions": dict(self.instructions),
            "body_statements": self.body_statements,
        }


__all__ = [
    "CONFIG_SECTIONS",
    "InputOptions",
    "ParseSummary",
    "ParserConfig",
    "REPORT_FORMATS",
    "ReportOptions",
]
