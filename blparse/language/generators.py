"""Helpers for loading the bundled ``.bl`` fixture programs.

Tests use these to parse every fixture under ``tests/python/fixtures/programs``
without repeating the I/O boilerplate.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from . import grammar
from .ast import Program

FIXTURE_ROOT = Path(__file__).resolve().parents[2] / "tests" / "python" / "fixtures" / "programs"


@dataclass(frozen=True)
class FixtureProgram:
    """Container bundling a parsed program with its source."""

    name: str
    path: Path
    source: str
    program: Program


def generate_fixture_programs(root: Path | None = None) -> Iterable[FixtureProgram]:
    """Yield parsed representations of the valid fixture programs.

    Parameters
    ----------
    root:
        Optional directory override.  When omitted the default fixture
        collection under ``tests/python/fixtures/programs`` is used.
    """

    yield from _iter_programs(root or FIXTURE_ROOT)


def _iter_programs(root: Path) -> Iterator[FixtureProgram]:
    if not root.exists():
        return
    for path in sorted(root.glob("*.bl")):
        source = path.read_text(encoding="utf-8")
        program = grammar.parse_source(source, filename=str(path))
        yield FixtureProgram(name=path.stem, path=path, source=source, program=program)


__all__ = ["FixtureProgram", "generate_fixture_programs"]
