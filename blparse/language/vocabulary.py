"""Reserved words of BL and the identifier predicate built on them."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .ast import Condition

_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")

KEYWORDS = (
    "PROGRAM",
    "IS",
    "BEGIN",
    "END",
    "INSTRUCTION",
    "IF",
    "THEN",
    "ELSE",
    "WHILE",
    "DO",
)

# Order matters: collisions are reported against the first matching entry.
PRIMITIVES = ("move", "turnleft", "turnright", "infect", "skip")

CONDITIONS = tuple(condition.value for condition in Condition)


@dataclass(frozen=True)
class Vocabulary:
    """Lookup tables the parsers consult when classifying tokens."""

    keywords: tuple[str, ...] = KEYWORDS
    conditions: tuple[str, ...] = CONDITIONS
    primitives: tuple[str, ...] = PRIMITIVES

    def is_keyword(self, token: str) -> bool:
        return token in self.keywords

    def is_condition(self, token: str) -> bool:
        return token in self.conditions

    def is_primitive(self, token: str) -> bool:
        return token in self.primitives

    def is_identifier(self, token: str) -> bool:
        """Return True for identifier-shaped tokens that are not reserved."""

        return (
            _IDENTIFIER_RE.fullmatch(token) is not None
            and not self.is_keyword(token)
            and not self.is_condition(token)
        )

    def condition(self, token: str) -> Condition:
        return Condition(token)


BL_VOCABULARY = Vocabulary()

__all__ = ["BL_VOCABULARY", "CONDITIONS", "KEYWORDS", "PRIMITIVES", "Vocabulary"]
