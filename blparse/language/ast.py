"""Statement tree and program containers produced by the BL parsers.

Nodes are small frozen dataclasses so parsed programs compare structurally;
two parses of the same token sequence yield equal trees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


class Condition(Enum):
    """Sensor tests usable in ``IF`` and ``WHILE`` statements."""

    NEXT_IS_EMPTY = "next-is-empty"
    NEXT_IS_NOT_EMPTY = "next-is-not-empty"
    NEXT_IS_ENEMY = "next-is-enemy"
    NEXT_IS_NOT_ENEMY = "next-is-not-enemy"
    NEXT_IS_FRIEND = "next-is-friend"
    NEXT_IS_NOT_FRIEND = "next-is-not-friend"
    NEXT_IS_WALL = "next-is-wall"
    NEXT_IS_NOT_WALL = "next-is-not-wall"
    RANDOM = "random"
    TRUE = "true"


# ---------------------------------------------------------------------------
# Statements


@dataclass(frozen=True)
class Block:
    """Ordered sequence of statements."""

    statements: tuple["Statement", ...] = ()

    def __len__(self) -> int:
        return len(self.statements)

    def walk(self) -> Iterator["Statement"]:
        """Depth-first traversal starting at this block."""

        yield self
        for statement in self.statements:
            yield from statement.walk()


@dataclass(frozen=True)
class If:
    condition: Condition
    block: Block

    def walk(self) -> Iterator["Statement"]:
        yield self
        yield from self.block.walk()


@dataclass(frozen=True)
class IfElse:
    condition: Condition
    then_block: Block
    else_block: Block

    def walk(self) -> Iterator["Statement"]:
        yield self
        yield from self.then_block.walk()
        yield from self.else_block.walk()


@dataclass(frozen=True)
class While:
    condition: Condition
    body: Block

    def walk(self) -> Iterator["Statement"]:
        yield self
        yield from self.body.walk()


@dataclass(frozen=True)
class Call:
    """Invocation of a primitive or a user-defined instruction."""

    instruction: str

    def walk(self) -> Iterator["Statement"]:
        yield self


Statement = Union[Block, If, IfElse, While, Call]


# ---------------------------------------------------------------------------
# Program


@dataclass
class Program:
    """Parsed BL program: name, instruction context, and main body."""

    name: str = "Unnamed"
    context: dict[str, Block] = field(default_factory=dict)
    body: Block = field(default_factory=Block)

    def replace(self, name: str, context: dict[str, Block], body: Block) -> None:
        """Swap all three fields at once."""

        self.name, self.context, self.body = name, context, body


__all__ = [
    "Block",
    "Call",
    "Condition",
    "If",
    "IfElse",
    "Program",
    "Statement",
    "While",
]
