"""Token values and the destructive token stream consumed by the parsers."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator, Optional

from .errors import DEFAULT_FILENAME, BLParseError

END_OF_INPUT = "### END OF INPUT ###"


class Token(str):
    """String token that remembers where it was read from.

    Tokens compare equal to plain strings, so hand-built streams in tests can
    mix the two freely.
    """

    line: Optional[int]
    column: Optional[int]

    def __new__(cls, value: str, line: Optional[int] = None, column: Optional[int] = None):
        token = super().__new__(cls, value)
        token.line = line
        token.column = column
        return token

    def __repr__(self) -> str:
        return f"Token({str.__repr__(self)}, line={self.line}, column={self.column})"


class TokenStream:
    """FIFO of tokens with O(1) access to both ends."""

    def __init__(self, tokens: Iterable[str] = (), *, filename: str = DEFAULT_FILENAME) -> None:
        self._tokens: deque[str] = deque(tokens)
        self.filename = filename

    @classmethod
    def of(cls, tokens: Iterable[str], *, filename: str = DEFAULT_FILENAME) -> "TokenStream":
        """Build a stream from ``tokens``, appending ``END_OF_INPUT`` when absent."""

        stream = cls(tokens, filename=filename)
        if not stream or stream.back() != END_OF_INPUT:
            stream.enqueue(END_OF_INPUT)
        return stream

    def new_instance(self) -> "TokenStream":
        return TokenStream(filename=self.filename)

    # ------------------------------------------------------------------
    # Front access

    def front(self) -> str:
        if not self._tokens:
            raise BLParseError("Unexpected end of token stream", filename=self.filename)
        return self._tokens[0]

    def dequeue(self) -> str:
        if not self._tokens:
            raise BLParseError("Unexpected end of token stream", filename=self.filename)
        return self._tokens.popleft()

    def enqueue(self, token: str) -> None:
        self._tokens.append(token)

    # ------------------------------------------------------------------
    # Tail access

    def back(self) -> str:
        if not self._tokens:
            raise BLParseError("Unexpected end of token stream", filename=self.filename)
        return self._tokens[-1]

    def pop_back(self) -> str:
        if not self._tokens:
            raise BLParseError("Unexpected end of token stream", filename=self.filename)
        return self._tokens.pop()

    # ------------------------------------------------------------------
    # Container protocol

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenStream):
            return list(self._tokens) == list(other._tokens)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TokenStream({[str(token) for token in self._tokens]!r})"

    def copy(self) -> "TokenStream":
        return TokenStream(self._tokens, filename=self.filename)


__all__ = ["END_OF_INPUT", "Token", "TokenStream"]
