"""Hand-rolled lexer turning BL source text into a :class:`TokenStream`.

BL words are runs of letters, digits and ``-`` (``turn-around`` is a single
identifier). Everything else apart from whitespace and ``#`` comments becomes a
one-character token, which the parsers then reject as not being a keyword or
identifier.
"""

from __future__ import annotations

from .errors import DEFAULT_FILENAME
from .tokens import END_OF_INPUT, Token, TokenStream


def _is_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "-")


class Tokenizer:
    """Single-pass scanner tracking line and column for each token."""

    def __init__(self, source: str, filename: str = DEFAULT_FILENAME) -> None:
        self.source = source
        self.filename = filename
        self.length = len(source)
        self.index = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> TokenStream:
        stream = TokenStream(filename=self.filename)
        while not self._eof:
            ch = self._peek()
            if ch.isspace():
                self._consume_whitespace()
                continue
            if ch == "#":
                self._consume_comment()
                continue
            if _is_word_char(ch):
                stream.enqueue(self._consume_word())
                continue
            start_line, start_column = self.line, self.column
            stream.enqueue(Token(self._advance(), start_line, start_column))
        stream.enqueue(Token(END_OF_INPUT, self.line, self.column))
        return stream

    @property
    def _eof(self) -> bool:
        return self.index >= self.length

    def _peek(self) -> str:
        if self._eof:
            return "\0"
        return self.source[self.index]

    def _advance(self) -> str:
        ch = self.source[self.index]
        self.index += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _consume_whitespace(self) -> None:
        while not self._eof and self._peek().isspace():
            self._advance()

    def _consume_comment(self) -> None:
        while not self._eof and self._peek() != "\n":
            self._advance()

    def _consume_word(self) -> Token:
        start_line, start_column = self.line, self.column
        value = self._advance()
        while not self._eof and _is_word_char(self._peek()):
            value += self._advance()
        return Token(value, start_line, start_column)


def tokenize(source: str, *, filename: str = DEFAULT_FILENAME) -> TokenStream:
    """Return the tokens of ``source`` terminated by ``END_OF_INPUT``."""

    return Tokenizer(source, filename=filename).tokenize()


__all__ = ["Tokenizer", "tokenize"]
