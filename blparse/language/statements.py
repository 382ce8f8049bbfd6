"""Recursive-descent parser for the statement grammar inside a BL block.

Grammar::

    block     ::= statement*
    statement ::= IF condition THEN block [ELSE block] END IF
                | WHILE condition DO block END WHILE
                | identifier

Each buffer handed to :meth:`StatementParser.parse_block` must end with
``END_OF_INPUT`` and is consumed completely.
"""

from __future__ import annotations

from .ast import Block, Call, Condition, If, IfElse, Statement, While
from .errors import BLParseError
from .tokens import END_OF_INPUT, TokenStream
from .vocabulary import BL_VOCABULARY, Vocabulary

_BLOCK_TERMINATORS = frozenset({"END", "ELSE", END_OF_INPUT})


class StatementParser:
    """Parses the body of an instruction or of the main program."""

    def __init__(self, vocabulary: Vocabulary = BL_VOCABULARY) -> None:
        self.vocabulary = vocabulary

    def parse_block(self, tokens: TokenStream) -> Block:
        block = self._parse_block(tokens)
        token = tokens.front()
        if token != END_OF_INPUT:
            raise BLParseError(f"Unexpected '{token}' in block", token, tokens.filename)
        tokens.dequeue()
        return block

    # ------------------------------------------------------------------
    # Productions

    def _parse_block(self, tokens: TokenStream) -> Block:
        statements: list[Statement] = []
        while tokens.front() not in _BLOCK_TERMINATORS:
            statements.append(self._parse_statement(tokens))
        return Block(tuple(statements))

    def _parse_statement(self, tokens: TokenStream) -> Statement:
        token = tokens.front()
        if token == "IF":
            return self._parse_if(tokens)
        if token == "WHILE":
            return self._parse_while(tokens)
        if token == "INSTRUCTION":
            raise BLParseError(
                "INSTRUCTION declarations cannot be nested inside a block",
                token,
                tokens.filename,
            )
        if not self.vocabulary.is_identifier(token):
            raise BLParseError(
                f"Expected a statement but found '{token}'", token, tokens.filename
            )
        return Call(str(tokens.dequeue()))

    def _parse_if(self, tokens: TokenStream) -> Statement:
        self._expect(tokens, "IF")
        condition = self._parse_condition(tokens)
        self._expect(tokens, "THEN")
        then_block = self._parse_block(tokens)
        else_block = None
        if tokens.front() == "ELSE":
            tokens.dequeue()
            else_block = self._parse_block(tokens)
        self._expect(tokens, "END")
        self._expect(tokens, "IF")
        if else_block is None:
            return If(condition, then_block)
        return IfElse(condition, then_block, else_block)

    def _parse_while(self, tokens: TokenStream) -> While:
        self._expect(tokens, "WHILE")
        condition = self._parse_condition(tokens)
        self._expect(tokens, "DO")
        body = self._parse_block(tokens)
        self._expect(tokens, "END")
        self._expect(tokens, "WHILE")
        return While(condition, body)

    def _parse_condition(self, tokens: TokenStream) -> Condition:
        token = tokens.front()
        if not self.vocabulary.is_condition(token):
            raise BLParseError(
                f"Expected a condition but found '{token}'", token, tokens.filename
            )
        try:
            condition = self.vocabulary.condition(token)
        except ValueError as exc:
            raise BLParseError(f"Unknown condition '{token}'", token, tokens.filename) from exc
        tokens.dequeue()
        return condition

    # ------------------------------------------------------------------
    # Token helpers

    def _expect(self, tokens: TokenStream, keyword: str) -> None:
        token = tokens.front()
        if token != keyword:
            raise BLParseError(
                f"Expected '{keyword}' but found '{token}'", token, tokens.filename
            )
        tokens.dequeue()


def parse_block(tokens: TokenStream, *, vocabulary: Vocabulary = BL_VOCABULARY) -> Block:
    """Parse a complete ``END_OF_INPUT``-terminated block from ``tokens``."""

    return StatementParser(vocabulary).parse_block(tokens)


__all__ = ["StatementParser", "parse_block"]
