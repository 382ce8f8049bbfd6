"""Structural parser for BL programs.

A program has the shape::

    PROGRAM <name> IS
        INSTRUCTION <instr> IS <block> END <instr>    (zero or more)
    BEGIN
        <block>
    END <name>

This module validates that envelope and the instruction declarations, and
hands each block body to the :class:`~.statements.StatementParser`. Every
failure raises :class:`~.errors.BLParseError`; a :class:`~.ast.Program` is
only built once all checks have passed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Container, Iterable, Optional

from blparse.telemetry.logger import get_logger

from .ast import Block, Program
from .errors import DEFAULT_FILENAME, BLParseError, require
from .statements import StatementParser
from .tokenizer import tokenize
from .tokens import END_OF_INPUT, TokenStream
from .vocabulary import BL_VOCABULARY, Vocabulary

BlockParser = Callable[[TokenStream], Block]

_LOGGER = get_logger("blparse.language.grammar")


class ProgramParser:
    """Recursive-descent parser for the program and instruction skeleton."""

    def __init__(
        self,
        vocabulary: Vocabulary = BL_VOCABULARY,
        block_parser: Optional[BlockParser] = None,
    ) -> None:
        self.vocabulary = vocabulary
        self.block_parser: BlockParser = (
            block_parser or StatementParser(vocabulary).parse_block
        )

    # ------------------------------------------------------------------
    # Instructions

    def parse_instruction(
        self, tokens: TokenStream, declared: Container[str] = ()
    ) -> tuple[str, Block]:
        """Consume one ``INSTRUCTION`` declaration and return its name and body.

        ``declared`` holds the instruction names seen so far; a repeat is
        rejected before the body is scanned.
        """

        assert len(tokens) > 0 and tokens.front() == "INSTRUCTION", (
            "Violation of: <\"INSTRUCTION\"> is proper prefix of tokens"
        )
        filename = tokens.filename
        tokens.dequeue()

        candidate = tokens.front()
        for primitive in self.vocabulary.primitives:
            require(
                candidate != primitive,
                f"Instruction name same as primitive: {candidate}",
                candidate,
                filename,
            )
        require(
            self.vocabulary.is_identifier(candidate),
            f"Instruction name is not a valid identifier: {candidate}",
            candidate,
            filename,
        )
        require(
            candidate not in declared,
            f"Non-unique instruction name: {candidate}",
            candidate,
            filename,
        )
        name = str(tokens.dequeue())
        self._expect(tokens, "IS", f"'IS' expected after instruction name {name}")

        # Instructions never nest, so the first token equal to the name closes
        # the declaration. Inside a block END is only ever followed by IF or
        # WHILE; anything else there is a closing name that does not match.
        body_tokens = tokens.new_instance()
        previous: Optional[str] = None
        while tokens.front() != name:
            token = tokens.front()
            require(
                token != END_OF_INPUT,
                f"Instruction {name} is not closed before end of input",
                token,
                filename,
            )
            require(
                token != "INSTRUCTION",
                f"INSTRUCTION declarations cannot be nested (inside {name})",
                token,
                filename,
            )
            require(
                previous != "END" or token in ("IF", "WHILE"),
                f"Instruction name does not match at close: {name}, found '{token}'",
                token,
                filename,
            )
            previous = token
            body_tokens.enqueue(tokens.dequeue())

        if previous != "END":
            require(
                not _closed_later(tokens, name),
                f"Instruction {name} calls itself before its closing name",
                tokens.front(),
                filename,
            )
            raise BLParseError(
                f"Instruction {name} missing END before closing name", tokens.front(), filename
            )
        body_tokens.pop_back()

        closing = tokens.dequeue()
        require(
            closing == name,
            f"Instruction name does not match at close: {name}, found '{closing}'",
            closing,
            filename,
        )
        body_tokens.enqueue(END_OF_INPUT)
        body = self.block_parser(body_tokens)
        _LOGGER.debug("parsed instruction %s (%d statements)", name, len(body))
        return name, body

    # ------------------------------------------------------------------
    # Programs

    def parse(self, tokens: TokenStream) -> Program:
        """Consume ``tokens`` entirely and return the parsed program."""

        assert len(tokens) > 0, "Violation of: END_OF_INPUT is a suffix of tokens"
        filename = tokens.filename

        self._expect(tokens, "PROGRAM", "PROGRAM expected at beginning")
        candidate = tokens.front()
        require(
            self.vocabulary.is_identifier(candidate),
            f"Program name is not a valid identifier: {candidate}",
            candidate,
            filename,
        )
        program_name = str(tokens.dequeue())
        self._expect(tokens, "IS", f"'IS' expected after program name {program_name}")

        context: dict[str, Block] = {}
        while tokens.front() == "INSTRUCTION":
            name, body = self.parse_instruction(tokens, declared=context)
            context[name] = body

        self._expect(tokens, "BEGIN", "BEGIN expected")

        tail = tokens.back()
        if tail != END_OF_INPUT:
            require(
                END_OF_INPUT in tokens,
                "Token stream is missing its end-of-input marker",
                tail,
                filename,
            )
            raise BLParseError("Extra text after program end", tail, filename)
        tokens.pop_back()
        tail = tokens.back()
        require(
            tail == program_name,
            f"Program name does not match at beginning and end: {program_name}, found '{tail}'",
            tail,
            filename,
        )
        tokens.pop_back()
        tail = tokens.back()
        require(tail == "END", "Program missing END statement", tail, filename)
        tokens.pop_back()

        tokens.enqueue(END_OF_INPUT)
        body = self.block_parser(tokens)

        program = Program(name=program_name, context=context, body=body)
        _LOGGER.debug(
            "parsed program %s (%d instructions, %d statements)",
            program_name,
            len(context),
            len(body),
        )
        return program

    # ------------------------------------------------------------------
    # Token helpers

    def _expect(self, tokens: TokenStream, keyword: str, message: str) -> None:
        token = tokens.front()
        require(token == keyword, message, token, tokens.filename)
        tokens.dequeue()


def _closed_later(tokens: TokenStream, name: str) -> bool:
    """Return True when an ``END <name>`` pair still lies ahead in ``tokens``."""

    previous: Optional[str] = None
    for token in tokens:
        if previous == "END" and token == name:
            return True
        previous = token
    return False


# ---------------------------------------------------------------------------
# Entry points


def parse_tokens(
    tokens: TokenStream | Iterable[str],
    *,
    vocabulary: Vocabulary = BL_VOCABULARY,
    filename: str = DEFAULT_FILENAME,
) -> Program:
    """Parse a ready-made token sequence into a :class:`Program`.

    Plain iterables are copied into a fresh stream terminated by
    ``END_OF_INPUT``; a :class:`TokenStream` is consumed in place.
    """

    if isinstance(tokens, TokenStream):
        stream = tokens
    else:
        stream = TokenStream.of(tokens, filename=filename)
    return ProgramParser(vocabulary).parse(stream)


def parse_source(
    source: str,
    *,
    vocabulary: Vocabulary = BL_VOCABULARY,
    filename: str = DEFAULT_FILENAME,
) -> Program:
    """Tokenize BL ``source`` text and parse it."""

    return ProgramParser(vocabulary).parse(tokenize(source, filename=filename))


def parse_file(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    vocabulary: Vocabulary = BL_VOCABULARY,
) -> Program:
    """Read and parse the BL program stored at ``path``."""

    source_path = Path(path)
    source = source_path.read_text(encoding=encoding)
    return parse_source(source, vocabulary=vocabulary, filename=str(source_path))


__all__ = ["BlockParser", "ProgramParser", "parse_file", "parse_source", "parse_tokens"]
