"""Tests for the program and instruction structural parser."""

from __future__ import annotations

import pytest

from blparse.language import grammar
from blparse.language.ast import Block, Call, Condition, If, Program, While
from blparse.language.errors import BLParseError
from blparse.language.tokens import END_OF_INPUT, TokenStream
from blparse.language.vocabulary import PRIMITIVES, Vocabulary


def _parse(text: str) -> Program:
    return grammar.parse_tokens(text.split())


# ---------------------------------------------------------------------------
# Valid programs


def test_empty_program() -> None:
    program = _parse("PROGRAM p IS BEGIN END p")
    assert program == Program(name="p", context={}, body=Block())


def test_single_instruction_body_is_parsed() -> None:
    program = _parse("PROGRAM p IS INSTRUCTION foo IS skip END foo BEGIN END p")
    assert program.name == "p"
    assert program.context == {"foo": Block((Call("skip"),))}
    assert program.body == Block()


def test_instructions_and_main_body() -> None:
    program = _parse(
        "PROGRAM walker IS "
        "INSTRUCTION step IS IF next-is-empty THEN move END IF END step "
        "INSTRUCTION spin IS turnleft turnleft END spin "
        "BEGIN WHILE true DO step spin END WHILE END walker"
    )
    assert set(program.context) == {"step", "spin"}
    assert program.context["step"] == Block((If(Condition.NEXT_IS_EMPTY, Block((Call("move"),))),))
    assert program.body == Block(
        (While(Condition.TRUE, Block((Call("step"), Call("spin")))),)
    )


def test_stream_is_fully_consumed() -> None:
    tokens = TokenStream.of("PROGRAM p IS INSTRUCTION foo IS skip END foo BEGIN foo END p".split())
    grammar.parse_tokens(tokens)
    assert len(tokens) == 0


def test_parse_is_deterministic() -> None:
    original = TokenStream.of(
        "PROGRAM p IS INSTRUCTION a IS move END a INSTRUCTION b IS a a END b BEGIN b END p".split()
    )
    first = grammar.parse_tokens(original.copy())
    second = grammar.parse_tokens(original.copy())
    assert first == second


def test_plain_iterable_gets_end_marker() -> None:
    with_marker = grammar.parse_tokens(["PROGRAM", "p", "IS", "BEGIN", "END", "p", END_OF_INPUT])
    without_marker = grammar.parse_tokens(["PROGRAM", "p", "IS", "BEGIN", "END", "p"])
    assert with_marker == without_marker


def test_parse_source_tokenizes_first() -> None:
    program = grammar.parse_source(
        """
        PROGRAM Demo IS
          INSTRUCTION turn-around IS
            turnleft
            turnleft
          END turn-around
        BEGIN
          turn-around
        END Demo
        """
    )
    assert program.context["turn-around"] == Block((Call("turnleft"), Call("turnleft")))
    assert program.body == Block((Call("turn-around"),))


def test_parse_file(tmp_path) -> None:
    path = tmp_path / "prog.bl"
    path.write_text("PROGRAM p IS BEGIN move END p\n", encoding="utf-8")
    program = grammar.parse_file(path)
    assert program.body == Block((Call("move"),))


def test_program_replace_swaps_all_fields() -> None:
    target = Program()
    parsed = _parse("PROGRAM p IS INSTRUCTION foo IS skip END foo BEGIN foo END p")
    target.replace(parsed.name, parsed.context, parsed.body)
    assert target == parsed


# ---------------------------------------------------------------------------
# Envelope errors


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ("PROGRAMME p IS BEGIN END p", "PROGRAM expected"),
        ("PROGRAM p BEGIN END p", "'IS' expected after program name"),
        ("PROGRAM p IS END p", "BEGIN expected"),
        ("PROGRAM p IS BEGIN move p", "Program missing END"),
        ("PROGRAM p IS INSTRUCTION foo skip END foo BEGIN END p", "'IS' expected"),
    ],
)
def test_envelope_errors(text: str, fragment: str) -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(text)
    assert fragment in exc.value.message


def test_extra_text_after_end_marker() -> None:
    tokens = TokenStream(["PROGRAM", "p", "IS", "BEGIN", "END", "p", END_OF_INPUT, "move"])
    with pytest.raises(BLParseError) as exc:
        grammar.parse_tokens(tokens)
    assert "Extra text after program end" in exc.value.message


# ---------------------------------------------------------------------------
# Naming errors


@pytest.mark.parametrize("primitive", PRIMITIVES)
def test_instruction_named_after_primitive(primitive: str) -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(f"PROGRAM p IS INSTRUCTION {primitive} IS skip END {primitive} BEGIN END p")
    assert exc.value.message == f"Instruction name same as primitive: {primitive}"


@pytest.mark.parametrize("name", ["WHILE", "next-is-wall", "9lives", "-x"])
def test_instruction_name_must_be_identifier(name: str) -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(f"PROGRAM p IS INSTRUCTION {name} IS skip END {name} BEGIN END p")
    assert exc.value.message == f"Instruction name is not a valid identifier: {name}"


@pytest.mark.parametrize("name", ["IS", "random", "2fast"])
def test_program_name_must_be_identifier(name: str) -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(f"PROGRAM {name} IS BEGIN END {name}")
    assert exc.value.message == f"Program name is not a valid identifier: {name}"


# ---------------------------------------------------------------------------
# Consistency errors


def test_duplicate_instruction_names_the_duplicate() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(
            "PROGRAM p IS INSTRUCTION foo IS skip END foo "
            "INSTRUCTION foo IS skip END foo BEGIN END p"
        )
    assert exc.value.message == "Non-unique instruction name: foo"


def test_program_name_mismatch() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse("PROGRAM p IS BEGIN END q")
    assert exc.value.message.startswith("Program name does not match at beginning and end")


def test_instruction_name_mismatch() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse("PROGRAM p IS INSTRUCTION foo IS skip END bar BEGIN END p")
    assert exc.value.message == "Instruction name does not match at close: foo, found 'bar'"


def test_unclosed_instruction() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse("PROGRAM p IS INSTRUCTION foo IS skip skip")
    assert "foo is not closed" in exc.value.message


def test_instruction_missing_end_before_closing_name() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse("PROGRAM p IS INSTRUCTION foo IS skip foo BEGIN END p")
    assert exc.value.message == "Instruction foo missing END before closing name"


def test_nested_instruction_is_rejected() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(
            "PROGRAM p IS INSTRUCTION outer IS INSTRUCTION inner IS move END inner "
            "END outer BEGIN END p"
        )
    assert "cannot be nested" in exc.value.message


def test_body_errors_propagate() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse("PROGRAM p IS BEGIN IF wall THEN move END IF END p")
    assert "Expected a condition" in exc.value.message


# ---------------------------------------------------------------------------
# Check ordering


def test_primitive_check_precedes_mismatch() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse("PROGRAM p IS INSTRUCTION move IS skip END bar BEGIN END p")
    assert "same as primitive" in exc.value.message


def test_uniqueness_precedes_mismatch() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(
            "PROGRAM p IS INSTRUCTION foo IS skip END foo "
            "INSTRUCTION foo IS skip END bar BEGIN END p"
        )
    assert exc.value.message == "Non-unique instruction name: foo"


def test_uniqueness_precedes_body_errors() -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(
            "PROGRAM p IS INSTRUCTION foo IS skip END foo "
            "INSTRUCTION foo IS THEN END foo BEGIN END p"
        )
    assert "Non-unique" in exc.value.message


# ---------------------------------------------------------------------------
# Collaborators


def test_block_parser_receives_terminated_buffers() -> None:
    seen: list[list[str]] = []

    def fake_block_parser(tokens: TokenStream) -> Block:
        seen.append(list(tokens))
        return Block()

    parser = grammar.ProgramParser(block_parser=fake_block_parser)
    parser.parse(
        TokenStream.of(
            "PROGRAM p IS INSTRUCTION foo IS WHILE true DO move END WHILE END foo "
            "BEGIN foo skip END p".split()
        )
    )
    assert seen == [
        ["WHILE", "true", "DO", "move", "END", "WHILE", END_OF_INPUT],
        ["foo", "skip", END_OF_INPUT],
    ]


def test_parse_instruction_returns_name_and_body() -> None:
    tokens = TokenStream.of("INSTRUCTION foo IS move END foo BEGIN".split())
    name, body = grammar.ProgramParser().parse_instruction(tokens)
    assert name == "foo"
    assert body == Block((Call("move"),))
    assert list(tokens) == ["BEGIN", END_OF_INPUT]


def test_parse_instruction_requires_marker() -> None:
    with pytest.raises(AssertionError):
        grammar.ProgramParser().parse_instruction(TokenStream.of(["foo"]))


def test_vocabulary_is_injectable() -> None:
    vocabulary = Vocabulary(primitives=("move",))
    program = grammar.parse_tokens(
        "PROGRAM p IS INSTRUCTION skip IS move END skip BEGIN skip END p".split(),
        vocabulary=vocabulary,
    )
    assert program.context == {"skip": Block((Call("move"),))}


def test_error_reports_source_position() -> None:
    with pytest.raises(BLParseError) as exc:
        grammar.parse_source("PROGRAM p IS\nBEGIN\nEND q\n", filename="demo.bl")
    assert exc.value.line == 3
    assert exc.value.column == 5
    assert str(exc.value).startswith("demo.bl:3:5: ")


def test_injected_condition_outside_enum_is_a_parse_error() -> None:
    with pytest.raises(BLParseError) as exc:
        grammar.parse_tokens(
            "PROGRAM p IS BEGIN IF sunny THEN move END IF END p".split(),
            vocabulary=Vocabulary(conditions=("sunny",)),
        )
    assert exc.value.message == "Unknown condition 'sunny'"


def test_stream_without_end_marker() -> None:
    tokens = TokenStream(["PROGRAM", "p", "IS", "BEGIN", "END", "p"])
    with pytest.raises(BLParseError) as exc:
        grammar.parse_tokens(tokens)
    assert exc.value.message == "Token stream is missing its end-of-input marker"


@pytest.mark.parametrize(
    "body",
    ["IF true THEN foo END IF END", "foo END", "move foo END"],
)
def test_self_recursive_instruction(body: str) -> None:
    with pytest.raises(BLParseError) as exc:
        _parse(f"PROGRAM p IS INSTRUCTION foo IS {body} foo BEGIN END p")
    assert exc.value.message == "Instruction foo calls itself before its closing name"
