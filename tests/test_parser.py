import pytest

from stacky_lsp.errors import ErrorKind, StackyParseError
from stacky_lsp.parser import parse, strip_comment


def _errors(text: str):
    with pytest.raises(StackyParseError) as excinfo:
        parse(text)
    return [(error.kind, error.pos.line, error.pos.col, error.detail) for error in excinfo.value.errors]


def test_valid_program_returns_instructions_and_labels() -> None:
    program = parse(
        "; countdown\n"
        "push 3\n"
        "store n\n"
        "loop:\n"
        "  load n\n"
        "  println   ; show it\n"
        "  load n\n"
        "  push -1\n"
        "  add\n"
        "  store n\n"
        "  load n\n"
        "  push 0\n"
        "  gt\n"
        "  br loop\n"
    )
    assert program.labels == {"loop": 2}
    assert [instruction.name for instruction in program.instructions][:3] == ["push", "store", "load"]
    assert program.instructions[0].argument == "3"
    assert program.instructions[-1].argument == "loop"


@pytest.mark.parametrize(
    "literal",
    ["0", "-12", "+4", "3.5", ".5", "1e9", "2.5E-3", "true", "false", "nil", '"hi there"', '"a \\" b"', '"x;y"'],
)
def test_push_literals(literal: str) -> None:
    program = parse(f"push {literal}")
    assert program.instructions[0].argument == literal


def test_unknown_instruction() -> None:
    assert _errors("frob 1") == [(ErrorKind.UNKNOWN_INSTRUCTION, 1, 1, "frob")]


def test_push_errors() -> None:
    assert _errors("push") == [(ErrorKind.MISSING_ARGUMENT, 1, 1, "push")]
    assert _errors("  push abc") == [(ErrorKind.INVALID_LITERAL, 1, 8, "abc")]
    assert _errors('push "open') == [(ErrorKind.UNTERMINATED_STRING, 1, 6, None)]
    assert _errors('push "a" b') == [(ErrorKind.UNEXPECTED_TOKEN, 1, 10, "b")]
    assert _errors("push 1 2") == [(ErrorKind.UNEXPECTED_TOKEN, 1, 8, "2")]


def test_operand_errors() -> None:
    assert _errors("store") == [(ErrorKind.MISSING_ARGUMENT, 1, 1, "store")]
    assert _errors("load 9x") == [(ErrorKind.UNEXPECTED_TOKEN, 1, 6, "9x")]
    assert _errors("convert vec") == [(ErrorKind.UNKNOWN_TYPE, 1, 9, "vec")]
    assert _errors("add 1") == [(ErrorKind.UNEXPECTED_TOKEN, 1, 5, "1")]
    assert _errors("pop x") == [(ErrorKind.INVALID_LITERAL, 1, 5, "x")]


def test_count_operands_are_optional() -> None:
    program = parse("push 1\npush 2\npop 2\nprint\nprintln 0\n")
    assert [instruction.argument for instruction in program.instructions] == ["1", "2", "2", None, "0"]


def test_label_errors() -> None:
    assert _errors("a:\na:\n") == [(ErrorKind.DUPLICATE_LABEL, 2, 1, "a")]
    assert _errors("9a:") == [(ErrorKind.INVALID_LABEL, 1, 1, "9a")]
    assert _errors("goto nowhere") == [(ErrorKind.UNDEFINED_LABEL, 1, 6, "nowhere")]
    assert _errors("end: add") == [(ErrorKind.UNEXPECTED_TOKEN, 1, 6, "add")]


def test_forward_label_reference_is_valid() -> None:
    program = parse("goto end\npush 1\nend:\n")
    assert program.labels == {"end": 2}


def test_errors_are_collected_across_lines() -> None:
    errors = _errors("frob\npush\ngoto gone\nadd\n")
    assert [kind for kind, *_ in errors] == [
        ErrorKind.UNKNOWN_INSTRUCTION,
        ErrorKind.MISSING_ARGUMENT,
        ErrorKind.UNDEFINED_LABEL,
    ]
    assert [line for _, line, *_ in errors] == [1, 2, 3]


def test_crlf_line_numbers() -> None:
    assert _errors("add\r\nfrob\r\n") == [(ErrorKind.UNKNOWN_INSTRUCTION, 2, 1, "frob")]


def test_strip_comment_respects_strings() -> None:
    assert strip_comment("push 1 ; note") == "push 1 "
    assert strip_comment('push ";" ; note') == 'push ";" '
    assert strip_comment("; all comment") == ""
    assert strip_comment("add") == "add"
