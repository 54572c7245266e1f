"""Line oriented validator for Stacky programs.

The language server only needs to know whether a document is valid and, if
not, where the problems are.  This module provides a small reference parser
with that contract: :func:`parse` returns a :class:`Program` for a valid
document and raises :class:`~stacky_lsp.errors.StackyParseError` carrying every
error found otherwise.  Any callable with the same contract can be handed to
:class:`~stacky_lsp.lsp.workspace.WorkspaceIndex` instead.

Grammar, one statement per line::

    label:                 ; defines a jump target
    push <literal>         ; int, float, "string", true, false, nil
    goto|br <label>
    load|store <name>
    convert <type>
    pop|print|println [n]
    <command>              ; any other catalog command, no arguments

``;`` starts a comment anywhere outside a string literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .catalog import TYPE_NAMES, lookup
from .errors import ErrorKind, ParseError, SourcePosition, StackyParseError
from .text import split_lines

_WORD = re.compile(r"\S+")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*$")
_INTEGER = re.compile(r"[+-]?\d+$")
_FLOAT = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+(?=[eE]))(?:[eE][+-]?\d+)?$")
_COUNT = re.compile(r"\d+$")

_KEYWORD_LITERALS = frozenset({"true", "false", "nil"})
_LABEL_OPERANDS = frozenset({"goto", "br"})
_VARIABLE_OPERANDS = frozenset({"load", "store"})
_COUNT_OPERANDS = frozenset({"pop", "print", "println"})

Word = Tuple[str, int]


@dataclass(frozen=True)
class Instruction:
    name: str
    argument: Optional[str]
    line: int


@dataclass
class Program:
    """Validated program: instructions in order plus label targets."""

    instructions: List[Instruction] = field(default_factory=list)
    labels: Dict[str, int] = field(default_factory=dict)


def strip_comment(line: str) -> str:
    """Return *line* without its trailing ``;`` comment."""

    in_string = False
    index = 0
    while index < len(line):
        char = line[index]
        if in_string and char == "\\":
            index += 2
            continue
        if char == '"':
            in_string = not in_string
        elif char == ";" and not in_string:
            return line[:index]
        index += 1
    return line


def _string_end(text: str) -> Optional[int]:
    """Index just past the closing quote of the literal opening *text*."""

    index = 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == '"':
            return index + 1
        index += 1
    return None


class Parser:
    """Validate a Stacky document, collecting every error before raising."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.errors: List[ParseError] = []
        self.program = Program()
        self._label_refs: List[Tuple[str, SourcePosition]] = []

    def parse(self) -> Program:
        for number, raw in enumerate(split_lines(self.text), start=1):
            code = strip_comment(raw)
            words = [(match.group(), match.start() + 1) for match in _WORD.finditer(code)]
            if not words:
                continue
            self._parse_statement(number, code, words)
        for name, pos in self._label_refs:
            if name not in self.program.labels:
                self._error(ErrorKind.UNDEFINED_LABEL, pos.line, pos.col, name)
        if self.errors:
            raise StackyParseError(self.errors)
        return self.program

    def _error(self, kind: ErrorKind, line: int, col: int, detail: Optional[str] = None) -> None:
        self.errors.append(ParseError(kind=kind, pos=SourcePosition(line, col), detail=detail))

    def _parse_statement(self, line: int, code: str, words: List[Word]) -> None:
        head, col = words[0]
        if head.endswith(":"):
            self._define_label(line, head[:-1], col)
            if len(words) > 1:
                self._error(ErrorKind.UNEXPECTED_TOKEN, line, words[1][1], words[1][0])
            return
        if lookup(head) is None:
            self._error(ErrorKind.UNKNOWN_INSTRUCTION, line, col, head)
            return
        args = words[1:]
        if head == "push":
            argument = self._push_operand(line, code, col, args)
        elif head in _LABEL_OPERANDS:
            argument = self._single_operand(line, head, col, args, _IDENTIFIER, ErrorKind.INVALID_LABEL)
            if argument is not None:
                self._label_refs.append((argument, SourcePosition(line, args[0][1])))
        elif head in _VARIABLE_OPERANDS:
            argument = self._single_operand(line, head, col, args, _IDENTIFIER, ErrorKind.UNEXPECTED_TOKEN)
        elif head == "convert":
            argument = self._single_operand(line, head, col, args, None, ErrorKind.UNKNOWN_TYPE)
        elif head in _COUNT_OPERANDS and args:
            argument = self._single_operand(line, head, col, args, _COUNT, ErrorKind.INVALID_LITERAL)
        else:
            argument = None
            if args:
                self._error(ErrorKind.UNEXPECTED_TOKEN, line, args[0][1], args[0][0])
                return
        self.program.instructions.append(Instruction(name=head, argument=argument, line=line))

    def _define_label(self, line: int, name: str, col: int) -> None:
        if not _IDENTIFIER.match(name):
            self._error(ErrorKind.INVALID_LABEL, line, col, name or ":")
        elif name in self.program.labels:
            self._error(ErrorKind.DUPLICATE_LABEL, line, col, name)
        else:
            self.program.labels[name] = len(self.program.instructions)

    def _single_operand(
        self,
        line: int,
        head: str,
        col: int,
        args: List[Word],
        pattern: Optional[re.Pattern],
        kind: ErrorKind,
    ) -> Optional[str]:
        if not args:
            self._error(ErrorKind.MISSING_ARGUMENT, line, col, head)
            return None
        if len(args) > 1:
            self._error(ErrorKind.UNEXPECTED_TOKEN, line, args[1][1], args[1][0])
        value, value_col = args[0]
        valid = value in TYPE_NAMES if pattern is None else bool(pattern.match(value))
        if not valid:
            self._error(kind, line, value_col, value)
            return None
        return value

    def _push_operand(self, line: int, code: str, col: int, args: List[Word]) -> Optional[str]:
        if not args:
            self._error(ErrorKind.MISSING_ARGUMENT, line, col, "push")
            return None
        start = args[0][1] - 1
        literal = code[start:].rstrip()
        if literal.startswith('"'):
            end = _string_end(literal)
            if end is None:
                self._error(ErrorKind.UNTERMINATED_STRING, line, start + 1)
                return None
            rest = literal[end:]
            if rest.strip():
                offset = len(rest) - len(rest.lstrip())
                self._error(ErrorKind.UNEXPECTED_TOKEN, line, start + end + offset + 1, rest.split()[0])
            return literal[:end]
        value = args[0][0]
        if len(args) > 1:
            self._error(ErrorKind.UNEXPECTED_TOKEN, line, args[1][1], args[1][0])
        if value in _KEYWORD_LITERALS or _INTEGER.match(value) or _FLOAT.match(value):
            return value
        self._error(ErrorKind.INVALID_LITERAL, line, args[0][1], value)
        return None


def parse(text: str) -> Program:
    """Parse *text*, raising :class:`StackyParseError` on invalid programs."""

    return Parser(text).parse()


__all__ = ["Instruction", "Parser", "Program", "parse", "strip_comment"]
