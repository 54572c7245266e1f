"""Translate parser errors into protocol diagnostics."""

from __future__ import annotations

from typing import Callable, List, Sequence

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position, Range

from ..errors import ParseError, StackyParseError
from ..text import split_lines, utf16_length

DEFAULT_SOURCE = "stacky"

ParseFn = Callable[[str], object]


def error_range(lines: Sequence[str], error: ParseError) -> Range:
    """Zero-based range for *error*, spanning from its column to end of line.

    A line of ``0`` means the position is unknown and maps to the document
    origin.  A column of ``0`` means only the line is known and maps to the
    start of that line.  When the line is past the end of the document the
    range covers a single character so it remains renderable.
    """

    if error.pos.line == 0:
        origin = Position(line=0, character=0)
        return Range(start=origin, end=origin)
    line = error.pos.line - 1
    column = error.pos.col - 1 if error.pos.col else 0
    if line < len(lines):
        text = lines[line]
        start = utf16_length(text[:column]) if column <= len(text) else column
        end = utf16_length(text)
    else:
        start = column
        end = start + 1
    return Range(start=Position(line=line, character=start), end=Position(line=line, character=end))


def translate(text: str, errors: Sequence[ParseError], *, source: str = DEFAULT_SOURCE) -> List[Diagnostic]:
    lines = split_lines(text)
    return [
        Diagnostic(
            range=error_range(lines, error),
            message=error.message,
            severity=DiagnosticSeverity.Error,
            source=source,
        )
        for error in errors
    ]


def collect(text: str, parse: ParseFn, *, source: str = DEFAULT_SOURCE) -> List[Diagnostic]:
    """Run *parse* over *text* and return the complete diagnostic set."""

    try:
        parse(text)
    except StackyParseError as exc:
        return translate(text, exc.errors, source=source)
    return []


__all__ = ["DEFAULT_SOURCE", "error_range", "translate", "collect"]
