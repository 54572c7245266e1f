"""Document level analysis for the Stacky language server.

Everything here is a shallow scan over the current text: nothing is
tokenized or parsed.  Context classification and identifier harvesting are
approximations meant for fast editor feedback; validation proper lives in
:mod:`stacky_lsp.parser`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from lsprotocol.types import Position

from ..text import split_lines, utf16_to_index
from .protocol import CompletionContext, ContextKind, Harvest

COMMENT_MARKER = ";"

_WORD_RUN = re.compile(r"\w+")

_LABEL_OPERANDS = frozenset({"goto", "br"})
_LOCAL_OPERANDS = frozenset({"load", "store"})


def _word_runs(segment: str) -> List[Tuple[int, int]]:
    """Spans of alphanumeric/underscore characters within *segment*."""

    return [match.span() for match in _WORD_RUN.finditer(segment)]


def _run_at(segment: str, offset: int) -> str:
    runs = _word_runs(segment)
    if not runs:
        return ""
    for start, end in runs:
        if start <= offset < end:
            return segment[start:end]
    for start, end in runs:
        if start <= offset <= end:
            return segment[start:end]
    start, end = runs[0]
    return segment[start:end]


@dataclass
class DocumentState:
    """Latest full text of one open document plus derived line table."""

    uri: str
    text: str
    lines: List[str] = field(init=False)

    def __post_init__(self) -> None:
        self.lines = split_lines(self.text)

    # ------------------------------------------------------------------
    # Token resolution
    # ------------------------------------------------------------------
    def word_at(self, position: Position) -> str:
        """Return the identifier-like token under or touching *position*.

        The whitespace delimited word around the cursor is reduced to the run
        of word characters touching the cursor.  When the cursor sits on
        whitespace or a pure punctuation run, the first word on the line that
        contains word characters is used instead.  An empty string means no
        token.
        """

        line = self._line(position.line)
        if line is None:
            return ""
        column = utf16_to_index(line, position.character)
        start = column
        while start > 0 and not line[start - 1].isspace():
            start -= 1
        end = column
        while end < len(line) and not line[end].isspace():
            end += 1
        token = _run_at(line[start:end], column - start)
        if token:
            return token
        for word in line.split():
            token = _run_at(word, 0)
            if token:
                return token
        return ""

    # ------------------------------------------------------------------
    # Completion context
    # ------------------------------------------------------------------
    def line_prefix(self, position: Position) -> Optional[str]:
        line = self._line(position.line)
        if line is None:
            return None
        return line[: utf16_to_index(line, position.character)]

    def completion_context(self, position: Position) -> CompletionContext:
        prefix = self.line_prefix(position)
        if prefix is None:
            return CompletionContext()
        if COMMENT_MARKER in prefix:
            return CompletionContext(prefix=prefix, in_comment=True)

        words = prefix.split()
        kinds: Set[ContextKind] = set()
        if not words or (len(words) <= 1 and not prefix.endswith(" ")):
            kinds.add(ContextKind.COMMANDS)
        previous = words[-1] if words else None
        if previous == "push":
            kinds.add(ContextKind.CONSTANTS)
        if words and words[0] == "convert":
            kinds.add(ContextKind.TYPES)
        if previous in _LABEL_OPERANDS:
            kinds.add(ContextKind.LABELS)
        if previous in _LOCAL_OPERANDS:
            kinds.add(ContextKind.LOCALS)

        harvest = self.harvest()
        return CompletionContext(
            kinds=frozenset(kinds),
            labels=harvest.labels,
            locals=harvest.locals,
            prefix=prefix,
        )

    def harvest(self) -> Harvest:
        """Collect label definitions and stored variable names in document order.

        Recomputed from the current text on every call.
        """

        labels: List[str] = []
        locals_: List[str] = []
        for raw in self.lines:
            stripped = raw.strip()
            if stripped.endswith(":"):
                labels.append(stripped.rstrip(":"))
            if stripped.startswith("store "):
                operands = stripped[len("store ") :].split()
                if operands:
                    locals_.append(operands[0])
        return Harvest(labels=tuple(labels), locals=tuple(locals_))

    # ------------------------------------------------------------------
    # Signature help
    # ------------------------------------------------------------------
    def signature_target(self, position: Position) -> Optional[str]:
        """Command name whose operands the cursor is currently typing."""

        prefix = self.line_prefix(position)
        if not prefix or COMMENT_MARKER in prefix:
            return None
        words = prefix.split()
        if not words:
            return None
        if len(words) == 1 and not prefix[-1].isspace():
            return None
        return words[0]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _line(self, index: int) -> Optional[str]:
        if index < 0 or index >= len(self.lines):
            return None
        return self.lines[index]


__all__ = ["DocumentState", "COMMENT_MARKER"]
