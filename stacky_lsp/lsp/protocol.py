"""Shared protocol helpers for the Stacky language server."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Tuple

from lsprotocol.types import CompletionItemKind, Position, Range


class ContextKind(Enum):
    """Suggestion sets the completion classifier can activate."""

    COMMANDS = auto()
    CONSTANTS = auto()
    TYPES = auto()
    LABELS = auto()
    LOCALS = auto()


# Emission order for completion items, with the item kind and category tag.
CONTEXT_ORDER: Tuple[Tuple[ContextKind, CompletionItemKind, str], ...] = (
    (ContextKind.COMMANDS, CompletionItemKind.Keyword, "command"),
    (ContextKind.CONSTANTS, CompletionItemKind.Keyword, "constant"),
    (ContextKind.TYPES, CompletionItemKind.Keyword, "type"),
    (ContextKind.LABELS, CompletionItemKind.Field, "label"),
    (ContextKind.LOCALS, CompletionItemKind.Variable, "variable"),
)


@dataclass(frozen=True, slots=True)
class Harvest:
    """Identifiers found by scanning every line of a document."""

    labels: Tuple[str, ...] = ()
    locals: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """Result of classifying the cursor position for completion."""

    kinds: FrozenSet[ContextKind] = field(default_factory=frozenset)
    labels: Tuple[str, ...] = ()
    locals: Tuple[str, ...] = ()
    prefix: str = ""
    in_comment: bool = False

    def __contains__(self, kind: ContextKind) -> bool:
        return kind in self.kinds

    @property
    def is_empty(self) -> bool:
        return not self.kinds


__all__ = [
    "ContextKind",
    "CONTEXT_ORDER",
    "Harvest",
    "CompletionContext",
    "Position",
    "Range",
]
