"""Unified error model for the Stacky language server."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class SourcePosition:
    """1-based location reported by the parser; ``0`` means unknown."""

    line: int = 0
    col: int = 0

    def describe(self) -> str:
        if self.line and self.col:
            return f"{self.line}:{self.col}"
        if self.line:
            return str(self.line)
        return "unknown location"


class ErrorKind(Enum):
    """Categories of source errors; the value is the user facing description."""

    UNEXPECTED_TOKEN = "unexpected token"
    UNKNOWN_INSTRUCTION = "unknown instruction"
    MISSING_ARGUMENT = "missing argument"
    INVALID_LITERAL = "invalid literal"
    UNTERMINATED_STRING = "unterminated string"
    INVALID_LABEL = "invalid label"
    DUPLICATE_LABEL = "duplicate label"
    UNDEFINED_LABEL = "undefined label"
    UNKNOWN_TYPE = "unknown type"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParseError:
    kind: ErrorKind
    pos: SourcePosition
    detail: Optional[str] = None

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.kind}: {self.detail}"
        return str(self.kind)


class StackyError(Exception):
    """Base class for all errors raised by this package."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(self, message: str, *, code: Optional[str] = None, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        if self.code:
            components[-1] = f"{components[-1]} ({self.code})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class StackyParseError(StackyError):
    """Raised by the parser with every source error found in a document."""

    code = "syntax_error"

    def __init__(self, errors: Iterable[ParseError]) -> None:
        self.errors: List[ParseError] = list(errors)
        summary = "; ".join(f"{error.pos.describe()} {error.message}" for error in self.errors)
        super().__init__(summary or "invalid program")


class ConfigError(StackyError):
    """Raised when a configuration file cannot be read or is malformed."""

    code = "config_error"


__all__ = [
    "SourcePosition",
    "ErrorKind",
    "ParseError",
    "StackyError",
    "StackyParseError",
    "ConfigError",
]
