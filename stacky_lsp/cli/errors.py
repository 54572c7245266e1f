"""
Error handling for the stacky-lsp command line.

Provides a small exception hierarchy with error codes and hints, and the
top-level handler that formats an error and exits.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """Configuration file could not be read or is invalid."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIServerError(CLIError):
    """
    Language server failures.

    Raised when the server cannot start or stops with an unexpected error.
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_SERVER_ERROR')
        super().__init__(message, **kwargs)


def format_cli_error(exc: BaseException, *, verbose: bool = False) -> str:
    """
    Format exception for CLI display with context and hints.

    Examples:
        >>> print(format_cli_error(CLIConfigError("Bad config", hint="Check stacky.toml")))
        Error [CLI_CONFIG_ERROR]: Bad config
        Hint: Check stacky.toml
    """
    lines = []
    if isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        lines.append(f"Error: {exc.__class__.__name__}: {exc}")
    if verbose:
        trace = traceback.format_exc().strip()
        if trace and trace != "NoneType: None":
            lines.append("\nTraceback:")
            lines.append(trace if len(trace) <= _CLI_TRACE_LIMIT else f"{trace[:_CLI_TRACE_LIMIT - 3]}...")
    return "\n".join(lines)


def _env_flag(name: str) -> bool:
    val = os.getenv(name)
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Respect an explicit flag and the STACKY_LSP_VERBOSE environment variable."""
    return verbose_flag or _env_flag("STACKY_LSP_VERBOSE")


def handle_cli_exception(exc: BaseException, *, verbose: bool = False, exit_code: int = 1) -> None:
    """
    Print a formatted error to stderr and exit.

    Note:
        This function calls sys.exit() and does not return.
    """
    print(format_cli_error(exc, verbose=cli_verbose_enabled(verbose)), file=sys.stderr)
    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIServerError",
    "format_cli_error",
    "cli_verbose_enabled",
    "handle_cli_exception",
]
