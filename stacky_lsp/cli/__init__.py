"""
stacky-lsp command line entry point.

Resolves configuration from ``stacky.toml``, environment variables and
flags, configures logging, then serves the language server over stdio.
"""

import argparse
import os
from pathlib import Path
from typing import List, Optional

from stacky_lsp import __version__
from stacky_lsp.config import ServerConfig, load_server_config
from stacky_lsp.errors import ConfigError
from stacky_lsp.observability import configure_logging, get_logger

from .errors import CLIConfigError, CLIServerError, handle_cli_exception


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stacky-lsp",
        description="Language server for the Stacky scripting language (stdio transport)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a stacky.toml configuration file",
    )
    parser.add_argument(
        "--workspace",
        default=None,
        help="Workspace root directory (defaults to current working directory)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Logging level (or set STACKY_LSP_LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of stderr (or set STACKY_LSP_LOG_FILE)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print full tracebacks on failure (or set STACKY_LSP_VERBOSE=1)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> ServerConfig:
    root = Path(args.workspace).resolve() if args.workspace else Path.cwd()
    explicit = Path(args.config).resolve() if args.config else None
    try:
        config = load_server_config(root, explicit)
    except ConfigError as exc:
        raise CLIConfigError(exc.message, hint="Check the [lsp] table in stacky.toml") from exc
    return config.with_overrides(log_level=args.log_level, log_file=args.log_file)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
        configure_logging(config.log_level, config.log_file)

        from stacky_lsp.lsp.server import create_server

        server = create_server(config)
        get_logger("stacky_lsp.cli").info("Starting stacky LSP server (pid=%s)", os.getpid())
        try:
            server.start_io()
        except KeyboardInterrupt:
            get_logger("stacky_lsp.cli").info("Language server interrupted by user.")
        except Exception as exc:
            raise CLIServerError(f"Language server stopped unexpectedly: {exc}") from exc
        get_logger("stacky_lsp.cli").info("Shutting down stacky LSP server")
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)


__all__ = ["build_parser", "resolve_config", "main"]
