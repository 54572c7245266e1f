"""Centralised logging helpers for the Stacky language server.

Standard output carries the protocol stream, so log records only ever go to
standard error or to a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Union

ROOT_LOGGER = "stacky_lsp"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def resolve_level(level: Optional[str]) -> int:
    if not level:
        return logging.INFO
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Install a single handler on the package logger and return it."""

    logger = get_logger(ROOT_LOGGER)
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(str(log_file), encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return logger


__all__ = ["ROOT_LOGGER", "get_logger", "resolve_level", "configure_logging"]
