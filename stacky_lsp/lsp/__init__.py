"""Language Server Protocol implementation for Stacky."""

from .server import StackyLanguageServer, create_server

__all__ = [
    "StackyLanguageServer",
    "create_server",
]
