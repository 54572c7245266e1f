"""Handler registration helpers."""

from __future__ import annotations

from . import completion, diagnostics, hover, signature


def register_all(server) -> None:
    diagnostics.register(server)
    completion.register(server)
    hover.register(server)
    signature.register(server)


__all__ = ["register_all"]
