"""Signature help handler."""

from __future__ import annotations

from lsprotocol.types import SignatureHelpOptions, SignatureHelpParams


def register(server) -> None:
    workspace = server.workspace_index
    options = SignatureHelpOptions(trigger_characters=list(server.config.trigger_characters))

    @server.feature("textDocument/signatureHelp", options)
    async def _signature_help(ls, params: SignatureHelpParams):
        return workspace.signature_help(params)
