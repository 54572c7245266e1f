"""Completion handler."""

from __future__ import annotations

from lsprotocol.types import CompletionOptions, CompletionParams


def register(server) -> None:
    workspace = server.workspace_index
    options = CompletionOptions(
        trigger_characters=list(server.config.trigger_characters),
        resolve_provider=False,
    )

    @server.feature("textDocument/completion", options)
    async def _completion(ls, params: CompletionParams):
        return workspace.completion(params)
