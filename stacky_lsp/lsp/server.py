"""pygls based Language Server entrypoint."""

from __future__ import annotations

from typing import Optional

from lsprotocol.types import InitializedParams, TextDocumentSyncKind
from pygls.server import LanguageServer

from stacky_lsp import __version__

from ..config import ServerConfig
from ..observability import get_logger
from .diagnostics import ParseFn
from .handlers import register_all
from .workspace import WorkspaceIndex


class StackyLanguageServer(LanguageServer):
    """Concrete LanguageServer holding the Stacky document store."""

    def __init__(self, config: Optional[ServerConfig] = None, parse: Optional[ParseFn] = None) -> None:
        super().__init__(
            name="stacky-lsp",
            version=__version__,
            text_document_sync_kind=TextDocumentSyncKind.Full,
        )
        self.config = config or ServerConfig()
        self.logger = get_logger("stacky_lsp.server")
        self.workspace_index = WorkspaceIndex(parse, source=self.config.source)
        register_all(self)
        self._register_lifecycle_handlers()

    def _register_lifecycle_handlers(self) -> None:
        @self.feature("initialized")
        async def _on_initialized(ls: "StackyLanguageServer", params: InitializedParams) -> None:  # noqa: ARG001
            ls.logger.info("Initialized stacky LSP server")


def create_server(config: Optional[ServerConfig] = None, parse: Optional[ParseFn] = None) -> StackyLanguageServer:
    return StackyLanguageServer(config, parse)
