from __future__ import annotations

from typing import Callable

import pytest
from lsprotocol.types import Position, TextDocumentIdentifier, TextDocumentItem, TextDocumentPositionParams

from stacky_lsp.lsp.workspace import WorkspaceIndex

DEFAULT_URI = "file:///workspace/main.stacky"


@pytest.fixture()
def workspace() -> WorkspaceIndex:
    return WorkspaceIndex()


@pytest.fixture()
def open_document(workspace: WorkspaceIndex) -> Callable[..., TextDocumentItem]:
    def _open(text: str, *, uri: str = DEFAULT_URI, version: int = 1) -> TextDocumentItem:
        item = TextDocumentItem(uri=uri, language_id="stacky", version=version, text=text)
        workspace.did_open(item)
        return item

    return _open


@pytest.fixture()
def at() -> Callable[..., TextDocumentPositionParams]:
    def _at(line: int, character: int, *, uri: str = DEFAULT_URI) -> TextDocumentPositionParams:
        return TextDocumentPositionParams(
            text_document=TextDocumentIdentifier(uri=uri),
            position=Position(line=line, character=character),
        )

    return _at
