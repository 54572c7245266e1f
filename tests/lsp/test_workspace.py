from __future__ import annotations

from lsprotocol.types import TextDocumentContentChangeEvent_Type2

from stacky_lsp.lsp.workspace import DocumentStore, WorkspaceIndex


def test_store_replaces_text_unconditionally() -> None:
    store = DocumentStore()
    store.update("file:///a", "push 1\n")
    store.update("file:///a", "add\n")
    assert store.current("file:///a") == "add\n"
    assert len(store) == 1


def test_store_returns_empty_text_for_unknown_documents() -> None:
    store = DocumentStore()
    assert store.current("file:///missing") == ""
    assert store.get("file:///missing") is None
    assert "file:///missing" not in store


def test_store_keeps_documents_apart() -> None:
    store = DocumentStore()
    store.update("file:///a", "a:\n")
    store.update("file:///b", "b:\n")
    assert store.current("file:///a") == "a:\n"
    assert store.current("file:///b") == "b:\n"
    assert sorted(store.uris()) == ["file:///a", "file:///b"]
    store.remove("file:///a")
    store.remove("file:///a")
    assert list(store.uris()) == ["file:///b"]


def test_did_change_takes_last_full_text(workspace: WorkspaceIndex, open_document, at) -> None:
    item = open_document("frob\n")
    changes = [
        TextDocumentContentChangeEvent_Type2(text="still broken\n"),
        TextDocumentContentChangeEvent_Type2(text="done:\ngoto done\n"),
    ]
    diagnostics = workspace.did_change(item.uri, changes)
    assert diagnostics == []
    assert workspace.store.current(item.uri) == "done:\ngoto done\n"
    labels = [entry.label for entry in workspace.completion(at(1, 5)).items]
    assert labels == ["done"]


def test_did_change_before_open_creates_document(workspace: WorkspaceIndex) -> None:
    diagnostics = workspace.did_change("file:///late", [TextDocumentContentChangeEvent_Type2(text="frob")])
    assert [d.message for d in diagnostics] == ["unknown instruction: frob"]
    assert workspace.store.current("file:///late") == "frob"


def test_did_change_without_changes_keeps_text(workspace: WorkspaceIndex, open_document) -> None:
    item = open_document("add\n")
    assert workspace.did_change(item.uri, []) == []
    assert workspace.store.current(item.uri) == "add\n"


def test_did_close_forgets_document(workspace: WorkspaceIndex, open_document, at) -> None:
    item = open_document("push 1\n")
    workspace.did_close(item.uri)
    assert workspace.document(item.uri) is None
    assert workspace.diagnostics(item.uri) == []
    assert workspace.hover(at(0, 1)) is None
