"""Document store and request level operations for the Stacky language server."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence

from lsprotocol.types import (
    CompletionItem,
    CompletionList,
    Diagnostic,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    SignatureHelp,
    SignatureInformation,
    TextDocumentContentChangeEvent,
    TextDocumentItem,
    TextDocumentPositionParams,
)

from ..catalog import CONSTANTS, TYPE_NAMES, CommandSpec, command_names, display_signature, lookup
from ..observability import get_logger
from ..parser import parse as default_parse
from .diagnostics import DEFAULT_SOURCE, ParseFn, collect
from .protocol import CONTEXT_ORDER, CompletionContext, ContextKind
from .state import DocumentState

_HOVER_TEMPLATE = "```stacky\n{signature}\n```\n\n{description}\n\n---\n\n{effect}"


class DocumentStore:
    """Latest full text of every open document, keyed by URI."""

    def __init__(self) -> None:
        self._documents: Dict[str, DocumentState] = {}

    def update(self, uri: str, text: str) -> DocumentState:
        document = DocumentState(uri=uri, text=text)
        self._documents[uri] = document
        return document

    def current(self, uri: str) -> str:
        document = self._documents.get(uri)
        return document.text if document is not None else ""

    def get(self, uri: str) -> Optional[DocumentState]:
        return self._documents.get(uri)

    def remove(self, uri: str) -> None:
        self._documents.pop(uri, None)

    def uris(self) -> Iterator[str]:
        return iter(list(self._documents))

    def __contains__(self, uri: object) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)


def hover_markdown(spec: CommandSpec) -> str:
    return _HOVER_TEMPLATE.format(
        signature=display_signature(spec),
        description=spec.description,
        effect=spec.stack_effect,
    )


def _command_documentation(name: str) -> Optional[str]:
    spec = lookup(name)
    return spec.description if spec is not None else None


class WorkspaceIndex:
    """Serves completion, hover, signature help and diagnostics per document."""

    def __init__(self, parse: Optional[ParseFn] = None, *, source: str = DEFAULT_SOURCE) -> None:
        self.logger = get_logger("stacky_lsp.workspace")
        self.store = DocumentStore()
        self.parse: ParseFn = parse or default_parse
        self.source = source

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def did_open(self, item: TextDocumentItem) -> List[Diagnostic]:
        self.store.update(item.uri, item.text)
        self.logger.debug("Opened %s (%d chars)", item.uri, len(item.text))
        return self.diagnostics(item.uri)

    def did_change(
        self,
        uri: str,
        changes: Sequence[TextDocumentContentChangeEvent],
    ) -> List[Diagnostic]:
        if not changes:
            return self.diagnostics(uri)
        # Full sync: each change carries the whole document.
        self.store.update(uri, changes[-1].text)
        self.logger.debug("Replaced text of %s", uri)
        return self.diagnostics(uri)

    def did_close(self, uri: str) -> None:
        self.store.remove(uri)
        self.logger.debug("Closed %s", uri)

    def document(self, uri: str) -> Optional[DocumentState]:
        return self.store.get(uri)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def diagnostics(self, uri: str) -> List[Diagnostic]:
        document = self.document(uri)
        if document is None:
            return []
        diagnostics = collect(document.text, self.parse, source=self.source)
        self.logger.debug("%d diagnostic(s) for %s", len(diagnostics), uri)
        return diagnostics

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def completion(self, params: TextDocumentPositionParams) -> CompletionList:
        document = self.document(params.text_document.uri)
        if document is None:
            return CompletionList(is_incomplete=False, items=[])
        context = document.completion_context(params.position)
        return CompletionList(is_incomplete=False, items=self.completion_items(context))

    def completion_items(self, context: CompletionContext) -> List[CompletionItem]:
        candidates = {
            ContextKind.COMMANDS: command_names(),
            ContextKind.CONSTANTS: CONSTANTS,
            ContextKind.TYPES: TYPE_NAMES,
            ContextKind.LABELS: context.labels,
            ContextKind.LOCALS: context.locals,
        }
        items: List[CompletionItem] = []
        for kind, item_kind, category in CONTEXT_ORDER:
            if kind not in context:
                continue
            for label in candidates[kind]:
                items.append(
                    CompletionItem(
                        label=label,
                        kind=item_kind,
                        detail=category,
                        documentation=_command_documentation(label) if kind is ContextKind.COMMANDS else None,
                    )
                )
        return items

    # ------------------------------------------------------------------
    # Hover
    # ------------------------------------------------------------------
    def hover(self, params: HoverParams) -> Optional[Hover]:
        document = self.document(params.text_document.uri)
        if document is None:
            return None
        token = document.word_at(params.position)
        if not token:
            return None
        spec = lookup(token)
        if spec is None:
            return None
        return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=hover_markdown(spec)))

    # ------------------------------------------------------------------
    # Signature help
    # ------------------------------------------------------------------
    def signature_help(self, params: TextDocumentPositionParams) -> Optional[SignatureHelp]:
        document = self.document(params.text_document.uri)
        if document is None:
            return None
        name = document.signature_target(params.position)
        spec = lookup(name) if name else None
        if spec is None:
            return None
        label = display_signature(spec)
        parameters = [ParameterInformation(label=part) for part in label.split()[1:]]
        signature = SignatureInformation(
            label=label,
            documentation=spec.description,
            parameters=parameters or None,
        )
        return SignatureHelp(signatures=[signature], active_signature=0, active_parameter=0 if parameters else None)


__all__ = ["DocumentStore", "WorkspaceIndex", "hover_markdown"]
