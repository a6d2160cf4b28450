from __future__ import annotations

"""
A minimal pygls-based Language Server for Alone.

Features:
- Text synchronization and document store
- Diagnostics: lex/parse errors at their source span, calls to unknown functions
- Hover: builtin signatures and locally defined symbols
- Completion: builtins and document definitions
- Document Symbols: from indexer

Buffers are never evaluated; each open document keeps a static index that is
rebuilt on every change.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    TextDocumentSyncKind,
)

from alone import __version__
from alone.builtin.env_builtin import ALIASES, BUILTIN_SIGNATURES, CONSTANTS
from alone.types.value import Builtin
from alone_lsp.indexer import build_index, DocumentIndex

logger = logging.getLogger(__name__)

SOURCE = "alone-ls"
KNOWN_CALLABLES = frozenset(b.value for b in Builtin) | frozenset(ALIASES)


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class AloneLanguageServer(LanguageServer):
    CMD_NAME = "alone-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = AloneLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update_document(uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Full-text sync: the last change carries the whole document
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    _update_document(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update_document(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    logger.debug("indexed %s: %d forms, %d definitions", uri, idx.form_count, len(idx.symbols))
    ls.publish_diagnostics(uri, diagnostics_for(idx))


# --- Diagnostics ---
def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.error is not None:
        err = idx.error
        diags.append(
            Diagnostic(
                range=Range(
                    start=Position(line=err.line, character=err.col),
                    end=Position(line=err.end_line, character=err.end_col),
                ),
                message=err.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    for call in idx.calls:
        if call.name in KNOWN_CALLABLES:
            continue
        # A document definition may bind the name to a builtin, e.g. (define add +)
        if call.name in idx.symbols:
            continue
        diags.append(
            Diagnostic(
                range=Range(
                    start=Position(line=call.line, character=call.col),
                    end=Position(line=call.line, character=call.col + len(call.name)),
                ),
                message=f"Unknown function '{call.name}'",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    return diags


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = _extract_word_at(state.text, params.position)
    contents = hover_text(word, state.index) if word else None
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    if word in CONSTANTS:
        return f"{word} constant = {CONSTANTS[word]}"
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{word} {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION)
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    return completion_items(state.index if state else None)


def completion_items(idx: Optional[DocumentIndex]) -> CompletionList:
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name in CONSTANTS:
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Constant))
    if idx is not None:
        for name in idx.symbols:
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(DocumentSymbol(name=name, kind=SymbolKind.Variable, range=rng, selection_range=rng))
    return symbols


# --- Helpers ---
def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    # expand to word boundaries
    start = pos.character
    while start > 0 and line[start - 1] not in " \t()\n\r;":
        start -= 1
    end = pos.character
    while end < len(line) and line[end] not in " \t()\n\r;":
        end += 1
    return line[start:end] or None


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
