from __future__ import annotations

"""
A minimal pygls-based Language Server for Forsp.

Features:
- Text synchronization (handled by pygls) and a per-document index
- Diagnostics: reader errors, unmatched parens
- Hover: primitive stack effects and `$name` bindings
- Completion: primitives and bound names
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from forsp.config import configure_logging
from forsp_lsp.indexer import build_index, word_at, BUILTIN_SIGNATURES, DocumentIndex


class ForspLanguageServer(LanguageServer):
    CMD_NAME = "forsp-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.indexes: Dict[str, DocumentIndex] = {}

    def reindex(self, uri: str) -> DocumentIndex:
        doc = self.workspace.get_text_document(uri)
        idx = build_index(doc.source)
        self.indexes[uri] = idx
        return idx


server = ForspLanguageServer()


# --- Text sync ---
@server.feature(types.TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: ForspLanguageServer, params: types.DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _publish_diagnostics(ls, uri, ls.reindex(uri))


@server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: ForspLanguageServer, params: types.DidChangeTextDocumentParams):
    uri = params.text_document.uri
    _publish_diagnostics(ls, uri, ls.reindex(uri))


@server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: ForspLanguageServer, params: types.DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.indexes.pop(uri, None)
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=uri, diagnostics=[])
    )


# --- Diagnostics ---
def _mk_range(line: int, col: int) -> types.Range:
    return types.Range(
        start=types.Position(line=line, character=col),
        end=types.Position(line=line, character=col + 1),
    )


def diagnostics_for(idx: DocumentIndex) -> List[types.Diagnostic]:
    diags: List[types.Diagnostic] = []

    for err in idx.errors:
        diags.append(
            types.Diagnostic(
                range=_mk_range(err.line, err.col),
                message=err.message,
                severity=types.DiagnosticSeverity.Error,
                source="forsp-ls",
            )
        )

    if idx.stray_close is not None:
        line, col = idx.stray_close
        diags.append(
            types.Diagnostic(
                range=_mk_range(line, col),
                message="Unmatched ')'",
                severity=types.DiagnosticSeverity.Warning,
                source="forsp-ls",
            )
        )
    elif idx.paren_balance > 0:
        diags.append(
            types.Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=types.DiagnosticSeverity.Warning,
                source="forsp-ls",
            )
        )
    return diags


def _publish_diagnostics(ls: ForspLanguageServer, uri: str, idx: DocumentIndex):
    ls.text_document_publish_diagnostics(
        types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics_for(idx))
    )


def _index_for(ls: ForspLanguageServer, uri: str) -> DocumentIndex:
    idx = ls.indexes.get(uri)
    return idx if idx is not None else ls.reindex(uri)


# --- Hover ---
@server.feature(types.TEXT_DOCUMENT_HOVER)
def on_hover(ls: ForspLanguageServer, params: types.HoverParams) -> Optional[types.Hover]:
    uri = params.text_document.uri
    doc = ls.workspace.get_text_document(uri)
    word = word_at(doc.source, params.position.line, params.position.character)
    if not word:
        return None

    idx = _index_for(ls, uri)
    if word in BUILTIN_SIGNATURES:
        contents = BUILTIN_SIGNATURES[word]
    elif word in idx.symbols:
        sdef = idx.symbols[word]
        contents = f"{word} (bound at {sdef.line+1}:{sdef.col+1})"
    else:
        return None
    return types.Hover(
        contents=types.MarkupContent(kind=types.MarkupKind.PlainText, value=contents)
    )


# --- Completion ---
@server.feature(
    types.TEXT_DOCUMENT_COMPLETION,
    types.CompletionOptions(trigger_characters=["^", "$", "'"]),
)
def on_completion(ls: ForspLanguageServer, params: types.CompletionParams) -> types.CompletionList:
    idx = _index_for(ls, params.text_document.uri)
    items: List[types.CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(types.CompletionItem(label=name, kind=types.CompletionItemKind.Function, detail=sig))
    for name in idx.symbols:
        if name not in BUILTIN_SIGNATURES:
            items.append(types.CompletionItem(label=name, kind=types.CompletionItemKind.Variable))
    return types.CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@server.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(
    ls: ForspLanguageServer, params: types.DocumentSymbolParams
) -> List[types.DocumentSymbol]:
    idx = _index_for(ls, params.text_document.uri)
    symbols: List[types.DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = types.Range(
            start=types.Position(line=sdef.line, character=sdef.col),
            end=types.Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            types.DocumentSymbol(
                name=name,
                kind=types.SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


def main():
    configure_logging()
    # Run the language server over stdio
    server.start_io()


if __name__ == "__main__":
    main()
