"""Minimal LSP server for rix sources: lexical diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from rixlex import __version__
from rixlex.lexer import Lexer
from rixlex.tokens import Pos

server = LanguageServer(
    "rixlex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri

    lexer = Lexer(doc.source, filename)
    for _ in lexer:
        pass

    lines = doc.source.split("\n")
    diagnostics: list[Diagnostic] = []
    for diag in lexer.diagnostics:
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=_position(lines, diag.span.start),
                    end=_position(lines, diag.span.end),
                ),
                message=diag.message,
                severity=DiagnosticSeverity.Error,
                source="rixlex",
                code=diag.kind.name.lower(),
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _position(lines: list[str], pos: Pos) -> Position:
    """Convert a codepoint position to LSP line and UTF-16 character offsets."""
    line = pos.line - 1
    prefix = lines[line][: pos.column - 1] if line < len(lines) else ""
    units = len(prefix.encode("utf-16-le", "surrogatepass")) // 2
    return Position(line=line, character=units)


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
