"""
ctlang Language Server entry point.

This server provides basic language features for ctlang source files using
`pygls`. It reuses the ctlang parser, without evaluating anything, to report
syntax errors and to build a simple symbol index supporting definition
lookup, hover information, and document symbols.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from ctlang.exceptions import CtException, ParserException
from ctlang.nodes import Binary, Declaration, FunctionDef, StructDecl
from ctlang.operations import Op
from ctlang.parser import Parser


@dataclass
class CtSymbol:
    """Represents a top-level symbol in a ctlang file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str


def _symbol_for(uri: str, node) -> Optional[CtSymbol]:
    """Return the symbol a top-level statement declares, if any."""
    line = max(node.line - 1, 0)
    match node:
        case FunctionDef(name=name, params=params):
            return CtSymbol(name, SymbolKind.Function, uri, line, f"let {name}({', '.join(params)})")
        case Binary(operator=Op.ASSIGN, left=Declaration(name=name)):
            return CtSymbol(name, SymbolKind.Variable, uri, line, f"let {name}")
        case StructDecl(name=name):
            return CtSymbol(name, SymbolKind.Struct, uri, line, f"struct {name}")
    return None


def _diagnostic(error: CtException) -> Diagnostic:
    line = max((error.line or 1) - 1, 0)
    col = error.col or 0
    return Diagnostic(
        range=Range(Position(line, col), Position(line, col + 1)),
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source="ctlang",
    )


def analyze(uri: str, text: str) -> tuple[List[CtSymbol], List[Diagnostic]]:
    """
    Parse ``text`` and return its top-level symbols and syntax diagnostics.

    Statements parsed before the first error still contribute symbols.
    """
    symbols: List[CtSymbol] = []
    diagnostics: List[Diagnostic] = []
    parser = Parser(text, uri)
    try:
        while (node := parser.next()) is not None:
            sym = _symbol_for(uri, node)
            if sym is not None:
                symbols.append(sym)
    except CtException as e:
        diagnostics.append(_diagnostic(e))
    except RecursionError:
        line, col = parser.lexer.position
        error = ParserException("Program nests too deeply to parse", line, col, uri)
        diagnostics.append(_diagnostic(error))
    return symbols, diagnostics


class CtLanguageServer(LanguageServer):
    """Language server for ctlang source files."""

    def __init__(self) -> None:
        super().__init__("ct-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[CtSymbol]] = {}
        self.global_symbols: Dict[str, List[CtSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all `.ct` files under the current workspace."""
        root = self.workspace.root_path
        if not root:
            self.indexed_workspace = True
            return
        for path in Path(root).rglob("*.ct"):
            uri = path.as_uri()
            if uri in self.symbols_by_uri:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """Parse ``text``, update the symbol index for ``uri`` and return its diagnostics."""
        symbols, diagnostics = analyze(uri, text)
        self.symbols_by_uri[uri] = symbols
        self._rebuild_global_index()
        return diagnostics

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, uri: str, word: str) -> Optional[CtSymbol]:
        """Return the symbol named ``word``, preferring one declared in ``uri``."""
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        if not matches:
            return None
        for sym in matches:
            if sym.uri == uri:
                return sym
        return matches[0]


lang_server = CtLanguageServer()


def _publish(ls: CtLanguageServer, uri: str, text: str) -> None:
    ls.publish_diagnostics(uri, ls.update_index(uri, text))


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: CtLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    _publish(ls, params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: CtLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _publish(ls, doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: CtLanguageServer, params: DefinitionParams):
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(doc.uri, word)
    if sym is None:
        return None
    rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))
    return Location(uri=sym.uri, range=rng)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: CtLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(doc.uri, word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: CtLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    result: List[DocumentSymbol] = []
    for sym in symbols:
        rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=sym.kind,
                range=rng,
                selection_range=rng,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
