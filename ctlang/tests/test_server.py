"""
Tests for the language server's document analysis.
"""
from lsprotocol.types import DocumentSymbolParams, SymbolKind, TextDocumentIdentifier

from ctlang.server import CtLanguageServer, analyze, document_symbols

URI = "file:///work/demo.ct"

SOURCE = (
    "let x = 1;\n"
    "let add(a, b) {\n"
    "    return a + b;\n"
    "}\n"
    "struct Point {}\n"
    "add(x, 2);\n"
)


def test_analyze_collects_top_level_symbols():
    symbols, diagnostics = analyze(URI, SOURCE)
    assert diagnostics == []
    assert [(s.name, s.kind, s.line) for s in symbols] == [
        ("x", SymbolKind.Variable, 0),
        ("add", SymbolKind.Function, 1),
        ("Point", SymbolKind.Struct, 4),
    ]
    assert symbols[1].detail == "let add(a, b)"


def test_analyze_reports_first_syntax_error():
    symbols, diagnostics = analyze(URI, "let x = 1;\nlet y = ;\nlet z = 2;\n")
    assert [s.name for s in symbols] == ["x"]
    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.range.start.line == 1
    assert diagnostic.range.start.character == 8
    assert diagnostic.message == "Unable to parse: ;"


def test_analyze_does_not_evaluate(capsys):
    analyze(URI, 'print("side effect");')
    assert capsys.readouterr().out == ""


def test_index_lookup_and_document_symbols():
    server = CtLanguageServer()
    server.indexed_workspace = True
    assert server.update_index(URI, SOURCE) == []
    server.update_index("file:///work/other.ct", "let add(q) { return q; }")

    assert server.lookup(URI, "add").uri == URI
    assert server.lookup("file:///work/other.ct", "add").detail == "let add(q)"
    assert server.lookup(URI, "missing") is None

    params = DocumentSymbolParams(text_document=TextDocumentIdentifier(uri=URI))
    result = document_symbols(server, params)
    assert [sym.name for sym in result] == ["x", "add", "Point"]


def test_analyze_reports_overly_nested_source():
    depth = 5000
    source = "let x = 1;\n" + "(" * depth + "1" + ")" * depth + ";"
    symbols, diagnostics = analyze(URI, source)
    assert [s.name for s in symbols] == ["x"]
    assert len(diagnostics) == 1
    assert diagnostics[0].message == "Program nests too deeply to parse"
    assert diagnostics[0].range.start.line == 1
