import pytest
from lsprotocol.types import DiagnosticSeverity

from alone_lsp.indexer import build_index, position_from_offset
from alone_lsp.server import completion_items, diagnostics_for, hover_text


def test_index_collects_definitions_and_calls():
    text = "(define x 1)\n(setq y (+ x 2))\n(print (car (cons x y)))"
    idx = build_index(text)
    assert idx.error is None
    assert idx.form_count == 3
    assert set(idx.symbols) == {"x", "y"}
    assert (idx.symbols["x"].line, idx.symbols["x"].col) == (0, 8)
    assert (idx.symbols["y"].line, idx.symbols["y"].col) == (1, 6)
    assert [c.name for c in idx.calls] == ["+", "print", "car", "cons"]


def test_index_walks_if_branches():
    idx = build_index("(if (< 1 2) (define a 1) (f))")
    assert "a" in idx.symbols
    assert [c.name for c in idx.calls] == ["<", "f"]


def test_index_reports_parse_error_location():
    idx = build_index("(define x 1)\n  )")
    assert idx.form_count == 1
    assert "x" in idx.symbols
    err = idx.error
    assert err.message == "Unexpected token ')'"
    assert (err.line, err.col, err.end_line, err.end_col) == (1, 2, 1, 3)


def test_index_reports_lex_error_location():
    idx = build_index("(a\n  #)")
    assert idx.form_count == 0
    assert (idx.error.line, idx.error.col) == (1, 2)


def test_index_reports_unterminated_form_at_end():
    idx = build_index("(f 1")
    assert "expected ')'" in idx.error.message
    assert (idx.error.line, idx.error.col) == (0, 4)


@pytest.mark.parametrize(
    "text,offset,expected",
    [
        ("abc", 1, (0, 0)),
        ("abc", 3, (0, 2)),
        ("a\nbc", 3, (1, 0)),
        ("é\nx", 4, (1, 0)),
        ("éx", 3, (0, 1)),
    ]
)
def test_position_from_offset(text, offset, expected):
    assert position_from_offset(text, offset) == expected


def test_diagnostics_for_errors_and_unknown_calls():
    idx = build_index("(define g 1)\n(frob 1)\n(g 2)\n(+ 1")
    diags = diagnostics_for(idx)
    errors = [d for d in diags if d.severity == DiagnosticSeverity.Error]
    warnings = [d for d in diags if d.severity == DiagnosticSeverity.Warning]
    assert len(errors) == 1
    assert errors[0].range.start.line == 3
    assert [w.message for w in warnings] == ["Unknown function 'frob'"]
    assert warnings[0].range.start.line == 1
    assert warnings[0].range.start.character == 1
    assert warnings[0].range.end.character == 5


def test_clean_document_has_no_diagnostics():
    assert diagnostics_for(build_index("(print (not 1) (eq 1 1))")) == []


def test_hover_text():
    idx = build_index("(define x 1)")
    assert hover_text("car", idx) == "(car pair)"
    assert hover_text("x", idx) == "x var (defined at 1:9)"
    assert hover_text("t", idx) == "t constant = 1"
    assert hover_text("unknown", idx) is None


def test_completion_includes_builtins_and_definitions():
    labels = [item.label for item in completion_items(build_index("(define total 0)")).items]
    assert "cons" in labels
    assert "not" in labels
    assert "total" in labels
    assert "T" in labels
