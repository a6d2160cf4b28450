from __future__ import annotations

"""
Lightweight indexer for Alone source files without evaluating code.

The document is run through the real lexer and parser one top-level form at a
time, and the resulting trees are walked to collect:
- definitions: (define name ...), (setq name ...)
- call sites: the callee symbol of every (name ...) form
- the first lex/parse error, located by its token span

Indexing stops at the first error; forms read before it stay in the index.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from alone.reader.lexer import tokenize
from alone.reader.parser import TokenStream
from alone.types.errors import LexError, ParseError
from alone.types.expr import CallExpr, DefineExpr, Expr, IfExpr
from alone.types.token import Span, Token


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var"
    line: int
    col: int


@dataclass
class CallSite:
    name: str
    line: int
    col: int


@dataclass
class Problem:
    message: str
    line: int
    col: int
    end_line: int
    end_col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    calls: List[CallSite] = field(default_factory=list)
    error: Optional[Problem] = None
    form_count: int = 0


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    """Return the 0-based (line, col) for a 1-based byte offset into `text`."""
    before = text.encode("utf-8")[: max(offset - 1, 0)].decode("utf-8", errors="replace")
    line = before.count("\n")
    last_nl = before.rfind("\n")
    col = len(before) if last_nl == -1 else len(before) - last_nl - 1
    return line, col


def _problem(text: str, message: str, span: Optional[Span]) -> Problem:
    if span is None:
        span = Span(len(text.encode("utf-8")) + 1, len(text.encode("utf-8")) + 1)
    line, col = position_from_offset(text, span.start)
    end_line, end_col = position_from_offset(text, max(span.end, span.start + 1))
    return Problem(message=message, line=line, col=col, end_line=end_line, end_col=end_col)


def _token_position(text: str, tok: Token) -> Tuple[int, int]:
    if tok.span is None:
        return 0, 0
    return position_from_offset(text, tok.span.start)


def _walk(text: str, expr: Expr, idx: DocumentIndex) -> None:
    match expr:
        case DefineExpr(symbol_tok=tok, value=value):
            line, col = _token_position(text, tok)
            idx.symbols[str(tok.value)] = SymbolDef(name=str(tok.value), kind="var", line=line, col=col)
            _walk(text, value, idx)
        case IfExpr(condition=c, then_branch=t, else_branch=e):
            for sub in (c, t, e):
                _walk(text, sub, idx)
        case CallExpr(symbol_tok=tok, args=args):
            line, col = _token_position(text, tok)
            idx.calls.append(CallSite(name=str(tok.value), line=line, col=col))
            for arg in args:
                _walk(text, arg, idx)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        stream = TokenStream(tokenize(text))
    except LexError as e:
        idx.error = _problem(text, e.message, e.span)
        return idx

    try:
        for expr in stream.parse_all():
            idx.form_count += 1
            _walk(text, expr, idx)
    except ParseError as e:
        idx.error = _problem(text, e.message, e.span)
    return idx
