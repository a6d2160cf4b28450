"""
  Recursive-descent parser for Alone.

Grammar, with one token of lookahead:

    expr := NUMBER | SYMBOL | '(' form
    form := 'if' expr expr expr ')'
          | ('define' | 'setq') SYMBOL expr ')'
          | SYMBOL expr* ')'

Every consumed token (brackets and keywords included) is kept in the produced
node. A call to `parse_expr` reads exactly one expression; tokens after it are
left in the stream for the next call.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from alone.reader.lexer import tokenize
from alone.runtime_context import recursion_limit
from alone.types.errors import EmptyInput, ParseError
from alone.types.expr import CallExpr, DefineExpr, Expr, IfExpr, NumberExpr, StrExpr, SymbolExpr
from alone.types.token import Span, Token, TokenKind

logger = logging.getLogger(__name__)

IF_KEYWORDS = frozenset({"if"})
DEFINE_KEYWORDS = frozenset({"define", "setq"})


class TokenStream:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: list[Token] = list(tokens)
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _eof_span(self) -> Optional[Span]:
        if not self.tokens or self.tokens[-1].span is None:
            return None
        end = self.tokens[-1].span.end
        return Span(end, end)

    def _expect_token(self, what: str) -> Token:
        tok = self.advance()
        if tok is None:
            raise ParseError(f"Unexpected end of input, expected {what}", self._eof_span())
        return tok

    def _expect_close(self, form: str) -> Token:
        tok = self._expect_token(f"')' to close {form}")
        if tok.kind is not TokenKind.RIGHT_BRACKET:
            raise ParseError(f"Expected ')' to close {form}, found '{tok}'", tok.span)
        return tok

    def parse_expr(self) -> Expr:
        """Read one expression. Running out of tokens here is a syntax error."""
        tok = self._expect_token("an expression")
        match tok.kind:
            case TokenKind.LEFT_BRACKET:
                return self.parse_form(tok)
            case TokenKind.RIGHT_BRACKET:
                raise ParseError("Unexpected token ')'", tok.span)
            case TokenKind.NUMBER:
                return NumberExpr(tok, tok.value)
            case TokenKind.SYMBOL:
                return SymbolExpr(tok, tok.value)
            case TokenKind.STR:
                return StrExpr(tok.value)
        raise ParseError(f"Unknown token: {tok!r}", tok.span)

    def parse_form(self, open_tok: Token) -> Expr:
        head = self.peek()
        if head is None:
            raise ParseError("Unexpected end of input after '('", self._eof_span())
        if head.kind is not TokenKind.SYMBOL:
            raise ParseError(f"Expected a symbol after '(', found '{head}'", head.span)

        if head.value in IF_KEYWORDS:
            if_tok = self.advance()
            condition = self.parse_expr()
            then_branch = self.parse_expr()
            else_branch = self.parse_expr()
            close_tok = self._expect_close(head.value)
            return IfExpr(open_tok, if_tok, condition, then_branch, else_branch, close_tok)

        if head.value in DEFINE_KEYWORDS:
            define_tok = self.advance()
            symbol_tok = self._expect_token(f"a symbol after {head.value}")
            if symbol_tok.kind is not TokenKind.SYMBOL:
                raise ParseError(
                    f"{head.value} requires a symbol, found '{symbol_tok}'", symbol_tok.span
                )
            value = self.parse_expr()
            close_tok = self._expect_close(head.value)
            return DefineExpr(open_tok, define_tok, symbol_tok, value, close_tok)

        symbol_tok = self.advance()
        args: list[Expr] = []
        while True:
            nxt = self.peek()
            if nxt is None:
                raise ParseError(
                    f"Unexpected end of input, expected ')' to close {symbol_tok}",
                    self._eof_span(),
                )
            if nxt.kind is TokenKind.RIGHT_BRACKET:
                break
            args.append(self.parse_expr())
        close_tok = self.advance()
        return CallExpr(open_tok, symbol_tok, tuple(args), close_tok)

    def parse_next(self) -> Expr:
        """Read the next top-level expression.

        Raises EmptyInput when no tokens remain, so callers can tell the end
        of input apart from malformed input.
        """
        if self.at_end():
            raise EmptyInput()
        try:
            with recursion_limit():
                expr = self.parse_expr()
        except RecursionError:
            raise ParseError("Expression nested too deeply", self._eof_span()) from None
        logger.debug("parsed %s", expr)
        return expr

    def parse_all(self) -> Iterator[Expr]:
        while not self.at_end():
            yield self.parse_next()


def parse_tokens(tokens: Iterable[Token]) -> Expr:
    """Parse the first expression in `tokens`; trailing tokens are ignored."""
    return TokenStream(tokens).parse_next()


def parse(source: str) -> Expr:
    """Tokenize `source` and parse its first expression."""
    return parse_tokens(tokenize(source))


def parse_all(source: str) -> Iterator[Expr]:
    """Yield every top-level expression in `source`, one parse per form."""
    return TokenStream(tokenize(source)).parse_all()
