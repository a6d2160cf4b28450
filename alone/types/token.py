"""Tokens produced by the lexer.

A token pairs a kind (with its payload, for numbers, symbols and strings) with
the span of source it was read from. Spans are half-open, 1-based byte ranges
and exist for diagnostics only: two tokens of the same kind and payload compare
equal regardless of where they came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class TokenKind(Enum):
    LEFT_BRACKET = "("
    RIGHT_BRACKET = ")"
    NUMBER = "number"
    SYMBOL = "symbol"
    STR = "string"


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def __str__(self):
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Optional[Union[int, str]] = None
    span: Optional[Span] = field(default=None, compare=False)

    @property
    def is_symbol(self) -> bool:
        return self.kind is TokenKind.SYMBOL

    def __str__(self):
        if self.kind in (TokenKind.LEFT_BRACKET, TokenKind.RIGHT_BRACKET):
            return self.kind.value
        if self.kind is TokenKind.STR:
            return f'"{self.value}"'
        return str(self.value)

    def __repr__(self):
        if self.value is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.value!r})"


def left_bracket(span: Optional[Span] = None) -> Token:
    return Token(TokenKind.LEFT_BRACKET, span=span)


def right_bracket(span: Optional[Span] = None) -> Token:
    return Token(TokenKind.RIGHT_BRACKET, span=span)


def number(value: int, span: Optional[Span] = None) -> Token:
    return Token(TokenKind.NUMBER, value, span)


def symbol(name: str, span: Optional[Span] = None) -> Token:
    return Token(TokenKind.SYMBOL, name, span)


def string(text: str, span: Optional[Span] = None) -> Token:
    return Token(TokenKind.STR, text, span)
