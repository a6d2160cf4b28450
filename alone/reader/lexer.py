"""
  Lexer for Alone source text.

A hand-written state machine: starting from `START`, each character either
moves the scanner to the next state of the current token or ends it. When a
token ends, its text is turned into a Token and scanning restarts at `START`.

- (  ) -> LEFT_BRACKET / RIGHT_BRACKET (always one character)
- digits -> NUMBER (no sign, no fraction, parsed eagerly to a 64-bit int)
- letters and !%&*+-./:<>=?@$^ -> SYMBOL (digits allowed after the first char)
- whitespace runs and ; comments -> skipped
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional

from alone.types.errors import LexError
from alone.types.token import Span, Token, TokenKind
from alone.types.value import in_int64_range

logger = logging.getLogger(__name__)

SYMBOL_PUNCTUATION = frozenset("!%&*+-./:<>=?@$^")


class State(Enum):
    START = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    NUMBER = auto()
    SYMBOL = auto()
    WHITESPACE = auto()
    COMMENT = auto()


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_symbol_start(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c in SYMBOL_PUNCTUATION


def _next_state(state: State, c: str) -> Optional[State]:
    """Return the state after reading `c`, or None if `c` ends the token."""
    match state:
        case State.START:
            if c == "(":
                return State.LEFT_BRACKET
            if c == ")":
                return State.RIGHT_BRACKET
            if _is_digit(c):
                return State.NUMBER
            if c == ";":
                return State.COMMENT
            if _is_symbol_start(c):
                return State.SYMBOL
            if c.isspace():
                return State.WHITESPACE
            return None
        case State.LEFT_BRACKET | State.RIGHT_BRACKET:
            return None
        case State.NUMBER:
            return State.NUMBER if _is_digit(c) else None
        case State.SYMBOL:
            return State.SYMBOL if _is_symbol_start(c) or _is_digit(c) else None
        case State.WHITESPACE:
            return State.WHITESPACE if c.isspace() else None
        case State.COMMENT:
            return None if c in "\r\n" else State.COMMENT
    return None


def _byte_len(c: str) -> int:
    return len(c.encode("utf-8"))


def tokenize(source: str) -> list[Token]:
    """Split `source` into tokens, dropping whitespace and comments.

    Spans are 1-based, half-open byte offsets into the UTF-8 encoded source.
    Raises LexError on an unrecognised character or a number literal that does
    not fit in a signed 64-bit integer.
    """
    tokens: list[Token] = []
    pos = 0
    byte_pos = 0
    n = len(source)

    while pos < n:
        state = State.START
        end = pos
        byte_end = byte_pos
        while end < n:
            nxt = _next_state(state, source[end])
            if nxt is None:
                break
            state = nxt
            byte_end += _byte_len(source[end])
            end += 1

        if state is State.START:
            c = source[pos]
            raise LexError(
                f"Unknown character {c!r} at {byte_pos + 1}",
                Span(byte_pos + 1, byte_pos + 1 + _byte_len(c)),
            )

        text = source[pos:end]
        span = Span(byte_pos + 1, byte_end + 1)
        pos, byte_pos = end, byte_end

        match state:
            case State.LEFT_BRACKET:
                tokens.append(Token(TokenKind.LEFT_BRACKET, span=span))
            case State.RIGHT_BRACKET:
                tokens.append(Token(TokenKind.RIGHT_BRACKET, span=span))
            case State.NUMBER:
                # int64 holds at most 19 digits; skip the conversion for longer literals
                digits = text.lstrip("0")
                value = int(text) if len(digits) <= 19 else None
                if value is None or not in_int64_range(value):
                    raise LexError(f"Number literal {text} does not fit in 64 bits", span)
                tokens.append(Token(TokenKind.NUMBER, value, span))
            case State.SYMBOL:
                tokens.append(Token(TokenKind.SYMBOL, text, span))
            case State.WHITESPACE | State.COMMENT:
                continue

    logger.debug("tokenized %d tokens", len(tokens))
    return tokens
