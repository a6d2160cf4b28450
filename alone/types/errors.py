from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from alone.types.token import Span, Token


class AloneError(Exception):
    """ Base class for all Alone errors"""
    pass


# -------------------------------
# Reader errors
# -------------------------------
class LexError(AloneError):
    """ Raised when the source holds an unknown character or an unrepresentable number"""

    def __init__(self, message: str, span: Optional[Span] = None):
        super().__init__(message)
        self.message = message
        self.span = span


class ParseError(AloneError):
    """ Raised when the token sequence does not form a valid expression"""

    def __init__(self, message: str, span: Optional[Span] = None):
        super().__init__(message)
        self.message = message
        self.span = span


class EmptyInput(AloneError):
    """ Raised when there are no tokens left to parse (end of session, not a syntax error)"""

    def __init__(self, message: str = "no input"):
        super().__init__(message)


# -------------------------------
# Evaluation errors
# -------------------------------
class EvalError(AloneError):
    """ Base class for failures raised while evaluating an expression"""
    pass


class UndefinedSymbol(EvalError):
    """ Raised when a symbol is looked up before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"Undefined symbol {name}")
        self.name = name


class NotASymbol(EvalError):
    """ Raised when a define target or call head is not a symbol token"""

    def __init__(self, token: Token):
        super().__init__(f"Token '{token}' is not symbol")
        self.token = token


class InvalidFunction(EvalError):
    """ Raised when the head of a call is unbound or bound to a non-callable"""

    def __init__(self, name: str):
        super().__init__(f"Invalid function {name}")
        self.name = name


class WrongArgumentType(EvalError):
    """ Raised when a builtin receives an argument of the wrong type"""

    def __init__(self, builtin: str, expected: str):
        super().__init__(f"Wrong argument type: {builtin} requires {expected}")
        self.builtin = builtin
        self.expected = expected


class ArityError(EvalError):
    """ Raised when the number of arguments passed to a builtin is incorrect"""

    def __init__(self, builtin: str, detail: str):
        super().__init__(f"Wrong number of arguments: {builtin}, {detail}")
        self.builtin = builtin
        self.detail = detail


class DivisionByZero(EvalError):
    """ Raised when a builtin divides by zero"""

    def __init__(self, builtin: str = "/"):
        super().__init__(f"Division by zero in {builtin}")
        self.builtin = builtin


class IntegerOverflow(EvalError):
    """ Raised when an arithmetic result does not fit in a signed 64-bit integer"""

    def __init__(self, builtin: str):
        super().__init__(f"Integer overflow in {builtin}")
        self.builtin = builtin


class RecursionDepthExceeded(EvalError):
    """ Raised when nesting is deeper than the host stack allows"""

    def __init__(self, limit: int):
        super().__init__(f"Recursion depth exceeded (limit {limit})")
        self.limit = limit
