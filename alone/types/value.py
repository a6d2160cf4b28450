"""Runtime values.

- numbers  -> int, kept within the signed 64-bit range
- nil      -> the Nil singleton
- pairs    -> Cons(car, cdr)
- callables -> Builtin members; there are no user-created callables
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from alone import LispValue
from alone.types.nil import Nil

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class Cons:
    car: LispValue
    cdr: LispValue

    def __str__(self):
        return to_string(self)


class Builtin(Enum):
    """Closed set of primitive operations that can be bound in an environment."""

    PRINT = "print"
    EXIT = "exit"
    BEGIN = "begin"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    EQ = "="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    NOT = "!"
    CONS = "cons"
    LIST = "list"
    CAR = "car"
    CDR = "cdr"

    def __str__(self):
        return "<callable>"


def is_number(value: LispValue) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def in_int64_range(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX


def is_truthy(value: LispValue) -> bool:
    """Nil and the number 0 are false; everything else is true."""
    if value is Nil:
        return False
    if is_number(value):
        return value != 0
    return True


def _atom_to_string(value: LispValue) -> str:
    if value is Nil:
        return "Nil"
    if isinstance(value, Builtin):
        return "<callable>"
    return str(value)


def to_string(value: LispValue) -> str:
    """Canonical textual rendering used by print and the driver.

    Pairs are walked with an explicit stack, so long lists and deeply nested
    cars render without touching the host recursion limit.
    """
    parts: list[str] = []
    # (is_text, item): text is emitted as is, anything else still needs rendering
    stack: list[tuple[bool, LispValue]] = [(False, value)]
    while stack:
        is_text, item = stack.pop()
        if is_text:
            parts.append(item)
        elif isinstance(item, Cons):
            parts.append("(")
            stack.append((True, ")"))
            stack.append((False, item.cdr))
            stack.append((True, ", "))
            stack.append((False, item.car))
        else:
            parts.append(_atom_to_string(item))
    return "".join(parts)


def from_list(values: list[LispValue]) -> LispValue:
    """Build a Nil-terminated chain of pairs from a Python list."""
    result: LispValue = Nil
    for v in reversed(values):
        result = Cons(v, result)
    return result
