"""Built-in functions for the Alone runtime environment.

This module defines the primitive operations exposed to Lisp code: output and
process control, integer arithmetic, comparison, logic and pairs. Every
builtin takes the runtime environment and the list of already-evaluated
arguments, and either returns a value or raises an EvalError naming itself.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable

from alone import LispValue
from alone.types.environment import Environment
from alone.types.errors import ArityError, DivisionByZero, IntegerOverflow, WrongArgumentType
from alone.types.nil import Nil
from alone.types.value import Builtin, Cons, from_list, in_int64_range, is_number, is_truthy, to_string

logger = logging.getLogger(__name__)

TRUE = 1

BuiltinFn = Callable[[Environment, list[LispValue]], LispValue]


def _numbers(name: str, args: list[LispValue]) -> list[int]:
    """Check that every argument is a number."""
    for a in args:
        if not is_number(a):
            raise WrongArgumentType(name, f"number, got {to_string(a)}")
    return args


def _checked(name: str, n: int) -> int:
    if not in_int64_range(n):
        raise IntegerOverflow(name)
    return n


def _last_or_nil(args: list[LispValue]) -> LispValue:
    return args[-1] if args else Nil


def _truncating_div(name: str, n: int, d: int) -> int:
    """Integer division rounding toward zero."""
    if d == 0:
        raise DivisionByZero(name)
    q = abs(n) // abs(d)
    return _checked(name, q if (n < 0) == (d < 0) else -q)


# -------------------------------
# Output and control
# -------------------------------
def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Print each argument on its own line; returns the last argument or Nil."""
    for a in args:
        print(to_string(a))
    return _last_or_nil(args)


def exit_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Terminate the process with the given status (default 0). Never returns."""
    if len(args) > 1:
        raise ArityError("exit", f"expected at most 1 argument, got {len(args)}")
    code = _numbers("exit", args)[0] if args else 0
    logger.debug("exit %d", code)
    sys.exit(code)


def begin(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the last (already evaluated) argument, or Nil."""
    return _last_or_nil(args)


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Sum of all arguments; 0 with no arguments."""
    result = 0
    for x in _numbers("+", args):
        result = _checked("+", result + x)
    return result


def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg, 0 for none."""
    nums = _numbers("-", args)
    if not nums:
        return 0
    first, rest = nums[0], nums[1:]
    if not rest:
        return _checked("-", -first)
    result = first
    for x in rest:
        result = _checked("-", result - x)
    return result


def mul(env: Environment, args: list[LispValue]) -> LispValue:
    """Product of all arguments; 1 with no arguments."""
    result = 1
    for x in _numbers("*", args):
        result = _checked("*", result * x)
    return result


def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Divide left-to-right, truncating toward zero; with one arg returns 1 / arg."""
    if not args:
        raise ArityError("/", "0")
    nums = _numbers("/", args)
    first, rest = nums[0], nums[1:]
    if not rest:
        return _truncating_div("/", 1, first)
    result = first
    for x in rest:
        result = _truncating_div("/", result, x)
    return result


# -------------------------------
# Comparison
# -------------------------------
def equals(env: Environment, args: list[LispValue]) -> LispValue:
    """Return 1 if all arguments equal the first, else Nil."""
    if not args:
        raise ArityError("=", "expected at least 1 argument, got 0")
    nums = _numbers("=", args)
    first = nums[0]
    return TRUE if all(x == first for x in nums[1:]) else Nil


def _chain(name: str, args: list[LispValue], holds: Callable[[int, int], bool]) -> LispValue:
    # Fewer than two arguments is never a satisfied chain
    if len(args) < 2:
        return Nil
    nums = _numbers(name, args)
    return TRUE if all(holds(a, b) for a, b in zip(nums, nums[1:])) else Nil


def lt(env: Environment, args: list[LispValue]) -> LispValue:
    """Chainable less-than: 1 if a0 < a1 < a2 ... holds for all pairs."""
    return _chain("<", args, lambda a, b: a < b)


def gt(env: Environment, args: list[LispValue]) -> LispValue:
    """Chainable greater-than: 1 if a0 > a1 > a2 ... holds for all pairs."""
    return _chain(">", args, lambda a, b: a > b)


def lte(env: Environment, args: list[LispValue]) -> LispValue:
    return _chain("<=", args, lambda a, b: a <= b)


def gte(env: Environment, args: list[LispValue]) -> LispValue:
    return _chain(">=", args, lambda a, b: a >= b)


def logical_not(env: Environment, args: list[LispValue]) -> LispValue:
    """Logical NOT for a single value; only Nil and 0 are falsey.

    `!` and `not` share this implementation, so errors name both.
    """
    if len(args) > 1:
        raise ArityError("!/not", f"too many arguments ({len(args)})")
    if not args:
        raise ArityError("!/not", "too few arguments (0)")
    return Nil if is_truthy(args[0]) else TRUE


# -------------------------------
# Pairs and lists
# -------------------------------
def cons(env: Environment, args: list[LispValue]) -> LispValue:
    """Pair the first two arguments; Nil when fewer than two are given."""
    if len(args) < 2:
        return Nil
    return Cons(args[0], args[1])


def list_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Build a Nil-terminated chain of pairs; Nil for no arguments."""
    return from_list(args)


def _pair_arg(name: str, args: list[LispValue]) -> Cons:
    if len(args) != 1:
        raise ArityError(name, f"expected 1 argument, got {len(args)}")
    pair = args[0]
    if not isinstance(pair, Cons):
        raise WrongArgumentType(name, "cons")
    return pair


def car(env: Environment, args: list[LispValue]) -> LispValue:
    return _pair_arg("car", args).car


def cdr(env: Environment, args: list[LispValue]) -> LispValue:
    return _pair_arg("cdr", args).cdr


BUILTIN_IMPLEMENTATIONS: dict[Builtin, BuiltinFn] = {
    Builtin.PRINT: print_builtin,
    Builtin.EXIT: exit_builtin,
    Builtin.BEGIN: begin,
    Builtin.ADD: add,
    Builtin.SUB: sub,
    Builtin.MUL: mul,
    Builtin.DIV: div,
    Builtin.EQ: equals,
    Builtin.LT: lt,
    Builtin.GT: gt,
    Builtin.LE: lte,
    Builtin.GE: gte,
    Builtin.NOT: logical_not,
    Builtin.CONS: cons,
    Builtin.LIST: list_builtin,
    Builtin.CAR: car,
    Builtin.CDR: cdr,
}

# Extra names bound to an existing builtin
ALIASES: dict[str, Builtin] = {
    "eq": Builtin.EQ,
    "not": Builtin.NOT,
}

CONSTANTS: dict[str, LispValue] = {
    "t": TRUE,
    "T": TRUE,
    "Nil": Nil,
}

# Signatures for hover/signature help in editors
BUILTIN_SIGNATURES: dict[str, str] = {
    "print": "(print &rest values)",
    "exit": "(exit &optional code)",
    "begin": "(begin &rest values)",
    "+": "(+ &rest nums)",
    "-": "(- &rest nums)",
    "*": "(* &rest nums)",
    "/": "(/ x &rest nums)",
    "=": "(= x &rest nums)",
    "eq": "(eq x &rest nums)",
    "<": "(< x y &rest nums)",
    ">": "(> x y &rest nums)",
    "<=": "(<= x y &rest nums)",
    ">=": "(>= x y &rest nums)",
    "!": "(! x)",
    "not": "(not x)",
    "cons": "(cons car cdr)",
    "list": "(list &rest values)",
    "car": "(car pair)",
    "cdr": "(cdr pair)",
}


def register(env: Environment) -> None:
    """Register all builtin functions and constants into the given environment."""
    env.update({b.value: b for b in Builtin})
    env.update(dict(ALIASES))
    env.update(dict(CONSTANTS))


def make_default_environment() -> Environment:
    """Return a fresh environment holding the builtin registry."""
    env = Environment()
    register(env)
    return env
