"""Core evaluator for the Alone interpreter.

A direct recursive walk of the expression tree. Special forms are dispatched
through SPECIAL_FORMS by node type; calls resolve their head to a builtin,
evaluate the arguments left to right and hand them to the application engine.
There is no tail-call elimination, so nesting depth is bounded by the recursion
limit configured in `alone.config`; exceeding it raises RecursionDepthExceeded.
"""

from __future__ import annotations

from alone import LispValue
from alone.runtime_context import recursion_limit
from alone.types.environment import Environment
from alone.types.errors import RecursionDepthExceeded
from alone.types.expr import CallExpr, Expr, NumberExpr, StrExpr, SymbolExpr
from alone.evaluation.apply import apply, resolve_callee, symbol_name
from alone.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: Expr, env: Environment) -> LispValue:
    """
    Evaluate a top-level expression against `env`.

    Host stack exhaustion is reported as RecursionDepthExceeded. Bindings made
    before the failure stay in effect.
    """
    with recursion_limit() as limit:
        try:
            return evaluate0(expr, env)
        except RecursionError:
            raise RecursionDepthExceeded(limit) from None


def evaluate0(expr: Expr, env: Environment) -> LispValue:
    """Single recursive evaluation step."""
    match expr:
        case NumberExpr(value=value):
            return value
        case SymbolExpr(name=name):
            return env.lookup(name)
        case StrExpr(value=value):
            return value
        case CallExpr(symbol_tok=symbol_tok, args=args):
            head = resolve_callee(symbol_name(symbol_tok), env)
            values = [evaluate0(arg, env) for arg in args]
            return apply(head, values, env)

    handler = SPECIAL_FORMS.get(type(expr))
    if handler is None:
        raise TypeError(f"Cannot evaluate {expr!r}")
    return handler(expr, env, evaluate0)
