from alone import EvaluatorFn, LispValue
from alone.types.environment import Environment
from alone.types.expr import DefineExpr
from alone.evaluation.apply import symbol_name


def define_form(expr: DefineExpr, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (define name value) / (setq name value)
    Binds name in the session environment and returns the bound value.
    """
    name = symbol_name(expr.symbol_tok)
    value = evaluate_fn(expr.value, env)
    env.define(name, value)
    return value
