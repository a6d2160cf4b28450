from alone import EvaluatorFn, LispValue
from alone.types.environment import Environment
from alone.types.expr import IfExpr
from alone.types.value import is_truthy


def if_form(expr: IfExpr, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (if cond then else)
    Only the selected branch is evaluated.
    """
    cond = evaluate_fn(expr.condition, env)
    # Nil and 0 are false, everything else is true
    if is_truthy(cond):
        return evaluate_fn(expr.then_branch, env)
    return evaluate_fn(expr.else_branch, env)
