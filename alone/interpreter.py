from __future__ import annotations

from typing import Optional

from alone import LispValue
from alone.reader.lexer import tokenize
from alone.reader.parser import TokenStream
from alone.evaluation.evaluator import evaluate
from alone.types.environment import Environment
from alone.types.errors import EmptyInput
from alone.types.expr import Expr
from alone.types.nil import Nil
from alone.builtin.env_builtin import make_default_environment


class Interpreter:
    """
    Orchestrates reading and evaluating Alone code.
    Maintains one Environment across calls, so definitions persist for the session.
    """

    def __init__(self, env: Optional[Environment] = None):
        self.env: Environment = env if env is not None else make_default_environment()

    def eval_expr(self, expr: Expr) -> LispValue:
        return evaluate(expr, self.env)

    def eval(self, code: str) -> LispValue:
        """Evaluate every top-level form in `code`; return the last value (Nil if none)."""
        stream = TokenStream(tokenize(code))
        result: LispValue = Nil
        for expr in stream.parse_all():
            result = self.eval_expr(expr)
        return result

    def read_eval_line(self, line: str) -> LispValue:
        """Evaluate the first form on an interactive line.

        Raises EmptyInput when the line holds no tokens at all.
        """
        tokens = tokenize(line)
        if not tokens:
            raise EmptyInput()
        return self.eval_expr(TokenStream(tokens).parse_next())
