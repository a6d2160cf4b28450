# Core type aliases for the Alone data model.
# Runtime values are plain Python objects: int for numbers, the Nil singleton,
# Cons cells for pairs and Builtin members for callables.
#
# Naming guidance:
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# - EvaluatorFn: The evaluator signature passed into special-form handlers.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
LispValue = Any

# Evaluator function type: Python evaluator used inside special forms
EvaluatorFn = Callable[..., LispValue]
