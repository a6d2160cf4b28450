"""Application engine for Alone.

Centralizes the call semantics shared by the evaluator and special forms:
resolving a callee token to a name and invoking a builtin on already-evaluated
arguments.
"""

import logging

from alone import LispValue
from alone.types.environment import Environment
from alone.types.errors import InvalidFunction, NotASymbol
from alone.types.token import Token
from alone.types.value import Builtin
from alone.builtin.env_builtin import BUILTIN_IMPLEMENTATIONS

logger = logging.getLogger(__name__)


def symbol_name(token: Token) -> str:
    """Return the name carried by a symbol token; raise NotASymbol otherwise."""
    if not token.is_symbol:
        raise NotASymbol(token)
    return token.value


def resolve_callee(name: str, env: Environment) -> Builtin:
    """Look up `name` and check that it is bound to a builtin."""
    head = env.get(name)
    if not isinstance(head, Builtin):
        raise InvalidFunction(name)
    return head


def apply(head: Builtin, args: list[LispValue], env: Environment) -> LispValue:
    """Invoke a builtin with the runtime env and list of evaluated args."""
    logger.debug("apply %s to %d args", head.value, len(args))
    return BUILTIN_IMPLEMENTATIONS[head](env, args)
