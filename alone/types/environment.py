"""Runtime environment for Alone.

The Environment is a single flat mapping from symbol names to evaluated values.
There is no scope chain: `define` always writes into the one table that every
later lookup reads from, for the whole session.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterator, Optional

from alone import LispValue
from alone.types.errors import UndefinedSymbol
from alone.types.value import to_string

logger = logging.getLogger(__name__)


class Environment:
    """Mapping from symbol names to Lisp values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Optional[dict[str, LispValue]] = None):
        self.vars: dict[str, LispValue] = dict(bindings or {})

    def define(self, name: str, value: LispValue) -> None:
        """Bind `name` to `value`, replacing any previous binding."""
        # Rendered lazily by logging, only when debug output is enabled
        logger.debug("define %s = %s", name, value)
        self.vars[name] = value

    def lookup(self, name: str) -> LispValue:
        """Return the value bound to `name`.

        Raises UndefinedSymbol if the name is not bound.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise UndefinedSymbol(name) from None

    def get(self, name: str, default: LispValue = None) -> LispValue:
        return self.vars.get(name, default)

    def update(self, mapping: dict[str, LispValue]) -> None:
        """Bulk-define a mapping of name -> value."""
        for k, v in mapping.items():
            self.define(k, v)

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{k}: {to_string(v)}" for k, v in self.vars.items()))
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {self}>"
