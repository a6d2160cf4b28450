"""Expression tree produced by the parser.

Each node keeps the tokens it was built from so that later stages can point
back at the source. Sub-trees are owned by exactly one parent.
"""

from __future__ import annotations

from dataclasses import dataclass

from alone.types.token import Token


class Expr:
    """Base class for all expression nodes."""
    __slots__ = ()


@dataclass(frozen=True)
class SymbolExpr(Expr):
    token: Token
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class NumberExpr(Expr):
    token: Token
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class StrExpr(Expr):
    value: str

    def __str__(self):
        return f'"{self.value}"'


@dataclass(frozen=True)
class IfExpr(Expr):
    open_tok: Token
    if_tok: Token
    condition: Expr
    then_branch: Expr
    else_branch: Expr
    close_tok: Token

    def __str__(self):
        return f"({self.if_tok} {self.condition} {self.then_branch} {self.else_branch})"


@dataclass(frozen=True)
class DefineExpr(Expr):
    open_tok: Token
    define_tok: Token
    symbol_tok: Token
    value: Expr
    close_tok: Token

    def __str__(self):
        return f"({self.define_tok} {self.symbol_tok} {self.value})"


@dataclass(frozen=True)
class CallExpr(Expr):
    open_tok: Token
    symbol_tok: Token
    args: tuple[Expr, ...]
    close_tok: Token

    def __str__(self):
        parts = [str(self.symbol_tok)] + [str(a) for a in self.args]
        return "(" + " ".join(parts) + ")"
