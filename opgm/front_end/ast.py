"""Syntax tree of graph matching queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union

VId = int
"""Vertex identifier (32-bit signed)."""
VLabel = int
"""Vertex label (16-bit signed)."""
ELabel = int
"""Edge label (16-bit signed)."""

VID_MIN, VID_MAX = -(2**31), 2**31 - 1
LABEL_MIN, LABEL_MAX = -(2**15), 2**15 - 1


class GispError(Exception):
    """Error raised while parsing or checking a query."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"


class Op(IntEnum):
    """Kinds of expression nodes, in their ordering."""

    VID = 0
    INT = 1
    BOOL = 2
    AND = 3
    OR = 4
    NOT = 5
    LT = 6
    GE = 7
    EQ = 8
    NEQ = 9
    MOD = 10

    @property
    def is_leaf(self) -> bool:
        return self <= Op.BOOL

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Op.AND: "and",
    Op.OR: "or",
    Op.NOT: "not",
    Op.LT: "<",
    Op.GE: ">=",
    Op.EQ: "=",
    Op.NEQ: "!=",
    Op.MOD: "mod",
}

BINARY_OPS = frozenset({Op.AND, Op.OR, Op.LT, Op.GE, Op.EQ, Op.NEQ, Op.MOD})


@dataclass(frozen=True, order=True)
class Expr:
    """An immutable, ordered, hashable constraint expression."""

    op: Op
    args: tuple

    @classmethod
    def vid(cls, value: int) -> Expr:
        return cls(Op.VID, (int(value),))

    @classmethod
    def int(cls, value: int) -> Expr:
        return cls(Op.INT, (int(value),))

    @classmethod
    def bool(cls, value: bool) -> Expr:
        return cls(Op.BOOL, (bool(value),))

    @classmethod
    def binary(cls, op: Op, left: Expr, right: Expr) -> Expr:
        if op not in BINARY_OPS:
            raise ValueError(f"{op.name} is not a binary operator")
        return cls(op, (left, right))

    @classmethod
    def negate(cls, arg: Expr) -> Expr:
        return cls(Op.NOT, (arg,))

    @property
    def value(self) -> Union[int, bool]:
        """The payload of a leaf node."""
        if not self.op.is_leaf:
            raise AttributeError(f"{self.op.name} node has no value")
        return self.args[0]

    def __str__(self) -> str:
        if self.op is Op.VID:
            return f"u{self.args[0]}"
        if self.op is Op.INT:
            return str(self.args[0])
        if self.op is Op.BOOL:
            return "#t" if self.args[0] else "#f"
        return "(" + " ".join([self.op.symbol, *map(str, self.args)]) + ")"


@dataclass
class Ast:
    """A parsed query: pattern vertices, arcs, edges and an optional constraint."""

    vertices: list[tuple[VId, VLabel]] = field(default_factory=list)
    arcs: list[tuple[VId, VId, ELabel]] = field(default_factory=list)
    edges: list[tuple[VId, VId, ELabel]] = field(default_factory=list)
    constraint: Optional[Expr] = None