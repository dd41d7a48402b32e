"""Vertex and edge constraints compiled from constraint expressions."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Sequence, Union

from opgm.front_end.ast import Expr, Op

Value = Union[bool, int]

_COMPARISONS = {
    Op.LT: operator.lt,
    Op.GE: operator.ge,
    Op.EQ: operator.eq,
    Op.NEQ: operator.ne,
}


def _truncated_mod(x: int, y: int) -> int:
    if y == 0:
        raise ZeroDivisionError("modulo by zero")
    remainder = abs(x) % abs(y)
    return remainder if x >= 0 else -remainder


def _as_bool(value: Value) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return value


def _as_int(value: Value) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


def evaluate(expr: Expr, env: Sequence[int]) -> Value:
    """Evaluate ``expr`` with vertex ``u<i>`` bound to ``env[i]``."""
    op = expr.op
    if op is Op.VID:
        index = expr.value
        if not 0 <= index < len(env):
            raise IndexError(f"u{index} is not bound")
        return int(env[index])
    if op is Op.INT or op is Op.BOOL:
        return expr.value
    if op is Op.AND:
        left, right = expr.args
        return evaluate(left, env) is True and evaluate(right, env) is True
    if op is Op.OR:
        left, right = expr.args
        return evaluate(left, env) is True or evaluate(right, env) is True
    if op is Op.NOT:
        return not _as_bool(evaluate(expr.args[0], env))
    left, right = (_as_int(evaluate(arg, env)) for arg in expr.args)
    if op is Op.MOD:
        return _truncated_mod(left, right)
    return _COMPARISONS[op](left, right)


@dataclass(frozen=True, order=True)
class VertexConstraint:
    """A predicate on one vertex id, where ``u0`` is the vertex."""

    expr: Expr

    def __call__(self, v: int) -> bool:
        return _as_bool(evaluate(self.expr, (v,)))

    def __str__(self) -> str:
        return str(self.expr)


@dataclass(frozen=True, order=True)
class EdgeConstraint:
    """A predicate on the two ends of an edge, ``u0`` and ``u1``."""

    expr: Expr

    def __call__(self, v0: int, v1: int) -> bool:
        return _as_bool(evaluate(self.expr, (v0, v1)))

    def __str__(self) -> str:
        return str(self.expr)