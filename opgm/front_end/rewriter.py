"""Simplification of constraint expressions."""

from __future__ import annotations

import operator
from typing import Iterator

from opgm.front_end.ast import Expr, GispError, Op

_TRUE = Expr.bool(True)
_FALSE = Expr.bool(False)

_COMPARISONS = {
    Op.LT: operator.lt,
    Op.GE: operator.ge,
    Op.EQ: operator.eq,
    Op.NEQ: operator.ne,
}

_NEGATED = {Op.LT: Op.GE, Op.GE: Op.LT, Op.EQ: Op.NEQ, Op.NEQ: Op.EQ}


def _truncated_mod(x: int, y: int) -> int:
    remainder = abs(x) % abs(y)
    return remainder if x >= 0 else -remainder


def _and(left: Expr, right: Expr) -> Expr:
    left = simplify(left)
    if left == _TRUE:
        return simplify(right)
    if left == _FALSE:
        return _FALSE
    right = simplify(right)
    if right == _TRUE:
        return left
    if right == _FALSE:
        return _FALSE
    return Expr.binary(Op.AND, left, right)


def _or(left: Expr, right: Expr) -> Expr:
    left = simplify(left)
    if left == _TRUE:
        return _TRUE
    if left == _FALSE:
        return simplify(right)
    right = simplify(right)
    if right == _TRUE:
        return _TRUE
    if right == _FALSE:
        return left
    return Expr.binary(Op.OR, left, right)


def _not(arg: Expr) -> Expr:
    arg = simplify(arg)
    if arg.op is Op.BOOL:
        return Expr.bool(not arg.value)
    if arg.op is Op.AND:
        return Expr.negate(arg)
    if arg.op is Op.OR:
        left, right = arg.args
        return _and(Expr.negate(left), Expr.negate(right))
    if arg.op is Op.NOT:
        return simplify(arg.args[0])
    if arg.op in _NEGATED:
        return simplify(Expr.binary(_NEGATED[arg.op], *arg.args))
    raise GispError("type")


def _compare(op: Op, left: Expr, right: Expr) -> Expr:
    left, right = simplify(left), simplify(right)
    if op in (Op.EQ, Op.NEQ) and left.op is Op.VID and left == right:
        return Expr.bool(op is Op.EQ)
    if left.op is Op.INT and right.op is Op.INT:
        return Expr.bool(_COMPARISONS[op](left.value, right.value))
    return Expr.binary(op, left, right)


def _mod(left: Expr, right: Expr) -> Expr:
    left, right = simplify(left), simplify(right)
    if left.op is Op.INT and right.op is Op.INT:
        return Expr.int(_truncated_mod(left.value, right.value))
    return Expr.binary(Op.MOD, left, right)


def simplify(expr: Expr) -> Expr:
    """Fold constants and push negations inwards."""
    op = expr.op
    if op.is_leaf:
        return expr
    if op is Op.AND:
        return _and(*expr.args)
    if op is Op.OR:
        return _or(*expr.args)
    if op is Op.NOT:
        return _not(expr.args[0])
    if op is Op.MOD:
        return _mod(*expr.args)
    return _compare(op, *expr.args)


def _flatten_and(expr: Expr) -> Iterator[Expr]:
    if expr.op is Op.AND:
        for arg in expr.args:
            yield from _flatten_and(arg)
    else:
        yield expr


def rewrite(expr: Expr) -> list[Expr]:
    """Simplify ``expr`` and split it into its top-level conjuncts."""
    return list(_flatten_and(simplify(expr)))