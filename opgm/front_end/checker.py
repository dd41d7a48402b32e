"""Semantic checks of parsed queries."""

from __future__ import annotations

from enum import Enum

from opgm.front_end.ast import Ast, Expr, GispError, Op


class _Type(Enum):
    INT = "int"
    BOOL = "bool"


def _graph_error() -> GispError:
    return GispError("graph")


def _type_error() -> GispError:
    return GispError("type")


def _check_vertices(vertices: list) -> set[int]:
    vids: set[int] = set()
    for vid, _ in vertices:
        if vid in vids:
            raise _graph_error()
        vids.add(vid)
    return vids


def _check_arcs(vids: set[int], arcs: list) -> None:
    seen = set()
    for src, dst, elabel in arcs:
        if src not in vids or dst not in vids or (src, dst, elabel) in seen:
            raise _graph_error()
        seen.add((src, dst, elabel))


def _check_edges(vids: set[int], edges: list) -> None:
    seen = set()
    for src, dst, elabel in edges:
        if src not in vids or dst not in vids:
            raise _graph_error()
        for key in ((src, dst, elabel), (dst, src, elabel)):
            if key in seen:
                raise _graph_error()
            seen.add(key)


def check_graph(ast: Ast) -> set[int]:
    """Validate the pattern graph and return its vertex ids."""
    if not ast.arcs and not ast.edges:
        raise _graph_error()
    vids = _check_vertices(ast.vertices)
    _check_arcs(vids, ast.arcs)
    _check_edges(vids, ast.edges)
    return vids


def _type_of(vids: set[int], expr: Expr) -> _Type:
    op = expr.op
    if op is Op.VID:
        if expr.value not in vids:
            raise _graph_error()
        return _Type.INT
    if op is Op.INT:
        return _Type.INT
    if op is Op.BOOL:
        return _Type.BOOL
    if op in (Op.AND, Op.OR, Op.NOT):
        expected, result = _Type.BOOL, _Type.BOOL
    elif op is Op.MOD:
        expected, result = _Type.INT, _Type.INT
    else:
        expected, result = _Type.INT, _Type.BOOL
    if all(_type_of(vids, arg) is expected for arg in expr.args):
        return result
    raise _type_error()


def check(ast: Ast) -> None:
    """Raise :class:`GispError` if the query is ill-formed or ill-typed."""
    vids = check_graph(ast)
    if ast.constraint is not None and _type_of(vids, ast.constraint) is not _Type.BOOL:
        raise _type_error()