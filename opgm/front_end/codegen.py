"""Turning a checked query into a pattern graph with constraints."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from opgm.front_end.ast import Expr, Op
from opgm.front_end.constraints import EdgeConstraint, VertexConstraint
from opgm.pattern.graph import PatternGraph


def _emit_pattern_graph(
    vertices: Iterable[tuple[int, int]],
    arcs: Iterable[tuple[int, int, int]],
    edges: Iterable[tuple[int, int, int]],
) -> PatternGraph:
    p = PatternGraph()
    for vid, vlabel in vertices:
        p.add_vertex(vid, vlabel)
    for src, dst, elabel in arcs:
        p.add_arc(src, dst, elabel)
    for src, dst, elabel in edges:
        p.add_edge(src, dst, elabel)
    return p


def extract_vertices(expr: Expr) -> set[int]:
    """The vertex ids mentioned in ``expr``."""
    if expr.op is Op.VID:
        return {expr.value}
    if expr.op.is_leaf:
        return set()
    return set().union(*(extract_vertices(arg) for arg in expr.args))


def rename_vid(expr: Expr, rules: Mapping[int, int]) -> Expr:
    """Return ``expr`` with every vertex id replaced by ``rules[old]``."""
    if expr.op is Op.VID:
        return Expr.vid(rules[expr.value])
    if expr.op.is_leaf:
        return expr
    return Expr(expr.op, tuple(rename_vid(arg, rules) for arg in expr.args))


def emit_vertex_constraint(expr: Expr) -> VertexConstraint:
    return VertexConstraint(expr)


def emit_edge_constraint(expr: Expr) -> EdgeConstraint:
    return EdgeConstraint(expr)


def codegen(
    vertices: Sequence[tuple[int, int]],
    arcs: Sequence[tuple[int, int, int]],
    edges: Sequence[tuple[int, int, int]],
    constraints: Iterable[Expr],
) -> tuple[PatternGraph, list[Expr]]:
    """Build the pattern graph and attach the local constraints.

    Constraints on one vertex or on an adjacent pair go into the graph;
    all others are returned as global constraints.
    """
    p = _emit_pattern_graph(vertices, arcs, edges)
    global_constraints: list[Expr] = []
    for expr in constraints:
        mentioned = sorted(extract_vertices(expr))
        if len(mentioned) == 1:
            (u1,) = mentioned
            p.add_vertex_constraint(u1, emit_vertex_constraint(rename_vid(expr, {u1: 0})))
            continue
        if len(mentioned) == 2:
            u1, u2 = mentioned
            neighbors = p.neighbors(u1)
            if neighbors is None:
                raise KeyError(u1)
            if u2 in neighbors:
                forward = rename_vid(expr, {u1: 0, u2: 1})
                backward = rename_vid(forward, {0: 1, 1: 0})
                p.add_edge_constraint(
                    u1,
                    u2,
                    (emit_edge_constraint(forward), emit_edge_constraint(backward)),
                )
                continue
        global_constraints.append(expr)
    return p, global_constraints