"""Decomposition of a pattern graph into stars."""

from __future__ import annotations

from typing import NamedTuple, Protocol

from opgm.pattern.graph import PatternGraph


class DataGraph(Protocol):
    """What the decomposition needs to know about the data graph."""

    def count(self, vlabel: int) -> int:
        """Number of data vertices carrying ``vlabel``."""


class _VertexValue(NamedTuple):
    """Selection value of a vertex; higher values are selected first."""

    deg: int
    num_constraints: int
    neg_vlabel_freq: int
    neg_vid: int

    @property
    def vid(self) -> int:
        return -self.neg_vid


def _vertex_value(d: DataGraph, p: PatternGraph, u: int) -> _VertexValue:
    neighbors = p.neighbors(u)
    if neighbors is None:
        raise KeyError(u)
    deg = 0
    num_constraints = 0 if p.vertex_constraint(u) is None else 1
    for info in neighbors.values():
        deg += (
            len(info.v_to_n_elabels)
            + len(info.n_to_v_elabels)
            + len(info.undirected_elabels)
        )
        num_constraints += (info.neighbor_constraint is not None) + (
            info.edge_constraint is not None
        )
    return _VertexValue(deg, num_constraints, -d.count(p.vlabel(u)), -u)


def decompose_stars(data_graph: DataGraph, pattern_graph: PatternGraph) -> list[int]:
    """Return the roots of stars that cover every edge of the pattern.

    The order of the roots matters for the join.
    """
    values = [
        _vertex_value(data_graph, pattern_graph, u)
        for u, _ in pattern_graph.vertices()
    ]
    if not values:
        raise ValueError("pattern graph has no vertices")
    first = max(values)
    candidates = {first.vid: first}
    graph = pattern_graph.copy()
    roots: list[int] = []
    while candidates:
        root = max(candidates.values()).vid
        del candidates[root]
        for n in graph.neighbors(root):
            candidates[n] = _vertex_value(data_graph, pattern_graph, n)
        graph.remove_vertex(root)
        for vid in list(candidates):
            if graph.in_deg(vid) + graph.out_deg(vid) + graph.undirected_deg(vid) == 0:
                del candidates[vid]
        roots.append(root)
    return roots