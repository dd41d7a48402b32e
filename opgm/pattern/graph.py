"""Labelled pattern graphs with vertex and edge constraints."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from opgm.front_end.constraints import EdgeConstraint, VertexConstraint


def _optional_key(constraint) -> tuple:
    return (0,) if constraint is None else (1, constraint.expr)


@functools.total_ordering
class NeighborInfo:
    """What a vertex knows about one of its neighbours.

    Compares, orders and hashes by value; do not change one held in a set.
    """

    __slots__ = (
        "vlabel",
        "n_to_v_elabels",
        "v_to_n_elabels",
        "undirected_elabels",
        "neighbor_constraint",
        "edge_constraint",
    )

    def __init__(
        self,
        vlabel: int,
        n_to_v_elabels: Iterable[int] = (),
        v_to_n_elabels: Iterable[int] = (),
        undirected_elabels: Iterable[int] = (),
        neighbor_constraint: Optional[VertexConstraint] = None,
        edge_constraint: Optional[EdgeConstraint] = None,
    ) -> None:
        self.vlabel = vlabel
        self.n_to_v_elabels: set[int] = set(n_to_v_elabels)
        self.v_to_n_elabels: set[int] = set(v_to_n_elabels)
        self.undirected_elabels: set[int] = set(undirected_elabels)
        self.neighbor_constraint = neighbor_constraint
        self.edge_constraint = edge_constraint

    def sort_key(self) -> tuple:
        return (
            self.vlabel,
            tuple(sorted(self.n_to_v_elabels)),
            tuple(sorted(self.v_to_n_elabels)),
            tuple(sorted(self.undirected_elabels)),
            _optional_key(self.neighbor_constraint),
            _optional_key(self.edge_constraint),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NeighborInfo):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: NeighborInfo) -> bool:
        if not isinstance(other, NeighborInfo):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def __copy__(self) -> NeighborInfo:
        return NeighborInfo(
            self.vlabel,
            self.n_to_v_elabels,
            self.v_to_n_elabels,
            self.undirected_elabels,
            self.neighbor_constraint,
            self.edge_constraint,
        )

    def __repr__(self) -> str:
        return (
            f"NeighborInfo(vlabel={self.vlabel}, "
            f"n_to_v={sorted(self.n_to_v_elabels)}, "
            f"v_to_n={sorted(self.v_to_n_elabels)}, "
            f"undirected={sorted(self.undirected_elabels)}, "
            f"neighbor_constraint={self.neighbor_constraint}, "
            f"edge_constraint={self.edge_constraint})"
        )


@dataclass
class _Node:
    vlabel: int
    in_deg: int = 0
    out_deg: int = 0
    undirected_deg: int = 0
    neighbors: dict[int, NeighborInfo] = field(default_factory=dict)
    constraint: Optional[VertexConstraint] = None

    def _info(self, n: int, vlabel: int) -> NeighborInfo:
        info = self.neighbors.get(n)
        if info is None:
            info = self.neighbors[n] = NeighborInfo(vlabel)
        return info

    def add_predecessor(self, n: int, vlabel: int, elabel: int) -> None:
        self._info(n, vlabel).n_to_v_elabels.add(elabel)
        self.in_deg += 1

    def add_successor(self, n: int, vlabel: int, elabel: int) -> None:
        self._info(n, vlabel).v_to_n_elabels.add(elabel)
        self.out_deg += 1

    def add_neighbor(self, n: int, vlabel: int, elabel: int) -> None:
        self._info(n, vlabel).undirected_elabels.add(elabel)
        self.undirected_deg += 1

    def remove_neighbor(self, n: int) -> None:
        info = self.neighbors.pop(n)
        self.in_deg -= len(info.n_to_v_elabels)
        self.out_deg -= len(info.v_to_n_elabels)
        self.undirected_deg -= len(info.undirected_elabels)

    def copy(self) -> _Node:
        return _Node(
            self.vlabel,
            self.in_deg,
            self.out_deg,
            self.undirected_deg,
            {n: info.__copy__() for n, info in self.neighbors.items()},
            self.constraint,
        )


class PatternGraph:
    """A pattern graph of labelled vertices, arcs and undirected edges."""

    def __init__(self) -> None:
        self._vertices: dict[int, _Node] = {}

    def add_vertex(self, vid: int, vlabel: int) -> None:
        node = self._vertices.get(vid)
        if node is None:
            self._vertices[vid] = _Node(vlabel)
        else:
            node.vlabel = vlabel

    def add_arc(self, u1: int, u2: int, elabel: int) -> bool:
        n1, n2 = self._vertices.get(u1), self._vertices.get(u2)
        if n1 is None or n2 is None:
            return False
        n1.add_successor(u2, n2.vlabel, elabel)
        n2.add_predecessor(u1, n1.vlabel, elabel)
        self._update_vertex_constraint(u1, n1.constraint)
        self._update_vertex_constraint(u2, n2.constraint)
        return True

    def add_edge(self, u1: int, u2: int, elabel: int) -> bool:
        n1, n2 = self._vertices.get(u1), self._vertices.get(u2)
        if n1 is None or n2 is None:
            return False
        n1.add_neighbor(u2, n2.vlabel, elabel)
        n2.add_neighbor(u1, n1.vlabel, elabel)
        self._update_vertex_constraint(u1, n1.constraint)
        self._update_vertex_constraint(u2, n2.constraint)
        return True

    def add_vertex_constraint(
        self, vid: int, constraint: Optional[VertexConstraint]
    ) -> bool:
        """Set the constraint of ``vid`` and tell its neighbours about it."""
        node = self._vertices.get(vid)
        if node is None:
            return False
        node.constraint = constraint
        self._update_vertex_constraint(vid, constraint)
        return True

    def add_edge_constraint(
        self,
        u1: int,
        u2: int,
        constraint: Optional[tuple[EdgeConstraint, EdgeConstraint]],
    ) -> bool:
        """Set the constraints *f(u1, u2)* and *f(u2, u1)* of an adjacent pair."""
        n1, n2 = self._vertices.get(u1), self._vertices.get(u2)
        if n1 is None or n2 is None or u2 not in n1.neighbors:
            return False
        f12, f21 = (None, None) if constraint is None else constraint
        n1.neighbors[u2].edge_constraint = f12
        info = n2.neighbors.get(u1)
        if info is not None:
            info.edge_constraint = f21
        return True

    def vlabel(self, vid: int) -> Optional[int]:
        node = self._vertices.get(vid)
        return None if node is None else node.vlabel

    def in_deg(self, vid: int) -> Optional[int]:
        node = self._vertices.get(vid)
        return None if node is None else node.in_deg

    def out_deg(self, vid: int) -> Optional[int]:
        node = self._vertices.get(vid)
        return None if node is None else node.out_deg

    def undirected_deg(self, vid: int) -> Optional[int]:
        node = self._vertices.get(vid)
        return None if node is None else node.undirected_deg

    def vertex_constraint(self, vid: int) -> Optional[VertexConstraint]:
        """The constraint of ``vid``; raises KeyError for an unknown vertex."""
        return self._vertices[vid].constraint

    def edge_constraint(self, u1: int, u2: int) -> Optional[EdgeConstraint]:
        """The constraint on ``(u1, u2)``; raises KeyError if they are not adjacent."""
        return self._vertices[u1].neighbors[u2].edge_constraint

    def neighbors(self, vid: int) -> Optional[Mapping[int, NeighborInfo]]:
        node = self._vertices.get(vid)
        return None if node is None else MappingProxyType(node.neighbors)

    def vertices(self) -> list[tuple[int, int]]:
        return sorted((v, node.vlabel) for v, node in self._vertices.items())

    def arcs(self) -> list[tuple[int, int, int]]:
        return sorted(
            (v, n, e)
            for v, node in self._vertices.items()
            for n, info in node.neighbors.items()
            for e in info.v_to_n_elabels
        )

    def edges(self) -> list[tuple[int, int, int]]:
        return sorted(
            (v, n, e)
            for v, node in self._vertices.items()
            for n, info in node.neighbors.items()
            for e in info.undirected_elabels
        )

    def remove_vertex(self, vid: int) -> None:
        """Remove ``vid`` and every arc and edge touching it."""
        node = self._vertices[vid]
        for n in list(node.neighbors):
            neighbor = self._vertices.get(n)
            if neighbor is not None and vid in neighbor.neighbors:
                neighbor.remove_neighbor(vid)
        self._vertices.pop(vid, None)

    def copy(self) -> PatternGraph:
        clone = PatternGraph()
        clone._vertices = {v: node.copy() for v, node in self._vertices.items()}
        return clone

    def __copy__(self) -> PatternGraph:
        return self.copy()

    def _update_vertex_constraint(
        self, n: int, constraint: Optional[VertexConstraint]
    ) -> None:
        for v in self._vertices[n].neighbors:
            self._vertices[v].neighbors[n].neighbor_constraint = constraint