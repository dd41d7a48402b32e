"""Characteristics: the isomorphism class of a star in a pattern graph."""

from __future__ import annotations

import copy
import functools
from dataclasses import dataclass
from typing import Optional

from opgm.front_end.constraints import VertexConstraint
from opgm.pattern.graph import NeighborInfo, PatternGraph


def _optional_key(constraint: Optional[VertexConstraint]) -> tuple:
    return (0,) if constraint is None else (1, constraint.expr)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Characteristic:
    """The characteristic of a star graph.

    Isomorphic stars have equal characteristics.
    """

    root_vlabel: int
    root_constraint: Optional[VertexConstraint]
    in_deg: int
    out_deg: int
    undirected_deg: int
    infos: tuple[NeighborInfo, ...]

    @classmethod
    def from_pattern(cls, pattern_graph: PatternGraph, root: int) -> Characteristic:
        """Describe the star rooted at ``root``; raises KeyError for an unknown root."""
        root_vlabel = pattern_graph.vlabel(root)
        neighbors = pattern_graph.neighbors(root)
        if root_vlabel is None or neighbors is None:
            raise KeyError(root)
        infos = {copy.copy(info) for info in neighbors.values()}
        return cls(
            root_vlabel=root_vlabel,
            root_constraint=pattern_graph.vertex_constraint(root),
            in_deg=sum(len(info.n_to_v_elabels) for info in neighbors.values()),
            out_deg=sum(len(info.v_to_n_elabels) for info in neighbors.values()),
            undirected_deg=sum(
                len(info.undirected_elabels) for info in neighbors.values()
            ),
            infos=tuple(sorted(infos)),
        )

    def sort_key(self) -> tuple:
        return (
            self.root_vlabel,
            _optional_key(self.root_constraint),
            self.in_deg,
            self.out_deg,
            self.undirected_deg,
            tuple(info.sort_key() for info in self.infos),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Characteristic):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: Characteristic) -> bool:
        if not isinstance(other, Characteristic):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())