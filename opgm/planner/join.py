"""Join plans that combine the results of several star scans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from opgm.pattern.graph import PatternGraph
from opgm.planner.info import IndexType, StarInfo

SrEqv = tuple[int, int]
"""A (super row, equivalence class) pair."""


@dataclass
class IndexedJoinPlan:
    """Probe the index of a star with the given (super row, eqv) columns."""

    scan: list[SrEqv] = field(default_factory=list)
    index_id: int = 0


@dataclass
class IntersectionPlan:
    """Columns whose vertex sets are intersected for one shared leaf."""

    intersection: list[SrEqv] = field(default_factory=list)


def _get_leaves(pattern_graph: PatternGraph, stars: Sequence[StarInfo]) -> list[int]:
    roots = {star.root for star in stars}
    return sorted({uid for uid, _ in pattern_graph.vertices()} - roots)


def _create_vertex_eqv(
    stars: Sequence[StarInfo],
    leaves: list[int],
    uid_sr_eqvs: dict[int, tuple[SrEqv, ...]],
) -> dict[int, int]:
    sr_eqvs_leaves: dict[tuple[SrEqv, ...], list[int]] = {}
    for leaf in leaves:
        sr_eqvs_leaves.setdefault(uid_sr_eqvs[leaf], []).append(leaf)
    vertex_eqv = {star.root: eqv for eqv, star in enumerate(stars)}
    eqv = len(stars)
    visited: set[int] = set()
    for leaf in leaves:
        if leaf in visited:
            continue
        for uid in sr_eqvs_leaves[uid_sr_eqvs[leaf]]:
            vertex_eqv[uid] = eqv
            visited.add(uid)
        eqv += 1
    return vertex_eqv


def _create_indexed_joins(
    stars: Sequence[StarInfo], uid_sr_eqvs: dict[int, tuple[SrEqv, ...]]
) -> list[IndexedJoinPlan]:
    return [
        IndexedJoinPlan(
            [(sr, eqv) for sr, eqv in uid_sr_eqvs[star.root] if sr < i],
            star.id,
        )
        for i, star in enumerate(stars)
        if i > 0
    ]


class JoinPlan:
    """How the super rows of several stars are joined into matches."""

    def __init__(
        self,
        pattern_graph: PatternGraph,
        index_type: IndexType,
        stars: Sequence[StarInfo],
    ) -> None:
        collected: dict[int, set[SrEqv]] = {}
        for star_id, star in enumerate(stars):
            for uid, eqv in star.vertex_eqv.items():
                collected.setdefault(uid, set()).add((star_id, eqv))
        uid_sr_eqvs = {uid: tuple(sorted(pairs)) for uid, pairs in collected.items()}
        leaves = _get_leaves(pattern_graph, stars)
        self.vertex_eqv: dict[int, int] = _create_vertex_eqv(stars, leaves, uid_sr_eqvs)
        self.sorted_vertex_eqv: list[tuple[int, int]] = sorted(self.vertex_eqv.items())
        self.num_cover = len(stars)
        self.index_type = index_type
        self.indexed_joins = _create_indexed_joins(stars, uid_sr_eqvs)
        eqv_pivots = {eqv: uid for uid, eqv in self.vertex_eqv.items()}
        self.intersections = [
            IntersectionPlan(list(uid_sr_eqvs[pivot]))
            for _, pivot in sorted(eqv_pivots.items())[len(stars):]
        ]