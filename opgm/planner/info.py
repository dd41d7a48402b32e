"""Planner descriptions of characteristics and stars."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import Enum

from opgm.pattern.characteristic import Characteristic
from opgm.pattern.graph import NeighborInfo, PatternGraph


class IndexType(Enum):
    """How the join indexes are built."""

    SORTED = "sorted"
    HASH = "hash"


@functools.total_ordering
class CharacteristicInfo:
    """A characteristic with its id and its neighbours grouped by label.

    Each neighbour info is numbered by its position in the characteristic,
    starting at 1; 0 stands for the root.
    """

    def __init__(self, characteristic: Characteristic, characteristic_id: int) -> None:
        self.id = characteristic_id
        self.characteristic = characteristic
        self.nlabel_ninfo_eqvs: dict[int, list[tuple[NeighborInfo, int]]] = {}
        for eqv, ninfo in enumerate(characteristic.infos, start=1):
            self.nlabel_ninfo_eqvs.setdefault(ninfo.vlabel, []).append((ninfo, eqv))

    def sort_key(self) -> tuple:
        return (
            self.id,
            self.characteristic.sort_key(),
            tuple(
                (label, tuple((info.sort_key(), eqv) for info, eqv in pairs))
                for label, pairs in sorted(self.nlabel_ninfo_eqvs.items())
            ),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacteristicInfo):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: CharacteristicInfo) -> bool:
        if not isinstance(other, CharacteristicInfo):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def __repr__(self) -> str:
        return f"CharacteristicInfo(id={self.id}, characteristic={self.characteristic!r})"


@dataclass
class StarInfo:
    """A star of the pattern graph and the equivalence class of each vertex in it."""

    root: int
    vertex_cover: list[int]
    characteristic_info: CharacteristicInfo
    vertex_eqv: dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_pattern(
        cls, pattern_graph: PatternGraph, root: int, star_id: int
    ) -> StarInfo:
        characteristic = Characteristic.from_pattern(pattern_graph, root)
        offsets = {
            info: eqv for eqv, info in enumerate(characteristic.infos, start=1)
        }
        vertex_eqv = {root: 0}
        for n, info in pattern_graph.neighbors(root).items():
            vertex_eqv[n] = offsets[info]
        return cls(
            root=root,
            vertex_cover=[root],
            characteristic_info=CharacteristicInfo(characteristic, star_id),
            vertex_eqv=vertex_eqv,
        )

    @property
    def id(self) -> int:
        return self.characteristic_info.id

    @property
    def characteristic(self) -> Characteristic:
        return self.characteristic_info.characteristic