"""Scan plans: which characteristics to match for each root label."""

from __future__ import annotations

from typing import Sequence

from opgm.pattern.characteristic import Characteristic
from opgm.pattern.graph import PatternGraph
from opgm.planner.info import CharacteristicInfo, StarInfo


class ScanPlan:
    """Characteristics to scan, grouped by root label, and the stars they cover."""

    def __init__(self, pattern_graph: PatternGraph, roots: Sequence[int]) -> None:
        ids: dict[Characteristic, int] = {}
        for root in roots:
            ids.setdefault(Characteristic.from_pattern(pattern_graph, root), len(ids))
        by_vlabel: dict[int, list[CharacteristicInfo]] = {}
        for characteristic, characteristic_id in ids.items():
            by_vlabel.setdefault(characteristic.root_vlabel, []).append(
                CharacteristicInfo(characteristic, characteristic_id)
            )
        self.plan: list[tuple[int, list[CharacteristicInfo]]] = [
            (vlabel, sorted(by_vlabel[vlabel])) for vlabel in sorted(by_vlabel)
        ]
        self.stars: list[StarInfo] = [
            StarInfo.from_pattern(
                pattern_graph,
                root,
                ids[Characteristic.from_pattern(pattern_graph, root)],
            )
            for root in roots
        ]