import pytest

from opgm.pattern.graph import PatternGraph
from opgm.planner.decompose import decompose_stars


class _CountingDataGraph:
    def __init__(self, counts=None):
        self._counts = counts or {}

    def count(self, vlabel):
        return self._counts.get(vlabel, 0)


def _rectangle():
    p = PatternGraph()
    for vid in (1, 2, 3, 4):
        p.add_vertex(vid, 0)
    for u1, u2 in [(1, 2), (2, 3), (3, 4), (4, 1)]:
        p.add_edge(u1, u2, 0)
    return p


def _diamond():
    p = _rectangle()
    p.add_edge(1, 3, 0)
    return p


def _diamond2():
    p = PatternGraph()
    for vid, vlabel in [(1, 1), (2, 1), (3, 1), (4, 2)]:
        p.add_vertex(vid, vlabel)
    for u1, u2, elabel in [
        (1, 2, 10),
        (1, 3, 10),
        (1, 4, 20),
        (1, 4, 30),
        (2, 1, 10),
        (2, 4, 20),
        (3, 1, 10),
        (3, 4, 20),
    ]:
        p.add_arc(u1, u2, elabel)
    return p


def test_decompose_rectangle():
    assert decompose_stars(_CountingDataGraph(), _rectangle()) == [1, 2, 3]


def test_decompose_diamond():
    assert decompose_stars(_CountingDataGraph(), _diamond()) == [1, 3]


def test_decompose_diamond2():
    assert decompose_stars(_CountingDataGraph(), _diamond2()) == [1, 4]


def test_rarer_label_is_preferred():
    p = PatternGraph()
    p.add_vertex(1, 0)
    p.add_vertex(2, 1)
    p.add_edge(1, 2, 0)
    assert decompose_stars(_CountingDataGraph({0: 100, 1: 5}), p) == [2]
    assert decompose_stars(_CountingDataGraph({0: 5, 1: 100}), p) == [1]


def test_pattern_is_left_untouched():
    p = _diamond()
    decompose_stars(_CountingDataGraph(), p)
    assert p.edges() == _diamond().edges()


def test_every_edge_is_covered():
    p = _rectangle()
    roots = set(decompose_stars(_CountingDataGraph(), p))
    assert all(u in roots or v in roots for u, v, _ in p.edges())


def test_empty_pattern_raises():
    with pytest.raises(ValueError):
        decompose_stars(_CountingDataGraph(), PatternGraph())