import copy

import pytest

from opgm.front_end.constraints import EdgeConstraint, VertexConstraint
from opgm.front_end.parser import expr_parse
from opgm.pattern.graph import NeighborInfo, PatternGraph

VERTICES = [(3, 1), (1, 1), (2, 1), (4, 2)]
ARCS = [(1, 2, 10), (1, 3, 10), (1, 4, 20), (1, 4, 30), (2, 1, 10), (3, 4, 20)]
EDGES = [(1, 2, 5), (2, 3, 6)]


def build(arcs=ARCS, edges=()):
    p = PatternGraph()
    for vid, vlabel in VERTICES:
        p.add_vertex(vid, vlabel)
    for src, dst, elabel in arcs:
        assert p.add_arc(src, dst, elabel)
    for src, dst, elabel in edges:
        assert p.add_edge(src, dst, elabel)
    return p


def test_vertices_sorted():
    assert build().vertices() == sorted(VERTICES)


def test_arcs_sorted():
    assert build().arcs() == sorted(ARCS)


def test_edges_in_both_directions():
    p = build(arcs=(), edges=EDGES)
    result = p.edges()
    assert len(result) == 2 * len(EDGES)
    for a, b, label in EDGES:
        assert (a, b, label) in result
        assert (b, a, label) in result
    assert result == sorted(result)
    assert p.arcs() == []


def test_unknown_endpoint_rejected():
    p = build(arcs=())
    assert not p.add_arc(1, 99, 0)
    assert not p.add_edge(99, 1, 0)
    assert p.arcs() == [] and p.edges() == []


def test_degree_sums():
    p = build(edges=EDGES)
    vids = [v for v, _ in VERTICES]
    assert sum(p.out_deg(v) for v in vids) == len(ARCS)
    assert sum(p.in_deg(v) for v in vids) == len(ARCS)
    assert sum(p.undirected_deg(v) for v in vids) == 2 * len(EDGES)


def test_unknown_vertex_queries():
    p = build()
    assert p.vlabel(99) is None
    assert p.in_deg(99) is None
    assert p.neighbors(99) is None
    with pytest.raises(KeyError):
        p.vertex_constraint(99)
    with pytest.raises(KeyError):
        p.edge_constraint(2, 4)


def test_neighbor_info_contents():
    p = build()
    info = p.neighbors(1)[4]
    assert info.vlabel == p.vlabel(4)
    assert info.v_to_n_elabels == {20, 30}
    assert info.n_to_v_elabels == set()
    assert p.neighbors(4)[1].n_to_v_elabels == {20, 30}


def test_vertex_constraint_propagates_to_neighbors():
    p = build()
    c = VertexConstraint(expr_parse("(< u0 5)"))
    assert p.add_vertex_constraint(1, c)
    assert p.vertex_constraint(1) == c
    for n in p.neighbors(1):
        assert p.neighbors(n)[1].neighbor_constraint == c
    assert not p.add_vertex_constraint(99, c)


def test_constraint_set_before_arc_reaches_new_neighbor():
    p = build(arcs=())
    c = VertexConstraint(expr_parse("(< u0 5)"))
    p.add_vertex_constraint(4, c)
    p.add_arc(1, 4, 0)
    assert p.neighbors(1)[4].neighbor_constraint == c
    assert p.neighbors(4)[1].neighbor_constraint is None


def test_edge_constraint():
    p = build()
    f12 = EdgeConstraint(expr_parse("(< u0 u1)"))
    f21 = EdgeConstraint(expr_parse("(< u1 u0)"))
    assert p.add_edge_constraint(1, 2, (f12, f21))
    assert p.edge_constraint(1, 2) == f12
    assert p.edge_constraint(2, 1) == f21
    assert not p.add_edge_constraint(2, 4, (f12, f21))
    assert p.add_edge_constraint(1, 2, None)
    assert p.edge_constraint(1, 2) is None


def test_remove_vertex():
    p = build(edges=EDGES)
    p.remove_vertex(1)
    assert p.vlabel(1) is None
    assert all(src != 1 and dst != 1 for src, dst, _ in p.arcs())
    assert all(src != 1 and dst != 1 for src, dst, _ in p.edges())
    for v, _ in p.vertices():
        assert 1 not in p.neighbors(v)
    vids = [v for v, _ in p.vertices()]
    assert sum(p.out_deg(v) for v in vids) == len(p.arcs())
    assert sum(p.in_deg(v) for v in vids) == len(p.arcs())


def test_remove_unknown_vertex():
    with pytest.raises(KeyError):
        build().remove_vertex(99)


def test_copy_is_independent():
    p = build()
    q = p.copy()
    q.remove_vertex(4)
    q.add_vertex_constraint(1, VertexConstraint(expr_parse("(< u0 5)")))
    assert p.arcs() == sorted(ARCS)
    assert p.vertex_constraint(1) is None
    assert copy.copy(p).arcs() == p.arcs()


def test_add_vertex_relabels_existing():
    p = build()
    p.add_vertex(1, 7)
    assert p.vlabel(1) == 7
    assert p.arcs() == sorted(ARCS)


def test_neighbor_info_constraint_ordering():
    plain = NeighborInfo(1)
    constrained = NeighborInfo(1, neighbor_constraint=VertexConstraint(expr_parse("(< u0 5)")))
    assert plain < constrained
    assert plain != constrained