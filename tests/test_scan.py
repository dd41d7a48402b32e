from opgm.pattern.characteristic import Characteristic
from opgm.pattern.graph import PatternGraph
from opgm.planner.info import CharacteristicInfo
from opgm.planner.scan import ScanPlan


def _pattern_graph():
    p = PatternGraph()
    for u, label in [(1, 1), (2, 2), (3, 2)]:
        p.add_vertex(u, label)
    for u1, u2, label in [(1, 2, 0), (1, 3, 0)]:
        p.add_arc(u1, u2, label)
    return p


def _pattern_graph2():
    p = PatternGraph()
    for vid, vlabel in [(1, 0), (2, 1), (3, 2), (4, 1), (5, 0)]:
        p.add_vertex(vid, vlabel)
    for u1, u2, elabel in [(1, 2, 0), (1, 3, 0), (5, 2, 0), (5, 4, 0)]:
        p.add_arc(u1, u2, elabel)
    return p


def test_scan_plan1():
    p = _pattern_graph()
    plan = ScanPlan(p, [1])
    assert plan.plan == [
        (1, [CharacteristicInfo(Characteristic.from_pattern(p, 1), 0)])
    ]


def test_scan_plan2():
    p = _pattern_graph2()
    plan = ScanPlan(p, [1, 2, 5])
    assert plan.plan == [
        (
            0,
            [
                CharacteristicInfo(Characteristic.from_pattern(p, 1), 0),
                CharacteristicInfo(Characteristic.from_pattern(p, 5), 2),
            ],
        ),
        (1, [CharacteristicInfo(Characteristic.from_pattern(p, 2), 1)]),
    ]


def test_stars_follow_roots():
    p = _pattern_graph2()
    plan = ScanPlan(p, [1, 2, 5])
    assert [star.root for star in plan.stars] == [1, 2, 5]
    assert [star.id for star in plan.stars] == [0, 1, 2]


def test_isomorphic_roots_share_characteristic():
    p = _pattern_graph()
    plan = ScanPlan(p, [2, 3])
    assert [star.id for star in plan.stars] == [0, 0]
    assert len(plan.plan) == 1
    assert len(plan.plan[0][1]) == 1


def test_no_roots():
    plan = ScanPlan(_pattern_graph(), [])
    assert plan.plan == []
    assert plan.stars == []