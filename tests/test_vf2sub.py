import operator

from graphgrepsx.argraph import AttributedGraph, iter_matches, match
from graphgrepsx.vf2sub import VF2SubState


def undirected(labels, pairs):
    edges = [e for a, b in pairs for e in ((a, b), (b, a))]
    return AttributedGraph(labels, edges)


def triangle():
    return undirected(["a", "a", "a"], [(0, 1), (1, 2), (0, 2)])


def check_induced(g1, g2, core):
    mapping = dict(core)
    assert sorted(mapping) == list(range(len(g1)))
    assert len(set(mapping.values())) == len(mapping)
    for u in range(len(g1)):
        for v in range(len(g1)):
            assert g1.has_edge(u, v) == g2.has_edge(mapping[u], mapping[v])


def test_edge_in_triangle_all_matches():
    g1 = undirected(["a", "a"], [(0, 1)])
    g2 = triangle()
    found = list(iter_matches(VF2SubState(g1, g2)))
    assert len(found) == 6
    assert len({tuple(m) for m in found}) == len(found)
    for core in found:
        check_induced(g1, g2, core)


def test_path_not_induced_in_triangle():
    g1 = undirected(["a", "a", "a"], [(0, 1), (1, 2)])
    assert list(iter_matches(VF2SubState(g1, triangle()))) == []


def test_triangle_in_larger_graph_is_induced():
    g1 = triangle()
    g2 = undirected(["a"] * 4, [(0, 1), (1, 2), (0, 2), (2, 3)])
    found = list(iter_matches(VF2SubState(g1, g2)))
    assert found
    for core in found:
        check_induced(g1, g2, core)
        assert 3 not in dict(core).values()


def test_labels_restrict_matches():
    g1 = undirected(["x", "y"], [(0, 1)])
    g1.node_comparator = operator.eq
    g2 = undirected(["x", "y", "y"], [(0, 1), (0, 2)])
    found = list(iter_matches(VF2SubState(g1, g2)))
    assert found == [[(0, 0), (1, 1)], [(0, 0), (1, 2)]]


def test_larger_query_is_dead():
    state = VF2SubState(triangle(), undirected(["a", "a"], [(0, 1)]))
    assert state.is_dead()
    assert match(state, lambda core: True) is False


def test_goal_after_full_mapping():
    g1 = AttributedGraph(["a"], [])
    g2 = AttributedGraph(["a", "a"], [])
    state = VF2SubState(g1, g2)
    assert not state.is_goal()
    child = state.clone()
    child.add_pair(0, 1)
    assert child.is_goal()
    assert child.core_set() == [(0, 1)]


def test_clone_type_and_backtrack():
    state = VF2SubState(triangle(), triangle())
    child = state.clone()
    assert isinstance(child, VF2SubState)
    child.add_pair(0, 2)
    assert state.core_2[2] == 0
    child.backtrack()
    assert state.core_set() == []
    assert state.in_2 == [0, 0, 0]


def test_infeasible_pair_breaks_adjacency():
    g1 = undirected(["a", "a"], [(0, 1)])
    g2 = AttributedGraph(["a", "a"], [])
    state = VF2SubState(g1, g2)
    child = state.clone()
    child.add_pair(0, 0)
    assert child.is_feasible_pair(1, 1) is False


def test_visitor_stops_at_first():
    seen = []
    g1 = undirected(["a", "a"], [(0, 1)])

    def visitor(core):
        seen.append(core)
        return True

    assert match(VF2SubState(g1, triangle()), visitor) is True
    assert len(seen) == 1