import operator
import random

import pytest

from graphgrepsx.argraph import AttributedGraph, match
from graphgrepsx.vf2sub import VF2SubState
from graphgrepsx.xsubgraph import extract_subgraph


def undirected(labels, pairs):
    edges = [e for a, b in pairs for e in ((a, b), (b, a))]
    return AttributedGraph(labels, edges)


def sample_graph():
    labels = ["c", "n", "o", "c", "c", "s", "n"]
    pairs = [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0), (4, 5), (5, 6), (1, 6)]
    return undirected(labels, pairs)


def is_connected(graph):
    if len(graph) == 0:
        return True
    seen = {0}
    todo = [0]
    while todo:
        node = todo.pop()
        for other in graph.out_edges(node) + graph.in_edges(node):
            if other not in seen:
                seen.add(other)
                todo.append(other)
    return len(seen) == len(graph)


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("size", [1, 3, 5, 7])
def test_connected_subgraph_properties(seed, size):
    graph = sample_graph()
    sub = extract_subgraph(graph, size, True, random.Random(seed))
    assert len(sub) == size
    assert is_connected(sub)
    sub.node_comparator = operator.eq
    assert match(VF2SubState(sub, graph), lambda core: True) is True


@pytest.mark.parametrize("seed", range(5))
def test_unconnected_subgraph_is_induced(seed):
    graph = sample_graph()
    sub = extract_subgraph(graph, 4, False, random.Random(seed))
    assert len(sub) == 4
    sub.node_comparator = operator.eq
    assert match(VF2SubState(sub, graph), lambda core: True) is True


def test_same_seed_same_result():
    graph = sample_graph()
    a = extract_subgraph(graph, 4, True, random.Random(3))
    b = extract_subgraph(graph, 4, True, random.Random(3))
    assert [a.node_attr(i) for i in range(4)] == [b.node_attr(i) for i in range(4)]
    assert [a.out_edges(i) for i in range(4)] == [b.out_edges(i) for i in range(4)]


def test_edge_attributes_are_kept():
    graph = AttributedGraph(["a", "b"], [(0, 1, "bond"), (1, 0, "bond")])
    sub = extract_subgraph(graph, 2, True, random.Random(0))
    assert sub.edge_attr(0, 1) == "bond"
    assert sub.edge_attr(1, 0) == "bond"


def test_zero_nodes():
    assert len(extract_subgraph(sample_graph(), 0, True, random.Random(1))) == 0


def test_too_many_nodes():
    with pytest.raises(ValueError):
        extract_subgraph(sample_graph(), 8, True, random.Random(1))


def test_negative_nodes():
    with pytest.raises(ValueError):
        extract_subgraph(sample_graph(), -1, False, random.Random(1))


def test_connected_impossible():
    graph = AttributedGraph(["a", "b"], [])
    with pytest.raises(ValueError, match="connected"):
        extract_subgraph(graph, 2, True, random.Random(0))


def test_unconnected_allows_isolated_nodes():
    graph = AttributedGraph(["a", "b"], [])
    sub = extract_subgraph(graph, 2, False, random.Random(0))
    assert sorted(sub.node_attr(i) for i in range(2)) == ["a", "b"]


def test_comparators_not_inherited():
    graph = sample_graph()
    graph.node_comparator = operator.eq
    sub = extract_subgraph(graph, 3, True, random.Random(2))
    assert sub.node_comparator is None
    assert sub.compatible_nodes("x", "y") is True