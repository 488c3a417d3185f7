import io

import pytest

from graphgrepsx.graph import Graph, GraphNode, LabelMap


def test_insert_node_assigns_sequential_ids():
    g = Graph()
    first = g.insert_node(7)
    second = g.insert_node(9)
    assert (first.id, second.id) == (0, 1)
    assert len(g) == 2
    assert g.nodes[1].label == 9


def test_insert_node_with_explicit_id_replaces():
    g = Graph()
    g.insert_node(1, 4)
    g.insert_node(2, 4)
    assert len(g) == 1
    assert g.nodes[4].label == 2


def test_insert_edge_and_default_node():
    g = Graph()
    g.insert_node(3)
    g.insert_edge(0, 5)
    g.insert_edge(0, 5)
    g.insert_edge(8, 0)
    assert g.nodes[0].out_neighbors == {5}
    assert g.nodes[8] == GraphNode(-1, -1, {0})


def test_iteration_in_id_order():
    g = Graph()
    g.insert_node(1, 2)
    g.insert_node(1, 0)
    g.insert_node(1, 1)
    assert [n.id for n in g] == [0, 1, 2]


def test_describe_format():
    g = Graph(3, "#g")
    g.insert_node(5)
    g.insert_node(6)
    g.insert_edge(0, 1)
    g.insert_edge(1, 0)
    assert g.describe() == (
        "Graph: 3 :: #g\n0: 5: \nout neighbors: 1,\n1: 6: \nout neighbors: 0,\n"
    )


def test_get_label_assigns_in_order():
    lm = LabelMap()
    assert lm.get_label("C") == 0
    assert lm.get_label("N") == 1
    assert lm.get_label("C") == 0
    assert len(lm) == 2


def test_label_map_round_trip():
    lm = LabelMap()
    for name in ["O", "C", "N", "Cl"]:
        lm.get_label(name)
    buf = io.BytesIO()
    lm.write(buf)
    buf.seek(0)
    loaded = LabelMap().read(buf)
    assert loaded == lm


def test_label_map_wire_bytes():
    lm = LabelMap()
    lm.get_label("a")
    buf = io.BytesIO()
    lm.write(buf)
    assert buf.getvalue() == b"\x01" + b"\x00" * 7 + b"a\n" + b"\x00\x00\x00\x00"


def test_read_keeps_existing_names():
    source = LabelMap()
    source.get_label("a")
    buf = io.BytesIO()
    source.write(buf)
    buf.seek(0)
    target = LabelMap({"a": 5})
    target.read(buf)
    assert target["a"] == 5


def test_truncated_label_map_raises():
    lm = LabelMap()
    lm.get_label("abc")
    buf = io.BytesIO()
    lm.write(buf)
    with pytest.raises(EOFError):
        LabelMap().read(io.BytesIO(buf.getvalue()[:-2]))