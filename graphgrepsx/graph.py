"""Labelled graphs and the dictionary that turns label strings into integers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator

_SIZE = struct.Struct("<Q")
_LABEL = struct.Struct("<i")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError("unexpected end of label map data")
    return data


@dataclass
class GraphNode:
    """A node with an integer label and the ids of its out-neighbours."""

    id: int = -1
    label: int = -1
    out_neighbors: set[int] = field(default_factory=set)


class Graph:
    """A graph whose nodes are kept by id."""

    def __init__(self, graph_id: int = 0, name: str = "") -> None:
        self.id = graph_id
        self.name = name
        self.nodes: dict[int, GraphNode] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        """Yield the nodes in ascending id order."""
        for node_id in sorted(self.nodes):
            yield self.nodes[node_id]

    def insert_node(self, label: int, node_id: int | None = None) -> GraphNode:
        """Add (or replace) a node; without an id the next free one is used."""
        if node_id is None:
            node_id = len(self.nodes)
        node = GraphNode(node_id, label)
        self.nodes[node_id] = node
        return node

    def insert_edge(self, source: int, target: int) -> None:
        """Add a directed edge; an unknown source gets a blank node."""
        self.nodes.setdefault(source, GraphNode()).out_neighbors.add(target)

    def describe(self) -> str:
        """Return a human readable dump of the graph."""
        parts = [f"Graph: {self.id} :: {self.name}\n"]
        for node_id in sorted(self.nodes):
            node = self.nodes[node_id]
            parts.append(f"{node_id}: {node.label}: \n")
            neighbours = "".join(f"{n}," for n in sorted(node.out_neighbors))
            parts.append(f"out neighbors: {neighbours}\n")
        return "".join(parts)


class LabelMap(dict):
    """Maps label strings to small integers, assigned in order of first use."""

    def get_label(self, name: str) -> int:
        """Return the id of ``name``, giving it a new one if it is unknown."""
        return self.setdefault(name, len(self))

    def write(self, stream: BinaryIO) -> None:
        """Serialise the map: a count, then each label line and its id."""
        entries = sorted((name.encode("utf-8"), label) for name, label in self.items())
        stream.write(_SIZE.pack(len(entries)))
        for raw, label in entries:
            stream.write(raw + b"\n")
            stream.write(_LABEL.pack(label))
        stream.flush()

    def read(self, stream: BinaryIO) -> "LabelMap":
        """Load entries written by :meth:`write`; existing names are kept."""
        (count,) = _SIZE.unpack(_read_exact(stream, _SIZE.size))
        for _ in range(count):
            raw = bytearray()
            while (byte := _read_exact(stream, 1)) != b"\n":
                raw += byte
            (label,) = _LABEL.unpack(_read_exact(stream, _LABEL.size))
            self.setdefault(raw.decode("utf-8"), label)
        return self