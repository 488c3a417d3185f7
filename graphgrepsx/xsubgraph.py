"""Random extraction of a (possibly connected) subgraph."""

from __future__ import annotations

import random
from typing import Any

from .argraph import AttributedGraph


def _has_mapped_neighbour(graph: AttributedGraph, node: int, mapping: list[int | None]) -> bool:
    return any(mapping[other] is not None for other in graph.out_edges(node)) or any(
        mapping[other] is not None for other in graph.in_edges(node)
    )


def extract_subgraph(
    graph: AttributedGraph,
    nodes: int,
    connected: bool = True,
    rng: random.Random | None = None,
) -> AttributedGraph:
    """Return a random induced subgraph of ``graph`` with ``nodes`` nodes.

    If ``connected`` is true every chosen node after the first is adjacent
    to one already chosen. Attributes are shared with ``graph``; the
    comparators are not inherited. Raises ValueError if ``nodes`` is out of
    range or no connected subgraph of that size can be grown.
    """
    total = len(graph)
    if not 0 <= nodes <= total:
        raise ValueError(f"cannot extract {nodes} nodes from a graph of {total}")
    rng = rng if rng is not None else random.Random()

    mapping: list[int | None] = [None] * total
    attrs: list[Any] = []

    for i in range(nodes):
        node = rng.randrange(max(total - 1, 1))
        start = node
        found = False
        while not found:
            while mapping[node] is not None:
                node = (node + 1) % total
                if node == start:
                    if i == 0 or not connected:
                        raise RuntimeError("no free node left to extract")
                    raise ValueError("Cannot extract a connected subgraph")
            if i > 0 and connected:
                found = _has_mapped_neighbour(graph, node, mapping)
                if not found:
                    node = (node + 1) % total
                    if node == start:
                        raise ValueError("Cannot extract a connected subgraph")
            else:
                found = True
        mapping[node] = i
        attrs.append(graph.node_attr(node))

    edges = [
        (source, target, graph.edge_attr(original, other))
        for original, source in enumerate(mapping)
        if source is not None
        for other in graph.out_edges(original)
        if (target := mapping[other]) is not None
    ]
    return AttributedGraph(attrs, edges)