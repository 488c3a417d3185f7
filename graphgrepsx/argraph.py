"""Attributed graphs and the generic state-space search used for matching."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import closing
from typing import Any, Callable, Iterable, Iterator, Sequence

from .graph import Graph

Comparator = Callable[[Any, Any], bool]
CoreSet = list[tuple[int, int]]


class AttributedGraph:
    """An immutable directed graph with attributes on nodes and edges.

    Nodes are numbered ``0 .. len-1``. Edges are ``(source, target)`` or
    ``(source, target, attr)``. Attribute comparison is permissive unless a
    ``node_comparator`` or ``edge_comparator`` is assigned.
    """

    def __init__(self, node_attrs: Sequence[Any], edges: Iterable[Sequence[Any]]) -> None:
        self._attrs = list(node_attrs)
        count = len(self._attrs)
        self._out: list[dict[int, Any]] = [{} for _ in range(count)]
        self._in: list[dict[int, Any]] = [{} for _ in range(count)]
        for edge in edges:
            source, target, *rest = edge
            if not (0 <= source < count and 0 <= target < count):
                raise ValueError(f"edge ({source}, {target}) refers to a missing node")
            attr = rest[0] if rest else None
            self._out[source][target] = attr
            self._in[target][source] = attr
        self._out_sorted = [tuple(sorted(d)) for d in self._out]
        self._in_sorted = [tuple(sorted(d)) for d in self._in]
        self.node_comparator: Comparator | None = None
        self.edge_comparator: Comparator | None = None

    def __len__(self) -> int:
        return len(self._attrs)

    def out_edges(self, node: int) -> tuple[int, ...]:
        """Targets of the edges leaving ``node``, ascending."""
        return self._out_sorted[node]

    def in_edges(self, node: int) -> tuple[int, ...]:
        """Sources of the edges entering ``node``, ascending."""
        return self._in_sorted[node]

    def has_edge(self, source: int, target: int) -> bool:
        return target in self._out[source]

    def node_attr(self, node: int) -> Any:
        return self._attrs[node]

    def edge_attr(self, source: int, target: int) -> Any:
        """Attribute of an edge; raises KeyError if the edge does not exist."""
        return self._out[source][target]

    def compatible_nodes(self, a: Any, b: Any) -> bool:
        return True if self.node_comparator is None else bool(self.node_comparator(a, b))

    def compatible_edges(self, a: Any, b: Any) -> bool:
        return True if self.edge_comparator is None else bool(self.edge_comparator(a, b))


class MatchState(ABC):
    """A node of the search space explored while matching two graphs."""

    @abstractmethod
    def next_pair(self, prev_n1: int | None = None, prev_n2: int | None = None) -> tuple[int, int] | None:
        """Return the candidate pair following the given one, or None."""

    @abstractmethod
    def is_feasible_pair(self, node1: int, node2: int) -> bool:
        """Tell whether the pair may extend the current mapping."""

    @abstractmethod
    def add_pair(self, node1: int, node2: int) -> None:
        """Extend the current mapping with a feasible pair."""

    @abstractmethod
    def is_goal(self) -> bool:
        """Tell whether the mapping is complete."""

    @abstractmethod
    def is_dead(self) -> bool:
        """Tell whether no complete mapping can be reached."""

    @abstractmethod
    def core_set(self) -> CoreSet:
        """Return the mapped pairs ordered by the first graph's node."""

    @abstractmethod
    def clone(self) -> "MatchState":
        """Return a state that can be extended independently."""

    def backtrack(self) -> None:
        """Undo shared changes made by :meth:`add_pair`; nothing by default."""


def iter_matches(state: MatchState) -> Iterator[CoreSet]:
    """Yield every complete mapping reachable from ``state`` depth first."""
    if state.is_goal():
        yield state.core_set()
        return
    if state.is_dead():
        return
    prev: tuple[int | None, int | None] = (None, None)
    while (pair := state.next_pair(*prev)) is not None:
        prev = pair
        if state.is_feasible_pair(*pair):
            child = state.clone()
            child.add_pair(*pair)
            try:
                yield from iter_matches(child)
            finally:
                child.backtrack()


def match(state: MatchState, visitor: Callable[[CoreSet], bool]) -> bool:
    """Feed each mapping to ``visitor``; stop and return True when it returns true."""
    with closing(iter_matches(state)) as matches:
        for core in matches:
            if visitor(core):
                return True
    return False


def convert_graph(graph: Graph) -> AttributedGraph:
    """Turn a :class:`Graph` with ids ``0..n-1`` into an attributed graph."""
    nodes = list(graph)
    edges = [(node.id, target) for node in nodes for target in sorted(node.out_neighbors)]
    return AttributedGraph([node.label for node in nodes], edges)