"""VF2 state for graph isomorphism."""

from __future__ import annotations

import copy
from typing import NamedTuple, Sequence

from .argraph import AttributedGraph, CoreSet, MatchState

_BOTH = "both"
_OUT = "out"
_IN = "in"


class _Counts(NamedTuple):
    termin1: int
    termout1: int
    new1: int
    termin2: int
    termout2: int
    new2: int


def _tally(in_arr: list[int], out_arr: list[int], node: int) -> tuple[int, int, int]:
    is_in = 1 if in_arr[node] else 0
    is_out = 1 if out_arr[node] else 0
    return is_in, is_out, 1 if not (is_in or is_out) else 0


class VF2State(MatchState):
    """A search state of the VF2 algorithm: an isomorphism of g1 onto g2.

    The core and terminal-set vectors are shared by a state and all its
    clones; :meth:`backtrack` undoes what :meth:`add_pair` changed. Each
    entry of the ``in_*``/``out_*`` vectors holds the depth at which the
    node entered the set, or 0. The ``t*_len`` counters include core nodes.
    """

    def __init__(
        self,
        g1: AttributedGraph,
        g2: AttributedGraph,
        order: Sequence[int] | None = None,
    ) -> None:
        self.g1 = g1
        self.g2 = g2
        self.n1 = len(g1)
        self.n2 = len(g2)
        if order is not None:
            order = list(order)
            if sorted(order) != list(range(self.n1)):
                raise ValueError("order must be a permutation of the first graph's nodes")
        self.order: list[int] | None = order
        self.core_len = 0
        self.orig_core_len = 0
        self.t1both_len = self.t1in_len = self.t1out_len = 0
        self.t2both_len = self.t2in_len = self.t2out_len = 0
        self.added_node1: int | None = None
        self.core_1: list[int | None] = [None] * self.n1
        self.core_2: list[int | None] = [None] * self.n2
        self.in_1 = [0] * self.n1
        self.out_1 = [0] * self.n1
        self.in_2 = [0] * self.n2
        self.out_2 = [0] * self.n2

    def _mode(self) -> str | None:
        core = self.core_len
        if self.t1both_len > core and self.t2both_len > core:
            return _BOTH
        if self.t1out_len > core and self.t2out_len > core:
            return _OUT
        if self.t1in_len > core and self.t2in_len > core:
            return _IN
        return None

    @staticmethod
    def _candidate(core: list, in_arr: list[int], out_arr: list[int], node: int, mode: str | None) -> bool:
        if core[node] is not None:
            return False
        if mode == _BOTH:
            return bool(out_arr[node] and in_arr[node])
        if mode == _OUT:
            return bool(out_arr[node])
        if mode == _IN:
            return bool(in_arr[node])
        return True

    def next_pair(self, prev_n1: int | None = None, prev_n2: int | None = None) -> tuple[int, int] | None:
        n1, n2 = self.n1, self.n2
        prev_n1 = 0 if prev_n1 is None else prev_n1
        prev_n2 = 0 if prev_n2 is None else prev_n2 + 1
        mode = self._mode()

        if mode is None and prev_n1 == 0 and self.order is not None:
            prev_n1 = next((n for n in self.order if self.core_1[n] is None), n1)
        else:
            while prev_n1 < n1 and not self._candidate(self.core_1, self.in_1, self.out_1, prev_n1, mode):
                prev_n1 += 1
                prev_n2 = 0

        while prev_n2 < n2 and not self._candidate(self.core_2, self.in_2, self.out_2, prev_n2, mode):
            prev_n2 += 1

        if prev_n1 < n1 and prev_n2 < n2:
            return prev_n1, prev_n2
        return None

    def _counts(self, node1: int, node2: int, check_reverse: bool = True) -> _Counts | None:
        """Terminal-set counts around the pair, or None if the pair breaks the core."""
        g1, g2 = self.g1, self.g2
        if not g1.compatible_nodes(g1.node_attr(node1), g2.node_attr(node2)):
            return None

        termin1 = termout1 = new1 = 0
        for other1 in g1.out_edges(node1):
            other2 = self.core_1[other1]
            if other2 is not None:
                if not g2.has_edge(node2, other2) or not g1.compatible_edges(
                    g1.edge_attr(node1, other1), g2.edge_attr(node2, other2)
                ):
                    return None
            else:
                a, b, c = _tally(self.in_1, self.out_1, other1)
                termin1, termout1, new1 = termin1 + a, termout1 + b, new1 + c

        for other1 in g1.in_edges(node1):
            other2 = self.core_1[other1]
            if other2 is not None:
                if not g2.has_edge(other2, node2) or not g1.compatible_edges(
                    g1.edge_attr(other1, node1), g2.edge_attr(other2, node2)
                ):
                    return None
            else:
                a, b, c = _tally(self.in_1, self.out_1, other1)
                termin1, termout1, new1 = termin1 + a, termout1 + b, new1 + c

        termin2 = termout2 = new2 = 0
        for other2 in g2.out_edges(node2):
            other1 = self.core_2[other2]
            if other1 is not None:
                if check_reverse and not g1.has_edge(node1, other1):
                    return None
            else:
                a, b, c = _tally(self.in_2, self.out_2, other2)
                termin2, termout2, new2 = termin2 + a, termout2 + b, new2 + c

        for other2 in g2.in_edges(node2):
            other1 = self.core_2[other2]
            if other1 is not None:
                if check_reverse and not g1.has_edge(other1, node1):
                    return None
            else:
                a, b, c = _tally(self.in_2, self.out_2, other2)
                termin2, termout2, new2 = termin2 + a, termout2 + b, new2 + c

        return _Counts(termin1, termout1, new1, termin2, termout2, new2)

    def is_feasible_pair(self, node1: int, node2: int) -> bool:
        counts = self._counts(node1, node2)
        if counts is None:
            return False
        return (
            counts.termin1 == counts.termin2
            and counts.termout1 == counts.termout2
            and counts.new1 == counts.new2
        )

    def _enter(self, in_arr: list[int], out_arr: list[int], node: int, mark_in: bool, mark_out: bool) -> tuple[int, int, int]:
        d_in = d_out = d_both = 0
        if mark_in and not in_arr[node]:
            in_arr[node] = self.core_len
            d_in = 1
            if out_arr[node]:
                d_both += 1
        if mark_out and not out_arr[node]:
            out_arr[node] = self.core_len
            d_out = 1
            if in_arr[node]:
                d_both += 1
        return d_in, d_out, d_both

    def _grow(self, graph: AttributedGraph, in_arr: list[int], out_arr: list[int], node: int) -> tuple[int, int, int]:
        deltas = [self._enter(in_arr, out_arr, node, True, True)]
        deltas += [self._enter(in_arr, out_arr, other, True, False) for other in graph.in_edges(node)]
        deltas += [self._enter(in_arr, out_arr, other, False, True) for other in graph.out_edges(node)]
        return tuple(sum(column) for column in zip(*deltas))  # type: ignore[return-value]

    def add_pair(self, node1: int, node2: int) -> None:
        if not (0 <= node1 < self.n1 and 0 <= node2 < self.n2):
            raise ValueError(f"pair ({node1}, {node2}) is out of range")
        if self.core_len >= self.n1 or self.core_len >= self.n2:
            raise ValueError("the mapping is already complete")
        if self.core_1[node1] is not None or self.core_2[node2] is not None:
            raise ValueError(f"pair ({node1}, {node2}) uses an already mapped node")

        self.core_len += 1
        self.added_node1 = node1

        d_in, d_out, d_both = self._grow(self.g1, self.in_1, self.out_1, node1)
        self.t1in_len += d_in
        self.t1out_len += d_out
        self.t1both_len += d_both

        d_in, d_out, d_both = self._grow(self.g2, self.in_2, self.out_2, node2)
        self.t2in_len += d_in
        self.t2out_len += d_out
        self.t2both_len += d_both

        self.core_1[node1] = node2
        self.core_2[node2] = node1

    def is_goal(self) -> bool:
        return self.core_len == self.n1 and self.core_len == self.n2

    def is_dead(self) -> bool:
        return (
            self.n1 != self.n2
            or self.t1both_len != self.t2both_len
            or self.t1out_len != self.t2out_len
            or self.t1in_len != self.t2in_len
        )

    def core_set(self) -> CoreSet:
        return [(n1, n2) for n1, n2 in enumerate(self.core_1) if n2 is not None]

    def clone(self) -> "VF2State":
        twin = copy.copy(self)
        twin.orig_core_len = self.core_len
        twin.added_node1 = None
        return twin

    def _shrink(self, graph: AttributedGraph, in_arr: list[int], out_arr: list[int], node: int) -> None:
        level = self.core_len
        if in_arr[node] == level:
            in_arr[node] = 0
        for other in graph.in_edges(node):
            if in_arr[other] == level:
                in_arr[other] = 0
        if out_arr[node] == level:
            out_arr[node] = 0
        for other in graph.out_edges(node):
            if out_arr[other] == level:
                out_arr[other] = 0

    def backtrack(self) -> None:
        if self.orig_core_len >= self.core_len or self.added_node1 is None:
            return
        node1 = self.added_node1
        node2 = self.core_1[node1]
        self._shrink(self.g1, self.in_1, self.out_1, node1)
        self._shrink(self.g2, self.in_2, self.out_2, node2)
        self.core_1[node1] = None
        self.core_2[node2] = None
        self.core_len = self.orig_core_len
        self.added_node1 = None