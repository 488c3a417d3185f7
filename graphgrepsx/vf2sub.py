"""VF2 state for graph-subgraph isomorphism."""

from __future__ import annotations

from .vf2 import VF2State


class VF2SubState(VF2State):
    """A VF2 search state that maps the whole of g1 onto an induced subgraph of g2.

    Node and edge attributes are compared with g1's comparators. The
    attribute of g1 is always passed first.
    """

    def is_feasible_pair(self, node1: int, node2: int) -> bool:
        counts = self._counts(node1, node2)
        if counts is None:
            return False
        return (
            counts.termin1 <= counts.termin2
            and counts.termout1 <= counts.termout2
            and counts.new1 <= counts.new2
        )

    def is_goal(self) -> bool:
        return self.core_len == self.n1

    def is_dead(self) -> bool:
        return (
            self.n1 > self.n2
            or self.t1both_len > self.t2both_len
            or self.t1out_len > self.t2out_len
            or self.t1in_len > self.t2in_len
        )

    def clone(self) -> "VF2SubState":
        twin = super().clone()
        assert isinstance(twin, VF2SubState)
        return twin