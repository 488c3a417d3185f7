"""VF2 state for graph-subgraph monomorphism."""

from __future__ import annotations

from .vf2 import VF2State


class VF2MonoState(VF2State):
    """A VF2 search state that maps g1 onto a (not necessarily induced) subgraph of g2.

    Every edge of g1 must have a counterpart in g2, but g2 may hold extra
    edges between mapped nodes. Attributes are compared with g1's
    comparators, g1's attribute passed first.
    """

    def is_feasible_pair(self, node1: int, node2: int) -> bool:
        counts = self._counts(node1, node2, check_reverse=False)
        if counts is None:
            return False
        return (
            counts.termin1 <= counts.termin2
            and counts.termout1 <= counts.termout2
            and counts.termin1 + counts.termout1 + counts.new1
            <= counts.termin2 + counts.termout2 + counts.new2
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

    def clone(self) -> "VF2MonoState":
        twin = super().clone()
        assert isinstance(twin, VF2MonoState)
        return twin