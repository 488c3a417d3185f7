"""Path index trees with per-graph occurrence counts, and tree matching."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from bisect import bisect_left
from collections import Counter, deque
from typing import BinaryIO

_LABEL = struct.Struct("<i")
_SIZE = struct.Struct("<Q")
_ENTRY = struct.Struct("<iQ")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError("unexpected end of index tree data")
    return data


class OCPTreeNode:
    """A tree node: a label, children ordered by label and occurrence counts."""

    def __init__(self, label: int = -1, parent: "OCPTreeNode | None" = None) -> None:
        self.label = label
        self.parent = parent
        self.children: list[OCPTreeNode] = []
        self.is_special = False
        self.gsinfos: Counter[int] = Counter()

    @property
    def child_count(self) -> int:
        return len(self.children)

    def _position(self, label: int) -> int:
        return bisect_left(self.children, label, key=lambda child: child.label)

    def add_child(self, label: int) -> "OCPTreeNode":
        """Return the child with ``label``, inserting it in order if missing."""
        pos = self._position(label)
        if pos < len(self.children) and self.children[pos].label == label:
            return self.children[pos]
        child = OCPTreeNode(label, self)
        self.children.insert(pos, child)
        return child

    def add_child_on_tail(self, child: "OCPTreeNode") -> None:
        """Append an existing node as the last child."""
        child.parent = self
        self.children.append(child)

    def get_child(self, label: int) -> "OCPTreeNode | None":
        pos = self._position(label)
        if pos < len(self.children) and self.children[pos].label == label:
            return self.children[pos]
        return None

    def path(self) -> list[int]:
        """Labels from this node up to and including the root."""
        labels = []
        node: OCPTreeNode | None = self
        while node is not None:
            labels.append(node.label)
            node = node.parent
        return labels

    def write(self, stream: BinaryIO) -> None:
        """Write the label, child count and occurrence list."""
        stream.write(_LABEL.pack(self.label))
        stream.write(_SIZE.pack(self.child_count))
        stream.write(_SIZE.pack(len(self.gsinfos)))
        for graph_id in sorted(self.gsinfos):
            stream.write(_ENTRY.pack(graph_id, self.gsinfos[graph_id]))

    def read(self, stream: BinaryIO) -> int:
        """Read what :meth:`write` stores; return the stored child count."""
        (self.label,) = _LABEL.unpack(_read_exact(stream, _LABEL.size))
        (child_count,) = _SIZE.unpack(_read_exact(stream, _SIZE.size))
        (entries,) = _SIZE.unpack(_read_exact(stream, _SIZE.size))
        for _ in range(entries):
            graph_id, occurrences = _ENTRY.unpack(_read_exact(stream, _ENTRY.size))
            self.gsinfos.setdefault(graph_id, occurrences)
        return child_count


class MatchingListener(ABC):
    """Receives the events of :meth:`OCPTree.match`."""

    @abstractmethod
    def matched_nodes(self, a: OCPTreeNode, b: OCPTreeNode) -> bool:
        """A special query node was found in the index; return False to stop."""

    @abstractmethod
    def unmatched_node(self, a: OCPTreeNode) -> bool:
        """A query path is missing from the index; return False to stop."""


class DefaultMatchingListener(MatchingListener):
    """Collects the ids of graphs that may contain the query."""

    def __init__(self, graphs: set[int] | None = None) -> None:
        self.graphs: set[int] = graphs if graphs is not None else set()
        self.first = True

    def matched_nodes(self, a: OCPTreeNode, b: OCPTreeNode) -> bool:
        needed = a.gsinfos[0]
        if self.first:
            self.graphs.update(g for g, occ in b.gsinfos.items() if occ >= needed)
            self.first = False
        else:
            self.graphs.intersection_update(
                {g for g in self.graphs if g in b.gsinfos and b.gsinfos[g] >= needed}
            )
        return bool(self.graphs)

    def unmatched_node(self, a: OCPTreeNode) -> bool:
        self.graphs.clear()
        return False


class OCPTree:
    """A path tree rooted at a label-less node."""

    def __init__(self) -> None:
        self.root = OCPTreeNode()

    def match(self, other: "OCPTree", listener: MatchingListener) -> None:
        """Walk this (query) tree against ``other`` (the index) breadth first."""
        queue = deque([(self.root, other.root)])
        goon = True
        while queue and goon:
            nt, ng = queue.popleft()
            if nt.is_special:
                goon = listener.matched_nodes(nt, ng)
            db_children = iter(ng.children)
            cg = next(db_children, None)
            for ct in nt.children:
                if not goon:
                    break
                while cg is not None and cg.label < ct.label:
                    cg = next(db_children, None)
                if cg is None or cg.label != ct.label:
                    goon = listener.unmatched_node(ct)
                else:
                    queue.append((ct, cg))

    def write(self, stream: BinaryIO) -> None:
        """Write all nodes in preorder."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            node.write(stream)
            stack.extend(reversed(node.children))

    def read(self, stream: BinaryIO) -> "OCPTree":
        """Replace the tree with one written by :meth:`write`."""
        root = OCPTreeNode()
        stack = [(root, root.read(stream))]
        while stack:
            node, remaining = stack[-1]
            if remaining == 0:
                stack.pop()
                continue
            stack[-1] = (node, remaining - 1)
            child = OCPTreeNode()
            count = child.read(stream)
            node.add_child_on_tail(child)
            stack.append((child, count))
        self.root = root
        return self

    def to_xml(self) -> str:
        """Render the tree as indented XML for inspection."""
        lines: list[str] = []
        self._xml(self.root, 0, lines)
        return "".join(lines)

    def _xml(self, node: OCPTreeNode, level: int, lines: list[str]) -> None:
        indent = "\t" * level
        lines.append(
            f'{indent}<node label="{node.label}" child_count="{node.child_count}" '
            f'isspecial="{int(node.is_special)}">\n'
        )
        lines.append(f"{indent}<OCPTNGraphsInfos>\n")
        for graph_id in sorted(node.gsinfos):
            lines.append(
                f'{indent}\t<element id="{graph_id}" path_occurences="{node.gsinfos[graph_id]}" />\n'
            )
        lines.append(f"{indent}</OCPTNGraphsInfos>\n")
        for child in node.children:
            self._xml(child, level + 1, lines)
        lines.append(f"{indent}</node>\n")