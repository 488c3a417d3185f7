# graphgrepsx

`graphgrepsx` holds the building blocks of a subgraph search over a
collection of labelled graphs: graphs with integer labels, a map from
label strings to integers, path index trees that count how often each
labelled path occurs in each graph, a filter that walks a query tree
against an index tree, and exact matchers of the VF2 family.

It has no dependencies beyond the standard library.

## Graphs and labels (`graphgrepsx.graph`)

`Graph(graph_id=0, name="")` keeps its nodes in a dictionary by id. Each
node is a `GraphNode` with an `id`, an integer `label` and a set of
`out_neighbors`.

- `insert_node(label, node_id=None)` adds or replaces a node. Without an
  id the next one, `len(graph)`, is used.
- `insert_edge(source, target)` adds a directed edge. For an undirected
  edge, insert both directions.
- Iterating over a graph yields its nodes in ascending id order.
  `len(graph)` is the number of nodes.
- `describe()` returns a readable dump of the nodes and their neighbours.

`LabelMap` is a `dict` from label strings to integers.
`get_label(name)` returns the id of a name and gives an unknown name the
next free id, in order of first use. `write(stream)` and `read(stream)`
store the map in a binary stream. The stream holds an 8-byte little-endian
count, then for each name, in sorted order, its UTF-8 text, a newline and
a 4-byte little-endian id. `read` adds entries and keeps any names that
are already present.

## Attributed graphs and the search driver (`graphgrepsx.argraph`)

`AttributedGraph(node_attrs, edges)` is an immutable directed graph.
Nodes are numbered `0 .. len-1`. Each edge is `(source, target)` or
`(source, target, attr)`, and an edge that names a missing node raises
`ValueError`. It offers `out_edges`, `in_edges` (both ascending),
`has_edge`, `node_attr` and `edge_attr`; `edge_attr` raises `KeyError`
for an edge that does not exist.

Attributes are compared through `compatible_nodes` and
`compatible_edges`. These accept everything until you assign a callable
to `node_comparator` or `edge_comparator`.

`convert_graph(graph)` turns a `Graph` whose node ids are `0..n-1` into
an `AttributedGraph` whose node attributes are the labels.

`MatchState` is the protocol every matcher implements: `next_pair`,
`is_feasible_pair`, `add_pair`, `is_goal`, `is_dead`, `core_set`, `clone`
and `backtrack`. Two functions drive it:

- `iter_matches(state)` yields every complete mapping, depth first. Each
  mapping is a list of `(node of g1, node of g2)` pairs, ordered by the
  first graph's node.
- `match(state, visitor)` passes each mapping to `visitor`. It stops and
  returns `True` as soon as the visitor returns a true value, and returns
  `False` when the search runs out.

## Matchers

| State          | Module                 | Finds                                    |
|----------------|------------------------|------------------------------------------|
| `VF2State`     | `graphgrepsx.vf2`      | isomorphism of g1 and g2                 |
| `VF2SubState`  | `graphgrepsx.vf2sub`   | g1 isomorphic to an induced subgraph of g2 |
| `VF2MonoState` | `graphgrepsx.vf2mono`  | monomorphism of g1 into g2               |

Each one is built as `State(g1, g2, order=None)`. `order`, if given, must
be a permutation of g1's nodes, and it sets the order in which unmapped
nodes of g1 are tried when the terminal sets give no guidance.
Comparisons always use g1's comparators, with g1's attribute passed
first.

```python
import operator
from graphgrepsx.argraph import AttributedGraph, iter_matches
from graphgrepsx.vf2mono import VF2MonoState

query = AttributedGraph(["C", "O"], [(0, 1), (1, 0)])
target = AttributedGraph(["C", "O", "C"], [(0, 1), (1, 0), (1, 2), (2, 1)])
query.node_comparator = operator.eq

print(list(iter_matches(VF2MonoState(query, target))))
# [[(0, 0), (1, 1)], [(0, 2), (1, 1)]]
```

## Random subgraphs (`graphgrepsx.xsubgraph`)

`extract_subgraph(graph, nodes, connected=True, rng=None)` returns an
induced subgraph with `nodes` nodes, drawn with `rng` (a
`random.Random`) or a fresh generator. If `connected` is true, every node
after the first is adjacent to one that has already been chosen. Node and
edge attributes are shared with the original graph; comparators are not
carried over. It raises `ValueError` if `nodes` is out of range or if no
connected subgraph of that size can be grown. This is handy for making
queries that are known to match.

## Path index trees (`graphgrepsx.ocptree`)

An `OCPTree` has a root without a label (`-1`). Each `OCPTreeNode` has a
`label`, a `parent`, `children` kept sorted by label, an `is_special`
flag and `gsinfos`, a `Counter` that maps a graph id to the number of
occurrences of the node's path.

- `add_child(label)` returns the child with that label and inserts it in
  order if it is missing. `add_child_on_tail(child)` appends an existing
  node. `get_child(label)` returns the child or `None`.
- `path()` lists the labels from the node up to the root.
- `OCPTree.write(stream)` / `read(stream)` store the tree in preorder in a
  binary stream. For each node this is its label, its child count and
  its occurrence list, all little-endian. A truncated stream raises
  `EOFError`.
- `OCPTree.to_xml()` renders the tree as indented XML for inspection.

`query_tree.match(index_tree, listener)` walks the query tree breadth
first alongside the index tree. It calls `listener.matched_nodes(a, b)`
for each special query node and `listener.unmatched_node(a)` for each
query path that is missing from the index. The walk stops when either
call returns `False`. `MatchingListener` is the abstract base class.
`DefaultMatchingListener(graphs=None)` collects candidates in its
`graphs` set. The first special node fills the set with the graphs whose
count reaches the query node's count for graph `0`. Each later special
node removes the graphs that fall short, and a missing path empties the
set.

## What the package does not do

The package has no command-line program. It has no reader for graph
files in any text format; graphs are built in code. It does not fill an
`OCPTree` from graphs either: there is no path enumeration that sets
counts or marks special nodes, so index and query trees have to be
populated by the caller through `add_child`, `gsinfos` and `is_special`.
There is no combined index file and no driver that runs filtering and
matching over a stored database. Persistence is limited to `write` and
`read` on a `LabelMap` and an `OCPTree`.