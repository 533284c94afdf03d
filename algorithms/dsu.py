"""
dsu.py — Disjoint Set Union Walkthrough
========================================
Replays a fixed script of union / find operations on a DSU forest.  The
graph being drawn IS the forest: every Step carries a `graph_data`
override whose adjacency is parent → children, so the renderer shows
pointers being re-hung by union and flattened by path compression.

A find Step highlights the walk from the element to its root, then the
following Step shows the same forest after compression.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from graph import Graph
from algorithms.step import Step, StepBuilder
from algorithms.structures import DisjointSet


DATA_STRUCTURE = "Operation"

# (operation, element, other element | None)
Operation = Tuple[str, str, Optional[str]]

OPERATIONS: Tuple[Operation, ...] = (
    ("union", "A", "B"),
    ("union", "C", "D"),
    ("union", "E", "F"),
    ("union", "G", "H"),
    ("union", "A", "D"),
    ("union", "E", "G"),
    ("find",  "A", None),
    ("union", "A", "E"),
    ("find",  "H", None),
)

_ELEMENTS = "ABCDEFGH"

SAMPLE_GRAPH = Graph.build(
    {el: (100 + (i % 4) * 150, 150 + (i // 4) * 150) for i, el in enumerate(_ELEMENTS)},
    adj={},
    directed=True,
    layout="tree",
)


def _forest(graph: Graph, dsu: DisjointSet) -> Graph:
    adj: Dict[str, List[str]] = {nid: [] for nid in graph.node_ids()}
    for child, parent in dsu.parents().items():
        if child != parent:
            adj[parent].append(child)
    return graph.with_topology(adj=adj, edges=(), directed=True, layout="tree")


def dsu(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
    operations: Sequence[Operation] = OPERATIONS,
) -> Iterator[Step]:
    forest = DisjointSet(graph.node_ids())
    sb = StepBuilder(node_sets=forest.sets, graph_data=lambda: _forest(graph, forest))

    yield sb.build("Initially, each element is in its own set.", frontier=["Initial state"])

    for op, a, b in operations:
        graph.require_node(a, role="operand")
        if op == "union":
            graph.require_node(b, role="operand")
            label = f"Union({a}, {b})"
            yield sb.build(f"Operation: {label}", current_node=a, frontier=[label])
            if forest.union(a, b):
                yield sb.build(f"Sets of {a} and {b} are merged.", current_node=b, frontier=[label])
            else:
                yield sb.build(f"{a} and {b} are already in the same set.", current_node=b, frontier=[label])
        elif op == "find":
            label = f"Find({a})"
            # show the uncompressed walk first, then compress
            walk = [a]
            while forest.parent[walk[-1]] != walk[-1]:
                walk.append(forest.parent[walk[-1]])
            yield sb.build(
                f"Operation: {label}. Path to root: {' -> '.join(walk)}",
                current_node=a,
                frontier=[label],
                highlighted_path=walk,
            )
            root = forest.find(a)
            yield sb.build(
                f"Path compression updates parent pointers. Root is {root}.",
                current_node=a,
                frontier=[label],
            )
        else:
            raise ValueError(f"Unknown DSU operation: {op}")

    yield sb.build("All operations applied.", frontier=["Done"])
