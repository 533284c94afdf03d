"""
dynamic_connectivity.py — Incremental Connectivity with a DSU
==============================================================
Edges arrive one at a time and "are u and v connected?" queries are
interleaved with them.  Each DSU set is one connected component: adding
an edge is a union, a query compares two finds.  Edges are only ever
added (no deletions).

Steps colour nodes by set root and carry the edges added so far in the
mst_edges facet, which the renderer draws as the current graph.
"""

from typing import Iterator, List, Optional, Sequence, Set, Tuple

from graph import Edge, Graph, edge_key
from algorithms.step import Step, StepBuilder
from algorithms.structures import DisjointSet


DATA_STRUCTURE = "Operation"

# ("add" | "query", u, v)
Operation = Tuple[str, str, str]

OPERATIONS: Tuple[Operation, ...] = (
    ("query", "A", "C"),
    ("add",   "A", "B"),
    ("add",   "C", "D"),
    ("add",   "E", "F"),
    ("add",   "G", "H"),
    ("add",   "A", "D"),
    ("add",   "E", "G"),
    ("add",   "B", "F"),
    ("query", "A", "G"),
)

_ELEMENTS = "ABCDEFGH"

SAMPLE_GRAPH = Graph.build(
    {el: (150 + (i % 4) * 120, 150 + (i // 4) * 150) for i, el in enumerate(_ELEMENTS)},
    adj={},
)


def edge_script(graph: Graph, start_node: Optional[str], end_node: Optional[str]) -> List[Operation]:
    """One add per graph edge in order, then a query between the endpoints if both are given."""
    ops: List[Operation] = [("add", e.source, e.target) for e in graph.edges]
    if start_node is not None and end_node is not None:
        ops.append(("query", start_node, end_node))
    return ops


def dynamic_connectivity(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
    operations: Optional[Sequence[Operation]] = None,
) -> Iterator[Step]:
    if operations is None:
        operations = edge_script(graph, start_node, end_node) if graph.edges else OPERATIONS

    dsu = DisjointSet(graph.node_ids())
    added: Set[str] = set()
    sb = StepBuilder(node_sets=dsu.sets, mst_edges=added)

    yield sb.build(
        f"Start with {dsu.component_count()} disconnected components.",
        frontier=["Initial state"],
    )

    for op, u, v in operations:
        graph.require_node(u, role="operand")
        graph.require_node(v, role="operand")
        if op == "add":
            label = f"Add({u},{v})"
            edge = Edge(u, v)
            yield sb.build(f"Operation: Add edge {u}-{v}", current_node=u, frontier=[label], highlighted_edge=edge)
            merged = dsu.union(u, v)
            added.add(edge_key(u, v))
            if merged:
                note = f"Union({u},{v}). The components have merged. {dsu.component_count()} remain."
            else:
                note = f"{u} and {v} were already connected. The edge closes a cycle."
            yield sb.build(note, current_node=v, frontier=[label], highlighted_edge=edge)
        elif op == "query":
            label = f"Query({u},{v})"
            yield sb.build(f"Query: Are {u} and {v} connected?", current_node=u, frontier=[label])
            root_u, root_v = dsu.find(u), dsu.find(v)
            if root_u == root_v:
                verdict = "They are the same. Result: Yes."
            else:
                verdict = "They are different. Result: No."
            yield sb.build(
                f"find({u}) is {root_u}, find({v}) is {root_v}. {verdict}",
                current_node=v,
                frontier=[label],
            )
        else:
            raise ValueError(f"Unknown connectivity operation: {op}")
