"""
prims.py — Prim's Minimum Spanning Tree
========================================
Grows one tree from a start node.  Every edge leaving the tree goes into a
priority queue keyed by weight; the cheapest edge is extracted and either
DISCARDED (both ends already in the tree, it would close a cycle) or
ACCEPTED (it brings in a new node, whose edges are then queued).

Like Dijkstra here, stale edges are not removed from the queue eagerly —
they are discarded when popped.
"""

from typing import Iterator, Optional, Set

from graph import Edge, Graph
from algorithms.step import Step, StepBuilder
from algorithms.structures import PriorityQueue


DATA_STRUCTURE = "Priority Queue (Edges)"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 100), "B": (300, 50), "C": (250, 250),
     "D": (500, 100), "E": (450, 300), "F": (600, 200)},
    edges=[
        ("A", "B", 3), ("A", "C", 2), ("B", "C", 1), ("B", "D", 6),
        ("C", "E", 8), ("D", "F", 4), ("E", "F", 5),
    ],
    adj={
        "A": ["B", "C"],
        "B": ["A", "C", "D"],
        "C": ["A", "B", "E"],
        "D": ["B", "F"],
        "E": ["C", "F"],
        "F": ["D", "E"],
    },
)


def _edge_label(e: Edge) -> str:
    return f"{e.source}-{e.target}"


def prims(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    start = graph.require_node(start_node)

    mst: Set[str] = set()
    visited: Set[str] = set()
    pq: PriorityQueue[Edge] = PriorityQueue(label=_edge_label)

    sb = StepBuilder(frontier=pq.labels, visited=visited, mst_edges=mst)

    def add_edges(node_id: str) -> None:
        visited.add(node_id)
        for nbr in graph.neighbours(node_id):
            edge = graph.arc(node_id, nbr)
            pq.push(edge, edge.weight)

    yield sb.build(f"Start Prim's algorithm from node {start}.", current_node=start)

    add_edges(start)
    yield sb.build(f"Add all edges from {start} to the priority queue.", current_node=start)

    while pq and len(visited) < graph.node_count():
        edge, _ = pq.pop()
        yield sb.build(
            f"Extract edge {_edge_label(edge)} (weight {edge.weight}) from PQ.",
            highlighted_edge=edge,
        )

        src_in, dst_in = edge.source in visited, edge.target in visited
        if src_in and dst_in:
            yield sb.build("Both nodes are already in the MST. Discard edge.", highlighted_edge=edge)
            continue

        mst.add(edge.key)
        new_node = edge.target if src_in else edge.source
        yield sb.build(
            f"Add edge {_edge_label(edge)} to the MST. Visit new node {new_node}.",
            current_node=new_node,
            highlighted_edge=edge,
        )

        add_edges(new_node)
        yield sb.build(f"Add all new edges from {new_node} to the priority queue.", current_node=new_node)

    yield sb.build("Algorithm complete. Minimum Spanning Tree found.", frontier=())
