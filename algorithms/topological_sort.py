"""
topological_sort.py — Topological Sort (Kahn's algorithm)
==========================================================
  1. Count the in-degree of every node
  2. Queue every node with in-degree 0
  3. Dequeue u, append it to the order, and decrement the in-degree of
     each neighbour; a neighbour reaching 0 joins the queue
If the order ends up shorter than |V| the graph has a cycle.

The distances facet carries the live in-degrees; the highlighted path is
the order built so far.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Queue | Sorted Order"

PSEUDOCODE: List[str] = [
    "def Kahn(graph):",
    "    indeg ← in-degree of every node",
    "    queue ← [v for v in V if indeg[v] = 0]",
    "    while queue is not empty:",
    "        u ← queue.dequeue(); order.append(u)",
    "        for v in adj(u):",
    "            indeg[v] ← indeg[v] - 1",
    "            if indeg[v] = 0: queue.enqueue(v)",
    "    if |order| < |V|: report cycle",
]

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 100), "B": (250, 200), "C": (100, 300),
     "D": (400, 100), "E": (400, 300), "F": (550, 200)},
    edges=[
        ("A", "B"), ("A", "D"), ("C", "B"), ("C", "E"),
        ("B", "F"), ("D", "F"), ("E", "F"),
    ],
    adj={"A": ["B", "D"], "B": ["F"], "C": ["B", "E"], "D": ["F"], "E": ["F"], "F": []},
    directed=True,
)


def in_degrees(graph: Graph) -> Dict[str, int]:
    indeg = {nid: 0 for nid in graph.node_ids()}
    for u in graph.node_ids():
        for v in graph.neighbours(u):
            indeg[v] += 1
    return indeg


def topological_sort(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    indeg = in_degrees(graph)
    queue = deque()
    order: List[str] = []

    sb = StepBuilder(distances=indeg, frontier=queue, highlighted_path=order, visited=order)
    yield sb.build("Start. Calculate the in-degree for every node.")

    queue.extend(nid for nid in graph.node_ids() if indeg[nid] == 0)
    yield sb.build("Add all nodes with an in-degree of 0 to the queue.")

    while queue:
        u = queue.popleft()
        order.append(u)
        yield sb.build(f"Dequeue {u} and add it to the sorted order.", current_node=u)

        for v in graph.neighbours(u):
            indeg[v] -= 1
            yield sb.build(
                f"Decrement in-degree of neighbor {v} to {indeg[v]}.",
                current_node=u,
                neighbor=v,
                highlighted_edge=graph.arc(u, v),
            )
            if indeg[v] == 0:
                queue.append(v)
                yield sb.build(f"In-degree of {v} is now 0. Add it to the queue.", current_node=u, neighbor=v)

    if len(order) < graph.node_count():
        stuck = [nid for nid in graph.node_ids() if nid not in order]
        yield sb.build(
            f"Graph has a cycle! Topological sort is not possible. "
            f"Nodes {', '.join(stuck)} never reach in-degree 0.",
        )
    else:
        yield sb.build(f"Queue is empty. Topological order: {', '.join(order)}.")
