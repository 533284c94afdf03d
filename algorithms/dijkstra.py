"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a stable min-heap (PriorityQueue).

Yields a Step at:
  1. Initialise distances / push source
  2. Pop minimum-distance node  →  CURRENT, finalised
  3. Successful relaxation  →  update distance, push (node, new_dist)
  4. Heap empty  →  all shortest distances final; if an end node was
     given, its shortest path is highlighted

Lazy deletion: an improved node is pushed again rather than having its
old entry decreased.  Stale entries stay in the heap and are skipped
when popped (the node is already visited), so the frontier display may
briefly list a node twice.

Correctness note: Dijkstra requires non-negative weights.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import INF, Distance, Step, StepBuilder
from algorithms.structures import PriorityQueue


DATA_STRUCTURE = "Priority Queue"

PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",
    "    pq ← [(0, source)]",
    "    while pq is not empty:",
    "        node ← pq.pop_min()",
    "        if node in visited: continue",
    "        visited.add(node)",
    "        for (neighbour, w) in adj(node):",
    "            if dist[node] + w < dist[neighbour]:",
    "                dist[neighbour] ← dist[node] + w",
    "                pq.push((dist[neighbour], neighbour))",
]

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 100), "C": (250, 300),
     "D": (450, 100), "E": (450, 300), "F": (600, 200)},
    edges=[
        ("A", "B", 4), ("A", "C", 2), ("B", "C", 1), ("B", "D", 5),
        ("C", "E", 3), ("D", "F", 3), ("E", "F", 1),
    ],
    adj={
        "A": ["B", "C"],
        "B": ["A", "D", "C"],
        "C": ["A", "B", "E"],
        "D": ["B", "F"],
        "E": ["C", "F"],
        "F": ["D", "E"],
    },
)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)

    dist: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    parent: Dict[str, str] = {}
    visited = set()
    pq: PriorityQueue[str] = PriorityQueue()
    pq.push(source, 0)

    sb = StepBuilder(frontier=pq.labels, visited=visited, distances=dist)
    yield sb.build("Initialize distances. Start node distance is 0, others are infinity.")

    while pq:
        node, _ = pq.pop()
        if node in visited:
            continue                    # stale entry
        visited.add(node)
        yield sb.build(
            f"Extract node {node} with the smallest distance from the Priority Queue.",
            current_node=node,
        )

        for nbr in graph.neighbours(node):
            if nbr in visited:
                continue
            edge = graph.arc(node, nbr)
            new_dist = dist[node] + edge.weight
            if new_dist >= dist[nbr]:
                continue
            dist[nbr] = new_dist
            parent[nbr] = node
            pq.push(nbr, new_dist)
            yield sb.build(
                f"Shorter path to {nbr} found! Update distance to {new_dist}.",
                current_node=node,
                neighbor=nbr,
                highlighted_edge=edge,
            )

    if end_node is not None and graph.has_node(end_node) and dist[end_node] is not INF:
        path = reconstruct(parent, end_node)
        yield sb.build(
            f"Priority Queue is empty. Shortest path {source} → {end_node} costs "
            f"{dist[end_node]}: {' → '.join(path)}",
            frontier=(),
            highlighted_path=path,
        )
        return
    yield sb.build(f"Priority Queue is empty. Shortest paths from {source} found.", frontier=())


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def reconstruct(parent: Dict[str, str], target: str) -> List[str]:
    path = [target]
    while path[-1] in parent:
        path.append(parent[path[-1]])
    path.reverse()
    return path
