"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every Step carries the full N×N
distance matrix so the renderer can draw it as a live grid.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Yields a Step for:
  1. Initialisation (edge weights → matrix, 0 on the diagonal)
  2. EVERY (k, i, j) check, improving or not, highlighted as (k, i, j)
  3. Each successful update
  4. Completion

Unreachable pairs hold the INF sentinel; a check involving INF on either
leg is never an improvement.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import INF, Distance, Step, StepBuilder, fmt


DATA_STRUCTURE = "k, i, j"

PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",
    "    dist ← adjacency matrix (∞ where no edge, 0 on diagonal)",
    "    for k in 0 … n-1:",
    "        for i in 0 … n-1:",
    "            for j in 0 … n-1:",
    "                if dist[i][k] + dist[k][j] < dist[i][j]:",
    "                    dist[i][j] ← dist[i][k] + dist[k][j]",
    "    return dist",
]

SAMPLE_GRAPH = Graph.build(
    {"A": (150, 100), "B": (450, 100), "C": (150, 300), "D": (450, 300)},
    edges=[("A", "B", 3), ("A", "D", 7), ("B", "C", 2), ("C", "A", 8), ("D", "C", 1), ("D", "B", 4)],
    adj={"A": ["B", "D"], "B": ["C"], "C": ["A"], "D": ["C", "B"]},
    directed=True,
)


def initial_matrix(graph: Graph, nodes: List[str]) -> List[List[Distance]]:
    idx: Dict[str, int] = {nid: i for i, nid in enumerate(nodes)}
    n = len(nodes)
    dist: List[List[Distance]] = [[INF] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0
    for e in graph.edges:
        u, v = idx[e.source], idx[e.target]
        dist[u][v] = min(dist[u][v], e.weight)
        if not graph.directed:
            dist[v][u] = min(dist[v][u], e.weight)
    return dist


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    nodes = graph.node_ids()
    n = len(nodes)
    dist = initial_matrix(graph, nodes)

    sb = StepBuilder(distance_matrix=dist, matrix_labels=nodes)
    yield sb.build("Initialize distance matrix from edge weights.", frontier=["-", "-", "-"])

    for k in range(n):
        for i in range(n):
            for j in range(n):
                ki = dict(frontier=[nodes[k], nodes[i], nodes[j]], matrix_highlight=(k, i, j))
                yield sb.build(f"Checking path {nodes[i]} -> {nodes[k]} -> {nodes[j]}.", **ki)

                if dist[i][k] is INF or dist[k][j] is INF:
                    continue
                candidate = dist[i][k] + dist[k][j]
                if candidate < dist[i][j]:
                    dist[i][j] = candidate
                    yield sb.build(
                        f"Found shorter path for {nodes[i]} -> {nodes[j]}. Updated to {fmt(candidate)}.",
                        **ki,
                    )

    yield sb.build("Algorithm complete. Final all-pairs shortest paths found.", frontier=["-", "-", "-"])
