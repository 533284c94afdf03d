"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path algorithm that handles NEGATIVE edge
weights (but not negative cycles).

Structure:
  • Up to |V|-1 rounds of relaxing every edge in the graph, stopping early
    when a whole round changes nothing.
  • One extra "detector" pass that flags a negative cycle.

Yields a Step for:
  1. Each round header
  2. Each relaxation attempt, and each successful update
  3. Early exit when a round is quiet
  4. Negative-cycle detection (the cycle itself is highlighted) or success

Undirected graphs relax every edge in both directions.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from graph import Edge, Graph
from algorithms.step import INF, Distance, Step, StepBuilder, fmt


DATA_STRUCTURE = "Distances"

PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source):",
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",
    "    for i in 1 … |V|-1:",
    "        for each edge (u, v, w):",
    "            if dist[u] + w < dist[v]:",
    "                dist[v] ← dist[u] + w",
    "    for each edge (u, v, w):",
    "        if dist[u] + w < dist[v]:",
    "            return NEGATIVE CYCLE",
    "    return dist",
]

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 100), "C": (250, 300),
     "D": (450, 100), "E": (450, 300)},
    edges=[
        ("A", "B", 6), ("A", "C", 7), ("B", "D", 5),
        ("C", "E", -4), ("D", "C", -2), ("D", "E", 3),
    ],
    adj={"A": ["B", "C"], "B": ["D"], "C": ["E"], "D": ["C", "E"], "E": []},
    directed=True,
)


def relaxation_order(graph: Graph) -> List[Tuple[str, str, Edge]]:
    """(u, v, edge) triples in the order every round relaxes them."""
    if not graph.edges:
        return [(u, v, graph.arc(u, v)) for u in graph.node_ids() for v in graph.neighbours(u)]
    order = []
    for e in graph.edges:
        order.append((e.source, e.target, e))
        if not graph.directed:
            order.append((e.target, e.source, e))
    return order


def trace_cycle(pred: Dict[str, str], node: str) -> List[str]:
    """
    Walk predecessors back from a node that was still relaxable after the
    last round until a node repeats; the repeat closes the cycle.
    Returned in forward order, first id == last id.
    """
    walk: List[str] = []
    index: Dict[str, int] = {}
    cur: Optional[str] = node
    while cur is not None and cur not in index:
        index[cur] = len(walk)
        walk.append(cur)
        cur = pred.get(cur)
    if cur is None:
        # chain reached the source: report the offending path instead
        return walk[::-1]
    cycle = walk[index[cur]:] + [cur]
    cycle.reverse()
    return cycle


def _table(dist: Dict[str, Distance]) -> List[str]:
    return [f"{k}:{v}" for k, v in dist.items()]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)

    dist: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    pred: Dict[str, str] = {}
    order = relaxation_order(graph)

    sb = StepBuilder(frontier=lambda: _table(dist), distances=dist)
    yield sb.build("Initialize distances. Start node is 0, others are ∞.")

    for i in range(1, graph.node_count()):
        changed = False
        yield sb.build(f"--- Iteration {i} ---")

        for u, v, edge in order:
            yield sb.build(f"Relaxing edge {u} -> {v}.", current_node=u, neighbor=v, highlighted_edge=edge)
            if dist[u] is INF or dist[u] + edge.weight >= dist[v]:
                continue
            dist[v] = dist[u] + edge.weight
            pred[v] = u
            changed = True
            yield sb.build(
                f"Distance to {v} updated to {fmt(dist[v])}.",
                current_node=u,
                neighbor=v,
                highlighted_edge=edge,
            )

        if not changed:
            yield sb.build(f"No distances updated in iteration {i}. Early exit.")
            break

    # ---- detector pass ----
    yield sb.build("Checking for negative-weight cycles...")
    for u, v, edge in order:
        if dist[u] is not INF and dist[u] + edge.weight < dist[v]:
            pred[v] = u
            cycle = trace_cycle(pred, v)
            yield sb.build(
                f"Negative cycle detected at edge {u} -> {v}: {' → '.join(cycle)}!",
                current_node=u,
                neighbor=v,
                highlighted_edge=edge,
                highlighted_cycle=cycle,
            )
            return

    yield sb.build("No negative cycles found. Algorithm complete.")
