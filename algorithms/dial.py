"""
dial.py — Dial's Algorithm (bucketed Dijkstra)
===============================================
For small non-negative integer weights the priority queue can be replaced
by an array of buckets indexed by distance.  No shortest path is longer
than (|V| - 1) · maxW, so that many + 1 buckets suffice.  When a node's
distance improves it MOVES from its old bucket to the new one.  Negative or
fractional weights are rejected with GraphError.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from graph import Graph, GraphError
from algorithms.step import INF, Distance, Step, StepBuilder


DATA_STRUCTURE = "Current Bucket"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 100), "C": (250, 300),
     "D": (450, 100), "E": (450, 300), "F": (600, 200)},
    edges=[
        ("A", "B", 2), ("A", "C", 4), ("B", "D", 3), ("C", "B", 1),
        ("C", "E", 2), ("D", "F", 1), ("E", "D", 1), ("E", "F", 5),
    ],
    adj={"A": ["B", "C"], "B": ["D"], "C": ["B", "E"], "D": ["F"], "E": ["D", "F"], "F": []},
    directed=True,
)


def _integer_weights(graph: Graph) -> Dict[Tuple[str, str], int]:
    """{(u, v): weight} for every adjacency arc; weights must be non-negative integers."""
    weights: Dict[Tuple[str, str], int] = {}
    for u in graph.node_ids():
        for v in graph.neighbours(u):
            w = graph.arc(u, v).weight
            fractional = isinstance(w, float) and not w.is_integer()
            if isinstance(w, bool) or not isinstance(w, (int, float)) or w < 0 or fractional:
                raise GraphError(f"Dial's algorithm needs non-negative integer weights; {u}-{v} has weight {w}")
            weights[(u, v)] = int(w)
    return weights


def dial(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)
    weights = _integer_weights(graph)

    max_weight = max(weights.values(), default=0)
    max_dist = (graph.node_count() - 1) * max_weight
    buckets: List[List[str]] = [[] for _ in range(max_dist + 1)]

    dist: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    buckets[0].append(source)

    sb = StepBuilder(distances=dist, buckets=buckets)
    yield sb.build(
        f"Initialize distances. Add start node {source} to bucket 0.",
        current_node=source,
        current_bucket=0,
    )

    idx = 0
    while idx <= max_dist:
        if not buckets[idx]:
            idx += 1
            continue

        u = buckets[idx].pop(0)
        yield sb.build(f"Processing node {u} from bucket {idx}.", current_node=u, current_bucket=idx)

        for v in graph.neighbours(u):
            edge = graph.arc(u, v)
            new_dist = dist[u] + weights[(u, v)]
            if new_dist >= dist[v]:
                continue
            if dist[v] is not INF:
                buckets[dist[v]].remove(v)
            dist[v] = new_dist
            buckets[new_dist].append(v)
            yield sb.build(
                f"Updated distance of {v} to {new_dist}. Moved it to bucket {new_dist}.",
                current_node=u,
                neighbor=v,
                highlighted_edge=edge,
                current_bucket=idx,
            )

    yield sb.build("Algorithm complete. All buckets are empty.")
