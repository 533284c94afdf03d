"""
zero_one_bfs.py — 0-1 BFS
==========================
Shortest paths when every edge weight is 0 or 1, in O(V + E) with a deque:
a node reached through a weight-0 edge goes to the FRONT (same distance
layer), through a weight-1 edge to the BACK (next layer).  That ordering
rule is the whole algorithm.  Any other weight is rejected with GraphError.
"""

from collections import deque
from typing import Dict, Iterator, Optional

from graph import Graph, GraphError
from algorithms.step import INF, Distance, Step, StepBuilder


DATA_STRUCTURE = "Deque"

SAMPLE_GRAPH = Graph.build(
    {"A": (50, 200), "B": (200, 100), "C": (200, 300),
     "D": (350, 100), "E": (350, 300), "F": (500, 200)},
    edges=[
        ("A", "B", 1), ("A", "C", 0), ("B", "D", 0),
        ("C", "E", 1), ("D", "F", 1), ("E", "F", 0),
    ],
    adj={
        "A": ["B", "C"],
        "B": ["A", "D"],
        "C": ["A", "E"],
        "D": ["B", "F"],
        "E": ["C", "F"],
        "F": ["D", "E"],
    },
)


def _check_weights(graph: Graph) -> None:
    for u in graph.node_ids():
        for v in graph.neighbours(u):
            w = graph.arc(u, v).weight
            if w not in (0, 1):
                raise GraphError(f"0-1 BFS needs edge weights of 0 or 1; {u}-{v} has weight {w}")


def zero_one_bfs(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)
    _check_weights(graph)

    dist: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    dq = deque([source])

    sb = StepBuilder(frontier=dq, distances=dist)
    yield sb.build("Initialize distances. Start node is 0. Add to deque.")

    while dq:
        node = dq.popleft()
        # visited highlights only the node being processed
        yield sb.build(
            f"Process node {node} from the front of the deque.",
            current_node=node,
            visited={node},
        )

        for nbr in graph.neighbours(node):
            edge = graph.arc(node, nbr)
            new_dist = dist[node] + edge.weight
            if new_dist >= dist[nbr]:
                continue
            dist[nbr] = new_dist
            if edge.weight == 0:
                dq.appendleft(nbr)
                note = f"Path to {nbr} costs 0. Add to FRONT of deque."
            else:
                dq.append(nbr)
                note = f"Path to {nbr} costs {edge.weight}. Add to BACK of deque."
            yield sb.build(note, current_node=node, neighbor=nbr, visited={node}, highlighted_edge=edge)

    yield sb.build("Deque is empty. Shortest paths found.", visited=graph.node_ids())
