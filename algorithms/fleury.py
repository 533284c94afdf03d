"""
fleury.py — Fleury's Algorithm (Eulerian path)
===============================================
Walk from an odd-degree node (any node if all degrees are even), always
preferring an edge that is NOT a bridge of the remaining graph; take a
bridge only when nothing else is left.  Each used edge is deleted.

The bridge test removes the candidate edge and re-runs a reachability
search, once per candidate per move — O((V + E) · E) overall.  That is
slow but keeps the narrated choice order simple: the first non-bridge
neighbour in adjacency order wins.  Directed graphs are rejected with
GraphError.
"""

from typing import Dict, Iterator, List, Optional

from graph import Edge, Graph, GraphError, edge_key
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Current Path"

SAMPLE_GRAPH = Graph.build(
    {"A": (200, 100), "B": (400, 100), "C": (100, 250), "D": (300, 250), "E": (500, 250)},
    edges=[("A", "B"), ("A", "C"), ("A", "D"), ("B", "D"), ("B", "E"), ("C", "D"), ("D", "E")],
    adj={
        "A": ["B", "C", "D"],
        "B": ["A", "D", "E"],
        "C": ["A", "D"],
        "D": ["A", "B", "C", "E"],
        "E": ["B", "D"],
    },
)


def is_bridge(adj: Dict[str, List[str]], u: str, v: str) -> bool:
    """True if removing one u-v edge leaves v unreachable from u."""
    trial = {k: list(vs) for k, vs in adj.items()}
    trial[u].remove(v)
    trial[v].remove(u)
    seen = {u}
    stack = [u]
    while stack:
        node = stack.pop()
        for nbr in trial[node]:
            if nbr not in seen:
                seen.add(nbr)
                stack.append(nbr)
    return v not in seen


def _default_start(graph: Graph) -> Optional[str]:
    for nid in graph.node_ids():
        if graph.degree(nid) % 2 == 1:
            return nid
    return next(iter(graph.node_ids()), None)


def _undirected_edges(graph: Graph) -> List[Edge]:
    """One edge per adjacency pair, in adjacency order; unit weight where the graph has no edge."""
    edges: List[Edge] = []
    seen: Dict[str, int] = {}
    for u in graph.node_ids():
        for v in graph.neighbours(u):
            key = edge_key(u, v)
            seen[key] = seen.get(key, 0) + 1
            # every edge is listed once at each endpoint
            if seen[key] % 2 == 1:
                edges.append(graph.arc(u, v))
    return edges


def fleury(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    if graph.directed:
        raise GraphError("Fleury's algorithm needs an undirected graph")
    start = graph.require_node(start_node or _default_start(graph))

    adj: Dict[str, List[str]] = {nid: list(graph.neighbours(nid)) for nid in graph.node_ids()}
    for u, nbrs in adj.items():
        for v in set(nbrs):
            if nbrs.count(v) != adj[v].count(u):
                raise GraphError(f"Adjacency is not symmetric between '{u}' and '{v}'")
    edges = _undirected_edges(graph)
    path: List[str] = [start]

    sb = StepBuilder(
        graph_data=lambda: graph.with_topology(adj=adj, edges=edges),
        frontier=path,
        highlighted_path=path,
    )
    parity = "odd" if graph.degree(start) % 2 else "even"
    yield sb.build(f"Start Fleury's algorithm at {parity}-degree node {start}.", current_node=start, highlighted_path=None)

    while edges:
        u = path[-1]
        if not adj[u]:
            break
        nxt = next((v for v in adj[u] if not is_bridge(adj, u, v)), adj[u][0])
        path.append(nxt)
        yield sb.build(f"From {u}, chose edge to {nxt}.", current_node=nxt)

        adj[u].remove(nxt)
        adj[nxt].remove(u)
        used = next(e for e in edges if e.connects(u, nxt))
        edges.remove(used)
        yield sb.build(f"Remove edge {u}-{nxt} from the graph.", current_node=nxt)

    if edges:
        yield sb.build("Stuck: edges remain but none leave the current node. No Eulerian path from here.")
    else:
        yield sb.build("Algorithm complete. Eulerian path found.")
