"""
edge_disjoint_paths.py — Edge-Disjoint Paths via Max Flow
==========================================================
Give every edge capacity 1 and run Edmonds-Karp from S to T.  Each unit
of flow uses up the edges it crosses, so the max flow equals the maximum
number of S–T paths sharing no edge (Menger's theorem).  The final Step
decomposes the flow back into those paths by walking flow-carrying edges
from the source.

Undirected graphs are modelled with one unit arc in each direction.
"""

from typing import Dict, Iterator, List, Optional, Set, Tuple

from graph import Edge, Graph, edge_key
from algorithms.step import Step, StepBuilder
from algorithms.structures import FlowNetwork


DATA_STRUCTURE = "Paths Found"

SAMPLE_GRAPH = Graph.build(
    {"S": (100, 200), "A": (275, 100), "B": (275, 300),
     "C": (450, 100), "D": (450, 300), "T": (600, 200)},
    edges=[
        ("S", "A"), ("S", "B"), ("A", "C"), ("B", "A"),
        ("B", "D"), ("C", "T"), ("D", "T"),
    ],
    adj={"S": ["A", "B"], "A": ["C"], "B": ["A", "D"], "C": ["T"], "D": ["T"], "T": []},
    directed=True,
)


def unit_network(graph: Graph) -> Graph:
    """Directed copy of the graph with one capacity-1 arc per adjacency entry."""
    arcs = [Edge(u, v, 1) for u in graph.node_ids() for v in graph.neighbours(u)]
    return graph.with_topology(edges=arcs, directed=True)


def decompose(net: FlowNetwork, source: str, sink: str) -> List[List[str]]:
    """Split an integral flow into source→sink paths, consuming one unit per arc walked."""
    remaining: Dict[Tuple[str, str], float] = {k: f for k, f in net.flows.items() if f > 0}
    paths: List[List[str]] = []
    while any(remaining.get((source, v), 0) > 0 for v in net.graph.neighbours(source)):
        path = [source]
        seen: Set[str] = {source}
        while path[-1] != sink:
            u = path[-1]
            nxt = next((v for v in net.graph.neighbours(u) if remaining.get((u, v), 0) > 0), None)
            if nxt is None:
                break
            remaining[(u, nxt)] -= 1
            path.append(nxt)
            if nxt in seen:
                # flow circulating in a loop: drop the loop from the path
                path = path[:path.index(nxt) + 1]
            seen = set(path)
        if path[-1] != sink:
            break
        paths.append(path)
    return paths


def edge_disjoint_paths(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node, role="source")
    sink = graph.require_node(end_node, role="sink")

    net = FlowNetwork(unit_network(graph))
    total = 0
    sb = StepBuilder(flows=net.flows, frontier=lambda: [str(total)])
    yield sb.build("Start. Assign capacity 1 to all edges.")

    path = net.bfs_path(source, sink)
    while path is not None:
        for u, v in zip(path, path[1:]):
            net.push(u, v, 1)
        total += 1
        yield sb.build(f"Found path {' → '.join(path)}. Total paths: {total}.", highlighted_path=path)
        path = net.bfs_path(source, sink)

    paths = decompose(net, source, sink)
    used = {edge_key(u, v) for p in paths for u, v in zip(p, p[1:])}
    yield sb.build(
        f"Max flow of {total} found, corresponding to {total} edge-disjoint paths.",
        frontier=[" → ".join(p) for p in paths] or ["0"],
        mst_edges=used,
    )
