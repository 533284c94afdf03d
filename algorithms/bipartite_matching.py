"""
bipartite_matching.py — Maximum Bipartite Matching via Max Flow
================================================================
Applicants (left) are matched to jobs (right).  The bipartite graph is
turned into a flow network:
  • source S → every left node, capacity 1
  • every right node → sink T, capacity 1
  • each left–right edge, capacity 1
The max flow equals the size of a maximum matching, and the left–right
edges carrying flow ARE the matching.  Augmenting paths come from BFS on
the residual graph (Edmonds-Karp), so later paths may re-route earlier
matches through reverse edges.
"""

from typing import Iterator, List, Optional, Tuple

from graph import Graph, edge_key
from algorithms.step import Step, StepBuilder
from algorithms.structures import FlowNetwork


DATA_STRUCTURE = "Matching Size"

LEFT  = ("A1", "A2", "A3", "A4")
RIGHT = ("J1", "J2", "J3", "J4")

PAIRS: Tuple[Tuple[str, str], ...] = (
    ("A1", "J1"), ("A1", "J2"),
    ("A2", "J1"), ("A2", "J3"),
    ("A3", "J2"), ("A3", "J4"),
    ("A4", "J3"),
)


def matching_network(
    left,
    right,
    pairs,
    source: str = "S",
    sink: str = "T",
) -> Graph:
    """Unit-capacity flow network for a bipartite graph, laid out in two columns."""
    positions = {source: (50, 200)}
    positions.update({u: (200, 80 + i * 80) for i, u in enumerate(left)})
    positions.update({v: (400, 80 + i * 80) for i, v in enumerate(right)})
    positions[sink] = (550, 200)

    adj = {source: list(left), sink: []}
    adj.update({u: [] for u in left})
    adj.update({v: [sink] for v in right})
    for u, v in pairs:
        adj[u].append(v)

    edges = [(source, u, 1) for u in left] + [(v, sink, 1) for v in right] + [(u, v, 1) for u, v in pairs]
    return Graph.build(positions, edges=edges, adj=adj, directed=True)


SAMPLE_GRAPH = matching_network(LEFT, RIGHT, PAIRS)


def matched_pairs(net: FlowNetwork, source: str, sink: str) -> List[Tuple[str, str]]:
    """Middle edges (not touching source or sink) that carry flow, in edge order."""
    return [
        (e.source, e.target) for e in net.graph.edges
        if e.source != source and e.target != sink and net.flow(e.source, e.target) > 0
    ]


def bipartite_matching(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node, role="source")
    sink = graph.require_node(end_node, role="sink")

    net = FlowNetwork(graph)
    total = 0
    sb = StepBuilder(
        flows=net.flows,
        mst_edges=lambda: {edge_key(u, v) for u, v in matched_pairs(net, source, sink)},
        frontier=lambda: [str(total)],
    )
    yield sb.build("Start with the constructed flow network. Find augmenting paths.")

    while True:
        path = net.bfs_path(source, sink)
        if path is None:
            pairs = ", ".join(f"{u}-{v}" for u, v in matched_pairs(net, source, sink))
            yield sb.build(
                f"No more augmenting paths. Max flow is {total}, so matching size is {total}"
                + (f": {pairs}." if pairs else "."),
            )
            return

        yield sb.build(f"Found augmenting path {' → '.join(path)}.", highlighted_path=path)
        amount = net.bottleneck(path)
        for u, v in zip(path, path[1:]):
            net.push(u, v, amount)
        total += amount
        yield sb.build(
            f"Augment along the path. Flow is now {total}. The current matching is highlighted.",
            highlighted_path=path,
        )
