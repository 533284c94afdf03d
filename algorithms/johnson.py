"""
johnson.py — Johnson's All-Pairs Shortest Paths
================================================
A four-stage pipeline, each stage visible in the frontier as a label:

  1. Bellman-Ford   add a virtual source q with a 0-weight edge to every
                    node and compute potentials h(v) = dist(q, v).
                    A negative cycle aborts the run.
  2. Re-weight      w'(u, v) = w(u, v) + h(u) - h(v)  — never negative.
  3. Dijkstra       from every node on the re-weighted graph.
  4. Restore        d(u, v) = d'(u, v) - h(u) + h(v), written into the
                    all-pairs matrix one row per source.

The re-weighting stage carries a `graph_data` override so the renderer
draws the non-negative weights.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.bellman_ford import relaxation_order, trace_cycle
from algorithms.step import INF, Distance, Step, StepBuilder, fmt
from algorithms.structures import PriorityQueue


DATA_STRUCTURE = "Phase"

SAMPLE_GRAPH = Graph.build(
    {"A": (200, 100), "B": (450, 100), "C": (450, 300), "D": (200, 300)},
    edges=[("A", "B", -2), ("B", "C", -1), ("B", "D", 2), ("D", "A", 3), ("D", "C", 4)],
    adj={"A": ["B"], "B": ["C", "D"], "C": [], "D": ["A", "C"]},
    directed=True,
)


def _virtual_source(graph: Graph) -> str:
    name = "q"
    while graph.has_node(name):
        name += "'"
    return name


def _dijkstra(graph: Graph, source: str) -> Dict[str, Distance]:
    dist: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    done = set()
    pq: PriorityQueue[str] = PriorityQueue()
    pq.push(source, 0)
    while pq:
        u, _ = pq.pop()
        if u in done:
            continue
        done.add(u)
        for v in graph.neighbours(u):
            nd = dist[u] + graph.arc(u, v).weight
            if nd < dist[v]:
                dist[v] = nd
                pq.push(v, nd)
    return dist


def johnson(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    nodes = graph.node_ids()
    n = len(nodes)
    q = _virtual_source(graph)

    # ---- Stage 1: Bellman-Ford potentials from the virtual source ----
    h: Dict[str, Distance] = {nid: INF for nid in nodes}
    h[q] = 0
    sb = StepBuilder(distances=h, frontier=["1. Bellman-Ford"])
    yield sb.build(
        f"Phase 1: Add a new source '{q}' and run Bellman-Ford to find potentials h(v).",
        current_node=q,
    )

    for nid in nodes:
        h[nid] = 0
    yield sb.build(f"Relax the 0-weight edges {q} → v: every potential starts at 0.", current_node=q)

    order = relaxation_order(graph)
    pred: Dict[str, str] = {}
    for _ in range(n):
        changed = False
        for u, v, edge in order:
            if h[u] + edge.weight < h[v]:
                h[v] = h[u] + edge.weight
                pred[v] = u
                changed = True
                yield sb.build(
                    f"h({v}) lowered to {fmt(h[v])} via {u}.",
                    current_node=u,
                    neighbor=v,
                    highlighted_edge=edge,
                )
        if not changed:
            break

    for u, v, edge in order:
        if h[u] + edge.weight < h[v]:
            pred[v] = u
            cycle = trace_cycle(pred, v)
            yield sb.build(
                "Negative cycle detected by Bellman-Ford. Johnson's cannot proceed.",
                highlighted_edge=edge,
                highlighted_cycle=cycle,
            )
            return

    yield sb.build("Bellman-Ford complete. Potentials h(v) found.")

    # ---- Stage 2: re-weighting ----
    reweighted = graph.with_topology(
        edges=[e.reweighted(e.weight + h[e.source] - h[e.target]) for e in graph.edges]
    )
    sb.unbind("distances").bind(frontier=["2. Re-weight"])
    yield sb.build(
        "Phase 2: Re-weight all edges using potentials. All weights are now non-negative.",
        graph_data=reweighted,
    )

    # ---- Stages 3 & 4: Dijkstra per source, then restore ----
    matrix: List[List[Distance]] = [[INF] * n for _ in range(n)]
    sb.bind(distance_matrix=matrix, matrix_labels=nodes)
    for i, src in enumerate(nodes):
        yield sb.build(
            f"Phase 3: Running Dijkstra from source node {src}.",
            current_node=src,
            frontier=["3. Dijkstra", f"From: {src}"],
        )
        dist = _dijkstra(reweighted, src)
        for j, dst in enumerate(nodes):
            if dist[dst] is not INF:
                matrix[i][j] = dist[dst] - h[src] + h[dst]
        yield sb.build(
            f"Dijkstra from {src} complete. Final distances calculated.",
            distances=dist,
            matrix_highlight=(-1, i, -1),
            frontier=["4. Finalize Distances"],
        )

    yield sb.build("Johnson's Algorithm complete. All-pairs shortest paths found.", frontier=["Complete"])
