"""
multistage_graph.py — Multistage Graph Shortest Path (backward DP)
===================================================================
Vertices fall into stages and edges only go forward, so the graph is a
DAG.  cost(v) = cheapest way from v to the destination:

    cost(dest) = 0
    cost(u)    = min over edges u→v of  w(u, v) + cost(v)

Nodes are solved in REVERSE topological order, so every neighbour's cost
is final before it is read.  One Step per edge checked (not only per
improvement), then the optimal path is traced forward along the chosen
next hops.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional

from graph import Graph, GraphError
from algorithms.step import INF, Distance, Step, StepBuilder, fmt


DATA_STRUCTURE = "Costs"

SAMPLE_GRAPH = Graph.build(
    {"A": (50, 200),
     "B": (200, 100), "C": (200, 200), "D": (200, 300),
     "E": (400, 150), "F": (400, 250),
     "G": (550, 200)},
    edges=[
        ("A", "B", 2), ("A", "C", 3), ("A", "D", 4),
        ("B", "E", 5), ("B", "F", 3), ("C", "F", 6),
        ("D", "E", 7), ("E", "G", 8), ("F", "G", 9),
    ],
    adj={"A": ["B", "C", "D"], "B": ["E", "F"], "C": ["F"], "D": ["E"], "E": ["G"], "F": ["G"], "G": []},
    directed=True,
)


def topological_order(graph: Graph) -> List[str]:
    """Kahn's order with node-order tie breaking; GraphError if there is a cycle."""
    indeg = {nid: 0 for nid in graph.node_ids()}
    for u in graph.node_ids():
        for v in graph.neighbours(u):
            indeg[v] += 1
    queue = deque(nid for nid in graph.node_ids() if indeg[nid] == 0)
    order: List[str] = []
    while queue:
        u = queue.popleft()
        order.append(u)
        for v in graph.neighbours(u):
            indeg[v] -= 1
            if indeg[v] == 0:
                queue.append(v)
    if len(order) < graph.node_count():
        raise GraphError("Multistage shortest path needs a directed acyclic graph")
    return order


def _table(cost: Dict[str, Distance]) -> List[str]:
    return [f"{k}:{fmt(v)}" for k, v in cost.items() if v is not INF]


def multistage_graph(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)
    dest = graph.require_node(end_node, role="destination")
    if not graph.directed:
        raise GraphError("Multistage shortest path needs a directed graph")
    order = topological_order(graph)

    cost: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    cost[dest] = 0
    nxt: Dict[str, str] = {}

    sb = StepBuilder(distances=cost, frontier=lambda: _table(cost))
    yield sb.build(f"Initialize cost of destination {dest} to 0. All others are ∞.", current_node=dest)

    for u in reversed(order):
        if u == dest:
            continue
        yield sb.build(f"Calculating minimum cost for node {u}.", current_node=u)

        for v in graph.neighbours(u):
            edge = graph.arc(u, v)
            if cost[v] is INF:
                yield sb.build(
                    f"Check path {u}→{v}. {v} cannot reach {dest}.",
                    current_node=u,
                    neighbor=v,
                    highlighted_edge=edge,
                )
                continue
            total = edge.weight + cost[v]
            yield sb.build(
                f"Check path {u}→{v}. Cost = {fmt(edge.weight)} + {fmt(cost[v])} = {fmt(total)}.",
                current_node=u,
                neighbor=v,
                highlighted_edge=edge,
            )
            if total < cost[u]:
                cost[u] = total
                nxt[u] = v

        if u in nxt:
            yield sb.build(f"Minimum cost for {u} is {fmt(cost[u])} via {nxt[u]}.", current_node=u)
        else:
            yield sb.build(f"{u} has no path to {dest}. Its cost stays ∞.", current_node=u)

    if cost[source] is INF:
        yield sb.build(f"No path from {source} to {dest}.", frontier=["Cost: ∞"])
        return

    path = [source]
    while path[-1] != dest:
        path.append(nxt[path[-1]])
    yield sb.build(
        f"Final shortest path cost from {source} is {fmt(cost[source])}: {' → '.join(path)}.",
        highlighted_path=path,
        frontier=[f"Cost: {fmt(cost[source])}"],
    )
