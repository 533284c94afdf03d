"""
push_relabel.py — Push-Relabel Maximum Flow
============================================
Works with a PREFLOW rather than augmenting paths:
  • h(source) = |V|, every other height 0; saturate every source edge
  • while some node other than source / sink holds excess:
      PUSH     excess along a residual edge to a neighbour exactly one
               level lower (h[u] == h[v] + 1)
      RELABEL  if no such edge exists, h[u] = 1 + min height of the
               residual-capable neighbours
The active node list (the frontier) is re-derived after every operation
and the first active node in node order is processed next.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder, fmt
from algorithms.structures import FlowNetwork


DATA_STRUCTURE = "Active Nodes"

SAMPLE_GRAPH = Graph.build(
    {"S": (100, 200), "A": (275, 100), "B": (275, 300), "T": (450, 200)},
    edges=[("S", "A", 15), ("S", "B", 8), ("A", "T", 10), ("B", "A", 4), ("B", "T", 10)],
    adj={"S": ["A", "B"], "A": ["T"], "B": ["A", "T"], "T": []},
    directed=True,
)


def push_relabel(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node, role="source")
    sink = graph.require_node(end_node, role="sink")
    nodes = graph.node_ids()

    net = FlowNetwork(graph)
    height: Dict[str, int] = {n: 0 for n in nodes}
    excess: Dict[str, float] = {n: 0 for n in nodes}
    height[source] = len(nodes)

    def active() -> List[str]:
        return [n for n in nodes if n not in (source, sink) and excess[n] > 0]

    sb = StepBuilder(flows=net.flows, heights=height, excess=excess, frontier=active)

    yield sb.build(
        f"Initialize: Height of {source} is |V|, others are 0. No excess flow yet.",
        current_node=source,
    )

    for v in graph.neighbours(source):
        cap = net.residual(source, v)
        net.push(source, v, cap)
        excess[v] += cap
        excess[source] -= cap
    yield sb.build(f"Saturate all edges out of the source {source}.", current_node=source)

    pending = active()
    while pending:
        u = pending[0]
        pushed = False
        for v in net.residual_neighbours(u):
            residual = net.residual(u, v)
            if residual <= 0 or height[u] != height[v] + 1:
                continue
            amount = min(excess[u], residual)
            net.push(u, v, amount)
            excess[u] -= amount
            excess[v] += amount
            pushed = True
            yield sb.build(
                f"Push {fmt(amount)} from {u} to {v}.",
                current_node=u,
                neighbor=v,
                highlighted_path=[u, v],
            )
            if excess[u] == 0:
                break

        if not pushed:
            candidates = [height[v] for v in net.residual_neighbours(u) if net.residual(u, v) > 0]
            height[u] = min(candidates) + 1
            yield sb.build(f"No valid push from {u}. Relabel {u} to height {height[u]}.", current_node=u)

        pending = active()

    yield sb.build(
        f"Algorithm complete. No more active nodes. Max flow is {fmt(excess[sink])}.",
        current_node=sink,
    )
