"""
ford_fulkerson.py — Maximum Flow (Edmonds-Karp)
================================================
Ford-Fulkerson with BFS path selection.  Each round:
  1. BFS on the RESIDUAL graph (forward capacity left, or flow that can
     be undone on a reverse edge) for a shortest augmenting path
  2. Bottleneck = min residual capacity along it
  3. Push the bottleneck along the path (skew-symmetric update)
until the sink is unreachable.  Each Step carries the full flow map.
"""

from typing import Iterator, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder, fmt
from algorithms.structures import FlowNetwork


DATA_STRUCTURE = "Total Flow"

SAMPLE_GRAPH = Graph.build(
    {"S": (100, 200), "A": (275, 100), "B": (275, 300),
     "C": (450, 100), "D": (450, 300), "T": (600, 200)},
    edges=[
        ("S", "A", 10), ("S", "B", 10), ("A", "C", 8), ("A", "D", 4),
        ("B", "D", 9), ("C", "T", 10), ("D", "T", 10),
    ],
    adj={"S": ["A", "B"], "A": ["C", "D"], "B": ["D"], "C": ["T"], "D": ["T"], "T": []},
    directed=True,
)


def saturate(net: FlowNetwork, source: str, sink: str) -> float:
    """Run Edmonds-Karp to completion without recording; returns the flow added."""
    total = 0
    path = net.bfs_path(source, sink)
    while path is not None:
        amount = net.bottleneck(path)
        for u, v in zip(path, path[1:]):
            net.push(u, v, amount)
        total += amount
        path = net.bfs_path(source, sink)
    return total


def ford_fulkerson(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node, role="source")
    sink = graph.require_node(end_node, role="sink")

    net = FlowNetwork(graph)
    total = 0
    sb = StepBuilder(flows=net.flows, frontier=lambda: [fmt(total)])

    yield sb.build("Start Ford-Fulkerson. All flows are 0.")

    while True:
        path = net.bfs_path(source, sink)
        if path is None:
            yield sb.build("No more augmenting paths can be found. The flow is maximized.")
            return

        yield sb.build(f"Found augmenting path: {' → '.join(path)} via BFS.", highlighted_path=path)

        amount = net.bottleneck(path)
        yield sb.build(f"Path bottleneck is {fmt(amount)}. Pushing flow.", highlighted_path=path)

        for u, v in zip(path, path[1:]):
            net.push(u, v, amount)
        total += amount
        yield sb.build(
            f"Flow augmented by {fmt(amount)}. Total flow is now {fmt(total)}.",
            highlighted_path=path,
        )
