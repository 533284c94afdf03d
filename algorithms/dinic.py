"""
dinic.py — Dinic's Maximum Flow
================================
Phases of:
  1. BFS from the source over residual edges, labelling every node with
     its level (distance).  Sink unreachable → done.
  2. Blocking flow: repeatedly find a source → sink path that only uses
     edges from level ℓ to ℓ + 1, and push its bottleneck.  A node with no
     usable outgoing level edge is a dead end for the rest of the phase.

The path search uses an explicit path stack, not recursion.  The level
map is exposed through the `distances` facet.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Set

from graph import Graph
from algorithms.step import Step, StepBuilder, fmt
from algorithms.structures import FlowNetwork


DATA_STRUCTURE = "Phase / Total Flow"

SAMPLE_GRAPH = Graph.build(
    {"S": (100, 200), "A": (275, 100), "B": (275, 300),
     "C": (450, 100), "D": (450, 300), "T": (600, 200)},
    edges=[
        ("S", "A", 10), ("S", "B", 8), ("A", "C", 5), ("B", "A", 3),
        ("B", "D", 10), ("C", "T", 7), ("D", "C", 4), ("D", "T", 10),
    ],
    adj={"S": ["A", "B"], "A": ["C"], "B": ["A", "D"], "C": ["T"], "D": ["C", "T"], "T": []},
    directed=True,
)


def build_levels(net: FlowNetwork, source: str) -> Dict[str, int]:
    levels = {source: 0}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for v in net.residual_neighbours(u):
            if v not in levels and net.residual(u, v) > 0:
                levels[v] = levels[u] + 1
                queue.append(v)
    return levels


def _level_path(
    net: FlowNetwork,
    levels: Dict[str, int],
    source: str,
    sink: str,
    dead: Set[str],
) -> Optional[List[str]]:
    path = [source]
    while path:
        u = path[-1]
        if u == sink:
            return path
        for v in net.residual_neighbours(u):
            if v not in dead and levels.get(v) == levels[u] + 1 and net.residual(u, v) > 0:
                path.append(v)
                break
        else:
            dead.add(u)
            path.pop()
    return None


def dinic(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node, role="source")
    sink = graph.require_node(end_node, role="sink")

    net = FlowNetwork(graph)
    total = 0
    phase = 1
    sb = StepBuilder(flows=net.flows, frontier=lambda: [str(phase), f"Flow: {fmt(total)}"])

    yield sb.build("Start Dinic's algorithm. All flows are 0.")

    while True:
        levels = build_levels(net, source)
        if sink not in levels:
            phase -= 1
            yield sb.build("Sink is not reachable. Algorithm complete.", distances=levels)
            return

        yield sb.build(
            f"Phase {phase}: Built level graph. Sink is at level {levels[sink]}.",
            distances=levels,
        )

        dead: Set[str] = set()
        path = _level_path(net, levels, source, sink, dead)
        while path is not None:
            amount = net.bottleneck(path)
            for u, v in zip(path, path[1:]):
                net.push(u, v, amount)
            total += amount
            yield sb.build(
                f"Found path {' → '.join(path)} in level graph, pushed {fmt(amount)} flow. "
                f"Total: {fmt(total)}",
                distances=levels,
                highlighted_path=path,
            )
            path = _level_path(net, levels, source, sink, dead)

        phase += 1
