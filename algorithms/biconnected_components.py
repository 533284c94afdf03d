"""
biconnected_components.py — Biconnected Components
===================================================
Low-link DFS plus an explicit EDGE stack.  Every tree edge, and every back
edge to an ancestor (disc[v] < disc[u]), is pushed.  When returning from
tree child v with low[v] >= disc[u], u separates v's subtree from the rest
and the stack is popped down to (and including) u → v; those edges form
one component.  Edges left on the stack at the end form the last one.

`node_sets` here is keyed by EDGE key ("A-B") → component index, which is
how the renderer colours edges by component.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from graph import Graph, edge_key
from algorithms.lowlink import DfsContext, Event, walk
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Edge Stack"

SAMPLE_GRAPH = Graph.build(
    {"A": (200, 100), "B": (350, 100), "C": (100, 200), "D": (350, 200),
     "E": (500, 200), "F": (350, 300), "G": (500, 300)},
    edges=[("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "E"), ("D", "F"), ("E", "G")],
    adj={
        "A": ["B", "C"], "B": ["A", "D"], "C": ["A", "D"],
        "D": ["B", "C", "E", "F"], "E": ["D", "G"], "F": ["D"], "G": ["E"],
    },
)


def biconnected_components(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    start = graph.require_node(start_node)
    ctx = DfsContext()
    edge_stack: List[Tuple[str, str]] = []
    membership: Dict[str, str] = {}
    count = 0

    sb = StepBuilder(
        visited=ctx.disc.keys,
        discovery_time=ctx.disc,
        low_link=ctx.low,
        frontier=lambda: [f"{a}-{b}" for a, b in edge_stack],
        node_sets=membership,
    )

    def close_component(stop: Optional[Tuple[str, str]]) -> None:
        nonlocal count
        while edge_stack:
            e = edge_stack.pop()
            membership[edge_key(*e)] = str(count)
            if e == stop:
                break
        count += 1

    yield sb.build("Start. Each color will represent a different component.")

    for event, u, v in walk(graph, ctx, [start]):
        if event is Event.TREE:
            edge_stack.append((u, v))
            yield sb.build(f"Tree edge {u}-{v}: push it on the edge stack.", current_node=u, neighbor=v)

        elif event is Event.RETURN:
            ctx.low[u] = min(ctx.low[u], ctx.low[v])
            if ctx.low[v] >= ctx.disc[u]:
                close_component((u, v))
                yield sb.build(
                    f"Found Biconnected Component around articulation point {u}.",
                    current_node=u,
                    neighbor=v,
                )

        elif event is Event.NONTREE and v != ctx.parent[u] and ctx.disc[v] < ctx.disc[u]:
            ctx.low[u] = min(ctx.low[u], ctx.disc[v])
            edge_stack.append((u, v))
            yield sb.build(
                f"Back edge {u}-{v}: push it and set low[{u}]={ctx.low[u]}.",
                current_node=u,
                neighbor=v,
            )

    if edge_stack:
        close_component(None)

    yield sb.build(f"DFS complete. All Biconnected Components found ({count}).")
