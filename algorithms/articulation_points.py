"""
articulation_points.py — Articulation Points (cut vertices)
============================================================
u is an articulation point iff
  • u is a DFS root with more than one tree child, or
  • u is not a root and some tree child v has low[v] >= disc[u]
    (nothing below v climbs above u without passing through u).

The edge back to the DFS parent is not a back edge and is ignored.
"""

from typing import Dict, Iterator, Optional, Set

from graph import Graph
from algorithms.lowlink import DfsContext, Event, walk
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "disc / low"

SAMPLE_GRAPH = Graph.build(
    {"A": (200, 100), "B": (350, 100), "C": (100, 200),
     "D": (350, 200), "E": (500, 200), "F": (350, 300)},
    edges=[("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "E"), ("D", "F")],
    adj={
        "A": ["B", "C"], "B": ["A", "D"], "C": ["A", "D"],
        "D": ["B", "C", "E", "F"], "E": ["D"], "F": ["D"],
    },
)


def articulation_points(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    start = graph.require_node(start_node)
    ctx = DfsContext()
    points: Set[str] = set()
    children: Dict[str, int] = {}

    sb = StepBuilder(
        visited=ctx.disc.keys,
        discovery_time=ctx.disc,
        low_link=ctx.low,
        node_sets=lambda: {p: p for p in points},
    )

    for event, u, v in walk(graph, ctx, [start]):
        if event is Event.ENTER:
            children[u] = 0
            yield sb.build(f"Visiting {u}. Set disc[{u}]=low[{u}]={ctx.disc[u]}.", current_node=u)

        elif event is Event.TREE:
            children[u] += 1
            yield sb.build(f"Moving from {u} to unvisited neighbor {v}.", current_node=u, neighbor=v)

        elif event is Event.RETURN:
            ctx.low[u] = min(ctx.low[u], ctx.low[v])
            yield sb.build(
                f"Back at {u} from {v}. Update low[{u}]=min(low[{u}], low[{v}])={ctx.low[u]}.",
                current_node=u,
                neighbor=v,
            )
            if ctx.parent[u] is None:
                if children[u] > 1 and u not in points:
                    points.add(u)
                    yield sb.build(f"Node {u} is the root with >1 child. It's an articulation point.", current_node=u)
            elif ctx.low[v] >= ctx.disc[u]:
                points.add(u)
                yield sb.build(
                    f"low[{v}] ({ctx.low[v]}) >= disc[{u}] ({ctx.disc[u]}). {u} is an articulation point.",
                    current_node=u,
                    neighbor=v,
                )

        elif event is Event.NONTREE and v != ctx.parent[u]:
            ctx.low[u] = min(ctx.low[u], ctx.disc[v])
            yield sb.build(
                f"Found back edge {u}-{v}. Update low[{u}]=min(low[{u}], disc[{v}])={ctx.low[u]}.",
                current_node=u,
                neighbor=v,
            )

    yield sb.build("DFS complete. All articulation points have been found.")
