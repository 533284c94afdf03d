"""
bridges.py — Bridges (cut edges)
=================================
Tree edge u → v is a bridge iff low[v] > disc[u]: no back edge from v's
subtree reaches u or anything above it, so removing u-v disconnects v.
Found bridges are reported in the `mst_edges` facet (undirected keys).
"""

from typing import Iterator, Optional, Set

from graph import Graph, edge_key
from algorithms.lowlink import DfsContext, Event, walk
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "disc / low"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 150), "C": (250, 250),
     "D": (400, 150), "E": (400, 250), "F": (550, 200)},
    edges=[("A", "B"), ("A", "C"), ("B", "D"), ("C", "E"), ("E", "F")],
    adj={
        "A": ["B", "C"], "B": ["A", "D"], "C": ["A", "E"],
        "D": ["B"], "E": ["C", "F"], "F": ["E"],
    },
)


def bridges(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    start = graph.require_node(start_node)
    ctx = DfsContext()
    found: Set[str] = set()

    sb = StepBuilder(visited=ctx.disc.keys, discovery_time=ctx.disc, low_link=ctx.low, mst_edges=found)

    for event, u, v in walk(graph, ctx, [start]):
        if event is Event.ENTER:
            yield sb.build(f"Visiting {u}. Set disc[{u}]=low[{u}]={ctx.disc[u]}.", current_node=u)

        elif event is Event.TREE:
            yield sb.build(f"Moving from {u} to unvisited neighbor {v}.", current_node=u, neighbor=v)

        elif event is Event.RETURN:
            ctx.low[u] = min(ctx.low[u], ctx.low[v])
            yield sb.build(
                f"Back at {u} from {v}. Update low[{u}]=min(low[{u}], low[{v}])={ctx.low[u]}.",
                current_node=u,
                neighbor=v,
            )
            if ctx.low[v] > ctx.disc[u]:
                found.add(edge_key(u, v))
                yield sb.build(
                    f"low[{v}] ({ctx.low[v]}) > disc[{u}] ({ctx.disc[u]}). Edge {u}-{v} is a bridge.",
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

    yield sb.build("DFS complete. All bridges have been found and highlighted.")
