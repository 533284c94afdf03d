"""
tarjan_scc.py — Tarjan's Strongly Connected Components
=======================================================
One DFS pass (driven by the explicit-stack walker in lowlink.py).  Nodes
are pushed on a component stack when discovered; low[u] folds in
  • low[v]   after returning from tree child v
  • disc[v]  for an edge to v that is still ON the component stack
When a node finishes with low[u] == disc[u] it is the root of an SCC and
the stack is popped down to it.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.lowlink import DfsContext, Event, walk
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Stack"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 150), "B": (250, 100), "C": (250, 200), "D": (400, 100),
     "E": (400, 200), "F": (550, 150), "G": (550, 250)},
    edges=[
        ("A", "B"), ("B", "C"), ("C", "A"), ("B", "D"),
        ("D", "E"), ("E", "F"), ("F", "D"), ("F", "G"),
    ],
    adj={"A": ["B"], "B": ["C", "D"], "C": ["A"], "D": ["E"], "E": ["F"], "F": ["D", "G"], "G": []},
    directed=True,
)


def tarjan_scc(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    ctx = DfsContext()
    stack: List[str] = []
    on_stack = set()
    component: Dict[str, str] = {}
    count = 0

    roots = graph.node_ids()
    if start_node is not None:
        graph.require_node(start_node)
        roots.remove(start_node)
        roots.insert(0, start_node)

    sb = StepBuilder(
        discovery_time=ctx.disc,
        low_link=ctx.low,
        frontier=stack,
        node_sets=component,
        visited=ctx.disc.keys,
    )
    yield sb.build("Start Tarjan's Algorithm.")

    for event, u, v in walk(graph, ctx, roots):
        if event is Event.ENTER:
            stack.append(u)
            on_stack.add(u)
            yield sb.build(f"Visit {u}: disc[{u}] = low[{u}] = {ctx.disc[u]}. Push {u} on the stack.", current_node=u)

        elif event is Event.RETURN:
            ctx.low[u] = min(ctx.low[u], ctx.low[v])

        elif event is Event.NONTREE and v in on_stack:
            ctx.low[u] = min(ctx.low[u], ctx.disc[v])
            yield sb.build(
                f"Edge {u} → {v} reaches a node on the stack. low[{u}] = {ctx.low[u]}.",
                current_node=u,
                neighbor=v,
            )

        elif event is Event.FINISH and ctx.low[u] == ctx.disc[u]:
            members = []
            while True:
                w = stack.pop()
                on_stack.discard(w)
                component[w] = str(count)
                members.append(w)
                if w == u:
                    break
            count += 1
            yield sb.build(f"Found SCC root {u}. Component: {{{', '.join(members)}}}", current_node=u)

    yield sb.build(f"Algorithm complete. All SCCs found ({count}).")


def components(steps: List[Step]) -> List[List[str]]:
    """Group the final Step's node_sets into sorted member lists."""
    groups: Dict[str, List[str]] = {}
    for node_id, cid in (steps[-1].node_sets or {}).items():
        groups.setdefault(cid, []).append(node_id)
    return sorted(sorted(g) for g in groups.values())
