"""
bipartite_check.py — Bipartite Check by BFS 2-Colouring
========================================================
Colour a start node blue, its neighbours orange, their neighbours blue,
and so on, one BFS per uncoloured component.  An edge whose two ends
share a colour proves an odd cycle: the graph is not bipartite and the
conflicting edge is highlighted.
"""

from collections import deque
from typing import Dict, Iterator, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Queue"

BLUE, ORANGE, UNCOLORED = "blue", "orange", "uncolored"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 100), "C": (250, 300),
     "D": (400, 100), "E": (400, 300), "F": (550, 200)},
    adj={
        "A": ["B", "C"],
        "B": ["A", "D", "F"],
        "C": ["A", "E"],
        "D": ["B", "F"],
        "E": ["C", "F"],
        "F": ["D", "E", "B"],
    },
)


def bipartite_check(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    colors: Dict[str, str] = {nid: UNCOLORED for nid in graph.node_ids()}
    queue = deque()
    sb = StepBuilder(node_sets=colors, frontier=queue)

    yield sb.build("Start. All nodes are uncolored.")

    roots = graph.node_ids()
    if start_node is not None:
        roots = [graph.require_node(start_node)] + [nid for nid in roots if nid != start_node]

    for root in roots:
        if colors[root] != UNCOLORED:
            continue
        colors[root] = BLUE
        queue.append(root)
        yield sb.build(f"Start traversal from {root}. Color it blue.", current_node=root)

        while queue:
            u = queue.popleft()
            other = ORANGE if colors[u] == BLUE else BLUE
            for v in graph.neighbours(u):
                yield sb.build(f"From {u}, exploring neighbor {v}.", current_node=u, neighbor=v)
                if colors[v] == UNCOLORED:
                    colors[v] = other
                    queue.append(v)
                    yield sb.build(f"Coloring {v} {other} and adding to queue.", current_node=u, neighbor=v)
                elif colors[v] == colors[u]:
                    yield sb.build(
                        f"Conflict! Edge ({u}, {v}) connects two nodes of the same color.",
                        current_node=u,
                        neighbor=v,
                        highlighted_edge=graph.arc(u, v),
                    )
                    yield sb.build("The graph is not bipartite.")
                    return

    yield sb.build("Traversal complete. No conflicts found. The graph is bipartite.")
