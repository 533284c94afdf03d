"""
cycle_detection.py — Cycle Detection with Three Colours
========================================================
DFS in which every node is WHITE (unvisited), GRAY (on the current DFS
path) or BLACK (fully explored).  Meeting a GRAY neighbour means a back
edge to an ancestor, so the path from that ancestor to here is a cycle.

The DFS runs on an explicit stack of (node, neighbour iterator) frames;
each frame is popped when its iterator runs dry.  In an undirected graph
the edge back to the parent is not a cycle and is skipped once.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "DFS Path"

WHITE, GRAY, BLACK = "white", "gray", "black"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 100), "B": (300, 100), "C": (300, 300), "D": (100, 300), "E": (500, 200)},
    edges=[("A", "B"), ("B", "C"), ("C", "D"), ("C", "E"), ("D", "B")],
    adj={"A": ["B"], "B": ["C"], "C": ["D", "E"], "D": ["B"], "E": []},
    directed=True,
)


def cycle_detection(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    colors: Dict[str, str] = {nid: WHITE for nid in graph.node_ids()}
    path: List[str] = []

    sb = StepBuilder(node_sets=colors, frontier=path, highlighted_path=path)
    yield sb.build("Start. All nodes are white (unvisited).")

    roots = graph.node_ids()
    if start_node is not None:
        roots = [graph.require_node(start_node)] + [nid for nid in roots if nid != start_node]

    for root in roots:
        if colors[root] != WHITE:
            continue
        colors[root] = GRAY
        path.append(root)
        # frame: [node, neighbour iterator, parent edge still to skip]
        stack = [[root, iter(graph.neighbours(root)), None]]
        yield sb.build(f"Visiting {root}. Color changes to Gray.", current_node=root)

        while stack:
            frame = stack[-1]
            u = frame[0]
            v = next(frame[1], None)
            if v is None:
                colors[u] = BLACK
                stack.pop()
                path.pop()
                yield sb.build(f"Finished exploring {u}. Color changes to Black.", current_node=u)
                continue

            if not graph.directed and v == frame[2]:
                frame[2] = None
                continue

            yield sb.build(f"Exploring neighbor {v} of {u}.", current_node=u, neighbor=v)
            if colors[v] == GRAY:
                cycle = path[path.index(v):] + [v]
                yield sb.build(
                    f"Cycle detected! Neighbor {v} is already Gray: {' → '.join(cycle)}.",
                    current_node=u,
                    neighbor=v,
                    highlighted_cycle=cycle,
                )
                return
            if colors[v] == WHITE:
                colors[v] = GRAY
                path.append(v)
                stack.append([v, iter(graph.neighbours(v)), u])
                yield sb.build(f"Visiting {v}. Color changes to Gray.", current_node=v)

    yield sb.build("Traversal complete. No cycles found.")
