"""
dfs.py — Depth-First Search (iterative, explicit stack)
========================================================
Uses an explicit stack rather than recursion so that:
  • Every push / pop is a discrete, visualisable event
  • Long paths never hit Python's recursion limit

Neighbours are pushed in REVERSE adjacency order so they pop in adjacency
order.  A node may be pushed more than once (from different parents); a pop
of an already-visited node is skipped silently, which is also what keeps
cyclic graphs finite.
"""

from typing import Iterator, List, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Stack"

SAMPLE_GRAPH = Graph.build(
    {"A": (325, 50), "B": (150, 150), "C": (500, 150),
     "D": (100, 250), "E": (250, 250), "F": (550, 250)},
    adj={
        "A": ["B", "C"],
        "B": ["D", "E"],
        "C": ["F"],
        "D": [],
        "E": ["F"],
        "F": [],
    },
    directed=True,
)


def dfs(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)

    stack: List[str] = [source]
    visited = set()

    # frontier is shown top-of-stack first
    sb = StepBuilder(frontier=lambda: reversed(stack), visited=visited)

    yield sb.build(f"Start DFS from node {source}. Add it to the stack.")

    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        yield sb.build(f"Pop {node} from stack, mark as visited.", current_node=node)

        for nbr in reversed(graph.neighbours(node)):
            if nbr in visited:
                continue
            stack.append(nbr)
            yield sb.build(
                f"Node {node} discovers unvisited neighbor {nbr}. Push to stack.",
                current_node=node,
                neighbor=nbr,
            )

    yield sb.build("Stack is empty. DFS traversal complete.", frontier=())
