"""
transitive_closure.py — Transitive Closure by DFS
==================================================
reach[i][j] = 1 iff j is reachable from i (every node reaches itself).
One depth-first search per source fills one row of the matrix.  The
current DFS path is shown as `highlighted_path`.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Current DFS Path"

SAMPLE_GRAPH = Graph.build(
    {"A": (150, 100), "B": (450, 100), "C": (150, 300), "D": (450, 300)},
    adj={"A": ["B", "C"], "B": ["C"], "C": [], "D": ["C"]},
    directed=True,
)


def transitive_closure(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    nodes = graph.node_ids()
    idx: Dict[str, int] = {nid: i for i, nid in enumerate(nodes)}
    reach: List[List[int]] = [[0] * len(nodes) for _ in nodes]

    sb = StepBuilder(reachability_matrix=reach, matrix_labels=nodes)
    yield sb.build("Initialize an empty reachability matrix.")

    for i, root in enumerate(nodes):
        visited = set()
        path: List[str] = []
        yield sb.build(
            f"Starting DFS from node {root} to find all reachable nodes.",
            current_node=root,
            highlighted_path=(),
        )

        stack = [(root, iter(graph.neighbours(root)))]
        visited.add(root)
        path.append(root)
        reach[i][idx[root]] = 1
        yield sb.build(
            f"Visiting {root}. Marking reach[{root}][{root}] = 1.",
            current_node=root,
            visited=visited,
            highlighted_path=path,
        )

        while stack:
            _, nbrs = stack[-1]
            v = next((w for w in nbrs if w not in visited), None)
            if v is None:
                stack.pop()
                path.pop()
                continue
            visited.add(v)
            path.append(v)
            reach[i][idx[v]] = 1
            stack.append((v, iter(graph.neighbours(v))))
            yield sb.build(
                f"Visiting {v}. Marking reach[{root}][{v}] = 1.",
                current_node=v,
                visited=visited,
                highlighted_path=path,
            )

        yield sb.build(
            f"DFS from {root} complete. Row {i} of the matrix is finalized.",
            visited=visited,
            matrix_highlight=(-1, i, -1),
        )

    yield sb.build("Algorithm complete. The final reachability matrix is shown.")
