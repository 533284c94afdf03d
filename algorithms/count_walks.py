"""
count_walks.py — Counting Walks with Matrix Powers
===================================================
If A is the adjacency matrix, (A^k)[i][j] is the number of walks of
exactly k edges from i to j.  Each Step shows the next power.
"""

from typing import Iterator, List, Optional

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Matrix Power"

MAX_LENGTH = 4

SAMPLE_GRAPH = Graph.build(
    {"A": (150, 200), "B": (325, 100), "C": (325, 300)},
    edges=[("A", "B"), ("A", "C"), ("B", "C"), ("C", "A")],
    adj={"A": ["B", "C"], "B": ["C"], "C": ["A"]},
    directed=True,
)

Matrix = List[List[int]]


def adjacency_matrix(graph: Graph, nodes: List[str]) -> Matrix:
    idx = {nid: i for i, nid in enumerate(nodes)}
    m = [[0] * len(nodes) for _ in nodes]
    for u in nodes:
        for v in graph.neighbours(u):
            m[idx[u]][idx[v]] += 1
    return m


def multiply(a: Matrix, b: Matrix) -> Matrix:
    return [
        [sum(a[i][k] * b[k][j] for k in range(len(b))) for j in range(len(b[0]))]
        for i in range(len(a))
    ]


def count_walks(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
    max_length: int = MAX_LENGTH,
) -> Iterator[Step]:
    nodes = graph.node_ids()
    base = adjacency_matrix(graph, nodes)
    sb = StepBuilder(matrix_labels=nodes)

    yield sb.build(
        "Start with the adjacency matrix A (A^1). A[i][j] = # of walks of length 1 from i to j.",
        distance_matrix=base,
        frontier=["k=1"],
    )

    power = base
    for k in range(2, max_length + 1):
        power = multiply(power, base)
        yield sb.build(
            f"Matrix A^{k}. A[i][j] = # of walks of length {k} from i to j.",
            distance_matrix=power,
            frontier=[f"k={k}"],
        )
