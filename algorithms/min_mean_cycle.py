"""
min_mean_cycle.py — Karp's Minimum Mean Cycle
==============================================
The mean weight of a cycle is its total weight over its edge count.
Karp's theorem gives the minimum over all cycles without enumerating
them.  With D[k][v] the cheapest walk of EXACTLY k edges ending at v
(D[0][v] = 0 for every v, i.e. a virtual source joined to all nodes):

    μ* = min over v of  max over k < n of  (D[n][v] − D[k][v]) / (n − k)

taking only terms where both entries are finite.  If no v has a finite
D[n][v] the graph is acyclic.

The DP table is the distance matrix: one row per k, one column per node.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph, GraphError
from algorithms.step import INF, Distance, Step, StepBuilder, fmt


DATA_STRUCTURE = "DP Table (k, v)"

SAMPLE_GRAPH = Graph.build(
    {"A": (150, 100), "B": (450, 100), "C": (450, 300), "D": (150, 300)},
    edges=[("A", "B", 3), ("B", "C", 2), ("C", "D", -4), ("D", "A", 1)],
    adj={"A": ["B"], "B": ["C"], "C": ["D"], "D": ["A"]},
    directed=True,
)


def _mean(value: float) -> str:
    return f"{value:.2f}"


def min_mean_cycle(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    if not graph.directed:
        raise GraphError("Karp's minimum mean cycle needs a directed graph")
    nodes = graph.node_ids()
    n = len(nodes)
    idx: Dict[str, int] = {nid: i for i, nid in enumerate(nodes)}

    table: List[List[Distance]] = [[0] * n] + [[INF] * n for _ in range(n)]
    sb = StepBuilder(distance_matrix=table, matrix_labels=nodes)
    yield sb.build("Initialize DP table. D[0][v] = 0 for all v.", frontier=["k=0"])

    for k in range(1, n + 1):
        yield sb.build(f"Computing row k={k}: shortest walks of exactly {k} edges.", frontier=[f"k={k}"])
        for u in nodes:
            for v in graph.neighbours(u):
                i, j = idx[u], idx[v]
                edge = graph.arc(u, v)
                hl = dict(frontier=[f"k={k}"], matrix_highlight=(-1, k, j), highlighted_edge=edge)
                if table[k - 1][i] is INF:
                    yield sb.build(f"D[{k - 1}][{u}] is ∞, so edge {u}→{v} cannot extend it.", current_node=u, **hl)
                    continue
                candidate = table[k - 1][i] + edge.weight
                if candidate < table[k][j]:
                    table[k][j] = candidate
                    yield sb.build(
                        f"D[{k}][{v}] = D[{k - 1}][{u}] + w({u},{v}) = {fmt(candidate)}.",
                        current_node=u,
                        **hl,
                    )
                else:
                    yield sb.build(
                        f"D[{k - 1}][{u}] + w({u},{v}) = {fmt(candidate)} does not improve D[{k}][{v}].",
                        current_node=u,
                        **hl,
                    )

    best: Optional[float] = None
    best_node: Optional[str] = None
    for v in nodes:
        j = idx[v]
        last = table[n][j]
        if last is INF:
            yield sb.build(f"D[{n}][{v}] is ∞. No cycle reaches {v}.", current_node=v, frontier=[v])
            continue
        worst = max(
            (last - table[k][j]) / (n - k)
            for k in range(n)
            if table[k][j] is not INF
        )
        yield sb.build(
            f"Max mean for {v} over all k is {_mean(worst)}.",
            current_node=v,
            frontier=[v],
            matrix_highlight=(-1, n, j),
        )
        if best is None or worst < best:
            best, best_node = worst, v

    if best is None:
        yield sb.build("The graph is acyclic. There is no cycle mean.", frontier=["Result: none"])
        return
    yield sb.build(
        f"The minimum of these maximums is the answer: {_mean(best)} (attained at {best_node}).",
        frontier=[f"Result: {_mean(best)}"],
    )
