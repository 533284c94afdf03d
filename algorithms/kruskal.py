"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Edges are processed in ascending weight order (stable: ties keep their
authored order).  An edge whose endpoints already share a DSU root would
close a cycle and is discarded; otherwise it joins the MST and the two
sets are unioned.  `node_sets` colours nodes by their current root.
"""

from typing import Iterator, List, Optional, Set

from graph import Graph
from algorithms.step import Step, StepBuilder
from algorithms.structures import DisjointSet
from algorithms.prims import SAMPLE_GRAPH as _PRIMS_SAMPLE


DATA_STRUCTURE = "Sorted Edges"

PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",
    "    dsu ← make_set(v) for v in V",
    "    for (u, v, w) in sorted(E, key=w):",
    "        if dsu.find(u) != dsu.find(v):",
    "            mst.add((u, v)); dsu.union(u, v)",
    "    return mst",
]

# Same weighted graph as the Prim's page so the two can be compared.
SAMPLE_GRAPH = _PRIMS_SAMPLE


def kruskal(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    ordered = sorted(graph.edges, key=lambda e: e.weight)
    dsu = DisjointSet(graph.node_ids())
    mst: Set[str] = set()

    sb = StepBuilder(
        frontier=[f"{e.source}-{e.target} ({e.weight})" for e in ordered],
        node_sets=dsu.sets,
        mst_edges=mst,
    )
    yield sb.build("Start with all nodes in their own set. Sort all edges by weight.")

    for edge in ordered:
        label = f"{edge.source}-{edge.target}"
        yield sb.build(
            f"Considering edge {label} with weight {edge.weight}.",
            highlighted_edge=edge,
        )
        if dsu.union(edge.source, edge.target):
            mst.add(edge.key)
            yield sb.build(
                f"No cycle formed. Add {label} to MST and union their sets.",
                highlighted_edge=edge,
            )
        else:
            yield sb.build(f"Edge {label} would form a cycle. Discard it.", highlighted_edge=edge)

    yield sb.build("Finished. Minimum Spanning Tree is complete.")
