"""
boruvka.py — Borůvka's Minimum Spanning Tree
=============================================
Phase-based: in every phase EACH current component picks its single
cheapest outgoing edge, all picks are unioned at once, then the component
count is re-derived.  At least half the components disappear per phase,
so there are O(log V) phases.

Ties are broken by authored edge order, which keeps the simultaneous
picks cycle-free.  A phase that adds nothing (disconnected graph) ends
the run with a spanning forest.
"""

from typing import Dict, Iterator, Optional, Set, Tuple

from graph import Edge, Graph
from algorithms.step import Step, StepBuilder
from algorithms.structures import DisjointSet


DATA_STRUCTURE = "Components"

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 150), "B": (250, 100), "C": (250, 300), "D": (400, 150),
     "E": (400, 300), "F": (550, 250), "G": (150, 350)},
    edges=[
        ("A", "B", 4), ("A", "C", 3), ("A", "G", 5), ("B", "D", 2),
        ("C", "D", 6), ("C", "E", 8), ("C", "G", 7), ("D", "E", 1),
        ("E", "F", 9), ("F", "G", 10),
    ],
)


def boruvka(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    dsu = DisjointSet(graph.node_ids())
    mst: Set[str] = set()
    count = dsu.component_count()

    sb = StepBuilder(node_sets=dsu.sets, mst_edges=mst, frontier=lambda: [str(count)])
    yield sb.build("Start. Each vertex is its own component.")

    phase = 1
    while count > 1:
        yield sb.build(f"Phase {phase}: Find the cheapest edge for each component.")

        cheapest: Dict[str, Tuple[float, int, Edge]] = {
            root: None for root in dict.fromkeys(dsu.sets().values())
        }
        for idx, edge in enumerate(graph.edges):
            r1, r2 = dsu.find(edge.source), dsu.find(edge.target)
            if r1 == r2:
                continue
            for root in (r1, r2):
                if cheapest[root] is None or (edge.weight, idx) < cheapest[root][:2]:
                    cheapest[root] = (edge.weight, idx, edge)

        added = False
        for root, pick in cheapest.items():
            if pick is None or pick[2].key in mst:
                continue
            edge = pick[2]
            mst.add(edge.key)
            added = True
            yield sb.build(
                f"Component {root}'s cheapest edge is {edge.source}-{edge.target}. Add to MST.",
                highlighted_edge=edge,
            )

        if not added:
            break

        for pick in cheapest.values():
            if pick is not None:
                dsu.union(pick[2].source, pick[2].target)

        count = dsu.component_count()
        yield sb.build(f"Phase {phase} complete. Merge components. New component count: {count}.")
        phase += 1

    if count > 1:
        yield sb.build(f"No edges leave the remaining {count} components. Spanning forest complete.")
    else:
        yield sb.build("Algorithm complete. Only one component remains.")
