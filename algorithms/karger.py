"""
karger.py — Karger's Randomised Minimum Cut
============================================
Repeatedly pick a uniformly random remaining edge and CONTRACT it: merge
its second endpoint into its first, redirect every edge of the absorbed
node, and drop the self-loops that result.  Two supernodes remain after
exactly |V| - 2 contractions; the edges between them are the cut.

The topology changes every Step, so each Step carries a `graph_data`
override plus the supernode → members map.  The content depends on the
random choices but the trace LENGTH does not (connected input).  Pass an
`rng` (anything with `randrange`) for reproducible runs.
"""

import random
from typing import Dict, Iterator, List, Optional

from graph import Edge, Graph
from algorithms.step import Step, StepBuilder, fmt


DATA_STRUCTURE = "Remaining Vertices"

SAMPLE_GRAPH = Graph.build(
    {"A": (150, 100), "B": (350, 100), "C": (150, 300), "D": (350, 300), "E": (250, 200)},
    edges=[
        ("A", "B", 1), ("A", "C", 3), ("A", "E", 2), ("B", "D", 2),
        ("B", "E", 4), ("C", "D", 1), ("C", "E", 5), ("D", "E", 3),
    ],
    adj={
        "A": ["B", "C", "E"],
        "B": ["A", "D", "E"],
        "C": ["A", "D", "E"],
        "D": ["B", "C", "E"],
        "E": ["A", "B", "C", "D"],
    },
)


def karger(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
    rng=None,
) -> Iterator[Step]:
    rng = rng or random
    nodes = list(graph.nodes)
    edges: List[Edge] = list(graph.edges)
    members: Dict[str, List[str]] = {n.id: [n.id] for n in nodes}

    def contracted() -> Graph:
        return graph.with_topology(nodes=nodes, adj={}, edges=edges, directed=False)

    sb = StepBuilder(graph_data=contracted, supernodes=members, frontier=lambda: [str(len(nodes))])
    yield sb.build("Start with the original undirected graph.")

    while len(nodes) > 2 and edges:
        chosen = edges[rng.randrange(len(edges))]
        u, v = chosen.source, chosen.target
        yield sb.build(f"Randomly select edge {u}-{v} to contract.", highlighted_edge=chosen)

        nodes = [n for n in nodes if n.id != v]
        members[u].extend(members.pop(v))
        edges = [
            Edge(u if e.source == v else e.source, u if e.target == v else e.target, e.weight, e.kind)
            for e in edges
        ]
        edges = [e for e in edges if e.source != e.target]

        yield sb.build(
            f"Merge {v} into {u}. The new supernode is [{', '.join(members[u])}].",
            highlighted_edge=chosen,
        )

    value = sum(e.weight for e in edges)
    yield sb.build(
        f"Contraction complete. The cut has a value of {fmt(value)}.",
        highlighted_edge=edges[0] if edges else None,
    )
