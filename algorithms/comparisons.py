"""
comparisons.py — Side-by-Side Pairings
=======================================
Two algorithms run on ONE shared graph so their traces can be stepped
together by the synchronization layer (engine/sync.py).

    pair = get_comparison("bfs-vs-dfs")
    left, right = pair.traces()

The traces are generated independently; lengths usually differ and the
sync layer holds the shorter one on its final Step.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from graph import Graph
from algorithms import REGISTRY, AlgoInfo, generate
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Shared sample graphs
# ---------------------------------------------------------------------------
TRAVERSAL_GRAPH = Graph.build(
    {"A": (325, 50), "B": (150, 150), "C": (500, 150), "D": (100, 250),
     "E": (250, 250), "F": (450, 350), "G": (600, 250)},
    adj={
        "A": ["B", "C"],
        "B": ["D", "E"],
        "C": ["F", "G"],
        "D": [],
        "E": ["F"],
        "F": [],
        "G": [],
    },
    directed=True,
)

MST_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 100), "C": (250, 300),
     "D": (450, 100), "E": (450, 300), "F": (600, 200)},
    edges=[
        ("A", "B", 4), ("A", "C", 2), ("B", "C", 1), ("B", "D", 5),
        ("C", "E", 3), ("D", "F", 6), ("E", "F", 1),
    ],
    adj={
        "A": ["B", "C"],
        "B": ["A", "D", "C"],
        "C": ["A", "B", "E"],
        "D": ["B", "F"],
        "E": ["C", "F"],
        "F": ["D", "E"],
    },
)


# ---------------------------------------------------------------------------
# Comparison card
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Comparison:
    key:         str
    label:       str
    left:        str            # registry key shown on the left
    right:       str            # registry key shown on the right
    graph:       Graph
    start_node:  Optional[str]
    description: str

    @property
    def left_info(self) -> AlgoInfo:
        return REGISTRY[self.left]

    @property
    def right_info(self) -> AlgoInfo:
        return REGISTRY[self.right]

    def traces(self) -> Tuple[List[Step], List[Step]]:
        """Generate both traces on the shared graph."""
        return (
            generate(self.left, self.graph, self.start_node),
            generate(self.right, self.graph, self.start_node),
        )

    def to_dict(self) -> dict:
        return {
            "key":         self.key,
            "label":       self.label,
            "left":        {"key": self.left, "label": self.left_info.label,
                            "data_structure": self.left_info.data_structure},
            "right":       {"key": self.right, "label": self.right_info.label,
                            "data_structure": self.right_info.data_structure},
            "graph":       self.graph.to_dict(),
            "start_node":  self.start_node,
            "description": self.description,
        }


COMPARISONS: Dict[str, Comparison] = {
    "bfs-vs-dfs": Comparison(
        key="bfs-vs-dfs",
        label="BFS vs. DFS",
        left="bfs",
        right="dfs",
        graph=TRAVERSAL_GRAPH,
        start_node="A",
        description=(
            "BFS (left) uses a queue and spreads out level by level. "
            "DFS (right) uses a stack and follows one branch to its end before backtracking."
        ),
    ),
    "prims-vs-kruskals": Comparison(
        key="prims-vs-kruskals",
        label="Prim's vs. Kruskal's",
        left="prims",
        right="kruskal",
        graph=MST_GRAPH,
        start_node="A",
        description=(
            "Prim's (left) grows a single tree from one vertex. "
            "Kruskal's (right) scans every edge cheapest-first and merges a forest. "
            "Both finish with a spanning tree of the same total weight."
        ),
    ),
}


def get_comparison(key: str) -> Optional[Comparison]:
    return COMPARISONS.get(key)


def list_comparisons() -> List[Comparison]:
    return list(COMPARISONS.values())
