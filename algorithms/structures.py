"""
structures.py — Working Data Structures Shared by Generator Families
=====================================================================
  • PriorityQueue  – stable min-heap (Dijkstra, Prim's, Johnson's)
  • DisjointSet    – union-find forest with path compression
                     (Kruskal's, Borůvka's, DSU demo)
  • FlowNetwork    – residual capacities / skew-symmetric flow map
                     (Edmonds-Karp, Dinic's, Push-Relabel, min cut)

These are the MUTABLE structures a generator works on.  Steps never hold
them directly: generators bind them (or their snapshot methods) to a
StepBuilder, which copies on every build().
"""

import heapq
import itertools
from collections import deque
from typing import Any, Callable, Dict, Generic, List, Optional, Set, Tuple, TypeVar

from graph import Edge, Graph


T = TypeVar("T")


# ---------------------------------------------------------------------------
# Priority queue
# ---------------------------------------------------------------------------
class PriorityQueue(Generic[T]):
    """
    Min-heap keyed by priority; equal priorities pop in insertion order.
    Entries are never removed early — callers skip stale pops (lazy deletion).
    """

    def __init__(self, label: Callable[[T], str] = str):
        self._heap: List[Tuple[Any, int, T]] = []
        self._counter = itertools.count()
        self._label = label

    def push(self, item: T, priority) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> Tuple[T, Any]:
        priority, _, item = heapq.heappop(self._heap)
        return item, priority

    def labels(self) -> List[str]:
        """Queue contents in pop order, e.g. ['C(2)', 'B(4)']."""
        return [f"{self._label(item)}({priority})" for priority, _, item in sorted(self._heap)]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


# ---------------------------------------------------------------------------
# Disjoint-set forest
# ---------------------------------------------------------------------------
class DisjointSet:
    """
    Union-find over string elements.

    `find` compresses the path it walks; `union(a, b)` attaches b's root
    under a's root.  Compression changes lookup length only, never which
    set an element reports.
    """

    def __init__(self, elements):
        self.parent: Dict[str, str] = {e: e for e in elements}

    def find(self, x: str, path: Optional[List[str]] = None) -> str:
        walk = [x]
        while self.parent[walk[-1]] != walk[-1]:
            walk.append(self.parent[walk[-1]])
        root = walk[-1]
        for node in walk:
            self.parent[node] = root
        if path is not None:
            path.extend(walk)
        return root

    def union(self, a: str, b: str) -> bool:
        """Merge the sets of a and b.  Returns False if already joined."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        self.parent[root_b] = root_a
        return True

    def connected(self, a: str, b: str) -> bool:
        return self.find(a) == self.find(b)

    def _root(self, x: str) -> str:
        # read-only walk, leaves the forest shape untouched for display
        while self.parent[x] != x:
            x = self.parent[x]
        return x

    def sets(self) -> Dict[str, str]:
        """{element: root}, computed without compressing any path."""
        return {e: self._root(e) for e in self.parent}

    def parents(self) -> Dict[str, str]:
        """Raw parent pointers."""
        return dict(self.parent)

    def component_count(self) -> int:
        return len({self._root(e) for e in self.parent})


# ---------------------------------------------------------------------------
# Flow network
# ---------------------------------------------------------------------------
class FlowNetwork:
    """
    Residual view of a directed capacitated graph.

    Flows are keyed by ordered (u, v) pairs and kept skew-symmetric:
    flow(u, v) == -flow(v, u) after every push.
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        self.capacities: Dict[Tuple[str, str], float] = {}
        self.flows:      Dict[Tuple[str, str], float] = {}
        for e in graph.edges:
            self.capacities[(e.source, e.target)] = self.capacities.get((e.source, e.target), 0) + e.weight
            self.flows[(e.source, e.target)] = 0
            self.flows[(e.target, e.source)] = 0

    def capacity(self, u: str, v: str) -> float:
        return self.capacities.get((u, v), 0)

    def flow(self, u: str, v: str) -> float:
        return self.flows.get((u, v), 0)

    def residual(self, u: str, v: str) -> float:
        return self.capacity(u, v) - self.flow(u, v)

    def push(self, u: str, v: str, amount: float) -> None:
        self.flows[(u, v)] = self.flow(u, v) + amount
        self.flows[(v, u)] = self.flow(v, u) - amount

    def residual_neighbours(self, u: str) -> List[str]:
        """Forward neighbours first, then nodes with an edge into u (undo capacity)."""
        seen: List[str] = []
        for v in list(self.graph.neighbours(u)) + self.graph.incoming(u):
            if v not in seen:
                seen.append(v)
        return seen

    def bfs_path(self, source: str, sink: str) -> Optional[List[str]]:
        """Shortest augmenting path in the residual graph, or None."""
        parent: Dict[str, str] = {}
        visited = {source}
        queue = deque([source])
        while queue:
            u = queue.popleft()
            for v in self.residual_neighbours(u):
                if v not in visited and self.residual(u, v) > 0:
                    parent[v] = u
                    visited.add(v)
                    queue.append(v)
                    if v == sink:
                        path = [sink]
                        while path[-1] != source:
                            path.append(parent[path[-1]])
                        path.reverse()
                        return path
        return None

    def bottleneck(self, path: List[str]) -> float:
        return min(self.residual(u, v) for u, v in zip(path, path[1:]))

    def reachable(self, source: str) -> Set[str]:
        """Nodes reachable from source through positive residual capacity."""
        seen = {source}
        queue = deque([source])
        while queue:
            u = queue.popleft()
            for v in self.residual_neighbours(u):
                if v not in seen and self.residual(u, v) > 0:
                    seen.add(v)
                    queue.append(v)
        return seen

    def cut_edges(self, source_side: Set[str]) -> List[Edge]:
        return [e for e in self.graph.edges if e.source in source_side and e.target not in source_side]

    def value(self, source: str) -> float:
        """Net flow leaving source."""
        return sum(f for (u, _), f in self.flows.items() if u == source)
