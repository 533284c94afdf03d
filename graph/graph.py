"""
graph.py — GraphData Container
==============================
The base graph every generator reads and the renderer draws.  It is the
wire contract between the trace generators and the rendering side.

Responsibilities:
  1. Hold the ordered node list, adjacency and optional weighted edges
  2. Adjacency queries                      (neighbours, incoming, edge_between, …)
  3. Validation of authored sample data     (validate → GraphError)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)
  6. Derived copies for topology overrides  (with_topology)

Design decisions:
  - A Graph is read-only once built.  Adjacency lists are stored as tuples
    behind a read-only mapping so a Step holding a Graph override can never
    be mutated through it.
  - Adjacency order is significant: generators iterate neighbours in the
    stored order, which is what makes traces deterministic.
  - When no `adj` is given it is derived from `edges` in edge order
    (both directions for undirected graphs).
"""

import math
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from graph.node import Node
from graph.edge import Edge


LAYOUTS = ("force", "grid", "tree")

Cell = Union[int, float, str]


class GraphError(ValueError):
    """Malformed graph data: an id referenced in adj / edges that is not a node."""


class Graph:
    """
    Attributes:
        nodes    : Ordered tuple of Node.
        adj      : {node_id: (neighbour_id, …)} — read-only.
        edges    : Tuple of Edge (may be empty for pure-adjacency graphs).
        directed : Graph-level directedness.
        layout   : "force" | "grid" | "tree" | None.
        grid     : 2-D cell-value matrix for grid-modelled problems.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        adj: Optional[Mapping[str, Sequence[str]]] = None,
        edges: Optional[Iterable[Edge]] = None,
        directed: bool = False,
        layout: Optional[str] = None,
        grid: Optional[Sequence[Sequence[Cell]]] = None,
    ):
        self.nodes:    Tuple[Node, ...] = tuple(nodes)
        self.edges:    Tuple[Edge, ...] = tuple(edges or ())
        self.directed: bool             = directed
        self.layout:   Optional[str]    = layout
        self.grid = tuple(tuple(row) for row in grid) if grid is not None else None

        if layout is not None and layout not in LAYOUTS:
            raise GraphError(f"Unknown layout: {layout}")

        if adj is None:
            adj = self._adjacency_from_edges()
        table: Dict[str, Tuple[str, ...]] = {n.id: () for n in self.nodes}
        for nid, nbrs in adj.items():
            table[nid] = tuple(nbrs)
        self.adj: Mapping[str, Tuple[str, ...]] = MappingProxyType(table)

        self._index: Dict[str, Node] = {n.id: n for n in self.nodes}

    def _adjacency_from_edges(self) -> Dict[str, List[str]]:
        derived: Dict[str, List[str]] = {n.id: [] for n in self.nodes}
        for e in self.edges:
            derived.setdefault(e.source, []).append(e.target)
            if not self.directed:
                derived.setdefault(e.target, []).append(e.source)
        return derived

    # ==================================================================
    # VALIDATION
    # ==================================================================
    def validate(self) -> "Graph":
        """Fail fast on ids that are referenced but never declared."""
        if len(self._index) != len(self.nodes):
            raise GraphError("Duplicate node ids")
        for nid, nbrs in self.adj.items():
            if nid not in self._index:
                raise GraphError(f"Adjacency list for unknown node '{nid}'")
            for nbr in nbrs:
                if nbr not in self._index:
                    raise GraphError(f"Node '{nid}' lists unknown neighbour '{nbr}'")
        for e in self.edges:
            if e.source not in self._index or e.target not in self._index:
                raise GraphError(f"Edge {e.source}-{e.target} references an unknown node")
        return self

    def require_node(self, node_id: Optional[str], role: str = "start") -> str:
        if node_id is None or node_id not in self._index:
            raise GraphError(f"{role.capitalize()} node '{node_id}' is not in the graph")
        return node_id

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._index

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._index.get(node_id)

    def neighbours(self, node_id: str) -> Tuple[str, ...]:
        return self.adj.get(node_id, ())

    def incoming(self, node_id: str) -> List[str]:
        """Every node whose adjacency list mentions node_id, in node order."""
        return [nid for nid in self.adj if node_id in self.adj[nid]]

    def edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware for directed graphs)."""
        for e in self.edges:
            if e.connects(a, b, directed=self.directed):
                return e
        return None

    def arc(self, a: str, b: str) -> Edge:
        """
        The edge a generator traverses when it follows adjacency a → b.
        Adjacency entries with no matching edge (pure-adjacency graphs)
        count as unweighted: a weight-1 Edge is returned for them.
        """
        e = self.edge_between(a, b)
        return e if e is not None else Edge(a, b)

    def weight(self, a: str, b: str) -> float:
        e = self.edge_between(a, b)
        if e is None:
            raise GraphError(f"No weighted edge between '{a}' and '{b}'")
        return e.weight

    def degree(self, node_id: str) -> int:
        return len(self.adj.get(node_id, ()))

    # ==================================================================
    # DERIVED COPIES
    # ==================================================================
    def with_topology(
        self,
        nodes: Optional[Iterable[Node]] = None,
        adj: Optional[Mapping[str, Sequence[str]]] = None,
        edges: Optional[Iterable[Edge]] = None,
        directed: Optional[bool] = None,
        layout: Optional[str] = None,
    ) -> "Graph":
        """A new Graph sharing this one's untouched parts — used for Step overrides."""
        return Graph(
            nodes=self.nodes if nodes is None else nodes,
            adj=self.adj if adj is None else adj,
            edges=self.edges if edges is None else edges,
            directed=self.directed if directed is None else directed,
            layout=self.layout if layout is None else layout,
            grid=self.grid,
        )

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        data = {
            "nodes":    [n.to_dict() for n in self.nodes],
            "adj":      {nid: list(nbrs) for nid, nbrs in self.adj.items()},
            "edges":    [e.to_dict() for e in self.edges],
            "directed": self.directed,
        }
        if self.layout:
            data["layout"] = self.layout
        if self.grid is not None:
            data["grid"] = [list(row) for row in self.grid]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls(
            nodes=[Node.from_dict(nd) for nd in data.get("nodes", [])],
            adj=data.get("adj"),
            edges=[Edge.from_dict(ed) for ed in data.get("edges", [])],
            directed=data.get("directed", False),
            layout=data.get("layout"),
            grid=data.get("grid"),
        ).validate()

    @classmethod
    def build(
        cls,
        positions: Mapping[str, Tuple[float, float]],
        edges: Iterable[Tuple] = (),
        adj: Optional[Mapping[str, Sequence[str]]] = None,
        directed: bool = False,
        layout: Optional[str] = None,
        grid: Optional[Sequence[Sequence[Cell]]] = None,
    ) -> "Graph":
        """
        Compact constructor for module-level sample graphs:
            Graph.build({"A": (100, 200), "B": (250, 100)}, edges=[("A", "B", 4)])
        Edge tuples are (source, target) or (source, target, weight).
        """
        return cls(
            nodes=[Node(nid, x, y) for nid, (x, y) in positions.items()],
            adj=adj,
            edges=[Edge(*spec) for spec in edges],
            directed=directed,
            layout=layout,
            grid=grid,
        ).validate()

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        canvas_w: float = 650,
        canvas_h: float = 400,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            0 → 1,2,3           → alternate arrow syntax
            0: 1(5), 2(3)       → comma-separated with weights

        Nodes are auto-laid-out in a circle.
        """
        adjacency: Dict[str, List[Tuple[str, float]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                raise GraphError(f"Cannot parse adjacency line: {line!r}")

            src = parts[0].strip()
            adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        w = float(w_str)
                    except ValueError:
                        raise GraphError(f"Bad weight in token {token!r}") from None
                    if w.is_integer():
                        w = int(w)
                else:
                    tgt, w = token, 1
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        labels = list(adjacency.keys())
        n = len(labels)
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        nodes = []
        for i, label in enumerate(labels):
            angle = 2 * math.pi * i / max(n, 1)
            nodes.append(Node(label, round(cx + radius * math.cos(angle)), round(cy + radius * math.sin(angle))))

        # deduplicate for undirected
        edges: List[Edge] = []
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = frozenset([src, tgt]) if not directed else (src, tgt)
                if key in seen:
                    continue
                seen.add(key)
                edges.append(Edge(src, tgt, w))

        return cls(nodes=nodes, edges=edges, directed=directed).validate()

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def __eq__(self, other) -> bool:
        return isinstance(other, Graph) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
