"""
edge.py — Graph Edge
====================
Connects two nodes.  Carries a weight (capacity for flow networks) and an
optional type tag for special edges such as the snakes and ladders of a
board-game graph.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs — algorithms that ignore
    weights simply never read it.
  - Edges are values: equality is structural, so two traces of the same
    run compare equal Step for Step.
"""

from typing import Optional


def edge_key(a: str, b: str) -> str:
    """Undirected key, ids sorted: edge_key('B', 'A') == 'A-B'."""
    return "-".join(sorted((a, b)))


def directed_key(a: str, b: str) -> str:
    return f"{a}->{b}"


class Edge:
    """
    Attributes:
        source : ID of the tail node.
        target : ID of the head node.
        weight : Numeric cost / capacity (default 1).  May be negative.
        kind   : Optional type tag ("snake", "ladder", …).
    """

    __slots__ = ("source", "target", "weight", "kind")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1,
        kind: Optional[str] = None,
    ):
        self.source: str          = source
        self.target: str          = target
        self.weight: float        = weight
        self.kind: Optional[str]  = kind

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)

    def connects(self, node_a: str, node_b: str, directed: bool = False) -> bool:
        """True if this edge links node_a ↔ node_b (respects directedness)."""
        if directed:
            return self.source == node_a and self.target == node_b
        return {self.source, self.target} == {node_a, node_b}

    def other_end(self, node_id: str) -> Optional[str]:
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    def reweighted(self, weight: float) -> "Edge":
        return Edge(self.source, self.target, weight, self.kind)

    def label(self) -> str:
        return f"{self.source}-{self.target} ({self.weight})"

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {"from": self.source, "to": self.target, "weight": self.weight}
        if self.kind:
            data["type"] = self.kind
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        """Reads the {from, to, weight, type} wire form; source/target/kind are accepted too."""
        source = data.get("from", data.get("source"))
        target = data.get("to", data.get("target"))
        if source is None or target is None:
            raise KeyError("from" if source is None else "to")
        return cls(
            source=source,
            target=target,
            weight=data.get("weight", 1),
            kind=data.get("type", data.get("kind")),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def _key(self):
        return (self.source, self.target, self.weight, self.kind)

    def __repr__(self) -> str:
        return f"Edge({self.source}-{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())
