"""
node.py — Graph Node
====================
A vertex of a GraphData value: an id plus the 2-D layout coordinates the
renderer places it at.  Grid-modelled problems (flood fill, islands, …)
additionally carry the cell's row / col.

Design decisions:
  - Nodes are values.  There is no per-node algorithm state here; every
    bit of execution state lives in the Step snapshots, so a Node can be
    shared by any number of Steps and Graphs without copying.
  - `__slots__` keeps the many small nodes of grid graphs cheap.
"""

from typing import Optional


class Node:
    """
    Attributes:
        id   : Unique identifier (also the label shown on the canvas).
        x, y : Layout coordinates.
        row  : Grid row (grid layouts only).
        col  : Grid column (grid layouts only).
    """

    __slots__ = ("id", "x", "y", "row", "col")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        row: Optional[int] = None,
        col: Optional[int] = None,
    ):
        self.id: str            = node_id
        self.x: float           = x
        self.y: float           = y
        self.row: Optional[int] = row
        self.col: Optional[int] = col

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {"id": self.id, "x": self.x, "y": self.y}
        if self.row is not None:
            data["row"] = self.row
        if self.col is not None:
            data["col"] = self.col
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            node_id=data["id"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            row=data.get("row"),
            col=data.get("col"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def _key(self):
        return (self.id, self.x, self.y, self.row, self.col)

    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.0f},{self.y:.0f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())
