"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • Which node is being examined and which neighbour it is looking at
    • The frontier (queue / stack / deque / priority queue) contents
    • Visited set, tentative distances, MST edges, set roots, …
    • Matrices, low-link tables, buckets, flows, heights / excess, cuts
    • A plain-English description of *what* just happened

Design decisions:
  - Step is a frozen dataclass with two mandatory fields (`description`,
    `current_node`) and many optional *facets*.  A facet is None when the
    algorithm family has no use for it.
  - A Step is COMPLETE, never a diff: the renderer needs exactly one Step
    plus the base graph (or the Step's own `graph_data` override).
  - Every collection inside a Step is an immutable point-in-time copy
    (tuple / frozenset / read-only mapping).  StepBuilder.build() is the
    only place Steps are made, and it does the copying, so generators can
    bind their live working structures to the builder without aliasing.
  - Unreachable distances use the INF / NEG_INF sentinels below, never a
    float overflow or NaN.
"""

import numbers
from dataclasses import dataclass, fields
from functools import total_ordering
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from graph import Edge, Graph


# ---------------------------------------------------------------------------
# Distance sentinels
# ---------------------------------------------------------------------------
@total_ordering
class _Unbounded:
    """Ordered above (sign=+1) or below (sign=-1) every real number."""

    __slots__ = ("_sign",)

    def __init__(self, sign: int):
        self._sign = sign

    def __eq__(self, other) -> bool:
        return self is other

    def __lt__(self, other) -> bool:
        if self is other:
            return False
        if isinstance(other, _Unbounded):
            return self._sign < other._sign
        if isinstance(other, numbers.Real):
            return self._sign < 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("unbounded", self._sign))

    def __reduce__(self):
        return "INF" if self._sign > 0 else "NEG_INF"

    def __str__(self) -> str:
        return "∞" if self._sign > 0 else "-∞"

    __repr__ = __str__


INF     = _Unbounded(+1)
NEG_INF = _Unbounded(-1)

Distance = Union[int, float, _Unbounded]


def is_finite(value: Any) -> bool:
    return not isinstance(value, _Unbounded)


def fmt(value: Any) -> str:
    """Display form used in descriptions: 3.0 → '3', INF → '∞'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# The snapshot
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        description         : Human-readable narration of this instant.
        current_node        : Node under examination (or None).
        neighbor            : Neighbour of current_node being explored.
        frontier            : Queue / stack / deque / PQ contents, as strings, front first.
        visited             : Nodes marked visited so far.
        distances           : {node_id: number | INF | NEG_INF}.
        highlighted_edge    : The edge being considered right now.
        highlighted_path    : Ordered node ids of a path (augmenting path, DFS path, …).
        highlighted_cycle   : Ordered node ids of a detected cycle.
        mst_edges           : Undirected edge keys ("A-B") chosen so far (also bridges).
        node_sets           : {node_id: set root / component id} for colouring.
        distance_matrix     : Rows of a distance / count matrix.
        reachability_matrix : Rows of a 0/1 reachability matrix.
        matrix_labels       : Row / column labels for the matrices.
        matrix_highlight    : (k, i, j) cell highlight; -1 for an unused coordinate.
        discovery_time      : {node_id: DFS discovery time}.
        low_link            : {node_id: low-link value}.
        buckets             : Dial's bucket array.
        current_bucket      : Index of the bucket being drained.
        flows               : {(u, v): flow} with flow(u, v) == -flow(v, u).
        heights             : Push-relabel heights.
        excess              : Push-relabel excess flow.
        cut_set             : Source side of an s-t cut.
        supernodes          : {representative: (original ids, …)} for contractions.
        cell_colors         : {"r-c": colour} for grid layouts.
        graph_data          : Full topology override when the graph itself changes.
    """

    description:         str
    current_node:        Optional[str]                        = None
    neighbor:            Optional[str]                        = None
    frontier:            Optional[Tuple[str, ...]]            = None
    visited:             Optional[FrozenSet[str]]             = None
    distances:           Optional[Mapping[str, Distance]]     = None
    highlighted_edge:    Optional[Edge]                       = None
    highlighted_path:    Optional[Tuple[str, ...]]            = None
    highlighted_cycle:   Optional[Tuple[str, ...]]            = None
    mst_edges:           Optional[FrozenSet[str]]             = None
    node_sets:           Optional[Mapping[str, str]]          = None
    distance_matrix:     Optional[Tuple[Tuple[Any, ...], ...]] = None
    reachability_matrix: Optional[Tuple[Tuple[int, ...], ...]] = None
    matrix_labels:       Optional[Tuple[str, ...]]            = None
    matrix_highlight:    Optional[Tuple[int, int, int]]       = None
    discovery_time:      Optional[Mapping[str, int]]          = None
    low_link:            Optional[Mapping[str, int]]          = None
    buckets:             Optional[Tuple[Tuple[str, ...], ...]] = None
    current_bucket:      Optional[int]                        = None
    flows:               Optional[Mapping[Tuple[str, str], float]] = None
    heights:             Optional[Mapping[str, int]]          = None
    excess:              Optional[Mapping[str, float]]        = None
    cut_set:             Optional[FrozenSet[str]]             = None
    supernodes:          Optional[Mapping[str, Tuple[str, ...]]] = None
    cell_colors:         Optional[Mapping[str, str]]          = None
    graph_data:          Optional[Graph]                      = None

    def facets(self) -> Tuple[str, ...]:
        """Names of the optional facets present on this Step."""
        return tuple(
            f.name for f in fields(self)
            if f.name not in ("description", "current_node") and getattr(self, f.name) is not None
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON wire form: absent facets omitted, sentinels and pair keys stringified."""
        data: Dict[str, Any] = {
            "description":  self.description,
            "current_node": self.current_node,
        }
        for name in self.facets():
            data[name] = _to_wire(name, getattr(self, name))
        return data


# ---------------------------------------------------------------------------
# Freezing (generator state → immutable facet) and wire conversion
# ---------------------------------------------------------------------------
def _mapping(value) -> Mapping:
    return MappingProxyType(dict(value))


def _rows(value) -> Tuple[Tuple[Any, ...], ...]:
    return tuple(tuple(row) for row in value)


_FREEZERS: Dict[str, Callable[[Any], Any]] = {
    "neighbor":            lambda v: v,
    "frontier":            lambda v: tuple(str(x) for x in v),
    "visited":             frozenset,
    "distances":           _mapping,
    "highlighted_edge":    lambda v: v,
    "highlighted_path":    tuple,
    "highlighted_cycle":   tuple,
    "mst_edges":           frozenset,
    "node_sets":           _mapping,
    "distance_matrix":     _rows,
    "reachability_matrix": _rows,
    "matrix_labels":       tuple,
    "matrix_highlight":    tuple,
    "discovery_time":      _mapping,
    "low_link":            _mapping,
    "buckets":             _rows,
    "current_bucket":      int,
    "flows":               _mapping,
    "heights":             _mapping,
    "excess":              _mapping,
    "cut_set":             frozenset,
    "supernodes":          lambda v: MappingProxyType({k: tuple(m) for k, m in v.items()}),
    "cell_colors":         _mapping,
    "graph_data":          lambda v: v,
}

FACETS = tuple(_FREEZERS)


def _wire_value(value: Any) -> Any:
    if isinstance(value, _Unbounded):
        return str(value)
    return value


def _to_wire(name: str, value: Any) -> Any:
    if name in ("visited", "mst_edges", "cut_set"):
        return sorted(value)
    if name == "flows":
        return {f"{u}->{v}": f for (u, v), f in value.items()}
    if name == "highlighted_edge":
        return value.to_dict()
    if name == "graph_data":
        return value.to_dict()
    if name in ("distance_matrix", "reachability_matrix", "buckets"):
        return [[_wire_value(x) for x in row] for row in value]
    if name == "supernodes":
        return {k: list(m) for k, m in value.items()}
    if isinstance(value, Mapping):
        return {k: _wire_value(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return list(value)
    return value


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Snapshot factory that algorithms use to construct Steps cleanly.

    Facets can be *bound* once to the generator's live working structures
    (or to zero-argument callables deriving them); every build() copies the
    current contents into a fresh immutable Step.

    Usage inside an algorithm generator:
        sb = StepBuilder(frontier=queue, visited=visited)
        queue.append("B")
        yield sb.build("Enqueue B.", current_node="A", neighbor="B")
    """

    def __init__(self, **bound: Any):
        self._bound: Dict[str, Any] = {}
        self.bind(**bound)

    def bind(self, **facets: Any) -> "StepBuilder":
        for name in facets:
            if name not in _FREEZERS:
                raise TypeError(f"Unknown Step facet: {name}")
        self._bound.update(facets)
        return self

    def unbind(self, *names: str) -> "StepBuilder":
        for name in names:
            self._bound.pop(name, None)
        return self

    def build(self, description: str, current_node: Optional[str] = None, **facets: Any) -> Step:
        for name in facets:
            if name not in _FREEZERS:
                raise TypeError(f"Unknown Step facet: {name}")
        values = dict(self._bound)
        values.update(facets)

        frozen: Dict[str, Any] = {}
        for name, value in values.items():
            if callable(value):
                value = value()
            if value is None:
                continue
            frozen[name] = _FREEZERS[name](value)
        return Step(description=description, current_node=current_node, **frozen)
