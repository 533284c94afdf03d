"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the
analytics metrics the API returns alongside a trace and for Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start(algo_key="dijkstra", graph=g, start_node="A", end_node="F")
    rec.run_to_completion()          # generates the whole trace
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    The API holds two Recorders (one per algo), runs both to completion
    on the SAME graph, then calls compare(rec1, rec2) → ComparisonResult.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from graph import Graph
from graph.edge import edge_key
from algorithms import AlgoInfo, generate, get_algorithm
from algorithms.step import Step


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the analytics card renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    start_node:      str   = ""
    end_node:        str   = ""
    nodes_touched:   int   = 0          # distinct nodes that were ever current
    nodes_visited:   int   = 0          # size of the final visited facet
    path_length:     int   = 0          # number of edges on the final highlighted path
    path_cost:       float = 0.0        # total weight of that path
    mst_weight:      float = 0.0        # total weight of the final mst_edges facet
    total_steps:     int   = 0          # number of Steps in the trace
    wall_time_ms:    float = 0.0        # wall-clock time to generate the trace
    memory_bytes:    int   = 0          # approx size of the step buffer (sys.getsizeof)
    path_found:      bool  = False
    negative_cycle:  bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_steps:  str = ""   # which algo needed fewer Steps
    winner_nodes:  str = ""   # which algo touched fewer nodes
    winner_time:   str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps       : Full list of Steps from the run.
        metrics     : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.steps:     List[Step]           = []
        self.metrics:   Optional[RunMetrics] = None

        self._algo_info:  Optional[AlgoInfo] = None
        self._graph:      Optional[Graph]    = None
        self._start:      Optional[str]      = None
        self._end:        Optional[str]      = None
        self._params:     Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        graph: Optional[Graph] = None,
        start_node: Optional[str] = None,
        end_node: Optional[str] = None,
        **params,
    ) -> None:
        """Select the algorithm and inputs for this run (sample graph by default)."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._graph     = graph if graph is not None else info.sample_graph
        self._start     = start_node if start_node is not None else info.default_start
        self._end       = end_node if end_node is not None else info.default_end
        self._params    = params
        self.steps      = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Generate the whole trace, record every step, compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.steps = generate(self._algo_info.key, self._graph, self._start, self._end, **self._params)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.debug("Recorded %s: %d steps in %.2f ms", self._algo_info.key, len(self.steps), wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def graph(self) -> Optional[Graph]:
        return self._graph

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key":   self._algo_info.key if self._algo_info else "",
            "start_node": self._start,
            "end_node":   self._end,
            "graph":      self._graph.to_dict() if self._graph else {},
            "metrics":    asdict(self.metrics) if self.metrics else {},
            "steps":      [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        touched = {s.current_node for s in self.steps if s.current_node is not None}
        visited = last.visited if last is not None and last.visited is not None else frozenset()
        path    = list(last.highlighted_path or ()) if last else []

        # path cost: sum edge weights along the path
        path_cost = 0.0
        if self._graph and len(path) > 1:
            for a, b in zip(path, path[1:]):
                e = self._graph.edge_between(a, b)
                if e:
                    path_cost += e.weight

        mst_weight = 0.0
        if last is not None and last.mst_edges and self._graph:
            weights = {edge_key(e.source, e.target): e.weight for e in self._graph.edges}
            mst_weight = sum(weights.get(k, 0) for k in last.mst_edges)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            start_node=self._start or "",
            end_node=self._end or "",
            nodes_touched=len(touched),
            nodes_visited=len(visited),
            path_length=len(path) - 1 if len(path) > 1 else 0,
            path_cost=path_cost,
            mst_weight=mst_weight,
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            path_found=len(path) > 1,
            negative_cycle=bool(last is not None and last.highlighted_cycle),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
        winner_nodes=winner(l.nodes_touched, r.nodes_touched, l.algo_label, r.algo_label),
        winner_time =winner(l.wall_time_ms, r.wall_time_ms, l.algo_label, r.algo_label),
    )
