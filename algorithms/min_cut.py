"""
min_cut.py — Minimum s-t Cut
=============================
Derived post hoc from a maximum flow:
  1. Run Edmonds-Karp to completion (not narrated step by step)
  2. The source side S = nodes reachable from the source in the final
     residual graph; everything else is the sink side
  3. The cut edges are the original edges from S to the sink side; their
     capacities sum to the max-flow value

`cut_set` holds the source side; cut edges go in `mst_edges` (the
highlighted edge-set facet) and their endpoints in `highlighted_path`.
"""

from typing import Iterator, Optional

from graph import Graph
from algorithms.ford_fulkerson import SAMPLE_GRAPH as _FLOW_SAMPLE, saturate
from algorithms.step import Step, StepBuilder, fmt
from algorithms.structures import FlowNetwork


DATA_STRUCTURE = "Max Flow / Min Cut"

# Same network as the Ford-Fulkerson page.
SAMPLE_GRAPH = _FLOW_SAMPLE


def min_cut(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node, role="source")
    sink = graph.require_node(end_node, role="sink")

    net = FlowNetwork(graph)
    sb = StepBuilder()

    yield sb.build("Phase 1: Find the maximum flow using Ford-Fulkerson.", frontier=["0"])

    total = saturate(net, source, sink)
    sb.bind(flows=dict(net.flows), frontier=[fmt(total)])
    yield sb.build(f"Max flow found: {fmt(total)}. Now, find the min cut.")

    yield sb.build(
        f"Phase 2: Find all nodes reachable from {source} in the residual graph.",
        current_node=source,
        cut_set={source},
    )

    side = net.reachable(source)
    yield sb.build(
        f"The {source}-set contains all reachable nodes. The rest form the {sink}-set.",
        cut_set=side,
    )

    crossing = net.cut_edges(side)
    value = sum(e.weight for e in crossing)
    yield sb.build(
        f"The edges crossing the cut are highlighted. Min cut value = {fmt(value)}.",
        cut_set=side,
        mst_edges=[e.key for e in crossing],
        highlighted_path=[n for e in crossing for n in (e.source, e.target)],
        highlighted_edge=crossing[0] if crossing else None,
        frontier=[f"{fmt(total)} / {fmt(value)}"],
    )
