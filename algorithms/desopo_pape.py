"""
desopo_pape.py — D'Esopo-Pape Shortest Paths
=============================================
A label-correcting algorithm that tolerates negative edges.  A negative
cycle is reported as soon as an improvement would make the predecessor
links loop back on themselves (such a loop always has negative weight).
Each node is in one of three states:

    NEW      never queued           → improved node goes to the BACK
    DONE     queued before, removed → improved node goes to the FRONT
    QUEUED   currently in the deque → distance updated in place

Re-queued nodes jump the line because their improvement is likely to
cascade through nodes already processed.
"""

from collections import deque
from enum import Enum
from typing import Dict, Iterator, Optional

from graph import Graph
from algorithms.bellman_ford import trace_cycle
from algorithms.step import INF, Distance, Step, StepBuilder


DATA_STRUCTURE = "Deque"


class _Status(Enum):
    NEW    = 0
    DONE   = 1
    QUEUED = 2


SAMPLE_GRAPH = Graph.build(
    {"S": (50, 200), "A": (200, 100), "B": (200, 300),
     "C": (350, 100), "D": (350, 300), "T": (500, 200)},
    edges=[
        ("S", "A", 4), ("S", "B", 2), ("A", "C", 3), ("B", "A", 1),
        ("B", "D", 2), ("C", "D", -2), ("C", "T", 3), ("D", "T", -1),
    ],
    adj={"S": ["A", "B"], "A": ["C"], "B": ["A", "D"], "C": ["D", "T"], "D": ["T"], "T": []},
    directed=True,
)


def _closes_loop(pred: Dict[str, str], u: str, v: str) -> bool:
    """True if v is an ancestor of u in the predecessor forest (so pred[v] = u makes a loop)."""
    cur: Optional[str] = u
    while cur is not None:
        if cur == v:
            return True
        cur = pred.get(cur)
    return False


def desopo_pape(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    source = graph.require_node(start_node)

    dist: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    status = {nid: _Status.NEW for nid in graph.node_ids()}
    pred: Dict[str, str] = {}
    dist[source] = 0
    dq = deque([source])
    status[source] = _Status.QUEUED

    sb = StepBuilder(frontier=dq, distances=dist)
    yield sb.build(
        f"Initialize. Add start node {source} to the back of the deque.",
        current_node=source,
    )

    while dq:
        u = dq.popleft()
        status[u] = _Status.DONE
        yield sb.build(f"Process node {u} from the front of the deque.", current_node=u)

        for v in graph.neighbours(u):
            edge = graph.arc(u, v)
            new_dist = dist[u] + edge.weight
            if new_dist >= dist[v]:
                continue
            dist[v] = new_dist
            loop = _closes_loop(pred, u, v)
            pred[v] = u
            if loop:
                cycle = trace_cycle(pred, v)
                yield sb.build(
                    f"Improving {v} through {u} closes a loop of predecessors. "
                    f"Negative cycle detected: {' → '.join(cycle)}!",
                    current_node=u,
                    neighbor=v,
                    highlighted_edge=edge,
                    highlighted_cycle=cycle,
                )
                return
            note = f"Updated distance of {v} to {new_dist}. "
            if status[v] is _Status.NEW:
                dq.append(v)
                note += "It's new, add to BACK."
            elif status[v] is _Status.DONE:
                dq.appendleft(v)
                note += "It's been seen, add to FRONT."
            else:
                note += "It's already in the deque."
            status[v] = _Status.QUEUED
            yield sb.build(note, current_node=u, neighbor=v, highlighted_edge=edge)

    yield sb.build("Algorithm complete. Deque is empty.")
