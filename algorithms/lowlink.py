"""
lowlink.py — Explicit-Stack DFS Walker for the Low-Link Family
===============================================================
Tarjan's SCC, articulation points, bridges and biconnected components
all run ONE depth-first pass that stamps discovery times and then folds
low-link values back up the tree.  Written recursively that pass hits
Python's recursion limit on long paths, so this module drives it with an
explicit call stack instead and reports what happens as events:

    ENTER    (u, None)  u discovered; disc[u] == low[u] == ctx.time
    TREE     (u, v)     about to descend along tree edge u → v
    RETURN   (u, v)     child v finished; control is back at u
    NONTREE  (u, v)     v already discovered (back / cross edge)
    FINISH   (u, None)  every neighbour of u has been handled

The walker owns traversal order and discovery times; each algorithm owns
its low-link rule, updating `ctx.low` as it consumes the events.
"""

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from graph import Graph


class Event(Enum):
    ENTER   = "enter"
    TREE    = "tree"
    RETURN  = "return"
    NONTREE = "nontree"
    FINISH  = "finish"


class DfsContext:
    """Shared mutable state of one low-link pass (passed by reference)."""

    def __init__(self):
        self.time: int                      = 0
        self.disc: Dict[str, int]           = {}
        self.low:  Dict[str, int]           = {}
        self.parent: Dict[str, Optional[str]] = {}

    def discovered(self, node_id: str) -> bool:
        return node_id in self.disc


def walk(
    graph: Graph,
    ctx: DfsContext,
    roots: Optional[List[str]] = None,
) -> Iterator[Tuple[Event, str, Optional[str]]]:
    """
    Depth-first over `roots` (default: every node, in node order), visiting
    neighbours in adjacency order exactly as the recursive version would.
    """
    for root in roots if roots is not None else graph.node_ids():
        if ctx.discovered(root):
            continue
        ctx.parent[root] = None
        yield from _enter(ctx, root)
        stack = [(root, iter(graph.neighbours(root)))]

        while stack:
            u, nbrs = stack[-1]
            v = next(nbrs, None)
            if v is None:
                stack.pop()
                yield Event.FINISH, u, None
                if stack:
                    yield Event.RETURN, stack[-1][0], u
                continue
            if ctx.discovered(v):
                yield Event.NONTREE, u, v
                continue
            ctx.parent[v] = u
            yield Event.TREE, u, v
            yield from _enter(ctx, v)
            stack.append((v, iter(graph.neighbours(v))))


def _enter(ctx: DfsContext, u: str):
    ctx.time += 1
    ctx.disc[u] = ctx.low[u] = ctx.time
    yield Event.ENTER, u, None
