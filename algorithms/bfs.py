"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Step at every meaningful event:
  1. Initialise  →  source enqueued and marked visited
  2. Dequeue a node  →  it becomes the CURRENT node
  3. Discover an unseen neighbour  →  mark visited, enqueue, record its depth
  4. Final step  →  queue empty, every reachable node carries its hop distance

Nodes are marked visited when they are ENQUEUED, not when dequeued, so no
node can sit in the queue twice and cycles terminate naturally.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional

from graph import Graph
from algorithms.step import INF, Distance, Step, StepBuilder


DATA_STRUCTURE = "Queue"

# ---------------------------------------------------------------------------
# Pseudocode: one displayed line per string
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",
    "    queue ← [source]",
    "    visited ← {source}; dist[source] ← 0",
    "    while queue is not empty:",
    "        node ← queue.dequeue()",
    "        for neighbour in adj(node):",
    "            if neighbour not visited:",
    "                visited.add(neighbour)",
    "                dist[neighbour] ← dist[node] + 1",
    "                queue.enqueue(neighbour)",
]

SAMPLE_GRAPH = Graph.build(
    {"A": (100, 200), "B": (250, 100), "C": (250, 300),
     "D": (400, 100), "E": (400, 300), "F": (550, 200)},
    adj={
        "A": ["B", "C"],
        "B": ["A", "D"],
        "C": ["A", "E"],
        "D": ["B", "F"],
        "E": ["C", "F"],
        "F": ["D", "E"],
    },
)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    """
    Yields Step snapshots for every event during BFS execution.

    Args:
        graph      : The graph to traverse.
        start_node : Source node id.
        end_node   : Ignored — BFS explores every reachable node.

    Yields:
        Step – one per event (initialise, dequeue, discover, complete).
    """
    source = graph.require_node(start_node)

    queue   = deque([source])
    visited = {source}
    depth: Dict[str, Distance] = {nid: INF for nid in graph.node_ids()}
    depth[source] = 0

    sb = StepBuilder(frontier=queue, visited=visited, distances=depth)

    yield sb.build(f"Start BFS from node {source}. Add it to the queue and mark as visited.")

    while queue:
        node = queue.popleft()
        yield sb.build(f"Dequeue {node} to process it.", current_node=node)

        for nbr in graph.neighbours(node):
            if nbr in visited:
                continue
            visited.add(nbr)
            depth[nbr] = depth[node] + 1
            queue.append(nbr)
            yield sb.build(
                f"Node {node} explores neighbor {nbr}. Add {nbr} to queue and mark as visited "
                f"(distance {depth[nbr]}).",
                current_node=node,
                neighbor=nbr,
            )

    yield sb.build("Queue is empty. BFS traversal complete.")
