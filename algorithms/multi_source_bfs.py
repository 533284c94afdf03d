"""
multi_source_bfs.py — Multi-Source BFS (rotting oranges)
=========================================================
Grid cells hold 0 (empty), 1 (fresh) or 2 (rotten).  Each minute every
rotten orange rots its fresh 4-neighbours.  Seeding ONE queue with every
initially rotten cell at time 0 makes BFS levels equal minutes, so the
last level reached is the minimum time until nothing fresh can rot.

start_node / end_node are ignored: every rotten cell is a source.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional

from graph import Graph, GraphError, Node
from algorithms.step import Step, StepBuilder
from algorithms.flood_fill import cell_id


DATA_STRUCTURE = "Time Elapsed"

EMPTY, FRESH, ROTTEN = 0, 1, 2

COLORS: Dict[int, str] = {
    EMPTY:  "#4b5563",
    FRESH:  "#f97316",
    ROTTEN: "#dc2626",
}

_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

_GRID = (
    (2, 1, 1, 0, 1),
    (1, 1, 0, 1, 1),
    (0, 1, 1, 1, 0),
    (1, 0, 1, 2, 1),
)

SAMPLE_GRAPH = Graph(
    nodes=[Node(cell_id(r, c), row=r, col=c) for r, row in enumerate(_GRID) for c in range(len(row))],
    adj={},
    layout="grid",
    grid=_GRID,
).validate()


def multi_source_bfs(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    if graph.grid is None:
        raise GraphError("Multi-source BFS needs a grid-layout graph")
    grid: List[List[int]] = [list(row) for row in graph.grid]
    rows, cols = len(grid), len(grid[0]) if grid else 0

    queue = deque()
    colors: Dict[str, str] = {}
    fresh = 0
    for r in range(rows):
        for c in range(cols):
            if grid[r][c] not in COLORS:
                raise GraphError(f"Cell ({r},{c}) must be 0, 1 or 2, got {grid[r][c]!r}")
            colors[cell_id(r, c)] = COLORS[grid[r][c]]
            if grid[r][c] == ROTTEN:
                queue.append((r, c, 0))
            elif grid[r][c] == FRESH:
                fresh += 1

    minutes = 0
    sb = StepBuilder(cell_colors=colors, frontier=lambda: [f"{minutes} min"])
    yield sb.build("Start. Initial grid with fresh and rotten oranges.")

    while queue:
        r, c, t = queue.popleft()
        minutes = t
        for dr, dc in _DIRECTIONS:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < rows and 0 <= nc < cols) or grid[nr][nc] != FRESH:
                continue
            grid[nr][nc] = ROTTEN
            fresh -= 1
            queue.append((nr, nc, t + 1))
            nid = cell_id(nr, nc)
            colors[nid] = COLORS[ROTTEN]
            yield sb.build(
                f"Orange at ({r},{c}) rots its neighbor at ({nr},{nc}).",
                current_node=nid,
                frontier=[f"{t + 1} min"],
            )

    if fresh:
        yield sb.build(f"Process complete. {fresh} fresh orange(s) can never rot.")
    else:
        yield sb.build(f"All fresh oranges have rotted. Total time: {minutes} minutes.")
