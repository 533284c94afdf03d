"""
flood_fill.py — Flood Fill on a Grid
=====================================
4-neighbour BFS over a grid-layout graph.  Every cell connected to the
start cell through cells of the SAME original colour is recoloured.
Cells are nodes with id "r-c"; the grid itself lives on Graph.grid as
palette indices and each Step carries the full cell → colour map.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Tuple

from graph import Graph, GraphError, Node
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Queue"

PALETTE: Tuple[str, ...] = ("#ef4444", "#f97316", "#eab308", "#22c55e", "#3b82f6", "#a855f7")

FILL_COLOR_INDEX = 5

_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

_GRID = (
    (1, 1, 1, 2, 2),
    (1, 1, 0, 0, 2),
    (1, 0, 0, 2, 2),
    (3, 3, 0, 4, 4),
    (3, 3, 3, 4, 4),
)

SAMPLE_GRAPH = Graph(
    nodes=[Node(f"{r}-{c}", row=r, col=c) for r, row in enumerate(_GRID) for c in range(len(row))],
    adj={},
    layout="grid",
    grid=_GRID,
).validate()


def cell_id(r: int, c: int) -> str:
    return f"{r}-{c}"


def _parse_cell(node_id: str) -> Tuple[int, int]:
    r, c = node_id.split("-", 1)
    return int(r), int(c)


def flood_fill(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
    fill_index: int = FILL_COLOR_INDEX,
) -> Iterator[Step]:
    if graph.grid is None:
        raise GraphError("Flood fill needs a grid-layout graph")
    grid = graph.grid
    start = graph.require_node(start_node or "2-1")
    sr, sc = _parse_cell(start)
    rows, cols = len(grid), len(grid[0])
    original = grid[sr][sc]

    colors: Dict[str, str] = {
        cell_id(r, c): PALETTE[grid[r][c]] for r in range(rows) for c in range(cols)
    }
    queue = deque()
    sb = StepBuilder(cell_colors=colors, frontier=lambda: [f"({r},{c})" for r, c in queue])

    yield sb.build("Initial grid state before flood fill.")

    if original == fill_index:
        yield sb.build("Start color is the same as new color. Nothing to do.")
        return

    queue.append((sr, sc))
    seen = {start}
    colors[start] = PALETTE[fill_index]
    yield sb.build(f"Start flood fill at ({sr},{sc}). New color is {PALETTE[fill_index]}.")

    while queue:
        r, c = queue.popleft()
        for dr, dc in _DIRECTIONS:
            nr, nc = r + dr, c + dc
            nid = cell_id(nr, nc)
            if not (0 <= nr < rows and 0 <= nc < cols) or nid in seen or grid[nr][nc] != original:
                continue
            seen.add(nid)
            colors[nid] = PALETTE[fill_index]
            queue.append((nr, nc))
            yield sb.build(f"Filling neighbor ({nr},{nc}).", current_node=nid)

    yield sb.build("Flood fill complete.")


def filled_cells(steps: List[Step], color_index: int = FILL_COLOR_INDEX) -> List[str]:
    """Cell ids carrying the fill colour in the final Step."""
    final = steps[-1].cell_colors or {}
    return sorted(cid for cid, color in final.items() if color == PALETTE[color_index])
