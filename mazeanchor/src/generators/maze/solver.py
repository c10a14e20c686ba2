"""
Breadth-first path search over open maze passages.

Used to emit the ``guaranteedPath`` of the maze endpoint and to check
connectivity of decoded or generated grids.
"""

from collections import deque
from typing import Dict, List, Optional, Set

from .grid import Grid
from .maze_types import Coord


def reachable_cells(grid: Grid, origin: Coord = (0, 0)) -> Set[Coord]:
    """Flood fill from ``origin`` through open edges."""
    seen: Set[Coord] = {tuple(origin)}
    queue = deque([tuple(origin)])
    while queue:
        col, row = queue.popleft()
        cell = grid.cell(col, row)
        for direction, other in grid.neighbors(cell):
            if other.coords in seen or not grid.is_open(cell, direction):
                continue
            seen.add(other.coords)
            queue.append(other.coords)
    return seen


def is_fully_connected(grid: Grid) -> bool:
    return len(reachable_cells(grid)) == len(grid)


def find_path(grid: Grid, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    """
    Shortest path from ``start`` to ``goal`` through open edges.

    In a perfect maze this is the only simple path.

    Returns:
        List of (col, row) from start to goal inclusive, or None if the
        goal is unreachable
    """
    start, goal = tuple(start), tuple(goal)
    parents: Dict[Coord, Optional[Coord]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == goal:
            break
        cell = grid.cell(*current)
        for direction, other in grid.neighbors(cell):
            if other.coords in parents or not grid.is_open(cell, direction):
                continue
            parents[other.coords] = current
            queue.append(other.coords)

    if goal not in parents:
        return None

    path = []
    node: Optional[Coord] = goal
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path
