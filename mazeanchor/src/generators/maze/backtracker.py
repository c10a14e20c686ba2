"""
Randomized recursive backtracker maze generator.

Carves a perfect maze (a spanning tree over the grid graph) by walking
depth-first from the origin cell and backtracking at dead ends. The walk
uses an explicit stack, so grid size is not bounded by recursion depth.

Every neighbor choice is drawn from a ``random.Random`` seeded with the
maze's seed string. The same seed and dimensions always reproduce the
same wall layout.
"""

import logging
import random
import string
import time
from typing import List, Optional, Tuple

from mazeanchor.src.validation.core import ValidationStage
from mazeanchor.src.validation.gates import validation_gate

from .grid import Cell, Direction, Grid
from .maze_types import DEFAULT_CELL_SIZE_M, Coord, Maze

logger = logging.getLogger(__name__)

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def make_seed() -> str:
    """Mint a timestamp-derived seed string (milliseconds in base 36)."""
    return _to_base36(int(time.time() * 1000))


def carve_passages(grid: Grid, rng: random.Random, origin: Coord = (0, 0)) -> Grid:
    """
    Carve a perfect maze into ``grid`` in place.

    The grid is expected to start with every wall closed.

    Args:
        grid: Grid to carve
        rng: Random source for neighbor choices
        origin: (col, row) the walk starts from

    Returns:
        The same grid, for chaining
    """
    visited = [False] * len(grid)
    stack: List[Cell] = []

    current: Optional[Cell] = grid.cell(*origin)
    visited[grid.index_of(*origin)] = True

    while current is not None:
        candidates: List[Tuple[Direction, Cell]] = [
            (direction, other)
            for direction, other in grid.neighbors(current)
            if not visited[other.row * grid.cols + other.col]
        ]
        if candidates:
            direction, nxt = candidates[rng.randrange(len(candidates))]
            grid.carve(current, direction)
            stack.append(current)
            visited[nxt.row * grid.cols + nxt.col] = True
            current = nxt
        else:
            current = stack.pop() if stack else None

    return grid


@validation_gate(ValidationStage.GENERATION)
def generate_maze(
    cols: int,
    rows: int,
    seed: Optional[str] = None,
    cell_size_m: float = DEFAULT_CELL_SIZE_M,
    start: Coord = (0, 0),
    goal: Optional[Coord] = None,
    rng: Optional[random.Random] = None,
) -> Maze:
    """
    Generate a perfect maze.

    Args:
        cols: Number of columns (>= 1)
        rows: Number of rows (>= 1)
        seed: Seed string; a timestamp seed is minted when omitted
        cell_size_m: Cell edge length in meters
        start: Start cell, defaults to the origin
        goal: Goal cell, defaults to the far corner
        rng: Explicit random source; overrides ``seed`` for carving

    Returns:
        Maze carrying the grid and the seed that reproduces it

    Raises:
        ValueError: If dimensions are < 1 or start/goal fall outside the grid
    """
    if cols < 1 or rows < 1:
        raise ValueError(f"Maze dimensions must be >= 1, got {cols}x{rows}")

    if seed is None:
        seed = make_seed()
    seed = str(seed)
    if rng is None:
        rng = random.Random(seed)

    grid = carve_passages(Grid(cols, rows), rng)
    maze = Maze(grid=grid, cell_size_m=cell_size_m, start=start, goal=goal, seed=seed)

    logger.info("Generated %dx%d maze (seed=%s)", cols, rows, seed)
    return maze
