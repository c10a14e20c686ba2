"""
Maze data type: a grid plus the metadata needed to place and play it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .grid import Grid


# Format version written by the codec
MAZE_FORMAT_VERSION = 1

# Physical defaults in meters (tabletop scale)
DEFAULT_CELL_SIZE_M = 0.3

Coord = Tuple[int, int]


@dataclass
class Maze:
    """
    A generated or decoded maze.

    Attributes:
        grid: Cell grid with wall flags
        cell_size_m: Edge length of one cell in meters
        start: (col, row) of the start cell
        goal: (col, row) of the goal cell
        seed: Seed string the grid was generated from, if known
        version: Transport format version
    """
    grid: Grid
    cell_size_m: float = DEFAULT_CELL_SIZE_M
    start: Coord = (0, 0)
    goal: Optional[Coord] = None
    seed: Optional[str] = None
    version: int = MAZE_FORMAT_VERSION

    def __post_init__(self):
        if self.goal is None:
            self.goal = (self.grid.cols - 1, self.grid.rows - 1)
        self.start = tuple(self.start)
        self.goal = tuple(self.goal)
        for name, (col, row) in (("start", self.start), ("goal", self.goal)):
            if not self.grid.in_bounds(col, row):
                raise ValueError(
                    f"Maze {name} ({col}, {row}) outside {self.grid.cols}x{self.grid.rows} grid"
                )
        if self.cell_size_m <= 0:
            raise ValueError(f"cell_size_m must be positive, got {self.cell_size_m}")

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def is_square(self) -> bool:
        return self.grid.cols == self.grid.rows

    @property
    def footprint_m(self) -> Tuple[float, float]:
        """Physical (width, depth) of the maze in meters."""
        return (self.grid.cols * self.cell_size_m, self.grid.rows * self.cell_size_m)
