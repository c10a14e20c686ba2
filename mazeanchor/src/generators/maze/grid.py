"""
Grid model for maze generation.

A grid is a flat, row-major list of cells. Each cell records four wall
flags keyed by compass direction (True = wall present). Interior edges are
recorded twice, once by each adjacent cell, and the two records must agree
(edge symmetry). Generation keeps the invariant by always carving both
sides of an edge together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class Direction(Enum):
    """Compass directions for cell edges.

    Rows grow southward, columns grow eastward.
    """
    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @property
    def offset(self) -> Tuple[int, int]:
        """(dcol, drow) step towards the neighbor in this direction."""
        return _OFFSETS[self]

    def __str__(self) -> str:
        return self.value


_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.N: (0, -1),
    Direction.E: (1, 0),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

# Neighbor scan order. Seeded generation depends on it.
DIRECTIONS: Tuple[Direction, ...] = (Direction.N, Direction.E, Direction.S, Direction.W)


def opposite(direction: Direction) -> Direction:
    """Return the facing direction on the other side of an edge."""
    return _OPPOSITES[direction]


def _closed_walls() -> Dict[Direction, bool]:
    return {d: True for d in DIRECTIONS}


@dataclass
class Cell:
    """A lattice point of the grid with its four wall flags."""
    col: int
    row: int
    walls: Dict[Direction, bool] = field(default_factory=_closed_walls)

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.col, self.row)

    def has_wall(self, direction: Direction) -> bool:
        return self.walls[direction]

    def set_wall(self, direction: Direction, present: bool) -> None:
        self.walls[direction] = bool(present)


@dataclass
class Grid:
    """
    Rectangular grid of cells addressed by ``index = row * cols + col``.

    The grid owns its cells; a freshly constructed grid has every wall
    closed, which is the starting state for carving.

    Attributes:
        cols: Number of columns (x axis)
        rows: Number of rows (y axis, growing south)
        cells: Row-major cell list of length ``cols * rows``
    """
    cols: int
    rows: int
    cells: List[Cell] = field(init=False)

    def __post_init__(self):
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Grid dimensions must be >= 1, got {self.cols}x{self.rows}")
        self.cells = [Cell(c, r) for r in range(self.rows) for c in range(self.cols)]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def index_of(self, col: int, row: int) -> int:
        """Flat index of the cell at (col, row)."""
        if not self.in_bounds(col, row):
            raise IndexError(f"Cell ({col}, {row}) outside {self.cols}x{self.rows} grid")
        return row * self.cols + col

    def cell(self, col: int, row: int) -> Cell:
        return self.cells[self.index_of(col, row)]

    def neighbor(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """Adjacent cell in ``direction``, or None at the grid boundary."""
        dc, dr = direction.offset
        col, row = cell.col + dc, cell.row + dr
        if not self.in_bounds(col, row):
            return None
        return self.cells[row * self.cols + col]

    def neighbors(self, cell: Cell) -> List[Tuple[Direction, Cell]]:
        """All in-bounds neighbors of ``cell`` paired with their direction."""
        result = []
        for direction in DIRECTIONS:
            other = self.neighbor(cell, direction)
            if other is not None:
                result.append((direction, other))
        return result

    def carve(self, cell: Cell, direction: Direction) -> Cell:
        """
        Open the edge between ``cell`` and its neighbor in ``direction``.

        Both recorded flags are cleared together so the edge stays
        symmetric.

        Returns:
            The neighbor on the other side of the opened edge

        Raises:
            ValueError: If the edge lies on the grid boundary
        """
        other = self.neighbor(cell, direction)
        if other is None:
            raise ValueError(f"Cannot carve boundary edge {direction} of cell {cell.coords}")
        cell.set_wall(direction, False)
        other.set_wall(opposite(direction), False)
        return other

    def is_open(self, cell: Cell, direction: Direction) -> bool:
        """
        Check whether an edge can be walked through.

        An edge is passable only if neither adjacent cell records a wall on
        it, which is the same OR rule the geometry compiler uses for
        grids whose symmetry was not re-verified.
        """
        other = self.neighbor(cell, direction)
        if other is None:
            return False
        return not (cell.has_wall(direction) or other.has_wall(opposite(direction)))

    def interior_edges(self) -> Iterator[Tuple[Cell, Direction, Cell]]:
        """Yield each interior edge once as (cell, E|S, neighbor)."""
        for cell in self.cells:
            for direction in (Direction.E, Direction.S):
                other = self.neighbor(cell, direction)
                if other is not None:
                    yield cell, direction, other

    def asymmetric_edges(self) -> List[Tuple[Tuple[int, int], Direction]]:
        """Interior edges whose two recorded flags disagree."""
        return [
            (cell.coords, direction)
            for cell, direction, other in self.interior_edges()
            if cell.has_wall(direction) != other.has_wall(opposite(direction))
        ]

    def is_symmetric(self) -> bool:
        return not self.asymmetric_edges()

    def open_interior_edge_count(self) -> int:
        """Number of interior edges with no wall recorded on either side."""
        return sum(1 for cell, direction, _ in self.interior_edges() if self.is_open(cell, direction))

    def wall_flags(self) -> List[Tuple[bool, bool, bool, bool]]:
        """Row-major (N, E, S, W) tuples, handy for equality checks."""
        return [tuple(cell.walls[d] for d in DIRECTIONS) for cell in self.cells]
