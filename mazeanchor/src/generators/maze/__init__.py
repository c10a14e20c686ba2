"""
Maze generation module.

Provides the grid model, the recursive backtracker generator and a
breadth-first path solver.
"""

from .grid import (
    Cell,
    Direction,
    DIRECTIONS,
    Grid,
    opposite,
)
from .maze_types import (
    Maze,
    Coord,
    DEFAULT_CELL_SIZE_M,
    MAZE_FORMAT_VERSION,
)
from .backtracker import carve_passages, generate_maze, make_seed
from .solver import find_path, is_fully_connected, reachable_cells

__all__ = [
    'Cell',
    'Direction',
    'DIRECTIONS',
    'Grid',
    'opposite',
    'Maze',
    'Coord',
    'DEFAULT_CELL_SIZE_M',
    'MAZE_FORMAT_VERSION',
    'carve_passages',
    'generate_maze',
    'make_seed',
    'find_path',
    'is_fully_connected',
    'reachable_cells',
]
