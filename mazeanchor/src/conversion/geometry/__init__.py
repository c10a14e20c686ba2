"""
Geometry compilation for maze grids.

Turns a validated grid into instanced wall batches and a goal marker in
the maze's local frame.
"""

from .wall_compiler import (
    WallCompiler,
    GeometrySettings,
    MazeGeometry,
    WallBatch,
    WallOrientation,
    GoalMarker,
    CompileStats,
    cell_center,
    compile_maze,
)

__all__ = [
    'WallCompiler',
    'GeometrySettings',
    'MazeGeometry',
    'WallBatch',
    'WallOrientation',
    'GoalMarker',
    'CompileStats',
    'cell_center',
    'compile_maze',
]
