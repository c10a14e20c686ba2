"""
Conversion module: maze transport codec and wall geometry compilation.
"""

from .maze_codec import (
    encode_maze,
    dumps_maze,
    decode_maze,
    decode_maze_with_report,
    MazeDecodeError,
    CellCountMismatchError,
    MIN_GRID_SIZE,
    MAX_GRID_SIZE,
    DEFAULT_GRID_SIZE,
)

__all__ = [
    'encode_maze',
    'dumps_maze',
    'decode_maze',
    'decode_maze_with_report',
    'MazeDecodeError',
    'CellCountMismatchError',
    'MIN_GRID_SIZE',
    'MAX_GRID_SIZE',
    'DEFAULT_GRID_SIZE',
]
