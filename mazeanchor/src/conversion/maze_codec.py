"""
Maze transport codec.

Encodes a Maze into the JSON-compatible payload served by the maze
endpoint, and decodes untrusted payloads (backend responses, files) back
into a Maze.

Decoding fails fast on structural problems: wrong payload type, wrong
cell count, out-of-range start/goal. Wall flags are read by truthiness.
Asymmetric edges are kept as recorded and reported as warnings; the
geometry compiler resolves them with its OR rule.
"""

import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from mazeanchor.src.generators.maze.grid import DIRECTIONS, Grid
from mazeanchor.src.generators.maze.maze_types import (
    DEFAULT_CELL_SIZE_M,
    MAZE_FORMAT_VERSION,
    Coord,
    Maze,
)
from mazeanchor.src.generators.maze.solver import find_path
from mazeanchor.src.validation.core import (
    ValidationError,
    ValidationIssue,
    ValidationResult,
    ValidationStage,
)
from mazeanchor.src.validation.rules import (
    CODEC_001,
    CODEC_002,
    CODEC_003,
    CODEC_004,
    CODEC_005,
    CODEC_006,
    CODEC_007,
    CODEC_008,
    GRID_004,
)

logger = logging.getLogger(__name__)


# Accepted gridSize on decode. Explicit cols/rows only need to be >= MIN_DIMENSION;
# the cell count check bounds them by the payload itself.
MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 101
DEFAULT_GRID_SIZE = 15
MIN_DIMENSION = 1

SUPPORTED_VERSIONS = (MAZE_FORMAT_VERSION,)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class MazeDecodeError(ValidationError):
    """A maze payload was rejected.

    Attributes:
        issue: The FAIL issue that caused the rejection
    """

    def __init__(self, issue: ValidationIssue):
        self.issue = issue
        super().__init__(ValidationResult(issues=[issue], stage=ValidationStage.DECODE))

    def __str__(self) -> str:
        return self.issue.format()


class CellCountMismatchError(MazeDecodeError):
    """The cell list length does not equal cols * rows."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(CODEC_003.issue(location="cells", expected=expected, actual=actual))


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------

def _encode_cell(cell) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"x": cell.col, "y": cell.row}
    for direction in DIRECTIONS:
        entry[str(direction)] = cell.walls[direction]
    return entry


def encode_maze(maze: Maze, include_path: bool = False) -> Dict[str, Any]:
    """
    Serialize a maze to a JSON-compatible dict.

    Args:
        maze: Maze to encode
        include_path: Add ``guaranteedPath`` (start to goal) to the payload

    Returns:
        Payload dict; ``cells`` has exactly cols*rows entries in row-major order
    """
    grid = maze.grid
    payload: Dict[str, Any] = {
        "version": maze.version,
        "seed": maze.seed,
    }
    if maze.is_square:
        payload["gridSize"] = grid.cols
    payload.update({
        "cols": grid.cols,
        "rows": grid.rows,
        "cellSizeMeters": maze.cell_size_m,
        "start": list(maze.start),
        "goal": list(maze.goal),
        "cells": [_encode_cell(cell) for cell in grid],
    })
    if include_path:
        path = find_path(grid, maze.start, maze.goal)
        payload["guaranteedPath"] = [list(p) for p in path] if path else []
    return payload


def dumps_maze(maze: Maze, include_path: bool = False, **json_kwargs) -> str:
    return json.dumps(encode_maze(maze, include_path=include_path), **json_kwargs)


# ---------------------------------------------------------------------------
# Decode helpers
# ---------------------------------------------------------------------------

def _kind(value: Any) -> str:
    return type(value).__name__


def _as_int(value: Any) -> Optional[int]:
    """Integer value of ``value`` or None; bools and fractional floats are rejected."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _size_field(
    payload: Dict[str, Any],
    name: str,
    fallback: int,
    warnings: List[ValidationIssue],
    minimum: int = MIN_GRID_SIZE,
    maximum: Optional[int] = MAX_GRID_SIZE,
) -> int:
    raw = payload.get(name)
    value = _as_int(raw)
    if value is None:
        if raw is not None:
            warnings.append(CODEC_008.issue(location=name, field=name, value=raw, used=fallback))
        return fallback
    clamped = max(minimum, value if maximum is None else min(value, maximum))
    if clamped != value:
        warnings.append(CODEC_008.issue(location=name, field=name, value=raw, used=clamped))
    return clamped


def _coord_field(
    payload: Dict[str, Any],
    name: str,
    default: Coord,
    cols: int,
    rows: int,
) -> Coord:
    if name not in payload or payload[name] is None:
        return default
    raw = payload[name]
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        col, row = _as_int(raw[0]), _as_int(raw[1])
        if col is not None and row is not None and 0 <= col < cols and 0 <= row < rows:
            return (col, row)
    raise MazeDecodeError(CODEC_005.issue(location=name, name=name, cols=cols, rows=rows, value=raw))


def _cell_size_field(payload: Dict[str, Any], default: float) -> float:
    raw = payload.get("cellSizeMeters")
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return default
    if not math.isfinite(raw) or raw <= 0:
        return default
    return float(raw)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------

def decode_maze_with_report(
    payload: Any,
    default_cell_size_m: float = DEFAULT_CELL_SIZE_M,
    verify_path: bool = False,
) -> Tuple[Maze, ValidationResult]:
    """
    Validate an untrusted payload and build a Maze from it.

    Args:
        payload: Decoded JSON object, or a JSON str/bytes document
        default_cell_size_m: Cell size used when the payload has none
        verify_path: Also require an open path from start to goal

    Returns:
        (maze, report) where report holds the non-fatal issues found

    Raises:
        MazeDecodeError: On any structural problem
        CellCountMismatchError: If len(cells) != cols * rows
    """
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except ValueError:
            raise MazeDecodeError(CODEC_001.issue(location="payload", kind="invalid JSON"))

    if not isinstance(payload, dict):
        raise MazeDecodeError(CODEC_001.issue(location="payload", kind=_kind(payload)))

    version = payload.get("version", MAZE_FORMAT_VERSION)
    if _as_int(version) not in SUPPORTED_VERSIONS:
        raise MazeDecodeError(CODEC_002.issue(
            location="version", version=version, supported=list(SUPPORTED_VERSIONS),
        ))

    report = ValidationResult(stage=ValidationStage.DECODE)
    # gridSize only matters when cols/rows do not both carry integers
    explicit = all(_as_int(payload.get(key)) is not None for key in ("cols", "rows"))
    grid_size = DEFAULT_GRID_SIZE if explicit else _size_field(
        payload, "gridSize", DEFAULT_GRID_SIZE, report.issues,
    )
    cols = _size_field(payload, "cols", grid_size, report.issues, MIN_DIMENSION, None)
    rows = _size_field(payload, "rows", grid_size, report.issues, MIN_DIMENSION, None)

    cells = payload.get("cells")
    if not isinstance(cells, list):
        raise MazeDecodeError(CODEC_006.issue(location="cells", kind=_kind(cells)))
    if len(cells) != cols * rows:
        raise CellCountMismatchError(expected=cols * rows, actual=len(cells))

    grid = Grid(cols, rows)
    for index, (entry, cell) in enumerate(zip(cells, grid)):
        if not isinstance(entry, dict):
            raise MazeDecodeError(CODEC_004.issue(location=f"cells[{index}]", index=index, kind=_kind(entry)))
        flags = entry.get("walls") if isinstance(entry.get("walls"), dict) else entry
        for direction in DIRECTIONS:
            cell.set_wall(direction, bool(flags.get(str(direction))))

    start = _coord_field(payload, "start", (0, 0), cols, rows)
    goal = _coord_field(payload, "goal", (cols - 1, rows - 1), cols, rows)

    asymmetric = grid.asymmetric_edges()
    if asymmetric:
        report.add_issue(CODEC_007.issue(location="cells", count=len(asymmetric)))

    seed = payload.get("seed")
    maze = Maze(
        grid=grid,
        cell_size_m=_cell_size_field(payload, default_cell_size_m),
        start=start,
        goal=goal,
        seed=None if seed is None else str(seed),
        version=MAZE_FORMAT_VERSION,
    )

    if verify_path and find_path(grid, start, goal) is None:
        raise MazeDecodeError(GRID_004.issue(location="start->goal", start=start, goal=goal))

    for issue in report.warnings:
        logger.warning(str(issue))
    logger.info("Decoded %dx%d maze (seed=%s)", cols, rows, maze.seed)
    return maze, report


def decode_maze(
    payload: Any,
    default_cell_size_m: float = DEFAULT_CELL_SIZE_M,
    verify_path: bool = False,
) -> Maze:
    """Validate an untrusted payload and build a Maze from it.

    See decode_maze_with_report() for the rules applied.
    """
    maze, _ = decode_maze_with_report(
        payload, default_cell_size_m=default_cell_size_m, verify_path=verify_path,
    )
    return maze
