"""
Wall geometry compiler for maze grids.

Converts an abstract maze grid into physical wall placements in meters,
centered on the maze's local origin. The rendering layer only has to
anchor that local frame at a real-world pose and draw two instanced
batches (horizontal and vertical segments).

Frame: x runs along columns, z along rows (south), y is up. The floor is
the y = 0 plane and the maze footprint is centered on (0, 0, 0).

Each shared edge is emitted exactly once. Every cell owns its North and
West edge; a wall is emitted there if EITHER adjacent cell records one
(OR rule), so grids whose symmetry was never re-verified still compile
without duplicates or holes. The last column adds its East edges and the
last row its South edges.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging

import numpy as np

from mazeanchor.src.generators.maze.grid import Direction
from mazeanchor.src.generators.maze.maze_types import Maze
from mazeanchor.src.validation.core import ValidationError, ValidationResult, ValidationStage
from mazeanchor.src.validation.checks.grid_checks import check_edge_symmetry
from mazeanchor.src.validation.gates import validation_gate

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


# =============================================================================
# Named Constants
# =============================================================================

DEFAULT_WALL_HEIGHT = 1.2           # meters
MAX_WALL_THICKNESS = 0.05           # thickness cap in meters
WALL_THICKNESS_RATIO = 0.18         # thickness relative to cell size
GOAL_HEIGHT = 0.15                  # goal marker height above the floor
MAX_GOAL_RADIUS = 0.12              # goal marker radius cap
GOAL_RADIUS_RATIO = 0.35            # goal radius relative to cell size


class WallOrientation(Enum):
    """Segment orientation.

    HORIZONTAL segments span a cell along the column (x) axis and sit on
    North/South edges; VERTICAL segments span along the row (z) axis and
    sit on West/East edges.
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def __str__(self) -> str:
        return self.value


@dataclass
class GeometrySettings:
    """Configuration for wall geometry compilation"""
    wall_height: float = DEFAULT_WALL_HEIGHT
    # None = min(MAX_WALL_THICKNESS, cell_size * WALL_THICKNESS_RATIO)
    wall_thickness: Optional[float] = None
    goal_height: float = GOAL_HEIGHT
    # None = min(MAX_GOAL_RADIUS, cell_size * GOAL_RADIUS_RATIO)
    goal_radius: Optional[float] = None
    # Reject asymmetric grids instead of resolving them with the OR rule
    strict_symmetry: bool = False

    def thickness_for(self, cell_size: float) -> float:
        if self.wall_thickness is not None:
            return self.wall_thickness
        return min(MAX_WALL_THICKNESS, cell_size * WALL_THICKNESS_RATIO)

    def goal_radius_for(self, cell_size: float) -> float:
        if self.goal_radius is not None:
            return self.goal_radius
        return min(MAX_GOAL_RADIUS, cell_size * GOAL_RADIUS_RATIO)


@dataclass
class WallBatch:
    """
    Homogeneous batch of wall segments.

    All segments share one box size and differ only by position, so a
    renderer can draw the batch with a single instanced call.

    Attributes:
        orientation: Horizontal or vertical
        size: Box extents (x, y, z) shared by every segment
        positions: (N, 3) array of segment centers in insertion order
    """
    orientation: WallOrientation
    size: Vec3
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    def instance_matrices(self, anchor: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Per-instance 4x4 transforms (translation only).

        Args:
            anchor: Optional 4x4 local-to-world matrix applied on the left

        Returns:
            (N, 4, 4) array
        """
        count = len(self)
        matrices = np.tile(np.eye(4), (count, 1, 1))
        matrices[:, :3, 3] = self.positions
        if anchor is not None:
            anchor = np.asarray(anchor, dtype=float)
            if anchor.shape != (4, 4):
                raise ValueError(f"anchor must be a 4x4 matrix, got shape {anchor.shape}")
            matrices = anchor @ matrices
        return matrices


@dataclass
class GoalMarker:
    position: Vec3
    radius: float


@dataclass
class CompileStats:
    """Counters collected while compiling."""
    horizontal_slots: int = 0
    vertical_slots: int = 0
    horizontal_emitted: int = 0
    vertical_emitted: int = 0
    asymmetric_edges: int = 0


@dataclass
class MazeGeometry:
    """
    Compiled maze geometry in the maze's local frame.

    Transient: owned by whatever rendering layer consumes it.
    """
    cols: int
    rows: int
    cell_size_m: float
    wall_height: float
    wall_thickness: float
    horizontal: WallBatch
    vertical: WallBatch
    goal: GoalMarker
    floor_size: Tuple[float, float]
    stats: CompileStats = field(default_factory=CompileStats)

    @property
    def segment_count(self) -> int:
        return len(self.horizontal) + len(self.vertical)

    def to_dict(self) -> dict:
        """JSON-serializable summary for tools and debugging."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "cellSizeMeters": self.cell_size_m,
            "wallHeight": self.wall_height,
            "wallThickness": self.wall_thickness,
            "floorSize": list(self.floor_size),
            "horizontal": {
                "size": list(self.horizontal.size),
                "positions": self.horizontal.positions.tolist(),
            },
            "vertical": {
                "size": list(self.vertical.size),
                "positions": self.vertical.positions.tolist(),
            },
            "goal": {"position": list(self.goal.position), "radius": self.goal.radius},
        }


def cell_center(col: int, row: int, cols: int, rows: int, cell_size: float) -> Vec3:
    """Physical center of a cell on the floor plane, maze centered on the origin."""
    return (
        (col + 0.5 - cols / 2.0) * cell_size,
        0.0,
        (row + 0.5 - rows / 2.0) * cell_size,
    )


class WallCompiler:
    """
    Compiles a grid into deduplicated wall batches and a goal marker.

    Stateless between calls; one instance can compile any number of mazes.
    """

    def __init__(self, settings: Optional[GeometrySettings] = None):
        self.settings = settings or GeometrySettings()

    def compile(self, maze: Maze) -> MazeGeometry:
        """
        Compile a maze into wall placements.

        Raises:
            ValidationError: If strict_symmetry is set and the grid is asymmetric
        """
        grid = maze.grid
        cs = maze.cell_size_m
        cols, rows = grid.cols, grid.rows
        height = self.settings.wall_height
        thickness = self.settings.thickness_for(cs)
        y = height / 2.0

        asymmetric = len(grid.asymmetric_edges())
        if asymmetric:
            if self.settings.strict_symmetry:
                raise ValidationError(ValidationResult(
                    issues=check_edge_symmetry(grid), stage=ValidationStage.COMPILATION,
                ))
            logger.warning("Compiling grid with %d asymmetric edge(s); walls resolved by OR rule", asymmetric)

        stats = CompileStats(asymmetric_edges=asymmetric)
        horizontal: List[Vec3] = []
        vertical: List[Vec3] = []

        for row in range(rows):
            for col in range(cols):
                cell = grid.cell(col, row)
                cx, _, cz = cell_center(col, row, cols, rows, cs)

                # North edge, shared with the cell above
                stats.horizontal_slots += 1
                above = grid.neighbor(cell, Direction.N)
                if cell.has_wall(Direction.N) or (above is not None and above.has_wall(Direction.S)):
                    horizontal.append((cx, y, cz - cs / 2.0))

                # West edge, shared with the cell to the left
                stats.vertical_slots += 1
                left = grid.neighbor(cell, Direction.W)
                if cell.has_wall(Direction.W) or (left is not None and left.has_wall(Direction.E)):
                    vertical.append((cx - cs / 2.0, y, cz))

                # Outer border: no neighbor to OR against
                if col == cols - 1:
                    stats.vertical_slots += 1
                    if cell.has_wall(Direction.E):
                        vertical.append((cx + cs / 2.0, y, cz))
                if row == rows - 1:
                    stats.horizontal_slots += 1
                    if cell.has_wall(Direction.S):
                        horizontal.append((cx, y, cz + cs / 2.0))

        stats.horizontal_emitted = len(horizontal)
        stats.vertical_emitted = len(vertical)

        gx, _, gz = cell_center(maze.goal[0], maze.goal[1], cols, rows, cs)
        geometry = MazeGeometry(
            cols=cols,
            rows=rows,
            cell_size_m=cs,
            wall_height=height,
            wall_thickness=thickness,
            horizontal=WallBatch(
                WallOrientation.HORIZONTAL,
                (cs, height, thickness),
                _as_positions(horizontal),
            ),
            vertical=WallBatch(
                WallOrientation.VERTICAL,
                (thickness, height, cs),
                _as_positions(vertical),
            ),
            goal=GoalMarker((gx, self.settings.goal_height, gz), self.settings.goal_radius_for(cs)),
            floor_size=maze.footprint_m,
            stats=stats,
        )

        logger.info(
            "Compiled %dx%d maze: %d horizontal + %d vertical wall segments",
            cols, rows, stats.horizontal_emitted, stats.vertical_emitted,
        )
        return geometry


def _as_positions(points: List[Vec3]) -> np.ndarray:
    return np.asarray(points, dtype=float).reshape(-1, 3)


@validation_gate(ValidationStage.COMPILATION)
def compile_maze(maze: Maze, settings: Optional[GeometrySettings] = None) -> MazeGeometry:
    """Compile a maze with the given settings, validating the output."""
    return WallCompiler(settings).compile(maze)
