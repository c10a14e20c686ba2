"""
Maze acquisition and compilation pipeline.

Orchestrates one placement event: acquire a maze (remote backend when
configured, local generation otherwise or on any remote failure), then
compile it into wall geometry. Both sources yield a Maze satisfying the
same grid invariant, so compilation does not care where it came from.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from mazeanchor.src.conversion.geometry.wall_compiler import (
    GeometrySettings,
    MazeGeometry,
    compile_maze,
)
from mazeanchor.src.conversion.maze_codec import MazeDecodeError
from mazeanchor.src.generators.maze.backtracker import generate_maze
from mazeanchor.src.generators.maze.maze_types import DEFAULT_CELL_SIZE_M, Maze

from .backend_client import DEFAULT_TIMEOUT, BackendError, MazeBackendClient

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class MazeSource(Enum):
    REMOTE = "remote"
    LOCAL = "local"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    pass


# ---------------------------------------------------------------------------
# Settings / Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PipelineSettings:
    # Grid
    cols: int = 10
    rows: int = 10
    cell_size_m: float = DEFAULT_CELL_SIZE_M

    # Seeding for reproducible generation (None = timestamp seed)
    seed: Optional[str] = None
    difficulty: str = "medium"

    # Remote backend (None = always generate locally)
    backend_url: Optional[str] = None
    backend_timeout: float = DEFAULT_TIMEOUT
    verify_remote_path: bool = True

    # 3D conversion
    geometry: GeometrySettings = field(default_factory=GeometrySettings)


@dataclass
class PipelineResult:
    maze: Maze
    geometry: MazeGeometry
    source: MazeSource
    fallback_reason: Optional[str] = None
    duration_ms: float = 0.0


class MazePipeline:
    """
    Acquire-then-compile pipeline for a single placement.

    Stateless across runs; the same instance can serve many placements.
    """

    def __init__(
        self,
        settings: Optional[PipelineSettings] = None,
        client: Optional[MazeBackendClient] = None,
    ):
        self.settings = settings or PipelineSettings()
        if client is None and self.settings.backend_url:
            client = MazeBackendClient(self.settings.backend_url, timeout=self.settings.backend_timeout)
        self.client = client

    def generate_local(self) -> Maze:
        s = self.settings
        return generate_maze(s.cols, s.rows, seed=s.seed, cell_size_m=s.cell_size_m)

    def acquire(self) -> Tuple[Maze, MazeSource, Optional[str]]:
        """
        Get a maze, preferring the backend.

        Returns:
            (maze, source, fallback_reason); fallback_reason is set when a
            remote attempt failed and the maze was generated locally
        """
        s = self.settings
        if self.client is None:
            return self.generate_local(), MazeSource.LOCAL, None

        if s.cols != s.rows:
            logger.info("Backend serves square mazes only; generating %dx%d locally", s.cols, s.rows)
            return self.generate_local(), MazeSource.LOCAL, None

        try:
            maze = self.client.fetch_maze(
                s.cols,
                seed=s.seed,
                difficulty=s.difficulty,
                default_cell_size_m=s.cell_size_m,
                verify_path=s.verify_remote_path,
            )
            return maze, MazeSource.REMOTE, None
        except (BackendError, MazeDecodeError) as e:
            reason = str(e).splitlines()[0] if str(e) else type(e).__name__
            logger.warning("Remote maze unavailable (%s); falling back to local generation", reason)
            return self.generate_local(), MazeSource.LOCAL, reason

    def run(self) -> PipelineResult:
        """
        Acquire and compile a maze.

        Raises:
            PipelineError: If local generation or compilation fails
        """
        started = time.perf_counter()
        try:
            maze, source, reason = self.acquire()
            geometry = compile_maze(maze, self.settings.geometry)
        except Exception as e:
            raise PipelineError(f"Maze pipeline failed: {e}") from e

        duration_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "Maze ready from %s source: %d wall segments in %.1f ms",
            source.value, geometry.segment_count, duration_ms,
        )
        return PipelineResult(
            maze=maze,
            geometry=geometry,
            source=source,
            fallback_reason=reason,
            duration_ms=duration_ms,
        )
