"""
Per-session game state.

One SessionState is created when an AR session starts and torn down when
it ends. It owns the placed maze, its anchor pose and the countdown run.
Device tracking is reached only through the SessionTracker capability,
so the state can be driven by a real AR layer or by a test double.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional

import numpy as np

from .maze_pipeline import MazePipeline, PipelineResult

logger = logging.getLogger(__name__)

# Default countdown for one run, in seconds
DEFAULT_RUN_SECONDS = 20.0


class RunStatus(Enum):
    IDLE = "idle"            # nothing placed
    PLACED = "placed"        # maze anchored, no run in progress
    RUNNING = "running"
    WON = "won"
    FAILED = "failed"        # time ran out
    CLOSED = "closed"        # session torn down


class SessionError(Exception):
    """Session operation not allowed in the current state."""


class SessionTracker(ABC):
    """Capability the AR layer provides to a session."""

    @abstractmethod
    def reticle_pose(self) -> Optional[np.ndarray]:
        """Current 4x4 hit-test pose on a real surface, or None if no surface is tracked."""

    @abstractmethod
    def confirm_placement(self, pose: np.ndarray) -> None:
        """Called once the maze has been anchored at ``pose``."""


class SessionState:
    """
    Explicit state for one play session.

    Usage:
        with SessionState(MazePipeline(settings)) as session:
            session.place(tracker)
            session.start()
            session.tick(dt)
    """

    def __init__(self, pipeline: MazePipeline, run_seconds: float = DEFAULT_RUN_SECONDS):
        if run_seconds <= 0:
            raise ValueError(f"run_seconds must be positive, got {run_seconds}")
        self.pipeline = pipeline
        self.run_seconds = run_seconds
        self.status = RunStatus.IDLE
        self.time_left = run_seconds
        self.anchor: Optional[np.ndarray] = None
        self.result: Optional[PipelineResult] = None

    def __enter__(self) -> 'SessionState':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.teardown()
        return False

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    @property
    def placed(self) -> bool:
        return self.result is not None

    @property
    def running(self) -> bool:
        return self.status == RunStatus.RUNNING

    def _require_open(self) -> None:
        if self.status == RunStatus.CLOSED:
            raise SessionError("Session has been torn down")

    def place(self, tracker: SessionTracker) -> Optional[PipelineResult]:
        """
        Anchor a new maze at the tracker's reticle pose.

        Returns:
            The pipeline result, or None if no surface is tracked yet

        Raises:
            SessionError: If a maze is already placed or the session is closed
        """
        self._require_open()
        if self.placed:
            raise SessionError("A maze is already placed; clear it first")

        pose = tracker.reticle_pose()
        if pose is None:
            return None
        pose = np.asarray(pose, dtype=float)
        if pose.shape != (4, 4):
            raise SessionError(f"Reticle pose must be a 4x4 matrix, got shape {pose.shape}")

        self.result = self.pipeline.run()
        self.anchor = pose
        self.status = RunStatus.PLACED
        tracker.confirm_placement(pose)
        logger.info("Maze placed (%s source)", self.result.source.value)
        return self.result

    def world_instances(self) -> Dict[str, np.ndarray]:
        """Instance transforms for both wall batches in world space."""
        if not self.placed:
            raise SessionError("No maze placed")
        geometry = self.result.geometry
        return {
            "horizontal": geometry.horizontal.instance_matrices(self.anchor),
            "vertical": geometry.vertical.instance_matrices(self.anchor),
        }

    def clear(self) -> None:
        """Drop the placed maze and its geometry."""
        self._require_open()
        self.result = None
        self.anchor = None
        self.time_left = self.run_seconds
        self.status = RunStatus.IDLE

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._require_open()
        if not self.placed:
            raise SessionError("Place a maze before starting a run")
        if self.running:
            raise SessionError("Run already in progress")
        self.time_left = self.run_seconds
        self.status = RunStatus.RUNNING
        logger.info("Run started (%.1fs)", self.run_seconds)

    def tick(self, dt: float) -> RunStatus:
        """Advance the countdown by ``dt`` seconds; fails the run at zero.

        Raises:
            ValueError: If ``dt`` is negative
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if self.running:
            self.time_left = max(0.0, self.time_left - dt)
            if self.time_left <= 0:
                self.status = RunStatus.FAILED
                logger.info("Run failed: time ran out")
        return self.status

    def check_goal(self, world_position) -> bool:
        """
        Win the run if ``world_position`` touches the goal marker.

        Args:
            world_position: (x, y, z) in world space

        Returns:
            True if this call won the run
        """
        if not self.running:
            return False
        local = np.linalg.inv(self.anchor) @ np.append(np.asarray(world_position, dtype=float), 1.0)
        goal = self.result.geometry.goal
        if np.linalg.norm(local[:3] - np.asarray(goal.position)) > goal.radius:
            return False
        self.status = RunStatus.WON
        logger.info("Run won with %.1fs left", self.time_left)
        return True

    def stop(self) -> None:
        """Abort the current run and keep the maze placed."""
        self._require_open()
        self.time_left = self.run_seconds
        self.status = RunStatus.PLACED if self.placed else RunStatus.IDLE

    def teardown(self) -> None:
        if self.status == RunStatus.CLOSED:
            return
        self.result = None
        self.anchor = None
        self.status = RunStatus.CLOSED
