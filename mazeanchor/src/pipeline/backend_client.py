"""
HTTP client for the maze backend.

Fetches a maze payload from ``GET /api/maze`` and decodes it. Transport
problems raise BackendError; payload problems raise the codec's
MazeDecodeError. Callers decide whether to fall back to local generation.
"""

import logging
from typing import Any, Dict, Optional

import requests

from mazeanchor.src.conversion.maze_codec import decode_maze
from mazeanchor.src.generators.maze.maze_types import DEFAULT_CELL_SIZE_M, Maze

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 3.0
MAZE_ENDPOINT = "/api/maze"


class BackendError(Exception):
    """The backend could not be reached or answered with an error."""


class BackendTimeoutError(BackendError):
    pass


class MazeBackendClient:
    """Thin wrapper over ``requests`` for the maze endpoint."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def maze_url(self) -> str:
        return self.base_url + MAZE_ENDPOINT

    def fetch_payload(
        self,
        size: int,
        seed: Optional[str] = None,
        difficulty: str = "medium",
    ) -> Any:
        """
        Request a maze payload.

        Returns:
            The decoded JSON body (not yet validated)

        Raises:
            BackendTimeoutError: If the request exceeds the timeout
            BackendError: On network errors, non-2xx status or a non-JSON body
        """
        params: Dict[str, Any] = {"size": size, "difficulty": difficulty}
        if seed is not None:
            params["seed"] = seed

        try:
            response = requests.get(self.maze_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise BackendTimeoutError(f"Maze request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise BackendError(f"Maze request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise BackendError("Maze backend returned a non-JSON body") from e

    def fetch_maze(
        self,
        size: int,
        seed: Optional[str] = None,
        difficulty: str = "medium",
        default_cell_size_m: float = DEFAULT_CELL_SIZE_M,
        verify_path: bool = True,
    ) -> Maze:
        """
        Request and decode a maze.

        Raises:
            BackendError: On transport failure
            MazeDecodeError: If the payload fails validation
        """
        payload = self.fetch_payload(size, seed=seed, difficulty=difficulty)
        maze = decode_maze(payload, default_cell_size_m=default_cell_size_m, verify_path=verify_path)
        logger.info("Fetched %dx%d maze from %s", maze.cols, maze.rows, self.base_url)
        return maze
