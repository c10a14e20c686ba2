"""
Maze pipeline module.

Acquires a maze (backend or local) and compiles it, and holds the
per-session game state built on top of it.
"""

from .backend_client import (
    MazeBackendClient,
    BackendError,
    BackendTimeoutError,
)

from .maze_pipeline import (
    MazePipeline,
    PipelineSettings,
    PipelineResult,
    PipelineError,
    MazeSource,
)

from .session_state import (
    SessionState,
    SessionTracker,
    SessionError,
    RunStatus,
)

__all__ = [
    # Backend
    'MazeBackendClient',
    'BackendError',
    'BackendTimeoutError',
    # Pipeline core
    'MazePipeline',
    'PipelineSettings',
    'PipelineResult',
    'PipelineError',
    'MazeSource',
    # Session
    'SessionState',
    'SessionTracker',
    'SessionError',
    'RunStatus',
]
