"""
HTTP service exposing the maze generator.
"""

from .api import create_app, run_server, clamp_size

__all__ = [
    'create_app',
    'run_server',
    'clamp_size',
]
