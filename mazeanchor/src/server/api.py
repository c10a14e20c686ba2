"""
Maze HTTP API (Flask).

Endpoints:
  GET /api/maze?size=15&seed=abc&difficulty=medium
      -> { version, seed, gridSize, cols, rows, cellSizeMeters,
           start, goal, cells: [{x,y,N,E,S,W}], guaranteedPath }
      500 -> { error: "maze_generation_failed" }
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from mazeanchor.src.config import ServerSettings
from mazeanchor.src.conversion.maze_codec import encode_maze
from mazeanchor.src.generators.maze.backtracker import generate_maze, make_seed

logger = logging.getLogger(__name__)


def clamp_size(raw: Optional[int], settings: ServerSettings) -> int:
    """Clamp a requested size into the served range; None means default."""
    if raw is None:
        raw = settings.default_size
    return max(settings.min_size, min(raw, settings.max_size))


def create_app(settings: Optional[ServerSettings] = None) -> Flask:
    """Build the Flask app serving the maze endpoint."""
    settings = settings or ServerSettings()

    app = Flask(__name__)
    app.config["MAZE_SETTINGS"] = settings
    CORS(app)

    @app.route("/api/maze", methods=["GET"])
    def get_maze():
        size = clamp_size(request.args.get("size", type=int), settings)
        seed = request.args.get("seed") or make_seed()
        difficulty = request.args.get("difficulty") or "medium"

        try:
            maze = generate_maze(size, size, seed=seed, cell_size_m=settings.cell_size_m)
            payload = encode_maze(maze, include_path=True)
        except Exception:
            logger.exception("Maze generation failed (size=%s, seed=%s)", size, seed)
            return jsonify({"error": "maze_generation_failed"}), 500

        logger.info("Served %dx%d maze (seed=%s, difficulty=%s)", size, size, seed, difficulty)
        return jsonify(payload)

    return app


def run_server(settings: Optional[ServerSettings] = None) -> None:
    settings = settings or ServerSettings()
    app = create_app(settings)
    logger.info("Maze API listening on http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port)
