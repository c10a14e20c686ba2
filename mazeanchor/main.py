#!/usr/bin/env python3
"""
mazeanchor - Main Entry Point

Subcommands:
    serve     Run the maze HTTP API
    generate  Generate a maze and print its JSON payload
    compile   Compile a maze JSON file into wall geometry JSON
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mazeanchor.src.config import load_config
from mazeanchor.src.conversion.geometry.wall_compiler import compile_maze
from mazeanchor.src.conversion.maze_codec import MazeDecodeError, decode_maze, dumps_maze
from mazeanchor.src.generators.maze.backtracker import generate_maze
from mazeanchor.src.validation.core import ValidationError

logger = logging.getLogger("mazeanchor")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mazeanchor", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--config", type=Path, default=None, help="Settings JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the maze HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    gen = sub.add_parser("generate", help="Generate a maze and print its JSON payload")
    gen.add_argument("--cols", type=int, default=None)
    gen.add_argument("--rows", type=int, default=None)
    gen.add_argument("--seed", default=None)
    gen.add_argument("--cell-size", type=float, default=None, help="Cell size in meters")
    gen.add_argument("--path", action="store_true", help="Include guaranteedPath")
    gen.add_argument("-o", "--output", type=Path, default=None)

    comp = sub.add_parser("compile", help="Compile a maze JSON file into wall geometry")
    comp.add_argument("maze_file", type=Path)
    comp.add_argument("--strict", action="store_true", help="Reject asymmetric grids")
    comp.add_argument("-o", "--output", type=Path, default=None)
    return parser


def _write(text: str, output: Optional[Path]) -> None:
    if output is None:
        print(text)
    else:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)

    if args.command == "serve":
        from mazeanchor.src.server.api import run_server

        if args.host:
            config.server.host = args.host
        if args.port:
            config.server.port = args.port
        run_server(config.server)
        return 0

    if args.command == "generate":
        p = config.pipeline
        maze = generate_maze(
            args.cols or p.cols,
            args.rows or p.rows,
            seed=args.seed if args.seed is not None else p.seed,
            cell_size_m=args.cell_size or p.cell_size_m,
        )
        _write(dumps_maze(maze, include_path=args.path, indent=2), args.output)
        return 0

    if args.command == "compile":
        settings = config.pipeline.geometry
        if args.strict:
            settings.strict_symmetry = True
        try:
            maze = decode_maze(
                args.maze_file.read_text(encoding="utf-8"),
                default_cell_size_m=config.pipeline.cell_size_m,
            )
            geometry = compile_maze(maze, settings)
        except MazeDecodeError as e:
            logger.error("Invalid maze file %s:\n%s", args.maze_file, e)
            return 2
        except ValidationError as e:
            logger.error("Maze failed validation:\n%s", e)
            return 3
        _write(json.dumps(geometry.to_dict(), indent=2), args.output)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
