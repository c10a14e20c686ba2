import json

from mazeanchor.main import main
from mazeanchor.src.conversion import encode_maze
from mazeanchor.src.generators.maze import Direction, generate_maze


def _run(tmp_path, *argv):
    return main(["--config", str(tmp_path / "no-settings.json"), *argv])


def test_generate_writes_payload(tmp_path):
    out = tmp_path / "maze.json"
    assert _run(tmp_path, "generate", "--cols", "6", "--rows", "6", "--seed", "cli", "--path", "-o", str(out)) == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["seed"] == "cli"
    assert len(payload["cells"]) == 36
    assert payload["guaranteedPath"][-1] == [5, 5]


def test_generate_prints_to_stdout(tmp_path, capsys):
    assert _run(tmp_path, "generate", "--cols", "5", "--rows", "5", "--seed", "out") == 0
    assert json.loads(capsys.readouterr().out)["seed"] == "out"


def test_compile_maze_file(tmp_path):
    maze_file = tmp_path / "maze.json"
    maze_file.write_text(json.dumps(encode_maze(generate_maze(5, 5, seed="geo"))), encoding="utf-8")
    out = tmp_path / "geometry.json"
    assert _run(tmp_path, "compile", str(maze_file), "-o", str(out)) == 0
    geometry = json.loads(out.read_text(encoding="utf-8"))
    assert geometry["cols"] == 5
    # 60 edge slots minus the 24 passages of a perfect 5x5 maze
    assert len(geometry["horizontal"]["positions"]) + len(geometry["vertical"]["positions"]) == 36


def test_compile_rejects_bad_file(tmp_path):
    maze_file = tmp_path / "broken.json"
    maze_file.write_text(json.dumps({"gridSize": 5, "cells": [{}] * 24}), encoding="utf-8")
    assert _run(tmp_path, "compile", str(maze_file)) == 2


def test_compile_strict_rejects_asymmetric_grid(tmp_path):
    maze = generate_maze(5, 5, seed="strict")
    cell = maze.grid.cell(2, 2)
    cell.set_wall(Direction.S, not cell.has_wall(Direction.S))
    maze_file = tmp_path / "asym.json"
    maze_file.write_text(json.dumps(encode_maze(maze)), encoding="utf-8")
    assert _run(tmp_path, "compile", str(maze_file), "--strict") == 3


def test_small_generated_maze_compiles(tmp_path):
    maze_file = tmp_path / "small.json"
    assert _run(tmp_path, "generate", "--cols", "3", "--rows", "3", "--seed", "s", "-o", str(maze_file)) == 0
    out = tmp_path / "small-geometry.json"
    assert _run(tmp_path, "compile", str(maze_file), "-o", str(out)) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["cols"] == 3
