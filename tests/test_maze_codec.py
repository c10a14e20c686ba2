import json

import pytest

from mazeanchor.src.conversion import (
    CellCountMismatchError,
    DEFAULT_GRID_SIZE,
    MazeDecodeError,
    decode_maze,
    decode_maze_with_report,
    dumps_maze,
    encode_maze,
)
from mazeanchor.src.generators.maze import Direction, generate_maze


def _closed_payload(size: int, **extra) -> dict:
    payload = {
        "gridSize": size,
        "cells": [{"N": True, "E": True, "S": True, "W": True} for _ in range(size * size)],
    }
    payload.update(extra)
    return payload


def _open_row_payload() -> dict:
    # 5x5 with the whole top row and left column opened into a connected comb
    payload = _closed_payload(5)
    cells = payload["cells"]
    for col in range(4):
        cells[col]["E"] = False
        cells[col + 1]["W"] = False
    for col in range(5):
        for row in range(4):
            cells[row * 5 + col]["S"] = False
            cells[(row + 1) * 5 + col]["N"] = False
    return payload


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------

def test_encode_square_maze():
    maze = generate_maze(7, 7, seed="enc")
    payload = encode_maze(maze)
    assert payload["version"] == 1
    assert payload["seed"] == "enc"
    assert payload["gridSize"] == 7
    assert payload["cols"] == 7 and payload["rows"] == 7
    assert payload["start"] == [0, 0]
    assert payload["goal"] == [6, 6]
    assert len(payload["cells"]) == 49
    assert payload["cells"][8]["x"] == 1 and payload["cells"][8]["y"] == 1
    assert set(payload["cells"][0]) == {"x", "y", "N", "E", "S", "W"}
    assert "guaranteedPath" not in payload


def test_encode_rectangular_maze_omits_grid_size():
    payload = encode_maze(generate_maze(6, 9, seed="rect"))
    assert "gridSize" not in payload
    assert len(payload["cells"]) == 54


def test_encode_with_path():
    maze = generate_maze(8, 8, seed="path")
    path = encode_maze(maze, include_path=True)["guaranteedPath"]
    assert path[0] == [0, 0]
    assert path[-1] == [7, 7]


def test_payload_is_json_serializable():
    text = dumps_maze(generate_maze(5, 5, seed="json"), include_path=True)
    assert json.loads(text)["seed"] == "json"


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("cols,rows", [(1, 1), (2, 2), (3, 4), (5, 5), (15, 15), (6, 9), (101, 5), (130, 2)])
def test_round_trip_preserves_maze(cols, rows):
    maze = generate_maze(cols, rows, seed="rt", cell_size_m=0.25, goal=(cols - 1, 0))
    decoded = decode_maze(encode_maze(maze))
    assert (decoded.cols, decoded.rows) == (cols, rows)
    assert decoded.grid.wall_flags() == maze.grid.wall_flags()
    assert decoded.start == maze.start
    assert decoded.goal == maze.goal
    assert decoded.seed == "rt"
    assert decoded.cell_size_m == 0.25


def test_decode_json_text():
    text = dumps_maze(generate_maze(5, 5, seed="txt"))
    assert decode_maze(text).seed == "txt"
    assert decode_maze(text.encode("utf-8")).seed == "txt"


# ---------------------------------------------------------------------------
# Structural failures
# ---------------------------------------------------------------------------

def test_cell_count_mismatch_reports_both_counts():
    payload = _closed_payload(5)
    payload["cells"].pop()
    with pytest.raises(CellCountMismatchError) as exc:
        decode_maze(payload)
    assert exc.value.expected == 25
    assert exc.value.actual == 24
    assert exc.value.issue.code == "CODEC-003"
    assert "expected 25, got 24" in str(exc.value)


def test_too_many_cells_rejected():
    payload = _closed_payload(5)
    payload["cells"].append({"N": True})
    with pytest.raises(CellCountMismatchError):
        decode_maze(payload)


@pytest.mark.parametrize("payload", [None, [], 42, "not json", "[1, 2]"])
def test_non_object_payload_rejected(payload):
    with pytest.raises(MazeDecodeError) as exc:
        decode_maze(payload)
    assert exc.value.issue.code == "CODEC-001"


def test_cells_must_be_a_list():
    with pytest.raises(MazeDecodeError) as exc:
        decode_maze({"gridSize": 5, "cells": {"0": {}}})
    assert exc.value.issue.code == "CODEC-006"


def test_cell_entries_must_be_objects():
    payload = _closed_payload(5)
    payload["cells"][3] = [True, True, True, True]
    with pytest.raises(MazeDecodeError) as exc:
        decode_maze(payload)
    assert exc.value.issue.code == "CODEC-004"
    assert exc.value.issue.location == "cells[3]"


def test_unsupported_version_rejected():
    with pytest.raises(MazeDecodeError) as exc:
        decode_maze(_closed_payload(5, version=2))
    assert exc.value.issue.code == "CODEC-002"


@pytest.mark.parametrize("field,value", [
    ("start", [5, 0]),
    ("start", [-1, 0]),
    ("goal", [0]),
    ("goal", "4,4"),
    ("goal", [True, 4]),
    ("start", [0.5, 0]),
])
def test_bad_start_or_goal_rejected(field, value):
    with pytest.raises(MazeDecodeError) as exc:
        decode_maze(_closed_payload(5, **{field: value}))
    assert exc.value.issue.code == "CODEC-005"


# ---------------------------------------------------------------------------
# Tolerant parsing
# ---------------------------------------------------------------------------

def test_start_and_goal_default_to_corners():
    maze = decode_maze(_closed_payload(6))
    assert maze.start == (0, 0)
    assert maze.goal == (5, 5)


def test_wall_flags_use_truthiness():
    payload = _closed_payload(5)
    payload["cells"][0] = {"N": 1, "E": "yes", "S": 0, "W": None}
    payload["cells"][1] = {}
    grid = decode_maze(payload).grid
    first = grid.cell(0, 0)
    assert first.has_wall(Direction.N) and first.has_wall(Direction.E)
    assert not first.has_wall(Direction.S) and not first.has_wall(Direction.W)
    assert not any(grid.cell(1, 0).walls.values())


def test_nested_walls_object_accepted():
    payload = _closed_payload(5)
    payload["cells"][0] = {"x": 0, "y": 0, "walls": {"N": True, "E": False, "S": True, "W": True}}
    cell = decode_maze(payload).grid.cell(0, 0)
    assert cell.has_wall(Direction.N)
    assert not cell.has_wall(Direction.E)


def test_missing_grid_size_defaults():
    payload = _closed_payload(DEFAULT_GRID_SIZE)
    del payload["gridSize"]
    maze, report = decode_maze_with_report(payload)
    assert maze.cols == maze.rows == DEFAULT_GRID_SIZE
    assert report.passed and not report.issues


def test_non_integer_grid_size_defaults_with_warning():
    payload = _closed_payload(DEFAULT_GRID_SIZE)
    payload["gridSize"] = "big"
    maze, report = decode_maze_with_report(payload)
    assert maze.cols == DEFAULT_GRID_SIZE
    assert report.codes() == ["CODEC-008"]


def test_small_grid_size_is_clamped():
    with pytest.raises(CellCountMismatchError) as exc:
        decode_maze({"gridSize": 3, "cells": [{} for _ in range(9)]})
    assert exc.value.expected == 25
    assert exc.value.actual == 9


def test_large_grid_size_is_clamped():
    payload = _closed_payload(101)
    payload["gridSize"] = 500
    maze, report = decode_maze_with_report(payload)
    assert maze.cols == 101
    assert "CODEC-008" in report.codes()


def test_cols_and_rows_override_grid_size():
    payload = {"cols": 6, "rows": 8, "cells": [{} for _ in range(48)]}
    maze = decode_maze(payload)
    assert (maze.cols, maze.rows) == (6, 8)


def test_small_maze_round_trip_has_no_warnings():
    maze, report = decode_maze_with_report(encode_maze(generate_maze(3, 3, seed="tiny")))
    assert (maze.cols, maze.rows) == (3, 3)
    assert report.issues == []


def test_explicit_dimensions_below_one_are_raised():
    payload = {"cols": 0, "rows": 3, "cells": [{} for _ in range(3)]}
    maze, report = decode_maze_with_report(payload)
    assert (maze.cols, maze.rows) == (1, 3)
    assert report.codes() == ["CODEC-008"]


def test_invalid_cell_size_uses_default():
    for raw in (0, -1, "0.3", True):
        maze = decode_maze(_closed_payload(5, cellSizeMeters=raw), default_cell_size_m=0.4)
        assert maze.cell_size_m == 0.4


def test_asymmetric_edges_kept_with_warning():
    payload = _closed_payload(5)
    payload["cells"][0]["E"] = False
    maze, report = decode_maze_with_report(payload)
    assert report.passed
    assert report.codes() == ["CODEC-007"]
    assert not maze.grid.cell(0, 0).has_wall(Direction.E)
    assert maze.grid.cell(1, 0).has_wall(Direction.W)


# ---------------------------------------------------------------------------
# Path verification
# ---------------------------------------------------------------------------

def test_verify_path_rejects_sealed_goal():
    payload = _closed_payload(5)
    assert decode_maze(payload).goal == (4, 4)
    with pytest.raises(MazeDecodeError) as exc:
        decode_maze(payload, verify_path=True)
    assert exc.value.issue.code == "GRID-004"


def test_verify_path_accepts_connected_grid():
    maze = decode_maze(_open_row_payload(), verify_path=True)
    assert maze.goal == (4, 4)
