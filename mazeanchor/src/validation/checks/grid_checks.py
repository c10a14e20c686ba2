"""
Grid and maze validation checks.

Validates maze grids against the model rules:
- Edge symmetry (GRID-001)
- Perfect maze edge count (GRID-002)
- Full connectivity (GRID-003)
- Start/goal connectivity (GRID-004)
"""

from typing import List

from mazeanchor.src.generators.maze.grid import Grid, opposite
from mazeanchor.src.generators.maze.maze_types import Maze
from mazeanchor.src.generators.maze.solver import find_path, reachable_cells

from ..core import Severity, ValidationIssue, ValidationResult, ValidationStage
from ..rules import GRID_001, GRID_002, GRID_003, GRID_004


def check_edge_symmetry(grid: Grid, severity: Severity = None) -> List[ValidationIssue]:
    """Report every interior edge whose two recorded flags disagree."""
    issues = []
    for cell, direction, other in grid.interior_edges():
        flag = cell.has_wall(direction)
        other_flag = other.has_wall(opposite(direction))
        if flag != other_flag:
            issues.append(GRID_001.issue(
                location=f"cell {cell.coords}",
                severity=severity,
                direction=direction,
                cell=cell.coords,
                flag=flag,
                other=other_flag,
            ))
    return issues


def check_perfect_edge_count(grid: Grid) -> List[ValidationIssue]:
    """A spanning tree over N cells opens exactly N - 1 interior edges."""
    open_edges = grid.open_interior_edge_count()
    expected = len(grid) - 1
    if open_edges == expected:
        return []
    return [GRID_002.issue(
        open_edges=open_edges, cols=grid.cols, rows=grid.rows, expected=expected,
    )]


def check_connectivity(grid: Grid) -> List[ValidationIssue]:
    reached = reachable_cells(grid, (0, 0))
    if len(reached) == len(grid):
        return []
    return [GRID_003.issue(unreachable=len(grid) - len(reached), total=len(grid))]


def check_start_goal_path(maze: Maze) -> List[ValidationIssue]:
    if find_path(maze.grid, maze.start, maze.goal) is not None:
        return []
    return [GRID_004.issue(location="start->goal", start=maze.start, goal=maze.goal)]


def validate_grid(grid: Grid, require_perfect: bool = True) -> ValidationResult:
    """
    Run all grid checks.

    Args:
        grid: Grid to check
        require_perfect: Also check edge count and connectivity

    Returns:
        ValidationResult with any grid issues
    """
    result = ValidationResult()
    result.extend(check_edge_symmetry(grid))
    if require_perfect:
        result.extend(check_perfect_edge_count(grid))
        result.extend(check_connectivity(grid))
    return result


def validate_maze(maze: Maze, require_perfect: bool = True) -> ValidationResult:
    result = validate_grid(maze.grid, require_perfect=require_perfect)
    result.extend(check_start_goal_path(maze))
    result.stage = ValidationStage.GENERATION
    return result
