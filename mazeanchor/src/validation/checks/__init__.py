"""
Validation check modules.

- grid_checks: Edge symmetry, perfect-maze shape, connectivity
- geometry_checks: Duplicate placements, edge coverage, segment sizes
"""

from .grid_checks import (
    check_edge_symmetry,
    check_perfect_edge_count,
    check_connectivity,
    check_start_goal_path,
    validate_grid,
    validate_maze,
)

from .geometry_checks import (
    check_duplicate_segments,
    check_slot_coverage,
    check_segment_sizes,
    validate_geometry,
)

__all__ = [
    # Grid
    'check_edge_symmetry',
    'check_perfect_edge_count',
    'check_connectivity',
    'check_start_goal_path',
    'validate_grid',
    'validate_maze',
    # Geometry
    'check_duplicate_segments',
    'check_slot_coverage',
    'check_segment_sizes',
    'validate_geometry',
]
