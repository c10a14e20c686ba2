"""
Geometry validation checks.

Validates compiled wall geometry:
- No duplicate placements (GEOM-001)
- Every edge slot evaluated exactly once (GEOM-002)
- Positive segment dimensions (GEOM-003)
"""

from typing import List

import numpy as np

from ..core import ValidationIssue, ValidationResult, ValidationStage
from ..rules import GEOM_001, GEOM_002, GEOM_003

# Decimal places used to compare placements
POSITION_DECIMALS = 6


def check_duplicate_segments(geometry) -> List[ValidationIssue]:
    """Flag wall placements that occur more than once within a batch."""
    issues = []
    for batch in (geometry.horizontal, geometry.vertical):
        if len(batch) == 0:
            continue
        rounded = np.round(batch.positions, POSITION_DECIMALS)
        unique, counts = np.unique(rounded, axis=0, return_counts=True)
        for position in unique[counts > 1]:
            issues.append(GEOM_001.issue(
                location=str(batch.orientation),
                orientation=batch.orientation,
                position=tuple(float(v) for v in position),
            ))
    return issues


def check_slot_coverage(geometry) -> List[ValidationIssue]:
    """Each of the 2*cols*rows + cols + rows edge slots is evaluated once."""
    stats = geometry.stats
    cols, rows = geometry.cols, geometry.rows
    issues = []
    expected_h = cols * (rows + 1)
    expected_v = (cols + 1) * rows
    if stats.horizontal_slots != expected_h:
        issues.append(GEOM_002.issue(
            orientation="horizontal", actual=stats.horizontal_slots, expected=expected_h,
        ))
    if stats.vertical_slots != expected_v:
        issues.append(GEOM_002.issue(
            orientation="vertical", actual=stats.vertical_slots, expected=expected_v,
        ))
    return issues


def check_segment_sizes(geometry) -> List[ValidationIssue]:
    issues = []
    for batch in (geometry.horizontal, geometry.vertical):
        for axis, value in zip("xyz", batch.size):
            if value <= 0:
                issues.append(GEOM_003.issue(
                    location=str(batch.orientation), what=f"segment size {axis}", value=value,
                ))
    if geometry.goal.radius <= 0:
        issues.append(GEOM_003.issue(location="goal", what="goal radius", value=geometry.goal.radius))
    return issues


def validate_geometry(geometry) -> ValidationResult:
    """Run all geometry checks on a compiled maze."""
    result = ValidationResult(stage=ValidationStage.COMPILATION)
    result.extend(check_duplicate_segments(geometry))
    result.extend(check_slot_coverage(geometry))
    result.extend(check_segment_sizes(geometry))
    return result
