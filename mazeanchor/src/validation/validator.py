"""
Validator orchestrator.

Central class that coordinates validation checks across pipeline stages.
"""

import logging
from typing import Optional

from .core import Severity, ValidationResult, ValidationStage
from .checks.grid_checks import validate_maze
from .checks.geometry_checks import validate_geometry

logger = logging.getLogger(__name__)


class MazeValidator:
    """Central orchestrator for maze and geometry checks.

    Attributes:
        strict_mode: If True, treat WARN as FAIL
        enabled: If False, skip all validation (for bulk generation)
    """

    def __init__(self, strict_mode: bool = False, enabled: bool = True):
        self.strict_mode = strict_mode
        self.enabled = enabled

    def validate_generation(self, maze, require_perfect: bool = True) -> ValidationResult:
        """Validate a freshly generated maze.

        Checks:
        - GRID-001: Edge symmetry
        - GRID-002: Perfect maze edge count
        - GRID-003: Full connectivity
        - GRID-004: Start/goal path
        """
        if not self.enabled:
            return ValidationResult(stage=ValidationStage.GENERATION)

        result = validate_maze(maze, require_perfect=require_perfect)
        self._apply_strict_mode(result)
        return result

    def validate_compilation(self, geometry) -> ValidationResult:
        """Validate compiled wall geometry.

        Checks:
        - GEOM-001: Duplicate placements
        - GEOM-002: Edge slot coverage
        - GEOM-003: Segment sizes
        """
        if not self.enabled:
            return ValidationResult(stage=ValidationStage.COMPILATION)

        result = validate_geometry(geometry)
        self._apply_strict_mode(result)
        return result

    def _apply_strict_mode(self, result: ValidationResult) -> None:
        """Promote WARN to FAIL in strict mode."""
        if self.strict_mode:
            for issue in result.issues:
                if issue.severity == Severity.WARN:
                    issue.severity = Severity.FAIL


# =============================================================================
# SINGLETON ACCESSOR
# =============================================================================

_default_validator: Optional[MazeValidator] = None


def get_validator(
    strict_mode: bool = None,
    enabled: bool = None
) -> MazeValidator:
    """Get the default validator instance.

    Creates a singleton on first call. Passing an argument updates the
    existing instance.
    """
    global _default_validator

    if _default_validator is None:
        _default_validator = MazeValidator(
            strict_mode=strict_mode or False,
            enabled=enabled if enabled is not None else True,
        )
    else:
        if strict_mode is not None:
            _default_validator.strict_mode = strict_mode
        if enabled is not None:
            _default_validator.enabled = enabled

    return _default_validator


def reset_validator() -> None:
    """Drop the default validator so the next call builds a fresh one."""
    global _default_validator
    _default_validator = None
