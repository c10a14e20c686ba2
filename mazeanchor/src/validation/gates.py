"""
Validation gate decorator for pipeline stage validation.

Provides the @validation_gate decorator for wrapping functions with
automatic validation of their return value at pipeline boundaries.
"""

import functools
import logging
from typing import Any, Callable, Optional

from .core import ValidationError, ValidationResult, ValidationStage

logger = logging.getLogger(__name__)


def validation_gate(
    stage: ValidationStage,
    fail_fast: bool = True,
    log_warnings: bool = True
) -> Callable:
    """Decorator to add a validation gate at a pipeline boundary.

    The wrapped function's return value is validated according to the
    stage. If validation finds FAIL issues and fail_fast=True, raises
    ValidationError.

    Args:
        stage: Pipeline stage for this gate
        fail_fast: If True, raise ValidationError on FAIL issues
        log_warnings: If True, log WARN issues

    Usage:
        @validation_gate(ValidationStage.COMPILATION)
        def compile_maze(maze, settings=None) -> MazeGeometry:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            # Import here to avoid circular imports
            from .validator import get_validator

            validator = get_validator()
            result = func(*args, **kwargs)

            validation_result: Optional[ValidationResult] = None
            if stage == ValidationStage.GENERATION:
                validation_result = validator.validate_generation(result)
            elif stage == ValidationStage.COMPILATION:
                validation_result = validator.validate_compilation(result)

            if validation_result:
                if log_warnings:
                    for issue in validation_result.warnings:
                        logger.warning(str(issue))

                if fail_fast and validation_result.failed:
                    logger.error(f"Validation failed at {stage}: {len(validation_result.errors)} errors")
                    raise ValidationError(validation_result)

            return result

        return wrapper
    return decorator
