"""
Validation package for mazeanchor.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Pipeline stage enumeration
    - MazeValidator: Orchestrator for grid and geometry checks
    - get_validator(): Get configured validator instance
    - ValidationError: Exception raised on FAIL issues when fail_fast=True
    - validation_gate: Decorator for pipeline stage validation
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .gates import validation_gate
from .validator import MazeValidator, get_validator, reset_validator

__all__ = [
    # Core types
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Validator
    'MazeValidator',
    'get_validator',
    'reset_validator',
    # Decorator
    'validation_gate',
]
