"""
Core data structures for the validation system.

Defines the fundamental types used throughout the validation package:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationStage: Pipeline stages where validation occurs
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when validation fails
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, logged but doesn't affect pass/fail
    - WARN: Warning, logged but doesn't block the pipeline
    - FAIL: Error, rejects the maze or geometry
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Pipeline stages where validation occurs.

    - DECODE: When an untrusted payload is turned into a maze
    - GENERATION: When the backtracker produces a maze
    - COMPILATION: When a grid is compiled into wall segments
    """
    DECODE = "decode"
    GENERATION = "generation"
    COMPILATION = "compilation"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """Represents a single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "CODEC-003")
        message: Human-readable description
        rule_reference: Model rule the issue violates
        remediation: Optional suggested fix
        location: Optional location info (cell coords, payload field, ...)
    """
    severity: Severity
    code: str
    message: str
    rule_reference: str
    remediation: Optional[str] = None
    location: Optional[str] = None

    def format(self) -> str:
        """Format issue for display.

        Returns:
            ``[SEVERITY] CODE at=LOCATION :: message :: fix=FIX``
        """
        location = self.location or '-'
        fix = self.remediation or 'N/A'
        return f"[{self.severity}] {self.code} at={location} :: {self.message} :: fix={fix}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination.

    Attributes:
        issues: List of ValidationIssue objects
        stage: Pipeline stage this result is from
    """
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    @property
    def passed(self) -> bool:
        """Check if validation passed (no FAIL issues)."""
        return not any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def extend(self, issues: List[ValidationIssue]) -> 'ValidationResult':
        self.issues.extend(issues)
        return self

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one.

        Returns:
            Self for chaining
        """
        self.issues.extend(other.issues)
        return self

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def report(self) -> str:
        """Generate a formatted report of all issues."""
        if not self.issues:
            return "Validation passed: No issues found"

        lines = []
        stage_str = f" ({self.stage})" if self.stage else ""
        status = "PASSED" if self.passed else "FAILED"
        lines.append(f"Validation {status}{stage_str}: {len(self.issues)} issue(s)")

        for severity in [Severity.FAIL, Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append("  " + issue.format())

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'issue_count': len(self.issues),
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'rule_reference': issue.rule_reference,
                    'remediation': issue.remediation,
                    'location': issue.location,
                }
                for issue in self.issues
            ]
        }


class ValidationError(Exception):
    """Exception raised when validation fails with FAIL severity issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
