"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "GRID-001")
- Severity: FAIL, WARN, or INFO
- Rule reference: The model rule it guards
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by category:
- GRID: Grid model and maze shape
- CODEC: Transport payload decoding
- GEOM: Compiled wall geometry
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "GRID-001")
        severity: Default severity for this rule
        rule_reference: Model rule reference
        message_template: Template for error message (use {placeholders})
        remediation_template: Template for suggested fix
        description: Full description of the rule
    """
    code: str
    severity: Severity
    rule_reference: str
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(
        self,
        location: Optional[str] = None,
        severity: Optional[Severity] = None,
        **kwargs,
    ) -> ValidationIssue:
        """Build a ValidationIssue for this rule with formatted texts."""
        return ValidationIssue(
            severity=severity or self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            rule_reference=self.rule_reference,
            remediation=self.format_remediation(**kwargs),
            location=location,
        )


# =============================================================================
# GRID RULES (GRID)
# =============================================================================

GRID_001 = ValidationRule(
    code="GRID-001",
    severity=Severity.FAIL,
    rule_reference="Grid model - edge symmetry",
    message_template="Edge {direction} of cell {cell} is recorded as wall={flag} but its neighbor records wall={other}",
    remediation_template="Carve or close both sides of the edge together",
    description="Both cells sharing an interior edge must record the same wall flag"
)

GRID_002 = ValidationRule(
    code="GRID-002",
    severity=Severity.FAIL,
    rule_reference="Maze generator - perfect maze",
    message_template="Maze has {open_edges} open interior edges, a perfect {cols}x{rows} maze has {expected}",
    remediation_template="Regenerate the maze from a fully closed grid",
    description="A spanning tree over N cells has exactly N - 1 open edges"
)

GRID_003 = ValidationRule(
    code="GRID-003",
    severity=Severity.FAIL,
    rule_reference="Maze generator - perfect maze",
    message_template="{unreachable} of {total} cells are unreachable from the origin",
    remediation_template="Regenerate the maze; every cell must be connected",
    description="Every cell must be reachable through open passages"
)

GRID_004 = ValidationRule(
    code="GRID-004",
    severity=Severity.FAIL,
    rule_reference="Maze - start and goal connectivity",
    message_template="No open path from start {start} to goal {goal}",
    remediation_template="Reject the payload and generate the maze locally",
    description="A path of open passages must connect start and goal"
)

# =============================================================================
# CODEC RULES (CODEC)
# =============================================================================

CODEC_001 = ValidationRule(
    code="CODEC-001",
    severity=Severity.FAIL,
    rule_reference="Maze codec - payload shape",
    message_template="Maze payload must be a JSON object, got {kind}",
    remediation_template="Send a JSON object with gridSize, start, goal and cells",
)

CODEC_002 = ValidationRule(
    code="CODEC-002",
    severity=Severity.FAIL,
    rule_reference="Maze codec - format version",
    message_template="Unsupported maze format version {version!r} (supported: {supported})",
)

CODEC_003 = ValidationRule(
    code="CODEC-003",
    severity=Severity.FAIL,
    rule_reference="Maze codec - cell count",
    message_template="Cell count mismatch: expected {expected}, got {actual}",
    remediation_template="Send exactly cols*rows cells in row-major order",
    description="The cell list is never padded or truncated to fit the grid"
)

CODEC_004 = ValidationRule(
    code="CODEC-004",
    severity=Severity.FAIL,
    rule_reference="Maze codec - cell entries",
    message_template="Cell entry {index} must be an object, got {kind}",
)

CODEC_005 = ValidationRule(
    code="CODEC-005",
    severity=Severity.FAIL,
    rule_reference="Maze codec - start and goal",
    message_template="{name} must be an integer pair within [0,{cols})x[0,{rows}), got {value!r}",
    remediation_template="Send {name} as [col, row] inside the grid",
)

CODEC_006 = ValidationRule(
    code="CODEC-006",
    severity=Severity.FAIL,
    rule_reference="Maze codec - cell list",
    message_template="cells must be a list, got {kind}",
)

CODEC_007 = ValidationRule(
    code="CODEC-007",
    severity=Severity.WARN,
    rule_reference="Grid model - edge symmetry",
    message_template="{count} asymmetric edge(s) accepted; walls resolved by OR rule at compile time",
    description="Decode does not repair symmetry; the compiler treats either wall flag as authoritative"
)

CODEC_008 = ValidationRule(
    code="CODEC-008",
    severity=Severity.WARN,
    rule_reference="Maze codec - grid size",
    message_template="{field}={value!r} replaced by {used}",
    description="Out-of-range sizes are clamped, missing or non-integer sizes defaulted"
)

# =============================================================================
# GEOMETRY RULES (GEOM)
# =============================================================================

GEOM_001 = ValidationRule(
    code="GEOM-001",
    severity=Severity.FAIL,
    rule_reference="Geometry compiler - deduplication",
    message_template="Duplicate {orientation} wall segment at {position}",
    remediation_template="Emit each shared edge once (North/West per cell, East/South on the border)",
)

GEOM_002 = ValidationRule(
    code="GEOM-002",
    severity=Severity.FAIL,
    rule_reference="Geometry compiler - edge coverage",
    message_template="{orientation} edge slots evaluated {actual} times, expected {expected}",
)

GEOM_003 = ValidationRule(
    code="GEOM-003",
    severity=Severity.FAIL,
    rule_reference="Geometry compiler - segment sizing",
    message_template="Non-positive {what}: {value}",
)
