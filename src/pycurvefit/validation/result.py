"""Validation result types for input and fit checks.

Provides structured validation results with categorized issues,
severity levels, and actionable guidance.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class IssueSeverity(Enum):
    """Severity level of a validation issue."""
    ERROR = auto()    # Fit output is meaningless
    WARNING = auto()  # Fit runs but output may contain NaN/Inf or be unreliable
    INFO = auto()     # Informational - no action required


class IssueCategory(Enum):
    """Category of validation issue for grouping and filtering."""
    DATA_FORMAT = auto()     # Non-finite values
    MODEL_DOMAIN = auto()    # Values outside the model's domain (log of <= 0)
    FITTING_PREREQ = auto()  # Pre-fit checks failed
    FITTING_RESULT = auto()  # Post-fit quality issues


@dataclass
class ValidationIssue:
    """A single validation issue with context and guidance.

    Attributes:
        code: Unique identifier (e.g., "IV001", "FP001")
        category: Issue category for grouping
        severity: Issue severity level
        message: User-friendly description of the issue
        guidance: Actionable next step for resolution
        details: Context data (indices, values, thresholds, etc.)
    """
    code: str
    category: IssueCategory
    severity: IssueSeverity
    message: str
    guidance: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format issue as string for display."""
        return f"[{self.code}] {self.severity.name}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category.name,
            "severity": self.severity.name,
            "message": self.message,
            "guidance": self.guidance,
            "details": self.details,
        }

    # --- Factory methods for common issue patterns ---

    @staticmethod
    def non_finite_values(axis: str, count: int, indices: list) -> "ValidationIssue":
        """Create IV001: Non-finite values issue."""
        return ValidationIssue(
            code="IV001",
            category=IssueCategory.DATA_FORMAT,
            severity=IssueSeverity.ERROR,
            message=f"Found {count} non-finite {axis} values",
            guidance="NaN or infinite inputs make every coefficient NaN; clean the data source",
            details={"axis": axis, "count": count, "indices": indices[:10]},
        )

    @staticmethod
    def non_positive_x(kind: str, count: int, indices: list, values: list) -> "ValidationIssue":
        """Create IV002: Non-positive x for a log-x model."""
        return ValidationIssue(
            code="IV002",
            category=IssueCategory.MODEL_DOMAIN,
            severity=IssueSeverity.WARNING,
            message=f"Found {count} non-positive x values, ln(x) is undefined for a {kind} fit",
            guidance="Shift or filter x values, or use a linear, exponential or polynomial fit",
            details={"kind": kind, "count": count, "indices": indices[:10], "values": values[:10]},
        )

    @staticmethod
    def non_positive_y(kind: str, count: int, indices: list, values: list) -> "ValidationIssue":
        """Create IV003: Non-positive y for a log-y model."""
        return ValidationIssue(
            code="IV003",
            category=IssueCategory.MODEL_DOMAIN,
            severity=IssueSeverity.WARNING,
            message=f"Found {count} non-positive y values, ln(y) is undefined for a {kind} fit",
            guidance="Shift or filter y values, or use a linear, logarithmic or polynomial fit",
            details={"kind": kind, "count": count, "indices": indices[:10], "values": values[:10]},
        )

    @staticmethod
    def poor_fit(kind: str, r_squared: float, threshold: float) -> "ValidationIssue":
        """Create FR001: Poor fit quality issue."""
        severity = IssueSeverity.ERROR if r_squared < 0.3 else IssueSeverity.WARNING
        return ValidationIssue(
            code="FR001",
            category=IssueCategory.FITTING_RESULT,
            severity=severity,
            message=f"Poor {kind} fit quality: r²={r_squared:.3f}",
            guidance="Low r² suggests the curve family does not describe the data; try another kind",
            details={"kind": kind, "r_squared": r_squared, "threshold": threshold},
        )


@dataclass
class ValidationResult:
    """Collection of validation issues for a point set or fit.

    Attributes:
        source: Data source name (file name, None for in-memory data)
        issues: List of validation issues found
        kind: Curve family being validated (None when not kind-specific)
    """
    source: str | None = None
    issues: list[ValidationIssue] = field(default_factory=list)
    kind: str | None = None

    @property
    def has_errors(self) -> bool:
        """Check if any ERROR-severity issues exist."""
        return any(i.severity == IssueSeverity.ERROR for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        """Check if any WARNING-severity issues exist."""
        return any(i.severity == IssueSeverity.WARNING for i in self.issues)

    @property
    def is_valid(self) -> bool:
        """Check if no ERROR-severity issues exist."""
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count of ERROR-severity issues."""
        return sum(1 for i in self.issues if i.severity == IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of WARNING-severity issues."""
        return sum(1 for i in self.issues if i.severity == IssueSeverity.WARNING)

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def by_category(self, category: IssueCategory) -> list[ValidationIssue]:
        """Filter issues by category."""
        return [i for i in self.issues if i.category == category]

    def by_severity(self, severity: IssueSeverity) -> list[ValidationIssue]:
        """Filter issues by severity."""
        return [i for i in self.issues if i.severity == severity]

    def errors(self) -> list[ValidationIssue]:
        """Get all ERROR-severity issues."""
        return self.by_severity(IssueSeverity.ERROR)

    def warnings(self) -> list[ValidationIssue]:
        """Get all WARNING-severity issues."""
        return self.by_severity(IssueSeverity.WARNING)

    def promote_warnings(self) -> "ValidationResult":
        """Return a copy with every WARNING raised to ERROR (strict mode)."""
        promoted = [
            ValidationIssue(
                code=i.code,
                category=i.category,
                severity=IssueSeverity.ERROR if i.severity == IssueSeverity.WARNING else i.severity,
                message=i.message,
                guidance=i.guidance,
                details=i.details,
            )
            for i in self.issues
        ]
        return ValidationResult(source=self.source, issues=promoted, kind=self.kind)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one.

        Args:
            other: Another ValidationResult to merge

        Returns:
            New ValidationResult with combined issues
        """
        return ValidationResult(
            source=self.source or other.source,
            issues=self.issues + other.issues,
            kind=self.kind or other.kind,
        )

    def __str__(self) -> str:
        """Format result as summary string."""
        if not self.issues:
            return f"Validation OK for {self.source or 'data'}"

        lines = [f"Validation for {self.source or 'data'}: "
                 f"{self.error_count} errors, {self.warning_count} warnings"]
        for issue in self.issues:
            lines.append(f"  {issue}")
        return "\n".join(lines)


def merge_results(results: list[ValidationResult]) -> ValidationResult:
    """Merge multiple validation results into one.

    Args:
        results: List of ValidationResults to merge

    Returns:
        Combined ValidationResult with all issues
    """
    if not results:
        return ValidationResult()

    combined = results[0]
    for result in results[1:]:
        combined = combined.merge(result)
    return combined
