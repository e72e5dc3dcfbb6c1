"""Fitting validation for curve fits.

Pre-fit checks verify the point set can determine the requested model.
Post-fit checks verify the fit quality and that the output is finite.
"""

import math
from typing import Sequence

import numpy as np

from ..core.models import FitResult, Point, RegressionType
from .result import (
    ValidationResult,
    ValidationIssue,
    IssueSeverity,
    IssueCategory,
)


class FittingValidator:
    """Validates pre-fit requirements and post-fit quality.

    Pre-fit error codes:
        FP001: Insufficient observed points
        FP002: All observed x values identical
        FP003: Polynomial order too high for the distinct x values

    Post-fit error codes:
        FR001: Poor fit (r² < threshold)
        FR002: Non-finite coefficients or r²
    """

    def __init__(
        self,
        min_points: int = 2,
        min_r_squared: float = 0.5,
    ):
        """Initialize fitting validator.

        Args:
            min_points: Minimum observed points required for fitting
            min_r_squared: Minimum acceptable r² value
        """
        self.min_points = min_points
        self.min_r_squared = min_r_squared

    def validate_pre_fit(
        self,
        points: Sequence[Point],
        kind: str | RegressionType,
        order: int = 2,
    ) -> ValidationResult:
        """Validate a point set before fitting.

        Checks:
            - Sufficient observed points
            - Spread in x (not all identical)
            - Polynomial order below the number of distinct x values

        Args:
            points: Points to fit
            kind: Curve family to fit
            order: Polynomial degree (only checked for polynomial fits)

        Returns:
            ValidationResult with any pre-fit issues
        """
        kind = RegressionType.parse(kind)
        result = ValidationResult(kind=kind.value)

        x_obs = np.array([p.x for p in points if p.y is not None], dtype=float)
        n_observed = len(x_obs)

        if n_observed < self.min_points:
            # Under two observations nothing is determined at all
            if n_observed < 2:
                message = f"Only {n_observed} observed point(s): {kind.value} fit is under-determined"
                guidance = "Coefficients and r² will be NaN; supply at least 2 observed points"
            else:
                message = f"Insufficient observed points: {n_observed} < {self.min_points}"
                guidance = f"Supply at least {self.min_points} observed points for a reliable fit"
            result.add_issue(ValidationIssue(
                code="FP001",
                category=IssueCategory.FITTING_PREREQ,
                severity=IssueSeverity.WARNING,
                message=message,
                guidance=guidance,
                details={
                    "observed_count": n_observed,
                    "total_count": len(points),
                    "min_required": self.min_points,
                },
            ))
            if n_observed < 2:
                return result

        distinct_x = len(np.unique(x_obs[np.isfinite(x_obs)]))
        if distinct_x < 2:
            result.add_issue(ValidationIssue(
                code="FP002",
                category=IssueCategory.FITTING_PREREQ,
                severity=IssueSeverity.WARNING,
                message="All observed x values are identical",
                guidance="A vertical point set cannot determine a slope; vary x",
                details={"x": float(x_obs[0]) if n_observed else None},
            ))

        if kind is RegressionType.POLYNOMIAL and order >= distinct_x:
            result.add_issue(ValidationIssue(
                code="FP003",
                category=IssueCategory.FITTING_PREREQ,
                severity=IssueSeverity.WARNING,
                message=f"Polynomial order {order} needs more than {distinct_x} distinct x values",
                guidance=f"Lower the order below {distinct_x} or add observations",
                details={"order": order, "distinct_x": distinct_x},
            ))

        return result

    def validate_post_fit(self, result: FitResult) -> ValidationResult:
        """Validate a completed fit.

        Args:
            result: FitResult to check

        Returns:
            ValidationResult with any post-fit issues
        """
        validation = ValidationResult(kind=result.kind.value)

        bad_coefficients = [c for c in result.coefficients if not math.isfinite(c)]
        if bad_coefficients or not math.isfinite(result.r2):
            validation.add_issue(ValidationIssue(
                code="FR002",
                category=IssueCategory.FITTING_RESULT,
                severity=IssueSeverity.WARNING,
                message=f"{result.kind.value} fit produced non-finite values",
                guidance="Check for values outside the model's domain or too few observations",
                details={
                    "coefficients": list(result.coefficients),
                    "r_squared": result.r2,
                },
            ))
        elif result.r2 < self.min_r_squared:
            validation.add_issue(
                ValidationIssue.poor_fit(result.kind.value, result.r2, self.min_r_squared)
            )

        return validation
