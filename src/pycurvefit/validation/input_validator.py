"""Input validation for point sets.

Checks for non-finite values and for values outside the domain of the
log-transformed models. Findings are reported, never enforced: the
estimators still run and carry NaN/Inf through their output.
"""

from typing import Sequence

import numpy as np

from ..core.models import Point, RegressionType
from .result import ValidationResult, ValidationIssue

# Curve families that take ln(x) / ln(y) of the observations
_LOG_X_KINDS = (RegressionType.LOGARITHMIC, RegressionType.POWER)
_LOG_Y_KINDS = (RegressionType.EXPONENTIAL, RegressionType.POWER)


class InputValidator:
    """Validates point sets before fitting.

    Error codes:
        IV001: Non-finite x or y values
        IV002: Non-positive x values for logarithmic/power fits
        IV003: Non-positive y values for exponential/power fits
    """

    def validate(
        self,
        points: Sequence[Point],
        kinds: Sequence[str | RegressionType] | None = None,
        source: str | None = None,
    ) -> ValidationResult:
        """Validate all aspects of a point set.

        Args:
            points: Points to validate
            kinds: Curve families that will be fitted (default: all five)
            source: Name of the data source for reporting

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult(source=source)
        selected = [RegressionType.parse(k) for k in kinds] if kinds else list(RegressionType)

        result = result.merge(self._validate_finite(points, source))
        for kind in selected:
            result = result.merge(self.validate_domain(points, kind, source))

        return result

    def _validate_finite(self, points: Sequence[Point], source: str | None) -> ValidationResult:
        """Check that every x and every observed y is finite."""
        result = ValidationResult(source=source)

        x = np.array([p.x for p in points], dtype=float)
        bad_x = np.where(~np.isfinite(x))[0].tolist()
        if bad_x:
            result.add_issue(ValidationIssue.non_finite_values("x", len(bad_x), bad_x))

        bad_y = [
            i for i, p in enumerate(points)
            if p.y is not None and not np.isfinite(p.y)
        ]
        if bad_y:
            result.add_issue(ValidationIssue.non_finite_values("y", len(bad_y), bad_y))

        return result

    def validate_domain(
        self,
        points: Sequence[Point],
        kind: str | RegressionType,
        source: str | None = None,
    ) -> ValidationResult:
        """Check that observed values lie in the domain of a curve family.

        Only observed points are checked; points without y never enter
        the sums, so their x cannot poison the coefficients.

        Args:
            points: Points to validate
            kind: Curve family that will be fitted
            source: Name of the data source for reporting

        Returns:
            ValidationResult with any domain issues found
        """
        kind = RegressionType.parse(kind)
        result = ValidationResult(source=source, kind=kind.value)

        observed = [(i, p) for i, p in enumerate(points) if p.y is not None]

        if kind in _LOG_X_KINDS:
            bad = [(i, p.x) for i, p in observed if p.x <= 0]
            if bad:
                result.add_issue(ValidationIssue.non_positive_x(
                    kind.value, len(bad), [i for i, _ in bad], [v for _, v in bad],
                ))

        if kind in _LOG_Y_KINDS:
            bad = [(i, p.y) for i, p in observed if p.y <= 0]
            if bad:
                result.add_issue(ValidationIssue.non_positive_y(
                    kind.value, len(bad), [i for i, _ in bad], [v for _, v in bad],
                ))

        return result
