"""Goodness of fit, fit quality evaluation and fit comparison."""

import math
from typing import Sequence

import numpy as np

from .models import FitResult, Point


# Default grading thresholds on r² (can be overridden by callers)
DEFAULT_GRADE_THRESHOLDS = {
    "A": 0.95,
    "B": 0.85,
    "C": 0.70,
    "D": 0.50,
}


def determination_coefficient(
    points: Sequence[Point],
    predicted: Sequence[Point],
) -> float:
    """Determine the coefficient of determination (r²) of a fit.

    Points without an observed y are dropped together with the prediction at
    the same index, so ``predicted`` must be index-aligned with ``points``.

    Args:
        points: Observed points
        predicted: Predicted points, one per observed point

    Returns:
        1 - SSres/SStot, or NaN when fewer than two observations remain.
        A zero SStot with non-zero SSres follows IEEE division (-Infinity).
    """
    observed = []
    fitted = []
    for i, point in enumerate(points):
        if point.y is not None:
            observed.append(point.y)
            fitted.append(predicted[i].y)

    if len(observed) < 2:
        return math.nan

    y = np.asarray(observed, dtype=float)
    y_hat = np.asarray(fitted, dtype=float)

    with np.errstate(all="ignore"):
        mean = np.sum(y) / len(y)
        ss_tot = np.sum((y - mean) ** 2)
        ss_res = np.sum((y - y_hat) ** 2)
        return float(1 - (ss_res / ss_tot))


def evaluate_fit_quality(
    result: FitResult,
    grade_thresholds: dict | None = None,
    acceptable_r_squared: float = 0.7,
) -> dict:
    """Evaluate the quality of a curve fit.

    Args:
        result: FitResult from any estimator
        grade_thresholds: Optional dict with grade thresholds {"A": 0.95, "B": 0.85, ...}
        acceptable_r_squared: r² below which a fit is flagged as marginal

    Returns:
        Dictionary with quality assessment and warnings
    """
    thresholds = grade_thresholds or DEFAULT_GRADE_THRESHOLDS

    assessment = {
        "kind": result.kind.value,
        "acceptable": bool(result.r2 >= acceptable_r_squared),
        "r_squared": result.r2,
        "quality_grade": _grade_fit(result.r2, thresholds),
        "observed_points": result.observed_count,
        "warnings": [],
    }

    marginal_threshold = thresholds.get("D", 0.50)
    if math.isnan(result.r2):
        assessment["warnings"].append(
            "r² is undefined: need at least two observations with varying y"
        )
    elif result.r2 < marginal_threshold:
        assessment["warnings"].append(
            f"Poor fit (r² < {marginal_threshold}): {result.kind.value} model does not describe the data"
        )
    elif result.r2 < acceptable_r_squared:
        assessment["warnings"].append(
            f"Marginal fit (r² < {acceptable_r_squared}): predictions may have significant error"
        )

    if not all(math.isfinite(c) for c in result.coefficients):
        assessment["warnings"].append(
            "Non-finite coefficients: input is outside the model's domain or the system is singular"
        )

    if result.observed_count < 2:
        assessment["warnings"].append(
            f"Only {result.observed_count} observed point(s): fit is under-determined"
        )

    return assessment


def _grade_fit(r_squared: float, thresholds: dict | None = None) -> str:
    """Assign letter grade based on r² value.

    Args:
        r_squared: Coefficient of determination
        thresholds: Optional dict with grade thresholds

    Returns:
        Letter grade (A, B, C, D, F). NaN grades F.
    """
    thresholds = thresholds or DEFAULT_GRADE_THRESHOLDS
    if r_squared >= thresholds.get("A", 0.95):
        return "A"
    elif r_squared >= thresholds.get("B", 0.85):
        return "B"
    elif r_squared >= thresholds.get("C", 0.70):
        return "C"
    elif r_squared >= thresholds.get("D", 0.50):
        return "D"
    else:
        return "F"


def rank_fits(results: Sequence[FitResult]) -> list[FitResult]:
    """Order fit results from best to worst r² (NaN last)."""
    return sorted(
        results,
        key=lambda r: (math.isnan(r.r2), -r.r2 if not math.isnan(r.r2) else 0.0),
    )


def compare_fits(results: Sequence[FitResult]) -> FitResult:
    """Select the best of several fits of the same point set.

    Args:
        results: FitResult objects to compare

    Returns:
        The FitResult with the highest r²

    Raises:
        ValueError: If no fit results are given
    """
    if not results:
        raise ValueError("No fit results to compare")
    return rank_fits(results)[0]
