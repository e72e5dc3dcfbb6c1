"""Data validation and error reporting for PyCurveFit.

Degenerate input never stops a fit; it is reported here instead.

Usage:
    from pycurvefit.validation import InputValidator, FittingValidator

    # Validate input data
    result = InputValidator().validate(points, kinds=["power"])

    # Check a point set can determine the model
    result = FittingValidator(min_points=3).validate_pre_fit(points, "polynomial", order=2)

    # Validate fitting results
    result = FittingValidator().validate_post_fit(fit_result)
"""

from .result import (
    IssueSeverity,
    IssueCategory,
    ValidationIssue,
    ValidationResult,
    merge_results,
)
from .input_validator import InputValidator
from .fitting_validator import FittingValidator

__all__ = [
    # Result types
    "IssueSeverity",
    "IssueCategory",
    "ValidationIssue",
    "ValidationResult",
    "merge_results",
    # Validators
    "InputValidator",
    "FittingValidator",
]
