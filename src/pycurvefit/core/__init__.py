"""Core curve fitting models, estimators and fit evaluation."""

from .models import FitOptions, FitResult, Point, RegressionType, evaluate_model
from .numerics import format_number, gaussian_elimination, round_to_precision
from .selection import compare_fits, determination_coefficient, evaluate_fit_quality, rank_fits
from .fitting import (
    CurveFitter,
    exponential,
    fit,
    linear,
    logarithmic,
    polynomial,
    power,
)

__all__ = [
    "Point",
    "FitOptions",
    "FitResult",
    "RegressionType",
    "evaluate_model",
    "round_to_precision",
    "format_number",
    "gaussian_elimination",
    "determination_coefficient",
    "evaluate_fit_quality",
    "compare_fits",
    "rank_fits",
    "CurveFitter",
    "fit",
    "linear",
    "exponential",
    "logarithmic",
    "power",
    "polynomial",
]
