"""PyCurveFit: least-squares curve fitting for 2-D point sets.

Fits linear, exponential, logarithmic, power and polynomial models and
reports coefficients, an equation string, predictions and r².

Example:
    >>> from pycurvefit import Point, fit
    >>> result = fit([Point(0, 0), Point(1, 2), Point(2, 4)], "linear")
    >>> result.equation
    'y = 2x'
"""

__version__ = "0.1.0"

from .core import (
    CurveFitter,
    FitOptions,
    FitResult,
    Point,
    RegressionType,
    determination_coefficient,
    exponential,
    fit,
    linear,
    logarithmic,
    polynomial,
    power,
)

__all__ = [
    "__version__",
    "CurveFitter",
    "FitOptions",
    "FitResult",
    "Point",
    "RegressionType",
    "determination_coefficient",
    "fit",
    "linear",
    "exponential",
    "logarithmic",
    "power",
    "polynomial",
]
