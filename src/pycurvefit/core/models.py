"""Data model for curve fitting: points, options, and fit results.

Curve families
--------------

Five model families are supported. Each stores a two-element (or
``order + 1`` element) coefficient vector with a kind-specific layout:

    linear:       y = m*x + c           coefficients [m, c]
    exponential:  y = a * e^(b*x)       coefficients [a, b]
    logarithmic:  y = a + b * ln(x)     coefficients [a, b]
    power:        y = a * x^b           coefficients [a, b]
    polynomial:   y = c_k*x^k + ... + c_1*x + c_0
                                        coefficients [c_k, ..., c_1, c_0]

Polynomial coefficients are stored highest power first, so an order-1
polynomial stores [slope, intercept] just like the linear fit.

Missing observations:
    A Point with ``y=None`` marks an x value with no observation. Such points
    are skipped when estimating coefficients and computing r², but they are
    still predicted so that ``FitResult.predicted`` stays index-aligned with
    ``FitResult.points``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from .numerics import round_to_precision


class RegressionType(str, Enum):
    """Curve family used for a fit."""
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"
    POWER = "power"
    POLYNOMIAL = "polynomial"

    @classmethod
    def parse(cls, value: "str | RegressionType") -> "RegressionType":
        """Convert a string (case-insensitive) to a RegressionType.

        Raises:
            ValueError: If the value names no known curve family
        """
        if isinstance(value, RegressionType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown regression type: {value!r}. Must be one of: {valid}") from None


@dataclass(frozen=True)
class Point:
    """A 2-D data point.

    Attributes:
        x: Abscissa, always present
        y: Observed ordinate, or None when there is no observation at x
    """
    x: float
    y: float | None = None

    @property
    def has_observation(self) -> bool:
        """True when the point carries an observed y value."""
        return self.y is not None

    def as_tuple(self) -> tuple[float, float | None]:
        return (self.x, self.y)


@dataclass(frozen=True)
class FitOptions:
    """Options shared by all estimators.

    Attributes:
        order: Polynomial degree (default 2). Ignored by non-polynomial kinds.
        precision: Decimal places used to round coefficients, predictions
            and r² (default 3). Zero or negative values round to powers of ten.
    """
    order: int = 2
    precision: int = 3

    @classmethod
    def from_config(cls, config: "PyCurveFitConfig") -> "FitOptions":  # noqa: F821
        """Create FitOptions from the fitting section of a PyCurveFitConfig."""
        return cls(order=config.fitting.order, precision=config.fitting.precision)


def evaluate_model(
    kind: RegressionType,
    coefficients: Sequence[float],
    x: np.ndarray | float,
) -> np.ndarray:
    """Evaluate a fitted model at x without rounding.

    Args:
        kind: Curve family
        coefficients: Coefficient vector in the stored layout for ``kind``
        x: Scalar or array of x values

    Returns:
        Array of model values (NaN/Inf where the model is undefined)
    """
    x = np.atleast_1d(np.asarray(x, dtype=float))
    kind = RegressionType.parse(kind)

    with np.errstate(all="ignore"):
        if kind is RegressionType.LINEAR:
            gradient, intercept = coefficients
            return (gradient * x) + intercept
        if kind is RegressionType.EXPONENTIAL:
            a, b = coefficients
            return a * np.exp(b * x)
        if kind is RegressionType.LOGARITHMIC:
            a, b = coefficients
            return a + (b * np.log(x))
        if kind is RegressionType.POWER:
            a, b = coefficients
            return a * np.power(x, b)

        # Polynomial: stored highest power first
        y = np.zeros_like(x)
        for power, coeff in enumerate(reversed(list(coefficients))):
            y = y + (coeff * np.power(x, float(power)))
        return y


@dataclass(frozen=True)
class FitResult:
    """Result of fitting one curve family to a point set.

    Attributes:
        points: Input points, passed through unrounded
        predicted: One predicted Point per input point (x and y rounded)
        kind: Curve family
        coefficients: Rounded coefficients (layout depends on kind)
        equation: Human-readable equation string
        r2: Coefficient of determination, rounded (NaN when undefined)
        precision: Decimal places used for rounding
    """
    points: tuple[Point, ...]
    predicted: tuple[Point, ...]
    kind: RegressionType
    coefficients: tuple[float, ...]
    equation: str
    r2: float
    precision: int = 3

    @property
    def observed_count(self) -> int:
        """Number of input points carrying an observed y."""
        return sum(1 for p in self.points if p.has_observation)

    @property
    def is_finite(self) -> bool:
        """True when every coefficient and r² is a finite number."""
        values = np.asarray((*self.coefficients, self.r2), dtype=float)
        return bool(np.all(np.isfinite(values)))

    def predict(self, x: float) -> Point:
        """Predict y at a new x, rounded like the fitted predictions."""
        y = evaluate_model(self.kind, self.coefficients, x)[0]
        return Point(
            x=float(round_to_precision(x, self.precision)),
            y=float(round_to_precision(y, self.precision)),
        )

    def summary(self) -> dict:
        """Return summary dictionary of the fit."""
        return {
            "kind": self.kind.value,
            "coefficients": list(self.coefficients),
            "equation": self.equation,
            "r2": self.r2,
            "precision": self.precision,
            "points": len(self.points),
            "observed_points": self.observed_count,
        }
