"""Least-squares curve fitting for five curve families.

Features:
- Closed-form estimators for linear, exponential, logarithmic and power fits
- Polynomial fits of any order through the normal equations
- Points without an observed y are predicted but never fitted

Every estimator follows the same steps: accumulate sums over the observed
points, derive and round the coefficients, predict every input x with the
rounded coefficients, then compute r² on the observed points.

Degenerate input (non-positive x for logarithmic/power fits, non-positive y
for exponential/power fits, fewer than two observations, singular normal
equations) is not rejected: the NaN or Infinity it produces is carried into
the coefficients, predictions and r². Use ``validation.InputValidator`` to
report such input before fitting.
"""

from dataclasses import dataclass
import logging
from typing import Callable, Sequence

import numpy as np

from .models import FitOptions, FitResult, Point, RegressionType, evaluate_model
from .numerics import format_number, gaussian_elimination, round_to_precision
from .selection import determination_coefficient

logger = logging.getLogger(__name__)


@dataclass
class _ObservedData:
    """Internal container for the observed (y present) subset of the input."""
    x: np.ndarray
    y: np.ndarray

    @property
    def n(self) -> int:
        return len(self.x)


def _observed(points: Sequence[Point]) -> _ObservedData:
    """Split out the points that carry an observed y."""
    kept = [p for p in points if p.y is not None]
    return _ObservedData(
        x=np.array([p.x for p in kept], dtype=float),
        y=np.array([p.y for p in kept], dtype=float),
    )


def _build_result(
    points: Sequence[Point],
    kind: RegressionType,
    coefficients: Sequence[float],
    equation: str,
    precision: int,
) -> FitResult:
    """Predict every input point, compute r² and assemble the FitResult."""
    points = tuple(points)
    xs = np.array([p.x for p in points], dtype=float)

    x_rounded = round_to_precision(xs, precision)
    y_rounded = round_to_precision(evaluate_model(kind, coefficients, xs), precision)
    predicted = tuple(
        Point(x=float(x), y=float(y)) for x, y in zip(x_rounded, y_rounded)
    )

    r2 = determination_coefficient(points, predicted)

    result = FitResult(
        points=points,
        predicted=predicted,
        kind=kind,
        coefficients=tuple(float(c) for c in coefficients),
        equation=equation,
        r2=round_to_precision(r2, precision),
        precision=precision,
    )
    logger.debug(f"{kind.value} fit: {equation} (r²={result.r2})")
    return result


def linear(points: Sequence[Point], options: FitOptions | None = None) -> FitResult:
    """Fit y = m*x + c by ordinary least squares.

    A zero denominator (all observed x identical) forces the gradient to 0,
    leaving the intercept at the mean of y.

    Returns:
        FitResult with coefficients [gradient, intercept]
    """
    options = options or FitOptions()
    precision = options.precision
    data = _observed(points)
    n = data.n

    with np.errstate(all="ignore"):
        sum_x = np.sum(data.x)
        sum_y = np.sum(data.y)
        sum_xx = np.sum(data.x * data.x)
        sum_xy = np.sum(data.x * data.y)

        run = (n * sum_xx) - (sum_x * sum_x)
        rise = (n * sum_xy) - (sum_x * sum_y)
        gradient = 0.0 if run == 0 else round_to_precision(rise / run, precision)
        intercept = round_to_precision((sum_y / n) - ((gradient * sum_x) / n), precision)

    if intercept == 0:
        equation = f"y = {format_number(gradient)}x"
    else:
        equation = f"y = {format_number(gradient)}x + {format_number(intercept)}"

    return _build_result(points, RegressionType.LINEAR, [gradient, intercept], equation, precision)


def exponential(points: Sequence[Point], options: FitOptions | None = None) -> FitResult:
    """Fit y = a * e^(b*x) by y-weighted least squares on ln(y).

    Returns:
        FitResult with coefficients [a, b]
    """
    options = options or FitOptions()
    precision = options.precision
    data = _observed(points)
    x, y = data.x, data.y

    with np.errstate(all="ignore"):
        log_y = np.log(y)
        sum_y = np.sum(y)
        sum_xxy = np.sum(x * x * y)
        sum_ylogy = np.sum(y * log_y)
        sum_xylogy = np.sum(x * y * log_y)
        sum_xy = np.sum(x * y)

        denominator = (sum_y * sum_xxy) - (sum_xy * sum_xy)
        a = np.exp(((sum_xxy * sum_ylogy) - (sum_xy * sum_xylogy)) / denominator)
        b = ((sum_y * sum_xylogy) - (sum_xy * sum_ylogy)) / denominator

    coeff_a = round_to_precision(a, precision)
    coeff_b = round_to_precision(b, precision)
    equation = f"y = {format_number(coeff_a)}e^({format_number(coeff_b)}x)"

    return _build_result(points, RegressionType.EXPONENTIAL, [coeff_a, coeff_b], equation, precision)


def logarithmic(points: Sequence[Point], options: FitOptions | None = None) -> FitResult:
    """Fit y = a + b * ln(x) by least squares on ln(x).

    Returns:
        FitResult with coefficients [a, b]
    """
    options = options or FitOptions()
    precision = options.precision
    data = _observed(points)
    n = data.n

    with np.errstate(all="ignore"):
        log_x = np.log(data.x)
        sum_logx = np.sum(log_x)
        sum_ylogx = np.sum(data.y * log_x)
        sum_y = np.sum(data.y)
        sum_logx2 = np.sum(log_x ** 2)

        b = ((n * sum_ylogx) - (sum_y * sum_logx)) / ((n * sum_logx2) - (sum_logx * sum_logx))
        coeff_b = round_to_precision(b, precision)
        coeff_a = round_to_precision((sum_y - (coeff_b * sum_logx)) / n, precision)

    equation = f"y = {format_number(coeff_a)} + {format_number(coeff_b)} ln(x)"

    return _build_result(points, RegressionType.LOGARITHMIC, [coeff_a, coeff_b], equation, precision)


def power(points: Sequence[Point], options: FitOptions | None = None) -> FitResult:
    """Fit y = a * x^b by least squares on ln(y) against ln(x).

    Returns:
        FitResult with coefficients [a, b]
    """
    options = options or FitOptions()
    precision = options.precision
    data = _observed(points)
    n = data.n

    with np.errstate(all="ignore"):
        log_x = np.log(data.x)
        log_y = np.log(data.y)
        sum_logx = np.sum(log_x)
        sum_logxlogy = np.sum(log_y * log_x)
        sum_logy = np.sum(log_y)
        sum_logx2 = np.sum(log_x ** 2)

        b = ((n * sum_logxlogy) - (sum_logx * sum_logy)) / ((n * sum_logx2) - (sum_logx ** 2))
        a = (sum_logy - (b * sum_logx)) / n
        coeff_a = round_to_precision(np.exp(a), precision)
        coeff_b = round_to_precision(b, precision)

    equation = f"y = {format_number(coeff_a)}x^{format_number(coeff_b)}"

    return _build_result(points, RegressionType.POWER, [coeff_a, coeff_b], equation, precision)


def polynomial(points: Sequence[Point], options: FitOptions | None = None) -> FitResult:
    """Fit y = c_k*x^k + ... + c_1*x + c_0 with k = options.order.

    Builds the (k+1) x (k+1) normal equations and solves them with
    ``gaussian_elimination``.

    Returns:
        FitResult with coefficients [c_k, ..., c_1, c_0] (highest power first)
    """
    options = options or FitOptions()
    precision = options.precision
    data = _observed(points)
    k = options.order + 1

    # Columns of the normal-equation matrix followed by the right-hand side.
    # The matrix is symmetric, so column i doubles as row i.
    columns = []
    rhs = []
    with np.errstate(all="ignore"):
        for i in range(k):
            rhs.append(np.sum(np.power(data.x, float(i)) * data.y))
            columns.append([np.sum(np.power(data.x, float(i + j))) for j in range(k)])
    columns.append(rhs)

    # Solver output is lowest power first
    ascending = [round_to_precision(c, precision) for c in gaussian_elimination(columns)]

    terms = []
    for exponent in range(len(ascending) - 1, -1, -1):
        coeff = format_number(ascending[exponent])
        if exponent > 1:
            terms.append(f"{coeff}x^{exponent}")
        elif exponent == 1:
            terms.append(f"{coeff}x")
        else:
            terms.append(coeff)
    equation = "y = " + " + ".join(terms)

    # Stored highest power first, so an order-1 fit reads [slope, intercept]
    # like the linear fit
    coefficients = list(reversed(ascending))

    return _build_result(points, RegressionType.POLYNOMIAL, coefficients, equation, precision)


FITTERS: dict[RegressionType, Callable[[Sequence[Point], FitOptions | None], FitResult]] = {
    RegressionType.LINEAR: linear,
    RegressionType.EXPONENTIAL: exponential,
    RegressionType.LOGARITHMIC: logarithmic,
    RegressionType.POWER: power,
    RegressionType.POLYNOMIAL: polynomial,
}


def fit(
    points: Sequence[Point],
    kind: str | RegressionType,
    options: FitOptions | None = None,
) -> FitResult:
    """Fit a point set with the estimator for ``kind``.

    Args:
        points: Input points (y may be None)
        kind: Curve family, as RegressionType or its string value
        options: Fit options, defaults to FitOptions()

    Returns:
        FitResult for the requested curve family

    Raises:
        ValueError: If kind is not a known curve family
    """
    return FITTERS[RegressionType.parse(kind)](points, options)


class CurveFitter:
    """Fits one or more curve families with a fixed set of options."""

    def __init__(self, options: FitOptions | None = None):
        """Initialize fitter with options.

        Args:
            options: Fit options, uses defaults if None
        """
        self.options = options or FitOptions()

    def _check_observations(self, points: Sequence[Point]) -> None:
        observed = sum(1 for p in points if p.y is not None)
        if observed < 2:
            logger.warning(
                f"Only {observed} observed point(s): every fit is under-determined "
                "and will contain NaN values"
            )

    def fit(self, points: Sequence[Point], kind: str | RegressionType) -> FitResult:
        """Fit a single curve family.

        Args:
            points: Input points
            kind: Curve family

        Returns:
            FitResult
        """
        self._check_observations(points)
        return fit(points, kind, self.options)

    def fit_all(
        self,
        points: Sequence[Point],
        kinds: Sequence[str | RegressionType] | None = None,
    ) -> dict[RegressionType, FitResult]:
        """Fit several curve families to the same points.

        Args:
            points: Input points
            kinds: Curve families to fit (default: all five)

        Returns:
            Dict of RegressionType -> FitResult, in the order requested
        """
        self._check_observations(points)
        selected = [RegressionType.parse(k) for k in kinds] if kinds else list(RegressionType)
        return {kind: fit(points, kind, self.options) for kind in selected}
