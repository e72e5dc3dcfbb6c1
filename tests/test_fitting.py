"""Tests for the curve fitting estimators."""

import logging
import math

import numpy as np
import pytest
from scipy.stats import linregress

from pycurvefit.core.fitting import (
    CurveFitter,
    exponential,
    fit,
    linear,
    logarithmic,
    polynomial,
    power,
)
from pycurvefit.core.models import FitOptions, Point, RegressionType


def _points(xs, func):
    return [Point(x=float(x), y=float(func(x))) for x in xs]


class TestLinear:
    """Tests for the linear estimator."""

    def test_perfect_fit(self):
        points = _points(range(5), lambda x: 2 * x + 1)

        result = linear(points, FitOptions())

        assert result.kind is RegressionType.LINEAR
        assert result.coefficients == (2.0, 1.0)
        assert result.equation == "y = 2x + 1"
        assert result.r2 == 1.0

    def test_zero_intercept_omitted_from_equation(self):
        points = _points(range(4), lambda x: 2 * x)

        result = linear(points)

        assert result.coefficients == (2.0, 0.0)
        assert result.equation == "y = 2x"

    def test_matches_scipy_linregress(self):
        x = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        y = np.array([2.1, 3.9, 6.2, 7.8, 10.1, 12.2])
        points = [Point(x=a, y=b) for a, b in zip(x, y)]

        result = linear(points, FitOptions(precision=10))
        reference = linregress(x, y)

        assert result.coefficients[0] == pytest.approx(reference.slope, abs=1e-8)
        assert result.coefficients[1] == pytest.approx(reference.intercept, abs=1e-8)
        assert result.r2 == pytest.approx(reference.rvalue ** 2, abs=1e-8)

    def test_identical_x_forces_zero_gradient(self):
        points = [Point(2.0, 1.0), Point(2.0, 3.0)]

        result = linear(points)

        assert result.coefficients == (0.0, 2.0)
        assert result.equation == "y = 0x + 2"
        assert result.r2 == 0.0

    def test_precision_rounds_half_away_from_zero(self):
        points = _points(range(4), lambda x: 0.5 * x + 0.25)

        result = linear(points, FitOptions(precision=1))

        assert result.coefficients == (0.5, 0.3)
        assert result.equation == "y = 0.5x + 0.3"

    def test_large_intercept_not_shifted_by_rounding(self):
        points = [Point(0.0, 4503599627370497.0), Point(2.0, 4503599627370499.0)]

        result = linear(points, FitOptions(precision=0))

        assert result.coefficients == (1.0, 4503599627370497.0)

    def test_small_gradient_equation_is_positional(self):
        points = _points(range(4), lambda x: 0.00001 * x)

        result = linear(points, FitOptions(precision=5))

        assert result.equation == "y = 0.00001x"

    def test_predictions_rounded_but_points_passed_through(self):
        points = [Point(1.23456, 1.0), Point(2.34567, 2.0), Point(3.45678, 3.0)]

        result = linear(points, FitOptions(precision=2))

        assert result.points[0].x == 1.23456
        assert result.predicted[0].x == 1.23
        assert result.predicted[2].x == 3.46


class TestExponential:
    """Tests for the exponential estimator."""

    def test_perfect_fit(self):
        points = _points(range(5), lambda x: 2 * math.exp(0.5 * x))

        result = exponential(points)

        assert result.coefficients == (2.0, 0.5)
        assert result.r2 == 1.0

    def test_equation_format(self):
        points = _points(range(5), lambda x: 2 * math.exp(0.5 * x))

        result = exponential(points)

        assert result.equation == "y = 2e^(0.5x)"

    def test_non_positive_y_propagates_nan(self):
        points = [Point(0.0, -1.0), Point(1.0, 2.0), Point(2.0, 3.0)]

        result = exponential(points)

        assert all(math.isnan(c) for c in result.coefficients)
        assert math.isnan(result.r2)
        assert len(result.predicted) == 3


class TestLogarithmic:
    """Tests for the logarithmic estimator."""

    def test_perfect_fit(self):
        points = _points(range(1, 6), lambda x: 1 + 2 * math.log(x))

        result = logarithmic(points)

        assert result.coefficients == (1.0, 2.0)
        assert result.equation == "y = 1 + 2 ln(x)"
        assert result.r2 == 1.0

    def test_non_positive_x_propagates_nan(self):
        points = [Point(0.0, 1.0), Point(1.0, 2.0), Point(2.0, 3.0)]

        result = logarithmic(points)

        assert not all(math.isfinite(c) for c in result.coefficients)
        assert math.isnan(result.r2)

    def test_absent_y_not_counted(self):
        points = _points(range(1, 5), lambda x: 1 + 2 * math.log(x)) + [Point(5.0, None)]

        result = logarithmic(points)

        assert result.coefficients == (1.0, 2.0)
        assert result.predicted[4].y == pytest.approx(1 + 2 * math.log(5), abs=1e-3)


class TestPower:
    """Tests for the power estimator."""

    def test_perfect_fit(self):
        points = _points(range(1, 6), lambda x: 3 * x ** 2)

        result = power(points)

        assert result.coefficients == (3.0, 2.0)
        assert result.equation == "y = 3x^2"
        assert result.r2 == 1.0

    def test_fractional_exponent(self):
        points = _points([1, 4, 9, 16], lambda x: 0.5 * math.sqrt(x))

        result = power(points)

        assert result.coefficients == (0.5, 0.5)
        assert result.equation == "y = 0.5x^0.5"

    def test_absent_y_not_counted(self):
        points = [Point(0.5, None)] + _points(range(1, 5), lambda x: 3 * x ** 2)

        result = power(points)

        assert result.coefficients == (3.0, 2.0)
        assert result.predicted[0] == Point(0.5, 0.75)


class TestPolynomial:
    """Tests for the polynomial estimator."""

    def test_order_one_matches_linear(self):
        points = [Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 2.0)]

        result = polynomial(points, FitOptions(order=1, precision=3))

        assert result.coefficients == (1.0, 0.0)
        assert result.coefficients == linear(points).coefficients
        assert result.r2 == 1.0

    def test_quadratic_perfect_fit(self):
        points = _points(range(5), lambda x: x ** 2 - 2 * x + 1)

        result = polynomial(points)

        # Highest power first
        assert result.coefficients == (1.0, -2.0, 1.0)
        assert result.equation == "y = 1x^2 + -2x + 1"
        assert result.r2 == 1.0

    def test_equation_lists_highest_power_first(self):
        points = _points(range(6), lambda x: 0.5 * x ** 3 + 2 * x + 3)

        result = polynomial(points, FitOptions(order=3))

        assert result.coefficients == (0.5, 0.0, 2.0, 3.0)
        assert result.equation == "y = 0.5x^3 + 0x^2 + 2x + 3"

    def test_order_zero_is_mean(self):
        points = [Point(0.0, 1.0), Point(1.0, 2.0), Point(2.0, 3.0)]

        result = polynomial(points, FitOptions(order=0))

        assert result.coefficients == (2.0,)
        assert result.equation == "y = 2"

    def test_matches_numpy_polyfit(self):
        x = np.arange(10, dtype=float)
        y = np.array([1.2, 0.8, 2.9, 7.1, 15.2, 27.8, 45.1, 68.9, 99.2, 137.5])
        points = [Point(x=a, y=b) for a, b in zip(x, y)]

        result = polynomial(points, FitOptions(order=3, precision=8))
        reference = np.polyfit(x, y, 3)

        assert list(result.coefficients) == pytest.approx(list(reference), abs=1e-4)


class TestAbsentObservations:
    """Points without y are predicted but excluded from fitting and r²."""

    def test_predicted_at_same_index(self):
        points = [Point(0.0, 1.0), Point(1.0, 3.0), Point(2.0, None), Point(3.0, 7.0)]

        result = linear(points)

        assert len(result.predicted) == len(points)
        assert result.predicted[2] == Point(2.0, 5.0)
        assert result.points[2].y is None

    def test_excluded_from_estimation_and_r2(self):
        observed = [Point(0.0, 1.0), Point(1.0, 2.5), Point(3.0, 7.0), Point(4.0, 8.5)]
        with_gaps = observed[:2] + [Point(2.0, None)] + observed[2:] + [Point(10.0, None)]

        for estimator in (linear, exponential, logarithmic, power, polynomial):
            if estimator in (logarithmic, power):
                base = [Point(p.x + 1, p.y) for p in observed]
                gappy = [Point(p.x + 1, p.y) for p in with_gaps]
            else:
                base, gappy = observed, with_gaps

            expected = estimator(base)
            result = estimator(gappy)

            assert result.coefficients == expected.coefficients
            assert result.r2 == expected.r2
            assert len(result.predicted) == len(gappy)


class TestDegenerateInput:
    """Degenerate inputs produce NaN instead of raising."""

    def test_empty_point_set(self):
        for estimator in (linear, exponential, logarithmic, power, polynomial):
            result = estimator([])

            assert result.predicted == ()
            assert math.isnan(result.r2)

    def test_single_observation(self):
        result = linear([Point(1.0, 2.0)])

        assert result.coefficients == (0.0, 2.0)
        assert math.isnan(result.r2)

    def test_all_absent(self):
        points = [Point(1.0, None), Point(2.0, None)]

        result = linear(points)

        assert math.isnan(result.coefficients[1])
        assert len(result.predicted) == 2
        assert math.isnan(result.r2)


class TestFitDispatch:
    """Tests for fit() and CurveFitter."""

    def test_fit_by_string(self):
        points = _points(range(1, 6), lambda x: 3 * x ** 2)

        result = fit(points, "Power")

        assert result.kind is RegressionType.POWER
        assert result.coefficients == (3.0, 2.0)

    def test_fit_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown regression type"):
            fit([Point(0.0, 1.0)], "sigmoid")

    def test_default_options(self):
        points = _points(range(5), lambda x: x / 3)

        result = fit(points, RegressionType.LINEAR)

        assert result.precision == 3
        # Intercept is derived from the already rounded gradient
        assert result.coefficients == (0.333, 0.001)

    def test_fitter_uses_options(self):
        points = _points(range(6), lambda x: x ** 3)
        fitter = CurveFitter(FitOptions(order=3, precision=2))

        result = fitter.fit(points, "polynomial")

        assert len(result.coefficients) == 4
        assert result.precision == 2

    def test_fit_all(self):
        points = _points(range(1, 6), lambda x: 2 * x + 1)

        results = CurveFitter().fit_all(points)

        assert list(results) == list(RegressionType)
        assert results[RegressionType.LINEAR].r2 == 1.0

    def test_fit_all_subset(self):
        points = _points(range(1, 6), lambda x: 2 * x + 1)

        results = CurveFitter().fit_all(points, ["power", "linear"])

        assert list(results) == [RegressionType.POWER, RegressionType.LINEAR]

    def test_under_determined_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pycurvefit.core.fitting"):
            result = CurveFitter().fit([Point(1.0, 2.0), Point(2.0, None)], "linear")

        assert "under-determined" in caplog.text
        assert math.isnan(result.r2)

    def test_fits_are_independent(self):
        points = _points(range(5), lambda x: 2 * x + 1)

        first = linear(points)
        second = linear(points)

        assert first == second
        assert first is not second
