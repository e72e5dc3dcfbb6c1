"""Numerical helpers for the curve fitting estimators.

Provides the rounding policy applied to every numeric output, the number
formatting used in equation strings, and the Gaussian elimination solver
behind polynomial fitting.

None of these functions raise on degenerate input. NaN and Infinity
propagate through the arithmetic exactly as IEEE 754 dictates.
"""

from typing import Sequence

import numpy as np


def round_to_precision(value: np.ndarray | float, precision: int) -> np.ndarray | float:
    """Round a number to a number of decimal places.

    Halves are rounded away from zero. ``precision`` may be zero or negative
    (negative values round to tens, hundreds, ...).

    Args:
        value: Scalar or array to round
        precision: Decimal places; < 0 means powers of ten

    Returns:
        Rounded value (float for scalar input, ndarray for array input)

    Example:
        >>> round_to_precision(1.2345, 2)
        1.23
        >>> round_to_precision(12345, -2)
        12300.0
    """
    factor = 10.0 ** precision
    with np.errstate(all="ignore"):
        scaled = np.asarray(value, dtype=float) * factor
        magnitude = np.abs(scaled)
        # Decide on the exact fractional part
        whole = np.floor(magnitude)
        whole = whole + (magnitude - whole >= 0.5)
        rounded = np.sign(scaled) * whole / factor
        # Drop negative zero
        rounded = rounded + 0.0
    if np.ndim(rounded) == 0:
        return float(rounded)
    return rounded


def format_number(value: float) -> str:
    """Render a number for an equation string.

    Integral values print without a decimal point (``2`` rather than
    ``2.0``), non-finite values print as ``NaN`` / ``Infinity``. Fractions
    stay in positional notation down to 1e-6 (``0.00001``); smaller
    magnitudes use exponent form without zero padding (``1e-7``).
    """
    value = float(value)
    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if abs(value) >= 1e21:
        return repr(value)
    if abs(value) < 1e-6:
        mantissa, exponent = repr(value).split("e")
        return f"{mantissa}e{int(exponent)}"
    return np.format_float_positional(value, trim="-")


def gaussian_elimination(matrix: Sequence[Sequence[float]]) -> list[float]:
    """Solve A * x = b by Gaussian elimination with row pivoting.

    The augmented matrix is given column by column: ``matrix[k][i]`` is the
    entry in row ``i`` and column ``k`` of A, and the last element of
    ``matrix`` is the right-hand side b. For an n-unknown system
    ``len(matrix) == n + 1`` and each column has n entries.

    Singular or near-singular systems are not detected; a zero pivot yields
    Inf/NaN in the solution.

    Args:
        matrix: Columns of A followed by b

    Returns:
        Solution vector x (length n)

    Example:
        >>> # x + y + z = 6, 2y + 5z = -4, 2x + 5y - z = 27
        >>> gaussian_elimination([[1, 0, 2], [1, 2, 5], [1, 5, -1], [6, -4, 27]])
        [5.0, 3.0, -2.0]
    """
    # Work on a copy; the caller's matrix is left untouched
    m = np.array(matrix, dtype=float)
    n = m.shape[0] - 1
    coefficients = [0.0] * n

    with np.errstate(all="ignore"):
        for i in range(n):
            maxrow = i
            for j in range(i + 1, n):
                if abs(m[i][j]) > abs(m[i][maxrow]):
                    maxrow = j

            for k in range(i, n + 1):
                m[k][i], m[k][maxrow] = m[k][maxrow], m[k][i]

            # k runs downwards so m[i][j] is read before it is reduced
            for j in range(i + 1, n):
                for k in range(n, i - 1, -1):
                    m[k][j] -= (m[k][i] * m[i][j]) / m[i][i]

        for j in range(n - 1, -1, -1):
            total = 0.0
            for k in range(j + 1, n):
                total += m[k][j] * coefficients[k]
            coefficients[j] = float((m[n][j] - total) / m[j][j])

    return coefficients
