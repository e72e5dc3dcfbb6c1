"""Loading point sets from files and arrays."""

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from ..core.models import Point

logger = logging.getLogger(__name__)


def load_file(filepath: Path | str) -> pd.DataFrame:
    """Load CSV or Excel file into DataFrame.

    Args:
        filepath: Path to input file

    Returns:
        pandas DataFrame

    Raises:
        ValueError: If file format not supported
    """
    filepath = Path(filepath)

    if filepath.suffix.lower() in ('.csv', '.txt'):
        return pd.read_csv(filepath)
    elif filepath.suffix.lower() in ('.xlsx', '.xls'):
        return pd.read_excel(filepath)
    else:
        raise ValueError(f"Unsupported file format: {filepath.suffix}")


def _find_column(df: pd.DataFrame, name: str) -> str | None:
    """Find a column by name, ignoring case and surrounding whitespace."""
    cols_lower = {str(c).lower().strip(): c for c in df.columns}
    return cols_lower.get(name.lower().strip())


def points_from_frame(
    df: pd.DataFrame,
    x_column: str = "x",
    y_column: str = "y",
) -> list[Point]:
    """Convert a DataFrame into Points.

    Blank or NaN cells in the y column become points without an
    observation. A missing y column means no point is observed.

    Args:
        df: DataFrame with x (and usually y) columns
        x_column: Name of the x column (case-insensitive)
        y_column: Name of the y column (case-insensitive)

    Returns:
        List of Points in row order

    Raises:
        ValueError: If the x column is missing or holds non-numeric values
    """
    x_col = _find_column(df, x_column)
    if x_col is None:
        raise ValueError(
            f"No '{x_column}' column found. Columns found: {list(df.columns[:10])}"
        )

    y_col = _find_column(df, y_column)
    if y_col is None:
        logger.warning(f"No '{y_column}' column found; every point is unobserved")

    x_values = pd.to_numeric(df[x_col], errors="raise").to_numpy(dtype=float)
    if y_col is not None:
        y_values = pd.to_numeric(df[y_col], errors="coerce").to_numpy(dtype=float)
    else:
        y_values = np.full(len(df), np.nan)

    return points_from_arrays(x_values, y_values)


def points_from_arrays(
    xs: Sequence[float] | np.ndarray,
    ys: Sequence[float | None] | np.ndarray | None = None,
) -> list[Point]:
    """Build Points from parallel x and y sequences.

    ``None`` or NaN in ``ys`` marks a point without an observation.

    Raises:
        ValueError: If xs and ys differ in length
    """
    if ys is None:
        ys = [None] * len(xs)
    if len(xs) != len(ys):
        raise ValueError(f"x and y lengths differ: {len(xs)} != {len(ys)}")

    points = []
    for x, y in zip(xs, ys):
        if y is None or (isinstance(y, (float, np.floating)) and np.isnan(y)):
            points.append(Point(x=float(x), y=None))
        else:
            points.append(Point(x=float(x), y=float(y)))
    return points


def load_points(
    filepath: Path | str,
    x_column: str = "x",
    y_column: str = "y",
) -> list[Point]:
    """Load a point set from a CSV or Excel file.

    Args:
        filepath: Path to CSV or Excel file
        x_column: Name of the x column
        y_column: Name of the y column

    Returns:
        List of Points

    Raises:
        ValueError: If file format not supported or the x column is missing
    """
    df = load_file(filepath)
    points = points_from_frame(df, x_column=x_column, y_column=y_column)
    logger.debug(f"Loaded {len(points)} points from {filepath}")
    return points
