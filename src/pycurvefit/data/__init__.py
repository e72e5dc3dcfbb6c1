"""Point set loading from CSV/Excel files and arrays."""

from .points import load_file, load_points, points_from_arrays, points_from_frame

__all__ = [
    "load_file",
    "load_points",
    "points_from_arrays",
    "points_from_frame",
]
