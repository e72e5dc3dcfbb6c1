"""Plotly visualizations of curve fits."""

from .plots import FitPlotter

__all__ = ["FitPlotter"]
