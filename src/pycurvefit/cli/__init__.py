"""Command line interface for PyCurveFit."""
