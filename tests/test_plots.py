"""Tests for the Plotly fit plotter."""

import numpy as np
import pytest

from pycurvefit.core.fitting import linear, logarithmic
from pycurvefit.core.models import Point
from pycurvefit.visualization import FitPlotter


def _points():
    return [Point(-1.0, 0.5), Point(1.0, 3.0), Point(2.0, None), Point(4.0, 9.0)]


class TestFitPlotter:
    """Tests for FitPlotter."""

    def test_traces(self):
        points = _points()

        fig = FitPlotter(samples=50).plot_fits([linear(points), logarithmic(points)])

        assert len(fig.data) == 3
        assert fig.data[0].name == "Observed"
        assert len(fig.data[0].x) == 3
        assert len(fig.data[1].x) == 50

    def test_log_curve_stays_in_domain(self):
        result = logarithmic(_points())

        x = FitPlotter()._curve_x(result)

        assert np.all(x > 0)

    def test_empty(self):
        fig = FitPlotter().plot_fits([])

        assert len(fig.data) == 0

    def test_save_html(self, tmp_path):
        plotter = FitPlotter()
        fig = plotter.plot_fits([linear(_points())])

        path = plotter.save(fig, tmp_path / "fit.html")

        assert path.exists()

    def test_save_unsupported_format(self, tmp_path):
        plotter = FitPlotter()
        fig = plotter.plot_fits([linear(_points())])

        with pytest.raises(ValueError, match="Unsupported plot format"):
            plotter.save(fig, tmp_path / "fit.gif", format="gif")

        assert not (tmp_path / "fit.gif").exists()
