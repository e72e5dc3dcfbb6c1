"""Interactive Plotly visualizations for curve fits."""

from pathlib import Path
from typing import Literal

import numpy as np
import plotly.graph_objects as go

from ..core.models import FitResult, RegressionType, evaluate_model


class FitPlotter:
    """Plot observed points against one or more fitted curves."""

    # Color palette for multiple fits
    COLORS = [
        "#ff7f0e", "#2ca02c", "#d62728", "#9467bd", "#8c564b",
        "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
    ]

    def __init__(
        self,
        samples: int = 200,
        width: int = 1000,
        height: int = 600,
    ):
        """Initialize plotter.

        Args:
            samples: Number of x values used to draw each fitted curve
            width: Plot width in pixels
            height: Plot height in pixels
        """
        self.samples = samples
        self.width = width
        self.height = height

    def _curve_x(self, result: FitResult) -> np.ndarray:
        """Dense x grid spanning the input points, inside the model's domain."""
        xs = np.array([p.x for p in result.points], dtype=float)
        xs = xs[np.isfinite(xs)]
        if result.kind in (RegressionType.LOGARITHMIC, RegressionType.POWER):
            xs = xs[xs > 0]
        if len(xs) == 0:
            return xs
        return np.linspace(xs.min(), xs.max(), self.samples)

    def plot_fits(self, results: list[FitResult], title: str | None = None) -> go.Figure:
        """Create a plot of the observed points with every fitted curve.

        Args:
            results: Fits of the same point set
            title: Plot title (default: equation of the first fit)

        Returns:
            Plotly Figure object
        """
        fig = go.Figure()
        if not results:
            return fig

        observed = [p for p in results[0].points if p.y is not None]
        fig.add_trace(go.Scatter(
            x=[p.x for p in observed],
            y=[p.y for p in observed],
            mode='markers',
            name='Observed',
            marker=dict(size=8, color='#1f77b4', symbol='circle'),
            hovertemplate="x: %{x}<br>y: %{y}<extra></extra>",
        ))

        for i, result in enumerate(results):
            x_curve = self._curve_x(result)
            y_curve = evaluate_model(result.kind, result.coefficients, x_curve)
            fig.add_trace(go.Scatter(
                x=x_curve,
                y=y_curve,
                mode='lines',
                name=f"{result.kind.value} (r²={result.r2})",
                line=dict(color=self.COLORS[i % len(self.COLORS)], width=2),
                hovertemplate=(
                    f"<b>{result.equation}</b><br>"
                    "x: %{x:.3f}<br>"
                    "y: %{y:.3f}<br>"
                    "<extra></extra>"
                ),
            ))

        fig.update_layout(
            title=dict(text=title or results[0].equation, font=dict(size=16)),
            xaxis_title="x",
            yaxis_title="y",
            width=self.width,
            height=self.height,
            legend=dict(yanchor="top", y=0.99, xanchor="left", x=0.01),
            hovermode='closest',
        )
        return fig

    def save(
        self,
        fig: go.Figure,
        output_path: Path | str,
        format: Literal["html", "png", "svg", "pdf"] = "html"
    ) -> Path:
        """Save figure to file.

        HTML needs only plotly; png, svg and pdf are rendered by kaleido
        (install the ``plots`` extra).

        Args:
            fig: Plotly Figure object
            output_path: Output file path
            format: Output format

        Returns:
            Path to saved file

        Raises:
            ValueError: If format is not html, png, svg or pdf
        """
        if format not in ("html", "png", "svg", "pdf"):
            raise ValueError(f"Unsupported plot format: {format}")
        output_path = Path(output_path)

        if format == "html":
            fig.write_html(output_path)
        else:
            fig.write_image(output_path, format=format)

        return output_path
