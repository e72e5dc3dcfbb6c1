"""Export observed vs predicted values as CSV."""

from pathlib import Path

import pandas as pd

from ..core.models import FitResult


class CsvExporter:
    """Export one row per input point with its prediction.

    Columns: x, y (blank when unobserved), then one ``<kind>_y`` column per
    exported fit holding the rounded prediction at that x.
    """

    def to_frame(self, results: list[FitResult]) -> pd.DataFrame:
        """Build the export table.

        Args:
            results: Fits of the same point set

        Returns:
            DataFrame with x, y and one prediction column per fit

        Raises:
            ValueError: If no results are given or they cover different points
        """
        if not results:
            raise ValueError("No fit results to export")

        points = results[0].points
        for result in results[1:]:
            if result.points != points:
                raise ValueError("All exported fits must share the same points")

        df = pd.DataFrame({
            "x": [p.x for p in points],
            "y": [p.y for p in points],
        })
        for result in results:
            df[f"{result.kind.value}_y"] = [p.y for p in result.predicted]
        return df

    def save(self, results: list[FitResult], output_path: Path | str) -> Path:
        """Export fits and save to CSV file.

        Args:
            results: Fits to export
            output_path: Output file path

        Returns:
            Path to saved file
        """
        output_path = Path(output_path)
        self.to_frame(results).to_csv(output_path, index=False)
        return output_path
