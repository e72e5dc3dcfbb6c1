"""Export fit results in JSON format."""

from datetime import datetime
import json
import math
from pathlib import Path
from typing import Any

from ..config import PyCurveFitConfig
from ..core.models import FitResult
from ..core.selection import evaluate_fit_quality
from ..validation import ValidationResult


def _json_number(value: float | None) -> float | None:
    """Map NaN/Inf to None; JSON has no representation for them."""
    if value is None or not math.isfinite(value):
        return None
    return value


class JsonExporter:
    """Export curve fits in JSON format.

    Produces a structured JSON document containing configuration, the fitted
    model, observed vs predicted points, and validation results.
    """

    def __init__(self, config: PyCurveFitConfig | None = None):
        """Initialize exporter.

        Args:
            config: PyCurveFit configuration (included in export)
        """
        self.config = config or PyCurveFitConfig()

    def _export_validation(
        self,
        validation_result: ValidationResult | None,
    ) -> dict[str, Any]:
        """Export validation results.

        Args:
            validation_result: Validation result for the fit

        Returns:
            Validation data dict
        """
        if validation_result is None:
            return {
                "errors": 0,
                "warnings": 0,
                "issues": [],
            }

        issues = []
        for issue in validation_result.issues:
            issues.append({
                "code": issue.code,
                "severity": issue.severity.name.lower(),
                "message": issue.message,
                "guidance": issue.guidance,
            })

        return {
            "errors": validation_result.error_count,
            "warnings": validation_result.warning_count,
            "issues": issues,
        }

    def export_fit(
        self,
        result: FitResult,
        validation_result: ValidationResult | None = None,
    ) -> dict[str, Any]:
        """Export a single fit to a JSON-compatible dict.

        Args:
            result: Fit to export
            validation_result: Optional validation result for the fit

        Returns:
            Fit data dict
        """
        quality = evaluate_fit_quality(
            result,
            acceptable_r_squared=self.config.validation.acceptable_r_squared,
        )

        return {
            "kind": result.kind.value,
            "equation": result.equation,
            "coefficients": [_json_number(c) for c in result.coefficients],
            "r2": _json_number(result.r2),
            "precision": result.precision,
            "quality_grade": quality["quality_grade"],
            "points": [
                {"x": _json_number(p.x), "y": _json_number(p.y)} for p in result.points
            ],
            "predicted": [
                {"x": _json_number(p.x), "y": _json_number(p.y)} for p in result.predicted
            ],
            "validation": self._export_validation(validation_result),
        }

    def export_fits(
        self,
        results: list[FitResult],
        validation_results: dict[str, ValidationResult] | None = None,
    ) -> dict[str, Any]:
        """Export several fits of the same data to a JSON-compatible dict.

        Args:
            results: Fits to export
            validation_results: Dict mapping kind value to ValidationResult

        Returns:
            Complete export data dict
        """
        validation_results = validation_results or {}

        return {
            "generated": datetime.now().isoformat(timespec="seconds"),
            "config": self.config.to_dict(),
            "fit_count": len(results),
            "fits": [
                self.export_fit(r, validation_results.get(r.kind.value)) for r in results
            ],
        }

    def save(
        self,
        results: list[FitResult],
        output_path: Path | str,
        validation_results: dict[str, ValidationResult] | None = None,
    ) -> Path:
        """Export fits and save to JSON file.

        Args:
            results: Fits to export
            output_path: Output file path
            validation_results: Dict mapping kind value to ValidationResult

        Returns:
            Path to saved file
        """
        output_path = Path(output_path)
        data = self.export_fits(results, validation_results)

        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

        return output_path
