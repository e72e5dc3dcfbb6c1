"""CLI commands for PyCurveFit."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..config import PyCurveFitConfig, generate_default_config

app = typer.Typer(
    name="pycurvefit",
    help="Least-squares curve fitting for 2-D point sets",
    add_completion=False,
)


def _load_config(config: Path | None) -> PyCurveFitConfig:
    """Load config file or use defaults."""
    if config:
        typer.echo(f"Loading config from {config}")
        try:
            return PyCurveFitConfig.from_yaml(config)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    return PyCurveFitConfig()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )


def _load_points(input_file: Path, pc_config: PyCurveFitConfig):
    from ..data import load_points

    try:
        return load_points(
            input_file,
            x_column=pc_config.output.x_column,
            y_column=pc_config.output.y_column,
        )
    except ValueError as e:
        typer.echo(f"Error loading {input_file}: {e}", err=True)
        raise typer.Exit(1)


def _echo_issues(result) -> None:
    for issue in result.issues:
        typer.echo(f"  {issue}")
        typer.echo(f"    Guidance: {issue.guidance}")


@app.command()
def fit(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input CSV/Excel file with x and y columns",
            exists=True,
        )
    ],
    kind: Annotated[
        str,
        typer.Option(
            "-k", "--kind",
            help="Curve family: linear, exponential, logarithmic, power or polynomial",
        )
    ] = "linear",
    order: Annotated[
        Optional[int],
        typer.Option(
            "--order",
            help="Polynomial degree (overrides config)",
        )
    ] = None,
    precision: Annotated[
        Optional[int],
        typer.Option(
            "--precision",
            help="Decimal places for outputs (overrides config)",
        )
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "-c", "--config",
            help="YAML config file (use 'pycurvefit init' to generate template)",
            exists=True,
        )
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "-o", "--output",
            help="Output file for the exported fit",
        )
    ] = None,
    export_format: Annotated[
        Optional[str],
        typer.Option(
            "--format",
            help="Export format: json or csv (overrides config)",
        )
    ] = None,
    plot: Annotated[
        bool,
        typer.Option(
            "--plot",
            help="Write an HTML plot next to the output file",
        )
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "-v", "--verbose",
            help="Enable debug logging",
        )
    ] = False,
) -> None:
    """Fit one curve family to a point set.

    Reads x/y columns from a CSV or Excel file (blank y cells are predicted
    but not fitted), prints the equation and r², and reports any input or
    fit quality issues.

    Example:
        pycurvefit fit data.csv --kind polynomial --order 3 -o fit.json
    """
    from ..core.fitting import CurveFitter
    from ..core.models import FitOptions, RegressionType
    from ..validation import FittingValidator, InputValidator

    _configure_logging(verbose)
    pc_config = _load_config(config)

    # CLI overrides
    if order is not None:
        pc_config.fitting.order = order
    if precision is not None:
        pc_config.fitting.precision = precision
    if export_format:
        if export_format not in ("json", "csv"):
            typer.echo(f"Error: Invalid format '{export_format}'. Must be json or csv.", err=True)
            raise typer.Exit(1)
        pc_config.output.format = export_format  # type: ignore
    if plot:
        pc_config.output.plots = True

    try:
        pc_config.validate()
        regression_type = RegressionType.parse(kind)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    points = _load_points(input_file, pc_config)
    typer.echo(f"Fitting {regression_type.value} model to {len(points)} points from {input_file}")

    fitting_validator = FittingValidator(
        min_points=pc_config.validation.min_points,
        min_r_squared=pc_config.validation.min_r_squared,
    )
    validation = InputValidator().validate(points, kinds=[regression_type], source=input_file.name)
    validation = validation.merge(
        fitting_validator.validate_pre_fit(points, regression_type, order=pc_config.fitting.order)
    )

    fitter = CurveFitter(FitOptions.from_config(pc_config))
    result = fitter.fit(points, regression_type)
    validation = validation.merge(fitting_validator.validate_post_fit(result))
    if pc_config.validation.strict_mode:
        validation = validation.promote_warnings()

    typer.echo(f"  Equation: {result.equation}")
    typer.echo(f"  r²: {result.r2}")
    typer.echo(f"  Coefficients: {list(result.coefficients)}")

    if validation.issues:
        typer.echo("")
        typer.echo(f"Issues ({validation.error_count} errors, {validation.warning_count} warnings):")
        _echo_issues(validation)

    if output:
        _export([result], output, pc_config, {regression_type.value: validation})

    if validation.has_errors:
        raise typer.Exit(1)


def _export(results, output: Path, pc_config: PyCurveFitConfig, validation_results=None) -> None:
    """Write fits in the configured format, plus an optional HTML plot."""
    from ..export import CsvExporter, JsonExporter

    if pc_config.output.format == "csv":
        path = CsvExporter().save(results, output)
    else:
        path = JsonExporter(pc_config).save(results, output, validation_results)
    typer.echo(f"\nExported to: {path}")

    if pc_config.output.plots:
        from ..visualization import FitPlotter

        plotter = FitPlotter()
        plot_path = plotter.save(plotter.plot_fits(results), output.with_suffix(".html"))
        typer.echo(f"Plot written to: {plot_path}")


@app.command()
def compare(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input CSV/Excel file with x and y columns",
            exists=True,
        )
    ],
    kinds: Annotated[
        Optional[list[str]],
        typer.Option(
            "-k", "--kind",
            help="Curve families to compare (default: config, all five)",
        )
    ] = None,
    order: Annotated[
        Optional[int],
        typer.Option(
            "--order",
            help="Polynomial degree (overrides config)",
        )
    ] = None,
    precision: Annotated[
        Optional[int],
        typer.Option(
            "--precision",
            help="Decimal places for outputs (overrides config)",
        )
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "-c", "--config",
            help="YAML config file",
            exists=True,
        )
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "-o", "--output",
            help="Output file for all exported fits",
        )
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "-v", "--verbose",
            help="Enable debug logging",
        )
    ] = False,
) -> None:
    """Fit several curve families and rank them by r².

    Example:
        pycurvefit compare data.csv -k linear -k power
    """
    from ..core.fitting import CurveFitter
    from ..core.models import FitOptions
    from ..core.selection import evaluate_fit_quality, rank_fits

    _configure_logging(verbose)
    pc_config = _load_config(config)

    if order is not None:
        pc_config.fitting.order = order
    if precision is not None:
        pc_config.fitting.precision = precision
    if kinds:
        pc_config.fitting.kinds = [k.lower() for k in kinds]

    try:
        pc_config.validate()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    points = _load_points(input_file, pc_config)
    typer.echo(f"Comparing {len(pc_config.fitting.kinds)} models on {len(points)} points from {input_file}")

    fitter = CurveFitter(FitOptions.from_config(pc_config))
    results = fitter.fit_all(points, pc_config.fitting.kinds)
    ranked = rank_fits(list(results.values()))

    typer.echo("")
    typer.echo(f"  {'Rank':<5} {'Kind':<12} {'r²':>8} {'Grade':>6}  Equation")
    for rank, result in enumerate(ranked, start=1):
        grade = evaluate_fit_quality(
            result, acceptable_r_squared=pc_config.validation.acceptable_r_squared
        )["quality_grade"]
        typer.echo(
            f"  {rank:<5} {result.kind.value:<12} {result.r2!s:>8} {grade:>6}  {result.equation}"
        )

    typer.echo("")
    typer.echo(f"Best fit: {ranked[0].kind.value}")

    if output:
        _export(ranked, output, pc_config)


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input CSV/Excel file with x and y columns",
            exists=True,
        )
    ],
    kinds: Annotated[
        Optional[list[str]],
        typer.Option(
            "-k", "--kind",
            help="Curve families to check the data against (default: config)",
        )
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "-c", "--config",
            help="YAML config file with validation settings",
            exists=True,
        )
    ] = None,
) -> None:
    """Validate a point set without fitting.

    Exit codes:
        0: No errors found (warnings may be present)
        1: Validation errors found

    Example:
        pycurvefit validate data.csv -k power
    """
    from ..validation import FittingValidator, InputValidator

    pc_config = _load_config(config)
    selected = [k.lower() for k in kinds] if kinds else pc_config.fitting.kinds

    points = _load_points(input_file, pc_config)
    typer.echo(f"Loaded {len(points)} points from {input_file}")

    try:
        result = InputValidator().validate(points, kinds=selected, source=input_file.name)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    fitting_validator = FittingValidator(min_points=pc_config.validation.min_points)
    for kind in selected:
        result = result.merge(
            fitting_validator.validate_pre_fit(points, kind, order=pc_config.fitting.order)
        )
    if pc_config.validation.strict_mode:
        result = result.promote_warnings()

    typer.echo("")
    typer.echo("Validation Summary:")
    typer.echo(f"  Observed points: {sum(1 for p in points if p.y is not None)}")
    typer.echo(f"  Total errors: {result.error_count}")
    typer.echo(f"  Total warnings: {result.warning_count}")

    if result.issues:
        typer.echo("")
        _echo_issues(result)

    if result.has_errors:
        raise typer.Exit(1)


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Option(
            "-o", "--output",
            help="Output file path",
        )
    ] = Path("pycurvefit.yaml"),
) -> None:
    """Generate a default configuration file.

    Creates a YAML config file with all available settings and their defaults.

    Example:
        pycurvefit init -o my_config.yaml
    """
    if output.exists():
        overwrite = typer.confirm(f"{output} already exists. Overwrite?")
        if not overwrite:
            raise typer.Exit(0)

    generate_default_config(output)
    typer.echo(f"Config file created: {output}")

    typer.echo("\nEdit this file to customize settings, then use:")
    typer.echo(f"  pycurvefit fit data.csv --config {output}")
