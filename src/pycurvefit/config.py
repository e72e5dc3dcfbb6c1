"""Configuration file support for PyCurveFit.

Supports YAML config files with fitting, validation and output settings.
CLI flags override config file values.
"""

from dataclasses import asdict, dataclass, field, fields as dataclass_fields
import logging
from pathlib import Path
from typing import ClassVar, Literal

import yaml

from .core.models import RegressionType

logger = logging.getLogger(__name__)


@dataclass
class FittingDefaults:
    """Fitting parameters applied to every fit.

    Attributes:
        order: Polynomial degree (default 2)
        precision: Decimal places for coefficients, predictions and r² (default 3).
            Negative values round to tens, hundreds, ...
        kinds: Curve families tried by ``compare`` (default: all five)
    """
    order: int = 2
    precision: int = 3
    kinds: list[str] = field(default_factory=lambda: [k.value for k in RegressionType])


@dataclass
class ValidationConfig:
    """Validation configuration.

    Attributes:
        min_points: Minimum observed points before FP001 is raised (default 2)
        min_r_squared: Minimum acceptable r² value - FR001 (default 0.5)
        acceptable_r_squared: r² below which a fit is reported as marginal (default 0.7)
        strict_mode: If True, treat warnings as errors
    """
    min_points: int = 2
    min_r_squared: float = 0.5
    acceptable_r_squared: float = 0.7
    strict_mode: bool = False


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        format: Export format - 'json' or 'csv' (default: json)
        plots: Write an HTML plot next to the export (default: False)
        x_column: Input column holding x values (default: x)
        y_column: Input column holding y values (default: y)
    """
    format: Literal["json", "csv"] = "json"
    plots: bool = False
    x_column: str = "x"
    y_column: str = "y"


@dataclass
class PyCurveFitConfig:
    """Complete PyCurveFit configuration.

    Attributes:
        fitting: Fitting parameters
        validation: Validation configuration
        output: Output configuration
    """
    fitting: FittingDefaults = field(default_factory=FittingDefaults)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid
        """
        errors = []

        if not isinstance(self.fitting.order, int) or self.fitting.order < 0:
            errors.append(
                f"fitting.order ({self.fitting.order}) must be a non-negative integer"
            )
        if not isinstance(self.fitting.precision, int):
            errors.append(
                f"fitting.precision ({self.fitting.precision}) must be an integer"
            )
        if not self.fitting.kinds:
            errors.append("fitting.kinds must name at least one curve family")
        for kind in self.fitting.kinds:
            try:
                RegressionType.parse(kind)
            except ValueError:
                errors.append(f"fitting.kinds: unknown curve family '{kind}'")

        if self.validation.min_points < 1:
            errors.append(
                f"validation.min_points ({self.validation.min_points}) must be at least 1"
            )
        if not 0 <= self.validation.min_r_squared <= 1:
            errors.append(
                f"validation.min_r_squared ({self.validation.min_r_squared}) must be between 0 and 1"
            )
        if not 0 <= self.validation.acceptable_r_squared <= 1:
            errors.append(
                f"validation.acceptable_r_squared ({self.validation.acceptable_r_squared}) "
                "must be between 0 and 1"
            )
        if self.validation.min_r_squared > self.validation.acceptable_r_squared:
            errors.append(
                f"validation.min_r_squared ({self.validation.min_r_squared}) must not exceed "
                f"validation.acceptable_r_squared ({self.validation.acceptable_r_squared})"
            )

        if self.output.format not in ("json", "csv"):
            errors.append(
                f"output.format ({self.output.format}) must be json or csv"
            )

        if errors:
            raise ValueError("Invalid configuration:\n  - " + "\n  - ".join(errors))

    @classmethod
    def from_yaml(cls, filepath: Path | str) -> "PyCurveFitConfig":
        """Load configuration from YAML file.

        Args:
            filepath: Path to YAML config file

        Returns:
            PyCurveFitConfig instance

        Raises:
            ValueError: If configuration values are invalid
        """
        filepath = Path(filepath)
        with open(filepath) as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)
        config.validate()
        return config

    @staticmethod
    def _filter_unknown_keys(
        section_data: dict,
        dataclass_type: type,
        section_name: str,
    ) -> dict:
        """Filter unknown keys from a config section and warn about them.

        Args:
            section_data: Raw config dictionary for a section
            dataclass_type: The dataclass type to validate against
            section_name: Section name for error messages

        Returns:
            Filtered dictionary with only known keys
        """
        known_keys = {f.name for f in dataclass_fields(dataclass_type)}
        unknown_keys = set(section_data) - known_keys
        if unknown_keys:
            logger.warning(
                f"Unknown key(s) in '{section_name}' config section: "
                f"{', '.join(sorted(unknown_keys))}. "
                f"Valid keys: {', '.join(sorted(known_keys))}"
            )
        return {k: v for k, v in section_data.items() if k in known_keys}

    # Mapping of section name -> dataclass type for from_dict iteration
    _SECTION_TYPES: ClassVar[dict[str, type]] = {
        "fitting": FittingDefaults,
        "validation": ValidationConfig,
        "output": OutputConfig,
    }

    @classmethod
    def from_dict(cls, data: dict) -> "PyCurveFitConfig":
        """Create configuration from dictionary.

        Unknown keys in any section are logged as warnings and ignored,
        rather than causing opaque TypeErrors.

        Args:
            data: Configuration dictionary

        Returns:
            PyCurveFitConfig instance
        """
        config = cls()

        unknown_sections = set(data) - set(cls._SECTION_TYPES)
        if unknown_sections:
            logger.warning(
                f"Unknown top-level config section(s): {', '.join(sorted(unknown_sections))}. "
                f"Valid sections: {', '.join(sorted(cls._SECTION_TYPES))}"
            )

        for section, dtype in cls._SECTION_TYPES.items():
            if section in data:
                section_data = cls._filter_unknown_keys(data[section] or {}, dtype, section)
                if section == "fitting" and "kinds" in section_data:
                    section_data["kinds"] = [str(k).lower() for k in section_data["kinds"]]
                setattr(config, section, dtype(**section_data))

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_yaml(self, filepath: Path | str) -> None:
        """Save configuration to YAML file.

        Args:
            filepath: Output file path
        """
        filepath = Path(filepath)
        with open(filepath, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def generate_default_config(filepath: Path | str) -> Path:
    """Generate a default configuration file.

    Args:
        filepath: Output file path

    Returns:
        Path to created file
    """
    filepath = Path(filepath)

    content = """# PyCurveFit Configuration File

# Fitting parameters
fitting:
  order: 2          # Polynomial degree (ignored by other curve families)
  precision: 3      # Decimal places for outputs (negative = tens, hundreds, ...)
  kinds:            # Curve families tried by 'pycurvefit compare'
    - linear
    - exponential
    - logarithmic
    - power
    - polynomial

# Data validation settings
validation:
  min_points: 2              # Min observed points - FP001
  min_r_squared: 0.5         # Min acceptable r² - FR001
  acceptable_r_squared: 0.7  # r² below this is reported as marginal
  strict_mode: false         # Treat warnings as errors

# Output options
output:
  format: json      # Export format: json or csv
  plots: false      # Write an HTML plot next to the export
  x_column: x       # Input column with x values
  y_column: y       # Input column with y values (blank cells = no observation)
"""

    with open(filepath, "w") as f:
        f.write(content)

    return filepath
