"""Tests for config.py validation and from_dict."""

import pytest
import logging

from pycurvefit.config import (
    PyCurveFitConfig,
    FittingDefaults,
    OutputConfig,
    ValidationConfig,
    generate_default_config,
)


class TestDefaults:
    """Tests for section defaults."""

    def test_fitting_defaults(self):
        fitting = FittingDefaults()
        assert fitting.order == 2
        assert fitting.precision == 3
        assert fitting.kinds == ["linear", "exponential", "logarithmic", "power", "polynomial"]

    def test_validation_defaults(self):
        validation = ValidationConfig()
        assert validation.min_points == 2
        assert validation.min_r_squared == 0.5
        assert validation.strict_mode is False

    def test_output_defaults(self):
        output = OutputConfig()
        assert output.format == "json"
        assert output.x_column == "x"
        assert output.y_column == "y"


class TestPyCurveFitConfigValidation:
    """Tests for PyCurveFitConfig.validate()."""

    def test_valid_default_config(self):
        config = PyCurveFitConfig()
        config.validate()  # Should not raise

    def test_negative_order(self):
        config = PyCurveFitConfig()
        config.fitting.order = -1
        with pytest.raises(ValueError, match="order.*non-negative integer"):
            config.validate()

    def test_negative_precision_allowed(self):
        config = PyCurveFitConfig()
        config.fitting.precision = -2
        config.validate()

    def test_non_integer_precision(self):
        config = PyCurveFitConfig()
        config.fitting.precision = 1.5
        with pytest.raises(ValueError, match="precision.*must be an integer"):
            config.validate()

    def test_unknown_kind(self):
        config = PyCurveFitConfig()
        config.fitting.kinds = ["linear", "sigmoid"]
        with pytest.raises(ValueError, match="unknown curve family 'sigmoid'"):
            config.validate()

    def test_empty_kinds(self):
        config = PyCurveFitConfig()
        config.fitting.kinds = []
        with pytest.raises(ValueError, match="at least one curve family"):
            config.validate()

    def test_invalid_min_points(self):
        config = PyCurveFitConfig()
        config.validation.min_points = 0
        with pytest.raises(ValueError, match="min_points.*must be at least 1"):
            config.validate()

    def test_invalid_min_r_squared(self):
        config = PyCurveFitConfig()
        config.validation.min_r_squared = 1.5
        with pytest.raises(ValueError, match="min_r_squared.*between 0 and 1"):
            config.validate()

    def test_invalid_acceptable_r_squared(self):
        config = PyCurveFitConfig()
        config.validation.acceptable_r_squared = -0.1
        with pytest.raises(ValueError, match="acceptable_r_squared.*between 0 and 1"):
            config.validate()

    def test_min_r_squared_above_acceptable(self):
        config = PyCurveFitConfig()
        config.validation.min_r_squared = 0.9
        config.validation.acceptable_r_squared = 0.7
        with pytest.raises(ValueError, match="min_r_squared.*must not exceed"):
            config.validate()

    def test_equal_r_squared_thresholds_allowed(self):
        config = PyCurveFitConfig()
        config.validation.min_r_squared = 0.7
        config.validation.acceptable_r_squared = 0.7
        config.validate()

    def test_invalid_format(self):
        config = PyCurveFitConfig()
        config.output.format = "xml"
        with pytest.raises(ValueError, match="format.*json or csv"):
            config.validate()

    def test_multiple_errors_reported(self):
        config = PyCurveFitConfig()
        config.fitting.order = -1
        config.validation.min_points = 0
        with pytest.raises(ValueError) as exc_info:
            config.validate()
        message = str(exc_info.value)
        assert "order" in message
        assert "min_points" in message


class TestFromDict:
    """Tests for PyCurveFitConfig.from_dict()."""

    def test_empty_dict(self):
        config = PyCurveFitConfig.from_dict({})
        assert config.fitting.order == 2

    def test_partial_section(self):
        config = PyCurveFitConfig.from_dict({"fitting": {"order": 3}})
        assert config.fitting.order == 3
        assert config.fitting.precision == 3

    def test_multiple_sections(self):
        config = PyCurveFitConfig.from_dict({
            "fitting": {"precision": 5},
            "validation": {"strict_mode": True},
            "output": {"format": "csv", "y_column": "rate"},
        })
        assert config.fitting.precision == 5
        assert config.validation.strict_mode is True
        assert config.output.format == "csv"
        assert config.output.y_column == "rate"

    def test_kinds_lowercased(self):
        config = PyCurveFitConfig.from_dict({"fitting": {"kinds": ["Linear", "POWER"]}})
        assert config.fitting.kinds == ["linear", "power"]

    def test_empty_section(self):
        config = PyCurveFitConfig.from_dict({"output": None})
        assert config.output.format == "json"

    def test_unknown_top_level_keys_warned(self, caplog):
        data = {"bogus_section": {"key": "value"}}
        with caplog.at_level(logging.WARNING):
            PyCurveFitConfig.from_dict(data)
        assert "Unknown top-level config section" in caplog.text
        assert "bogus_section" in caplog.text

    def test_unknown_section_keys_warned(self, caplog):
        data = {"validation": {"unknown_param": 1}}
        with caplog.at_level(logging.WARNING):
            PyCurveFitConfig.from_dict(data)
        assert "Unknown key(s)" in caplog.text
        assert "unknown_param" in caplog.text

    def test_unknown_keys_filtered(self, caplog):
        data = {"fitting": {"order": 4, "nonexistent_param": 99}}
        with caplog.at_level(logging.WARNING):
            config = PyCurveFitConfig.from_dict(data)
        assert config.fitting.order == 4
        assert "nonexistent_param" in caplog.text


class TestYaml:
    """Tests for YAML load/save."""

    def test_roundtrip(self, tmp_path):
        config = PyCurveFitConfig()
        config.fitting.order = 5
        config.output.plots = True
        filepath = tmp_path / "config.yaml"

        config.to_yaml(filepath)
        loaded = PyCurveFitConfig.from_yaml(filepath)

        assert loaded == config

    def test_from_yaml(self, tmp_path):
        filepath = tmp_path / "config.yaml"
        filepath.write_text(
            "fitting:\n"
            "  precision: 2\n"
            "  kinds: [linear, polynomial]\n"
            "output:\n"
            "  x_column: t\n"
        )

        config = PyCurveFitConfig.from_yaml(filepath)

        assert config.fitting.precision == 2
        assert config.fitting.kinds == ["linear", "polynomial"]
        assert config.output.x_column == "t"

    def test_empty_file(self, tmp_path):
        filepath = tmp_path / "config.yaml"
        filepath.write_text("")

        config = PyCurveFitConfig.from_yaml(filepath)

        assert config == PyCurveFitConfig()

    def test_from_yaml_invalid_raises(self, tmp_path):
        filepath = tmp_path / "config.yaml"
        filepath.write_text("fitting:\n  order: -3\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            PyCurveFitConfig.from_yaml(filepath)


class TestGenerateDefaultConfig:
    """Tests for generate_default_config()."""

    def test_generates_file(self, tmp_path):
        filepath = tmp_path / "pycurvefit.yaml"
        result = generate_default_config(filepath)
        assert result == filepath
        assert filepath.exists()
        assert "fitting:" in filepath.read_text()

    def test_generated_config_is_valid(self, tmp_path):
        filepath = tmp_path / "pycurvefit.yaml"
        generate_default_config(filepath)

        config = PyCurveFitConfig.from_yaml(filepath)

        assert config == PyCurveFitConfig()
