"""
Unit Tests for ConfigValidator

This module contains unit tests for configuration validation.
"""

import copy
import sys
import tempfile
import unittest
from pathlib import Path

import yaml

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vindicator.config import DEFAULT_CONFIG_PATH
from vindicator.config_validator import (
    ConfigValidator,
    ValidationError,
    validate_configuration_file,
)

VALID_CONFIG = {
    "supervisor": {"interval": 2},
    "worker": {
        "name": "sleeper",
        "command": ["sleep", "3600"],
        "poll_interval": 0.5,
        "terminate_timeout": 5.0,
    },
    "logging": {"level": "INFO", "colorized": False},
}


class TestConfigValidator(unittest.TestCase):
    """Test cases for ConfigValidator."""

    def setUp(self):
        """Set up test fixtures."""
        self.validator = ConfigValidator()
        self.config = copy.deepcopy(VALID_CONFIG)

    def _error_paths(self):
        is_valid, errors, _ = self.validator.validate_config(self.config)
        self.assertFalse(is_valid)
        return [error.path for error in errors]

    def test_valid_config(self):
        """Test a complete configuration passes."""
        is_valid, errors, warnings = self.validator.validate_config(self.config)
        self.assertTrue(is_valid)
        self.assertEqual(errors, [])
        self.assertEqual(warnings, [])

    def test_not_a_dictionary(self):
        """Test a configuration that is not a mapping."""
        is_valid, errors, _ = self.validator.validate_config(None)
        self.assertFalse(is_valid)
        self.assertEqual(errors[0].path, "config")

    def test_missing_sections(self):
        """Test every required section is reported."""
        self.config = {}
        self.assertEqual(self._error_paths(), ["supervisor", "worker", "logging"])

    def test_missing_interval(self):
        """Test the interval is required."""
        self.config["supervisor"] = {"other": 1}
        self.assertIn("supervisor.interval", self._error_paths())

    def test_invalid_interval(self):
        """Test non-positive and non-numeric intervals."""
        for interval in [0, -2, "fast", True]:
            self.config["supervisor"]["interval"] = interval
            self.assertIn("supervisor.interval", self._error_paths())

    def test_small_interval_warning(self):
        """Test a very small interval only warns."""
        self.config["supervisor"]["interval"] = 0.05
        is_valid, _, warnings = self.validator.validate_config(self.config)
        self.assertTrue(is_valid)
        self.assertEqual(warnings[0].path, "supervisor.interval")

    def test_invalid_command(self):
        """Test empty and malformed commands."""
        for command in [None, "", [], 42, ["ok", {"bad": 1}]]:
            self.config["worker"]["command"] = command
            self.assertIn("worker.command", self._error_paths())

    def test_string_command(self):
        """Test a command given as a single string."""
        self.config["worker"]["command"] = "sleep 3600"
        is_valid, _, _ = self.validator.validate_config(self.config)
        self.assertTrue(is_valid)

    def test_invalid_worker_fields(self):
        """Test worker timing, name and env fields."""
        self.config["worker"].update(
            {"poll_interval": 0, "terminate_timeout": "soon", "name": 5, "env": []}
        )
        paths = self._error_paths()
        for path in [
            "worker.poll_interval",
            "worker.terminate_timeout",
            "worker.name",
            "worker.env",
        ]:
            self.assertIn(path, paths)

    def test_invalid_logging(self):
        """Test log level, colorized flag and colors."""
        self.config["logging"] = {
            "level": "LOUD",
            "colorized": "yes",
            "colors": {"INFO": 3},
        }
        paths = self._error_paths()
        self.assertIn("logging.level", paths)
        self.assertIn("logging.colorized", paths)
        self.assertIn("logging.colors.INFO", paths)

    def test_lowercase_level(self):
        """Test log levels are case-insensitive."""
        self.config["logging"]["level"] = "debug"
        is_valid, _, _ = self.validator.validate_config(self.config)
        self.assertTrue(is_valid)

    def test_unknown_section_warning(self):
        """Test unknown top-level sections only warn."""
        self.config["extras"] = {}
        is_valid, _, warnings = self.validator.validate_config(self.config)
        self.assertTrue(is_valid)
        self.assertEqual(warnings[0].path, "config")

    def test_validation_error_str(self):
        """Test the error message format."""
        error = ValidationError("a.b", "Bad value", value=1, expected="2")
        self.assertEqual(str(error), "a.b: Bad value (got: 1) (expected: 2)")
        self.assertEqual(str(ValidationError("a", "Missing")), "a: Missing")


class TestValidateConfigurationFile(unittest.TestCase):
    """Test cases for validating configuration files on disk."""

    def setUp(self):
        """Set up a temporary directory."""
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        """Remove the temporary directory."""
        self.tmp.cleanup()

    def test_shipped_configuration_is_valid(self):
        """Test the default configuration file passes validation."""
        self.assertTrue(validate_configuration_file(DEFAULT_CONFIG_PATH))

    def test_valid_file(self):
        """Test a valid file on disk."""
        path = self.dir / "vindicator.yaml"
        path.write_text(yaml.safe_dump(VALID_CONFIG))
        self.assertTrue(validate_configuration_file(path))

    def test_missing_file(self):
        """Test a missing file fails validation."""
        with self.assertLogs("vindicator.config_validator", level="ERROR"):
            self.assertFalse(validate_configuration_file(self.dir / "missing.yaml"))

    def test_invalid_yaml(self):
        """Test a file that is not YAML."""
        path = self.dir / "broken.yaml"
        path.write_text("supervisor: [unclosed")
        with self.assertLogs("vindicator.config_validator", level="ERROR"):
            self.assertFalse(validate_configuration_file(path))

    def test_invalid_values_logged(self):
        """Test validation errors are logged."""
        config = copy.deepcopy(VALID_CONFIG)
        config["supervisor"]["interval"] = -1
        path = self.dir / "invalid.yaml"
        path.write_text(yaml.safe_dump(config))

        with self.assertLogs("vindicator.config_validator", level="ERROR") as logs:
            self.assertFalse(validate_configuration_file(path))
        self.assertTrue(any("supervisor.interval" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
