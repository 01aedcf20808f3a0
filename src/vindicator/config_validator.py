"""
Configuration Validation for Vindicator

This module provides validation and schema checking for the configuration
file to ensure all required settings are present and have valid values.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml


class LogLevel(str, Enum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


KNOWN_SECTIONS = {"supervisor", "worker", "logging"}


@dataclass
class ValidationError:
    """Represents a validation error with context."""

    path: str  # Dot-separated path to the invalid field
    message: str
    value: Any = None
    expected: Any = None

    def __str__(self) -> str:
        msg = f"{self.path}: {self.message}"
        if self.value is not None:
            msg += f" (got: {self.value})"
        if self.expected is not None:
            msg += f" (expected: {self.expected})"
        return msg


class ConfigValidator:
    """Validates configuration dictionaries against the expected schema."""

    def __init__(self):
        """Initialize the configuration validator."""
        self.logger = logging.getLogger(__name__)
        self.errors: List[ValidationError] = []
        self.warnings: List[ValidationError] = []

    def validate_config(
        self, config: Dict[str, Any]
    ) -> Tuple[bool, List[ValidationError], List[ValidationError]]:
        """
        Validate the configuration file contents.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        if not isinstance(config, dict):
            self.errors.append(
                ValidationError(
                    "config",
                    "Must be a dictionary",
                    value=type(config).__name__,
                    expected="dictionary",
                )
            )
            return False, self.errors, self.warnings

        self._validate_supervisor_config(config.get("supervisor", {}))
        self._validate_worker_config(config.get("worker", {}))
        self._validate_logging_config(config.get("logging", {}))

        unknown_sections = set(config.keys()) - KNOWN_SECTIONS
        if unknown_sections:
            self.warnings.append(
                ValidationError(
                    "config",
                    "Unknown sections found",
                    value=sorted(unknown_sections),
                    expected=f"only {sorted(KNOWN_SECTIONS)}",
                )
            )

        return len(self.errors) == 0, self.errors, self.warnings

    def _validate_positive_number(self, path: str, value: Any) -> bool:
        """Record an error unless value is a positive number."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self.errors.append(
                ValidationError(
                    path,
                    "Must be a number",
                    value=type(value).__name__,
                    expected="number",
                )
            )
            return False
        if value <= 0:
            self.errors.append(
                ValidationError(
                    path, "Must be positive", value=value, expected="positive number"
                )
            )
            return False
        return True

    def _validate_supervisor_config(self, supervisor_config: Dict[str, Any]) -> None:
        """
        Validate supervisor configuration section.

        Args:
            supervisor_config: Dictionary containing supervisor settings
        """
        if not supervisor_config:
            self.errors.append(
                ValidationError(
                    "supervisor",
                    "Missing required section",
                    expected="dictionary with supervisor settings",
                )
            )
            return

        if "interval" not in supervisor_config:
            self.errors.append(
                ValidationError(
                    "supervisor.interval",
                    "Missing required field",
                    expected="positive number of seconds",
                )
            )
            return

        interval = supervisor_config["interval"]
        if self._validate_positive_number("supervisor.interval", interval):
            if interval < 0.1:
                self.warnings.append(
                    ValidationError(
                        "supervisor.interval",
                        "A failing worker will be restarted very frequently",
                        value=interval,
                        expected=">= 0.1",
                    )
                )

    def _validate_worker_config(self, worker_config: Dict[str, Any]) -> None:
        """
        Validate worker configuration section.

        Args:
            worker_config: Dictionary containing worker settings
        """
        if not worker_config:
            self.errors.append(
                ValidationError(
                    "worker",
                    "Missing required section",
                    expected="dictionary with worker settings",
                )
            )
            return

        command = worker_config.get("command")
        if not command:
            self.errors.append(
                ValidationError(
                    "worker.command",
                    "Missing required field",
                    expected="command string or list of arguments",
                )
            )
        elif not isinstance(command, (str, list)):
            self.errors.append(
                ValidationError(
                    "worker.command",
                    "Must be a string or a list",
                    value=type(command).__name__,
                    expected="string or list",
                )
            )
        elif isinstance(command, list) and not all(
            isinstance(part, (str, int, float)) for part in command
        ):
            self.errors.append(
                ValidationError(
                    "worker.command",
                    "Arguments must be scalars",
                    value=command,
                    expected="list of strings",
                )
            )

        if "name" in worker_config and not isinstance(worker_config["name"], str):
            self.errors.append(
                ValidationError(
                    "worker.name",
                    "Must be a string",
                    value=type(worker_config["name"]).__name__,
                    expected="string",
                )
            )

        for key in ["poll_interval", "terminate_timeout"]:
            if key in worker_config:
                self._validate_positive_number(f"worker.{key}", worker_config[key])

        if "env" in worker_config and not isinstance(worker_config["env"], dict):
            self.errors.append(
                ValidationError(
                    "worker.env",
                    "Must be a dictionary",
                    value=type(worker_config["env"]).__name__,
                    expected="dictionary",
                )
            )

    def _validate_logging_config(self, logging_config: Dict[str, Any]) -> None:
        """
        Validate logging configuration.

        Args:
            logging_config: Dictionary containing logging configuration
        """
        if not logging_config:
            self.errors.append(
                ValidationError(
                    "logging",
                    "Missing required section",
                    expected="dictionary with logging settings",
                )
            )
            return

        if "level" not in logging_config:
            self.errors.append(
                ValidationError(
                    "logging.level",
                    "Missing required field",
                    expected=f"one of: {[level.value for level in LogLevel]}",
                )
            )
        else:
            try:
                LogLevel(str(logging_config["level"]).upper())
            except ValueError:
                self.errors.append(
                    ValidationError(
                        "logging.level",
                        "Invalid log level",
                        value=logging_config["level"],
                        expected=f"one of: {[level.value for level in LogLevel]}",
                    )
                )

        if "colorized" in logging_config and not isinstance(
            logging_config["colorized"], bool
        ):
            self.errors.append(
                ValidationError(
                    "logging.colorized",
                    "Must be a boolean",
                    value=type(logging_config["colorized"]).__name__,
                    expected="boolean",
                )
            )

        if "colors" in logging_config:
            colors = logging_config["colors"]
            if not isinstance(colors, dict):
                self.errors.append(
                    ValidationError(
                        "logging.colors",
                        "Must be a dictionary",
                        value=type(colors).__name__,
                        expected="dictionary",
                    )
                )
            else:
                for level, color in colors.items():
                    if not isinstance(color, str):
                        self.errors.append(
                            ValidationError(
                                f"logging.colors.{level}",
                                "Must be a string",
                                value=type(color).__name__,
                                expected="string",
                            )
                        )


def validate_configuration_file(config_path: Path) -> bool:
    """
    Validate the configuration file and report any issues.

    Args:
        config_path: Path to vindicator.yaml

    Returns:
        True if validation passes, False otherwise
    """
    validator = ConfigValidator()
    logger = logging.getLogger(__name__)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found: {config_path}")
        return False
    except yaml.YAMLError as e:
        logger.error(f"YAML parsing error in {config_path}: {e}")
        return False

    is_valid, errors, warnings = validator.validate_config(config)

    if errors:
        logger.error(f"Configuration validation errors in {config_path}:")
        for error in errors:
            logger.error(f"  - {error}")

    if warnings:
        logger.warning(f"Configuration warnings in {config_path}:")
        for warning in warnings:
            logger.warning(f"  - {warning}")

    return is_valid
