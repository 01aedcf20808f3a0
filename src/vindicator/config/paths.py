"""
Path Configuration for Vindicator

This module defines the directory paths used to locate configuration files.
"""

from pathlib import Path

# Root directory of the project (parent of the src directory)
ROOT_DIR = Path(__file__).parent.parent.parent.parent

# Configuration directory
CONFIG_DIR = ROOT_DIR / "configuration"

# Default configuration file
DEFAULT_CONFIG_PATH = CONFIG_DIR / "vindicator.yaml"
