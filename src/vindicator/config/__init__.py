"""
Configuration Package for Vindicator

Path configuration shared by the command-line entry point.
"""

from .paths import CONFIG_DIR, DEFAULT_CONFIG_PATH, ROOT_DIR

__all__ = ["CONFIG_DIR", "DEFAULT_CONFIG_PATH", "ROOT_DIR"]
