"""Configuration management module.

This module provides configuration storage, loading, and data models for the application.

Submodules:
    manager: ConfigurationManager for loading/saving XML configuration
    schema: Data classes defining configuration structure (Settings)
    paths: resolve_worlds_root() and AppPaths for config, log and export locations
    path_validator: Path validation utilities to prevent dangerous file operations

The configuration is stored as XML in <config dir>/configuration.xml.
"""

from .manager import ConfigurationManager
from .schema import AppConfiguration, Settings
from .paths import AppPaths, resolve_worlds_root

__all__ = [
    "ConfigurationManager",
    "AppConfiguration",
    "Settings",
    "AppPaths",
    "resolve_worlds_root",
]
