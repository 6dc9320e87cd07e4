"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Application settings"""
    include_logs: bool = True
    include_backups: bool = True
    errors_only_logs: bool = False
    export_directory: Optional[Path] = None
    worlds_path: Optional[Path] = None  # Overrides the platform saves folder


@dataclass
class AppConfiguration:
    """Complete application configuration"""
    settings: Settings = field(default_factory=Settings)
