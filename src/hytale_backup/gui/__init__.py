"""GUI module using CustomTkinter for a modern interface.

This module provides all user interface components for the application.

Components:
    MainWindow: Main application window with:
        - World list with refresh, import and settings actions
        - World details with Backups and Logs tabs
        - Backup toolbar with include options and a progress display

    ConfigDialog: Settings dialog for the saves folder and backup folder

Submodules:
    styles: Theme constants (colors, fonts, padding, window sizes)
    widgets: Reusable widget components (PathSelector)
    file_manager: reveal_in_file_manager() for "Show in Folder" buttons
"""

from .main_window import MainWindow
from .config_dialog import ConfigDialog

__all__ = [
    "MainWindow",
    "ConfigDialog",
]
