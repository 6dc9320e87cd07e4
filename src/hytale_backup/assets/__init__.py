"""Asset loading utilities for icons.

This module handles loading assets in both development and packaged (PyInstaller) modes.

Submodules:
    loader: get_asset_path() function for resolving asset paths
    icon_generator: Pillow drawing of the application icon (run with python -m
                    to write icons/app_icon.png and icons/app_icon.ico)
"""

from .loader import get_asset_path

__all__ = [
    "get_asset_path",
]
