"""Asset loading for both development and PyInstaller builds"""

import sys
from pathlib import Path

from PIL import Image

from .icon_generator import create_app_icon
from ..logging_config import get_logger

logger = get_logger("assets")

APP_ICON_PNG = "icons/app_icon.png"
APP_ICON_ICO = "icons/app_icon.ico"


def get_asset_path(relative_path: str) -> Path:
    """Resolve a path inside the assets directory.

    Args:
        relative_path: Path relative to the assets directory (e.g., "icons/app_icon.png")

    Returns:
        Absolute path to the asset file
    """
    if getattr(sys, 'frozen', False):
        base_path = Path(sys._MEIPASS) / "assets"
    else:
        base_path = Path(__file__).parent

    return base_path / relative_path


def load_app_icon(size: int = 256) -> Image.Image:
    """Load the bundled application icon, drawing it if none is bundled."""
    icon_path = get_asset_path(APP_ICON_PNG)
    if icon_path.exists():
        try:
            with Image.open(icon_path) as image:
                return image.convert("RGBA").resize((size, size))
        except OSError as e:
            logger.debug("Could not load icon %s: %s", icon_path, e)
    return create_app_icon(size)
