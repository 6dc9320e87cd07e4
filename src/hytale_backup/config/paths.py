"""Platform paths for Hytale world saves and application files"""

import os
import platform
from pathlib import Path
from typing import Mapping, Optional

from ..errors import EnvironmentVariableMissing, HomeDirectoryUnavailable, UnsupportedPlatform
from ..logging_config import LOG_FILE_NAME

# Saves folder relative to %APPDATA% (Windows) or Application Support (macOS)
HYTALE_SAVES_PARTS = ("Hytale", "UserData", "Saves")

APP_DIR_NAME = "HytaleBackup"


def _home_dir(home: Optional[Path]) -> Path:
    if home is not None:
        return home
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryUnavailable(str(e)) from e


def resolve_worlds_root(
    system: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Compute the directory that holds Hytale world saves.

    Only builds the path; callers check whether it exists.

    Args:
        system: Platform name as returned by platform.system(), detected if None
        environ: Environment mapping, defaults to os.environ
        home: User home directory, detected if None

    Returns:
        Absolute path of the saves folder

    Raises:
        EnvironmentVariableMissing: APPDATA is not set on Windows
        HomeDirectoryUnavailable: The home directory is unknown on macOS
        UnsupportedPlatform: No saves location is known for this platform
    """
    system = platform.system() if system is None else system
    environ = os.environ if environ is None else environ

    if system == "Windows":
        appdata = environ.get("APPDATA")
        if not appdata:
            raise EnvironmentVariableMissing("APPDATA")
        return Path(appdata).joinpath(*HYTALE_SAVES_PARTS)

    if system == "Darwin":
        return _home_dir(home).joinpath("Library", "Application Support", *HYTALE_SAVES_PARTS)

    raise UnsupportedPlatform(system)


class AppPaths:
    """Locations of the application's own files.

    Unlike the saves folder these always resolve, falling back to the
    home directory on platforms without a dedicated config location.
    """

    CONFIG_FILE_NAME = "configuration.xml"

    @classmethod
    def config_dir(cls) -> Path:
        """Get the per-user configuration directory.

        Returns:
            %APPDATA%/HytaleBackup on Windows, Application Support on macOS,
            $XDG_CONFIG_HOME/hytale-backup (or ~/.config) elsewhere
        """
        system = platform.system()
        if system == "Windows" and os.environ.get("APPDATA"):
            return Path(os.environ["APPDATA"]) / APP_DIR_NAME
        if system == "Darwin":
            return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg_config) if xdg_config else Path.home() / ".config"
        return base / "hytale-backup"

    @classmethod
    def config_file(cls) -> Path:
        return cls.config_dir() / cls.CONFIG_FILE_NAME

    @classmethod
    def log_file(cls) -> Path:
        return cls.config_dir() / LOG_FILE_NAME

    @classmethod
    def default_export_dir(cls) -> Path:
        """Get the folder suggested when saving a new backup.

        Returns:
            ~/Downloads if it exists, otherwise the home directory
        """
        downloads = Path.home() / "Downloads"
        return downloads if downloads.is_dir() else Path.home()

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables and ~ in a path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expanduser(os.path.expandvars(path_str)))

    @classmethod
    def ensure_config_dir(cls) -> Path:
        """Ensure the configuration directory exists.

        Returns:
            Path to the configuration directory
        """
        path = cls.config_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path
