"""Show files in the operating system's file manager"""

import platform
import subprocess
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger("file_manager")


def reveal_in_file_manager(path: Path) -> None:
    """Open the file manager with a file selected.

    Fire-and-forget: failures are logged, never raised. On Linux the
    containing folder is opened since there is no portable "select" call.

    Args:
        path: Absolute path of the file to show
    """
    system = platform.system()
    if system == "Darwin":
        command = ["open", "-R", str(path)]
    elif system == "Windows":
        command = ["explorer", f"/select,{path}"]
    else:
        command = ["xdg-open", str(path.parent)]

    try:
        subprocess.Popen(command)
    except OSError as e:
        logger.debug("Could not open file manager for %s: %s", path, e)
