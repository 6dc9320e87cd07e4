"""Archive file naming conventions"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

ARCHIVE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# "_2026-01-13_19-35-06" at the end of a filename stem (20 characters)
_TIMESTAMP_SUFFIX_PATTERN = re.compile(r"^(?P<name>.+)_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}$")


def default_archive_name(world_name: str, now: Optional[datetime] = None) -> str:
    """Build the suggested filename for a new backup.

    Examples:
        >>> default_archive_name("Orbis", datetime(2026, 1, 13, 19, 35, 6))
        'Orbis_2026-01-13_19-35-06.zip'
    """
    now = now or datetime.now()
    return f"{world_name}_{now.strftime(ARCHIVE_TIMESTAMP_FORMAT)}.zip"


def infer_world_name(archive_path: Path) -> str:
    """Guess the world name an archive should be imported as.

    Strips the timestamp added by default_archive_name(), otherwise
    returns the whole filename stem.

    Examples:
        >>> infer_world_name(Path("Orbis_2026-01-13_19-35-06.zip"))
        'Orbis'
        >>> infer_world_name(Path("my_world.zip"))
        'my_world'
    """
    stem = Path(archive_path).stem
    match = _TIMESTAMP_SUFFIX_PATTERN.match(stem)
    if match:
        return match.group("name")
    return stem


def is_zip_archive(path: Path) -> bool:
    """Check whether a path has a .zip extension."""
    return Path(path).suffix.lower() == ".zip"
