"""Path validation utilities to prevent dangerous file operations.

Provides validation for paths used in file operations to prevent:
- Path traversal through archive entry names
- Deleting or writing outside the saves folder
"""

import re
from pathlib import Path, PurePosixPath
from typing import Optional

from ..logging_config import get_logger

logger = get_logger("path_validator")

# Drive-qualified names such as "C:" or "C:foo"
_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")

# Characters that cannot appear in a world folder name on any platform
_INVALID_NAME_CHARS = set('<>:"/\\|?*\0')


def is_path_under_root(path: Path, root: Path) -> bool:
    """Check if a path is under a given root directory.

    Args:
        path: The path to check
        root: The root directory

    Returns:
        True if path is under root, False otherwise
    """
    try:
        path_resolved = path.resolve()
        root_resolved = root.resolve()
        return path_resolved == root_resolved or root_resolved in path_resolved.parents
    except (OSError, ValueError) as e:
        logger.warning("Failed to check path relationship: %s", e)
        return False


def safe_member_path(name: str) -> Optional[PurePosixPath]:
    """Turn an archive entry name into a relative path that cannot escape.

    Backslashes are treated as separators, "." and empty segments are
    dropped. Absolute names, drive-qualified names and any ".." segment
    are rejected.

    Args:
        name: Entry name as stored in the archive

    Returns:
        Relative path confined to the extraction directory, or None if the
        name must not be extracted

    Examples:
        >>> safe_member_path("logs/a.log")
        PurePosixPath('logs/a.log')
        >>> safe_member_path("../../evil.txt") is None
        True
    """
    normalized = name.replace("\\", "/")
    if not normalized or normalized.startswith("/") or _DRIVE_PATTERN.match(normalized):
        return None

    parts = [part for part in normalized.split("/") if part not in ("", ".")]
    if not parts or ".." in parts:
        return None

    return PurePosixPath(*parts)


def validate_world_name(name: str) -> tuple[bool, str]:
    """Validate a world folder name before creating or replacing it.

    Args:
        name: The world name to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "World name is empty"

    if name in (".", ".."):
        return False, "World name cannot be '.' or '..'"

    if any(char in _INVALID_NAME_CHARS for char in name):
        return False, f"World name contains invalid characters: {name}"

    return True, ""
