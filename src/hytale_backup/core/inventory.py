"""Discovery of world saves, their backups and logs.

Listing is lenient: a missing or unreadable saves folder gives an empty
list, and entries whose metadata cannot be read are skipped. Only the
explicit delete operation raises.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import BackupEntry, LogEntry, WorldInfo
from ..config.path_validator import is_path_under_root
from ..config.paths import resolve_worlds_root
from ..errors import ArchiveError, PlatformError
from ..logging_config import get_logger

logger = get_logger("inventory")

LOGS_DIR = "logs"
BACKUP_DIR = "backup"
LOG_SUFFIX = ".log"

# Log filenames start with a sortable timestamp, e.g. 2026-01-13_19-35-06_server.log
LOG_TIMESTAMP_LENGTH = 19
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
LAST_PLAYED_FORMAT = "%Y-%m-%d %H:%M:%S"

UNREADABLE_LOG_PLACEHOLDER = "Could not read log file"

# OS housekeeping files that are never listed as backups
IGNORED_BACKUP_PREFIXES = (".DS_Store", "Thumbs.db", "desktop.ini", "._")

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024


def format_size(num_bytes: int) -> str:
    """Format a byte count for display.

    Examples:
        >>> format_size(1023)
        '1023 B'
        >>> format_size(1536)
        '1.50 KB'
    """
    if num_bytes >= _GB:
        return f"{num_bytes / _GB:.2f} GB"
    if num_bytes >= _MB:
        return f"{num_bytes / _MB:.2f} MB"
    if num_bytes >= _KB:
        return f"{num_bytes / _KB:.2f} KB"
    return f"{num_bytes} B"


def directory_size(path: Path) -> int:
    """Sum the size of every regular file below a directory."""
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            file_path = os.path.join(dirpath, filename)
            try:
                if os.path.isfile(file_path):
                    total += os.path.getsize(file_path)
            except OSError:
                continue
    return total


def _log_files(world_path: Path) -> list[Path]:
    """Get the world's .log files, newest (greatest name) first."""
    logs_path = world_path / LOGS_DIR
    try:
        candidates = [
            entry for entry in logs_path.iterdir()
            if entry.suffix == LOG_SUFFIX and entry.is_file()
        ]
    except OSError:
        return []
    return sorted(candidates, key=lambda p: p.name, reverse=True)


def parse_log_timestamp(filename: str) -> Optional[str]:
    """Read the timestamp prefix of a log filename.

    Args:
        filename: Log filename such as "2026-01-13_19-35-06_server.log"

    Returns:
        The timestamp as "2026-01-13 19:35:06", or None if the name has none
    """
    prefix = filename[:LOG_TIMESTAMP_LENGTH]
    if len(prefix) < LOG_TIMESTAMP_LENGTH:
        return None
    try:
        stamp = datetime.strptime(prefix, LOG_TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return stamp.strftime(LAST_PLAYED_FORMAT)


def last_played(world_path: Path) -> Optional[str]:
    """Get when a world was last played, based on its newest log filename."""
    logs = _log_files(world_path)
    if not logs:
        return None
    return parse_log_timestamp(logs[0].name)


def list_worlds(worlds_root: Optional[Path] = None) -> list[WorldInfo]:
    """List the world saves in the saves folder.

    Args:
        worlds_root: Folder to scan, defaults to the platform saves folder

    Returns:
        WorldInfo for each subdirectory, sorted by name. Empty if the
        folder is unknown, missing or unreadable.
    """
    if worlds_root is None:
        try:
            worlds_root = resolve_worlds_root()
        except PlatformError as e:
            logger.info(f"No worlds folder on this platform: {e}")
            return []

    try:
        entries = list(os.scandir(worlds_root))
    except OSError as e:
        logger.debug(f"Cannot read worlds folder {worlds_root}: {e}")
        return []

    worlds = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError:
            continue

        world_path = Path(entry.path)
        worlds.append(WorldInfo(
            name=entry.name,
            location=world_path,
            size_bytes=directory_size(world_path),
            last_played=last_played(world_path),
        ))

    worlds.sort(key=lambda w: w.name.lower())
    logger.debug(f"Found {len(worlds)} worlds in {worlds_root}")
    return worlds


def list_backups(world_path: Path) -> list[BackupEntry]:
    """List the files in a world's backup folder.

    Args:
        world_path: The world directory

    Returns:
        BackupEntry for each regular file, sorted by name. OS housekeeping
        files are left out.
    """
    backup_path = world_path / BACKUP_DIR
    try:
        entries = list(os.scandir(backup_path))
    except OSError:
        return []

    backups = []
    for entry in entries:
        if entry.name.startswith(IGNORED_BACKUP_PREFIXES):
            continue
        try:
            if not entry.is_file():
                continue
            size = entry.stat().st_size
        except OSError:
            continue
        backups.append(BackupEntry(name=entry.name, location=Path(entry.path), size_bytes=size))

    backups.sort(key=lambda b: b.name)
    return backups


def latest_log(world_path: Path) -> Optional[LogEntry]:
    """Load the newest log file of a world.

    Returns:
        LogEntry with the file content (or a placeholder if it cannot be
        read as text), or None if the world has no logs
    """
    logs = _log_files(world_path)
    if not logs:
        return None

    log_path = logs[0]
    try:
        content = log_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read log {log_path}: {e}")
        content = UNREADABLE_LOG_PLACEHOLDER

    return LogEntry(name=log_path.name, location=log_path, content=content)


def delete_backup(entry: BackupEntry) -> None:
    """Delete a file from a world's backup folder.

    Args:
        entry: The backup to delete, as returned by list_backups()

    Raises:
        ArchiveError: If the path is not a backup file or cannot be removed
    """
    location = entry.location
    if location.parent.name != BACKUP_DIR or not is_path_under_root(location, location.parent):
        raise ArchiveError(f"Not a world backup file: {location}")

    logger.info(f"Deleting backup {location}")
    try:
        location.unlink()
    except OSError as e:
        logger.error(f"Failed to delete backup {location}: {e}")
        raise ArchiveError(f"Failed to delete backup: {e}") from e
