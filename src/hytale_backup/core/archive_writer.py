"""ZIP backup of a world directory with progress reporting.

The world is walked twice: once to count the files that will be archived,
so the progress bar has an exact total, and once to write them. Both walks
apply the same inclusion rule, and both visit names in sorted order.
"""

import os
import zipfile
from pathlib import Path, PurePosixPath
from typing import Callable, Iterator, Optional

from .inventory import BACKUP_DIR, LOGS_DIR
from .progress import ProgressChannel
from ..config.paths import resolve_worlds_root
from ..errors import ArchiveError, WorldNotFoundError
from ..logging_config import get_logger

logger = get_logger("archive_writer")


def make_inclusion_filter(include_logs: bool, include_backups: bool) -> Callable[[PurePosixPath], bool]:
    """Build the rule deciding which entries go into the archive.

    An entry is excluded when any segment of its path (relative to the
    world folder) is "logs" and logs are not included, or "backup" and
    backups are not included. Directories and files are treated alike.

    Args:
        include_logs: Keep the logs folder
        include_backups: Keep the backup folder

    Returns:
        Function taking a relative path and returning True to include it
    """
    excluded = set()
    if not include_logs:
        excluded.add(LOGS_DIR)
    if not include_backups:
        excluded.add(BACKUP_DIR)

    def is_included(relative: PurePosixPath) -> bool:
        return excluded.isdisjoint(relative.parts)

    return is_included


def _raise_traversal_error(error: OSError):
    raise ArchiveError(f"Failed to read files: {error}") from error


def _walk(
    world_path: Path,
    is_included: Callable[[PurePosixPath], bool],
) -> Iterator[tuple[Path, PurePosixPath, list[str]]]:
    """Walk the included part of a world in sorted order.

    Yields:
        (directory, path relative to the world, included file names)
    """
    for dirpath, dirnames, filenames in os.walk(world_path, onerror=_raise_traversal_error):
        directory = Path(dirpath)
        relative_dir = PurePosixPath(directory.relative_to(world_path).as_posix())

        # Pruning dirnames in place stops os.walk from descending
        dirnames[:] = sorted(d for d in dirnames if is_included(relative_dir / d))
        files = sorted(f for f in filenames if is_included(relative_dir / f))
        yield directory, relative_dir, files


def _resolved(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path


def count_included_files(
    world_path: Path,
    include_logs: bool,
    include_backups: bool,
    skip_file: Optional[Path] = None,
) -> int:
    """Count the regular files a backup with these flags would contain.

    Args:
        world_path: The world directory
        include_logs: Count files under logs folders
        include_backups: Count files under backup folders
        skip_file: A file left out of the count (the archive being written)
    """
    is_included = make_inclusion_filter(include_logs, include_backups)
    skip_resolved = _resolved(skip_file) if skip_file is not None else None
    count = 0
    for directory, _relative_dir, files in _walk(world_path, is_included):
        for name in files:
            file_path = directory / name
            if file_path.is_file() and _resolved(file_path) != skip_resolved:
                count += 1
    return count


def write_archive(
    world_name: str,
    destination_path: Path,
    include_logs: bool,
    include_backups: bool,
    progress: ProgressChannel,
    worlds_root: Optional[Path] = None,
    notify: Optional[Callable[[], None]] = None,
) -> str:
    """Compress a world into a ZIP archive.

    Args:
        world_name: Name of the world folder inside the saves folder
        destination_path: ZIP file to create or overwrite
        include_logs: Include the world's logs folder
        include_backups: Include the world's backup folder
        progress: Channel receiving the total and per-file updates
        worlds_root: Saves folder, defaults to the platform saves folder
        notify: Called after each progress update so a UI can repaint

    Returns:
        The destination path as a string

    Raises:
        WorldNotFoundError: If the world folder does not exist
        ArchiveError: If the archive cannot be created, a file cannot be
            read, or the archive cannot be written or finished. A partially
            written archive is left on disk.
        PlatformError: If worlds_root is None and the saves folder is unknown
    """
    if worlds_root is None:
        worlds_root = resolve_worlds_root()

    world_path = worlds_root / world_name
    if not world_path.is_dir():
        raise WorldNotFoundError(world_name)

    destination_path = Path(destination_path)
    is_included = make_inclusion_filter(include_logs, include_backups)

    destination_resolved = _resolved(destination_path)
    total = count_included_files(world_path, include_logs, include_backups, skip_file=destination_path)
    progress.set_total(total)
    logger.info(
        f"Backing up '{world_name}' to {destination_path} "
        f"({total} files, logs={include_logs}, backups={include_backups})"
    )

    try:
        output = open(destination_path, "wb")
    except OSError as e:
        raise ArchiveError(f"Failed to create ZIP file: {e}") from e

    with output:
        archive = zipfile.ZipFile(output, "w", zipfile.ZIP_DEFLATED, strict_timestamps=False)
        try:
            completed = _write_entries(archive, world_path, is_included, destination_resolved, progress, notify)
        except ArchiveError:
            _close_partial(archive)
            raise

        try:
            archive.close()
        except (OSError, ValueError) as e:
            raise ArchiveError(f"Failed to finish ZIP file: {e}") from e

    if completed < total:
        # Files deleted after the counting pass
        logger.warning(f"{total - completed} files disappeared while backing up '{world_name}'")
        progress.set_total(completed)

    logger.info(f"Backup of '{world_name}' finished: {completed} files")
    return str(destination_path)


def _write_entries(
    archive: zipfile.ZipFile,
    world_path: Path,
    is_included: Callable[[PurePosixPath], bool],
    destination_resolved: Path,
    progress: ProgressChannel,
    notify: Optional[Callable[[], None]],
) -> int:
    """Write the world's directories and files, returning the file count."""
    completed = 0

    for directory, relative_dir, files in _walk(world_path, is_included):
        # The world root itself has no entry
        if relative_dir.parts:
            try:
                archive.write(directory, relative_dir.as_posix())
            except (OSError, ValueError) as e:
                raise ArchiveError(f"Failed to add directory to ZIP: {e}") from e

        for name in files:
            file_path = directory / name
            if not file_path.is_file():
                continue
            # An archive saved inside the world must not include itself
            if _resolved(file_path) == destination_resolved:
                continue

            arcname = (relative_dir / name).as_posix()
            completed += 1
            progress.advance(completed, arcname)
            if notify is not None:
                notify()

            try:
                info = zipfile.ZipInfo.from_file(file_path, arcname, strict_timestamps=False)
                data = file_path.read_bytes()
            except OSError as e:
                raise ArchiveError(f"Failed to read file {arcname}: {e}") from e

            try:
                archive.writestr(info, data, compress_type=zipfile.ZIP_DEFLATED)
            except (OSError, ValueError, zipfile.LargeZipFile) as e:
                raise ArchiveError(f"Failed to write to ZIP: {e}") from e

    return completed


def _close_partial(archive: zipfile.ZipFile) -> None:
    """Finish the central directory of an archive abandoned after an error."""
    try:
        archive.close()
    except (OSError, ValueError) as e:
        logger.debug(f"Could not finish partial archive: {e}")
