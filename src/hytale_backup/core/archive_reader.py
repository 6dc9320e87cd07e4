"""Import of a ZIP archive into the saves folder as a world.

Importing replaces any world with the same name. Entry names are
sanitized so nothing can be written outside the new world folder.
"""

import shutil
import zipfile
from pathlib import Path
from typing import Optional

from ..config.path_validator import is_path_under_root, safe_member_path, validate_world_name
from ..config.paths import resolve_worlds_root
from ..errors import WorldImportError
from ..logging_config import get_logger

logger = get_logger("archive_reader")


def import_archive(
    source_archive_path: Path,
    target_world_name: str,
    worlds_root: Optional[Path] = None,
) -> Path:
    """Extract an archive into <worlds_root>/<target_world_name>.

    An existing world of that name is deleted first. Entries that would
    land outside the world folder are skipped.

    Args:
        source_archive_path: ZIP file to import
        target_world_name: Folder name for the imported world
        worlds_root: Saves folder, defaults to the platform saves folder

    Returns:
        Path of the imported world directory

    Raises:
        WorldImportError: If the name is invalid, the archive cannot be
            opened or read, the old world cannot be deleted, or a file or
            directory cannot be created
        PlatformError: If worlds_root is None and the saves folder is unknown
    """
    is_valid, message = validate_world_name(target_world_name)
    if not is_valid:
        raise WorldImportError(message)

    if worlds_root is None:
        worlds_root = resolve_worlds_root()
    world_path = worlds_root / target_world_name

    logger.info(f"Importing {source_archive_path} as world '{target_world_name}'")

    # Open before deleting anything so a corrupt archive leaves the world intact
    try:
        archive = zipfile.ZipFile(source_archive_path, "r")
    except FileNotFoundError as e:
        raise WorldImportError(f"Failed to open ZIP file: {e}") from e
    except (OSError, zipfile.BadZipFile) as e:
        raise WorldImportError(f"Failed to read ZIP file: {e}") from e

    with archive:
        if world_path.exists():
            logger.info(f"Replacing existing world at {world_path}")
            try:
                shutil.rmtree(world_path)
            except OSError as e:
                raise WorldImportError(f"Failed to delete existing world: {e}") from e

        try:
            world_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorldImportError(f"Failed to create directory: {e}") from e

        extracted = 0
        skipped = 0
        for info in archive.infolist():
            relative = safe_member_path(info.filename)
            if relative is None:
                logger.warning(f"Skipping unsafe archive entry: {info.filename!r}")
                skipped += 1
                continue

            out_path = world_path.joinpath(*relative.parts)
            if not is_path_under_root(out_path, world_path):
                logger.warning(f"Skipping archive entry outside the world: {info.filename!r}")
                skipped += 1
                continue

            if info.filename.endswith(("/", "\\")):
                try:
                    out_path.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise WorldImportError(f"Failed to create directory: {e}") from e
                continue

            try:
                out_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise WorldImportError(f"Failed to create directory: {e}") from e

            try:
                data = archive.read(info)
            except (OSError, zipfile.BadZipFile, RuntimeError, EOFError) as e:
                raise WorldImportError(f"Failed to read ZIP entry {info.filename}: {e}") from e

            try:
                out_path.write_bytes(data)
            except OSError as e:
                raise WorldImportError(f"Failed to write file {relative}: {e}") from e
            extracted += 1

    logger.info(f"Imported world '{target_world_name}': {extracted} files, {skipped} entries skipped")
    return world_path
