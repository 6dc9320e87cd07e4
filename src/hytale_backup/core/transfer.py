"""Runs backups on a single background worker and imports synchronously.

TransferRunner is what the UI talks to. It owns the ProgressChannel, a
one-thread executor for backups, and the guard that allows only one
transfer at a time. There is no cancellation: a started backup runs
until it finishes or fails.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional

from .archive_reader import import_archive
from .archive_writer import write_archive
from .models import TransferOutcome
from .progress import ProgressChannel
from ..errors import ArchiveError, PlatformError, TransferBusyError
from ..logging_config import get_logger

logger = get_logger("transfer")


class TransferRunner:
    """Starts world backups in the background and imports in the foreground.

    The UI polls ``progress.snapshot()`` on its own timer and calls
    ``progress.take_outcome()`` once a backup is no longer running.
    """

    def __init__(
        self,
        progress: Optional[ProgressChannel] = None,
        worlds_root: Optional[Path] = None,
    ):
        """Initialize the runner.

        Args:
            progress: Channel to report through, a new one if None
            worlds_root: Saves folder, None for the platform saves folder
        """
        self.progress = progress or ProgressChannel()
        self.worlds_root = worlds_root
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hytale-backup")
        # Guards the check-then-claim of a transfer in either direction
        self._claim_lock = threading.Lock()
        self._importing = False

    @property
    def is_busy(self) -> bool:
        return self._importing or self.progress.is_running

    def start_backup(
        self,
        world_name: str,
        destination: Path,
        include_logs: bool,
        include_backups: bool,
        notify: Optional[Callable[[], None]] = None,
    ) -> "Future[TransferOutcome]":
        """Start compressing a world on the background worker.

        The flags are captured by value; changing them in the UI does not
        affect a running backup.

        Args:
            world_name: World folder to back up
            destination: ZIP file to write
            include_logs: Include the logs folder
            include_backups: Include the backup folder
            notify: Repaint hint, called from the worker thread

        Returns:
            Future resolving to the TransferOutcome

        Raises:
            TransferBusyError: If a transfer is already running
        """
        with self._claim_lock:
            if self._importing or not self.progress.begin():
                raise TransferBusyError()

        logger.debug(f"Queueing backup of '{world_name}'")
        try:
            return self._executor.submit(
                self._run_backup,
                world_name,
                Path(destination),
                bool(include_logs),
                bool(include_backups),
                self.worlds_root,
                notify,
            )
        except RuntimeError as e:
            # Executor already shut down
            self.progress.finish(TransferOutcome.failure(f"Could not start backup: {e}"))
            raise

    def _run_backup(
        self,
        world_name: str,
        destination: Path,
        include_logs: bool,
        include_backups: bool,
        worlds_root: Optional[Path],
        notify: Optional[Callable[[], None]],
    ) -> TransferOutcome:
        outcome = TransferOutcome.failure("Backup stopped unexpectedly")
        try:
            path = write_archive(
                world_name,
                destination,
                include_logs,
                include_backups,
                self.progress,
                worlds_root=worlds_root,
                notify=notify,
            )
            outcome = TransferOutcome.success(path)
        except (ArchiveError, PlatformError) as e:
            logger.error(f"Backup of '{world_name}' failed: {e}")
            outcome = TransferOutcome.failure(str(e))
        except Exception:
            logger.exception(f"Unexpected error while backing up '{world_name}'")
            raise
        finally:
            self.progress.finish(outcome)
            if notify is not None:
                notify()
        return outcome

    def import_world(self, archive_path: Path, world_name: str) -> Path:
        """Import an archive as a world, replacing any world of that name.

        Runs on the calling thread.

        Raises:
            TransferBusyError: If a backup or another import is running
            WorldImportError: If the import fails
            PlatformError: If the saves folder is unknown
        """
        with self._claim_lock:
            if self._importing or self.progress.is_running:
                raise TransferBusyError()
            self._importing = True

        try:
            return import_archive(Path(archive_path), world_name, worlds_root=self.worlds_root)
        finally:
            with self._claim_lock:
                self._importing = False

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker, waiting for a running backup if wait is True."""
        self._executor.shutdown(wait=wait)
