"""Core business logic module.

This module contains the world inventory and the archive engine.

Submodules:
    models: WorldInfo, BackupEntry, LogEntry and transfer progress snapshots
    inventory: Listing of worlds, their backups and latest log; size formatting
    archive_writer: ZIP backup of a world with include/exclude rules and progress
    archive_reader: Import of a ZIP archive into the saves folder
    progress: ProgressChannel shared by the background worker and the UI
    transfer: TransferRunner that runs one backup at a time in the background
    log_filter: Severity detection and noise filtering for log lines
    naming: Default archive filenames and world name inference
"""

from .progress import ProgressChannel
from .transfer import TransferRunner

__all__ = [
    "ProgressChannel",
    "TransferRunner",
]
