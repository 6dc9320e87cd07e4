"""Data models for worlds, their backups and logs, and transfer progress."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class WorldInfo:
    """A world save directory as found during an inventory refresh."""
    name: str
    location: Path
    size_bytes: int
    last_played: Optional[str] = None  # "YYYY-MM-DD HH:MM:SS"


@dataclass(frozen=True)
class BackupEntry:
    """A file inside a world's backup folder."""
    name: str
    location: Path
    size_bytes: int


@dataclass(frozen=True)
class LogEntry:
    """The most recent log file of a world."""
    name: str
    location: Path
    content: str


@dataclass(frozen=True)
class TransferOutcome:
    """Final result of a transfer: the archive path or an error message."""
    path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, path: str) -> "TransferOutcome":
        return cls(path=path)

    @classmethod
    def failure(cls, error: str) -> "TransferOutcome":
        return cls(error=error)


@dataclass(frozen=True)
class TransferProgress:
    """Snapshot of a transfer's progress as seen by the UI."""
    completed: int = 0
    total: int = 0
    current_item: str = ""
    running: bool = False
    outcome: Optional[TransferOutcome] = None

    @property
    def fraction(self) -> float:
        """Completed share of the transfer between 0.0 and 1.0."""
        if self.total <= 0:
            return 0.0
        return min(self.completed / self.total, 1.0)
