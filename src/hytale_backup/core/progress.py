"""Thread-safe progress state shared by the background worker and the UI.

The channel holds a single immutable TransferProgress snapshot behind a
lock. Writers replace the whole snapshot and readers copy it out, so
fields such as completed and current_item are always seen together.
"""

import threading
from dataclasses import replace
from typing import Optional

from .models import TransferOutcome, TransferProgress


class ProgressChannel:
    """Latest-state channel for one transfer at a time."""

    def __init__(self):
        self._lock = threading.Lock()
        self._state = TransferProgress()

    def snapshot(self) -> TransferProgress:
        """Get a consistent copy of the current progress."""
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._state.running

    def begin(self) -> bool:
        """Claim the channel for a new transfer.

        Resets the counters and marks the transfer as running, unless
        another transfer is still running.

        Returns:
            True if the transfer may start, False if the channel is busy
        """
        with self._lock:
            if self._state.running:
                return False
            self._state = TransferProgress(running=True)
            return True

    def set_total(self, total: int) -> None:
        with self._lock:
            self._state = replace(self._state, total=max(total, self._state.completed))

    def advance(self, completed: int, current_item: str) -> None:
        """Record that a file is being processed.

        Args:
            completed: Number of files processed including this one
            current_item: Archive name of the file
        """
        with self._lock:
            # Files created after the counting pass raise the total
            total = max(self._state.total, completed)
            self._state = replace(
                self._state,
                completed=completed,
                total=total,
                current_item=current_item,
            )

    def finish(self, outcome: TransferOutcome) -> None:
        """Mark the transfer as ended and publish its outcome."""
        with self._lock:
            self._state = replace(self._state, running=False, outcome=outcome)

    def take_outcome(self) -> Optional[TransferOutcome]:
        """Return the finished transfer's outcome and clear it.

        Returns:
            The outcome, or None if no transfer finished since the last call
        """
        with self._lock:
            outcome = self._state.outcome
            if outcome is not None:
                self._state = replace(self._state, outcome=None)
            return outcome
