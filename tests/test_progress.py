from __future__ import annotations

import threading

from hytale_backup.core.models import TransferOutcome, TransferProgress
from hytale_backup.core.progress import ProgressChannel


def test_initial_state_is_idle() -> None:
    channel = ProgressChannel()
    assert channel.snapshot() == TransferProgress()
    assert not channel.is_running
    assert channel.take_outcome() is None


def test_begin_resets_and_claims() -> None:
    channel = ProgressChannel()
    channel.begin()
    channel.set_total(3)
    channel.advance(2, "b.txt")
    channel.finish(TransferOutcome.success("/tmp/out.zip"))

    assert channel.begin() is True
    state = channel.snapshot()
    assert state == TransferProgress(running=True)


def test_begin_refuses_while_running() -> None:
    channel = ProgressChannel()
    assert channel.begin() is True
    assert channel.begin() is False
    assert channel.is_running


def test_advance_updates_fields_together() -> None:
    channel = ProgressChannel()
    channel.begin()
    channel.set_total(4)
    channel.advance(1, "data.bin")

    state = channel.snapshot()
    assert (state.completed, state.total, state.current_item) == (1, 4, "data.bin")
    assert state.fraction == 0.25


def test_completed_never_exceeds_total() -> None:
    channel = ProgressChannel()
    channel.begin()
    channel.set_total(1)
    channel.advance(1, "a")
    channel.advance(2, "b")

    state = channel.snapshot()
    assert state.completed == 2
    assert state.total == 2


def test_outcome_is_consumed_once() -> None:
    channel = ProgressChannel()
    channel.begin()
    assert channel.take_outcome() is None

    channel.finish(TransferOutcome.failure("disk full"))

    state = channel.snapshot()
    assert not state.running
    assert state.outcome == TransferOutcome(error="disk full")

    outcome = channel.take_outcome()
    assert outcome is not None
    assert not outcome.ok
    assert outcome.error == "disk full"
    assert channel.take_outcome() is None
    assert channel.snapshot().outcome is None


def test_fraction_without_total() -> None:
    assert TransferProgress().fraction == 0.0


def test_snapshots_are_consistent_under_concurrent_writes() -> None:
    channel = ProgressChannel()
    channel.begin()
    channel.set_total(2000)
    seen: list[TransferProgress] = []

    def writer() -> None:
        for i in range(1, 2001):
            channel.advance(i, f"file-{i}")

    thread = threading.Thread(target=writer)
    thread.start()
    while thread.is_alive():
        seen.append(channel.snapshot())
    thread.join()
    seen.append(channel.snapshot())

    for state in seen:
        if state.completed:
            assert state.current_item == f"file-{state.completed}"
        assert state.completed <= state.total
    completed = [s.completed for s in seen]
    assert completed == sorted(completed)
    assert completed[-1] == 2000
