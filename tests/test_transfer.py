from __future__ import annotations

import threading
import zipfile
from pathlib import Path

import pytest

from hytale_backup.core import transfer
from hytale_backup.core.transfer import TransferRunner
from hytale_backup.errors import ArchiveError, TransferBusyError


@pytest.fixture
def runner(worlds_root: Path):
    runner = TransferRunner(worlds_root=worlds_root)
    yield runner
    runner.shutdown(wait=True)


def test_backup_success(runner: TransferRunner, sample_world: Path, tmp_path: Path) -> None:
    destination = tmp_path / "Orbis.zip"

    outcome = runner.start_backup("Orbis", destination, False, False).result(timeout=10)

    assert outcome.ok
    assert outcome.path == str(destination)
    state = runner.progress.snapshot()
    assert not state.running
    assert state.completed == state.total == 2
    assert runner.progress.take_outcome() == outcome
    with zipfile.ZipFile(destination) as archive:
        assert "data.bin" in archive.namelist()


def test_backup_failure_is_reported(runner: TransferRunner, worlds_root: Path, tmp_path: Path) -> None:
    outcome = runner.start_backup("Missing", tmp_path / "x.zip", True, True).result(timeout=10)

    assert not outcome.ok
    assert "Missing" in outcome.error
    assert not runner.is_busy
    taken = runner.progress.take_outcome()
    assert taken is not None and taken.error == outcome.error


def test_only_one_backup_at_a_time(
    runner: TransferRunner,
    sample_world: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    release = threading.Event()
    started = threading.Event()

    def slow_write_archive(world_name, destination, include_logs, include_backups, progress, **kwargs):
        started.set()
        release.wait(timeout=10)
        return str(destination)

    monkeypatch.setattr(transfer, "write_archive", slow_write_archive)

    future = runner.start_backup("Orbis", tmp_path / "one.zip", True, True)
    assert started.wait(timeout=10)

    with pytest.raises(TransferBusyError):
        runner.start_backup("Orbis", tmp_path / "two.zip", True, True)
    with pytest.raises(TransferBusyError):
        runner.import_world(tmp_path / "one.zip", "Other")

    release.set()
    assert future.result(timeout=10).ok
    assert not runner.is_busy


def test_notify_called_after_finish(runner: TransferRunner, sample_world: Path, tmp_path: Path) -> None:
    calls = []
    runner.start_backup("Orbis", tmp_path / "n.zip", True, True, notify=lambda: calls.append(1)).result(timeout=10)
    # One per file plus the final one
    assert len(calls) == 6


def test_import_world_round_trip(runner: TransferRunner, sample_world: Path, worlds_root: Path, tmp_path: Path) -> None:
    archive_path = tmp_path / "Orbis.zip"
    runner.start_backup("Orbis", archive_path, True, True).result(timeout=10)

    world = runner.import_world(archive_path, "Orbis Copy")

    assert world == worlds_root / "Orbis Copy"
    assert (world / "data.bin").read_bytes() == (sample_world / "data.bin").read_bytes()
    assert (world / "backup" / "2026-01-10.zip").exists()


def test_backup_refused_while_importing(
    runner: TransferRunner,
    sample_world: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    release = threading.Event()
    started = threading.Event()

    def slow_import_archive(archive_path, world_name, worlds_root=None):
        started.set()
        release.wait(timeout=10)
        return worlds_root / world_name

    monkeypatch.setattr(transfer, "import_archive", slow_import_archive)

    importer = threading.Thread(target=runner.import_world, args=(tmp_path / "in.zip", "Orbis"))
    importer.start()
    assert started.wait(timeout=10)

    assert runner.is_busy
    with pytest.raises(TransferBusyError):
        runner.start_backup("Orbis", tmp_path / "out.zip", True, True)
    with pytest.raises(TransferBusyError):
        runner.import_world(tmp_path / "in.zip", "Other")
    assert not runner.progress.is_running

    release.set()
    importer.join(timeout=10)
    assert not runner.is_busy
    assert runner.start_backup("Orbis", tmp_path / "out.zip", True, True).result(timeout=10).ok


def test_failed_import_releases_the_guard(runner: TransferRunner, sample_world: Path, tmp_path: Path) -> None:
    with pytest.raises(ArchiveError):
        runner.import_world(tmp_path / "missing.zip", "Orbis")

    assert not runner.is_busy
    assert runner.start_backup("Orbis", tmp_path / "out.zip", True, True).result(timeout=10).ok


def test_read_failure_is_reported(
    runner: TransferRunner,
    sample_world: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def denied(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_bytes", denied)

    outcome = runner.start_backup("Orbis", tmp_path / "out.zip", True, True).result(timeout=10)

    assert not outcome.ok
    assert outcome.error.startswith("Failed to read file")
    state = runner.progress.snapshot()
    assert not state.running
    assert state.outcome == outcome


def test_backup_after_shutdown_does_not_stay_busy(runner: TransferRunner, sample_world: Path, tmp_path: Path) -> None:
    runner.shutdown()

    with pytest.raises(RuntimeError):
        runner.start_backup("Orbis", tmp_path / "out.zip", True, True)

    assert not runner.is_busy
    outcome = runner.progress.take_outcome()
    assert outcome is not None
    assert not outcome.ok
