from __future__ import annotations

from pathlib import Path

import pytest

from hytale_backup.core import inventory
from hytale_backup.core.inventory import (
    UNREADABLE_LOG_PLACEHOLDER,
    delete_backup,
    directory_size,
    format_size,
    last_played,
    latest_log,
    list_backups,
    list_worlds,
)
from hytale_backup.core.models import BackupEntry
from hytale_backup.errors import ArchiveError, UnsupportedPlatform

from conftest import write_files


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (1024 * 1024, "1.00 MB"),
        (1024 * 1024 * 1024, "1.00 GB"),
        (5 * 1024 * 1024 * 1024 + 512 * 1024 * 1024, "5.50 GB"),
    ],
)
def test_format_size(num_bytes: int, expected: str) -> None:
    assert format_size(num_bytes) == expected


def test_last_played_uses_greatest_log_name(sample_world: Path) -> None:
    assert last_played(sample_world) == "2026-01-13 19:35:06"


def test_last_played_without_logs(tmp_path: Path) -> None:
    assert last_played(tmp_path) is None


def test_last_played_ignores_short_names(tmp_path: Path) -> None:
    write_files(tmp_path, {"logs/short.log": b""})
    assert last_played(tmp_path) is None


def test_last_played_ignores_non_log_files(tmp_path: Path) -> None:
    write_files(tmp_path, {
        "logs/2026-01-01_10-00-00_server.log": b"",
        "logs/2027-01-01_10-00-00_server.txt": b"",
    })
    assert last_played(tmp_path) == "2026-01-01 10:00:00"


def test_directory_size_counts_nested_files(tmp_path: Path) -> None:
    write_files(tmp_path, {"a.bin": b"x" * 10, "sub/deeper/b.bin": b"y" * 5})
    (tmp_path / "empty").mkdir()
    assert directory_size(tmp_path) == 15


def test_list_worlds(worlds_root: Path, sample_world: Path) -> None:
    write_files(worlds_root, {"Zeta/save.dat": b"abc", "not-a-world.txt": b"ignored"})

    worlds = list_worlds(worlds_root)

    assert [w.name for w in worlds] == ["Orbis", "Zeta"]
    orbis = worlds[0]
    assert orbis.location == sample_world
    assert orbis.size_bytes == directory_size(sample_world)
    assert orbis.last_played == "2026-01-13 19:35:06"
    assert worlds[1].last_played is None
    assert worlds[1].size_bytes == 3


def test_list_worlds_missing_root(tmp_path: Path) -> None:
    assert list_worlds(tmp_path / "missing") == []


def test_list_worlds_unresolvable_root(monkeypatch: pytest.MonkeyPatch) -> None:
    def unsupported() -> Path:
        raise UnsupportedPlatform("Plan9")

    monkeypatch.setattr(inventory, "resolve_worlds_root", unsupported)
    assert list_worlds() == []


def test_list_backups_skips_housekeeping_files(sample_world: Path) -> None:
    write_files(sample_world, {
        "backup/.DS_Store": b"",
        "backup/Thumbs.db": b"",
        "backup/desktop.ini": b"",
        "backup/._2026-01-10.zip": b"",
        "backup/2026-01-11.zip": b"12345",
    })
    (sample_world / "backup" / "nested").mkdir()

    backups = list_backups(sample_world)

    assert [b.name for b in backups] == ["2026-01-10.zip", "2026-01-11.zip"]
    assert backups[1].size_bytes == 5
    assert backups[1].location == sample_world / "backup" / "2026-01-11.zip"


def test_list_backups_without_folder(tmp_path: Path) -> None:
    assert list_backups(tmp_path) == []


def test_latest_log(sample_world: Path) -> None:
    log = latest_log(sample_world)

    assert log is not None
    assert log.name == "2026-01-13_19-35-06_server.log"
    assert log.content == "[INFO] started\n[ERROR] failed\n"


def test_latest_log_undecodable(tmp_path: Path) -> None:
    write_files(tmp_path, {"logs/2026-02-01_00-00-00_server.log": b"\xff\xfe\x80bad"})

    log = latest_log(tmp_path)

    assert log is not None
    assert log.content == UNREADABLE_LOG_PLACEHOLDER


def test_latest_log_none(tmp_path: Path) -> None:
    assert latest_log(tmp_path) is None


def test_delete_backup(sample_world: Path) -> None:
    entry = list_backups(sample_world)[0]
    delete_backup(entry)
    assert not entry.location.exists()
    assert list_backups(sample_world) == []


def test_delete_backup_rejects_other_files(sample_world: Path) -> None:
    entry = BackupEntry(name="data.bin", location=sample_world / "data.bin", size_bytes=0)
    with pytest.raises(ArchiveError):
        delete_backup(entry)
    assert (sample_world / "data.bin").exists()


def test_delete_backup_missing_file(sample_world: Path) -> None:
    entry = BackupEntry(name="gone.zip", location=sample_world / "backup" / "gone.zip", size_bytes=0)
    with pytest.raises(ArchiveError, match="Failed to delete backup"):
        delete_backup(entry)
