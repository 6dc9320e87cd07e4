from __future__ import annotations

from pathlib import Path

import pytest


def write_files(root: Path, files: dict[str, bytes]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


@pytest.fixture
def worlds_root(tmp_path: Path) -> Path:
    root = tmp_path / "Saves"
    root.mkdir()
    return root


@pytest.fixture
def sample_world(worlds_root: Path) -> Path:
    world = worlds_root / "Orbis"
    write_files(world, {
        "data.bin": b"\x00\x01\x02" * 100,
        "universe/chunks/0.region": b"region-data",
        "logs/2026-01-01_00-00-00_server.log": b"old log\n",
        "logs/2026-01-13_19-35-06_server.log": b"[INFO] started\n[ERROR] failed\n",
        "backup/2026-01-10.zip": b"PK-backup",
    })
    return world
