from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from hytale_backup.core.naming import default_archive_name, infer_world_name, is_zip_archive


def test_default_archive_name() -> None:
    name = default_archive_name("Orbis", datetime(2026, 1, 13, 19, 35, 6))
    assert name == "Orbis_2026-01-13_19-35-06.zip"


def test_default_archive_name_uses_current_time() -> None:
    name = default_archive_name("Orbis")
    assert name.startswith("Orbis_")
    assert name.endswith(".zip")
    assert len(name) == len("Orbis_2026-01-13_19-35-06.zip")


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("Orbis_2026-01-13_19-35-06.zip", "Orbis"),
        ("my_world_2026-01-13_19-35-06.zip", "my_world"),
        ("my_world.zip", "my_world"),
        ("_2026-01-13_19-35-06.zip", "_2026-01-13_19-35-06"),
        ("Orbis_2026-01-13.zip", "Orbis_2026-01-13"),
    ],
)
def test_infer_world_name(filename: str, expected: str) -> None:
    assert infer_world_name(Path("/downloads") / filename) == expected


@pytest.mark.parametrize(
    ("filename", "expected"),
    [("a.zip", True), ("A.ZIP", True), ("a.zip.txt", False), ("zip", False), ("a.7z", False)],
)
def test_is_zip_archive(filename: str, expected: bool) -> None:
    assert is_zip_archive(Path(filename)) is expected
