from __future__ import annotations

import pytest

from hytale_backup.core.log_filter import LogLevel, classify, should_filter, visible_lines


@pytest.mark.parametrize(
    "line",
    [
        "[2026/01/13 19:35:06   INFO]  [Universe] Loaded",
        "-=|Setup|9.0",
        "=|Setup|12.5",
        "-=|Shutdown Modules|88.0",
        "=|Shutdown Modules|88.0",
    ],
)
def test_noise_is_hidden_when_enabled(line: str) -> None:
    assert should_filter(line, True) is True
    assert should_filter(line, False) is False


@pytest.mark.parametrize(
    "line",
    [
        "[2026/01/13 19:35:06  ERROR]  [World] Chunk failed",
        "[2026/01/13 19:35:06   WARN]  [World] Slow tick",
        "Plain text without a level",
        "",
    ],
)
def test_other_lines_are_kept(line: str) -> None:
    assert should_filter(line, True) is False


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("[ERROR] failed", LogLevel.ERROR),
        ("[WARN] careful", LogLevel.WARNING),
        ("[WARNING] careful", LogLevel.WARNING),
        ("[ERROR] after WARN", LogLevel.ERROR),
        ("[INFO] fine", LogLevel.INFO),
        ("no level", LogLevel.INFO),
    ],
)
def test_classify(line: str, expected: LogLevel) -> None:
    assert classify(line) is expected


def test_visible_lines() -> None:
    content = "[INFO] started\n-=|Setup|9.0\n[WARN] slow\n[ERROR] failed\n"

    assert visible_lines(content, False) == [
        ("[INFO] started", LogLevel.INFO),
        ("-=|Setup|9.0", LogLevel.INFO),
        ("[WARN] slow", LogLevel.WARNING),
        ("[ERROR] failed", LogLevel.ERROR),
    ]
    assert visible_lines(content, True) == [
        ("[WARN] slow", LogLevel.WARNING),
        ("[ERROR] failed", LogLevel.ERROR),
    ]
