"""Classification and noise filtering of Hytale server log lines.

Used by the log viewer to colour lines by severity and, in "errors only"
mode, to hide INFO lines and the Setup/Shutdown progress lines the server
prints while starting and stopping.
"""

from enum import Enum

# Lines containing any of these are hidden in "errors only" mode
FILTER_PATTERNS = (
    "INFO]",
    "-=|Setup|",
    "=|Setup|",
    "-=|Shutdown Modules|",
    "=|Shutdown Modules|",
)


class LogLevel(Enum):
    """Severity of a log line, used for styling"""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


def classify(line: str) -> LogLevel:
    """Detect the severity of a log line.

    ERROR wins over WARN when both appear.
    """
    if "ERROR" in line:
        return LogLevel.ERROR
    if "WARN" in line:
        return LogLevel.WARNING
    return LogLevel.INFO


def should_filter(line: str, filter_enabled: bool) -> bool:
    """Check whether a log line should be hidden.

    Args:
        line: The log line to check
        filter_enabled: Whether "errors only" filtering is on

    Returns:
        True if the line should be hidden, False if it should be shown
    """
    if not filter_enabled:
        return False
    return any(pattern in line for pattern in FILTER_PATTERNS)


def visible_lines(content: str, errors_only: bool) -> list[tuple[str, LogLevel]]:
    """Split log content into the lines to display with their severity."""
    return [
        (line, classify(line))
        for line in content.splitlines()
        if not should_filter(line, errors_only)
    ]
