"""Reusable GUI widgets for the application.

Widgets:
    PathSelector: A compound widget combining a label, text entry, and browse
                  button for folder selection. Includes a visual status
                  indicator showing if the folder exists.
"""

from .path_selector import PathSelector

__all__ = [
    "PathSelector",
]
