"""Theme and style constants for the GUI.

Constants:
    COLORS: Button, status and log severity colors
    FONTS: Font family, size, and weight configurations
    PADDING: Spacing values for margins and padding
    WINDOW_SIZES: Default and minimum window dimensions
    PROGRESS_POLL_MS: How often the main window reads backup progress
"""

COLORS = {
    "primary": "#1f538d",        # Selected world
    "success": "#2d8a4e",        # Compress button, folder exists
    "success_hover": "#1e5c34",
    "danger": "#dc3545",         # Delete backup
    "danger_hover": "#a71d2a",
    "warning": "#ffb464",        # Folder missing
    "log_error": "#ff6464",
    "log_warning": "#ffb464",
}

# (family, size[, weight])
FONTS = {
    "title": ("Segoe UI", 18, "bold"),
    "heading": ("Segoe UI", 14, "bold"),
    "body": ("Segoe UI", 12),
    "small": ("Segoe UI", 10),
    "mono": ("Consolas", 11),    # Log viewer
}

# Pixels
PADDING = {
    "small": 10,
    "medium": 18,
    "large": 30,
}

# (width, height)
WINDOW_SIZES = {
    "main": (820, 660),
    "config_dialog": (640, 360),
    "min_main": (700, 560),
}

PROGRESS_POLL_MS = 100
