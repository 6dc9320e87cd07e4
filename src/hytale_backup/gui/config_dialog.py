"""Configuration/Settings dialog"""

import customtkinter as ctk

from ..config.manager import ConfigurationManager
from ..config.paths import AppPaths, resolve_worlds_root
from ..errors import PlatformError
from .styles import FONTS, PADDING, WINDOW_SIZES
from .widgets.path_selector import PathSelector


class ConfigDialog(ctk.CTkToplevel):
    """Settings dialog for the saves folder and the export folder.

    Accessed via the Settings button in the main window.
    """

    def __init__(self, parent, config_manager: ConfigurationManager):
        """Initialize the configuration dialog.

        Args:
            parent: Parent window
            config_manager: Configuration manager instance
        """
        super().__init__(parent)

        self.config_manager = config_manager
        self.config_changed = False

        self.title("Settings")
        width, height = WINDOW_SIZES["config_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self._create_ui()

        self.focus_force()

    def _create_ui(self):
        """Create the dialog UI."""
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["large"], pady=PADDING["large"])

        title = ctk.CTkLabel(container, text="Settings", font=FONTS["title"])
        title.pack(anchor="w", pady=(0, 5))

        subtitle = ctk.CTkLabel(
            container,
            text="Choose where worlds are read from and where backups are saved",
            font=FONTS["body"],
            text_color="gray",
        )
        subtitle.pack(anchor="w", pady=(0, PADDING["medium"]))

        self._create_paths_section(container)
        self._create_buttons(container)

    def _create_paths_section(self, parent):
        settings = self.config_manager.config.settings

        section = ctk.CTkFrame(parent)
        section.pack(fill="x", pady=(0, PADDING["medium"]))

        default_root = None
        default_hint = ""
        try:
            default_root = resolve_worlds_root()
        except PlatformError as e:
            default_hint = f"{e}, choose a folder"

        self.worlds_path_selector = PathSelector(
            section,
            label="Saves Folder:",
            initial_path=settings.worlds_path,
            default_path=default_root,
            default_hint=default_hint,
        )
        self.worlds_path_selector.pack(fill="x", padx=PADDING["medium"], pady=(PADDING["small"], 2))

        hint = ctk.CTkLabel(
            section,
            text="Reset to use the Hytale saves folder for this system",
            font=FONTS["small"],
            text_color="gray",
        )
        hint.pack(anchor="w", padx=PADDING["medium"], pady=(0, PADDING["small"]))

        self.export_path_selector = PathSelector(
            section,
            label="Backup Folder:",
            initial_path=settings.export_directory,
            default_path=AppPaths.default_export_dir(),
        )
        self.export_path_selector.pack(fill="x", padx=PADDING["medium"], pady=PADDING["small"])

    def _create_buttons(self, parent):
        button_frame = ctk.CTkFrame(parent, fg_color="transparent")
        button_frame.pack(fill="x", side="bottom")

        cancel_btn = ctk.CTkButton(
            button_frame,
            text="Cancel",
            width=100,
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        )
        cancel_btn.pack(side="left")

        save_btn = ctk.CTkButton(
            button_frame,
            text="Save",
            width=120,
            command=self._save_and_close,
        )
        save_btn.pack(side="right")

    def _save_and_close(self):
        """Save configuration and close dialog."""
        settings = self.config_manager.config.settings
        settings.worlds_path = self.worlds_path_selector.get_path()
        settings.export_directory = self.export_path_selector.get_path()

        self.config_manager.save()

        self.config_changed = True
        self.destroy()
