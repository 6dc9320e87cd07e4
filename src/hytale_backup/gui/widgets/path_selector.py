"""Folder chooser used by the settings dialog"""

from pathlib import Path
from tkinter import filedialog
from typing import Optional

import customtkinter as ctk

from ...config.paths import AppPaths
from ..styles import COLORS


class PathSelector(ctk.CTkFrame):
    """Label, entry and Browse/Reset buttons for one folder setting.

    An empty entry means "use the default". The default is shown as the
    entry's placeholder and the status marker checks whichever folder is
    in effect.
    """

    def __init__(
        self,
        master,
        label: str = "Folder:",
        initial_path: Optional[Path] = None,
        default_path: Optional[Path] = None,
        default_hint: str = "",
        **kwargs
    ):
        """Initialize the path selector widget.

        Args:
            master: Parent widget
            label: Label text to display
            initial_path: Folder currently configured, None for the default
            default_path: Folder used while the entry is empty
            default_hint: Placeholder shown when there is no default folder
            **kwargs: Additional arguments for CTkFrame
        """
        super().__init__(master, fg_color="transparent", **kwargs)

        self.default_path = default_path
        self.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(self, text=label, width=120, anchor="w").grid(row=0, column=0, padx=(0, 8), sticky="w")

        self.path_var = ctk.StringVar(value=str(initial_path) if initial_path else "")
        self.entry = ctk.CTkEntry(
            self,
            textvariable=self.path_var,
            placeholder_text=str(default_path) if default_path else default_hint,
        )
        self.entry.grid(row=0, column=1, padx=(0, 8), sticky="ew")
        self.path_var.trace_add("write", lambda *_: self._update_status())

        ctk.CTkButton(self, text="Browse", width=70, command=self._browse).grid(row=0, column=2)
        ctk.CTkButton(
            self,
            text="Reset",
            width=60,
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self.set_path(None),
        ).grid(row=0, column=3, padx=(4, 0))

        self.status_label = ctk.CTkLabel(self, text="", width=24)
        self.status_label.grid(row=0, column=4, padx=(4, 0))

        self._update_status()

    def _browse(self):
        start = self.effective_path()
        selected = filedialog.askdirectory(
            parent=self,
            initialdir=str(start) if start and start.is_dir() else None,
            title="Select Folder",
        )
        if selected:
            self.set_path(Path(selected))

    def _update_status(self):
        path = self.effective_path()
        if path is None:
            self.status_label.configure(text="", text_color="gray")
        elif path.is_dir():
            self.status_label.configure(text="OK", text_color=COLORS["success"])
        else:
            self.status_label.configure(text="?", text_color=COLORS["warning"])

    def get_path(self) -> Optional[Path]:
        """Get the folder typed or chosen by the user.

        Returns:
            The expanded path, or None if the entry is empty
        """
        value = self.path_var.get().strip()
        return AppPaths.expand_path(value) if value else None

    def effective_path(self) -> Optional[Path]:
        """Get the folder that will be used: the entry, else the default."""
        return self.get_path() or self.default_path

    def set_path(self, path: Optional[Path]):
        self.path_var.set(str(path) if path else "")
