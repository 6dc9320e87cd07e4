"""Main application window: world list, details, and backup toolbar."""

from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Optional
import tkinter as tk

import customtkinter as ctk
from PIL import ImageTk

from ..logging_config import get_logger

logger = get_logger("main_window")

# Try to import tkinterdnd2 for drag and drop support
try:
    import tkinterdnd2
    HAS_DND = True
except ImportError:
    HAS_DND = False

from .. import __app_name__, __version__
from ..assets.loader import APP_ICON_ICO, get_asset_path, load_app_icon
from ..config.manager import ConfigurationManager
from ..core.inventory import delete_backup, format_size, latest_log, list_backups, list_worlds
from ..core.log_filter import LogLevel, visible_lines
from ..core.models import BackupEntry, TransferProgress, WorldInfo
from ..core.naming import default_archive_name, infer_world_name, is_zip_archive
from ..core.transfer import TransferRunner
from ..errors import ArchiveError, PlatformError, TransferBusyError
from .config_dialog import ConfigDialog
from .file_manager import reveal_in_file_manager
from .styles import COLORS, FONTS, PADDING, PROGRESS_POLL_MS, WINDOW_SIZES

# Text widget tags for coloured log lines
_LOG_TAGS = {
    LogLevel.ERROR: "log_error",
    LogLevel.WARNING: "log_warning",
}


class MainWindow(ctk.CTk):
    """Main application window.

    Layout:
    - Top: world list with Refresh, Import and Settings buttons
    - Middle: details of the selected world with Backups and Logs tabs
    - Bottom: include checkboxes and Compress button, replaced by a
      progress bar while a backup runs, and the status line
    """

    def __init__(self, config_manager: ConfigurationManager, runner: TransferRunner):
        super().__init__()

        self.config_manager = config_manager
        self.runner = runner

        settings = config_manager.config.settings
        self.include_logs_var = ctk.BooleanVar(value=settings.include_logs)
        self.include_backups_var = ctk.BooleanVar(value=settings.include_backups)
        self.errors_only_var = ctk.BooleanVar(value=settings.errors_only_logs)

        self.worlds: list[WorldInfo] = []
        self.selected_world: Optional[WorldInfo] = None
        self.world_buttons: dict[str, ctk.CTkButton] = {}
        self._polling = False

        # Window setup
        self.title(f"{__app_name__} v{__version__}")
        width, height = WINDOW_SIZES["main"]
        min_width, min_height = WINDOW_SIZES["min_main"]
        self.geometry(f"{width}x{height}")
        self.minsize(min_width, min_height)

        # Initialize drag and drop support
        self._dnd_enabled = False
        if HAS_DND:
            try:
                # tkinterdnd2 needs to initialize its Tcl library
                tkinterdnd2.TkinterDnD._require(self)
                self._dnd_enabled = True
            except (RuntimeError, OSError, tk.TclError) as e:
                logger.debug("tkdnd not available: %s", e)

        self._set_app_icon()
        self._create_ui()
        self._setup_dnd()
        self._refresh_worlds()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _set_app_icon(self):
        try:
            ico_path = get_asset_path(APP_ICON_ICO)
            if ico_path.exists():
                self.iconbitmap(str(ico_path))
            # Keep reference to prevent garbage collection
            self._icon_image = ImageTk.PhotoImage(load_app_icon(64))
            self.iconphoto(True, self._icon_image)
        except (OSError, tk.TclError) as e:
            logger.debug("Could not set app icon: %s", e)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _create_ui(self):
        """Create the main UI layout."""
        # Bottom widgets are packed first so they keep their space on resize
        self._create_status_bar()
        self._create_toolbar()

        self.main_container = ctk.CTkFrame(self, fg_color="transparent")
        self.main_container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=(PADDING["medium"], 0))

        title = ctk.CTkLabel(self.main_container, text=__app_name__, font=FONTS["title"])
        title.pack(pady=(0, PADDING["small"]))

        self._create_world_list()
        self._create_details()

    def _create_world_list(self):
        header = ctk.CTkFrame(self.main_container, fg_color="transparent")
        header.pack(fill="x")

        label = ctk.CTkLabel(header, text="Available Worlds", font=FONTS["heading"])
        label.pack(side="left")

        self.settings_btn = ctk.CTkButton(header, text="Settings", width=90, command=self._open_settings)
        self.settings_btn.pack(side="right")

        self.import_btn = ctk.CTkButton(header, text="Import World", width=110, command=self._on_import_clicked)
        self.import_btn.pack(side="right", padx=(0, 5))

        refresh_btn = ctk.CTkButton(header, text="Refresh", width=80, command=self._refresh_worlds)
        refresh_btn.pack(side="right", padx=(0, 5))

        self.world_list = ctk.CTkScrollableFrame(self.main_container, height=120)
        self.world_list.pack(fill="x", pady=PADDING["small"])

    def _create_details(self):
        self.details_frame = ctk.CTkFrame(self.main_container)
        self.details_frame.pack(fill="both", expand=True, pady=(0, PADDING["small"]))

        self.details_hint = ctk.CTkLabel(
            self.details_frame,
            text="Select a world to see its details",
            font=FONTS["body"],
            text_color="gray",
        )
        self.details_hint.pack(pady=PADDING["large"])

        self.info_frame = ctk.CTkFrame(self.details_frame, fg_color="transparent")
        self.world_name_label = ctk.CTkLabel(self.info_frame, text="", font=FONTS["heading"])
        self.world_name_label.grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 5))

        self.detail_values: dict[str, ctk.CTkLabel] = {}
        for row, (key, caption) in enumerate(
            [("size", "Size:"), ("last_played", "Last played:"), ("path", "Path:")], start=1
        ):
            ctk.CTkLabel(self.info_frame, text=caption, font=FONTS["body"]).grid(
                row=row, column=0, sticky="w", padx=(0, PADDING["small"])
            )
            value = ctk.CTkLabel(self.info_frame, text="", font=FONTS["small"] if key == "path" else FONTS["body"])
            value.grid(row=row, column=1, sticky="w")
            self.detail_values[key] = value

        self.tabs = ctk.CTkTabview(self.details_frame, height=260)
        self.tabs.add("Backups")
        self.tabs.add("Logs")

        self.backups_list = ctk.CTkScrollableFrame(self.tabs.tab("Backups"))
        self.backups_list.pack(fill="both", expand=True)

        logs_tab = self.tabs.tab("Logs")
        logs_header = ctk.CTkFrame(logs_tab, fg_color="transparent")
        logs_header.pack(fill="x")

        self.log_name_label = ctk.CTkLabel(logs_header, text="", font=FONTS["body"])
        self.log_name_label.pack(side="left")

        self.log_reveal_btn = ctk.CTkButton(logs_header, text="Show in Folder", width=110)
        self.log_reveal_btn.pack(side="right")

        errors_only = ctk.CTkCheckBox(
            logs_header,
            text="Errors only",
            variable=self.errors_only_var,
            command=self._on_errors_only_toggle,
        )
        errors_only.pack(side="right", padx=PADDING["small"])

        self.log_text = ctk.CTkTextbox(logs_tab, font=FONTS["mono"], wrap="none")
        self.log_text.pack(fill="both", expand=True, pady=(5, 0))
        self.log_text.tag_config("log_error", foreground=COLORS["log_error"])
        self.log_text.tag_config("log_warning", foreground=COLORS["log_warning"])

    def _create_toolbar(self):
        """Create the bottom toolbar with backup options and progress display."""
        self.toolbar = ctk.CTkFrame(self)
        self.toolbar.pack(side="bottom", fill="x", padx=PADDING["medium"], pady=(0, 5))

        self.controls_frame = ctk.CTkFrame(self.toolbar, fg_color="transparent")
        self.controls_frame.pack(fill="x", padx=PADDING["small"], pady=PADDING["small"])

        ctk.CTkCheckBox(
            self.controls_frame,
            text="Include logs",
            variable=self.include_logs_var,
            command=self._on_flags_changed,
        ).pack(side="left")

        ctk.CTkCheckBox(
            self.controls_frame,
            text="Include backups",
            variable=self.include_backups_var,
            command=self._on_flags_changed,
        ).pack(side="left", padx=PADDING["medium"])

        self.compress_btn = ctk.CTkButton(
            self.controls_frame,
            text="Compress World",
            width=140,
            fg_color=COLORS["success"],
            hover_color=COLORS["success_hover"],
            state="disabled",
            command=self._start_backup,
        )
        self.compress_btn.pack(side="right")

        # Shown instead of the controls while a backup runs
        self.progress_frame = ctk.CTkFrame(self.toolbar, fg_color="transparent")
        ctk.CTkLabel(self.progress_frame, text="Compressing...", font=FONTS["body"]).pack()
        self.progress_bar = ctk.CTkProgressBar(self.progress_frame)
        self.progress_bar.set(0)
        self.progress_bar.pack(fill="x", padx=PADDING["small"], pady=5)
        self.progress_count_label = ctk.CTkLabel(self.progress_frame, text="", font=FONTS["small"])
        self.progress_count_label.pack()
        self.progress_file_label = ctk.CTkLabel(self.progress_frame, text="", font=FONTS["small"], text_color="gray")
        self.progress_file_label.pack()

    def _create_status_bar(self):
        self.status_label = ctk.CTkLabel(
            self,
            text="",
            font=FONTS["small"],
            anchor="w",
            justify="left",
        )
        self.status_label.pack(side="bottom", fill="x", padx=PADDING["medium"], pady=(0, 5))

    def _setup_dnd(self):
        """Accept .zip files dropped on the window as world imports."""
        if not self._dnd_enabled:
            return

        try:
            self.drop_target_register(tkinterdnd2.DND_FILES)
            self.dnd_bind('<<Drop>>', self._on_drop)
        except (AttributeError, tk.TclError) as e:
            logger.debug("Could not register drop target: %s", e)
            self._dnd_enabled = False

    # ------------------------------------------------------------------
    # World list and details
    # ------------------------------------------------------------------

    def _refresh_worlds(self):
        """Reload the world list from disk."""
        worlds_root = self.config_manager.worlds_root()
        self.runner.worlds_root = worlds_root
        self.worlds = list_worlds(worlds_root) if worlds_root is not None else []

        for widget in self.world_list.winfo_children():
            widget.destroy()
        self.world_buttons.clear()

        if not self.worlds:
            ctk.CTkLabel(
                self.world_list,
                text="No worlds found",
                font=FONTS["body"],
                text_color="gray",
            ).pack(pady=PADDING["small"])

        for world in self.worlds:
            button = ctk.CTkButton(
                self.world_list,
                text=world.name,
                anchor="w",
                fg_color="transparent",
                text_color=("gray10", "gray90"),
                hover_color=("gray80", "gray30"),
                command=lambda w=world: self._select_world(w),
            )
            button.pack(fill="x", pady=1)
            self.world_buttons[world.name] = button

        self._select_world(None)
        logger.debug("World list refreshed: %d worlds", len(self.worlds))

    def _select_world(self, world: Optional[WorldInfo]):
        self.selected_world = world
        for name, button in self.world_buttons.items():
            selected = world is not None and name == world.name
            button.configure(fg_color=COLORS["primary"] if selected else "transparent")
        self._update_compress_state()
        self._render_details()

    def _render_details(self):
        world = self.selected_world
        if world is None:
            self.info_frame.pack_forget()
            self.tabs.pack_forget()
            self.details_hint.pack(pady=PADDING["large"])
            return

        self.details_hint.pack_forget()
        self.info_frame.pack(fill="x", padx=PADDING["small"], pady=PADDING["small"])
        self.tabs.pack(fill="both", expand=True, padx=PADDING["small"], pady=(0, PADDING["small"]))

        self.world_name_label.configure(text=world.name)
        self.detail_values["size"].configure(text=format_size(world.size_bytes))
        self.detail_values["last_played"].configure(text=world.last_played or "Unknown")
        self.detail_values["path"].configure(text=str(world.location))

        self._render_backups_tab(world)
        self._render_logs_tab(world)

    def _render_backups_tab(self, world: WorldInfo):
        for widget in self.backups_list.winfo_children():
            widget.destroy()

        backups = list_backups(world.location)
        if not backups:
            ctk.CTkLabel(
                self.backups_list,
                text="No backups found",
                font=FONTS["body"],
                text_color="gray",
            ).pack(pady=PADDING["small"])
            return

        for backup in backups:
            row = ctk.CTkFrame(self.backups_list)
            row.pack(fill="x", pady=2)

            info = ctk.CTkFrame(row, fg_color="transparent")
            info.pack(side="left", fill="x", expand=True, padx=PADDING["small"], pady=5)
            ctk.CTkLabel(info, text=backup.name, font=FONTS["body"]).pack(anchor="w")
            ctk.CTkLabel(info, text=format_size(backup.size_bytes), font=FONTS["small"], text_color="gray").pack(anchor="w")

            ctk.CTkButton(
                row,
                text="Delete",
                width=70,
                height=28,
                fg_color=COLORS["danger"],
                hover_color=COLORS["danger_hover"],
                command=lambda b=backup: self._delete_backup(b),
            ).pack(side="right", padx=(5, PADDING["small"]))

            ctk.CTkButton(
                row,
                text="Show in Folder",
                width=110,
                height=28,
                command=lambda b=backup: reveal_in_file_manager(b.location),
            ).pack(side="right")

    def _render_logs_tab(self, world: WorldInfo):
        self.log_text.configure(state="normal")
        self.log_text.delete("1.0", "end")

        log = latest_log(world.location)
        if log is None:
            self.log_name_label.configure(text="No logs found")
            self.log_reveal_btn.configure(state="disabled")
            self.log_text.configure(state="disabled")
            return

        self.log_name_label.configure(text=log.name)
        self.log_reveal_btn.configure(state="normal", command=lambda: reveal_in_file_manager(log.location))

        for line, level in visible_lines(log.content, self.errors_only_var.get()):
            tag = _LOG_TAGS.get(level)
            if tag:
                self.log_text.insert("end", line + "\n", tag)
            else:
                self.log_text.insert("end", line + "\n")

        self.log_text.configure(state="disabled")

    def _delete_backup(self, backup: BackupEntry):
        confirmed = messagebox.askyesno(
            "Delete Backup",
            f"Are you sure you want to delete this backup?\n\n{backup.name}\n\n"
            f"This action cannot be undone.",
            parent=self,
        )
        if not confirmed:
            return

        try:
            delete_backup(backup)
        except ArchiveError as e:
            self._set_status(f"Error: {e}")
            return

        self._set_status("Backup deleted")
        if self.selected_world is not None:
            self._render_backups_tab(self.selected_world)

    # ------------------------------------------------------------------
    # Backup
    # ------------------------------------------------------------------

    def _update_compress_state(self):
        enabled = self.selected_world is not None and not self.runner.is_busy
        self.compress_btn.configure(state="normal" if enabled else "disabled")

    def _start_backup(self):
        world = self.selected_world
        if world is None:
            return

        destination = filedialog.asksaveasfilename(
            parent=self,
            title="Save World Backup",
            initialdir=str(self.config_manager.export_directory()),
            initialfile=default_archive_name(world.name),
            defaultextension=".zip",
            filetypes=[("ZIP", "*.zip")],
        )
        if not destination:
            return

        try:
            self.runner.start_backup(
                world.name,
                Path(destination),
                include_logs=self.include_logs_var.get(),
                include_backups=self.include_backups_var.get(),
            )
        except TransferBusyError as e:
            self._set_status(f"Error: {e}")
            return

        self._set_status("")
        self._show_progress(True)
        if not self._polling:
            self._polling = True
            self.after(PROGRESS_POLL_MS, self._poll_progress)

    def _poll_progress(self):
        """Render the background backup's progress and pick up its result."""
        state = self.runner.progress.snapshot()
        if state.running:
            self._render_progress(state)
            self.after(PROGRESS_POLL_MS, self._poll_progress)
            return

        self._polling = False
        self._show_progress(False)

        outcome = self.runner.progress.take_outcome()
        if outcome is None:
            return
        if outcome.ok:
            self._set_status(f"Backup created successfully:\n{outcome.path}")
        else:
            self._set_status(f"Error: {outcome.error}")
            messagebox.showerror("Backup Error", outcome.error, parent=self)

    def _render_progress(self, state: TransferProgress):
        self.progress_bar.set(state.fraction)
        self.progress_count_label.configure(text=f"{state.completed} / {state.total}")
        self.progress_file_label.configure(text=state.current_item)

    def _show_progress(self, running: bool):
        if running:
            self.controls_frame.pack_forget()
            self.progress_bar.set(0)
            self.progress_count_label.configure(text="")
            self.progress_file_label.configure(text="")
            self.progress_frame.pack(fill="x", padx=PADDING["small"], pady=PADDING["small"])
        else:
            self.progress_frame.pack_forget()
            self.controls_frame.pack(fill="x", padx=PADDING["small"], pady=PADDING["small"])
        self.import_btn.configure(state="disabled" if running else "normal")
        self._update_compress_state()

    def _on_flags_changed(self):
        settings = self.config_manager.config.settings
        settings.include_logs = self.include_logs_var.get()
        settings.include_backups = self.include_backups_var.get()
        self._save_config()

    def _on_errors_only_toggle(self):
        self.config_manager.config.settings.errors_only_logs = self.errors_only_var.get()
        self._save_config()
        if self.selected_world is not None:
            self._render_logs_tab(self.selected_world)

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def _on_import_clicked(self):
        selected = filedialog.askopenfilename(
            parent=self,
            title="Import World",
            filetypes=[("ZIP", "*.zip")],
        )
        if selected:
            self._confirm_import(Path(selected))

    def _on_drop(self, event):
        """Handle files dropped on the window."""
        try:
            # Parse the Tcl list format (handles spaces in paths with braces)
            files = self.tk.splitlist(event.data)
        except (tk.TclError, ValueError) as e:
            logger.debug("Could not parse Tcl list, using raw data: %s", e)
            files = [event.data] if event.data else []

        if files:
            self._confirm_import(Path(files[0]))
        return event.action

    def _confirm_import(self, archive_path: Path):
        if not is_zip_archive(archive_path):
            self._set_status("Error: Please select a .zip file")
            return

        world_name = infer_world_name(archive_path)
        confirmed = messagebox.askyesno(
            "Import World",
            f"Import this archive as world:\n\n{world_name}\n\n"
            f"If a world with this name exists it will be replaced.",
            icon="warning",
            parent=self,
        )
        if not confirmed:
            return

        try:
            self.runner.import_world(archive_path, world_name)
        except (ArchiveError, PlatformError, TransferBusyError) as e:
            logger.error("Import of %s failed: %s", archive_path, e)
            self._set_status(f"Error: {e}")
            messagebox.showerror("Import Error", str(e), parent=self)
            return

        self._refresh_worlds()
        self._set_status(f"World '{world_name}' imported successfully")

    # ------------------------------------------------------------------
    # Settings and lifecycle
    # ------------------------------------------------------------------

    def _open_settings(self):
        """Open the settings dialog."""
        dialog = ConfigDialog(self, self.config_manager)
        self.wait_window(dialog)

        if dialog.config_changed:
            self._refresh_worlds()
            self._set_status("Configuration updated")

    def _save_config(self):
        try:
            self.config_manager.save()
        except OSError as e:
            logger.warning("Could not save configuration: %s", e)

    def _set_status(self, message: str):
        """Update the status bar message."""
        self.status_label.configure(text=message)

    def _on_close(self):
        """Handle window close event."""
        if self.runner.is_busy:
            messagebox.showwarning(
                "Backup Running",
                "Please wait for the backup to finish before closing.",
                parent=self,
            )
            return
        self.runner.shutdown(wait=False)
        self.destroy()
