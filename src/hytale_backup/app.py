"""Main application entry point and orchestrator"""

import sys

import customtkinter as ctk

from .config.manager import ConfigurationManager
from .config.paths import AppPaths
from .core.transfer import TransferRunner
from .gui.main_window import MainWindow
from .logging_config import setup_logging
from . import __version__


class HytaleBackupApp:
    """Main application orchestrator.

    Loads the configuration, creates the transfer runner and runs the
    main window until it is closed.
    """

    def __init__(self):
        self.config_manager = ConfigurationManager()
        self.runner: TransferRunner | None = None
        self.main_window: MainWindow | None = None

    def run(self):
        """Run the application."""
        # Set appearance mode to follow system
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.config_manager.load_or_default()

        self.runner = TransferRunner(worlds_root=self.config_manager.worlds_root())
        self.main_window = MainWindow(self.config_manager, self.runner)

        try:
            self.main_window.mainloop()
        finally:
            self.runner.shutdown(wait=True)


def main():
    """Application entry point."""
    # Initialize logging first
    logger = setup_logging(debug="--debug" in sys.argv)
    logger.info(f"Starting Hytale Backup v{__version__}")

    try:
        app = HytaleBackupApp()
        app.run()
    except Exception as e:
        logger.exception("Fatal error during startup")
        # Show error dialog if something goes wrong during startup
        import tkinter as tk
        from tkinter import messagebox

        root = tk.Tk()
        root.withdraw()
        messagebox.showerror(
            "Startup Error",
            f"Failed to start Hytale Backup:\n\n{e}\n\nDetails were written to {AppPaths.log_file()}"
        )
        root.destroy()
        sys.exit(1)
    finally:
        logger.info("Hytale Backup shutting down")


if __name__ == "__main__":
    main()
