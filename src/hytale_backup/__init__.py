"""Hytale Backup - World save backup and import tool for Hytale.

This application provides:
    - Discovery of Hytale world saves with size and last played details
    - ZIP backups of a world, optionally without its logs and backup folders
    - Progress reporting while a backup is compressed in the background
    - Import of a ZIP archive back into the saves folder
    - A viewer for the latest world log with an "errors only" filter

The application uses CustomTkinter for the GUI and stores its configuration
in the platform config directory (for example %APPDATA%/HytaleBackup).

Package Structure:
    app: Main application entry point and orchestrator
    errors: Exception types shared by the config and core layers
    config: Configuration management, platform paths and path validation
    core: Inventory, archive writer/reader, progress channel and log filter
    gui: User interface components (main window, dialogs, widgets)
    assets: Icon generation and asset loading utilities

Quick Start:
    Run from command line::

        python -m hytale_backup

    Or programmatically::

        from hytale_backup.app import main
        main()

Configuration:
    - Config file: <config dir>/configuration.xml
    - Log file: <config dir>/hytale_backup.log
"""

__version__ = "1.0.0"
__app_name__ = "Hytale Backup"
