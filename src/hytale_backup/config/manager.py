"""Configuration management - load/save XML configuration"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import AppPaths, resolve_worlds_root
from .schema import AppConfiguration, Settings
from ..errors import PlatformError
from ..logging_config import get_logger

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages application configuration persistence.

    Handles loading and saving configuration to XML format and
    falls back to defaults when the file is missing or corrupted.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or AppPaths.config_file()
        self.config: Optional[AppConfiguration] = None

    def load(self) -> AppConfiguration:
        """Load configuration from XML file.

        Returns:
            AppConfiguration object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ET.ParseError: If XML is malformed
        """
        logger.debug(f"Loading configuration from {self.config_path}")
        tree = ET.parse(self.config_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")

        # Use defaults if Settings element is missing
        if settings_elem is not None:
            settings = Settings(
                include_logs=self._parse_bool(settings_elem, "IncludeLogs", True),
                include_backups=self._parse_bool(settings_elem, "IncludeBackups", True),
                errors_only_logs=self._parse_bool(settings_elem, "ErrorsOnlyLogs", False),
                export_directory=self._parse_path(settings_elem, "ExportDirectory"),
                worlds_path=self._parse_path(settings_elem, "WorldsPath"),
            )
        else:
            settings = Settings()

        self.config = AppConfiguration(settings=settings)
        logger.debug("Configuration loaded")
        return self.config

    def load_or_default(self) -> AppConfiguration:
        """Load configuration, using defaults if it is missing or unreadable.

        Returns:
            The loaded or default AppConfiguration
        """
        if not self.config_path.exists():
            return self.create_default()

        try:
            return self.load()
        except (ET.ParseError, OSError, ValueError) as e:
            # Corrupted config = start from defaults
            logger.warning(f"Could not load config, using defaults: {e}")
            return self.create_default()

    def save(self) -> None:
        """Save current configuration to XML file.

        Creates the configuration directory if it doesn't exist.
        """
        if self.config is None:
            raise ValueError("No configuration to save")

        logger.debug(f"Saving configuration to {self.config_path}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        settings = self.config.settings
        root = ET.Element("HytaleBackup", version="1.0")

        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "IncludeLogs").text = str(settings.include_logs).lower()
        ET.SubElement(settings_elem, "IncludeBackups").text = str(settings.include_backups).lower()
        ET.SubElement(settings_elem, "ErrorsOnlyLogs").text = str(settings.errors_only_logs).lower()
        ET.SubElement(settings_elem, "ExportDirectory").text = str(settings.export_directory) if settings.export_directory else ""
        ET.SubElement(settings_elem, "WorldsPath").text = str(settings.worlds_path) if settings.worlds_path else ""

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.config_path.write_text(xml_str, encoding="utf-8")

    def create_default(self) -> AppConfiguration:
        """Create a default configuration.

        Returns:
            New AppConfiguration with default values
        """
        self.config = AppConfiguration(
            settings=Settings(export_directory=AppPaths.default_export_dir()),
        )
        return self.config

    def worlds_root(self) -> Optional[Path]:
        """Get the folder to scan for worlds.

        Returns:
            The configured override, the platform saves folder, or None
            if neither is available on this system
        """
        if self.config is not None and self.config.settings.worlds_path:
            return self.config.settings.worlds_path

        try:
            return resolve_worlds_root()
        except PlatformError as e:
            logger.warning(f"Could not resolve worlds folder: {e}")
            return None

    def export_directory(self) -> Path:
        """Get the folder suggested for new backups."""
        if self.config is not None and self.config.settings.export_directory:
            return self.config.settings.export_directory
        return AppPaths.default_export_dir()

    # Helper methods for XML parsing
    @staticmethod
    def _parse_bool(parent: ET.Element, tag: str, default: bool = False) -> bool:
        """Parse a boolean value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text:
            return elem.text.strip().lower() == "true"
        return default

    @staticmethod
    def _parse_path(parent: ET.Element, tag: str) -> Optional[Path]:
        """Parse a path value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return AppPaths.expand_path(elem.text.strip())
        return None
