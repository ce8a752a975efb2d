"""Settings management - load/save the editor's XML settings file"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import AppPaths
from .schema import AppearanceMode, AppSettings
from ..logging_config import get_logger

logger = get_logger("settings_manager")


class SettingsManager:
    """Manages persistence of the editor's own preferences.

    Handles loading and saving settings to XML format, first-run
    detection and the recent files list. This is separate from the
    preloader configuration being edited.
    """

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or AppPaths.SETTINGS_FILE
        self.settings: Optional[AppSettings] = None

    def is_first_run(self) -> bool:
        """Check if this is the first run of the application.

        First run is detected if:
        - Settings file does not exist, OR
        - Settings exist but FirstRunComplete is False

        Returns:
            True if this is the first run
        """
        if not self.settings_path.exists():
            return True

        try:
            self.load()
            return not self.settings.first_run_complete
        except (ET.ParseError, OSError, ValueError) as e:
            # Corrupted settings = treat as first run
            logger.warning(f"Could not load settings, treating as first run: {e}")
            return True

    def load(self) -> AppSettings:
        """Load settings from XML file.

        Returns:
            AppSettings object with loaded values

        Raises:
            FileNotFoundError: If settings file doesn't exist
            ET.ParseError: If XML is malformed
        """
        logger.debug(f"Loading settings from {self.settings_path}")
        tree = ET.parse(self.settings_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")
        if settings_elem is None:
            # Missing Settings element - use all defaults
            self.settings = AppSettings()
            return self.settings

        recent_files = []
        recent_elem = settings_elem.find("RecentFiles")
        if recent_elem is not None:
            for file_elem in recent_elem.findall("File"):
                if file_elem.text and file_elem.text.strip():
                    recent_files.append(AppPaths.expand_path(file_elem.text.strip()))

        self.settings = AppSettings(
            first_run_complete=self._parse_bool(settings_elem, "FirstRunComplete", False),
            last_directory=self._parse_path(settings_elem, "LastDirectory"),
            show_advanced_options=self._parse_bool(settings_elem, "ShowAdvancedOptions", False),
            appearance_mode=self._parse_appearance(settings_elem),
            recent_files=recent_files[:AppPaths.MAX_RECENT_FILES],
        )
        logger.debug(f"Settings loaded: {len(self.settings.recent_files)} recent files")
        return self.settings

    def load_or_default(self) -> AppSettings:
        """Load settings, falling back to defaults if the file is missing or broken."""
        if not self.settings_path.exists():
            return self.create_default()

        try:
            return self.load()
        except (ET.ParseError, OSError) as e:
            logger.warning(f"Could not load settings, using defaults: {e}")
            return self.create_default()

    def save(self) -> None:
        """Save current settings to XML file.

        Creates the settings directory if it doesn't exist.
        """
        if self.settings is None:
            raise ValueError("No settings to save")

        logger.debug(f"Saving settings to {self.settings_path}")
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)

        root = ET.Element("PreloaderConfigurator", version="1.0")

        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "FirstRunComplete").text = str(self.settings.first_run_complete).lower()
        ET.SubElement(settings_elem, "LastDirectory").text = str(self.settings.last_directory or "")
        ET.SubElement(settings_elem, "ShowAdvancedOptions").text = str(self.settings.show_advanced_options).lower()
        ET.SubElement(settings_elem, "AppearanceMode").text = self.settings.appearance_mode.value

        recent_elem = ET.SubElement(settings_elem, "RecentFiles")
        for path in self.settings.recent_files:
            ET.SubElement(recent_elem, "File").text = str(path)

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.settings_path.write_text(xml_str, encoding="utf-8")

    def create_default(self) -> AppSettings:
        """Create default settings.

        Returns:
            New AppSettings with default values
        """
        self.settings = AppSettings()
        return self.settings

    def add_recent_file(self, path: Path) -> None:
        """Record a file as most recently used and remember its directory.

        Moves an existing entry to the front instead of duplicating it and
        trims the list to AppPaths.MAX_RECENT_FILES.

        Args:
            path: The file that was opened or saved
        """
        if self.settings is None:
            raise ValueError("No settings loaded")

        path = Path(path)
        recent = [p for p in self.settings.recent_files if p != path]
        recent.insert(0, path)
        self.settings.recent_files = recent[:AppPaths.MAX_RECENT_FILES]
        self.settings.last_directory = path.parent

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

    @staticmethod
    def _parse_appearance(parent: ET.Element) -> AppearanceMode:
        """Parse the appearance mode, falling back to following the system."""
        elem = parent.find("AppearanceMode")
        if elem is not None and elem.text:
            try:
                return AppearanceMode(elem.text.strip().lower())
            except ValueError:
                logger.warning(f"Unknown appearance mode '{elem.text}', using system")
        return AppearanceMode.SYSTEM
