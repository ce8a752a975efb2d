"""Default paths for application files and preloader configurations"""

import os
from pathlib import Path


class AppPaths:
    """Default paths used by the configurator.

    All paths use environment variable expansion for portability.
    """

    # Configuration file location
    CONFIG_DIR = Path(os.path.expandvars(r"%APPDATA%\PreloaderConfigurator"))
    SETTINGS_FILE = CONFIG_DIR / "settings.xml"
    LOG_FILE_NAME = "preloader_config.log"

    # Name the preloader looks for next to the game executable
    PRELOADER_CONFIG_NAME = "xSE PluginPreloader.xml"

    # Maximum number of entries kept in the recent files list
    MAX_RECENT_FILES = 10

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables in path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expandvars(path_str))

    @classmethod
    def ensure_config_dir(cls) -> Path:
        """Ensure the configuration directory exists.

        Returns:
            Path to the configuration directory
        """
        cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        return cls.CONFIG_DIR
