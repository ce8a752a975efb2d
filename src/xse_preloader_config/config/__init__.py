"""Application settings module.

This module provides storage and data models for the editor's own settings.
The preloader configuration being edited lives in the core package.

Submodules:
    manager: SettingsManager for loading/saving the XML settings file
    schema: Data classes defining the settings structure (AppSettings, AppearanceMode)
    paths: AppPaths with the settings, log and default preloader file locations
    path_validator: Validation of configuration paths chosen in file dialogs

Settings are stored as XML in %APPDATA%/PreloaderConfigurator/settings.xml.
"""

from .manager import SettingsManager
from .schema import AppearanceMode, AppSettings
from .paths import AppPaths

__all__ = [
    "SettingsManager",
    "AppearanceMode",
    "AppSettings",
    "AppPaths",
]
