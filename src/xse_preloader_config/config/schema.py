"""Application settings data models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class AppearanceMode(Enum):
    """CustomTkinter appearance modes"""
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


@dataclass
class AppSettings:
    """Editor preferences remembered between sessions"""
    first_run_complete: bool = False
    last_directory: Optional[Path] = None
    show_advanced_options: bool = False
    appearance_mode: AppearanceMode = AppearanceMode.SYSTEM
    recent_files: list[Path] = field(default_factory=list)

    def get_existing_recent_files(self) -> list[Path]:
        """Get recent files that still exist on disk.

        Returns:
            List of paths, most recently used first
        """
        return [path for path in self.recent_files if path.exists()]
