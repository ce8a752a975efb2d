"""Path validation for configuration files the editor reads and writes.

Provides validation for paths chosen in file dialogs to prevent:
- Writing into protected system directories
- Treating directories or non-XML files as preloader configurations
"""

import os
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger("path_validator")

# Protected Windows system directories that should never be written to.
# Game folders under Program Files are deliberately not listed, that is
# where the preloader configuration normally lives.
PROTECTED_DIRECTORIES = [
    "C:\\Windows",
    "C:\\$Recycle.Bin",
    "C:\\System Volume Information",
]

# Additional protected paths based on environment variables
PROTECTED_ENV_PATHS = [
    "WINDIR",
    "SYSTEMROOT",
]

CONFIG_SUFFIX = ".xml"


def _get_protected_paths() -> set[Path]:
    """Build the set of protected paths including environment-based ones."""
    protected = set()

    for dir_path in PROTECTED_DIRECTORIES:
        try:
            protected.add(Path(dir_path).resolve())
        except (OSError, ValueError):
            pass

    for env_var in PROTECTED_ENV_PATHS:
        env_value = os.environ.get(env_var)
        if env_value:
            try:
                protected.add(Path(env_value).resolve())
            except (OSError, ValueError):
                pass

    return protected


def is_safe_path(path: Path) -> bool:
    """Check that a path is not inside a protected system directory.

    Args:
        path: The path to validate

    Returns:
        True if the path is safe, False otherwise
    """
    try:
        resolved = path.resolve()
    except (OSError, ValueError) as e:
        logger.warning("Failed to resolve path %s: %s", path, e)
        return False

    for protected_path in _get_protected_paths():
        if resolved == protected_path or protected_path in resolved.parents:
            logger.warning("Path %s is in protected directory %s", path, protected_path)
            return False

    return True


def validate_config_path(config_path: Path, must_exist: bool = False) -> tuple[bool, str]:
    """Validate a preloader configuration path before reading or writing it.

    Args:
        config_path: The file path to validate
        must_exist: True when opening, False when saving

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not config_path or not str(config_path).strip():
        return False, "Configuration path is empty"

    try:
        resolved = Path(config_path).resolve()
    except (OSError, ValueError) as e:
        return False, f"Invalid path: {e}"

    if resolved.is_dir():
        return False, "Configuration path is a directory"

    if resolved.suffix.lower() != CONFIG_SUFFIX:
        return False, "Configuration file must have an .xml extension"

    if must_exist and not resolved.exists():
        return False, "Configuration file does not exist"

    if not must_exist and not is_safe_path(resolved):
        return False, "Path is in a protected system directory"

    return True, ""
