"""Main application entry point and orchestrator"""

import sys
from pathlib import Path
from typing import Optional

import customtkinter as ctk

from .config.manager import SettingsManager
from .config.paths import AppPaths
from .core.document import PreloaderDocument
from .gui.main_window import MainWindow
from .logging_config import get_logger, setup_logging
from . import __version__

logger = get_logger("app")


class PreloaderConfigApp:
    """Main application orchestrator.

    Handles settings, first-run detection, and application lifecycle.
    """

    def __init__(self):
        self.settings_manager = SettingsManager()
        self.document = PreloaderDocument()
        self.main_window: MainWindow | None = None

    def run(self, initial_file: Optional[Path] = None):
        """Run the application.

        Args:
            initial_file: Configuration file to open once the window is shown
        """
        is_first_run = self.settings_manager.is_first_run()
        settings = self.settings_manager.load_or_default()

        ctk.set_appearance_mode(settings.appearance_mode.value)
        ctk.set_default_color_theme("blue")

        self.main_window = MainWindow(self.document, self.settings_manager)

        if initial_file is not None:
            self.main_window.after(100, lambda: self.main_window.open_file(initial_file))
        elif is_first_run:
            self.main_window.after(100, self._show_first_run_hint)

        self.main_window.mainloop()

    def _show_first_run_hint(self):
        """Explain where the preloader configuration lives on first start."""
        if self.main_window is None:
            return

        self.main_window.show_info(
            "Welcome",
            f"Open the \"{AppPaths.PRELOADER_CONFIG_NAME}\" file found next to the "
            "game executable to start editing, or create a new configuration."
        )

        # Save anyway to prevent repeated first-run prompts
        self.settings_manager.settings.first_run_complete = True
        try:
            self.settings_manager.save()
        except OSError as e:
            logger.warning(f"Could not save settings: {e}")


def parse_arguments(argv: list[str]) -> tuple[bool, Optional[Path]]:
    """Split command line arguments into the debug flag and a file to open.

    Args:
        argv: Arguments without the program name

    Returns:
        Tuple of (debug, initial_file)
    """
    debug = "--debug" in argv
    files = [arg for arg in argv if not arg.startswith("--")]
    return debug, Path(files[0]) if files else None


def main():
    """Application entry point."""
    debug, initial_file = parse_arguments(sys.argv[1:])

    # Initialize logging first
    logger = setup_logging(debug=debug)
    logger.info(f"Starting preloader configurator v{__version__}")

    try:
        app = PreloaderConfigApp()
        app.run(initial_file)
    except Exception as e:
        logger.exception("Fatal error during startup")
        # Show error dialog if something goes wrong during startup
        import tkinter as tk
        from tkinter import messagebox

        root = tk.Tk()
        root.withdraw()
        messagebox.showerror(
            "Startup Error",
            f"Failed to start the preloader configurator:\n\n{e}"
        )
        root.destroy()
        sys.exit(1)
    finally:
        logger.info("Preloader configurator shutting down")


if __name__ == "__main__":
    main()
