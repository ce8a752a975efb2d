"""GUI module using CustomTkinter for a modern interface.

This module provides all user interface components for the application.
It only talks to the core through PreloaderDocument.

Components:
    MainWindow: Main application window with the general, advanced and
        processes sections plus New/Open/Save/Save As actions

    ProcessDialog: Modal dialog for adding or editing one process rule

Submodules:
    styles: Theme constants (colors, fonts, padding, window sizes)
    tooltip: Hover tooltips used for buttons and process comments
    widgets: Reusable widget components (PathSelector, ProcessList)
"""

from .main_window import MainWindow
from .process_dialog import ProcessDialog

__all__ = [
    "MainWindow",
    "ProcessDialog",
]
