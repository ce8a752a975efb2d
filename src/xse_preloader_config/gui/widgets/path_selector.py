"""Reusable path selection widget"""

from pathlib import Path
from tkinter import filedialog
from typing import Callable, Optional

import customtkinter as ctk


class PathSelector(ctk.CTkFrame):
    """A widget for entering a library name or picking it from disk.

    Combines a text entry field with a browse button that opens
    a file dialog. The entry holds free text, so a bare library name
    such as "winmm.dll" is as valid as a full path.
    """

    def __init__(
        self,
        master,
        label: str = "Path:",
        initial_value: str = "",
        filetypes: Optional[list[tuple[str, str]]] = None,
        name_only: bool = False,
        on_change: Optional[Callable[[str], None]] = None,
        **kwargs
    ):
        """Initialize the path selector widget.

        Args:
            master: Parent widget
            label: Label text to display
            initial_value: Initial entry text
            filetypes: File type filters for the browse dialog
            name_only: If True, browsing stores only the file name
            on_change: Callback function when the text changes
            **kwargs: Additional arguments for CTkFrame
        """
        super().__init__(master, **kwargs)

        self.filetypes = filetypes or [("All Files", "*.*")]
        self.name_only = name_only
        self.on_change = on_change

        self.grid_columnconfigure(1, weight=1)

        self.label = ctk.CTkLabel(self, text=label)
        self.label.grid(row=0, column=0, padx=(0, 10), sticky="w")

        self.path_var = ctk.StringVar(value=initial_value)
        self.entry = ctk.CTkEntry(
            self,
            textvariable=self.path_var,
            width=350,
        )
        self.entry.grid(row=0, column=1, padx=(0, 10), sticky="ew")

        # Bind entry changes
        self.path_var.trace_add("write", self._on_entry_change)

        self.browse_btn = ctk.CTkButton(
            self,
            text="Browse",
            width=80,
            command=self._browse,
        )
        self.browse_btn.grid(row=0, column=2, sticky="e")

        # Status indicator
        self.status_label = ctk.CTkLabel(self, text="", width=20)
        self.status_label.grid(row=0, column=3, padx=(5, 0))

        self._update_status()

    def _browse(self):
        """Open file dialog to select a file."""
        initial_dir = None
        current = Path(self.get_value()) if self.get_value() else None
        if current and current.parent.exists() and current.parent != Path("."):
            initial_dir = str(current.parent)

        selected = filedialog.askopenfilename(
            initialdir=initial_dir,
            title="Select File",
            filetypes=self.filetypes,
        )

        if selected:
            self.set_value(Path(selected).name if self.name_only else selected)

    def _on_entry_change(self, *args):
        """Handle entry text changes."""
        self._update_status()
        if self.on_change:
            self.on_change(self.get_value())

    def _update_status(self):
        """Mark values that point at an existing file."""
        value = self.get_value()
        if value and Path(value).is_file():
            self.status_label.configure(text="OK", text_color="green")
        else:
            self.status_label.configure(text="", text_color="gray")

    def get_value(self) -> str:
        return self.path_var.get()

    def set_value(self, value: str):
        """Set the entry text.

        Args:
            value: Text to set, empty string to clear
        """
        self.path_var.set(value)
        self._update_status()
