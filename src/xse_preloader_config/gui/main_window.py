"""Main application window for editing a preloader configuration."""

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Optional

import customtkinter as ctk

from .. import __app_name__, __version__
from ..config.manager import SettingsManager
from ..config.path_validator import validate_config_path
from ..config.paths import AppPaths
from ..core.document import PreloaderDocument
from ..core.model import LoadMethod, ProcessRule
from ..errors import PreloaderConfigError
from ..logging_config import get_logger
from .process_dialog import ProcessDialog
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES
from .tooltip import attach_tooltip
from .widgets.path_selector import PathSelector
from .widgets.process_list import ProcessList

logger = get_logger("main_window")

XML_FILETYPES = [("XML Files", "*.xml"), ("All Files", "*.*")]
LIBRARY_FILETYPES = [("Libraries", "*.dll"), ("All Files", "*.*")]
NO_RECENT_FILES = "(no recent files)"

# assets/ sits next to gui/ both in the source tree and in a PyInstaller bundle
APP_ICON_PATH = Path(__file__).resolve().parent.parent / "assets" / "icons" / "app_icon.ico"

_STRING_FIELDS = {
    "import_library_name": "Library name:",
    "import_function_name": "Function name:",
}
_INT_FIELDS = {
    "thread_number": "Thread number:",
    "load_delay": "Load delay (ms):",
    "hook_delay": "Hook delay (ms):",
}
_BOOL_FIELDS = {
    "install_exception_handler": "Install exception handler",
    "keep_exception_handler": "Keep exception handler",
}


def parse_int_entry(text: str) -> Optional[int]:
    """Parse the text of a numeric entry.

    An empty entry counts as 0, anything else that is not a whole
    number gives None.
    """
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return None


class MainWindow(ctk.CTk):
    """Main application window.

    Layout:
    - Toolbar: New/Open/Save/Save As, recent files, advanced options switch
    - General section: original library
    - Advanced section (hidden by default): load method, delays, exception handler
    - Processes section: ordered allow/deny rules
    - Status bar: result of the last action
    """

    def __init__(self, document: PreloaderDocument, settings_manager: SettingsManager):
        super().__init__()

        self.document = document
        self.settings_manager = settings_manager

        # Set while widgets are filled from the document so that variable
        # traces do not write the same values back
        self._syncing = False
        self._shown_rules: list[ProcessRule] = []

        self._string_vars: dict[str, ctk.StringVar] = {}
        self._string_entries: dict[str, ctk.CTkEntry] = {}
        self._int_vars: dict[str, ctk.StringVar] = {}
        self._int_entries: dict[str, ctk.CTkEntry] = {}
        self._bool_vars: dict[str, ctk.BooleanVar] = {}

        width, height = WINDOW_SIZES["main"]
        min_width, min_height = WINDOW_SIZES["min_main"]
        self.geometry(f"{width}x{height}")
        self.minsize(min_width, min_height)

        self._set_app_icon()
        self._create_ui()

        self.document.subscribe(self._on_document_changed)
        self._refresh_fields()
        self._update_title()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _set_app_icon(self):
        try:
            if APP_ICON_PATH.exists():
                self.iconbitmap(str(APP_ICON_PATH))
        except (OSError, tk.TclError) as e:
            logger.debug("Could not set app icon: %s", e)

    # UI construction
    def _create_ui(self):
        """Create the main UI layout."""
        self._create_toolbar()
        self._create_status_bar()

        self.main_container = ctk.CTkFrame(self, fg_color="transparent")
        self.main_container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=(0, PADDING["small"]))

        self._create_general_section()
        self._create_advanced_section()
        self._create_processes_section()

        self._apply_advanced_visibility()

    def _create_toolbar(self):
        """Create the top toolbar with file actions."""
        toolbar = ctk.CTkFrame(self, height=50, fg_color=COLORS["toolbar"])
        toolbar.pack(fill="x", padx=PADDING["medium"], pady=PADDING["medium"])
        toolbar.pack_propagate(False)

        title = ctk.CTkLabel(toolbar, text=__app_name__, font=FONTS["title"])
        title.pack(side="left", padx=PADDING["medium"], pady=PADDING["small"])

        version = ctk.CTkLabel(toolbar, text=f"v{__version__}", font=FONTS["small"], text_color="gray")
        version.pack(side="left", pady=PADDING["small"])

        buttons_frame = ctk.CTkFrame(toolbar, fg_color="transparent")
        buttons_frame.pack(side="left", padx=PADDING["large"])

        for text, tip, command in (
            ("New", "Start a new configuration", self.new_file),
            ("Open", "Open a configuration file", self.open_file),
            ("Save", "Save to the current file", self.save_file),
            ("Save As", "Save to a new file", self.save_file_as),
        ):
            button = ctk.CTkButton(
                buttons_frame, text=text, width=70, height=32,
                fg_color="transparent", border_width=1,
                text_color=("gray10", "gray90"), hover_color=("gray80", "gray30"),
                command=command,
            )
            button.pack(side="left", padx=2)
            attach_tooltip(button, tip)

        self.recent_menu = ctk.CTkOptionMenu(
            buttons_frame,
            values=[NO_RECENT_FILES],
            width=160,
            command=self._on_recent_selected,
        )
        self.recent_menu.pack(side="left", padx=(PADDING["small"], 0))
        self._refresh_recent_menu()

        self.advanced_var = ctk.BooleanVar(value=self._settings().show_advanced_options)
        advanced_switch = ctk.CTkSwitch(
            toolbar,
            text="Show advanced options",
            variable=self.advanced_var,
            command=self._on_advanced_toggled,
        )
        advanced_switch.pack(side="right", padx=PADDING["medium"])

        self.bind("<Control-o>", lambda event: self.open_file())
        self.bind("<Control-s>", lambda event: self.save_file())
        self.bind("<Control-n>", lambda event: self.new_file())

    def _create_general_section(self):
        section = ctk.CTkFrame(self.main_container)
        section.pack(fill="x", pady=(0, PADDING["small"]))

        header = ctk.CTkLabel(section, text="General", font=FONTS["heading"])
        header.pack(anchor="w", padx=PADDING["medium"], pady=(PADDING["small"], 0))

        self.library_selector = PathSelector(
            section,
            label="Original library:",
            filetypes=LIBRARY_FILETYPES,
            name_only=True,
            on_change=lambda value: self._on_field_changed("original_library", value),
            fg_color="transparent",
        )
        self.library_selector.pack(fill="x", padx=PADDING["medium"], pady=PADDING["small"])

    def _create_advanced_section(self):
        self.advanced_section = ctk.CTkFrame(self.main_container)
        section = self.advanced_section
        section.grid_columnconfigure((1, 3), weight=1)

        header = ctk.CTkLabel(section, text="Advanced Options", font=FONTS["heading"])
        header.grid(row=0, column=0, columnspan=4, sticky="w", padx=PADDING["medium"], pady=(PADDING["small"], 0))

        ctk.CTkLabel(section, text="Load method:").grid(row=1, column=0, sticky="w", padx=PADDING["medium"], pady=4)
        self.load_method_menu = ctk.CTkOptionMenu(
            section,
            values=LoadMethod.names(),
            command=self._on_load_method_selected,
        )
        self.load_method_menu.grid(row=1, column=1, sticky="w", pady=4)

        # Import hook and thread attach parameters on the left, delays on the right
        positions = {
            "import_library_name": (2, 0),
            "import_function_name": (3, 0),
            "thread_number": (4, 0),
            "load_delay": (2, 2),
            "hook_delay": (3, 2),
        }
        for field_name, label in {**_STRING_FIELDS, **_INT_FIELDS}.items():
            row, column = positions[field_name]
            ctk.CTkLabel(section, text=label).grid(row=row, column=column, sticky="w", padx=PADDING["medium"], pady=4)

            var = ctk.StringVar(value="")
            entry = ctk.CTkEntry(section, textvariable=var, width=180)
            entry.grid(row=row, column=column + 1, sticky="ew", padx=(0, PADDING["medium"]), pady=4)

            if field_name in _INT_FIELDS:
                self._int_vars[field_name] = var
                self._int_entries[field_name] = entry
                var.trace_add("write", lambda *args, f=field_name: self._on_int_field_changed(f))
            else:
                self._string_vars[field_name] = var
                self._string_entries[field_name] = entry
                var.trace_add("write", lambda *args, f=field_name: self._on_field_changed(f, self._string_vars[f].get()))

        for offset, (field_name, label) in enumerate(_BOOL_FIELDS.items()):
            var = ctk.BooleanVar(value=False)
            self._bool_vars[field_name] = var
            switch = ctk.CTkSwitch(
                section,
                text=label,
                variable=var,
                command=lambda f=field_name: self._on_field_changed(f, bool(self._bool_vars[f].get())),
            )
            switch.grid(row=5, column=offset * 2, columnspan=2, sticky="w", padx=PADDING["medium"], pady=(4, PADDING["small"]))

    def _create_processes_section(self):
        self.processes_section = ctk.CTkFrame(self.main_container)
        section = self.processes_section
        section.pack(fill="both", expand=True)

        header_row = ctk.CTkFrame(section, fg_color="transparent")
        header_row.pack(fill="x", padx=PADDING["medium"], pady=(PADDING["small"], 0))

        header = ctk.CTkLabel(header_row, text="Processes", font=FONTS["heading"])
        header.pack(side="left")

        self.process_count_label = ctk.CTkLabel(header_row, text="", font=FONTS["small"], text_color="gray")
        self.process_count_label.pack(side="left", padx=PADDING["small"])

        add_btn = ctk.CTkButton(header_row, text="Add Process", width=110, command=self._add_process)
        add_btn.pack(side="right")

        desc = ctk.CTkLabel(
            section,
            text="Rules are checked in order. Hover a name to see its comment.",
            font=FONTS["small"],
            text_color="gray",
        )
        desc.pack(anchor="w", padx=PADDING["medium"])

        self.process_list = ProcessList(
            section,
            on_toggle=self._toggle_process,
            on_edit=self._edit_process,
            on_remove=self._remove_process,
            on_move=self._move_process,
        )
        self.process_list.pack(fill="both", expand=True, padx=PADDING["small"], pady=PADDING["small"])

    def _create_status_bar(self):
        """Create the bottom status bar."""
        self.status_bar = ctk.CTkFrame(self, height=30, fg_color=COLORS["toolbar"])
        self.status_bar.pack(fill="x", side="bottom")
        self.status_bar.pack_propagate(False)

        self.status_label = ctk.CTkLabel(self.status_bar, text="Ready", font=FONTS["small"], text_color=("#cccccc", "#999999"))
        self.status_label.pack(side="left", padx=PADDING["medium"], pady=2)

    # Document -> widgets
    def _on_document_changed(self, document: PreloaderDocument):
        self._update_title()
        if document.config.processes != self._shown_rules:
            self._refresh_process_list()

    def _refresh_fields(self):
        """Fill every widget from the document's configuration."""
        config = self.document.config
        self._syncing = True
        try:
            self.library_selector.set_value(config.original_library)
            self._set_load_method(config.load_method_name)
            for field_name, var in self._string_vars.items():
                var.set(getattr(config, field_name))
            for field_name, var in self._int_vars.items():
                var.set(str(getattr(config, field_name)))
                self._int_entries[field_name].configure(border_color=self._default_border_color())
            for field_name, var in self._bool_vars.items():
                var.set(getattr(config, field_name))
        finally:
            self._syncing = False

        self._update_load_method_fields()
        self._refresh_process_list()

    def _refresh_process_list(self):
        rules = self.document.config.processes
        self._shown_rules = [ProcessRule(r.name, r.allow, r.tooltip) for r in rules]
        self.process_list.set_rules(rules)
        allowed = len(self.document.config.get_allowed_processes())
        self.process_count_label.configure(text=f"{allowed} of {len(rules)} allowed")

    def _update_title(self):
        self.title(f"{self.document.title} - {__app_name__}")

    def _set_load_method(self, name: str):
        values = LoadMethod.names()
        if name not in values:
            # Unknown names are kept and offered as an extra choice
            values = values + [name]
        self.load_method_menu.configure(values=values)
        self.load_method_menu.set(name)

    def _update_load_method_fields(self):
        """Enable the parameters that belong to the selected load method."""
        config = self.document.config
        import_state = "normal" if config.uses_import_hook else "disabled"
        thread_state = "normal" if config.uses_thread_attach else "disabled"
        for entry in self._string_entries.values():
            entry.configure(state=import_state)
        self._int_entries["thread_number"].configure(state=thread_state)

    # Widgets -> document
    def _on_field_changed(self, field_name: str, value):
        if self._syncing:
            return
        try:
            self.document.update(**{field_name: value})
        except PreloaderConfigError as e:
            self._set_status(f"Error: {e.message}")

    def _on_int_field_changed(self, field_name: str):
        if self._syncing:
            return
        entry = self._int_entries[field_name]
        value = parse_int_entry(self._int_vars[field_name].get())
        if value is None:
            entry.configure(border_color=COLORS["danger"])
            self._set_status(f"Error: {_INT_FIELDS[field_name].rstrip(':')} must be a whole number")
            return

        entry.configure(border_color=self._default_border_color())
        self._on_field_changed(field_name, value)

    def _on_load_method_selected(self, choice: str):
        self._on_field_changed("load_method_name", choice)
        self._update_load_method_fields()

    def _add_process(self):
        dialog = ProcessDialog(self, on_submit=self.document.add_process)
        self.wait_window(dialog)
        if dialog.submitted:
            self._set_status("Process rule added")

    def _edit_process(self, index: int):
        rule = self.document.config.processes[index]

        def apply(edited: ProcessRule):
            self.document.update_process(index, name=edited.name, allow=edited.allow, tooltip=edited.tooltip)

        dialog = ProcessDialog(self, on_submit=apply, rule=rule)
        self.wait_window(dialog)
        if dialog.submitted:
            self._set_status("Process rule updated")

    def _toggle_process(self, index: int, allow: bool):
        self.document.update_process(index, allow=allow)

    def _remove_process(self, index: int):
        rule = self.document.remove_process(index)
        self._set_status(f"Removed {rule.name}")

    def _move_process(self, index: int, offset: int):
        self.document.move_process(index, offset)

    # File actions
    def new_file(self):
        if not self._confirm_discard_changes():
            return
        self.document.new()
        self._refresh_fields()
        self._set_status("New configuration")

    def open_file(self, path: Optional[Path] = None):
        """Open a configuration file, asking for one when path is None."""
        if not self._confirm_discard_changes():
            return

        if path is None:
            selected = filedialog.askopenfilename(
                parent=self,
                title="Select Configuration File",
                filetypes=XML_FILETYPES,
                initialdir=self._initial_dir(),
            )
            if not selected:
                return
            path = Path(selected)

        is_valid, error = validate_config_path(path, must_exist=True)
        if not is_valid:
            self._show_error("Error loading XML", error)
            return

        try:
            self.document.open(path)
        except (PreloaderConfigError, OSError) as e:
            logger.error(f"Failed to open {path}: {e}")
            self._show_error("Error loading XML", self._error_text(e))
            return

        self._remember_file(path)
        self._refresh_fields()
        self._set_status(f"Loaded {path.name}")

    def save_file(self) -> bool:
        """Save to the current file."""
        if self.document.file_path is None:
            self._set_status("Error: No file has been opened or selected for saving.")
            return False
        return self._write(self.document.file_path)

    def save_file_as(self) -> bool:
        """Ask for a file name and save there."""
        initial_name = self.document.file_path.name if self.document.file_path else AppPaths.PRELOADER_CONFIG_NAME
        selected = filedialog.asksaveasfilename(
            parent=self,
            title="Save Configuration File",
            initialfile=initial_name,
            initialdir=self._initial_dir(),
            defaultextension=".xml",
            filetypes=XML_FILETYPES,
        )
        if not selected:
            self._set_status("Save operation canceled.")
            return False
        return self._write(Path(selected))

    def _write(self, path: Path) -> bool:
        is_valid, error = validate_config_path(path, must_exist=False)
        if not is_valid:
            self._show_error("Error saving XML", error)
            return False

        try:
            self.document.save(path)
        except (PreloaderConfigError, OSError) as e:
            logger.error(f"Failed to save {path}: {e}")
            self._show_error("Error saving XML", self._error_text(e))
            return False

        self._remember_file(path)
        self._set_status("Configuration saved successfully.")
        return True

    def _confirm_discard_changes(self) -> bool:
        """Ask about unsaved changes.

        Returns:
            True if the caller may continue
        """
        if not self.document.is_dirty:
            return True

        answer = messagebox.askyesnocancel(
            "Unsaved Changes",
            f"Save changes to {self.document.file_path.name if self.document.file_path else 'the new configuration'}?",
            parent=self,
        )
        if answer is None:
            return False
        if answer:
            if self.document.file_path is None:
                return self.save_file_as()
            return self.save_file()
        return True

    # Settings
    def _settings(self):
        return self.settings_manager.settings or self.settings_manager.create_default()

    def _remember_file(self, path: Path):
        self._settings()
        self.settings_manager.add_recent_file(path)
        self._save_settings()
        self._refresh_recent_menu()

    def _save_settings(self):
        try:
            self.settings_manager.save()
        except OSError as e:
            logger.warning(f"Could not save settings: {e}")

    def _initial_dir(self) -> Optional[str]:
        if self.document.file_path:
            return str(self.document.file_path.parent)
        last_directory = self._settings().last_directory
        if last_directory and last_directory.exists():
            return str(last_directory)
        return None

    def _refresh_recent_menu(self):
        recent = [str(path) for path in self._settings().get_existing_recent_files()]
        if recent:
            self.recent_menu.configure(values=recent, state="normal")
        else:
            self.recent_menu.configure(values=[NO_RECENT_FILES], state="disabled")
        self.recent_menu.set("Recent files")

    def _on_recent_selected(self, choice: str):
        self.recent_menu.set("Recent files")
        if choice != NO_RECENT_FILES:
            self.open_file(Path(choice))

    def _on_advanced_toggled(self):
        self._settings().show_advanced_options = bool(self.advanced_var.get())
        self._save_settings()
        self._apply_advanced_visibility()

    def _apply_advanced_visibility(self):
        if self.advanced_var.get():
            self.advanced_section.pack(fill="x", pady=(0, PADDING["small"]), before=self.processes_section)
        else:
            self.advanced_section.pack_forget()

    # Messages
    def _set_status(self, message: str):
        """Update the status bar message."""
        self.status_label.configure(text=message)

    def _show_error(self, title: str, message: str):
        self._set_status(f"{title}: {message}")
        messagebox.showerror(title, message, parent=self)

    def show_info(self, title: str, message: str):
        messagebox.showinfo(title, message, parent=self)

    @staticmethod
    def _error_text(error: Exception) -> str:
        if isinstance(error, PreloaderConfigError):
            return error.message
        return str(error)

    @staticmethod
    def _default_border_color():
        return ctk.ThemeManager.theme["CTkEntry"]["border_color"]

    def _on_close(self):
        if not self._confirm_discard_changes():
            return
        self.document.unsubscribe(self._on_document_changed)
        self._save_settings()
        self.destroy()
