"""Add/Edit process rule dialog"""

from typing import Callable, Optional

import customtkinter as ctk

from ..core.model import ProcessRule
from ..errors import ValidationError
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES


class ProcessDialog(ctk.CTkToplevel):
    """Modal dialog for entering one process rule.

    The rule is handed to on_submit, which applies it to the document.
    If on_submit raises ValidationError the message is shown inline and
    the dialog stays open so the user can correct the input.
    """

    def __init__(
        self,
        parent,
        on_submit: Callable[[ProcessRule], None],
        rule: Optional[ProcessRule] = None,
    ):
        """Initialize the process dialog.

        Args:
            parent: Parent window
            on_submit: Called with the entered rule when the user confirms
            rule: Existing rule to edit, or None to add a new one
        """
        super().__init__(parent)

        self.on_submit = on_submit
        self.submitted = False
        self.editing = rule is not None

        self.title("Edit Process" if self.editing else "Add Process")
        width, height = WINDOW_SIZES["process_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self.name_var = ctk.StringVar(value=rule.name if rule else "")
        self.allow_var = ctk.BooleanVar(value=rule.allow if rule else True)
        self.tooltip_var = ctk.StringVar(value=(rule.tooltip or "") if rule else "")

        self._create_ui()

        self.bind("<Return>", lambda event: self._submit())
        self.bind("<Escape>", lambda event: self.destroy())
        self.focus_force()
        self.name_entry.focus_set()

    def _create_ui(self):
        """Create the dialog UI."""
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=PADDING["medium"])
        container.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(container, text="Process name:", font=FONTS["body"]).grid(
            row=0, column=0, sticky="w", padx=PADDING["small"], pady=PADDING["small"]
        )
        self.name_entry = ctk.CTkEntry(container, textvariable=self.name_var, placeholder_text="game.exe")
        self.name_entry.grid(row=0, column=1, sticky="ew", padx=PADDING["small"], pady=PADDING["small"])

        ctk.CTkLabel(container, text="Tooltip:", font=FONTS["body"]).grid(
            row=1, column=0, sticky="w", padx=PADDING["small"], pady=PADDING["small"]
        )
        ctk.CTkEntry(container, textvariable=self.tooltip_var).grid(
            row=1, column=1, sticky="ew", padx=PADDING["small"], pady=PADDING["small"]
        )

        ctk.CTkCheckBox(
            container,
            text="Allow the preloader in this process",
            variable=self.allow_var,
            font=FONTS["body"],
        ).grid(row=2, column=0, columnspan=2, sticky="w", padx=PADDING["small"], pady=PADDING["small"])

        self.error_label = ctk.CTkLabel(container, text="", font=FONTS["small"], text_color=COLORS["danger"])
        self.error_label.grid(row=3, column=0, columnspan=2, sticky="w", padx=PADDING["small"])

        button_frame = ctk.CTkFrame(container, fg_color="transparent")
        button_frame.grid(row=4, column=0, columnspan=2, sticky="ew", pady=(PADDING["small"], 0))

        cancel_btn = ctk.CTkButton(
            button_frame,
            text="Cancel",
            width=100,
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        )
        cancel_btn.pack(side="left", padx=PADDING["small"])

        ok_btn = ctk.CTkButton(
            button_frame,
            text="Save" if self.editing else "Add",
            width=120,
            command=self._submit,
        )
        ok_btn.pack(side="right", padx=PADDING["small"])

    def _submit(self):
        """Hand the rule to the owner and close if it was accepted."""
        tooltip = self.tooltip_var.get().strip()
        rule = ProcessRule(
            name=self.name_var.get().strip(),
            allow=bool(self.allow_var.get()),
            tooltip=tooltip or None,
        )

        try:
            self.on_submit(rule)
        except ValidationError as e:
            self.error_label.configure(text=e.message)
            return

        self.submitted = True
        self.destroy()
