"""Scrollable editor for the ordered list of process rules"""

from typing import Callable, Optional

import customtkinter as ctk

from ...core.model import ProcessRule
from ..styles import COLORS, FONTS, PADDING
from ..tooltip import attach_tooltip


class ProcessList(ctk.CTkScrollableFrame):
    """Shows one row per process rule in document order.

    The widget never changes rules itself. Every action is reported
    through a callback with the row index so the owner can apply it
    to the document and call set_rules() again.
    """

    def __init__(
        self,
        master,
        on_toggle: Optional[Callable[[int, bool], None]] = None,
        on_edit: Optional[Callable[[int], None]] = None,
        on_remove: Optional[Callable[[int], None]] = None,
        on_move: Optional[Callable[[int, int], None]] = None,
        **kwargs
    ):
        super().__init__(master, **kwargs)

        self.on_toggle = on_toggle
        self.on_edit = on_edit
        self.on_remove = on_remove
        self.on_move = on_move

        self.grid_columnconfigure(0, weight=1)
        self._rows: list[ctk.CTkFrame] = []
        self._empty_label: Optional[ctk.CTkLabel] = None

    def set_rules(self, rules: list[ProcessRule]):
        """Rebuild the rows for the given rules."""
        for row in self._rows:
            row.destroy()
        self._rows.clear()
        if self._empty_label is not None:
            self._empty_label.destroy()
            self._empty_label = None

        if not rules:
            self._empty_label = ctk.CTkLabel(
                self,
                text="No process rules. Use \"Add Process\" to create one.",
                font=FONTS["small"],
                text_color="gray",
            )
            self._empty_label.grid(row=0, column=0, pady=PADDING["medium"])
            return

        last = len(rules) - 1
        for index, rule in enumerate(rules):
            self._rows.append(self._create_row(index, rule, is_first=index == 0, is_last=index == last))

    def _create_row(self, index: int, rule: ProcessRule, is_first: bool, is_last: bool) -> ctk.CTkFrame:
        row = ctk.CTkFrame(self)
        row.grid(row=index, column=0, sticky="ew", pady=(0, 4))
        row.grid_columnconfigure(0, weight=1)

        name_label = ctk.CTkLabel(row, text=rule.name, font=FONTS["body"], anchor="w")
        name_label.grid(row=0, column=0, sticky="ew", padx=(PADDING["small"], 5), pady=4)
        if rule.tooltip:
            attach_tooltip(name_label, rule.tooltip)

        allow_var = ctk.BooleanVar(value=rule.allow)
        allow_switch = ctk.CTkSwitch(
            row,
            text="Allow" if rule.allow else "Deny",
            variable=allow_var,
            progress_color=COLORS["success"],
            width=90,
            command=lambda i=index, v=allow_var: self._emit(self.on_toggle, i, v.get()),
        )
        allow_switch.grid(row=0, column=1, padx=5)

        buttons = [
            ("▲", "Move up", lambda i=index: self._emit(self.on_move, i, -1), not is_first),
            ("▼", "Move down", lambda i=index: self._emit(self.on_move, i, 1), not is_last),
            ("Edit", "Edit rule", lambda i=index: self._emit(self.on_edit, i), True),
        ]
        column = 2
        for text, tip, command, enabled in buttons:
            button = ctk.CTkButton(
                row, text=text, width=36 if len(text) == 1 else 50, height=26,
                fg_color="transparent", border_width=1,
                text_color=("gray10", "gray90"),
                state="normal" if enabled else "disabled",
                command=command,
            )
            button.grid(row=0, column=column, padx=2)
            attach_tooltip(button, tip)
            column += 1

        remove_btn = ctk.CTkButton(
            row, text="✕", width=36, height=26,
            fg_color=COLORS["danger"], hover_color=COLORS["danger_hover"],
            command=lambda i=index: self._emit(self.on_remove, i),
        )
        remove_btn.grid(row=0, column=column, padx=(2, PADDING["small"]))
        attach_tooltip(remove_btn, "Remove rule")

        return row

    @staticmethod
    def _emit(callback: Optional[Callable], *args):
        if callback:
            callback(*args)
