"""Hover tooltips for CustomTkinter widgets"""

import tkinter as tk

import customtkinter as ctk

from .styles import FONTS


def attach_tooltip(widget, text: str, delay_ms: int = 300) -> None:
    """Show a small popup with text while the pointer is over a widget.

    Args:
        widget: Widget to attach the tooltip to
        text: Tooltip text, nothing is attached when empty
        delay_ms: Hover time before the tooltip appears
    """
    if not text:
        return

    tooltip = None
    after_id = None

    def show_tooltip(event):
        nonlocal after_id
        if after_id:
            widget.after_cancel(after_id)
            after_id = None
        hide_tooltip(None)

        def create_tooltip():
            nonlocal tooltip
            try:
                if not widget.winfo_exists():
                    return
                # Position tooltip below the widget
                x = widget.winfo_rootx()
                y = widget.winfo_rooty() + widget.winfo_height() + 4

                tooltip = ctk.CTkToplevel(widget)
                tooltip.wm_overrideredirect(True)
                tooltip.wm_geometry(f"+{x}+{y}")
                tooltip.wm_attributes("-topmost", True)

                label = ctk.CTkLabel(
                    tooltip, text=text,
                    font=FONTS["small"],
                    fg_color=("gray90", "gray20"),
                    corner_radius=4,
                    padx=8, pady=4,
                    wraplength=320,
                    justify="left",
                )
                label.pack()

                # Auto-hide after 5 seconds as failsafe
                tooltip.after(5000, lambda: hide_tooltip(None))
            except (tk.TclError, RuntimeError):
                pass  # Widget was destroyed

        after_id = widget.after(delay_ms, create_tooltip)

    def hide_tooltip(event):
        nonlocal tooltip, after_id
        if after_id:
            try:
                widget.after_cancel(after_id)
            except (tk.TclError, RuntimeError):
                pass
            after_id = None
        if tooltip:
            try:
                tooltip.destroy()
            except (tk.TclError, RuntimeError):
                pass  # Already destroyed
            tooltip = None

    widget.bind("<Enter>", show_tooltip, add="+")
    widget.bind("<Leave>", hide_tooltip, add="+")
    widget.bind("<Button-1>", hide_tooltip, add="+")
    widget.bind("<Destroy>", hide_tooltip, add="+")
