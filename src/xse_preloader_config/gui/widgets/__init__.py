"""Reusable GUI widgets for the application.

Widgets:
    PathSelector: A compound widget combining a label, text entry, and browse
                  button for file/directory path selection.
    ProcessList: Scrollable editor for the ordered list of process rules.
"""

from .path_selector import PathSelector
from .process_list import ProcessList

__all__ = [
    "PathSelector",
    "ProcessList",
]
