"""Preloader configuration data models

Text values are stored exactly as they appear in the file. XML cannot
carry every character: control characters other than tab and newline are
not representable, and parsers turn carriage returns into newlines (and
tabs or newlines inside attributes into spaces). PreloaderDocument rejects
such values when they are entered, so edited configurations round-trip
unchanged. Tooltips are trimmed when read back.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class LoadMethod(str, Enum):
    """Load method names understood by the preloader.

    The configuration file stores the name as free text, so values outside
    this list are kept as plain strings.
    """
    IMPORT_ADDRESS_HOOK = "ImportAddressHook"
    ON_THREAD_ATTACH = "OnThreadAttach"
    ON_PROCESS_ATTACH = "OnProcessAttach"

    @classmethod
    def names(cls) -> list[str]:
        """Get all known load method names in display order."""
        return [method.value for method in cls]


DEFAULT_LOAD_METHOD = LoadMethod.IMPORT_ADDRESS_HOOK.value

# Characters outside the XML 1.0 Char production
INVALID_XML_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


@dataclass
class ProcessRule:
    """Allow/deny entry for one process executable"""
    name: str
    allow: bool = False
    tooltip: Optional[str] = None  # Stored as an XML comment next to the Item


@dataclass
class PreloaderConfig:
    """Complete preloader configuration"""
    original_library: str = ""
    load_method_name: str = DEFAULT_LOAD_METHOD
    import_library_name: str = ""
    import_function_name: str = ""
    thread_number: int = 0
    install_exception_handler: bool = False
    keep_exception_handler: bool = False
    load_delay: int = 0
    hook_delay: int = 0
    processes: list[ProcessRule] = field(default_factory=list)

    def get_allowed_processes(self) -> list[ProcessRule]:
        """Get all rules that allow the preloader to load."""
        return [rule for rule in self.processes if rule.allow]

    @property
    def uses_import_hook(self) -> bool:
        return self.load_method_name == LoadMethod.IMPORT_ADDRESS_HOOK.value

    @property
    def uses_thread_attach(self) -> bool:
        return self.load_method_name == LoadMethod.ON_THREAD_ATTACH.value
