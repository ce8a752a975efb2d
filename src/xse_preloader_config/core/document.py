"""Editing session for one preloader configuration file"""

from dataclasses import fields, replace
from pathlib import Path
from typing import Callable, Optional

from ..errors import NoFilePathError, ValidationError
from ..logging_config import get_logger
from .codec import INT32_MAX, INT32_MIN, decode, encode
from .model import INVALID_XML_CHARS, PreloaderConfig, ProcessRule

logger = get_logger("document")

DocumentListener = Callable[["PreloaderDocument"], None]

_STRING_FIELDS = {"original_library", "load_method_name", "import_library_name", "import_function_name"}
_INT_FIELDS = {"thread_number", "load_delay", "hook_delay"}
_BOOL_FIELDS = {"install_exception_handler", "keep_exception_handler"}


class PreloaderDocument:
    """Holds the configuration being edited along with its file path.

    All edits made by the user go through this class so that model
    invariants are checked before anything changes. Decoding a file is
    all-or-nothing: the current configuration is only replaced once the
    new one decoded completely.

    Listeners registered with subscribe() are called after every change.
    """

    def __init__(self, config: Optional[PreloaderConfig] = None):
        self.config = config if config is not None else PreloaderConfig()
        self.file_path: Optional[Path] = None
        self.is_dirty = False
        self._listeners: list[DocumentListener] = []

    @property
    def title(self) -> str:
        """Window title for the document, marked with '*' when unsaved."""
        name = self.file_path.name if self.file_path else "Untitled"
        return f"{name}*" if self.is_dirty else name

    def subscribe(self, listener: DocumentListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: DocumentListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def new(self) -> PreloaderConfig:
        """Start a new, unsaved configuration with default values."""
        self.config = PreloaderConfig()
        self.file_path = None
        self.is_dirty = False
        self._notify()
        return self.config

    def open(self, path: Path) -> PreloaderConfig:
        """Load a configuration file.

        Args:
            path: Path of the XML file to read

        Returns:
            The decoded configuration

        Raises:
            OSError: If the file cannot be read
            ParseError: If the file is not well-formed XML
            SchemaError: If a mandatory element is missing
        """
        path = Path(path)
        logger.debug(f"Opening preloader configuration {path}")
        config = decode(path.read_bytes())

        self.config = config
        self.file_path = path
        self.is_dirty = False
        logger.info(f"Opened {path} with {len(config.processes)} process rules")
        self._notify()
        return config

    def load_text(self, text: str) -> PreloaderConfig:
        """Replace the configuration with one decoded from XML text.

        The file path is kept, the document becomes dirty.
        """
        config = decode(text)
        self.config = config
        self._mark_dirty()
        return config

    def to_xml(self) -> str:
        return encode(self.config)

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the configuration to disk.

        Args:
            path: Target path, defaults to the path the document was opened from

        Returns:
            The path that was written

        Raises:
            NoFilePathError: If no path was given and the document has none
            OSError: If the file cannot be written
        """
        target = Path(path) if path is not None else self.file_path
        if target is None:
            raise NoFilePathError()

        logger.debug(f"Saving preloader configuration to {target}")
        xml_str = encode(self.config)
        target.write_text(xml_str, encoding="utf-8")

        self.file_path = target
        self.is_dirty = False
        logger.info(f"Saved {target}")
        self._notify()
        return target

    def update(self, **values) -> None:
        """Set one or more scalar configuration fields.

        Raises:
            ValidationError: If a field is unknown or a value has the wrong type
        """
        if not values:
            return

        for name, value in values.items():
            self._validate_field(name, value)

        self.config = replace(self.config, **values)
        self._mark_dirty()

    def add_process(self, rule: ProcessRule) -> ProcessRule:
        """Append a process rule.

        Raises:
            ValidationError: If the rule name is empty or the tooltip is invalid
        """
        rule = self._validated_rule(rule.name, rule.allow, rule.tooltip)
        self.config.processes.append(rule)
        logger.debug(f"Added process rule {rule.name} (allow={rule.allow})")
        self._mark_dirty()
        return rule

    def update_process(self, index: int, **values) -> ProcessRule:
        """Change the name, allow flag or tooltip of an existing rule.

        Raises:
            IndexError: If index is out of range
            ValidationError: If the new values break a rule invariant
        """
        self._check_index(index)
        current = self.config.processes[index]
        unknown = set(values) - {"name", "allow", "tooltip"}
        if unknown:
            raise ValidationError(f"Unknown process rule field: {', '.join(sorted(unknown))}")

        rule = self._validated_rule(
            values.get("name", current.name),
            values.get("allow", current.allow),
            values.get("tooltip", current.tooltip),
        )
        self.config.processes[index] = rule
        self._mark_dirty()
        return rule

    def remove_process(self, index: int) -> ProcessRule:
        """Remove a rule by position.

        Raises:
            IndexError: If index is out of range
        """
        self._check_index(index)
        rule = self.config.processes.pop(index)
        logger.debug(f"Removed process rule {rule.name}")
        self._mark_dirty()
        return rule

    def move_process(self, index: int, offset: int) -> int:
        """Move a rule up (negative offset) or down (positive offset).

        The target position is clamped to the list bounds.

        Returns:
            The new index of the rule

        Raises:
            IndexError: If index is out of range
        """
        self._check_index(index)
        processes = self.config.processes
        new_index = max(0, min(len(processes) - 1, index + offset))
        if new_index != index:
            processes.insert(new_index, processes.pop(index))
            self._mark_dirty()
        return new_index

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.config.processes):
            raise IndexError(f"Process rule index out of range: {index}")

    @staticmethod
    def _validated_rule(name: str, allow: bool, tooltip: Optional[str]) -> ProcessRule:
        if not name or not name.strip():
            raise ValidationError("Process name must not be empty")
        _check_text("Process name", name, attribute=True)
        if tooltip is not None:
            tooltip = tooltip.strip()
            _check_text("Tooltip", tooltip)
            if "--" in tooltip:
                raise ValidationError("Tooltip must not contain '--'")
        return ProcessRule(name=name, allow=bool(allow), tooltip=tooltip)

    @staticmethod
    def _validate_field(name: str, value) -> None:
        known = {f.name for f in fields(PreloaderConfig)} - {"processes"}
        if name not in known:
            raise ValidationError(f"Unknown configuration field: {name}")

        if name in _STRING_FIELDS:
            if not isinstance(value, str):
                raise ValidationError(f"{name} must be a string")
            _check_text(name, value, attribute=name == "load_method_name")
        if name in _BOOL_FIELDS and not isinstance(value, bool):
            raise ValidationError(f"{name} must be true or false")
        if name in _INT_FIELDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be a whole number")
            if value < INT32_MIN or value > INT32_MAX:
                raise ValidationError(f"{name} is out of range")

    def _mark_dirty(self) -> None:
        self.is_dirty = True
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


def _check_text(label: str, value: str, attribute: bool = False) -> None:
    """Reject text that would not survive being written to XML and read back.

    Attribute values additionally may not hold tabs or newlines.
    """
    match = INVALID_XML_CHARS.search(value)
    if match:
        raise ValidationError(f"{label} contains a character XML cannot store: {match.group()!r}")
    if "\r" in value:
        raise ValidationError(f"{label} must not contain carriage returns")
    if attribute and ("\t" in value or "\n" in value):
        raise ValidationError(f"{label} must be a single line without tabs")
