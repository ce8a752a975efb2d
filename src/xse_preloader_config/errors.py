"""Exception hierarchy for the preloader configurator.

Every error raised by the codec and the editing document derives from
PreloaderConfigError, so callers can catch all of them with a single
except clause. File system failures are left as OSError.
"""

from typing import Optional


class PreloaderConfigError(Exception):
    """Base exception for all configurator errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ParseError(PreloaderConfigError):
    """Raised when the input is not well-formed XML.

    Carries the underlying parser message and, when the parser reports it,
    the line and column of the failure.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        super().__init__(message)


class SchemaError(PreloaderConfigError):
    """Raised when well-formed XML lacks a mandatory element.

    Examples:
        - Root element is not xSE
        - xSE has no PluginPreloader child
    """
    pass


class ValidationError(PreloaderConfigError):
    """Raised when an explicit edit would break a model invariant.

    Examples:
        - Adding a process rule with an empty name
        - Setting an unknown configuration field
    """
    pass


class NoFilePathError(PreloaderConfigError):
    """Raised when saving a document that has never been opened or saved."""

    def __init__(self, message: str = "No file has been opened or selected for saving."):
        super().__init__(message)
