"""Typed exception hierarchy for md2adf.

All exceptions inherit from Md2AdfError for easy catching and include
descriptive messages with context to help with debugging.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .converter.models import ConversionWarning


class Md2AdfError(Exception):
    """Base exception for all markdown-to-adf errors.

    Use this to catch any application-level error from the library.
    """
    pass


class ConversionError(Md2AdfError):
    """Raised when a conversion is aborted.

    Carries the same record a non-strict conversion would have logged as a
    warning, so callers can report both the same way.
    """

    def __init__(self, warning: "ConversionWarning"):
        message = warning.message
        if warning.line is not None:
            message += f" (line {warning.line})"
        super().__init__(message)
        self.warning = warning

    @property
    def kind(self):
        return self.warning.kind

    @property
    def line(self) -> Optional[int]:
        return self.warning.line

    @property
    def original_text(self) -> Optional[str]:
        return self.warning.original_text


class ConfigError(Md2AdfError):
    """Raised when conversion options or a config file fail validation."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FilesystemError(Md2AdfError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
