"""Convert Markdown to Atlassian Document Format (ADF).

Headings, block quotes and tables are downgraded according to a context
preset (comment, task, story, default), and every lossy transformation is
reported as a ConversionWarning.

Example:
    >>> from md2adf import convert, convert_with_warnings
    >>> convert("## Hello\\n- Item 1\\n- Item 2").to_dict()["type"]
    'doc'
    >>> result = convert_with_warnings("## Hello", {"preset": "comment"})
    >>> result.warnings[0].kind.value
    'lossy_conversion'
"""

import logging

from .adf import AdfDocument, AdfMark, AdfNode, AdfNodeType
from .config import ConfigLoader, ContextPreset, ConversionOptions, resolve_options
from .converter import (
    ConversionResult,
    ConversionWarning,
    MarkdownConverter,
    WarningKind,
    convert,
    convert_to_dict,
    convert_with_warnings,
)
from .errors import ConfigError, ConversionError, FilesystemError, Md2AdfError
from .logging_config import configure_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "convert",
    "convert_with_warnings",
    "convert_to_dict",
    "MarkdownConverter",
    # Options
    "ConversionOptions",
    "ContextPreset",
    "ConfigLoader",
    "resolve_options",
    # Results
    "ConversionResult",
    "ConversionWarning",
    "WarningKind",
    "AdfDocument",
    "AdfNode",
    "AdfMark",
    "AdfNodeType",
    # Errors
    "Md2AdfError",
    "ConversionError",
    "ConfigError",
    "FilesystemError",
    # Logging
    "configure_logging",
]
