"""Markdown to ADF converter.

This module provides the public conversion entry points. Markdown is
tokenized with markdown-it-py and the token stream is turned into an ADF
document by BlockResolver, using options resolved from a context preset.
"""

import logging
from typing import Any, Mapping, Union

from ..adf.adf_models import AdfDocument
from ..adf.builders import doc, paragraph
from ..config.presets import ConversionOptions, ResolvedOptions, resolve_options
from ..errors import ConversionError
from .block_resolver import BlockResolver
from .models import ConversionResult, ConversionWarning, WarningKind, WarningLog
from .token_source import create_markdown_parser, tokenize

logger = logging.getLogger(__name__)

OptionsArg = Union[ConversionOptions, Mapping[str, Any], None]


class MarkdownConverter:
    """Converts markdown to ADF documents.

    Options are resolved once at construction. Every conversion call gets
    its own tokenizer state and warning log, so a converter can be reused
    for many documents.

    Example:
        >>> converter = MarkdownConverter({"preset": "comment"})
        >>> result = converter.convert_with_warnings("## Title")
        >>> result.document.content[0].type
        'paragraph'
    """

    def __init__(self, options: OptionsArg = None):
        """Initialize the converter.

        Args:
            options: ConversionOptions, a mapping of option names, or None

        Raises:
            ConfigError: If the options are invalid
        """
        self.options: ResolvedOptions = resolve_options(options)
        logger.debug(f"Resolved conversion options: {self.options}")

    def convert(self, markdown: str) -> AdfDocument:
        """Convert markdown to an ADF document, discarding warnings.

        Args:
            markdown: Markdown source text

        Returns:
            ADF document (always at least one block)

        Raises:
            ConversionError: If strict mode rejects a construct
        """
        return self.convert_with_warnings(markdown).document

    def convert_with_warnings(self, markdown: str) -> ConversionResult:
        """Convert markdown to ADF and report every lossy transformation.

        Args:
            markdown: Markdown source text

        Returns:
            ConversionResult with the document and ordered warnings

        Raises:
            ConversionError: If strict mode rejects a construct
            TypeError: If markdown is not a string
        """
        if not isinstance(markdown, str):
            raise TypeError(f"markdown must be a string, got {type(markdown).__name__}")

        warnings = WarningLog()

        if not markdown.strip():
            return ConversionResult(document=doc([paragraph()]), warnings=warnings.snapshot())

        try:
            tokens = tokenize(create_markdown_parser(), markdown)
        except Exception as e:
            raise ConversionError(ConversionWarning(
                WarningKind.INVALID_SYNTAX,
                f"Markdown tokenization failed: {e}",
            )) from e

        resolver = BlockResolver(self.options, warnings, markdown.splitlines())
        blocks = resolver.resolve(tokens)
        document = doc(blocks or [paragraph()])

        logger.info(
            f"Converted markdown ({len(markdown)} chars) to {len(document.content)} "
            f"block(s) with {len(warnings)} warning(s) [preset={self.options.preset.value}]"
        )
        return ConversionResult(document=document, warnings=warnings.snapshot())


def convert(markdown: str, options: OptionsArg = None) -> AdfDocument:
    """Convert markdown text to an ADF document.

    Args:
        markdown: Markdown source text
        options: Optional conversion options (preset and overrides)

    Returns:
        ADF document

    Raises:
        ConversionError: If strict mode rejects a construct
        ConfigError: If the options are invalid
    """
    return MarkdownConverter(options).convert(markdown)


def convert_with_warnings(markdown: str, options: OptionsArg = None) -> ConversionResult:
    """Convert markdown text to ADF and return conversion warnings.

    Args:
        markdown: Markdown source text
        options: Optional conversion options (preset and overrides)

    Returns:
        ConversionResult with document and warnings

    Raises:
        ConversionError: If strict mode rejects a construct
        ConfigError: If the options are invalid
    """
    return MarkdownConverter(options).convert_with_warnings(markdown)


def convert_to_dict(markdown: str, options: OptionsArg = None) -> dict:
    """Convert markdown and return the ADF document as a JSON-ready dict."""
    return convert(markdown, options).to_dict()
