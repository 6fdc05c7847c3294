"""Markdown to ADF conversion engine.

Key classes:
    MarkdownConverter: Entry point holding resolved options
    BlockResolver: Token stream -> ADF block nodes
    ConversionResult: Document plus ordered warnings
"""

from .block_resolver import BlockResolver
from .inline_resolver import InlineOptions, InlineResult, resolve_inline
from .markdown_converter import (
    MarkdownConverter,
    convert,
    convert_to_dict,
    convert_with_warnings,
)
from .models import ConversionResult, ConversionWarning, WarningKind, WarningLog
from .task_items import is_task_list_item, parse_task_checkbox
from .token_source import create_markdown_parser

__all__ = [
    'MarkdownConverter',
    'BlockResolver',
    'convert',
    'convert_with_warnings',
    'convert_to_dict',
    'resolve_inline',
    'InlineOptions',
    'InlineResult',
    'ConversionResult',
    'ConversionWarning',
    'WarningKind',
    'WarningLog',
    'is_task_list_item',
    'parse_task_checkbox',
    'create_markdown_parser',
]
