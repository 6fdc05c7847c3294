"""Test fixtures for conversion tests.

This module provides:
- Sample markdown content covering each supported construct
- Helpers for walking serialized ADF trees in assertions
"""

from .sample_markdown import (
    SAMPLE_MARKDOWN_MIXED,
    SAMPLE_MARKDOWN_TABLE,
    SAMPLE_MARKDOWN_TABLE_FORMATTED,
    SAMPLE_MARKDOWN_TASKS,
    SAMPLE_MARKDOWN_TASKS_INTERLEAVED,
    SAMPLE_MARKDOWN_LIST_WITH_CODE,
    SAMPLE_MARKDOWN_QUOTE,
)
from .adf_fixtures import (
    assert_no_fragmented_text,
    collect_nodes,
    mark_types,
)

__all__ = [
    # Markdown samples
    "SAMPLE_MARKDOWN_MIXED",
    "SAMPLE_MARKDOWN_TABLE",
    "SAMPLE_MARKDOWN_TABLE_FORMATTED",
    "SAMPLE_MARKDOWN_TASKS",
    "SAMPLE_MARKDOWN_TASKS_INTERLEAVED",
    "SAMPLE_MARKDOWN_LIST_WITH_CODE",
    "SAMPLE_MARKDOWN_QUOTE",
    # ADF helpers
    "assert_no_fragmented_text",
    "collect_nodes",
    "mark_types",
]
