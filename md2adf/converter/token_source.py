"""Markdown tokenizer configuration.

markdown-it-py turns raw markdown into the flat token stream the block
resolver walks. Task list syntax is recognized by the mdit-py-plugins
tasklists plugin, which marks the list item with a "task-list-item" class
and injects an html_inline checkbox token into the item's inline children.
"""

from typing import List

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.tasklists import tasklists_plugin


def create_markdown_parser() -> MarkdownIt:
    """Create a configured markdown-it instance.

    Raw HTML is disabled so user-written tags reach the converter as text;
    the only html_inline tokens left are the checkboxes the tasklists
    plugin generates.
    """
    return (
        MarkdownIt("commonmark", {"html": False, "breaks": False, "linkify": True})
        .enable(["table", "strikethrough", "linkify"])
        .use(tasklists_plugin)
    )


def tokenize(parser: MarkdownIt, markdown: str) -> List[Token]:
    return parser.parse(markdown)


def token_line(token: Token):
    """Return the 1-indexed first source line of a block token, if mapped."""
    if not token.map:
        return None
    return token.map[0] + 1
