"""Task list item detection.

Whether a bullet list item is a task item is decided from the tokenizer's
own tagging conventions, tried in a fixed order:

1. The list_item_open token carries a "task-list-item" class
   (set by the mdit-py-plugins tasklists plugin).
2. An inline token inside the item holds an html_inline checkbox
   (``<input ... type="checkbox">``).

If the tokenizer's conventions change, only this module needs updating.
"""

import re
from typing import NamedTuple, Optional, Sequence

from markdown_it.token import Token

TASK_ITEM_CLASS = "task-list-item"

_CHECKBOX_PATTERN = re.compile(r'type=["\']checkbox["\']', re.IGNORECASE)
_CHECKED_PATTERN = re.compile(r'checked(=|\s|>)', re.IGNORECASE)


class CheckboxMarkup(NamedTuple):
    """Result of inspecting raw inline markup for a checkbox."""
    is_checkbox: bool
    checked: bool


def parse_task_checkbox(html: str) -> CheckboxMarkup:
    """Detect a checkbox input in raw markup and whether it is checked."""
    if not html or not _CHECKBOX_PATTERN.search(html):
        return CheckboxMarkup(False, False)
    return CheckboxMarkup(True, bool(_CHECKED_PATTERN.search(html)))


def get_attr(token: Token, name: str) -> Optional[str]:
    """Read a token attribute, returning None when absent or non-string."""
    value = token.attrGet(name)
    if value is None:
        return None
    return str(value)


def has_task_item_class(token: Token) -> bool:
    class_attr = get_attr(token, "class")
    if not class_attr:
        return False
    return TASK_ITEM_CLASS in class_attr.split()


def inline_has_task_checkbox(token: Token) -> bool:
    if not token.children:
        return False
    return any(
        child.type == "html_inline" and parse_task_checkbox(child.content).is_checkbox
        for child in token.children
    )


def is_task_list_item(tokens: Sequence[Token], start_index: int) -> bool:
    """Decide whether the list item opened at start_index is a task item.

    Args:
        tokens: Full token sequence
        start_index: Index of a list_item_open token

    Returns:
        True if either detection strategy matches
    """
    if has_task_item_class(tokens[start_index]):
        return True

    # Only the item's own inline tokens count, not those of nested items
    depth = 0
    i = start_index + 1
    while i < len(tokens):
        token = tokens[i]
        if token.type == "list_item_open":
            depth += 1
        elif token.type == "list_item_close":
            if depth == 0:
                break
            depth -= 1
        elif depth == 0 and token.type == "inline" and inline_has_task_checkbox(token):
            return True
        i += 1
    return False
