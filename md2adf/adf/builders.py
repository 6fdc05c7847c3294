"""Constructors for ADF nodes and marks.

Every function returns a fresh AdfNode/AdfMark; nothing here keeps state.
They are used by the converter and can also be used to assemble documents
by hand:

    >>> doc([paragraph([text("Hello "), text("world", [strong()])])])
"""

import uuid
from typing import Any, Dict, Optional, Sequence

from .adf_models import AdfDocument, AdfMark, AdfMarkType, AdfNode, AdfNodeType


def generate_local_id() -> str:
    """Generate a localId for task lists and task items."""
    return str(uuid.uuid4())


# --- Marks ---

def strong() -> AdfMark:
    return AdfMark(type=AdfMarkType.STRONG.value)


def em() -> AdfMark:
    return AdfMark(type=AdfMarkType.EM.value)


def code() -> AdfMark:
    return AdfMark(type=AdfMarkType.CODE.value)


def strike() -> AdfMark:
    return AdfMark(type=AdfMarkType.STRIKE.value)


def underline() -> AdfMark:
    return AdfMark(type=AdfMarkType.UNDERLINE.value)


def link(href: str, title: Optional[str] = None) -> AdfMark:
    """Create a hyperlink mark.

    Args:
        href: The URL to link to
        title: Optional link title (omitted from attrs when empty)
    """
    attrs = {"href": href}
    if title:
        attrs["title"] = title
    return AdfMark(type=AdfMarkType.LINK.value, attrs=attrs)


def text_color(color: str) -> AdfMark:
    """Create a text color mark (color is a hex string like #ff5630)."""
    return AdfMark(type=AdfMarkType.TEXT_COLOR.value, attrs={"color": color})


# --- Inline nodes ---

def text(value: str, marks: Optional[Sequence[AdfMark]] = None) -> AdfNode:
    return AdfNode(
        type=AdfNodeType.TEXT.value,
        text=value,
        marks=list(marks) if marks else [],
    )


def hard_break() -> AdfNode:
    return AdfNode(type=AdfNodeType.HARD_BREAK.value)


def inline_card(url: str) -> AdfNode:
    return AdfNode(type=AdfNodeType.INLINE_CARD.value, attrs={"url": url})


def mention(mention_id: str, mention_text: Optional[str] = None) -> AdfNode:
    attrs = {"id": mention_id}
    if mention_text:
        attrs["text"] = mention_text
    return AdfNode(type=AdfNodeType.MENTION.value, attrs=attrs)


def emoji(short_name: str, emoji_id: Optional[str] = None, emoji_text: Optional[str] = None) -> AdfNode:
    attrs = {"shortName": short_name}
    if emoji_id:
        attrs["id"] = emoji_id
    if emoji_text:
        attrs["text"] = emoji_text
    return AdfNode(type=AdfNodeType.EMOJI.value, attrs=attrs)


# --- Block nodes ---

def doc(content: Sequence[AdfNode]) -> AdfDocument:
    return AdfDocument(version=1, content=list(content))


def paragraph(content: Optional[Sequence[AdfNode]] = None) -> AdfNode:
    """Create a paragraph; an empty paragraph has no content key at all."""
    return AdfNode(type=AdfNodeType.PARAGRAPH.value, content=list(content or []))


def heading(level: int, content: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(
        type=AdfNodeType.HEADING.value,
        attrs={"level": level},
        content=list(content),
    )


def bullet_list(items: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.BULLET_LIST.value, content=list(items))


def ordered_list(items: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.ORDERED_LIST.value, content=list(items))


def list_item(content: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.LIST_ITEM.value, content=list(content))


def task_list(items: Sequence[AdfNode], local_id: Optional[str] = None) -> AdfNode:
    return AdfNode(
        type=AdfNodeType.TASK_LIST.value,
        attrs={"localId": local_id or generate_local_id()},
        content=list(items),
    )


def task_item(
    content: Sequence[AdfNode],
    checked: bool = False,
    local_id: Optional[str] = None,
) -> AdfNode:
    """Create a task item (state DONE when checked, TODO otherwise)."""
    return AdfNode(
        type=AdfNodeType.TASK_ITEM.value,
        attrs={
            "localId": local_id or generate_local_id(),
            "state": "DONE" if checked else "TODO",
        },
        content=list(content),
    )


def code_block(source: str, language: Optional[str] = None) -> AdfNode:
    """Create a code block holding a single unmarked text node."""
    attrs: Dict[str, Any] = {"language": language} if language else {}
    return AdfNode(
        type=AdfNodeType.CODE_BLOCK.value,
        attrs=attrs,
        content=[text(source)] if source else [],
    )


def blockquote(content: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.BLOCKQUOTE.value, content=list(content))


def rule() -> AdfNode:
    return AdfNode(type=AdfNodeType.RULE.value)


def table(
    rows: Sequence[AdfNode],
    is_number_column_enabled: bool = False,
    layout: str = "default",
) -> AdfNode:
    return AdfNode(
        type=AdfNodeType.TABLE.value,
        attrs={"isNumberColumnEnabled": is_number_column_enabled, "layout": layout},
        content=list(rows),
    )


def table_row(cells: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.TABLE_ROW.value, content=list(cells))


def table_header(content: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.TABLE_HEADER.value, content=list(content))


def table_cell(content: Sequence[AdfNode]) -> AdfNode:
    return AdfNode(type=AdfNodeType.TABLE_CELL.value, content=list(content))

