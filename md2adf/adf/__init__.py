"""ADF output tree model and node constructors.

Key classes:
    AdfDocument: Root of an ADF tree (type "doc", version 1)
    AdfNode: Any block or inline node
    AdfMark: Formatting mark attached to a text node
"""

from .adf_models import (
    AdfDocument,
    AdfMark,
    AdfMarkType,
    AdfNode,
    AdfNodeType,
    BLOCK_NODE_TYPES,
    LIST_ITEM_CONTENT_TYPES,
)
from .builders import (
    blockquote,
    bullet_list,
    code,
    code_block,
    doc,
    em,
    emoji,
    generate_local_id,
    hard_break,
    heading,
    inline_card,
    link,
    list_item,
    mention,
    ordered_list,
    paragraph,
    rule,
    strike,
    strong,
    table,
    table_cell,
    table_header,
    table_row,
    task_item,
    task_list,
    text,
    text_color,
    underline,
)

__all__ = [
    # Models
    "AdfDocument",
    "AdfMark",
    "AdfMarkType",
    "AdfNode",
    "AdfNodeType",
    "BLOCK_NODE_TYPES",
    "LIST_ITEM_CONTENT_TYPES",
    # Node constructors
    "doc",
    "paragraph",
    "heading",
    "bullet_list",
    "ordered_list",
    "list_item",
    "task_list",
    "task_item",
    "code_block",
    "blockquote",
    "rule",
    "table",
    "table_row",
    "table_header",
    "table_cell",
    "text",
    "hard_break",
    "inline_card",
    "mention",
    "emoji",
    "generate_local_id",
    # Mark constructors
    "strong",
    "em",
    "code",
    "strike",
    "underline",
    "link",
    "text_color",
]
