"""Data models for ADF (Atlassian Document Format) output trees.

This module defines the node and mark structures the converter emits.
ADF is a strict JSON tree: every node has a type, block nodes hold child
nodes, text nodes hold a string plus formatting marks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class AdfNodeType(Enum):
    """Types of ADF nodes."""

    # Document root
    DOC = "doc"

    # Block nodes
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TASK_LIST = "taskList"
    TASK_ITEM = "taskItem"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    RULE = "rule"

    # Inline nodes
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    MENTION = "mention"
    EMOJI = "emoji"
    INLINE_CARD = "inlineCard"

    # Other
    UNKNOWN = "unknown"


class AdfMarkType(Enum):
    """Types of ADF text marks."""

    STRONG = "strong"
    EM = "em"
    CODE = "code"
    STRIKE = "strike"
    UNDERLINE = "underline"
    LINK = "link"
    TEXT_COLOR = "textColor"


# ADF node types that are block-level content
BLOCK_NODE_TYPES = {
    AdfNodeType.PARAGRAPH,
    AdfNodeType.HEADING,
    AdfNodeType.BULLET_LIST,
    AdfNodeType.ORDERED_LIST,
    AdfNodeType.LIST_ITEM,
    AdfNodeType.TASK_LIST,
    AdfNodeType.TASK_ITEM,
    AdfNodeType.TABLE,
    AdfNodeType.TABLE_ROW,
    AdfNodeType.TABLE_HEADER,
    AdfNodeType.TABLE_CELL,
    AdfNodeType.CODE_BLOCK,
    AdfNodeType.BLOCKQUOTE,
    AdfNodeType.RULE,
}

# Block types a listItem may contain
LIST_ITEM_CONTENT_TYPES = {
    AdfNodeType.PARAGRAPH,
    AdfNodeType.BULLET_LIST,
    AdfNodeType.ORDERED_LIST,
}


@dataclass
class AdfMark:
    """Formatting attached to a text run.

    Two marks are equal when both type and attrs match, which is what the
    inline resolver relies on when deciding whether adjacent text runs
    can be merged.

    Attributes:
        type: Mark type (strong, em, link, code, etc.)
        attrs: Mark-specific attributes (href/title for links, color)
    """

    type: str
    attrs: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert this mark to ADF JSON format."""
        result: Dict[str, Any] = {"type": self.type}
        if self.attrs:
            result["attrs"] = dict(self.attrs)
        return result


@dataclass
class AdfNode:
    """One node of an output tree.

    Block nodes use content, text nodes use text and marks, and both may
    carry attrs (heading level, localId, code language).

    Attributes:
        type: ADF node type name
        content: Child nodes, in order
        text: Run text (text nodes only)
        attrs: Node attributes
        marks: Formatting applied to a text run
    """

    type: str
    content: List["AdfNode"] = field(default_factory=list)
    text: Optional[str] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    marks: List[AdfMark] = field(default_factory=list)

    @property
    def local_id(self) -> Optional[str]:
        """Get the localId from attrs."""
        return self.attrs.get("localId")

    @property
    def node_type(self) -> AdfNodeType:
        """Get the AdfNodeType enum value."""
        try:
            return AdfNodeType(self.type)
        except ValueError:
            return AdfNodeType.UNKNOWN

    @property
    def is_block(self) -> bool:
        """Check if this node is a block-level element."""
        return self.node_type in BLOCK_NODE_TYPES

    @property
    def is_text(self) -> bool:
        return self.node_type == AdfNodeType.TEXT

    def has_mark(self, mark_type: str) -> bool:
        """Check whether a mark of the given type is attached."""
        return any(mark.type == mark_type for mark in self.marks)

    def get_text_content(self) -> str:
        """Extract all text content from this node and its children.

        Block-level children are joined with a space so list items and
        table cells read as separate words.

        Returns:
            Concatenated text from all text nodes in the subtree.
        """
        if self.text:
            return self.text

        texts = []
        for child in self.content:
            child_text = child.get_text_content()
            if child_text:
                texts.append(child_text)

        if texts and self.content and self.content[0].is_block:
            return " ".join(texts)
        return "".join(texts)

    def iter_nodes(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.content:
            yield from child.iter_nodes()

    def to_dict(self) -> Dict[str, Any]:
        """Convert this node to ADF JSON format.

        Returns:
            Dictionary suitable for JSON serialization
        """
        result: Dict[str, Any] = {"type": self.type}

        if self.text is not None:
            result["text"] = self.text

        if self.attrs:
            result["attrs"] = dict(self.attrs)

        if self.marks:
            result["marks"] = [m.to_dict() for m in self.marks]

        if self.content:
            result["content"] = [child.to_dict() for child in self.content]

        return result


@dataclass
class AdfDocument:
    """Root of a converted document (always serialized as type "doc").

    Attributes:
        version: ADF schema version (always 1)
        content: Top-level block nodes
    """

    version: int = 1
    content: List[AdfNode] = field(default_factory=list)

    def iter_nodes(self):
        """Yield every node in the document, depth first."""
        for node in self.content:
            yield from node.iter_nodes()

    def get_all_local_ids(self) -> List[str]:
        """Get every localId in document order (duplicates included).

        Returns:
            List of localId strings
        """
        return [node.local_id for node in self.iter_nodes() if node.local_id]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the document to ADF JSON format.

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "type": "doc",
            "version": self.version,
            "content": [node.to_dict() for node in self.content],
        }
