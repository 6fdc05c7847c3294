"""Block-level conversion of markdown-it tokens into ADF nodes.

markdown-it produces a flat token stream where containers are delimited by
paired *_open / *_close tokens. BlockResolver walks that stream with an
explicit cursor and descends into containers by calling itself on the span
up to the matching close token. Inline spans are handed to resolve_inline().

Context policy (from the resolved preset) decides how constructs the target
context cannot hold are downgraded. Every downgrade is recorded in the
shared WarningLog; in strict mode incompatible headings and horizontal
rules abort the conversion with ConversionError instead.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from markdown_it.token import Token

from ..adf.adf_models import AdfMarkType, AdfNode, LIST_ITEM_CONTENT_TYPES
from ..adf.builders import (
    blockquote,
    bullet_list,
    code_block,
    heading,
    list_item,
    ordered_list,
    paragraph,
    strong,
    table,
    table_cell,
    table_header,
    table_row,
    task_item,
    task_list,
    text,
)
from ..config.presets import ResolvedOptions
from ..errors import ConversionError
from .inline_resolver import InlineOptions, merge_adjacent_text, resolve_inline
from .models import ConversionWarning, WarningKind, WarningLog
from .task_items import is_task_list_item
from .token_source import token_line

logger = logging.getLogger(__name__)

HORIZONTAL_RULE_MESSAGE = "Horizontal rules are not supported in this context"
LIST_ITEM_DROP_MESSAGE = (
    "List items only support paragraphs and nested lists; unsupported blocks were dropped"
)
TASK_ITEM_DROP_MESSAGE = (
    "Task list items only support inline content; extra blocks were dropped"
)


class _ListItemResult(NamedTuple):
    node: AdfNode
    next_index: int


class BlockResolver:
    """Builds ADF block nodes from a markdown-it token stream.

    One resolver serves one conversion call: it owns the cursor state of
    that call and appends to the WarningLog it was given.

    Attributes:
        options: Fully resolved conversion options (preset included)
        warnings: Warning log shared by every helper of this conversion
        source_lines: Markdown source split into lines, used to quote the
            original text of dropped constructs (optional)
    """

    def __init__(
        self,
        options: ResolvedOptions,
        warnings: WarningLog,
        source_lines: Optional[Sequence[str]] = None,
    ):
        self.options = options
        self.warnings = warnings
        self.source_lines = list(source_lines or [])
        self._inline_options = InlineOptions(
            preserve_line_breaks=options.preserve_line_breaks,
        )
        self._task_inline_options = InlineOptions(
            preserve_line_breaks=options.preserve_line_breaks,
            strip_task_checkbox_markup=True,
        )

    @property
    def preset(self):
        return self.options.preset

    def resolve(self, tokens: Sequence[Token]) -> List[AdfNode]:
        """Convert a complete token stream into top-level block nodes."""
        nodes, _ = self._resolve_blocks(tokens, 0, None)
        return nodes

    def _resolve_blocks(
        self,
        tokens: Sequence[Token],
        start_index: int,
        end_type: Optional[str],
    ) -> Tuple[List[AdfNode], int]:
        """Resolve blocks until end_type (consumed) or end of stream.

        Returns:
            Tuple of (nodes, index after the closing token)
        """
        nodes: List[AdfNode] = []
        i = start_index

        while i < len(tokens):
            token = tokens[i]
            kind = token.type

            if end_type and kind == end_type:
                return nodes, i + 1

            if kind == "paragraph_open":
                inline_token, i = self._inline_span(tokens, i, "paragraph_close")
                nodes.append(paragraph(self._inline(inline_token)))

            elif kind == "heading_open":
                inline_token, next_index = self._inline_span(tokens, i, "heading_close")
                nodes.append(self._resolve_heading(token, inline_token))
                i = next_index

            elif kind == "bullet_list_open":
                list_nodes, i = self._resolve_list(tokens, i, ordered=False)
                nodes.extend(list_nodes)

            elif kind == "ordered_list_open":
                list_nodes, i = self._resolve_list(tokens, i, ordered=True)
                nodes.extend(list_nodes)

            elif kind == "blockquote_open":
                quote_nodes, i = self._resolve_blockquote(tokens, i)
                nodes.extend(quote_nodes)

            elif kind in ("fence", "code_block"):
                nodes.append(self._resolve_code_block(token))
                i += 1

            elif kind == "table_open":
                table_node, i = self._resolve_table(tokens, i)
                nodes.append(table_node)
                if self.options.warn_on_risky_nodes and self.preset.tables_are_risky:
                    self._warn(
                        WarningKind.RISKY_FEATURE,
                        f"Tables in the {self.preset.value} context are supported "
                        "but render inconsistently in some views",
                        token_line(token),
                    )

            elif kind == "hr":
                self._reject_or_warn(
                    WarningKind.UNSUPPORTED_FEATURE,
                    HORIZONTAL_RULE_MESSAGE,
                    token_line(token),
                    self._source_text(token),
                )
                i += 1

            elif kind == "inline":
                nodes.append(paragraph(self._inline(token)))
                i += 1

            else:
                logger.debug(f"Skipping block token: {kind}")
                i += 1

        return nodes, i

    # --- Headings ---

    def _resolve_heading(self, token: Token, inline_token: Optional[Token]) -> AdfNode:
        level = self._heading_level(token.tag)
        inline = self._inline(inline_token)
        max_level = self.options.max_heading_level

        preset_allows = self.preset.allows_headings
        exceeds_max = level > max_level

        if preset_allows and self.options.use_headings and not exceeds_max:
            return heading(level, inline)

        if not preset_allows:
            reason = f"Headings are not supported in the {self.preset.value} context"
            abortable = True
        elif self.options.use_headings:
            reason = f"Heading level {level} exceeds maxHeadingLevel {max_level}"
            abortable = True
        else:
            reason = "Headings are disabled (useHeadings is off)"
            abortable = False

        line = token_line(token)
        original = self._heading_source(token, inline_token)
        if abortable and self.options.strict_mode:
            self._abort(WarningKind.UNSUPPORTED_FEATURE, reason, line, original)

        self._warn(
            WarningKind.LOSSY_CONVERSION,
            f"{reason}; converting to bold text",
            line,
            original,
        )
        return paragraph(self._embolden(inline))

    @staticmethod
    def _heading_level(tag: str) -> int:
        try:
            level = int(tag.lstrip("h"))
        except ValueError:
            return 1
        if 1 <= level <= 6:
            return level
        return 1

    @staticmethod
    def _heading_source(token: Token, inline_token: Optional[Token]) -> Optional[str]:
        content = inline_token.content if inline_token is not None else ""
        if token.markup and token.markup.startswith("#"):
            return f"{token.markup} {content}".rstrip()
        return content or None

    @staticmethod
    def _embolden(nodes: List[AdfNode]) -> List[AdfNode]:
        """Append a strong mark to every text run (an empty run if none)."""
        if not nodes:
            return [text("", [strong()])]
        for node in nodes:
            if node.is_text and not node.has_mark(AdfMarkType.STRONG.value):
                node.marks.append(strong())
        return merge_adjacent_text(nodes)

    # --- Lists ---

    def _resolve_list(
        self,
        tokens: Sequence[Token],
        start_index: int,
        ordered: bool,
    ) -> Tuple[List[AdfNode], int]:
        """Resolve a list, splitting it where task and regular items alternate.

        Returns:
            Tuple of (one or more list nodes, index after the list close)
        """
        close_type = "ordered_list_close" if ordered else "bullet_list_close"
        segments: List[Tuple[bool, List[AdfNode]]] = []
        i = start_index + 1

        while i < len(tokens) and tokens[i].type != close_type:
            if tokens[i].type != "list_item_open":
                i += 1
                continue

            as_task = not ordered and is_task_list_item(tokens, i)
            if not segments or segments[-1][0] != as_task:
                segments.append((as_task, []))

            if as_task:
                item = self._resolve_task_item(tokens, i)
            else:
                item = self._resolve_list_item(tokens, i)
            segments[-1][1].append(item.node)
            i = item.next_index

        if len(segments) > 1:
            logger.debug(f"Split list at line {token_line(tokens[start_index])} into {len(segments)} lists")

        nodes = []
        for as_task, items in segments:
            if as_task:
                nodes.append(task_list(items))
            elif ordered:
                nodes.append(ordered_list(items))
            else:
                nodes.append(bullet_list(items))

        return nodes, i + 1

    def _resolve_list_item(self, tokens: Sequence[Token], start_index: int) -> _ListItemResult:
        blocks, next_index = self._resolve_blocks(tokens, start_index + 1, "list_item_close")

        allowed = [b for b in blocks if b.node_type in LIST_ITEM_CONTENT_TYPES]
        if len(allowed) != len(blocks):
            self._warn(
                WarningKind.LOSSY_CONVERSION,
                LIST_ITEM_DROP_MESSAGE,
                token_line(tokens[start_index]),
            )
        if not allowed:
            allowed = [paragraph()]

        return _ListItemResult(list_item(allowed), next_index)

    def _resolve_task_item(self, tokens: Sequence[Token], start_index: int) -> _ListItemResult:
        """Resolve a task item: first paragraph is its content, the rest is dropped."""
        i = start_index + 1
        content: List[AdfNode] = []
        checked = False

        if i < len(tokens) and tokens[i].type in ("paragraph_open", "inline"):
            if tokens[i].type == "paragraph_open":
                inline_token, i = self._inline_span(tokens, i, "paragraph_close")
            else:
                inline_token, i = tokens[i], i + 1
            result = resolve_inline(
                inline_token.children if inline_token is not None else None,
                self._task_inline_options,
            )
            content = self._trim_leading_space(result.nodes)
            checked = result.saw_checked_checkbox

        extra, next_index = self._resolve_blocks(tokens, i, "list_item_close")
        if extra:
            self._warn(
                WarningKind.LOSSY_CONVERSION,
                TASK_ITEM_DROP_MESSAGE,
                token_line(tokens[start_index]),
            )

        return _ListItemResult(task_item(content, checked), next_index)

    @staticmethod
    def _trim_leading_space(nodes: List[AdfNode]) -> List[AdfNode]:
        """Strip whitespace left by checkbox markup from the first text run."""
        if not nodes or not nodes[0].is_text:
            return nodes
        first = nodes[0]
        trimmed = (first.text or "").lstrip()
        if trimmed == first.text:
            return nodes
        if not trimmed:
            return nodes[1:]
        first.text = trimmed
        return nodes

    # --- Block quotes, code, tables ---

    def _resolve_blockquote(
        self, tokens: Sequence[Token], start_index: int
    ) -> Tuple[List[AdfNode], int]:
        inner, next_index = self._resolve_blocks(tokens, start_index + 1, "blockquote_close")

        if self.preset.unwraps_blockquotes:
            self._warn(
                WarningKind.LOSSY_CONVERSION,
                f"Block quotes are not supported in the {self.preset.value} context; "
                "converting to paragraphs",
                token_line(tokens[start_index]),
            )
            return (inner or [paragraph()]), next_index

        return [blockquote(inner or [paragraph()])], next_index

    def _resolve_code_block(self, token: Token) -> AdfNode:
        language = (token.info or "").strip() or self.options.default_code_language
        source = token.content
        if source.endswith("\n"):
            source = source[:-1]
        return code_block(source, language)

    def _resolve_table(self, tokens: Sequence[Token], start_index: int) -> Tuple[AdfNode, int]:
        rows: List[AdfNode] = []
        in_header = False
        cells: Optional[List[AdfNode]] = None
        i = start_index + 1

        while i < len(tokens) and tokens[i].type != "table_close":
            kind = tokens[i].type

            if kind == "thead_open":
                in_header = True
            elif kind == "thead_close":
                in_header = False
            elif kind == "tr_open":
                cells = []
            elif kind == "tr_close":
                if cells is not None:
                    rows.append(table_row(cells))
                cells = None
            elif kind in ("th_open", "td_open"):
                close_type = "th_close" if kind == "th_open" else "td_close"
                inline_token, i = self._inline_span(tokens, i, close_type)
                cell_content = [paragraph(self._inline(inline_token))]
                is_header = in_header or kind == "th_open"
                if cells is None:
                    cells = []
                cells.append(table_header(cell_content) if is_header else table_cell(cell_content))
                continue
            i += 1

        # Lenient: a row left open at end of stream is still kept
        if cells:
            rows.append(table_row(cells))

        return table(rows), i + 1

    # --- Helpers ---

    def _source_text(self, token: Token) -> Optional[str]:
        """Return the stripped source lines a block token was parsed from."""
        if not token.map or not self.source_lines:
            return None
        start, end = token.map
        lines = self.source_lines[start:end]
        return "\n".join(line.strip() for line in lines) or None

    def _inline(self, inline_token: Optional[Token]) -> List[AdfNode]:
        children = inline_token.children if inline_token is not None else None
        return resolve_inline(children, self._inline_options).nodes

    @staticmethod
    def _inline_span(
        tokens: Sequence[Token], open_index: int, close_type: str
    ) -> Tuple[Optional[Token], int]:
        """Find the inline token of a leaf block and the index past its close.

        Returns:
            Tuple of (first inline token or None, index after close_type)
        """
        inline_token = None
        i = open_index + 1
        while i < len(tokens):
            token = tokens[i]
            if token.type == close_type:
                return inline_token, i + 1
            if token.type == "inline" and inline_token is None:
                inline_token = token
            i += 1
        return inline_token, i

    def _warn(
        self,
        kind: WarningKind,
        message: str,
        line: Optional[int] = None,
        original_text: Optional[str] = None,
    ) -> None:
        warning = ConversionWarning(kind, message, line, original_text)
        self.warnings.append(warning)
        location = f" (line {line})" if line is not None else ""
        logger.warning(f"{kind.value}: {message}{location}")

    def _abort(
        self,
        kind: WarningKind,
        message: str,
        line: Optional[int] = None,
        original_text: Optional[str] = None,
    ) -> None:
        logger.debug(f"Aborting conversion: {message}")
        raise ConversionError(ConversionWarning(kind, message, line, original_text))

    def _reject_or_warn(
        self,
        kind: WarningKind,
        message: str,
        line: Optional[int] = None,
        original_text: Optional[str] = None,
    ) -> None:
        """Abort in strict mode, otherwise record a warning."""
        if self.options.strict_mode:
            self._abort(kind, message, line, original_text)
        self._warn(kind, message, line, original_text)
