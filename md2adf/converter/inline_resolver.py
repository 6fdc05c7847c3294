"""Conversion of inline markdown-it tokens into ADF inline nodes.

Markdown nests formatting (``**a *b* c**``) while ADF attaches a flat list of
marks to each text node. The resolver keeps a list of currently open marks
and stamps a copy of it onto every text run it emits. Adjacent runs with
identical marks are merged so the output never fragments.

resolve_inline() is a pure function of its arguments; warnings are a
block-level concern and are never raised here.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence

from markdown_it.token import Token

from ..adf.adf_models import AdfMark, AdfMarkType, AdfNode
from ..adf.builders import code, em, hard_break, link, strike, strong, text, underline
from .task_items import get_attr, parse_task_checkbox

logger = logging.getLogger(__name__)

# Open/close token pairs that map onto a mark without attributes
_SIMPLE_MARKS = {
    "strong_open": strong,
    "em_open": em,
    "s_open": strike,
    "del_open": strike,
    "ins_open": underline,
}

_SIMPLE_MARK_CLOSERS = {
    "strong_close": AdfMarkType.STRONG.value,
    "em_close": AdfMarkType.EM.value,
    "s_close": AdfMarkType.STRIKE.value,
    "del_close": AdfMarkType.STRIKE.value,
    "ins_close": AdfMarkType.UNDERLINE.value,
}


class InlineOptions(NamedTuple):
    """Options that influence inline resolution.

    Attributes:
        preserve_line_breaks: Soft breaks become hardBreak nodes, not spaces
        strip_task_checkbox_markup: Swallow checkbox markup and report its state
    """
    preserve_line_breaks: bool = False
    strip_task_checkbox_markup: bool = False


class InlineResult(NamedTuple):
    """Inline nodes plus whether a checked task checkbox was seen."""
    nodes: List[AdfNode]
    saw_checked_checkbox: bool


def _unique_marks(marks: Sequence[AdfMark]) -> List[AdfMark]:
    """Copy marks keeping only the first mark of each type."""
    seen = set()
    result = []
    for mark in marks:
        if mark.type in seen:
            continue
        seen.add(mark.type)
        result.append(AdfMark(type=mark.type, attrs=dict(mark.attrs)))
    return result


def _remove_nearest(marks: List[AdfMark], mark_type: str) -> None:
    """Remove the most recently opened mark of mark_type, if any."""
    for i in range(len(marks) - 1, -1, -1):
        if marks[i].type == mark_type:
            del marks[i]
            return


def _append_text(nodes: List[AdfNode], value: str, marks: Sequence[AdfMark]) -> None:
    """Append a text run, merging into the previous run when marks match."""
    if value == "":
        return
    run_marks = _unique_marks(marks)
    if nodes:
        last = nodes[-1]
        if last.is_text and last.marks == run_marks:
            last.text = (last.text or "") + value
            return
    nodes.append(text(value, run_marks))


def merge_adjacent_text(nodes: List[AdfNode]) -> List[AdfNode]:
    """Join neighbouring text runs whose marks became equal after the fact."""
    merged: List[AdfNode] = []
    for node in nodes:
        if merged and node.is_text and merged[-1].is_text and merged[-1].marks == node.marks:
            merged[-1].text = (merged[-1].text or "") + (node.text or "")
            continue
        merged.append(node)
    return merged


def _checkbox_literal(checked: bool) -> str:
    return "[x]" if checked else "[ ]"


def resolve_inline(
    tokens: Optional[Sequence[Token]],
    options: InlineOptions = InlineOptions(),
) -> InlineResult:
    """Convert inline tokens into ADF inline nodes.

    Args:
        tokens: Children of an inline token (None or empty is allowed)
        options: Line break and checkbox handling

    Returns:
        InlineResult with fresh nodes and the checked-checkbox flag
    """
    if not tokens:
        return InlineResult([], False)

    nodes: List[AdfNode] = []
    active: List[AdfMark] = []
    # One entry per open link: True when it pushed a link mark
    link_pushed: List[bool] = []
    saw_checked = False

    for token in tokens:
        kind = token.type

        if kind in ("text", "text_special"):
            _append_text(nodes, token.content, active)

        elif kind == "code_inline":
            _append_text(nodes, token.content, active + [code()])

        elif kind == "softbreak":
            if options.preserve_line_breaks:
                nodes.append(hard_break())
            else:
                _append_text(nodes, " ", active)

        elif kind == "hardbreak":
            nodes.append(hard_break())

        elif kind in _SIMPLE_MARKS:
            active.append(_SIMPLE_MARKS[kind]())

        elif kind in _SIMPLE_MARK_CLOSERS:
            _remove_nearest(active, _SIMPLE_MARK_CLOSERS[kind])

        elif kind == "link_open":
            href = get_attr(token, "href")
            if href:
                active.append(link(href, get_attr(token, "title")))
                link_pushed.append(True)
            else:
                link_pushed.append(False)

        elif kind == "link_close":
            if link_pushed and link_pushed.pop():
                _remove_nearest(active, AdfMarkType.LINK.value)

        elif kind == "html_inline":
            checkbox = parse_task_checkbox(token.content)
            if not checkbox.is_checkbox:
                logger.debug(f"Ignoring raw inline markup: {token.content!r}")
            elif options.strip_task_checkbox_markup:
                saw_checked = saw_checked or checkbox.checked
            else:
                # Outside task items the plugin's checkbox goes back to its source text
                _append_text(nodes, _checkbox_literal(checkbox.checked), active)

        elif kind == "image":
            src = get_attr(token, "src")
            alt = token.content or get_attr(token, "alt")
            if src:
                # Inside a link the outer href wins; link marks are deduplicated by type
                _append_text(nodes, alt or src, active + [link(src)])
            elif alt:
                _append_text(nodes, alt, active)

        else:
            logger.debug(f"Ignoring inline token: {kind}")

    return InlineResult(nodes, saw_checked)
