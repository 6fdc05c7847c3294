"""Unit tests for the inline resolver."""

import pytest
from markdown_it.token import Token

from md2adf.adf.builders import em, hard_break, strong, text
from md2adf.converter.inline_resolver import InlineOptions, merge_adjacent_text, resolve_inline
from md2adf.converter.token_source import create_markdown_parser


def inline_children(markdown: str):
    """Parse markdown and return the children of its first inline token."""
    tokens = create_markdown_parser().parse(markdown)
    for token in tokens:
        if token.type == "inline":
            return token.children
    raise AssertionError(f"No inline token in {markdown!r}")


def as_dicts(nodes):
    return [node.to_dict() for node in nodes]


class TestPlainText:
    """Test cases for text runs and merging."""

    def test_none_tokens_give_empty_result(self):
        """Absent token sequence yields no nodes and no checkbox."""
        result = resolve_inline(None)

        assert result.nodes == []
        assert result.saw_checked_checkbox is False

    def test_plain_text(self):
        """Plain text becomes a single unmarked text node."""
        result = resolve_inline(inline_children("Hello world"))

        assert as_dicts(result.nodes) == [{"type": "text", "text": "Hello world"}]

    def test_soft_break_becomes_space_and_merges(self):
        """Soft breaks become a space merged into the surrounding run."""
        result = resolve_inline(inline_children("Line 1\nLine 2"))

        assert as_dicts(result.nodes) == [{"type": "text", "text": "Line 1 Line 2"}]

    def test_soft_break_preserved_as_hard_break(self):
        """preserve_line_breaks turns soft breaks into hardBreak nodes."""
        options = InlineOptions(preserve_line_breaks=True)

        result = resolve_inline(inline_children("Line 1\nLine 2"), options)

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "Line 1"},
            {"type": "hardBreak"},
            {"type": "text", "text": "Line 2"},
        ]

    def test_hard_break_always_emitted(self):
        """Explicit hard breaks are emitted regardless of options."""
        result = resolve_inline(inline_children("Line 1  \nLine 2"))

        assert [n.type for n in result.nodes] == ["text", "hardBreak", "text"]

    def test_adjacent_synthetic_text_tokens_merge(self):
        """Consecutive text tokens with the same marks merge into one node."""
        tokens = [
            Token("text", "", 0, content="a"),
            Token("text", "", 0, content="b"),
            Token("text", "", 0, content="c"),
        ]

        result = resolve_inline(tokens)

        assert as_dicts(result.nodes) == [{"type": "text", "text": "abc"}]

    def test_unknown_tokens_are_ignored(self):
        """Unrecognized token kinds produce no output."""
        tokens = [
            Token("text", "", 0, content="a"),
            Token("footnote_ref", "", 0),
            Token("text", "", 0, content="b"),
        ]

        result = resolve_inline(tokens)

        assert as_dicts(result.nodes) == [{"type": "text", "text": "ab"}]


class TestMarks:
    """Test cases for mark handling."""

    def test_bold(self):
        """Strong emphasis produces a strong mark."""
        result = resolve_inline(inline_children("**bold text**"))

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "bold text", "marks": [{"type": "strong"}]}
        ]

    def test_italic_underscores(self):
        """Underscore emphasis produces an em mark."""
        result = resolve_inline(inline_children("_italic text_"))

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "italic text", "marks": [{"type": "em"}]}
        ]

    def test_inline_code(self):
        """Code spans produce a code mark."""
        result = resolve_inline(inline_children("`code text`"))

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "code text", "marks": [{"type": "code"}]}
        ]

    def test_strikethrough(self):
        """Double tildes produce a strike mark."""
        result = resolve_inline(inline_children("~~strike text~~"))

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "strike text", "marks": [{"type": "strike"}]}
        ]

    def test_bold_italic_carries_both_marks(self):
        """Triple asterisks yield one run with both strong and em."""
        result = resolve_inline(inline_children("***bold italic***"))

        assert len(result.nodes) == 1
        types = {mark.type for mark in result.nodes[0].marks}
        assert types == {"strong", "em"}
        assert result.nodes[0].text == "bold italic"

    def test_marks_close_and_runs_split(self):
        """Runs split where the mark set changes."""
        result = resolve_inline(inline_children("plain **bold** plain"))

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "plain "},
            {"type": "text", "text": "bold", "marks": [{"type": "strong"}]},
            {"type": "text", "text": " plain"},
        ]

    def test_nested_same_type_mark_not_duplicated(self):
        """A run never carries two marks of the same type."""
        tokens = [
            Token("strong_open", "strong", 1),
            Token("strong_open", "strong", 1),
            Token("text", "", 0, content="x"),
            Token("strong_close", "strong", -1),
            Token("strong_close", "strong", -1),
        ]

        result = resolve_inline(tokens)

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "x", "marks": [{"type": "strong"}]}
        ]

    def test_out_of_order_close_removes_nearest_matching_mark(self):
        """Closing a mark that is not on top removes the nearest of its type."""
        tokens = [
            Token("strong_open", "strong", 1),
            Token("em_open", "em", 1),
            Token("strong_close", "strong", -1),
            Token("text", "", 0, content="still em"),
            Token("em_close", "em", -1),
        ]

        result = resolve_inline(tokens)

        assert as_dicts(result.nodes) == [
            {"type": "text", "text": "still em", "marks": [{"type": "em"}]}
        ]

    def test_underline_equivalent_tokens(self):
        """ins_open/ins_close map onto the underline mark."""
        tokens = [
            Token("ins_open", "ins", 1),
            Token("text", "", 0, content="under"),
            Token("ins_close", "ins", -1),
        ]

        result = resolve_inline(tokens)

        assert result.nodes[0].marks[0].type == "underline"


class TestLinks:
    """Test cases for links and images."""

    def test_link(self):
        """Links become a link mark with href."""
        result = resolve_inline(inline_children("[link text](https://example.com)"))

        assert as_dicts(result.nodes) == [
            {
                "type": "text",
                "text": "link text",
                "marks": [{"type": "link", "attrs": {"href": "https://example.com"}}],
            }
        ]

    def test_link_with_title(self):
        """Link titles are carried on the mark."""
        result = resolve_inline(inline_children('[link](https://example.com "Title")'))

        assert result.nodes[0].marks[0].attrs == {
            "href": "https://example.com",
            "title": "Title",
        }

    def test_link_without_href_does_not_pop_outer_mark(self):
        """An href-less link pushes nothing and its close pops nothing."""
        tokens = [
            Token("link_open", "a", 1, attrs={"href": "https://outer.example"}),
            Token("link_open", "a", 1),
            Token("text", "", 0, content="inner"),
            Token("link_close", "a", -1),
            Token("text", "", 0, content=" tail"),
            Token("link_close", "a", -1),
        ]

        result = resolve_inline(tokens)

        assert len(result.nodes) == 1
        assert result.nodes[0].text == "inner tail"
        assert result.nodes[0].marks[0].attrs == {"href": "https://outer.example"}

    def test_image_degrades_to_linked_alt_text(self):
        """Images become their alt text linked to the source."""
        result = resolve_inline(inline_children("![alt text](https://img.example/a.png)"))

        assert as_dicts(result.nodes) == [
            {
                "type": "text",
                "text": "alt text",
                "marks": [{"type": "link", "attrs": {"href": "https://img.example/a.png"}}],
            }
        ]

    def test_image_without_alt_uses_url(self):
        """Images without alt text show the URL."""
        result = resolve_inline(inline_children("![](https://img.example/a.png)"))

        assert result.nodes[0].text == "https://img.example/a.png"

    def test_image_inside_link_keeps_outer_href(self):
        """A linked image carries one link mark, the outer link's."""
        result = resolve_inline(inline_children(
            "[![logo](https://img.example/a.png)](https://site.example/home)"
        ))

        assert as_dicts(result.nodes) == [
            {
                "type": "text",
                "text": "logo",
                "marks": [{"type": "link", "attrs": {"href": "https://site.example/home"}}],
            }
        ]

    def test_image_without_src_is_plain_alt_text(self):
        """An image token with no source emits plain alt text."""
        tokens = [Token("image", "img", 0, attrs={"alt": ""}, content="just alt")]

        result = resolve_inline(tokens)

        assert as_dicts(result.nodes) == [{"type": "text", "text": "just alt"}]


class TestTaskCheckbox:
    """Test cases for checkbox markup handling."""

    CHECKED = '<input class="task-list-item-checkbox" checked="checked" disabled="disabled" type="checkbox">'
    UNCHECKED = '<input class="task-list-item-checkbox" disabled="disabled" type="checkbox">'

    @pytest.mark.parametrize("markup,expected", [(CHECKED, True), (UNCHECKED, False)])
    def test_checkbox_state_reported_and_stripped(self, markup, expected):
        """Checkbox markup is swallowed and its state reported."""
        tokens = [
            Token("html_inline", "", 0, content=markup),
            Token("text", "", 0, content=" Do it"),
        ]
        options = InlineOptions(strip_task_checkbox_markup=True)

        result = resolve_inline(tokens, options)

        assert result.saw_checked_checkbox is expected
        assert as_dicts(result.nodes) == [{"type": "text", "text": " Do it"}]

    @pytest.mark.parametrize("markup,literal", [(CHECKED, "[x]"), (UNCHECKED, "[ ]")])
    def test_checkbox_restored_as_text_without_strip_option(self, markup, literal):
        """Outside task items the checkbox becomes its source text again."""
        tokens = [
            Token("html_inline", "", 0, content=markup),
            Token("text", "", 0, content=" Do it"),
        ]

        result = resolve_inline(tokens)

        assert result.saw_checked_checkbox is False
        assert as_dicts(result.nodes) == [{"type": "text", "text": f"{literal} Do it"}]

    def test_non_checkbox_markup_ignored(self):
        """Other raw inline markup produces no output."""
        tokens = [Token("html_inline", "", 0, content="<span>")]

        assert resolve_inline(tokens).nodes == []


class TestMergeAdjacentText:
    """Test cases for merge_adjacent_text()."""

    def test_joins_runs_with_equal_marks(self):
        """Runs that ended up with the same marks are joined."""
        nodes = [text("a ", [strong()]), text("b", [strong()]), hard_break(), text("c", [strong()])]

        merged = merge_adjacent_text(nodes)

        assert as_dicts(merged) == [
            {"type": "text", "text": "a b", "marks": [{"type": "strong"}]},
            {"type": "hardBreak"},
            {"type": "text", "text": "c", "marks": [{"type": "strong"}]},
        ]

    def test_keeps_runs_with_different_marks(self):
        nodes = [text("a", [strong()]), text("b", [strong(), em()])]

        assert len(merge_adjacent_text(nodes)) == 2
