#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for inline span recognition."""

import pytest

from concisemark.ast.nodes import NodeTag
from concisemark.extensions.registry import ExtensionRegistry
from concisemark.options import ConciseMarkOptions
from concisemark.parsers.concisemark import ConciseMarkParser
from concisemark.parsers.inline import InlineSpanner
from concisemark.parsers.lines import Line


def _inline(text, options=None, registry=None):
    """Parse one paragraph and return the tree and its inline children."""
    page = ConciseMarkParser(options, registry=registry).parse(text)
    paragraph = page.tree.children(page.ast)[0]
    assert paragraph.tag is NodeTag.PARAGRAPH
    return page.tree, page.tree.children(paragraph)


def _tags(nodes):
    return [node.tag.value for node in nodes]


@pytest.mark.unit
class TestText:
    """Tests for plain text and escapes."""

    def test_plain_text(self):
        """Test that text without markers is one text node."""
        tree, spans = _inline("just words")
        assert _tags(spans) == ["text"]
        assert spans[0].content == "just words"

    def test_backslash_escapes(self):
        """Test that escaped markers become literal text."""
        tree, spans = _inline(r"\*not em\* and \`tick\` and \$5")
        assert _tags(spans) == ["text"]
        assert spans[0].content == "*not em* and `tick` and $5"

    def test_escape_range_covers_backslash(self):
        """Test that the text range includes the escaping backslash."""
        tree, spans = _inline(r"\*x")
        assert tree.source_text(spans[0]) == r"\*x"

    def test_backslash_before_letter_is_kept(self):
        """Test that a backslash before a non-marker is literal."""
        _, spans = _inline(r"a\b")
        assert spans[0].content == r"a\b"

    def test_email_address_is_text(self):
        """Test that an @ without a key and brace is literal."""
        _, spans = _inline("mail user@example.com today")
        assert _tags(spans) == ["text"]


@pytest.mark.unit
class TestInlineCode:
    """Tests for inline code."""

    def test_code_span(self):
        """Test a simple code span and its range."""
        tree, spans = _inline("Use `a + b` now")
        assert _tags(spans) == ["text", "inlinecode", "text"]
        assert spans[1].content == "a + b"
        assert tree.source_text(spans[1]) == "`a + b`"

    def test_double_backtick_code(self):
        """Test that a longer run can contain a single backtick."""
        _, spans = _inline("x ``a ` b`` y")
        assert spans[1].content == "a ` b"

    def test_code_beats_emphasis(self):
        """Test that markers inside code are not parsed."""
        _, spans = _inline("see `*text*`")
        assert _tags(spans) == ["text", "inlinecode"]
        assert spans[1].content == "*text*"

    def test_unmatched_backtick_is_literal(self):
        """Test that a stray backtick degrades to text."""
        _, spans = _inline("stray ` tick")
        assert _tags(spans) == ["text"]
        assert spans[0].content == "stray ` tick"

    def test_code_hides_math_delimiter(self):
        """Test that a dollar sign inside code does not start math."""
        _, spans = _inline("cost `$x` and")
        assert _tags(spans) == ["text", "inlinecode", "text"]


@pytest.mark.unit
class TestInlineMath:
    """Tests for inline math."""

    def test_single_dollar(self):
        """Test $...$ inside text."""
        _, spans = _inline("is $x^2$ here")
        assert _tags(spans) == ["text", "mathinline", "text"]
        assert spans[1].content == "x^2"

    def test_double_dollar_inline(self):
        """Test $$...$$ inside text is still inline."""
        _, spans = _inline("see $$x$$ now")
        assert _tags(spans) == ["text", "mathinline", "text"]
        assert spans[1].content == "x"

    def test_math_content_is_not_parsed(self):
        """Test that emphasis markers inside math are literal."""
        _, spans = _inline("a $a*b*c$ b")
        assert spans[1].content == "a*b*c"

    def test_escaped_dollar_inside_math(self):
        """Test that an escaped dollar does not close math."""
        _, spans = _inline(r"a $x \$ y$ b")
        assert spans[1].content == r"x \$ y"

    def test_math_does_not_span_lines(self):
        """Test that an unclosed dollar on a line is literal."""
        _, spans = _inline("a $x\ny$ b")
        assert _tags(spans) == ["text"]

    def test_lone_dollar_is_text(self):
        """Test that a single dollar is literal."""
        _, spans = _inline("costs $ nothing")
        assert _tags(spans) == ["text"]


@pytest.mark.unit
class TestLinksAndImages:
    """Tests for links and images."""

    def test_link(self):
        """Test a link with text."""
        tree, spans = _inline("see [the docs](https://example.com/x) please")
        assert _tags(spans) == ["text", "link", "text"]
        link = spans[1]
        assert link.attrs["url"] == "https://example.com/x"
        assert tree.text_content(link) == "the docs"
        assert tree.source_text(link) == "[the docs](https://example.com/x)"

    def test_link_with_emphasis(self):
        """Test that link text is scanned for inline markup."""
        tree, spans = _inline("[*em* text](u)")
        assert _tags(tree.children(spans[0])) == ["emphasis", "text"]

    def test_empty_link_text(self):
        """Test a link with no text."""
        tree, spans = _inline("x [](u)")
        assert tree.children(spans[1]) == []
        assert spans[1].attrs["url"] == "u"

    def test_image(self):
        """Test an image with alt text."""
        _, spans = _inline("a ![a chart](img/chart.png) b")
        assert _tags(spans) == ["text", "image", "text"]
        assert spans[1].attrs["url"] == "img/chart.png"
        assert spans[1].attrs["alt"] == "a chart"
        assert spans[1].children == ()

    def test_unclosed_link_is_text(self):
        """Test that a bracket without a target is literal."""
        _, spans = _inline("[not a link] here")
        assert _tags(spans) == ["text"]

    def test_url_with_space_is_not_link(self):
        """Test that whitespace ends a link target."""
        _, spans = _inline("[a](b c)")
        assert _tags(spans) == ["text"]


@pytest.mark.unit
class TestExtensions:
    """Tests for @key{value} syntax."""

    def test_extension(self):
        """Test key and value attributes."""
        tree, spans = _inline("press @kbd{ctrl+c} now")
        assert _tags(spans) == ["text", "extension", "text"]
        assert dict(spans[1].attrs) == {"key": "kbd", "value": "ctrl+c"}
        assert tree.source_text(spans[1]) == "@kbd{ctrl+c}"

    def test_escaped_closing_brace(self):
        """Test that a backslash-escaped brace belongs to the value."""
        _, spans = _inline(r"a @char{\}} b")
        assert spans[1].attrs["value"] == "}"

    def test_value_is_literal(self):
        """Test that markers inside the value are not parsed."""
        _, spans = _inline("x @math{a*b*c} y")
        assert spans[1].attrs["value"] == "a*b*c"

    def test_unclosed_extension_is_text(self):
        """Test that a missing closing brace leaves literal text."""
        _, spans = _inline("x @kbd{ctrl")
        assert _tags(spans) == ["text"]

    def test_unknown_key_is_node_by_default(self):
        """Test that unregistered keys still produce extension nodes."""
        _, spans = _inline("x @foo{bar}")
        assert spans[1].attrs["key"] == "foo"

    def test_strict_mode_skips_unknown_keys(self):
        """Test that strict mode leaves unregistered keys as text."""
        options = ConciseMarkOptions(strict_extension_keys=True)
        _, spans = _inline("x @foo{bar} @kbd{a}", options=options)
        assert _tags(spans) == ["text", "extension"]
        assert spans[0].content == "x @foo{bar} "

    def test_strict_mode_uses_given_registry(self):
        """Test that strict mode consults the parser's registry."""
        registry = ExtensionRegistry()
        registry.register("foo", str.upper)
        options = ConciseMarkOptions(strict_extension_keys=True)
        _, spans = _inline("x @foo{bar} @kbd{a}", options=options, registry=registry)
        assert _tags(spans) == ["text", "extension", "text"]

    def test_accepts_extension(self):
        """Test the spanner's key check."""
        registry = ExtensionRegistry.with_builtins()
        assert InlineSpanner().accepts_extension("anything")
        assert InlineSpanner(registry, strict_extension_keys=True).accepts_extension("emoji")
        assert not InlineSpanner(registry, strict_extension_keys=True).accepts_extension("nope")
        assert not InlineSpanner(None, strict_extension_keys=True).accepts_extension("emoji")


@pytest.mark.unit
class TestEmphasis:
    """Tests for emphasis and strong emphasis."""

    def test_strong_and_emphasis(self):
        """Test both markers in one line."""
        tree, spans = _inline("**bold** and *em*")
        assert _tags(spans) == ["strong", "text", "emphasis"]
        assert tree.text_content(spans[0]) == "bold"
        assert tree.text_content(spans[2]) == "em"

    def test_triple_stars(self):
        """Test that three stars give emphasis inside strong."""
        tree, spans = _inline("***both***")
        assert _tags(spans) == ["strong"]
        assert _tags(tree.children(spans[0])) == ["emphasis"]

    def test_strong_inside_emphasis(self):
        """Test a strong pair nested in emphasis."""
        tree, spans = _inline("*a **b** c*")
        assert _tags(spans) == ["emphasis"]
        assert _tags(tree.children(spans[0])) == ["text", "strong", "text"]

    def test_unmatched_strong_is_literal(self):
        """Test that an unclosed ** degrades to text."""
        _, spans = _inline("a **b")
        assert _tags(spans) == ["text"]
        assert spans[0].content == "a **b"

    def test_spaced_stars_are_literal(self):
        """Test that stars next to spaces do not open emphasis."""
        _, spans = _inline("a * b * c and 2 ** 3")
        assert _tags(spans) == ["text"]

    def test_emphasis_across_lines(self):
        """Test that emphasis may span a line break with exact ranges."""
        tree, spans = _inline("one *two\nthree*")
        assert _tags(spans) == ["text", "emphasis"]
        assert tree.source_text(spans[1]) == "*two\nthree*"
        assert tree.text_content(spans[1]) == "two\nthree"

    def test_code_inside_strong(self):
        """Test that a star inside code does not close strong."""
        tree, spans = _inline("**a `*` b**")
        assert _tags(spans) == ["strong"]
        assert _tags(tree.children(spans[0])) == ["text", "inlinecode", "text"]


@pytest.mark.unit
class TestInlineSpanner:
    """Tests for InlineSpanner used directly."""

    def test_no_lines(self):
        """Test that no lines give no spans."""
        assert InlineSpanner().scan([]) == []

    def test_offsets_follow_lines(self):
        """Test that spans on later lines use those lines' offsets.

        Text running over a line break ends where the next line starts.
        """
        spans = InlineSpanner().scan([Line("ab", 10), Line("`c`", 20)])
        assert [(span.tag, span.start, span.end) for span in spans] == [
            (NodeTag.TEXT, 10, 20),
            (NodeTag.INLINECODE, 20, 23),
        ]
        assert spans[0].attrs["content"] == "ab\n"
