#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the HTML renderer."""

import logging
from io import BytesIO, StringIO

import pytest
from bs4 import BeautifulSoup

from concisemark import parse
from concisemark.ast.nodes import NodeTag
from concisemark.exceptions import InvalidOptionsError
from concisemark.extensions.registry import ExtensionHandler, ExtensionRegistry
from concisemark.options import HtmlRendererOptions, LatexRendererOptions
from concisemark.renderers.html import HtmlRenderer


def _html(text, options=None, registry=None, node_hook=None):
    options = options or HtmlRendererOptions(wrap_document=False)
    return HtmlRenderer(options, registry=registry, node_hook=node_hook).render_to_string(parse(text))


@pytest.mark.unit
class TestHtmlBlocks:
    """Tests for block-level HTML output."""

    def test_document_wrapper(self):
        """Test that the document renders as a div by default."""
        assert HtmlRenderer().render_to_string(parse("hi")) == "<div>\n<p>hi</p>\n</div>\n"

    def test_empty_document(self):
        """Test an empty page."""
        assert HtmlRenderer().render_to_string(parse("")) == "<div>\n</div>\n"

    def test_root_class(self):
        """Test the document class option."""
        html = HtmlRenderer(HtmlRendererOptions(root_class="page")).render_to_string(parse("x"))
        assert html.startswith('<div class="page">\n')

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_headings(self, level):
        """Test heading elements for every level."""
        assert _html("#" * level + " Title") == f"<h{level}>Title</h{level}>\n"

    def test_heading_ids(self):
        """Test slug ids with collision suffixes."""
        options = HtmlRendererOptions(wrap_document=False, heading_ids=True)
        html = _html("# Getting *Started*\n\n## Getting Started\n\n### ???", options)
        soup = BeautifulSoup(html, "html.parser")
        assert soup.find("h1")["id"] == "getting-started"
        assert soup.find("h2")["id"] == "getting-started-2"
        assert soup.find("h3")["id"] == "section"

    def test_heading_ids_reset_between_renders(self):
        """Test that one renderer instance starts each page fresh."""
        renderer = HtmlRenderer(HtmlRendererOptions(heading_ids=True))
        page = parse("# Same")
        assert renderer.render_to_string(page) == renderer.render_to_string(page)

    def test_paragraph(self):
        """Test a paragraph spanning lines."""
        assert _html("one\ntwo") == "<p>one\ntwo</p>\n"

    def test_block_quote(self):
        """Test a block quote holding a paragraph."""
        assert _html("> quoted") == "<blockquote>\n<p>quoted</p>\n</blockquote>\n"

    def test_list(self):
        """Test a flat list."""
        assert _html("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_nested_list(self):
        """Test that a nested list sits inside its parent item."""
        html = _html("- a\n    - b\n- c")
        assert html == "<ul>\n<li>a<ul>\n<li>b</li>\n</ul>\n</li>\n<li>c</li>\n</ul>\n"
        soup = BeautifulSoup(html, "html.parser")
        outer = soup.find("ul")
        assert len(outer.find_all("li", recursive=False)) == 2

    def test_code_block_is_escaped(self):
        """Test that code block content is escaped and not parsed."""
        assert _html("    <b>*x*</b>") == "<pre><code>&lt;b&gt;*x*&lt;/b&gt;</code></pre>\n"

    def test_math_block(self):
        """Test the display math container."""
        assert _html("$$a < b$$") == '<div class="math math-block">\n$$\na &lt; b\n$$\n</div>\n'

    def test_css_class_map(self):
        """Test extra classes per tag."""
        options = HtmlRendererOptions(root_class="page", css_class_map={"codeblock": "highlight", "document": "doc"})
        soup = BeautifulSoup(HtmlRenderer(options).render_to_string(parse("    x")), "html.parser")
        assert soup.find("pre")["class"] == ["highlight"]
        assert soup.find("div")["class"] == ["page", "doc"]

    def test_css_class_map_rejects_unknown_tags(self):
        """Test option validation."""
        with pytest.raises(ValueError):
            HtmlRendererOptions(css_class_map={"table": "x"})


@pytest.mark.unit
class TestHtmlInline:
    """Tests for inline HTML output."""

    def test_inline_code(self):
        """Test that inline code is escaped."""
        assert _html("Use `a + b < c`") == "<p>Use <code>a + b &lt; c</code></p>\n"

    def test_inline_math(self):
        """Test the inline math span."""
        assert _html("is $x^2$ ok") == '<p>is <span class="math math-inline">$x^2$</span> ok</p>\n'

    def test_emphasis_and_strong(self):
        """Test em and strong elements."""
        assert _html("**b** *i*") == "<p><strong>b</strong> <em>i</em></p>\n"

    def test_link(self):
        """Test that link targets are escaped."""
        html = _html("[docs](https://x.org/?a=1&b=2)")
        soup = BeautifulSoup(html, "html.parser")
        anchor = soup.find("a")
        assert anchor["href"] == "https://x.org/?a=1&b=2"
        assert anchor.get_text() == "docs"
        assert "&amp;" in html

    def test_link_without_text_shows_url(self):
        """Test that an empty link shows its target."""
        assert _html("x [](u)") == '<p>x <a href="u">u</a></p>\n'

    def test_image(self):
        """Test the img element and alt escaping."""
        html = _html('x ![say "hi"](pic.png)')
        soup = BeautifulSoup(html, "html.parser")
        image = soup.find("img")
        assert image["src"] == "pic.png"
        assert image["alt"] == 'say "hi"'

    def test_text_is_escaped(self):
        """Test escaping of text content."""
        assert _html("a < b & \"c\"") == "<p>a &lt; b &amp; &quot;c&quot;</p>\n"

    def test_escaping_can_be_disabled(self):
        """Test raw text output."""
        options = HtmlRendererOptions(wrap_document=False, escape_html=False)
        assert _html("<i>raw</i>", options) == "<p><i>raw</i></p>\n"


@pytest.mark.unit
class TestHtmlExtensions:
    """Tests for extension rendering in HTML."""

    def test_kbd(self):
        """Test the kbd builtin."""
        assert _html("Press @kbd{cmd+c}") == "<p>Press <kbd>⌘</kbd>+<kbd>c</kbd></p>\n"

    def test_unknown_key_renders_literal(self, caplog):
        """Test that an unknown key falls back to its escaped source with a warning."""
        with caplog.at_level(logging.WARNING, logger="concisemark.renderers.base"):
            html = _html("x @foo{<bar>}")
        assert html == "<p>x @foo{&lt;bar&gt;}</p>\n"
        assert "@foo" in caplog.text

    def test_unknown_key_warning_can_be_silenced(self, caplog):
        """Test the warn_unknown_extensions option."""
        options = HtmlRendererOptions(wrap_document=False, warn_unknown_extensions=False)
        with caplog.at_level(logging.WARNING, logger="concisemark.renderers.base"):
            _html("x @foo{bar}", options)
        assert caplog.records == []

    def test_failing_handler_renders_literal(self, caplog):
        """Test that a handler exception never escapes the render call."""

        def broken(value):
            raise RuntimeError("boom")

        registry = ExtensionRegistry({"bad": ExtensionHandler(broken, broken)})
        with caplog.at_level(logging.WARNING, logger="concisemark.renderers.base"):
            html = _html("x @bad{v}", registry=registry)
        assert html == "<p>x @bad{v}</p>\n"
        assert "boom" in caplog.text

    def test_custom_registry(self):
        """Test that handlers are looked up at render time."""
        registry = ExtensionRegistry()
        registry.register("tag", ExtensionHandler(lambda v: f'<span class="tag">{v}</span>', str))
        assert _html("@tag{news}", registry=registry) == '<p><span class="tag">news</span></p>\n'


@pytest.mark.unit
class TestHtmlRenderer:
    """Tests for renderer plumbing."""

    def test_invalid_options_type(self):
        """Test that mismatched options raise InvalidOptionsError."""
        with pytest.raises(InvalidOptionsError):
            HtmlRenderer(LatexRendererOptions())

    def test_node_hook_overrides_subtree(self):
        """Test that a hook string replaces a node and its children."""

        def hook(node):
            if node.tag is NodeTag.LINK:
                return "[link]"
            return None

        assert _html("see [a *b*](u) now", node_hook=hook) == "<p>see [link] now</p>\n"

    def test_render_to_binary_stream(self):
        """Test writing UTF-8 bytes to a binary stream."""
        buffer = BytesIO()
        HtmlRenderer().render(parse("é"), buffer)
        assert buffer.getvalue() == "<div>\n<p>é</p>\n</div>\n".encode("utf-8")

    def test_render_to_text_stream(self):
        """Test writing text to a text stream."""
        buffer = StringIO()
        HtmlRenderer().render(parse("x"), buffer)
        assert buffer.getvalue() == "<div>\n<p>x</p>\n</div>\n"

    def test_render_to_path(self, tmp_path):
        """Test writing to a file path."""
        target = tmp_path / "out.html"
        HtmlRenderer().render(parse("x"), target)
        assert target.read_text(encoding="utf-8") == "<div>\n<p>x</p>\n</div>\n"

    def test_render_to_unsupported_output(self):
        """Test that a non-writable output raises TypeError."""
        with pytest.raises(TypeError):
            HtmlRenderer().render(parse("x"), 42)

    def test_page_is_not_modified(self):
        """Test that rendering leaves the tree untouched."""
        page = parse("# a\n\n- b *c*")
        before = page.to_dict()
        HtmlRenderer().render_to_string(page)
        assert page.to_dict() == before
