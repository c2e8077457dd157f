#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the top-level parse and render API."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from io import BytesIO, StringIO
from pathlib import Path

import emoji
import pytest
from bs4 import BeautifulSoup

import concisemark
from concisemark import (
    HtmlRendererOptions,
    LatexRendererOptions,
    MetaParseError,
    Page,
    get_renderer,
    parse,
    parse_file,
    render,
    to_html,
    to_json,
    to_latex,
)
from concisemark.ast.nodes import NodeTag
from concisemark.exceptions import InvalidOptionsError, ValidationError
from concisemark.renderers import AstJsonRenderer, HtmlRenderer, LatexRenderer


@pytest.mark.integration
class TestParseInputs:
    """Tests for the input kinds accepted by parse and parse_file."""

    def test_parse_string(self):
        """Test that a str is always treated as document text."""
        page = parse("README.md")
        assert isinstance(page, Page)
        assert page.tree.text_content() == "README.md"

    def test_parse_bytes_with_bom(self):
        """Test that UTF-8 bytes are decoded and a BOM is dropped."""
        page = parse("\ufeff<!---\ntitle = \"T\"\n-->\nbody".encode("utf-8"))
        assert page.title == "T"

    def test_parse_stream(self):
        """Test text and binary streams."""
        assert parse(StringIO("# a")).ast.tag is NodeTag.DOCUMENT
        assert parse(BytesIO(b"# a")).tree.find_all("heading1")

    def test_parse_path(self, tmp_path):
        """Test that a Path argument reads the file."""
        path = tmp_path / "page.md"
        path.write_text("# From file\n", encoding="utf-8")
        assert parse(path).tree.text_content() == "From file"

    def test_parse_file(self, tmp_path, sample_document):
        """Test parse_file with str and Path arguments."""
        path = tmp_path / "notes.md"
        path.write_text(sample_document, encoding="utf-8")
        assert parse_file(path).title == "Field notes"
        assert parse_file(str(path)).source == sample_document

    def test_parse_file_strips_bom(self, tmp_path):
        """Test that a file saved with a BOM keeps its header."""
        path = tmp_path / "bom.md"
        path.write_bytes("\ufeff<!---\ntitle = \"B\"\n-->\n".encode("utf-8"))
        assert parse_file(path).title == "B"

    def test_parse_file_missing(self, tmp_path):
        """Test that an unreadable file raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            parse_file(tmp_path / "absent.md")
        assert exc_info.value.parameter_name == "path"

    def test_parse_invalid_utf8(self):
        """Test that undecodable bytes raise ValidationError."""
        with pytest.raises(ValidationError):
            parse(b"\xff\xfe\xfa")

    def test_parse_unsupported_type(self):
        """Test that other input types are rejected."""
        with pytest.raises(ValidationError):
            parse(42)

    def test_parser_option_overrides(self):
        """Test keyword overrides of parser options."""
        page = parse("<!---\ntitle = \"x\"\n-->\n", extract_metadata=False)
        assert page.meta is None
        assert page.tree.find_all(NodeTag.PARAGRAPH)

    def test_unknown_parser_option(self):
        """Test that an unknown keyword raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            parse("x", no_such_option=True)
        assert exc_info.value.parameter_name == "no_such_option"

    def test_malformed_header(self):
        """Test that a broken header surfaces as MetaParseError."""
        with pytest.raises(MetaParseError):
            parse("<!---\ntitle = \n-->\n")


@pytest.mark.integration
class TestRenderFormats:
    """Tests for render and the one-step helpers."""

    def test_get_renderer(self):
        """Test renderer selection by format name."""
        assert isinstance(get_renderer("html"), HtmlRenderer)
        assert isinstance(get_renderer("latex"), LatexRenderer)
        assert isinstance(get_renderer("json"), AstJsonRenderer)

    def test_unknown_format(self):
        """Test that an unknown format raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            render(parse("x"), "pdf")
        assert exc_info.value.parameter_name == "format"

    def test_mismatched_options(self):
        """Test that options for another format are rejected."""
        with pytest.raises(InvalidOptionsError):
            render(parse("x"), "html", LatexRendererOptions())

    def test_renderer_option_overrides(self):
        """Test keyword overrides of renderer options."""
        assert render(parse("x"), wrap_document=False) == "<p>x</p>\n"
        options = HtmlRendererOptions(root_class="page")
        assert render(parse("x"), "html", options, wrap_document=False) == "<p>x</p>\n"

    def test_unknown_renderer_option(self):
        """Test that an unknown renderer keyword raises ValidationError."""
        with pytest.raises(ValidationError):
            render(parse("x"), "latex", wrap_document=False)

    def test_one_step_helpers(self):
        """Test to_html, to_latex and to_json."""
        assert to_html("Use `a + b`") == "<div>\n<p>Use <code>a + b</code></p>\n</div>\n"
        assert to_latex("# Intro") == "\\section{Intro}\n"
        assert json.loads(to_json("x"))["ast"]["tag"] == "document"

    def test_page_render(self):
        """Test the Page.render shortcut."""
        page = parse("*hi*")
        assert page.render() == render(page)
        assert page.render("latex") == "\\emph{hi}\n"
        assert page.render("html", wrap_document=False) == "<p><em>hi</em></p>\n"

    def test_output_path(self, tmp_path):
        """Test that the result is also written to a path."""
        target = tmp_path / "page.html"
        result = render(parse("x"), output=target)
        assert Path(target).read_text(encoding="utf-8") == result

    def test_output_streams(self):
        """Test writing to text and binary streams."""
        text_stream, byte_stream = StringIO(), BytesIO()
        result = render(parse("é"), "latex", output=text_stream)
        render(parse("é"), "latex", output=byte_stream)
        assert text_stream.getvalue() == result
        assert byte_stream.getvalue().decode("utf-8") == result

    def test_node_hook(self):
        """Test that a hook replaces selected nodes."""

        def hook(node):
            return "<hr>\n" if node.tag is NodeTag.HEADING1 else None

        assert render(parse("# a\n\nb"), wrap_document=False, node_hook=hook) == "<hr>\n<p>b</p>\n"

    def test_concurrent_rendering(self, sample_document):
        """Test that one page renders identically from many threads."""
        page = parse(sample_document)
        expected = render(page)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: render(page), range(16)))
        assert results == [expected] * 16


@pytest.mark.integration
class TestDocumentExamples:
    """End-to-end behavior on representative documents."""

    def test_sample_meta(self, sample_document):
        """Test the parsed front matter."""
        page = parse(sample_document)
        assert page.meta.title == "Field notes"
        assert page.meta.subtitle == "Week 12"
        assert page.meta.date == datetime(2024, 3, 1, 9, 30)
        assert list(page.meta.authors) == ["Ada", "Grace"]
        assert page.ast.range.start == sample_document.index("# Field notes")

    def test_sample_html(self, sample_document):
        """Test the HTML structure of the sample document."""
        soup = BeautifulSoup(to_html(sample_document), "html.parser")
        assert soup.find("h1").get_text() == "Field notes"
        assert soup.find("h2").get_text() == "Summary & next steps"
        assert soup.find("span", class_="math-inline").get_text() == "$E = mc^2$"
        assert "a^2 + b^2 = c^2" in soup.find("div", class_="math-block").get_text()
        assert soup.find("em").get_text() == "mostly"
        assert soup.find("strong").get_text() == "conserved"
        assert soup.find("blockquote").find("code").get_text() == "code"

        outer = soup.find("ul")
        assert len(outer.find_all("li", recursive=False)) == 2
        nested = outer.find("li").find("ul")
        assert nested.find("img")["src"] == "chart.png"
        assert outer.find("a")["href"] == "https://example.com"
        assert [kbd.get_text() for kbd in soup.find_all("kbd")] == ["⌘", "s"]
        assert emoji.emojize(":smile:", language="alias") in outer.get_text()
        assert soup.find("pre").find("code").get_text() == "def main():\n    return 0"

    def test_sample_latex(self, sample_document):
        """Test the LaTeX fragment of the sample document."""
        latex = to_latex(sample_document)
        assert latex.startswith("\\section{Field notes}\n")
        assert "\\subsection{Summary \\& next steps}" in latex
        assert "$E = mc^2$" in latex
        assert "\\begin{itemize}" in latex
        assert "\\href{https://example.com}{a link}" in latex
        assert "\\begin{verbatim}\ndef main():\n    return 0\n\\end{verbatim}" in latex

    def test_sample_json(self, sample_document):
        """Test the JSON document of the sample page."""
        data = json.loads(to_json(sample_document))
        assert data["meta"]["title"] == "Field notes"
        assert data["meta"]["date"] == "2024-03-01T09:30:00"
        tags = [child["tag"] for child in data["ast"]["children"]]
        assert tags == ["heading1", "paragraph", "mathblock", "blockquote", "list", "paragraph", "codeblock", "heading2"]

    def test_seven_hashes_is_paragraph(self):
        """Test that headings stop at level six."""
        assert to_html("####### x", wrap_document=False) == "<p>####### x</p>\n"

    def test_nesting_needs_full_indent(self, caplog):
        """Test that a two-space marker stays at the outer level."""
        four = parse("- a\n    - b")
        assert len(four.tree.find_all(NodeTag.LIST)) == 2
        with caplog.at_level(logging.WARNING):
            two = parse("- a\n  - b")
        lists = two.tree.find_all(NodeTag.LIST)
        assert len(lists) == 1
        assert len(two.tree.children(lists[0])) == 2

    def test_math_block_versus_inline(self):
        """Test that only a standalone formula becomes a block."""
        assert parse("$$x$$").tree.find_all(NodeTag.MATHBLOCK)
        inline = parse("see $$x$$ here")
        assert not inline.tree.find_all(NodeTag.MATHBLOCK)
        assert inline.tree.find_all(NodeTag.MATHINLINE)

    def test_unknown_extension_literal(self, caplog):
        """Test that unknown extensions render as their source text."""
        with caplog.at_level(logging.WARNING):
            html = to_html("@foo{bar}", wrap_document=False)
        assert html == "<p>@foo{bar}</p>\n"

    def test_package_metadata(self):
        """Test the package version and exports."""
        assert concisemark.__version__
        for name in concisemark.__all__:
            assert hasattr(concisemark, name)
