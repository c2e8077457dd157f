#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the AST JSON renderer."""

import json
from io import BytesIO

import pytest

from concisemark import parse
from concisemark.ast.serialization import json_to_tree, tree_to_dict
from concisemark.exceptions import InvalidOptionsError
from concisemark.options import AstJsonRendererOptions, HtmlRendererOptions
from concisemark.renderers.ast_json import AstJsonRenderer


@pytest.mark.unit
class TestAstJsonRenderer:
    """Tests for AST JSON renderer."""

    def test_render_page(self):
        """Test the top-level keys."""
        page = parse('<!---\ntitle = "T"\n-->\n# Hello')
        data = json.loads(AstJsonRenderer().render_to_string(page))
        assert set(data) == {"meta", "ast"}
        assert data["meta"]["title"] == "T"
        assert data["ast"]["tag"] == "document"
        assert data["ast"]["children"][0]["tag"] == "heading1"

    def test_default_indent(self):
        """Test that output is indented by default."""
        assert '\n  "ast"' in AstJsonRenderer().render_to_string(parse("x"))

    def test_compact_output(self):
        """Test indent=None."""
        output = AstJsonRenderer(AstJsonRendererOptions(indent=None)).render_to_string(parse("x"))
        assert "\n" not in output

    def test_without_attrs_and_meta(self):
        """Test that attrs and meta can be dropped."""
        options = AstJsonRendererOptions(include_attrs=False, include_meta=False)
        data = json.loads(AstJsonRenderer(options).render_to_string(parse("x")))
        assert set(data) == {"ast"}
        assert "attrs" not in data["ast"]

    def test_non_ascii(self):
        """Test the ensure_ascii option."""
        page = parse("café")
        assert "café" in AstJsonRenderer().render_to_string(page)
        assert "caf\\u00e9" in AstJsonRenderer(AstJsonRendererOptions(ensure_ascii=True)).render_to_string(page)

    def test_output_rebuilds_tree(self):
        """Test that the JSON output can be read back into a tree."""
        page = parse("- a\n    - b *c*\n")
        rebuilt = json_to_tree(AstJsonRenderer().render_to_string(page), page.source)
        assert tree_to_dict(rebuilt) == tree_to_dict(page.tree)

    def test_render_to_stream(self):
        """Test writing JSON to a binary stream."""
        buffer = BytesIO()
        AstJsonRenderer().render(parse("x"), buffer)
        assert json.loads(buffer.getvalue().decode("utf-8"))["ast"]["tag"] == "document"

    def test_negative_indent(self):
        """Test option validation."""
        with pytest.raises(ValueError):
            AstJsonRendererOptions(indent=-1)

    def test_invalid_options_type(self):
        """Test that mismatched options raise InvalidOptionsError."""
        with pytest.raises(InvalidOptionsError):
            AstJsonRenderer(HtmlRendererOptions())
