#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/renderers/ast_json.py
"""JSON AST rendering from a page.

The AstJsonRenderer serializes a page with
:func:`~concisemark.ast.serialization.page_to_dict`. This is useful for
debugging the parser, for inspecting source ranges, and for handing a page to
tools written in other languages.
"""

from __future__ import annotations

import json

from concisemark.ast.serialization import page_to_dict
from concisemark.options.ast_json import AstJsonRendererOptions
from concisemark.page import Page
from concisemark.renderers.base import BaseRenderer


class AstJsonRenderer(BaseRenderer):
    """Render pages to JSON AST format.

    Parameters
    ----------
    options : AstJsonRendererOptions or None, default = None
        JSON rendering options

    Examples
    --------
        >>> from concisemark import parse
        >>> from concisemark.options import AstJsonRendererOptions
        >>> renderer = AstJsonRenderer(AstJsonRendererOptions(indent=None, include_meta=False))
        >>> renderer.render_to_string(parse(""))
        '{"ast": {"tag": "document", "range": [0, 0], "children": [], "attrs": {}}}'

    """

    def __init__(self, options: AstJsonRendererOptions | None = None):
        BaseRenderer._validate_options_type(options, AstJsonRendererOptions, "json")
        options = options or AstJsonRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: AstJsonRendererOptions = options

    def render_to_string(self, page: Page) -> str:
        """Render a page to a JSON string.

        Parameters
        ----------
        page : Page
            The page to render

        Returns
        -------
        str
            JSON text

        """
        data = page_to_dict(page, include_attrs=self.options.include_attrs, include_meta=self.options.include_meta)
        return json.dumps(data, indent=self.options.indent, ensure_ascii=self.options.ensure_ascii)


__all__ = ["AstJsonRenderer"]
