#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/renderers/html.py
"""HTML rendering from a page tree.

This module provides the HtmlRenderer class which converts a parsed page to
an HTML fragment. The document node becomes a ``<div>`` (optional), every
block element is followed by a newline, and inline elements are emitted
inline. Math is wrapped for client-side typesetting (MathJax or KaTeX) with
the usual ``$`` and ``$$`` delimiters.

"""

from __future__ import annotations

import logging
from typing import Optional

from concisemark.ast.nodes import Node, NodeTag
from concisemark.ast.visitors import NodeVisitor
from concisemark.extensions.registry import ExtensionRegistry
from concisemark.options.html import HtmlRendererOptions
from concisemark.page import Page
from concisemark.renderers.base import BaseRenderer, ExtensionContentMixin, NodeHook, TreeContentMixin
from concisemark.utils.html_utils import escape_html, render_math_html
from concisemark.utils.text import slugify

logger = logging.getLogger(__name__)


class HtmlRenderer(TreeContentMixin, ExtensionContentMixin, NodeVisitor, BaseRenderer):
    """Render pages to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options
    registry : ExtensionRegistry or None, default = None
        Handlers for ``@key{value}`` nodes; the default registry when None
    node_hook : callable or None, default = None
        ``node -> str | None``; a returned string replaces the node's output

    Examples
    --------
        >>> from concisemark import parse
        >>> HtmlRenderer().render_to_string(parse("Use `a + b`"))
        '<div>\\n<p>Use <code>a + b</code></p>\\n</div>\\n'

    """

    def __init__(
        self,
        options: HtmlRendererOptions | None = None,
        registry: Optional[ExtensionRegistry] = None,
        node_hook: Optional[NodeHook] = None,
    ):
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self.registry = self._resolve_registry(registry)
        self.node_hook = node_hook
        self._output: list[str] = []
        self._seen_slugs: set[str] = set()

    def render_to_string(self, page: Page) -> str:
        """Render a page to an HTML string.

        Parameters
        ----------
        page : Page
            The page to render

        Returns
        -------
        str
            HTML text

        """
        self._tree = page.tree
        self._output = []
        self._seen_slugs = set()
        page.ast.accept(self)
        return "".join(self._output)

    def _escape(self, text: str) -> str:
        return escape_html(text, enabled=self.options.escape_html)

    def _class_attr(self, tag: NodeTag, *extra: str) -> str:
        classes = list(extra)
        if self.options.css_class_map and tag.value in self.options.css_class_map:
            classes.append(self.options.css_class_map[tag.value])
        if not classes:
            return ""
        return f' class="{escape_html(" ".join(classes))}"'

    def visit_document(self, node: Node) -> None:
        content = self._render_children(node)
        if not self.options.wrap_document:
            self._output.append(content)
            return
        extra = (self.options.root_class,) if self.options.root_class else ()
        self._output.append(f"<div{self._class_attr(node.tag, *extra)}>\n{content}</div>\n")

    def visit_heading(self, node: Node) -> None:
        level = node.level
        content = self._render_children(node)
        id_attr = ""
        if self.options.heading_ids:
            slug = slugify(self._tree.text_content(node), seen_slugs=self._seen_slugs)
            id_attr = f' id="{slug}"'
        self._output.append(f"<h{level}{id_attr}{self._class_attr(node.tag)}>{content}</h{level}>\n")

    def visit_paragraph(self, node: Node) -> None:
        self._output.append(f"<p{self._class_attr(node.tag)}>{self._render_children(node)}</p>\n")

    def visit_block_quote(self, node: Node) -> None:
        self._output.append(f"<blockquote{self._class_attr(node.tag)}>\n{self._render_children(node)}</blockquote>\n")

    def visit_list(self, node: Node) -> None:
        self._output.append(f"<ul{self._class_attr(node.tag)}>\n{self._render_children(node)}</ul>\n")

    def visit_list_item(self, node: Node) -> None:
        # Head text first, then the item's nested blocks
        self._output.append(f"<li{self._class_attr(node.tag)}>{self._render_children(node)}</li>\n")

    def visit_code_block(self, node: Node) -> None:
        content = self._escape(node.content)
        self._output.append(f"<pre{self._class_attr(node.tag)}><code>{content}</code></pre>\n")

    def visit_math_block(self, node: Node) -> None:
        math = render_math_html(node.content, inline=False, escape_enabled=self.options.escape_html)
        self._output.append(f"{math}\n")

    def visit_text(self, node: Node) -> None:
        self._output.append(self._escape(node.content))

    def visit_emphasis(self, node: Node) -> None:
        self._output.append(f"<em{self._class_attr(node.tag)}>{self._render_children(node)}</em>")

    def visit_strong(self, node: Node) -> None:
        self._output.append(f"<strong{self._class_attr(node.tag)}>{self._render_children(node)}</strong>")

    def visit_code(self, node: Node) -> None:
        self._output.append(f"<code{self._class_attr(node.tag)}>{self._escape(node.content)}</code>")

    def visit_math_inline(self, node: Node) -> None:
        self._output.append(render_math_html(node.content, inline=True, escape_enabled=self.options.escape_html))

    def visit_link(self, node: Node) -> None:
        url = str(node.attrs.get("url", ""))
        content = self._render_children(node) or self._escape(url)
        self._output.append(f'<a href="{self._escape(url)}"{self._class_attr(node.tag)}>{content}</a>')

    def visit_image(self, node: Node) -> None:
        src = self._escape(str(node.attrs.get("url", "")))
        alt = self._escape(str(node.attrs.get("alt", "")))
        self._output.append(f'<img src="{src}" alt="{alt}"{self._class_attr(node.tag)}>')

    def visit_extension(self, node: Node) -> None:
        self._output.append(self._render_extension(node, "html", self._escape))


__all__ = ["HtmlRenderer"]
