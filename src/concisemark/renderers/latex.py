#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/renderers/latex.py
r"""LaTeX rendering from a page tree.

The LatexRenderer produces a document body fragment: no preamble, no
``\begin{document}``. Block elements are separated by blank lines. Links need
the ``hyperref`` package and images ``graphicx`` in the caller's preamble.

"""

from __future__ import annotations

import logging
from typing import Optional

from concisemark.ast.nodes import Node
from concisemark.ast.visitors import NodeVisitor
from concisemark.constants import LATEX_SECTION_COMMANDS
from concisemark.extensions.registry import ExtensionRegistry
from concisemark.options.latex import LatexRendererOptions
from concisemark.page import Page
from concisemark.renderers.base import BaseRenderer, ExtensionContentMixin, NodeHook, TreeContentMixin
from concisemark.utils.escape import escape_latex, escape_latex_url

logger = logging.getLogger(__name__)


class LatexRenderer(TreeContentMixin, ExtensionContentMixin, NodeVisitor, BaseRenderer):
    r"""Render pages to a LaTeX body fragment.

    Parameters
    ----------
    options : LatexRendererOptions or None, default = None
        LaTeX formatting options
    registry : ExtensionRegistry or None, default = None
        Handlers for ``@key{value}`` nodes; the default registry when None
    node_hook : callable or None, default = None
        ``node -> str | None``; a returned string replaces the node's output

    Examples
    --------
        >>> from concisemark import parse
        >>> print(LatexRenderer().render_to_string(parse("# Intro\n\nSome *text*")), end="")
        \section{Intro}
        <BLANKLINE>
        Some \emph{text}

    """

    def __init__(
        self,
        options: LatexRendererOptions | None = None,
        registry: Optional[ExtensionRegistry] = None,
        node_hook: Optional[NodeHook] = None,
    ):
        BaseRenderer._validate_options_type(options, LatexRendererOptions, "latex")
        options = options or LatexRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: LatexRendererOptions = options
        self.registry = self._resolve_registry(registry)
        self.node_hook = node_hook
        self._output: list[str] = []

    def render_to_string(self, page: Page) -> str:
        """Render a page to LaTeX.

        Parameters
        ----------
        page : Page
            The page to render

        Returns
        -------
        str
            LaTeX body text ending with a newline (empty for an empty page)

        """
        self._tree = page.tree
        self._output = []
        page.ast.accept(self)
        return "".join(self._output)

    def _escape(self, text: str) -> str:
        return escape_latex(text, enabled=self.options.escape_special)

    def _render_blocks(self, node: Node) -> str:
        """Render block children of ``node`` separated by blank lines."""
        blocks = [self._render_node(child).strip("\n") for child in self._tree.children(node)]
        return "\n\n".join(block for block in blocks if block)

    def visit_document(self, node: Node) -> None:
        body = self._render_blocks(node)
        self._output.append(f"{body}\n" if body else "")

    def visit_heading(self, node: Node) -> None:
        level = node.level or 1
        command = LATEX_SECTION_COMMANDS[min(level, len(LATEX_SECTION_COMMANDS)) - 1]
        star = "" if self.options.numbered_sections else "*"
        self._output.append(f"\\{command}{star}{{{self._render_children(node)}}}")

    def visit_paragraph(self, node: Node) -> None:
        self._output.append(self._render_children(node))

    def visit_block_quote(self, node: Node) -> None:
        env = self.options.quote_env
        self._output.append(f"\\begin{{{env}}}\n{self._render_blocks(node)}\n\\end{{{env}}}")

    def visit_list(self, node: Node) -> None:
        items = "\n".join(self._render_node(child).strip("\n") for child in self._tree.children(node))
        self._output.append(f"\\begin{{itemize}}\n{items}\n\\end{{itemize}}")

    def visit_list_item(self, node: Node) -> None:
        head: list[str] = []
        blocks: list[str] = []
        for child in self._tree.children(node):
            rendered = self._render_node(child)
            if child.tag.is_block:
                blocks.append(rendered.strip("\n"))
            else:
                head.append(rendered)
        parts = ["\\item " + "".join(head) if head else "\\item"]
        parts.extend(block for block in blocks if block)
        self._output.append("\n".join(parts))

    def visit_code_block(self, node: Node) -> None:
        env = self.options.verbatim_env
        self._output.append(f"\\begin{{{env}}}\n{node.content}\n\\end{{{env}}}")

    def visit_math_block(self, node: Node) -> None:
        env = self.options.display_math_env
        self._output.append(f"\\begin{{{env}}}\n{node.content}\n\\end{{{env}}}")

    def visit_text(self, node: Node) -> None:
        self._output.append(self._escape(node.content))

    def visit_emphasis(self, node: Node) -> None:
        self._output.append(f"\\emph{{{self._render_children(node)}}}")

    def visit_strong(self, node: Node) -> None:
        self._output.append(f"\\textbf{{{self._render_children(node)}}}")

    def visit_code(self, node: Node) -> None:
        self._output.append(f"\\texttt{{{escape_latex(node.content)}}}")

    def visit_math_inline(self, node: Node) -> None:
        self._output.append(f"${node.content}$")

    def visit_link(self, node: Node) -> None:
        url = str(node.attrs.get("url", ""))
        content = self._render_children(node) or escape_latex(url)
        self._output.append(f"\\href{{{escape_latex_url(url)}}}{{{content}}}")

    def visit_image(self, node: Node) -> None:
        url = str(node.attrs.get("url", ""))
        width = f"[width={self.options.image_width}]" if self.options.image_width else ""
        self._output.append(f"\\includegraphics{width}{{{escape_latex_url(url)}}}")

    def visit_extension(self, node: Node) -> None:
        self._output.append(self._render_extension(node, "latex", self._escape))


__all__ = ["LatexRenderer"]
