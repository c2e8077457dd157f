#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Nodes carry a tag rather than a Python subclass, so dispatch goes through a
tag to method-name table. Subclasses implement the ``visit_*`` methods for the
tags they handle; every heading level shares ``visit_heading``.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from concisemark.ast.nodes import HEADING_TAGS, Node, NodeTag

_DISPATCH: dict[NodeTag, str] = {
    NodeTag.DOCUMENT: "visit_document",
    NodeTag.PARAGRAPH: "visit_paragraph",
    NodeTag.BLOCKQUOTE: "visit_block_quote",
    NodeTag.LIST: "visit_list",
    NodeTag.LISTITEM: "visit_list_item",
    NodeTag.CODEBLOCK: "visit_code_block",
    NodeTag.INLINECODE: "visit_code",
    NodeTag.MATHBLOCK: "visit_math_block",
    NodeTag.MATHINLINE: "visit_math_inline",
    NodeTag.TEXT: "visit_text",
    NodeTag.EMPHASIS: "visit_emphasis",
    NodeTag.STRONG: "visit_strong",
    NodeTag.LINK: "visit_link",
    NodeTag.IMAGE: "visit_image",
    NodeTag.EXTENSION: "visit_extension",
}
_DISPATCH.update({tag: "visit_heading" for tag in HEADING_TAGS})


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Examples
    --------
    Visitor that collects link targets:

        >>> class LinkCollector(NodeVisitor):
        ...     def __init__(self, tree):
        ...         self.tree = tree
        ...         self.urls = []
        ...     def visit_document(self, node):
        ...         self.generic_visit(node)
        ...     def generic_visit(self, node):
        ...         for child in self.tree.children(node):
        ...             child.accept(self)
        ...     def visit_link(self, node):
        ...         self.urls.append(node.attrs["url"])

    """

    def dispatch(self, node: Node) -> Any:
        """Call the ``visit_*`` method registered for ``node.tag``."""
        method = getattr(self, _DISPATCH[node.tag], None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: Node) -> Any:
        """Handle a node whose ``visit_*`` method is not defined.

        Raises
        ------
        NotImplementedError
            Always, unless a subclass overrides this method

        """
        raise NotImplementedError(f"{self.__class__.__name__} has no visitor for '{node.tag.value}' nodes")

    @abstractmethod
    def visit_document(self, node: Node) -> Any:
        """Visit the document root."""


__all__ = ["NodeVisitor"]
