#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/page.py
"""The result of parsing one concisemark document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from concisemark.ast.nodes import Node
from concisemark.ast.tree import DocumentTree
from concisemark.utils.metadata import PageMeta

if TYPE_CHECKING:
    from concisemark.constants import OutputFormat
    from concisemark.extensions.registry import ExtensionRegistry
    from concisemark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class Page:
    """A parsed page: metadata, document tree and source text.

    Pages are immutable and can be shared between threads and rendered any
    number of times.

    Parameters
    ----------
    meta : PageMeta or None
        Front matter, None when the page has no header
    tree : DocumentTree
        Arena holding every node of the page
    source : str
        The full input text, header included

    """

    meta: Optional[PageMeta]
    tree: DocumentTree
    source: str

    @property
    def ast(self) -> Node:
        """The ``document`` root node."""
        return self.tree.root

    @property
    def title(self) -> Optional[str]:
        return self.meta.title if self.meta is not None else None

    def render(
        self,
        format: OutputFormat = "html",
        options: BaseRendererOptions | None = None,
        registry: ExtensionRegistry | None = None,
        **kwargs: Any,
    ) -> str:
        """Render this page; see :func:`concisemark.api.render`."""
        from concisemark.api import render

        return render(self, format=format, options=options, registry=registry, **kwargs)

    def to_dict(self, include_attrs: bool = True, include_meta: bool = True) -> dict[str, Any]:
        """Serialize to ``{"meta": ..., "ast": ...}``."""
        from concisemark.ast.serialization import page_to_dict

        return page_to_dict(self, include_attrs=include_attrs, include_meta=include_meta)


__all__ = ["Page"]
