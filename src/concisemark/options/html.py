#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/options/html.py
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from concisemark.constants import DEFAULT_HTML_ESCAPE, DEFAULT_HTML_HEADING_IDS, DEFAULT_HTML_WRAP_DOCUMENT
from concisemark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for page-to-HTML rendering.

    Parameters
    ----------
    escape_html : bool, default True
        Escape ``& < > " '`` in text, code and attribute values. Disabling
        this passes source text through verbatim and is only safe for
        trusted input.
    wrap_document : bool, default True
        Wrap the output in a ``<div>`` for the document node
    root_class : str or None, default None
        CSS class of the wrapping ``<div>``
    heading_ids : bool, default False
        Give headings an ``id`` derived from their text
    css_class_map : Mapping[str, str] or None, default None
        Extra CSS class per node tag, e.g. ``{"codeblock": "highlight"}``

    """

    escape_html: bool = field(
        default=DEFAULT_HTML_ESCAPE,
        metadata={"help": "Escape HTML special characters in text content", "importance": "security"},
    )
    wrap_document: bool = field(
        default=DEFAULT_HTML_WRAP_DOCUMENT,
        metadata={"help": "Wrap the output in a div for the document node", "importance": "core"},
    )
    root_class: str | None = field(
        default=None,
        metadata={"help": "CSS class of the document div", "type": str, "importance": "advanced"},
    )
    heading_ids: bool = field(
        default=DEFAULT_HTML_HEADING_IDS,
        metadata={"help": "Add slug ids to headings", "importance": "advanced"},
    )
    css_class_map: Mapping[str, str] | None = field(
        default=None,
        metadata={"help": "Extra CSS class per node tag", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the CSS class map keys.

        Raises
        ------
        ValueError
            If css_class_map names a tag that does not exist.

        """
        super().__post_init__()
        if self.css_class_map:
            from concisemark.ast.nodes import NodeTag

            known = {tag.value for tag in NodeTag}
            unknown = sorted(set(self.css_class_map) - known)
            if unknown:
                raise ValueError(f"css_class_map has unknown node tags: {', '.join(unknown)}")
