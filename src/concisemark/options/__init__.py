#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the concisemark parser and renderers.

Every option class is a frozen dataclass; use ``create_updated`` to derive a
modified copy.
"""

from concisemark.options.ast_json import AstJsonRendererOptions
from concisemark.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from concisemark.options.concisemark import ConciseMarkOptions
from concisemark.options.html import HtmlRendererOptions
from concisemark.options.latex import LatexRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "ConciseMarkOptions",
    "HtmlRendererOptions",
    "LatexRendererOptions",
    "AstJsonRendererOptions",
]
