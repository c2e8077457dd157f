#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/renderers/__init__.py
"""Renderers turning pages into HTML, LaTeX or JSON."""

from concisemark.renderers.ast_json import AstJsonRenderer
from concisemark.renderers.base import BaseRenderer, NodeHook
from concisemark.renderers.html import HtmlRenderer
from concisemark.renderers.latex import LatexRenderer

__all__ = ["BaseRenderer", "NodeHook", "HtmlRenderer", "LatexRenderer", "AstJsonRenderer"]
