#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/__init__.py
"""Parsers turning concisemark source text into pages."""

from concisemark.parsers.base import BaseParser
from concisemark.parsers.blocks import Block, BlockSegmenter
from concisemark.parsers.concisemark import ConciseMarkParser
from concisemark.parsers.inline import InlineSpanner, Span
from concisemark.parsers.lines import Line, split_lines
from concisemark.parsers.meta import extract_meta, parse_meta_text

__all__ = [
    "BaseParser",
    "ConciseMarkParser",
    "Block",
    "BlockSegmenter",
    "InlineSpanner",
    "Span",
    "Line",
    "split_lines",
    "extract_meta",
    "parse_meta_text",
]
