#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/concisemark.py
"""Concisemark source to :class:`~concisemark.page.Page` parser.

The parse runs in four stages, each in its own module:

1. :func:`~concisemark.parsers.meta.extract_meta` splits off the TOML header
2. :class:`~concisemark.parsers.blocks.BlockSegmenter` cuts the body into blocks
3. :class:`~concisemark.parsers.inline.InlineSpanner` scans inline text
4. :func:`~concisemark.ast.builder.build_tree` assembles and checks the tree

Offsets in the result always refer to the full input string, header
included, so ``page.source[node.range.start:node.range.end]`` is the exact
text of any node.
"""

from __future__ import annotations

import logging
from typing import Optional

from concisemark.ast.builder import build_tree
from concisemark.extensions.registry import ExtensionRegistry, get_default_registry
from concisemark.options.concisemark import ConciseMarkOptions
from concisemark.page import Page
from concisemark.parsers.base import BaseParser, ParserInput
from concisemark.parsers.blocks import BlockSegmenter
from concisemark.parsers.inline import InlineSpanner
from concisemark.parsers.lines import split_lines
from concisemark.parsers.meta import extract_meta

logger = logging.getLogger(__name__)


class ConciseMarkParser(BaseParser):
    """Parse concisemark text into a page.

    Parameters
    ----------
    options : ConciseMarkOptions or None, default = None
        Parser configuration
    registry : ExtensionRegistry or None, default = None
        Registry used when ``strict_extension_keys`` is enabled; the default
        registry when None

    Examples
    --------
        >>> page = ConciseMarkParser().parse("# Hello\\n\\nWorld")
        >>> [node.tag.value for node in page.tree.children(page.ast)]
        ['heading1', 'paragraph']

    """

    def __init__(self, options: ConciseMarkOptions | None = None, registry: Optional[ExtensionRegistry] = None):
        BaseParser._validate_options_type(options, ConciseMarkOptions, "concisemark")
        options = options or ConciseMarkOptions()
        super().__init__(options)
        self.options: ConciseMarkOptions = options
        self.registry = registry

    def parse(self, input_data: ParserInput) -> Page:
        """Parse ``input_data`` into a :class:`Page`.

        Raises
        ------
        MetaParseError
            If a front-matter header is present but malformed
        InvariantViolation
            If the assembled tree is inconsistent (a parser bug)

        """
        source = self._load_text_content(input_data)

        if self.options.extract_metadata:
            meta, body, offset = extract_meta(source)
        else:
            meta, body, offset = None, source, 0

        blocks = BlockSegmenter(self.options.list_indent_width).segment(split_lines(body, offset))
        logger.debug(f"Segmented {len(blocks)} top-level blocks")

        registry = self.registry
        if registry is None and self.options.strict_extension_keys:
            registry = get_default_registry()
        spanner = InlineSpanner(registry, strict_extension_keys=self.options.strict_extension_keys)

        tree = build_tree(source, (offset, len(source)), blocks, spanner)
        return Page(meta=meta, tree=tree, source=source)


__all__ = ["ConciseMarkParser"]
