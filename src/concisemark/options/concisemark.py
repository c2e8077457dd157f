#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/options/concisemark.py
"""Configuration options for parsing concisemark source text."""

from __future__ import annotations

from dataclasses import dataclass, field

from concisemark.constants import DEFAULT_LIST_INDENT_WIDTH, DEFAULT_STRICT_EXTENSION_KEYS
from concisemark.options.base import BaseParserOptions


@dataclass(frozen=True)
class ConciseMarkOptions(BaseParserOptions):
    """Options for :class:`~concisemark.parsers.concisemark.ConciseMarkParser`.

    Parameters
    ----------
    extract_metadata : bool, default True
        Read the TOML front-matter header. When False the header is treated
        as ordinary body text.
    list_indent_width : int, default 4
        Indentation that opens a nested list level and that list item bodies
        must reach
    strict_extension_keys : bool, default False
        Only recognize ``@key{value}`` for keys known to the extension
        registry; other keys stay literal text

    Examples
    --------
        >>> options = ConciseMarkOptions(list_indent_width=2)
        >>> options.create_updated(extract_metadata=False).list_indent_width
        2

    """

    list_indent_width: int = field(
        default=DEFAULT_LIST_INDENT_WIDTH,
        metadata={"help": "Spaces that open a nested list level", "type": int, "importance": "advanced"},
    )
    strict_extension_keys: bool = field(
        default=DEFAULT_STRICT_EXTENSION_KEYS,
        metadata={"help": "Only parse extensions whose key is registered", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If list_indent_width is not positive.

        """
        super().__post_init__()
        if self.list_indent_width < 1:
            raise ValueError(f"list_indent_width must be positive, got {self.list_indent_width}")
