#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/options/ast_json.py
"""Options for rendering pages as JSON-serialized AST."""

from __future__ import annotations

from dataclasses import dataclass, field

from concisemark.constants import DEFAULT_JSON_INCLUDE_ATTRS, DEFAULT_JSON_INCLUDE_META, DEFAULT_JSON_INDENT
from concisemark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class AstJsonRendererOptions(BaseRendererOptions):
    """Options for rendering pages to JSON AST format.

    Parameters
    ----------
    indent : int or None, default = 2
        Number of spaces for JSON indentation. None for compact output.
    include_attrs : bool, default = True
        Emit the ``attrs`` mapping of every node
    include_meta : bool, default = True
        Emit the ``meta`` key (null when the page has no header)
    ensure_ascii : bool, default = False
        Whether to escape non-ASCII characters in JSON output

    Examples
    --------
    Compact JSON output:
        >>> options = AstJsonRendererOptions(indent=None)

    """

    indent: int | None = field(
        default=DEFAULT_JSON_INDENT,
        metadata={"help": "JSON indentation spaces (None for compact)", "type": int, "importance": "core"},
    )
    include_attrs: bool = field(
        default=DEFAULT_JSON_INCLUDE_ATTRS,
        metadata={"help": "Emit node attributes", "importance": "core"},
    )
    include_meta: bool = field(
        default=DEFAULT_JSON_INCLUDE_META,
        metadata={"help": "Emit page metadata", "importance": "core"},
    )
    ensure_ascii: bool = field(
        default=False,
        metadata={"help": "Escape non-ASCII characters in JSON output", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate options.

        Raises
        ------
        ValueError
            If indent is negative.

        """
        super().__post_init__()
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must be non-negative or None, got {self.indent}")
