#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/ast/nodes.py
"""AST node types for concisemark documents.

Every element of a parsed page is a :class:`Node`: a tag from the closed
:class:`NodeTag` set, a :class:`SourceRange` into the original source text, and
an ordered tuple of child indices. Nodes do not hold each other directly; they
live in a :class:`~concisemark.ast.tree.DocumentTree` arena that owns all of
them, and refer to their children and parent by arena index.

Node Tags
---------
Block-level tags:
    - document, heading1 .. heading6, paragraph, blockquote
    - list, listitem, codeblock, mathblock

Inline tags:
    - text, emphasis, strong, inlinecode, mathinline
    - link, image, extension

Leaf tags (never have children):
    - text, inlinecode, codeblock, mathblock, mathinline, image, extension

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional

from concisemark.constants import MAX_HEADING_LEVEL


class NodeTag(str, Enum):
    """Closed set of node tags."""

    DOCUMENT = "document"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    HEADING4 = "heading4"
    HEADING5 = "heading5"
    HEADING6 = "heading6"
    PARAGRAPH = "paragraph"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    LISTITEM = "listitem"
    CODEBLOCK = "codeblock"
    INLINECODE = "inlinecode"
    MATHBLOCK = "mathblock"
    MATHINLINE = "mathinline"
    TEXT = "text"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    LINK = "link"
    IMAGE = "image"
    EXTENSION = "extension"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def heading(cls, level: int) -> NodeTag:
        """Return the heading tag for ``level``.

        Parameters
        ----------
        level : int
            Heading level between 1 and 6

        Returns
        -------
        NodeTag
            The ``heading{level}`` tag

        Raises
        ------
        ValueError
            If level is outside 1..6

        """
        if not 1 <= level <= MAX_HEADING_LEVEL:
            raise ValueError(f"Heading level must be between 1 and {MAX_HEADING_LEVEL}, got {level}")
        return cls(f"heading{level}")

    @property
    def heading_level(self) -> Optional[int]:
        """Heading level for heading tags, None for every other tag."""
        if self.value.startswith("heading"):
            return int(self.value[len("heading") :])
        return None

    @property
    def is_leaf(self) -> bool:
        """Whether nodes with this tag never carry children."""
        return self in LEAF_TAGS

    @property
    def is_block(self) -> bool:
        """Whether this tag denotes a block-level node."""
        return self in BLOCK_TAGS


HEADING_TAGS = frozenset(NodeTag.heading(level) for level in range(1, MAX_HEADING_LEVEL + 1))

LEAF_TAGS = frozenset(
    {
        NodeTag.TEXT,
        NodeTag.INLINECODE,
        NodeTag.CODEBLOCK,
        NodeTag.MATHBLOCK,
        NodeTag.MATHINLINE,
        NodeTag.IMAGE,
        NodeTag.EXTENSION,
    }
)

BLOCK_TAGS = HEADING_TAGS | {
    NodeTag.DOCUMENT,
    NodeTag.PARAGRAPH,
    NodeTag.BLOCKQUOTE,
    NodeTag.LIST,
    NodeTag.LISTITEM,
    NodeTag.CODEBLOCK,
    NodeTag.MATHBLOCK,
}


class SourceRange(NamedTuple):
    """Half-open range ``[start, end)`` of character offsets into the source."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, other: SourceRange) -> bool:
        """Return True if ``other`` lies entirely within this range."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: SourceRange) -> bool:
        """Return True if the two ranges share at least one offset."""
        return self.start < other.end and other.start < self.end


_EMPTY_ATTRS: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, eq=False)
class Node:
    """A single element of the document tree.

    Parameters
    ----------
    index : int
        Position of this node in its tree's arena
    tag : NodeTag
        Node kind
    range : SourceRange
        Character offsets of the node in the original source
    children : tuple of int
        Arena indices of the children, in source order
    parent : int or None
        Arena index of the parent; None for the document root. Used for
        upward lookup only.
    attrs : Mapping
        Read-only tag-specific attributes (``content``, ``url``, ``alt``,
        ``key``, ``value``)

    """

    index: int
    tag: NodeTag
    range: SourceRange
    children: tuple[int, ...] = ()
    parent: Optional[int] = None
    attrs: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_ATTRS)

    def __repr__(self) -> str:
        return f"Node(#{self.index} {self.tag.value} {self.range.start}:{self.range.end})"

    @property
    def is_leaf(self) -> bool:
        return self.tag.is_leaf

    @property
    def level(self) -> Optional[int]:
        """Heading level, or None for non-heading nodes."""
        return self.tag.heading_level

    @property
    def content(self) -> str:
        """Literal content of text, code and math nodes (empty otherwise)."""
        return str(self.attrs.get("content", ""))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : NodeVisitor
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result of the visit method registered for this node's tag

        """
        return visitor.dispatch(self)


__all__ = [
    "NodeTag",
    "SourceRange",
    "Node",
    "HEADING_TAGS",
    "LEAF_TAGS",
    "BLOCK_TAGS",
]
