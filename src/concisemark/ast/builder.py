#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/ast/builder.py
"""Assemble segmenter and spanner output into a checked document tree.

The block segmenter produces :class:`~concisemark.parsers.blocks.Block`
drafts and the inline spanner produces :class:`~concisemark.parsers.inline.Span`
drafts. :func:`build_tree` walks both in source order and appends one node per
draft to a :class:`TreeBuilder`, which assigns arena indices in pre-order.
:meth:`TreeBuilder.build` verifies the structural invariants before handing
back an immutable :class:`~concisemark.ast.tree.DocumentTree`; a violation is a
parser bug and raises :class:`~concisemark.exceptions.InvariantViolation`
instead of returning a corrupt tree.

"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Sequence

from concisemark.ast.nodes import Node, NodeTag, SourceRange
from concisemark.ast.tree import DocumentTree
from concisemark.exceptions import InvariantViolation

if TYPE_CHECKING:
    from concisemark.parsers.blocks import Block
    from concisemark.parsers.inline import InlineSpanner, Span

logger = logging.getLogger(__name__)


class _Draft:
    __slots__ = ("tag", "start", "end", "attrs", "parent", "children")

    def __init__(self, tag: NodeTag, start: int, end: int, attrs: Mapping[str, Any], parent: Optional[int]):
        self.tag = tag
        self.start = start
        self.end = end
        self.attrs = attrs
        self.parent = parent
        self.children: list[int] = []


class TreeBuilder:
    """Append-only arena builder.

    Nodes must be added in pre-order: a parent before its children and each
    child before its later siblings. The index returned by :meth:`add` is the
    node's final arena index.

    Parameters
    ----------
    source : str
        The full source text the ranges refer to

    """

    def __init__(self, source: str):
        self._source = source
        self._drafts: list[_Draft] = []

    def __len__(self) -> int:
        return len(self._drafts)

    def add(
        self,
        tag: NodeTag,
        start: int,
        end: int,
        attrs: Mapping[str, Any] | None = None,
        parent: int | None = None,
    ) -> int:
        """Append a node and link it to ``parent``.

        Parameters
        ----------
        tag : NodeTag
            Node kind
        start, end : int
            Source range of the node
        attrs : Mapping, optional
            Tag-specific attributes
        parent : int, optional
            Arena index of the parent; must be None only for the root

        Returns
        -------
        int
            Arena index of the new node

        """
        index = len(self._drafts)
        self._drafts.append(_Draft(NodeTag(tag), start, end, dict(attrs or {}), parent))
        if parent is not None:
            self._drafts[parent].children.append(index)
        return index

    def build(self) -> DocumentTree:
        """Freeze the arena into a :class:`DocumentTree`.

        Raises
        ------
        InvariantViolation
            If the assembled nodes violate a structural invariant

        """
        nodes = [
            Node(
                index=index,
                tag=draft.tag,
                range=SourceRange(draft.start, draft.end),
                children=tuple(draft.children),
                parent=draft.parent,
                attrs=MappingProxyType(draft.attrs),
            )
            for index, draft in enumerate(self._drafts)
        ]
        check_invariants(nodes, len(self._source))
        logger.debug(f"Built document tree with {len(nodes)} nodes")
        return DocumentTree(self._source, nodes)


def check_invariants(nodes: Sequence[Node], source_length: int | None = None) -> None:
    """Verify the structural invariants of a node arena.

    Checks that the root is a parentless ``document`` node at index 0, that
    parent and child links agree, that children follow their parent in the
    arena, that leaf tags carry no children, that every range is well formed
    and lies inside its parent's range, and that siblings are ordered and do
    not overlap.

    Parameters
    ----------
    nodes : sequence of Node
        The arena to check
    source_length : int, optional
        Length of the source text; when given, ranges must fit inside it

    Raises
    ------
    InvariantViolation
        On the first violation found

    """
    if not nodes:
        raise InvariantViolation("Tree has no nodes")
    root = nodes[0]
    if root.tag is not NodeTag.DOCUMENT or root.parent is not None:
        raise InvariantViolation("Node 0 must be a parentless document node", node_index=0)

    for node in nodes:
        start, end = node.range
        if start < 0 or start > end:
            raise InvariantViolation(f"Malformed range {start}:{end} on {node!r}", node_index=node.index)
        if source_length is not None and end > source_length:
            raise InvariantViolation(f"Range of {node!r} exceeds source length {source_length}", node_index=node.index)
        if node.index != 0:
            if node.parent is None or not 0 <= node.parent < node.index:
                raise InvariantViolation(f"{node!r} has no valid parent", node_index=node.index)
            if node.index not in nodes[node.parent].children:
                raise InvariantViolation(f"{node!r} is not listed by its parent", node_index=node.index)
        if node.is_leaf and node.children:
            raise InvariantViolation(f"Leaf {node!r} has children", node_index=node.index)

        previous: Node | None = None
        for child_index in node.children:
            if not node.index < child_index < len(nodes):
                raise InvariantViolation(
                    f"{node!r} references child #{child_index} out of pre-order", node_index=node.index
                )
            child = nodes[child_index]
            if child.parent != node.index:
                raise InvariantViolation(f"{child!r} does not point back to parent {node!r}", node_index=child_index)
            if not node.range.contains(child.range):
                raise InvariantViolation(f"{child!r} lies outside parent {node!r}", node_index=child_index)
            if previous is not None and previous.range.end > child.range.start:
                raise InvariantViolation(f"Siblings {previous!r} and {child!r} overlap", node_index=child_index)
            previous = child


def build_tree(
    source: str,
    root_range: tuple[int, int],
    blocks: Iterable[Block],
    spanner: InlineSpanner,
) -> DocumentTree:
    """Combine block drafts and their inline spans into a document tree.

    Parameters
    ----------
    source : str
        Full original source text
    root_range : tuple of int
        Range of the document node (body start to end of source)
    blocks : iterable of Block
        Top-level drafts from the block segmenter
    spanner : InlineSpanner
        Scanner used for every block that carries inline lines

    Returns
    -------
    DocumentTree
        The checked, immutable tree

    """
    builder = TreeBuilder(source)
    root = builder.add(NodeTag.DOCUMENT, root_range[0], root_range[1])
    for block in blocks:
        _add_block(builder, block, root, spanner)
    return builder.build()


def _add_block(builder: TreeBuilder, block: Block, parent: int, spanner: InlineSpanner) -> None:
    index = builder.add(block.tag, block.start, block.end, block.attrs, parent)
    if block.lines:
        for span in spanner.scan(block.lines):
            _add_span(builder, span, index)
    for child in block.children:
        _add_block(builder, child, index, spanner)


def _add_span(builder: TreeBuilder, span: Span, parent: int) -> None:
    index = builder.add(span.tag, span.start, span.end, span.attrs, parent)
    for child in span.children:
        _add_span(builder, child, index)


__all__ = ["TreeBuilder", "build_tree", "check_invariants"]
