#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/ast/tree.py
"""Arena container that owns every node of a parsed page.

A :class:`DocumentTree` stores its nodes in a single tuple indexed by
``Node.index``. The document root sits at index 0 and the remaining nodes
follow in pre-order, so iterating the arena is the same as a depth-first walk.
Nodes refer to their children and parent by index, which keeps the tree free
of reference cycles and trivially shareable between threads.

"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from concisemark.ast.nodes import Node, NodeTag


class DocumentTree:
    """Immutable arena of nodes for one page.

    Parameters
    ----------
    source : str
        The full original source text the node ranges point into
    nodes : sequence of Node
        All nodes of the page, indexed by ``Node.index`` with the document
        root at index 0

    Examples
    --------
        >>> from concisemark import parse
        >>> tree = parse("# Title").tree
        >>> [node.tag.value for node in tree.walk()]
        ['document', 'heading1', 'text']

    """

    __slots__ = ("_source", "_nodes")

    def __init__(self, source: str, nodes: Sequence[Node]):
        if not nodes:
            raise ValueError("DocumentTree requires at least a document root")
        self._source = source
        self._nodes: tuple[Node, ...] = tuple(nodes)

    @property
    def source(self) -> str:
        return self._source

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def root(self) -> Node:
        """The ``document`` node at index 0."""
        return self._nodes[0]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __repr__(self) -> str:
        return f"DocumentTree({len(self._nodes)} nodes)"

    def children(self, node: Node | int) -> list[Node]:
        """Return the child nodes of ``node`` in source order."""
        node = self._resolve(node)
        return [self._nodes[index] for index in node.children]

    def parent(self, node: Node | int) -> Optional[Node]:
        """Return the parent of ``node``, or None for the root."""
        node = self._resolve(node)
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def ancestors(self, node: Node | int) -> list[Node]:
        """Return the ancestors of ``node``, nearest first."""
        result = []
        current = self.parent(node)
        while current is not None:
            result.append(current)
            current = self.parent(current)
        return result

    def walk(self, node: Node | int | None = None) -> Iterator[Node]:
        """Yield ``node`` and all of its descendants in pre-order.

        Parameters
        ----------
        node : Node, int or None, default None
            Subtree root to start from; the document root when None

        Yields
        ------
        Node
            Nodes in depth-first, source order

        """
        start = self.root if node is None else self._resolve(node)
        stack = [start]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(self._nodes[index] for index in reversed(current.children))

    def find_all(self, *tags: NodeTag | str) -> list[Node]:
        """Return every node whose tag is one of ``tags``, in pre-order."""
        wanted = {NodeTag(tag) for tag in tags}
        return [node for node in self._nodes if node.tag in wanted]

    def source_text(self, node: Node | int) -> str:
        """Return the raw source slice covered by ``node``."""
        node = self._resolve(node)
        return self._source[node.range.start : node.range.end]

    def text_content(self, node: Node | int | None = None) -> str:
        """Concatenate the literal content of text, code and math leaves.

        Parameters
        ----------
        node : Node, int or None, default None
            Subtree root; the whole document when None

        Returns
        -------
        str
            Plain text of the subtree with markup removed

        """
        parts = []
        for current in self.walk(node):
            if current.tag is NodeTag.IMAGE:
                parts.append(str(current.attrs.get("alt", "")))
            elif "content" in current.attrs:
                parts.append(current.content)
            elif current.tag is NodeTag.EXTENSION:
                parts.append(str(current.attrs.get("value", "")))
        return "".join(parts)

    def _resolve(self, node: Node | int) -> Node:
        if isinstance(node, Node):
            return node
        return self._nodes[node]


__all__ = ["DocumentTree"]
