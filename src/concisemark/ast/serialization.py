#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/ast/serialization.py
"""JSON serialization and deserialization for document trees.

Each node serializes to a plain dictionary::

    {"tag": "heading1", "range": [2, 7], "children": [...], "attrs": {...}}

Children are nested in source order, so the dictionary mirrors the tree rather
than the flat arena. Because ranges point into the source text, turning a
dictionary back into a tree needs that same source; :func:`dict_to_tree`
rebuilds the arena through :class:`~concisemark.ast.builder.TreeBuilder` and
re-checks every invariant on the way.

Examples
--------
    >>> from concisemark import parse
    >>> from concisemark.ast.serialization import tree_to_dict
    >>> tree_to_dict(parse("*hi*").tree)["children"][0]["tag"]
    'paragraph'

"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from concisemark.ast.builder import TreeBuilder
from concisemark.ast.nodes import Node, NodeTag
from concisemark.ast.tree import DocumentTree
from concisemark.exceptions import ValidationError

if TYPE_CHECKING:
    from concisemark.page import Page


def node_to_dict(tree: DocumentTree, node: Node | int, include_attrs: bool = True) -> dict[str, Any]:
    """Serialize ``node`` and its subtree.

    Parameters
    ----------
    tree : DocumentTree
        Arena the node belongs to
    node : Node or int
        Subtree root
    include_attrs : bool, default True
        Whether to emit the ``attrs`` mapping of each node

    Returns
    -------
    dict
        Nested dictionary with ``tag``, ``range``, ``children`` and
        optionally ``attrs``

    """
    if isinstance(node, int):
        node = tree[node]
    result: dict[str, Any] = {
        "tag": node.tag.value,
        "range": [node.range.start, node.range.end],
        "children": [node_to_dict(tree, child, include_attrs) for child in tree.children(node)],
    }
    if include_attrs:
        result["attrs"] = dict(node.attrs)
    return result


def tree_to_dict(tree: DocumentTree, include_attrs: bool = True) -> dict[str, Any]:
    """Serialize a whole tree starting from its document root."""
    return node_to_dict(tree, tree.root, include_attrs)


def page_to_dict(page: Page, include_attrs: bool = True, include_meta: bool = True) -> dict[str, Any]:
    """Serialize a page as ``{"meta": ..., "ast": ...}``.

    Parameters
    ----------
    page : Page
        Parsed page
    include_attrs : bool, default True
        Whether node attributes are emitted
    include_meta : bool, default True
        Whether the ``meta`` key is emitted; its value is None when the page
        has no front matter

    Returns
    -------
    dict
        JSON-compatible dictionary

    """
    result: dict[str, Any] = {}
    if include_meta:
        result["meta"] = page.meta.to_dict() if page.meta is not None else None
    result["ast"] = tree_to_dict(page.tree, include_attrs)
    return result


def tree_to_json(tree: DocumentTree, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string."""
    return json.dumps(tree_to_dict(tree), indent=indent, ensure_ascii=False)


def dict_to_tree(data: dict[str, Any], source: str) -> DocumentTree:
    """Rebuild a :class:`DocumentTree` from its dictionary form.

    Parameters
    ----------
    data : dict
        Dictionary produced by :func:`tree_to_dict` (the ``ast`` value of a
        page dictionary)
    source : str
        Source text the serialized ranges refer to

    Returns
    -------
    DocumentTree
        A checked tree equal in shape to the serialized one

    Raises
    ------
    ValidationError
        If a node dictionary is malformed or names an unknown tag
    InvariantViolation
        If the rebuilt tree is inconsistent

    """
    builder = TreeBuilder(source)
    _add_dict(builder, data, None)
    return builder.build()


def json_to_tree(json_str: str, source: str) -> DocumentTree:
    """Rebuild a tree from a JSON string produced by :func:`tree_to_json`."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid AST JSON: {e}", parameter_name="json_str", original_error=e) from e
    if isinstance(data, dict) and "ast" in data:
        data = data["ast"]
    return dict_to_tree(data, source)


def _add_dict(builder: TreeBuilder, data: Any, parent: int | None) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"Node must be a JSON object, got {type(data).__name__}", parameter_name="node")
    try:
        tag = NodeTag(data["tag"])
        start, end = (int(offset) for offset in data["range"])
        children = data.get("children", [])
        attrs = data.get("attrs") or {}
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(
            f"Malformed node: {e}", parameter_name="node", parameter_value=data, original_error=e
        ) from e
    index = builder.add(tag, start, end, attrs, parent)
    for child in children:
        _add_dict(builder, child, index)


__all__ = [
    "node_to_dict",
    "tree_to_dict",
    "page_to_dict",
    "tree_to_json",
    "dict_to_tree",
    "json_to_tree",
]
