#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/ast/__init__.py
"""Abstract syntax tree for concisemark pages.

The tree is an index arena: a :class:`DocumentTree` owns every :class:`Node`
of a page, and nodes refer to children and parent by index. Renderers walk it
through :class:`NodeVisitor`.

"""

from concisemark.ast.builder import TreeBuilder, build_tree, check_invariants
from concisemark.ast.nodes import BLOCK_TAGS, HEADING_TAGS, LEAF_TAGS, Node, NodeTag, SourceRange
from concisemark.ast.serialization import (
    dict_to_tree,
    json_to_tree,
    node_to_dict,
    page_to_dict,
    tree_to_dict,
    tree_to_json,
)
from concisemark.ast.tree import DocumentTree
from concisemark.ast.visitors import NodeVisitor

__all__ = [
    "Node",
    "NodeTag",
    "SourceRange",
    "HEADING_TAGS",
    "LEAF_TAGS",
    "BLOCK_TAGS",
    "DocumentTree",
    "TreeBuilder",
    "build_tree",
    "check_invariants",
    "NodeVisitor",
    "node_to_dict",
    "tree_to_dict",
    "page_to_dict",
    "tree_to_json",
    "dict_to_tree",
    "json_to_tree",
]
