"""concisemark - a concise markdown dialect rendered to HTML and LaTeX.

concisemark parses a small, predictable subset of markdown into an immutable,
index-based syntax tree in which every node records the exact character range
of the source it came from. A parsed :class:`Page` can be rendered to an HTML
fragment, a LaTeX body fragment, or a JSON dump of the tree.

Key Features
------------
- TOML front matter in a ``<!--- ... -->`` header (title, subtitle, date,
  authors, tags)
- Headings, paragraphs, block quotes, nested ``-`` lists, indented code
  blocks and display math
- Inline code, ``$math$``, links, images, ``*emphasis*`` and ``**strong**``
- ``@key{value}`` extensions with built-in ``emoji``, ``kbd``, ``math`` and
  ``char`` handlers and a registry for your own
- Source ranges on every node and a structural invariant check on every tree

Examples
--------
Render a document to HTML:

    >>> from concisemark import to_html
    >>> to_html("Hello *world*")
    '<div>\\n<p>Hello <em>world</em></p>\\n</div>\\n'

Parse once, render several formats:

    >>> from concisemark import parse
    >>> page = parse("# Title\\n\\nPress @kbd{cmd+c}")
    >>> latex = page.render("latex")
    >>> data = page.to_dict()

Register a custom extension:

    >>> from concisemark import register_extension
    >>> register_extension("upper", lambda value: value.upper())

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        f"concisemark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from concisemark.api import get_renderer, parse, parse_file, render, to_html, to_json, to_latex
from concisemark.ast import DocumentTree, Node, NodeTag, NodeVisitor, SourceRange
from concisemark.exceptions import (
    ConciseMarkError,
    InvalidOptionsError,
    InvariantViolation,
    MetaParseError,
    ParsingError,
    UnknownExtensionKey,
    ValidationError,
)
from concisemark.extensions import (
    ExtensionHandler,
    ExtensionRegistry,
    get_default_registry,
    register_extension,
    unregister_extension,
)
from concisemark.options import (
    AstJsonRendererOptions,
    ConciseMarkOptions,
    HtmlRendererOptions,
    LatexRendererOptions,
)
from concisemark.page import Page
from concisemark.renderers import AstJsonRenderer, HtmlRenderer, LatexRenderer
from concisemark.utils.metadata import PageMeta, format_meta_comment

__all__ = [
    "__version__",
    # API
    "parse",
    "parse_file",
    "render",
    "get_renderer",
    "to_html",
    "to_latex",
    "to_json",
    # Data model
    "Page",
    "PageMeta",
    "format_meta_comment",
    "DocumentTree",
    "Node",
    "NodeTag",
    "NodeVisitor",
    "SourceRange",
    # Extensions
    "ExtensionHandler",
    "ExtensionRegistry",
    "get_default_registry",
    "register_extension",
    "unregister_extension",
    # Options
    "ConciseMarkOptions",
    "HtmlRendererOptions",
    "LatexRendererOptions",
    "AstJsonRendererOptions",
    # Renderers
    "HtmlRenderer",
    "LatexRenderer",
    "AstJsonRenderer",
    # Exceptions
    "ConciseMarkError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "MetaParseError",
    "InvariantViolation",
    "UnknownExtensionKey",
]
