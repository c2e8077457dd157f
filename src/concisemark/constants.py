#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/constants.py
"""Constants and default values shared by the concisemark parser and renderers.

Grammar constants describe the markdown subset; ``DEFAULT_*`` values feed the
frozen option dataclasses in :mod:`concisemark.options`.

"""

from __future__ import annotations

from typing import Literal

# ============================================================================
# Front matter
# ============================================================================

META_START_MARK = "<!---"
META_END_MARK = "-->"

# String date formats accepted in the ``date`` field besides native TOML dates
META_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)

# ============================================================================
# Block grammar
# ============================================================================

HEADING_MARK = "#"
MAX_HEADING_LEVEL = 6
BLOCKQUOTE_MARK = ">"
LIST_MARK = "-"

# Extra indentation that turns a paragraph into a code block
CODE_INDENT_WIDTH = 4

# Indentation a list head may use for continuation lines relative to its dash
LIST_HEAD_CONTINUATION_WIDTH = 2

# ============================================================================
# Inline grammar
# ============================================================================

# Characters a backslash turns into literal text
ESCAPABLE_CHARS = frozenset("\\`*$[]()!@{}#->_")

EXTENSION_KEY_PATTERN = r"[A-Za-z_][A-Za-z0-9_-]*"

# ============================================================================
# Parser defaults
# ============================================================================

DEFAULT_EXTRACT_METADATA = True
DEFAULT_LIST_INDENT_WIDTH = 4
DEFAULT_STRICT_EXTENSION_KEYS = False

# ============================================================================
# Extension registry
# ============================================================================

DEFAULT_EXTENSION_ENTRY_POINT_GROUP = "concisemark.extensions"

# ``@kbd{cmd+c}`` renders the command key as this glyph
KBD_KEY_ALIASES: dict[str, str] = {
    "cmd": "⌘",
}

# ============================================================================
# Renderer defaults
# ============================================================================

RenderTarget = Literal["html", "latex"]

DEFAULT_WARN_UNKNOWN_EXTENSIONS = True

# HTML
DEFAULT_HTML_ESCAPE = True
DEFAULT_HTML_WRAP_DOCUMENT = True
DEFAULT_HTML_HEADING_IDS = False

# LaTeX
DEFAULT_LATEX_ESCAPE_SPECIAL = True
DEFAULT_LATEX_NUMBERED_SECTIONS = True
DEFAULT_LATEX_DISPLAY_MATH_ENV = "displaymath"
DEFAULT_LATEX_VERBATIM_ENV = "verbatim"
DEFAULT_LATEX_QUOTE_ENV = "quote"

# Heading level n maps to entry n - 1; deeper levels reuse the last entry
LATEX_SECTION_COMMANDS: tuple[str, ...] = (
    "section",
    "subsection",
    "subsubsection",
    "paragraph",
    "subparagraph",
)

# AST JSON
DEFAULT_JSON_INDENT: int | None = 2
DEFAULT_JSON_INCLUDE_ATTRS = True
DEFAULT_JSON_INCLUDE_META = True

OutputFormat = Literal["html", "latex", "json"]
