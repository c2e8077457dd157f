#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/extensions/builtin.py
"""Built-in extension handlers.

========  =====================  ===========================================
Key       Example                Output
========  =====================  ===========================================
emoji     ``@emoji{smile;+1}``   Unicode glyphs for GitHub-style names
kbd       ``@kbd{cmd+c}``        Key caps; ``cmd`` becomes U+2318
math      ``@math{x^2}``         Inline math, same as ``$x^2$``
char      ``@char{#}``           The first character of the value, escaped
========  =====================  ===========================================
"""

from __future__ import annotations

import emoji

from concisemark.constants import KBD_KEY_ALIASES
from concisemark.extensions.registry import ExtensionHandler
from concisemark.utils.escape import escape_latex
from concisemark.utils.html_utils import escape_html, render_math_html


def _emoji_parts(value: str) -> list[tuple[str, bool]]:
    """Resolve ``;``-separated names to ``(text, is_glyph)`` pairs."""
    parts = []
    for name in value.strip().split(";"):
        name = name.strip()
        if not name:
            continue
        alias = f":{name}:"
        glyph = emoji.emojize(alias, language="alias")
        if glyph != alias:
            parts.append((glyph, True))
        else:
            # Unknown names stay readable in the output
            parts.append((f" {name} ", False))
    return parts


def emoji_html(value: str) -> str:
    return "".join(text if is_glyph else escape_html(text) for text, is_glyph in _emoji_parts(value))


def emoji_latex(value: str) -> str:
    return "".join(text if is_glyph else escape_latex(text) for text, is_glyph in _emoji_parts(value))


def _kbd_keys(value: str) -> list[str]:
    keys = [key.strip() for key in value.strip().split("+")]
    return [KBD_KEY_ALIASES.get(key.lower(), key) for key in keys if key]


def kbd_html(value: str) -> str:
    return "+".join(f"<kbd>{escape_html(key)}</kbd>" for key in _kbd_keys(value))


def kbd_latex(value: str) -> str:
    return "+".join(f"\\texttt{{{escape_latex(key)}}}" for key in _kbd_keys(value))


def math_html(value: str) -> str:
    return render_math_html(value.strip(), inline=True)


def math_latex(value: str) -> str:
    return f"${value.strip()}$"


def char_html(value: str) -> str:
    return escape_html(value.strip()[:1])


def char_latex(value: str) -> str:
    return escape_latex(value.strip()[:1])


BUILTIN_HANDLERS: dict[str, ExtensionHandler] = {
    "emoji": ExtensionHandler(emoji_html, emoji_latex, "GitHub-style emoji names separated by ';'"),
    "kbd": ExtensionHandler(kbd_html, kbd_latex, "Keyboard shortcut, keys separated by '+'"),
    "math": ExtensionHandler(math_html, math_latex, "Inline math"),
    "char": ExtensionHandler(char_html, char_latex, "A single escaped character"),
}


__all__ = ["BUILTIN_HANDLERS"]
