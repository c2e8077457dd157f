#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/utils/html_utils.py
"""HTML escaping and math wrappers shared by the HTML renderer and extensions."""

from __future__ import annotations

from html import escape as _html_escape


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled.

    Examples
    --------
        >>> escape_html("<b>&</b>")
        '&lt;b&gt;&amp;&lt;/b&gt;'

    """
    if not enabled or not text:
        return text
    return _html_escape(text, quote=True)


def render_math_html(content: str, *, inline: bool, escape_enabled: bool = True) -> str:
    """Render LaTeX math content as an HTML wrapper for client-side typesetting.

    Parameters
    ----------
    content : str
        Math content without delimiters
    inline : bool
        If True, render as inline math (span), otherwise block math (div)
    escape_enabled : bool, default True
        If True, escape HTML special characters in content

    Returns
    -------
    str
        ``<span class="math math-inline">$...$</span>`` or
        ``<div class="math math-block">`` with ``$$`` delimiters

    """
    escaped = escape_html(content, enabled=escape_enabled)
    if inline:
        return f'<span class="math math-inline">${escaped}$</span>'
    return f'<div class="math math-block">\n$$\n{escaped}\n$$\n</div>'


__all__ = ["escape_html", "render_math_html"]
