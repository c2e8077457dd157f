#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/utils/escape.py
"""Format-specific text escaping utilities.

This module provides the escape functions of the LaTeX renderer so that
literal text from the source never turns into markup in the output.

"""

from __future__ import annotations

# Each special character maps to exactly one replacement; the text is walked
# once so replacements are never escaped a second time.
_LATEX_SPECIAL_CHARS: dict[str, str] = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "&": r"\&",
    "#": r"\#",
    "%": r"\%",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_LATEX_URL_CHARS: dict[str, str] = {
    "\\": r"\\",
    "#": r"\#",
    "%": r"\%",
    "{": r"\{",
    "}": r"\}",
}


def escape_latex(text: str, *, enabled: bool = True) -> str:
    r"""Escape the LaTeX special characters ``# $ % & _ { } ~ ^ \``.

    Parameters
    ----------
    text : str
        Text to escape
    enabled : bool, default True
        When False the text is returned unchanged

    Returns
    -------
    str
        Text safe to place in a LaTeX body

    Examples
    --------
        >>> escape_latex("50% of $x_1$")
        '50\\% of \\$x\\_1\\$'
        >>> escape_latex("a\\b")
        'a\\textbackslash{}b'

    """
    if not enabled or not text:
        return text
    return "".join(_LATEX_SPECIAL_CHARS.get(char, char) for char in text)


def escape_latex_url(url: str) -> str:
    """Escape a URL for the first argument of ``\\href``."""
    return "".join(_LATEX_URL_CHARS.get(char, char) for char in url)


__all__ = ["escape_latex", "escape_latex_url"]
