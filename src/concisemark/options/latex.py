#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/options/latex.py
"""Configuration options for LaTeX rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from concisemark.constants import (
    DEFAULT_LATEX_DISPLAY_MATH_ENV,
    DEFAULT_LATEX_ESCAPE_SPECIAL,
    DEFAULT_LATEX_NUMBERED_SECTIONS,
    DEFAULT_LATEX_QUOTE_ENV,
    DEFAULT_LATEX_VERBATIM_ENV,
)
from concisemark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class LatexRendererOptions(BaseRendererOptions):
    r"""Configuration options for page-to-LaTeX rendering.

    The renderer emits a body fragment; preamble and ``\begin{document}`` are
    left to the caller. Links need ``hyperref`` and images ``graphicx``.

    Parameters
    ----------
    escape_special : bool, default True
        Escape ``# $ % & _ { } ~ ^ \`` in text
    numbered_sections : bool, default True
        Use ``\section`` rather than ``\section*``
    display_math_env : str, default "displaymath"
        Environment for math blocks
    verbatim_env : str, default "verbatim"
        Environment for code blocks
    quote_env : str, default "quote"
        Environment for block quotes
    image_width : str or None, default None
        Optional width for ``\includegraphics``, e.g. ``"0.8\linewidth"``

    """

    escape_special: bool = field(
        default=DEFAULT_LATEX_ESCAPE_SPECIAL,
        metadata={"help": "Escape special LaTeX characters in text", "importance": "core"},
    )
    numbered_sections: bool = field(
        default=DEFAULT_LATEX_NUMBERED_SECTIONS,
        metadata={"help": "Emit numbered sectioning commands", "importance": "core"},
    )
    display_math_env: str = field(
        default=DEFAULT_LATEX_DISPLAY_MATH_ENV,
        metadata={"help": "Environment used for math blocks", "type": str, "importance": "advanced"},
    )
    verbatim_env: str = field(
        default=DEFAULT_LATEX_VERBATIM_ENV,
        metadata={"help": "Environment used for code blocks", "type": str, "importance": "advanced"},
    )
    quote_env: str = field(
        default=DEFAULT_LATEX_QUOTE_ENV,
        metadata={"help": "Environment used for block quotes", "type": str, "importance": "advanced"},
    )
    image_width: str | None = field(
        default=None,
        metadata={"help": "Width option for includegraphics", "type": str, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate environment names.

        Raises
        ------
        ValueError
            If an environment name is empty or not a plain identifier.

        """
        super().__post_init__()
        for name in ("display_math_env", "verbatim_env", "quote_env"):
            value = getattr(self, name)
            if not value or not value.replace("*", "").isalpha():
                raise ValueError(f"{name} must be a LaTeX environment name, got {value!r}")
