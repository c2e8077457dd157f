#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/utils/text.py
"""Text utilities shared by the parser and renderers."""

from __future__ import annotations

import re
import unicodedata
from typing import Set


def slugify(text: str, *, seen_slugs: Set[str] | None = None, max_length: int = 100, separator: str = "-") -> str:
    """Create a URL-safe slug from text with collision avoidance.

    Parameters
    ----------
    text : str
        Text to slugify (typically heading text)
    seen_slugs : Set[str] or None, default = None
        Previously generated slugs. When the new slug already exists a numeric
        suffix (-2, -3, ...) is appended; the result is added to the set.
    max_length : int, default = 100
        Maximum length of the slug before any collision suffix
    separator : str, default = "-"
        The separator between words in the slug

    Returns
    -------
    str
        URL-safe slug, unique if seen_slugs is provided

    Examples
    --------
        >>> slugify("Hello World!")
        'hello-world'
        >>> seen = set()
        >>> slugify("Intro", seen_slugs=seen), slugify("Intro", seen_slugs=seen)
        ('intro', 'intro-2')
        >>> slugify("Café résumé")
        'cafe-resume'

    """
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    slug = re.sub(r"[\s_]+", separator, normalized.lower())
    slug = re.sub(rf"[^a-z0-9\-{re.escape(separator)}]", "", slug)
    slug = re.sub(rf"{re.escape(separator)}+", separator, slug)
    slug = slug.strip(separator)

    if not slug:
        slug = "section"

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip(separator)

    if seen_slugs is None:
        return slug

    candidate = slug
    counter = 2
    while candidate in seen_slugs:
        candidate = f"{slug}{separator}{counter}"
        counter += 1
    seen_slugs.add(candidate)
    return candidate


def count_indent(text: str) -> int:
    """Return the number of leading spaces of ``text``.

    Tabs are not expanded; a tab ends the indentation run.
    """
    return len(text) - len(text.lstrip(" "))


def is_blank(text: str) -> bool:
    """Return True for empty or whitespace-only text."""
    return not text.strip()


__all__ = ["slugify", "count_indent", "is_blank"]
