#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/utils/metadata.py
"""Page metadata and front-matter formatting.

A concisemark page may open with a TOML header wrapped in an HTML comment::

    <!---
    title = "Release notes"
    date = "2024-03-01 09:30:00"
    authors = ["Ada"]
    tags = ["news"]
    -->

The header is parsed into a :class:`PageMeta` by
:func:`concisemark.parsers.meta.extract_meta`. This module holds the data class
and the reverse direction, which serializes with tomli_w.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import tomli_w

from concisemark.constants import META_END_MARK, META_START_MARK


@dataclass
class PageMeta:
    """Front-matter fields of a page.

    Parameters
    ----------
    title : str, optional
        Page title
    subtitle : str, optional
        Page subtitle
    date : datetime, optional
        Publication date; TOML dates without a time become midnight
    authors : list of str
        Author names, in header order
    tags : list of str
        Free-form tags

    """

    title: Optional[str] = None
    subtitle: Optional[str] = None
    date: Optional[datetime] = None
    authors: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible dictionary (the date as ISO 8601)."""
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "date": self.date.isoformat() if self.date is not None else None,
            "authors": list(self.authors),
            "tags": list(self.tags),
        }

    def to_toml(self) -> str:
        """Serialize the set fields as a TOML document.

        Examples
        --------
            >>> print(PageMeta(title="Notes").to_toml(), end="")
            title = "Notes"

        """
        data: Dict[str, Any] = {}
        if self.title is not None:
            data["title"] = self.title
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        if self.date is not None:
            data["date"] = self.date
        if self.authors:
            data["authors"] = list(self.authors)
        if self.tags:
            data["tags"] = list(self.tags)
        return tomli_w.dumps(data)


def format_meta_comment(meta: PageMeta) -> str:
    """Format ``meta`` as the ``<!--- ... -->`` header a page starts with.

    Parameters
    ----------
    meta : PageMeta
        Metadata to serialize

    Returns
    -------
    str
        Header text ending with a newline, ready to prepend to a page body

    """
    toml_content = meta.to_toml()
    if toml_content and not toml_content.endswith("\n"):
        toml_content += "\n"
    return f"{META_START_MARK}\n{toml_content}{META_END_MARK}\n"


__all__ = ["PageMeta", "format_meta_comment"]
