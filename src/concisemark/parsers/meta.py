#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/meta.py
"""Front-matter extraction.

A page may start with a TOML document wrapped in an HTML comment whose opener
uses three dashes::

    <!---
    title = "Notes"
    date = "2024-03-01 09:30:00"
    -->

The comment must be the very first thing in the text, with the opener alone on
the first line. Its body runs to the first line that is exactly ``-->`` (with
optional trailing whitespace). Anything that merely looks like a header later
in the page is ordinary text.
"""

from __future__ import annotations

import logging
import sys
from datetime import date, datetime, time
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from concisemark.constants import META_DATE_FORMATS, META_END_MARK, META_START_MARK
from concisemark.exceptions import MetaParseError
from concisemark.utils.metadata import PageMeta

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("title", "subtitle")
_LIST_FIELDS = ("authors", "tags")
_KNOWN_FIELDS = frozenset(_STRING_FIELDS + _LIST_FIELDS + ("date",))


def extract_meta(text: str) -> tuple[Optional[PageMeta], str, int]:
    """Split the front-matter header off ``text``.

    Parameters
    ----------
    text : str
        Complete page source

    Returns
    -------
    tuple of (PageMeta or None, str, int)
        The parsed metadata (None when there is no header), the remaining
        body text, and the source offset where that body starts

    Raises
    ------
    MetaParseError
        If the header is not terminated, is not valid TOML, or a known field
        has the wrong type

    Examples
    --------
        >>> meta, body, offset = extract_meta('<!---\\ntitle = "Hi"\\n-->\\nBody')
        >>> meta.title, body, offset
        ('Hi', 'Body', 23)

    """
    body_start = _header_body_start(text)
    if body_start is None:
        return None, text, 0

    position = body_start
    while True:
        newline = text.find("\n", position)
        line_end = len(text) if newline == -1 else newline
        if text[position:line_end].rstrip() == META_END_MARK:
            meta_text = text[body_start:position]
            offset = len(text) if newline == -1 else newline + 1
            break
        if newline == -1:
            raise MetaParseError(
                f"Front-matter header is not terminated by a '{META_END_MARK}' line", meta_text=text[body_start:]
            )
        position = newline + 1

    meta = parse_meta_text(meta_text)
    logger.debug(f"Extracted front matter ({offset} characters)")
    return meta, text[offset:], offset


def parse_meta_text(meta_text: str) -> PageMeta:
    """Parse the TOML body of a header into :class:`PageMeta`.

    Raises
    ------
    MetaParseError
        If the TOML is invalid or a known field has the wrong type

    """
    try:
        data = tomllib.loads(meta_text)
    except tomllib.TOMLDecodeError as e:
        raise MetaParseError(f"Invalid TOML in front matter: {e}", meta_text=meta_text, original_error=e) from e

    for key in sorted(set(data) - _KNOWN_FIELDS):
        logger.debug(f"Ignoring unknown front-matter key '{key}'")

    fields: dict[str, Any] = {}
    for key in _STRING_FIELDS:
        if key in data:
            value = data[key]
            if not isinstance(value, str):
                raise MetaParseError(
                    f"Front-matter field '{key}' must be a string, got {type(value).__name__}", meta_text=meta_text
                )
            fields[key] = value
    for key in _LIST_FIELDS:
        if key in data:
            value = data[key]
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise MetaParseError(f"Front-matter field '{key}' must be a list of strings", meta_text=meta_text)
            fields[key] = list(value)
    if "date" in data:
        fields["date"] = _coerce_date(data["date"], meta_text)

    return PageMeta(**fields)


def _header_body_start(text: str) -> Optional[int]:
    if not text.startswith(META_START_MARK):
        return None
    after = len(META_START_MARK)
    if text.startswith("\n", after):
        return after + 1
    if text.startswith("\r\n", after):
        return after + 2
    return None


def _coerce_date(value: Any, meta_text: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        for fmt in META_DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise MetaParseError(
                f"Front-matter date '{value}' is not in a recognized format", meta_text=meta_text, original_error=e
            ) from e
    raise MetaParseError(
        f"Front-matter field 'date' must be a date or string, got {type(value).__name__}", meta_text=meta_text
    )


__all__ = ["extract_meta", "parse_meta_text"]
