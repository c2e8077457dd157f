#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/lines.py
"""Source lines with their offsets.

Every :class:`Line` is a contiguous slice of the original source: ``text``
never contains the line break and ``offset`` is the source position of
``text[0]``. Container blocks strip their markers with :meth:`Line.advance`,
which keeps that property, so ranges computed from any line point straight
back into the source.
"""

from __future__ import annotations

from typing import NamedTuple

from concisemark.utils.text import count_indent, is_blank


class Line(NamedTuple):
    """One line of source text and the offset of its first character."""

    text: str
    offset: int

    @property
    def end(self) -> int:
        """Source offset just past the last character."""
        return self.offset + len(self.text)

    @property
    def indent(self) -> int:
        return count_indent(self.text)

    @property
    def is_blank(self) -> bool:
        return is_blank(self.text)

    def advance(self, count: int) -> Line:
        """Drop the first ``count`` characters."""
        count = min(count, len(self.text))
        return Line(self.text[count:], self.offset + count)

    def dedent(self, width: int) -> Line:
        """Drop up to ``width`` leading spaces."""
        return self.advance(min(width, self.indent))

    def lstrip(self) -> Line:
        return self.advance(self.indent)

    def rstrip(self) -> Line:
        return Line(self.text.rstrip(), self.offset)


def split_lines(text: str, offset: int = 0) -> list[Line]:
    """Split ``text`` into lines, keeping source offsets.

    ``\\n`` and ``\\r\\n`` both end a line; the break itself is not part of
    the line text. A trailing break does not produce an extra empty line.

    Parameters
    ----------
    text : str
        Text to split
    offset : int, default 0
        Source offset of ``text[0]``

    Returns
    -------
    list of Line
        The lines in order

    """
    lines = []
    position = 0
    length = len(text)
    while position < length:
        newline = text.find("\n", position)
        if newline == -1:
            newline = length
        stop = newline
        if stop > position and text[stop - 1] == "\r":
            stop -= 1
        lines.append(Line(text[position:stop], offset + position))
        position = newline + 1
    return lines


__all__ = ["Line", "split_lines"]
