#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/inline.py
"""Inline span recognition.

The spanner scans the inline text of one block (a heading line, the lines of
a paragraph, or a list item head) and returns :class:`Span` drafts. The lines
are joined with ``\\n`` for scanning and every position is mapped back to its
source offset, so spans that cross a line break still get exact ranges.

Constructs, tried at each position in this order (the leftmost opener in the
text always wins):

- ``\\x`` backslash escape of a punctuation character
- ```code``` inline code, any run of backticks closed by a run of equal length
- ``$math$`` / ``$$math$$`` inline math on a single line
- ``![alt](url)`` image
- ``[text](url)`` link
- ``@key{value}`` extension
- ``**strong**`` and ``*emphasis*``

Anything that does not close becomes literal text, so scanning never fails.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Sequence

from concisemark.ast.nodes import NodeTag
from concisemark.constants import ESCAPABLE_CHARS, EXTENSION_KEY_PATTERN
from concisemark.parsers.lines import Line

if TYPE_CHECKING:
    from concisemark.extensions.registry import ExtensionRegistry

logger = logging.getLogger(__name__)

_LINK_PATTERN = re.compile(r"\[([^\]]*)\]\(([^)\s]*)\)")
_EXTENSION_KEY = re.compile(EXTENSION_KEY_PATTERN + r"\{")


@dataclass
class Span:
    """Draft of an inline node.

    Parameters
    ----------
    tag : NodeTag
        Inline kind
    start, end : int
        Source range
    children : list of Span
        Nested spans of emphasis, strong and link nodes
    attrs : dict
        Tag-specific attributes

    """

    tag: NodeTag
    start: int
    end: int
    children: list[Span] = field(default_factory=list)
    attrs: dict[str, Any] = field(default_factory=dict)


class _OffsetMap:
    """Map positions in the joined text back to source offsets."""

    __slots__ = ("_starts", "_offsets")

    def __init__(self, lines: Sequence[Line]):
        self._starts: list[int] = []
        self._offsets: list[int] = []
        position = 0
        for line in lines:
            self._starts.append(position)
            self._offsets.append(line.offset)
            position += len(line.text) + 1

    def __call__(self, position: int) -> int:
        index = bisect_right(self._starts, position) - 1
        return self._offsets[index] + (position - self._starts[index])


def _run_length(text: str, position: int, stop: int, char: str) -> int:
    end = position
    while end < stop and text[end] == char:
        end += 1
    return end - position


class InlineSpanner:
    """Scan inline text into span drafts.

    Parameters
    ----------
    registry : ExtensionRegistry, optional
        Registry consulted for ``@key{value}`` keys when
        ``strict_extension_keys`` is set
    strict_extension_keys : bool, default False
        Only recognize extensions whose key is registered; unknown keys are
        left as literal text

    """

    def __init__(self, registry: Optional[ExtensionRegistry] = None, strict_extension_keys: bool = False):
        self.registry = registry
        self.strict_extension_keys = strict_extension_keys

    def scan(self, lines: Sequence[Line]) -> list[Span]:
        """Return the spans of ``lines`` in source order.

        Parameters
        ----------
        lines : sequence of Line
            Inline lines of one block, already stripped of indentation

        Returns
        -------
        list of Span
            Top-level spans; never contains an empty text span

        """
        if not lines:
            return []
        text = "\n".join(line.text for line in lines)
        scanner = _Scan(self, text, _OffsetMap(lines))
        return scanner.spans(0, len(text), allow_links=True)

    def accepts_extension(self, key: str) -> bool:
        """Return True if ``@key{...}`` should become an extension node."""
        if not self.strict_extension_keys:
            return True
        return self.registry is not None and key in self.registry


class _Scan:
    """Scanner state for one block of inline text."""

    def __init__(self, spanner: InlineSpanner, text: str, source_offset: _OffsetMap):
        self.spanner = spanner
        self.text = text
        self.source_offset = source_offset

    def spans(self, start: int, stop: int, allow_links: bool) -> list[Span]:
        text = self.text
        result: list[Span] = []
        literal: list[str] = []
        literal_start = start
        position = start

        while position < stop:
            char = text[position]

            if char == "\\" and position + 1 < stop and text[position + 1] in ESCAPABLE_CHARS:
                if not literal:
                    literal_start = position
                literal.append(text[position + 1])
                position += 2
                continue

            if char == "`":
                matched = self._code(position, stop)
                if matched is None:
                    # An unmatched backtick run is literal as a whole
                    run = _run_length(text, position, stop, "`")
                    if not literal:
                        literal_start = position
                    literal.append(text[position : position + run])
                    position += run
                    continue
            elif char == "*" and text.startswith("**", position) and position + 1 < stop:
                matched = self._strong(position, stop, allow_links)
                if matched is None:
                    if not literal:
                        literal_start = position
                    literal.append("**")
                    position += 2
                    continue
            else:
                matched = self._match(char, position, stop, allow_links)

            if matched is None:
                if not literal:
                    literal_start = position
                literal.append(char)
                position += 1
                continue

            if literal:
                result.append(self._text_span(literal, literal_start, position))
                literal = []
            span, position = matched
            result.append(span)

        if literal:
            result.append(self._text_span(literal, literal_start, stop))
        return result

    def _match(self, char: str, position: int, stop: int, allow_links: bool) -> Optional[tuple[Span, int]]:
        if char == "$":
            return self._math(position, stop)
        if char == "!" and self.text.startswith("[", position + 1):
            return self._image(position, stop)
        if char == "[" and allow_links:
            return self._link(position, stop)
        if char == "@":
            return self._extension(position, stop)
        if char == "*":
            return self._emphasis(position, stop, allow_links)
        return None

    def _text_span(self, literal: list[str], start: int, stop: int) -> Span:
        return Span(
            NodeTag.TEXT,
            self.source_offset(start),
            self.source_offset(stop),
            attrs={"content": "".join(literal)},
        )

    def _code(self, position: int, stop: int) -> Optional[tuple[Span, int]]:
        text = self.text
        run = _run_length(text, position, stop, "`")
        cursor = position + run
        while True:
            candidate = text.find("`", cursor, stop)
            if candidate == -1:
                return None
            closing = _run_length(text, candidate, stop, "`")
            if closing == run:
                end = candidate + closing
                span = Span(
                    NodeTag.INLINECODE,
                    self.source_offset(position),
                    self.source_offset(end),
                    attrs={"content": text[position + run : candidate].strip()},
                )
                return span, end
            cursor = candidate + closing

    def _math(self, position: int, stop: int) -> Optional[tuple[Span, int]]:
        text = self.text
        delimiter = 2 if text.startswith("$$", position) and position + 1 < stop else 1
        line_end = text.find("\n", position, stop)
        if line_end == -1:
            line_end = stop

        cursor = position + delimiter
        while cursor < line_end:
            char = text[cursor]
            if char == "\\":
                cursor += 2
                continue
            if char == "$":
                if _run_length(text, cursor, line_end, "$") != delimiter:
                    return None
                content = text[position + delimiter : cursor].strip()
                if not content:
                    return None
                end = cursor + delimiter
                span = Span(
                    NodeTag.MATHINLINE,
                    self.source_offset(position),
                    self.source_offset(end),
                    attrs={"content": content},
                )
                return span, end
            cursor += 1
        return None

    def _image(self, position: int, stop: int) -> Optional[tuple[Span, int]]:
        match = _LINK_PATTERN.match(self.text, position + 1, stop)
        if match is None:
            return None
        span = Span(
            NodeTag.IMAGE,
            self.source_offset(position),
            self.source_offset(match.end()),
            attrs={"url": match.group(2), "alt": match.group(1)},
        )
        return span, match.end()

    def _link(self, position: int, stop: int) -> Optional[tuple[Span, int]]:
        match = _LINK_PATTERN.match(self.text, position, stop)
        if match is None:
            return None
        span = Span(
            NodeTag.LINK,
            self.source_offset(position),
            self.source_offset(match.end()),
            children=self.spans(match.start(1), match.end(1), allow_links=False),
            attrs={"url": match.group(2)},
        )
        return span, match.end()

    def _extension(self, position: int, stop: int) -> Optional[tuple[Span, int]]:
        text = self.text
        match = _EXTENSION_KEY.match(text, position + 1, stop)
        if match is None:
            return None
        key = text[position + 1 : match.end() - 1]
        if not self.spanner.accepts_extension(key):
            return None

        value: list[str] = []
        cursor = match.end()
        while cursor < stop:
            char = text[cursor]
            if char == "\\" and text.startswith("}", cursor + 1) and cursor + 1 < stop:
                value.append("}")
                cursor += 2
                continue
            if char == "}":
                end = cursor + 1
                span = Span(
                    NodeTag.EXTENSION,
                    self.source_offset(position),
                    self.source_offset(end),
                    attrs={"key": key, "value": "".join(value)},
                )
                return span, end
            value.append(char)
            cursor += 1
        return None

    def _strong(self, position: int, stop: int, allow_links: bool) -> Optional[tuple[Span, int]]:
        text = self.text
        content_start = position + 2
        if content_start >= stop or text[content_start].isspace():
            return None

        cursor = content_start
        while cursor < stop:
            skipped = self._skip_protected(cursor, stop)
            if skipped is not None:
                cursor = skipped
                continue
            if text[cursor] == "*":
                run = _run_length(text, cursor, stop, "*")
                if run >= 2:
                    closer = cursor + run - 2
                    if closer > content_start and not text[closer - 1].isspace():
                        return self._wrap(NodeTag.STRONG, position, content_start, closer, 2, allow_links)
                cursor += run
                continue
            cursor += 1
        return None

    def _emphasis(self, position: int, stop: int, allow_links: bool) -> Optional[tuple[Span, int]]:
        text = self.text
        content_start = position + 1
        if content_start >= stop or text[content_start].isspace() or text[content_start] == "*":
            return None

        cursor = content_start
        while cursor < stop:
            skipped = self._skip_protected(cursor, stop)
            if skipped is not None:
                cursor = skipped
                continue
            if text[cursor] == "*":
                run = _run_length(text, cursor, stop, "*")
                if run == 1:
                    if not text[cursor - 1].isspace():
                        return self._wrap(NodeTag.EMPHASIS, position, content_start, cursor, 1, allow_links)
                    cursor += 1
                    continue
                # A **strong** pair inside emphasis is stepped over whole
                inner = self._strong(cursor, stop, allow_links)
                cursor = inner[1] if inner is not None else cursor + run
                continue
            cursor += 1
        return None

    def _skip_protected(self, cursor: int, stop: int) -> Optional[int]:
        """Return the position after an escape or code span at ``cursor``."""
        text = self.text
        if text[cursor] == "\\" and cursor + 1 < stop and text[cursor + 1] in ESCAPABLE_CHARS:
            return cursor + 2
        if text[cursor] == "`":
            matched = self._code(cursor, stop)
            if matched is not None:
                return matched[1]
            return cursor + _run_length(text, cursor, stop, "`")
        return None

    def _wrap(
        self, tag: NodeTag, position: int, content_start: int, closer: int, width: int, allow_links: bool
    ) -> tuple[Span, int]:
        end = closer + width
        span = Span(
            tag,
            self.source_offset(position),
            self.source_offset(end),
            children=self.spans(content_start, closer, allow_links),
        )
        return span, end


__all__ = ["Span", "InlineSpanner"]
