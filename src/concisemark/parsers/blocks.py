#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/concisemark/parsers/blocks.py
"""Block segmentation.

The segmenter turns a run of :class:`~concisemark.parsers.lines.Line` objects
into :class:`Block` drafts. A line at the cursor is classified by the first
rule that matches:

1. blank line: ends the current block
2. heading: a run of one to six ``#`` at column 0
3. block quote: ``>`` after fewer than four spaces
4. list: ``-`` followed by whitespace or end of line, after fewer than four
   spaces
5. code block: indented at least four columns more than the last non-blank
   line of the previous block
6. math block: a paragraph that is a single non-empty ``$...$`` or ``$$...$$``
   span
7. paragraph

Rule 5 is tested first because it depends on context rather than on a
marker. Containers (block quotes and list items) strip their markers and
segment their inner lines recursively. Inline text is left to the
:class:`~concisemark.parsers.inline.InlineSpanner`; blocks only carry the
lines it should scan.

Malformed input never raises. Unexpected list indentation is logged and
attached to the nearest valid nesting level.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from concisemark.ast.nodes import NodeTag
from concisemark.constants import (
    BLOCKQUOTE_MARK,
    CODE_INDENT_WIDTH,
    DEFAULT_LIST_INDENT_WIDTH,
    HEADING_MARK,
    LIST_HEAD_CONTINUATION_WIDTH,
    LIST_MARK,
    MAX_HEADING_LEVEL,
)
from concisemark.parsers.lines import Line

logger = logging.getLogger(__name__)

_MATH_BLOCK_PATTERN = re.compile(r"\A(\$\$?)((?:\\.|[^$\\])+)\1\Z", re.DOTALL)


@dataclass
class Block:
    """Draft of a block node.

    Parameters
    ----------
    tag : NodeTag
        Block kind
    start, end : int
        Source range
    lines : list of Line
        Inline text to hand to the spanner (headings, paragraphs and list
        item heads)
    children : list of Block
        Nested blocks (block quotes, lists and list item bodies)
    attrs : dict
        Tag-specific attributes (``content`` of code and math blocks)

    """

    tag: NodeTag
    start: int
    end: int
    lines: list[Line] = field(default_factory=list)
    children: list[Block] = field(default_factory=list)
    attrs: dict[str, Any] = field(default_factory=dict)


class _ListItemDraft:
    __slots__ = ("indent", "start", "end", "head", "parts")

    def __init__(self, indent: int, start: int):
        self.indent = indent
        self.start = start
        self.end = start
        self.head: list[Line] = []
        # Body line chunks and nested lists, in source order
        self.parts: list[Union[list[Line], _ListDraft]] = []

    def add_body_line(self, line: Line) -> None:
        if not self.parts or not isinstance(self.parts[-1], list):
            self.parts.append([])
        self.parts[-1].append(line)  # type: ignore[union-attr]


class _ListDraft:
    __slots__ = ("indent", "items")

    def __init__(self, indent: int):
        self.indent = indent
        self.items: list[_ListItemDraft] = []


def heading_level(line: Line) -> int:
    """Return the heading level of ``line``, or 0 if it is not a heading."""
    text = line.text
    if not text.startswith(HEADING_MARK):
        return 0
    level = len(text) - len(text.lstrip(HEADING_MARK))
    return level if level <= MAX_HEADING_LEVEL else 0


def is_quote_start(line: Line) -> bool:
    return line.indent < CODE_INDENT_WIDTH and line.text.lstrip(" ").startswith(BLOCKQUOTE_MARK)


def is_list_marker(line: Line) -> bool:
    """Return True if ``line`` starts with ``-`` followed by whitespace or nothing."""
    stripped = line.text.lstrip(" ")
    return stripped.startswith(LIST_MARK) and (len(stripped) == 1 or stripped[1].isspace())


class BlockSegmenter:
    """Split lines into block drafts.

    Parameters
    ----------
    list_indent_width : int, default 4
        Indentation that opens a nested list level and that a list item's
        body must reach

    """

    def __init__(self, list_indent_width: int = DEFAULT_LIST_INDENT_WIDTH):
        self.list_indent_width = list_indent_width

    def segment(self, lines: list[Line]) -> list[Block]:
        """Segment ``lines`` of one container into blocks.

        Parameters
        ----------
        lines : list of Line
            Lines of the container, with container markers already stripped

        Returns
        -------
        list of Block
            Top-level blocks of the container in source order

        """
        blocks: list[Block] = []
        reference_indent = 0
        index = 0
        count = len(lines)

        while index < count:
            line = lines[index]
            if line.is_blank:
                index += 1
                continue

            if line.indent >= reference_indent + CODE_INDENT_WIDTH:
                block, index = self._code_block(lines, index, reference_indent + CODE_INDENT_WIDTH)
                blocks.append(block)
                continue

            level = heading_level(line)
            if level:
                blocks.append(self._heading(line, level))
                reference_indent = 0
                index += 1
                continue

            if is_quote_start(line):
                block, next_index = self._block_quote(lines, index)
            elif line.indent < CODE_INDENT_WIDTH and is_list_marker(line):
                block, next_index = self._list(lines, index)
            else:
                block, next_index = self._paragraph(lines, index)

            blocks.append(block)
            reference_indent = _last_non_blank(lines, index, next_index).indent
            index = next_index

        return blocks

    def _heading(self, line: Line, level: int) -> Block:
        rest = line.advance(level).lstrip().rstrip()
        return Block(
            tag=NodeTag.heading(level),
            start=line.offset + level,
            end=line.end,
            lines=[rest] if rest.text else [],
        )

    def _code_block(self, lines: list[Line], index: int, required: int) -> tuple[Block, int]:
        last = index
        cursor = index + 1
        while cursor < len(lines):
            line = lines[cursor]
            if line.is_blank:
                cursor += 1
                continue
            if line.indent < required:
                break
            last = cursor
            cursor += 1

        chunk = lines[index : last + 1]
        content = "\n".join(line.dedent(required).text for line in chunk)
        block = Block(
            tag=NodeTag.CODEBLOCK,
            start=chunk[0].offset,
            end=chunk[-1].end,
            attrs={"content": content},
        )
        return block, last + 1

    def _block_quote(self, lines: list[Line], index: int) -> tuple[Block, int]:
        inner: list[Line] = []
        cursor = index
        while cursor < len(lines) and not lines[cursor].is_blank and is_quote_start(lines[cursor]):
            stripped = lines[cursor].lstrip().advance(len(BLOCKQUOTE_MARK))
            if stripped.text.startswith(" "):
                stripped = stripped.advance(1)
            inner.append(stripped)
            cursor += 1

        first = lines[index]
        block = Block(
            tag=NodeTag.BLOCKQUOTE,
            start=first.offset + first.indent + len(BLOCKQUOTE_MARK),
            end=lines[cursor - 1].end,
            children=self.segment(inner),
        )
        return block, cursor

    def _paragraph(self, lines: list[Line], index: int) -> tuple[Block, int]:
        collected = [lines[index]]
        cursor = index + 1
        while cursor < len(lines):
            line = lines[cursor]
            if line.is_blank or heading_level(line) or is_quote_start(line):
                break
            if line.indent < CODE_INDENT_WIDTH and is_list_marker(line):
                break
            collected.append(line)
            cursor += 1

        stripped = [line.lstrip().rstrip() for line in collected]
        start = stripped[0].offset
        end = stripped[-1].end

        text = "\n".join(line.text for line in stripped)
        match = _MATH_BLOCK_PATTERN.match(text)
        content = match.group(2).strip() if match else ""
        if content:
            block = Block(tag=NodeTag.MATHBLOCK, start=start, end=end, attrs={"content": content})
        else:
            block = Block(tag=NodeTag.PARAGRAPH, start=start, end=end, lines=stripped)
        return block, cursor

    def _list(self, lines: list[Line], index: int) -> tuple[Block, int]:
        width = self.list_indent_width
        top = _ListDraft(lines[index].indent)
        stack = [top]
        pending_blanks: list[Line] = []
        after_head = False
        cursor = index
        end_index = index

        while cursor < len(lines):
            line = lines[cursor]
            if line.is_blank:
                pending_blanks.append(line)
                after_head = False
                cursor += 1
                continue

            indent = line.indent
            deepest = stack[-1].items[-1] if stack[-1].items else None
            if is_list_marker(line):
                self._place_marker(line, stack, width)
                pending_blanks = []
                after_head = True
            elif (
                after_head
                and deepest is not None
                and deepest.indent + LIST_HEAD_CONTINUATION_WIDTH <= indent < deepest.indent + width
            ):
                continuation = line.lstrip().rstrip()
                deepest.head.append(continuation)
                deepest.end = max(deepest.end, continuation.end)
            else:
                target = self._body_owner(stack, indent, width)
                if target is None:
                    break
                level, item = target
                del stack[level + 1 :]
                for blank in pending_blanks:
                    item.add_body_line(blank.dedent(item.indent + width))
                item.add_body_line(line.dedent(item.indent + width))
                item.end = max(item.end, line.rstrip().end)
                pending_blanks = []
                after_head = False
            cursor += 1
            end_index = cursor

        return self._list_block(top), end_index

    def _place_marker(self, line: Line, stack: list[_ListDraft], width: int) -> None:
        indent = line.indent
        positions = [level.indent for level in stack]
        nested = stack[-1].indent + width

        if indent in positions:
            depth = positions.index(indent)
        elif indent == nested:
            depth = len(stack)
        else:
            valid = [position for position in positions + [nested] if position <= indent]
            position = max(valid) if valid else positions[0]
            depth = len(stack) if position == nested else positions.index(position)
            logger.warning(
                f"List item at offset {line.offset} has unexpected indent {indent}; treating it as indent {position}"
            )

        if depth == len(stack):
            parent_item = stack[-1].items[-1]
            nested_list = _ListDraft(nested)
            parent_item.parts.append(nested_list)
            stack.append(nested_list)
        else:
            del stack[depth + 1 :]

        level = stack[-1]
        dash = line.offset + indent
        item = _ListItemDraft(level.indent, dash + len(LIST_MARK))
        head = line.advance(indent + len(LIST_MARK)).lstrip().rstrip()
        if head.text:
            item.head.append(head)
            item.end = head.end
        level.items.append(item)

    def _body_owner(
        self, stack: list[_ListDraft], indent: int, width: int
    ) -> Optional[tuple[int, _ListItemDraft]]:
        for level in range(len(stack) - 1, -1, -1):
            item = stack[level].items[-1]
            if indent >= item.indent + width:
                return level, item
        return None

    def _list_block(self, draft: _ListDraft) -> Block:
        items = [self._item_block(item) for item in draft.items]
        return Block(tag=NodeTag.LIST, start=items[0].start, end=items[-1].end, children=items)

    def _item_block(self, item: _ListItemDraft) -> Block:
        children: list[Block] = []
        for part in item.parts:
            if isinstance(part, _ListDraft):
                children.append(self._list_block(part))
            else:
                children.extend(self.segment(part))
        end = max([item.end] + [child.end for child in children])
        return Block(tag=NodeTag.LISTITEM, start=item.start, end=end, lines=list(item.head), children=children)


def _last_non_blank(lines: list[Line], start: int, stop: int) -> Line:
    for cursor in range(stop - 1, start - 1, -1):
        if not lines[cursor].is_blank:
            return lines[cursor]
    return lines[start]


__all__ = ["Block", "BlockSegmenter", "heading_level", "is_list_marker", "is_quote_start"]
