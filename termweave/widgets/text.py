"""A plain text widget with optional soft wrapping."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import regex

from termweave.framework import DrawContext, Size, Surface, Widget, new_surface
from termweave.style import Cell, Character, Style

_GRAPHEME = regex.compile(r"\X")
_HARD_BREAKS = frozenset("\n\x0b\x0c\r\x85\u2028\u2029")
_NON_BREAKING_SPACES = frozenset("\u00a0\u2007\u202f")
_NO_BREAK_BEFORE = frozenset(")]}!?,.;:")
_HYPHENS = frozenset("-\u2010")
_ELLIPSIS = Character("…", 1)


def _is_space(char: str) -> bool:
    return (
        char.isspace()
        and char not in _HARD_BREAKS
        and char not in _NON_BREAKING_SPACES
    )


def _is_wide(char: str) -> bool:
    return unicodedata.east_asian_width(char) in ("W", "F")


def _break_between(before: str, after: str) -> bool:
    """Whether a line may break between two adjacent grapheme clusters."""
    last = before[-1]
    first = after[0]
    if first in _HARD_BREAKS or _is_space(first) or first in _NO_BREAK_BEFORE:
        return False
    if _is_space(last):
        return True
    if last in _HYPHENS and first.isalpha():
        return True
    return _is_wide(last) or _is_wide(first)


def first_line_segment(text: str) -> Tuple[str, str, bool]:
    """Split off the text up to the first line break opportunity.

    Returns the segment, the rest, and whether the break is mandatory
    (a hard line break, or the end of the text).
    """
    matches = _GRAPHEME.finditer(text)
    current = next(matches, None)
    while current is not None:
        following = next(matches, None)
        grapheme = current.group()
        end = current.end()
        if grapheme[-1] in _HARD_BREAKS:
            return text[:end], text[end:], True
        if following is None:
            return text, "", True
        if _break_between(grapheme, following.group()):
            return text[:end], text[end:], False
        current = following
    return text, "", False


def _next_soft_line(rest: str, width: int, ctx: DrawContext) -> Tuple[str, str]:
    token: List[str] = []
    used = 0
    while True:
        segment, after, hard = first_line_segment(rest)
        word = segment.rstrip()
        trailing = segment[len(word):]
        word_chars = ctx.characters(word)
        word_len = sum(char.width for char in word_chars)
        space_len = sum(char.width for char in ctx.characters(trailing))

        # A word longer than the line is broken between graphemes.
        if word_len > width:
            overflow: List[str] = []
            for char in word_chars:
                if used >= width:
                    overflow.append(char.grapheme)
                    continue
                token.append(char.grapheme)
                used += char.width
            return "".join(token), "".join(overflow) + trailing + after

        if used + word_len > width:
            return "".join(token), rest

        rest = after
        if hard:
            if segment and segment[-1] in _HARD_BREAKS:
                segment = segment[:-1]
            token.append(segment)
            return "".join(token), rest

        token.append(word)
        used += word_len
        if used + space_len > width:
            return "".join(token), rest
        token.append(trailing)
        used += space_len


def soft_wrap(
    text: str, width: int, ctx: Optional[DrawContext] = None
) -> Iterator[str]:
    """Yield the lines of text wrapped to width at word boundaries."""
    ctx = DrawContext() if ctx is None else ctx
    rest = text
    while rest and width:
        line, rest = _next_soft_line(rest, width, ctx)
        yield line


def _hard_lines(text: str) -> List[str]:
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(eq=False)
class Text(Widget):
    """Text drawn in one style, soft wrapped or truncated with an ellipsis."""

    content: str = ""
    style: Style = field(default_factory=Style)
    softwrap: bool = True

    def _lines(self, ctx: DrawContext) -> Iterator[str]:
        if self.softwrap:
            return soft_wrap(self.content, ctx.max.width, ctx)
        return iter(_hard_lines(self.content))

    def _container_size(self, ctx: DrawContext) -> Size:
        width = height = 0
        for line in self._lines(ctx):
            if height > ctx.max.height:
                return Size(width, height)
            height += 1
            line_width = sum(char.width for char in ctx.characters(line))
            width = min(max(width, line_width), ctx.max.width)
        return Size(max(width, ctx.min.width), max(height, ctx.min.height))

    def draw(self, ctx: DrawContext) -> Surface:
        size = self._container_size(ctx)
        surface = new_surface(size.width, size.height, self)
        surface.fill_style(self.style)
        for row, line in enumerate(self._lines(ctx)):
            if row > ctx.max.height:
                break
            if self.softwrap:
                self._draw_wrapped(surface, ctx, row, line)
            else:
                self._draw_truncated(surface, ctx, row, line)
        return surface

    def _draw_wrapped(
        self, surface: Surface, ctx: DrawContext, row: int, line: str
    ) -> None:
        col = 0
        for char in ctx.characters(line):
            if col >= ctx.max.width:
                break
            surface.write_cell(col, row, Cell(char, self.style))
            col += char.width

    def _draw_truncated(
        self, surface: Surface, ctx: DrawContext, row: int, line: str
    ) -> None:
        col = 0
        for char in ctx.characters(line):
            if col >= ctx.max.width:
                break
            if col + char.width >= ctx.max.width:
                surface.write_cell(col, row, Cell(_ELLIPSIS, self.style))
                break
            surface.write_cell(col, row, Cell(char, self.style))
            col += char.width