"""A widget drawing styled text segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from termweave.framework import DrawContext, Size, Surface, Widget, new_surface
from termweave.style import Cell, Character, Segment
from termweave.widgets.text import first_line_segment as _split_text

_HARD_BREAKS = frozenset("\n\x0b\x0c\r\x85\u2028\u2029")
_ELLIPSIS = Character("…", 1)


def _has_trailing_line_break(grapheme: str) -> bool:
    return bool(grapheme) and grapheme[-1] in _HARD_BREAKS


def _is_space(cell: Cell) -> bool:
    return cell.grapheme[-1:].isspace()


def first_line_segment(cells: Sequence[Cell]) -> Tuple[List[Cell], bool]:
    """Cells up to the first line break opportunity, and whether it is hard."""
    cells = list(cells)
    for index, cell in enumerate(cells):
        if index == len(cells) - 1:
            return cells, True
        following = cells[index + 1]
        if index == 0 and _has_trailing_line_break(cell.grapheme):
            return cells[:1], True
        if _has_trailing_line_break(following.grapheme):
            return cells[: index + 2], True
        _, rest, _ = _split_text(cell.grapheme + following.grapheme)
        if rest:
            return cells[: index + 1], False
    return cells, False


def _next_soft_line(
    rest: List[Cell], width: int
) -> Tuple[List[Cell], List[Cell]]:
    token: List[Cell] = []
    used = 0
    while True:
        segment, hard = first_line_segment(rest)
        after = rest[len(segment):]
        word_end = len(segment)
        while word_end > 0 and _is_space(segment[word_end - 1]):
            word_end -= 1
        word = segment[:word_end]
        trailing = segment[word_end:]
        word_len = sum(cell.width for cell in word)
        space_len = sum(cell.width for cell in trailing)

        # A word longer than the line is broken between graphemes.
        if word_len > width:
            overflow: List[Cell] = []
            for cell in word:
                if used >= width:
                    overflow.append(cell)
                    continue
                token.append(cell)
                used += cell.width
            return token, overflow + trailing + after

        if used + word_len > width:
            return token, rest

        rest = after
        if hard:
            if _has_trailing_line_break(segment[-1].grapheme):
                segment = segment[:-1]
            token.extend(segment)
            return token, rest

        token.extend(word)
        used += word_len
        if used + space_len > width:
            return token, rest
        token.extend(trailing)
        used += space_len


def softwrap_lines(cells: Sequence[Cell], width: int) -> Iterator[List[Cell]]:
    """Yield lines of cells wrapped to width at word boundaries."""
    rest = list(cells)
    while rest and width:
        line, rest = _next_soft_line(rest, width)
        yield line


def hardwrap_lines(cells: Sequence[Cell]) -> Iterator[List[Cell]]:
    """Yield lines of cells split only at newlines."""
    remaining = list(cells)
    while remaining:
        newline = next(
            (i for i, cell in enumerate(remaining) if cell.grapheme == "\n"), None
        )
        if newline is None:
            yield remaining
            return
        yield remaining[:newline]
        remaining = remaining[newline + 1:]


@dataclass(eq=False)
class RichText(Widget):
    """Segments of differently styled text, soft wrapped or truncated."""

    content: List[Segment] = field(default_factory=list)
    softwrap: bool = True

    def _cells(self, ctx: DrawContext) -> List[Cell]:
        return [
            Cell(char, segment.style)
            for segment in self.content
            for char in ctx.characters(segment.text)
        ]

    def _lines(self, cells: List[Cell], ctx: DrawContext) -> Iterator[List[Cell]]:
        if self.softwrap:
            return softwrap_lines(cells, ctx.max.width)
        return hardwrap_lines(cells)

    def _container_size(self, cells: List[Cell], ctx: DrawContext) -> Size:
        width = height = 0
        for line in self._lines(cells, ctx):
            if height > ctx.max.height:
                return Size(width, height)
            height += 1
            line_width = sum(cell.width for cell in line)
            width = min(max(width, line_width), ctx.max.width)
        return Size(max(width, ctx.min.width), max(height, ctx.min.height))

    def draw(self, ctx: DrawContext) -> Surface:
        cells = self._cells(ctx)
        size = self._container_size(cells, ctx)
        surface = new_surface(size.width, size.height, self)
        for row, line in enumerate(self._lines(cells, ctx)):
            if row > ctx.max.height:
                break
            col = 0
            for cell in line:
                if col >= ctx.max.width:
                    break
                if not self.softwrap and col + cell.width >= ctx.max.width:
                    surface.write_cell(col, row, Cell(_ELLIPSIS, cell.style))
                    break
                surface.write_cell(col, row, cell)
                col += cell.width
        return surface