"""A scrolling list whose items are produced on demand by a builder."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from termweave.events import Key, Keys, Mouse, MouseButton, RedrawCmd, consume_and_redraw
from termweave.framework import (
    UNBOUNDED,
    DrawContext,
    EventPhase,
    RelativePoint,
    Size,
    SubSurface,
    Surface,
    Widget,
    new_surface,
)
from termweave.style import Cell, Character

# Called with (index, cursor); returns the widget at index, or None past the end.
Builder = Callable[[int, int], Optional[Any]]

_BLANK = Cell(Character(" ", 1))
_CURSOR_GLYPH = Cell(Character("▐", 1))


@dataclass
class _Scroll:
    # Index of the top widget in the viewport.
    top: int = 0
    # Line offset into the top widget.
    offset: int = 0
    # Pending scroll amount in lines; positive scrolls down.
    pending: int = 0
    # Whether the cursored widget must be brought into view.
    wants_cursor: bool = False


@dataclass(eq=False)
class DynamicList(Widget):
    """A list that obtains its items from a builder function."""

    builder: Builder
    draw_cursor: bool = False
    disable_event_handlers: bool = False
    gap: int = 0
    _cursor: int = field(default=0, init=False, repr=False)
    _scroll: _Scroll = field(default_factory=_Scroll, init=False, repr=False)

    @property
    def cursor(self) -> int:
        """Index of the cursored item."""
        return self._cursor

    @property
    def offset(self) -> int:
        """The rendered line offset of the list."""
        return self._scroll.offset

    def set_cursor(self, cursor: int) -> None:
        self._cursor = cursor
        self._ensure_scroll()

    def set_pending_scroll(self, lines: int) -> None:
        """Scroll by lines on the next draw; positive scrolls down."""
        self._scroll.pending = lines

    def capture_event(self, event: Any) -> Any:
        if self.disable_event_handlers:
            return None
        if isinstance(event, Key):
            if event.matches("j") or event.matches(Keys.DOWN):
                if self.next_item() is None:
                    return None
                return consume_and_redraw()
            if event.matches("k") or event.matches(Keys.UP):
                if self.prev_item() is None:
                    return None
                return consume_and_redraw()
        return None

    def handle_event(self, event: Any, phase: EventPhase) -> Any:
        if self.disable_event_handlers:
            return None
        if isinstance(event, Mouse):
            if event.button == MouseButton.WHEEL_DOWN:
                self._scroll.pending += 3
                return consume_and_redraw()
            if event.button == MouseButton.WHEEL_UP:
                self._scroll.pending -= 3
                return consume_and_redraw()
        return None

    def next_item(self) -> Any:
        """Move the cursor down one item; None if there is no next item."""
        if self.builder(self._cursor + 1, self._cursor) is None:
            return None
        self._cursor += 1
        self._ensure_scroll()
        return RedrawCmd()

    def prev_item(self) -> Any:
        """Move the cursor up one item; None if already at the top."""
        if self._cursor == 0:
            return None
        if self.builder(self._cursor - 1, self._cursor) is None:
            return None
        self._cursor -= 1
        self._ensure_scroll()
        return RedrawCmd()

    def _ensure_scroll(self) -> None:
        if self._cursor > self._scroll.top:
            self._scroll.wants_cursor = True
            return
        self._scroll.top = self._cursor
        self._scroll.offset = 0

    @property
    def _col_offset(self) -> int:
        return 2 if self.draw_cursor else 0

    def draw(self, ctx: DrawContext) -> Surface:
        if ctx.max.has_unbounded_height() or ctx.max.has_unbounded_width():
            raise ValueError("DynamicList cannot have unbounded height or width")

        surface = new_surface(ctx.max.width, ctx.max.height, self)
        scroll = self._scroll

        # Accumulated height, starting as the lines above the viewport.
        accumulated = -(scroll.offset + scroll.pending)
        scroll.pending = 0

        # An upward scroll past the first widget stops at the top.
        if accumulated > 0 and scroll.top == 0:
            accumulated = 0
            scroll.offset = 0

        index = scroll.top

        if accumulated > 0:
            self._insert_children(ctx, surface, accumulated)
            if surface.children:
                last = surface.children[-1]
                accumulated = last.origin.row + last.surface.size.height

        col_offset = self._col_offset
        child_width = max(0, ctx.max.width - col_offset)

        while True:
            child = self.builder(index, self._cursor)
            if child is None:
                break
            index += 1
            child_ctx = ctx.with_constraints(Size(), Size(child_width, UNBOUNDED))
            child_surface = child.draw(child_ctx)
            surface.add_child(col_offset, accumulated, child_surface)
            accumulated += child_surface.size.height + self.gap

            # Keep drawing until the cursored widget has been drawn.
            if scroll.wants_cursor and index <= self._cursor:
                continue
            if accumulated >= ctx.max.height:
                break

        if self.draw_cursor:
            self._draw_cursor(ctx, surface)

        if scroll.wants_cursor:
            position = self._cursor - scroll.top
            if 0 <= position < len(surface.children):
                cursored = surface.children[position]
                bottom = cursored.origin.row + cursored.surface.size.height
                if bottom > ctx.max.height:
                    adjust = ctx.max.height - bottom
                    for sub in surface.children:
                        sub.origin = dataclasses.replace(
                            sub.origin, row=sub.origin.row + adjust
                        )
                scroll.wants_cursor = False

        # Record the scroll state from what was actually drawn.
        for position, sub in enumerate(surface.children):
            if sub.origin.row <= 0 < sub.origin.row + sub.surface.size.height:
                scroll.top += position
                scroll.offset = -sub.origin.row

        return surface

    def _draw_cursor(self, ctx: DrawContext, surface: Surface) -> None:
        for row in range(surface.size.height):
            surface.write_cell(0, row, _BLANK)
            surface.write_cell(1, row, _BLANK)

        position = self._cursor - self._scroll.top
        if not 0 <= position < len(surface.children):
            return
        cursored = surface.children[position]
        height = cursored.surface.size.height
        wrapper = new_surface(ctx.max.width, height, cursored.surface.widget)
        for row in range(height):
            wrapper.write_cell(0, row, _CURSOR_GLYPH)
        wrapper.add_child(self._col_offset, 0, cursored.surface)
        surface.children[position] = SubSurface(
            RelativePoint(row=cursored.origin.row, col=0), wrapper
        )

    def _insert_children(
        self, ctx: DrawContext, surface: Surface, accumulated: int
    ) -> None:
        """Insert widgets above the top widget until the gap is filled."""
        scroll = self._scroll
        scroll.top -= 1
        col_offset = self._col_offset
        child_width = max(0, ctx.max.width - col_offset)

        while accumulated > 0:
            child_ctx = ctx.with_max(Size(child_width, UNBOUNDED))
            child = self.builder(scroll.top, self._cursor)
            if child is None:
                break
            child_surface = child.draw(child_ctx)
            accumulated -= child_surface.size.height
            surface.children.insert(
                0,
                SubSurface(RelativePoint(row=accumulated, col=col_offset), child_surface),
            )
            if scroll.top == 0:
                break
            scroll.top -= 1

        scroll.offset = accumulated

        # Reached the first widget while still below row 0: stack from the top.
        if scroll.top == 0 and accumulated > 0:
            scroll.offset = 0
            row = 0
            for sub in surface.children:
                sub.origin = dataclasses.replace(sub.origin, row=row)
                row += sub.surface.size.height