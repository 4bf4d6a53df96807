"""A single-line editable text input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

import regex

from termweave.events import BatchCmd, EventType, Key, Keys, Modifiers, consume_and_redraw
from termweave.framework import (
    CursorState,
    DrawContext,
    EventPhase,
    Size,
    Surface,
    Widget,
    new_surface,
)
from termweave.style import Cell, Style

_GRAPHEME = regex.compile(r"\X")
_CURSOR_BLOCK = 2

Callback = Callable[[str], Any]


def _graphemes(text: str) -> List[str]:
    return _GRAPHEME.findall(text)


@dataclass(eq=False)
class TextField(Widget):
    """An editable line of text with an emacs-style set of key bindings."""

    value: str = ""
    style: Style = field(default_factory=Style)
    on_submit: Optional[Callback] = None
    on_change: Optional[Callback] = None
    _cursor: int = field(default=0, init=False, repr=False)

    @property
    def cursor(self) -> int:
        """Cursor position, in grapheme clusters from the start."""
        return self._cursor

    @property
    def _count(self) -> int:
        return len(_graphemes(self.value))

    def handle_event(self, event: Any, phase: EventPhase) -> Any:
        if not isinstance(event, Key) or event.event_type == EventType.RELEASE:
            return None
        if event.text:
            before = self.value
            return self._check_changed(self.insert_string_at_cursor(event.text), before)

        ctrl = Modifiers.CTRL
        if event.matches("a", ctrl) or event.matches(Keys.HOME):
            return self.cursor_to(0)
        if event.matches("e", ctrl) or event.matches(Keys.END):
            return self.cursor_to(self._count)
        if event.matches("f", ctrl) or event.matches(Keys.RIGHT):
            return self.cursor_to(self._cursor + 1)
        if event.matches("b", ctrl) or event.matches(Keys.LEFT):
            if self._cursor == 0:
                return None
            return self.cursor_to(self._cursor - 1)
        if event.matches("d", ctrl) or event.matches(Keys.DELETE):
            before = self.value
            return self._check_changed(self.delete_char_right_of_cursor(), before)
        if event.matches("h", ctrl) or event.matches(Keys.BACKSPACE):
            before = self.value
            return self._check_changed(self.delete_char_left_of_cursor(), before)
        if event.matches("k", ctrl):
            before = self.value
            return self._check_changed(self.delete_cursor_to_end_of_line(), before)
        if event.matches(Keys.ENTER):
            try:
                if self.on_submit is not None:
                    return self.on_submit(self.value)
                return consume_and_redraw()
            finally:
                self.reset()
        return None

    def _check_changed(self, cmd: Any, before: str) -> Any:
        if self.value == before or self.on_change is None:
            return cmd
        return BatchCmd((cmd, self.on_change(self.value)))

    def reset(self) -> None:
        """Clear the value and move the cursor to the start."""
        self.value = ""
        self._cursor = 0

    def insert_string_at_cursor(self, s: str) -> Any:
        clusters = _graphemes(self.value)
        head = "".join(clusters[: self._cursor])
        tail = "".join(clusters[self._cursor:])
        self.value = head + s + tail
        self._cursor += len(_graphemes(s))
        return consume_and_redraw()

    def cursor_to(self, index: int) -> Any:
        """Move the cursor, clamped to the end; None if it did not move."""
        index = min(index, self._count)
        if index == self._cursor:
            return None
        self._cursor = index
        return consume_and_redraw()

    def delete_char_right_of_cursor(self) -> Any:
        clusters = _graphemes(self.value)
        if self._cursor >= len(clusters):
            return None
        del clusters[self._cursor]
        self.value = "".join(clusters)
        return consume_and_redraw()

    def delete_char_left_of_cursor(self) -> Any:
        if self._cursor == 0:
            return None
        clusters = _graphemes(self.value)
        if self._cursor <= len(clusters):
            del clusters[self._cursor - 1]
        self.value = "".join(clusters)
        self._cursor -= 1
        return consume_and_redraw()

    def delete_cursor_to_end_of_line(self) -> Any:
        clusters = _graphemes(self.value)
        if self._cursor >= len(clusters):
            return None
        self.value = "".join(clusters[: self._cursor])
        return consume_and_redraw()

    def draw(self, ctx: DrawContext) -> Surface:
        if ctx.max.width == 0 or ctx.max.height == 0:
            return Surface(size=Size(), widget=self)

        height = max(1, ctx.min.height)
        surface = new_surface(ctx.max.width, height, self)
        surface.cursor = CursorState(row=0, col=0, shape=_CURSOR_BLOCK)

        col = 0
        drawn = 0
        for char in ctx.characters(self.value):
            surface.write_cell(col, 0, Cell(char, self.style))
            col += char.width
            drawn += 1
            if drawn == self._cursor:
                surface.cursor.col = col
        if drawn < self._cursor:
            surface.cursor.col = col
        return surface