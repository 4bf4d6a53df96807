"""A clickable button widget."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from termweave.events import (
    BatchCmd,
    ConsumeEventCmd,
    EventType,
    FocusIn,
    FocusOut,
    Key,
    Keys,
    Mouse,
    MouseButton,
    MouseEnter,
    MouseLeave,
    RedrawCmd,
    SetMouseShapeCmd,
    consume_and_redraw,
)
from termweave.framework import DrawContext, EventPhase, Surface, Widget
from termweave.style import Attribute, Style
from termweave.widgets.center import Center
from termweave.widgets.text import Text


@dataclass(frozen=True)
class StyleSet:
    """Styles for each state a button can be in."""

    default: Style = field(default_factory=lambda: Style(attribute=Attribute.REVERSE))
    mouse_down: Style = field(
        default_factory=lambda: Style(foreground=4, attribute=Attribute.REVERSE)
    )
    hover: Style = field(
        default_factory=lambda: Style(foreground=3, attribute=Attribute.REVERSE)
    )
    focus: Style = field(
        default_factory=lambda: Style(foreground=5, attribute=Attribute.REVERSE)
    )


@dataclass(eq=False)
class Button(Widget):
    """A centered label that calls on_click when clicked or activated."""

    label: str = ""
    on_click: Optional[Callable[[], Any]] = None
    style: StyleSet = field(default_factory=StyleSet)
    mouse_down: bool = field(default=False, init=False)
    hover: bool = field(default=False, init=False)
    focused: bool = field(default=False, init=False)

    def _click(self) -> Any:
        if self.on_click is None:
            return None
        return self.on_click()

    def handle_event(self, event: Any, phase: EventPhase) -> Any:
        if isinstance(event, Key):
            if event.event_type == EventType.RELEASE:
                return None
            if event.matches(Keys.ENTER):
                return self._click()
        elif isinstance(event, Mouse):
            self.hover = True
            if self.mouse_down and event.event_type == EventType.RELEASE:
                self.mouse_down = False
                return self._click()
            if event.event_type == EventType.PRESS and event.button == MouseButton.LEFT:
                self.mouse_down = True
                return consume_and_redraw()
        elif isinstance(event, MouseEnter):
            self.hover = True
            return BatchCmd(
                (SetMouseShapeCmd("pointer"), RedrawCmd(), ConsumeEventCmd())
            )
        elif isinstance(event, MouseLeave):
            self.hover = False
            self.mouse_down = False
            return BatchCmd(
                (SetMouseShapeCmd("default"), RedrawCmd(), ConsumeEventCmd())
            )
        elif isinstance(event, FocusIn):
            self.focused = True
            return consume_and_redraw()
        elif isinstance(event, FocusOut):
            self.focused = False
            self.mouse_down = False
            return consume_and_redraw()
        return None

    def _current_style(self) -> Style:
        if self.mouse_down:
            return self.style.mouse_down
        if self.hover:
            return self.style.hover
        if self.focused:
            return self.style.focus
        return self.style.default

    def draw(self, ctx: DrawContext) -> Surface:
        if ctx.max.has_unbounded_height() or ctx.max.has_unbounded_width():
            raise ValueError("Button must have bounded constraints")
        style = self._current_style()
        surface = Center(Text(self.label, style=style)).draw(ctx)
        # The center widget only does layout; the surface belongs to the button.
        surface.widget = self
        surface.fill_style(style)
        return surface