"""Surfaces, draw constraints and event dispatch for widget trees."""

from __future__ import annotations

import abc
import contextlib
import dataclasses
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from termweave.events import (
    ConsumeEventCmd,
    CopyToClipboardCmd,
    DebugCmd,
    FocusIn,
    FocusOut,
    FocusWidgetCmd,
    Mouse,
    MouseEnter,
    MouseLeave,
    QuitCmd,
    RedrawCmd,
    RefreshCmd,
    SendNotificationCmd,
    SetMouseShapeCmd,
    SetTitleCmd,
)
from termweave.style import Cell, Character, Style
from termweave.style import characters as measure_characters

_log = logging.getLogger(__name__)

# A dimension of this size has no limit.
UNBOUNDED = 0xFFFF


@dataclass(frozen=True)
class Size:
    """A width and height in cells."""

    width: int = 0
    height: int = 0

    def has_unbounded_width(self) -> bool:
        return self.width == UNBOUNDED

    def has_unbounded_height(self) -> bool:
        return self.height == UNBOUNDED


@dataclass(frozen=True)
class DrawContext:
    """Constraints a widget draws within, and how to measure text."""

    min: Size = field(default_factory=Size)
    max: Size = field(default_factory=Size)
    characters: Callable[[str], List[Character]] = field(
        default_factory=lambda: measure_characters
    )

    def with_constraints(self, min_size: Size, max_size: Size) -> "DrawContext":
        return dataclasses.replace(self, min=min_size, max=max_size)

    def with_min(self, min_size: Size) -> "DrawContext":
        return self.with_constraints(min_size, self.max)

    def with_max(self, max_size: Size) -> "DrawContext":
        return self.with_constraints(self.min, max_size)


class EventPhase(enum.IntEnum):
    """Phase of event delivery."""

    CAPTURE = 0
    TARGET = 1
    BUBBLE = 2


class Widget(abc.ABC):
    """Something that draws itself onto a surface.

    A widget may also define ``handle_event(event, phase)`` and
    ``capture_event(event)``, each returning a command or None.
    """

    @abc.abstractmethod
    def draw(self, ctx: DrawContext) -> "Surface":
        """Lay out and draw within the constraints of ctx."""


@dataclass
class CursorState:
    """Where and how to show the cursor; shape is a cursor style number."""

    row: int = 0
    col: int = 0
    shape: int = 0


@dataclass(frozen=True)
class RelativePoint:
    """A position relative to a parent surface."""

    row: int = 0
    col: int = 0


@dataclass
class Surface:
    """A drawn widget: its cells and the surfaces of its children."""

    size: Size
    widget: Any
    cursor: Optional[CursorState] = None
    buffer: List[Cell] = field(default_factory=list)
    children: List["SubSurface"] = field(default_factory=list)

    def add_child(self, col: int, row: int, child: "Surface") -> None:
        self.children.append(SubSurface(RelativePoint(row=row, col=col), child))

    def _index(self, col: int, row: int) -> Optional[int]:
        if 0 <= col < self.size.width and 0 <= row < self.size.height:
            return row * self.size.width + col
        return None

    def write_cell(self, col: int, row: int, cell: Cell) -> None:
        """Write a cell; positions outside the surface are ignored."""
        index = self._index(col, row)
        if index is not None:
            self.buffer[index] = cell

    def cell_at(self, col: int, row: int) -> Cell:
        index = self._index(col, row)
        if index is None:
            raise IndexError(
                f"cell ({col}, {row}) outside "
                f"{self.size.width}x{self.size.height} surface"
            )
        return self.buffer[index]

    def fill_style(self, style: Style) -> None:
        self.buffer = [dataclasses.replace(c, style=style) for c in self.buffer]

    def fill_character(self, character: Character) -> None:
        self.buffer = [
            dataclasses.replace(c, character=character) for c in self.buffer
        ]

    def fill(self, cell: Cell) -> None:
        self.buffer = [cell] * len(self.buffer)


def new_surface(width: int, height: int, widget: Any) -> Surface:
    """A surface with a blank buffer large enough for its size."""
    return Surface(
        size=Size(width, height), widget=widget, buffer=[Cell()] * (width * height)
    )


@dataclass
class SubSurface:
    """A child surface placed at an origin within its parent."""

    origin: RelativePoint
    surface: Surface
    z_index: int = 0

    def contains_point(self, col: int, row: int) -> bool:
        return (
            self.origin.col <= col < self.origin.col + self.surface.size.width
            and self.origin.row <= row < self.origin.row + self.surface.size.height
        )


Hit = Tuple[int, int, Any]


def hit_test(surface: Surface, col: int, row: int) -> List[Hit]:
    """Widgets under a point, outermost first, with local coordinates."""
    hits: List[Hit] = [(col, row, surface.widget)]
    for sub in surface.children:
        if sub.contains_point(col, row):
            hits.extend(
                hit_test(sub.surface, col - sub.origin.col, row - sub.origin.row)
            )
    return hits


def _same_hit(a: Hit, b: Hit) -> bool:
    return a[0] == b[0] and a[1] == b[1] and a[2] is b[2]


def try_handle_event(widget: Any, event: Any, phase: EventPhase) -> Any:
    """Deliver an event to a widget that handles events; else return None."""
    handler = getattr(widget, "handle_event", None)
    if handler is None:
        return None
    return handler(event, phase)


class Dispatcher:
    """Carries out commands returned by widgets and records their effects."""

    def __init__(self, root: Any) -> None:
        self.redraw = False
        self.refresh = False
        self.should_quit = False
        self.consume_event = False
        self.debug = False
        self.mouse_shape = "default"
        self.title = ""
        self.clipboard = ""
        self.notifications: List[Tuple[str, str]] = []
        self.focus = FocusHandler(root)

    def handle_command(self, cmd: Any) -> None:
        if cmd is None:
            return
        if isinstance(cmd, (list, tuple)):
            for sub in cmd:
                self.handle_command(sub)
        elif isinstance(cmd, RedrawCmd):
            self.redraw = True
        elif isinstance(cmd, RefreshCmd):
            self.refresh = True
        elif isinstance(cmd, QuitCmd):
            self.should_quit = True
        elif isinstance(cmd, ConsumeEventCmd):
            self.consume_event = True
        elif isinstance(cmd, FocusWidgetCmd):
            try:
                self.focus.focus_widget(self, cmd.widget)
            except Exception:
                _log.exception("focus_widget error")
        elif isinstance(cmd, SetMouseShapeCmd):
            self.mouse_shape = cmd.shape
        elif isinstance(cmd, SetTitleCmd):
            self.title = cmd.title
        elif isinstance(cmd, CopyToClipboardCmd):
            self.clipboard = cmd.text
        elif isinstance(cmd, SendNotificationCmd):
            self.notifications.append((cmd.title, cmd.body))
        elif isinstance(cmd, DebugCmd):
            self.debug = True
            self.redraw = True

    def _consumed(self) -> bool:
        if self.consume_event:
            self.consume_event = False
            return True
        return False


def _deliver(dispatcher: Dispatcher, widgets: List[Any], event: Any) -> None:
    """Capture down the path, target the last widget, bubble back up."""
    dispatcher.consume_event = False
    for widget in widgets:
        capture = getattr(widget, "capture_event", None)
        if capture is None:
            continue
        dispatcher.handle_command(capture(event))
        if dispatcher._consumed():
            return
    dispatcher.handle_command(try_handle_event(widgets[-1], event, EventPhase.TARGET))
    if dispatcher._consumed():
        return
    for widget in reversed(widgets[:-1]):
        dispatcher.handle_command(try_handle_event(widget, event, EventPhase.BUBBLE))
        if dispatcher._consumed():
            return


class FocusHandler:
    """Tracks the focused widget and the path to it from the root."""

    def __init__(self, root: Any) -> None:
        self.root = root
        self.focused = root
        self.path: List[Any] = [root]

    def handle_event(self, dispatcher: Dispatcher, event: Any) -> None:
        """Deliver event along the focus path."""
        dispatcher.consume_event = False
        for widget in self.path:
            capture = getattr(widget, "capture_event", None)
            if capture is None:
                continue
            dispatcher.handle_command(capture(event))
            if dispatcher._consumed():
                return
        dispatcher.handle_command(
            try_handle_event(self.focused, event, EventPhase.TARGET)
        )
        if dispatcher._consumed():
            return
        # The focused widget is last in the path and does not get a bubble.
        for widget in reversed(self.path[:-1]):
            dispatcher.handle_command(
                try_handle_event(widget, event, EventPhase.BUBBLE)
            )
            if dispatcher._consumed():
                return

    def update_path(self, dispatcher: Dispatcher, root: Surface) -> None:
        """Rebuild the path from root to the focused widget."""
        self.path = []
        if not self._child_has_focus(root):
            with contextlib.suppress(Exception):
                self.focus_widget(dispatcher, self.root)
        if self.root is not root.widget or not self.path:
            self.path.append(self.root)
        self.path.reverse()

    def _child_has_focus(self, surface: Surface) -> bool:
        if surface.widget is self.focused:
            self.path.append(surface.widget)
            return True
        for sub in surface.children:
            if self._child_has_focus(sub.surface):
                self.path.append(surface.widget)
                return True
        return False

    def focus_widget(self, dispatcher: Dispatcher, widget: Any) -> None:
        """Move focus, sending FocusOut and FocusIn."""
        if self.focused is widget:
            return
        dispatcher.handle_command(
            try_handle_event(self.focused, FocusOut(), EventPhase.TARGET)
        )
        # Set before FocusIn so a refocus from the handler takes effect.
        self.focused = widget
        dispatcher.handle_command(
            try_handle_event(widget, FocusIn(), EventPhase.TARGET)
        )


class MouseHandler:
    """Hit tests mouse events and delivers enter, leave and mouse events."""

    def __init__(self, last_frame: Optional[Surface] = None) -> None:
        self.last_frame = last_frame
        self.last_hits: List[Hit] = []
        self.mouse: Optional[Mouse] = None

    def handle_event(self, dispatcher: Dispatcher, mouse: Mouse) -> None:
        self.mouse = mouse
        self.update(dispatcher, self.last_frame)
        if not self.last_hits:
            return
        _deliver(dispatcher, [hit[2] for hit in self.last_hits], mouse)

    def update(self, dispatcher: Dispatcher, surface: Optional[Surface]) -> None:
        """Hit test surface and send leave and enter events for changes."""
        if self.mouse is None:
            return
        hits: List[Hit] = []
        if surface is not None:
            whole = SubSurface(RelativePoint(), surface)
            if whole.contains_point(self.mouse.col, self.mouse.row):
                hits = hit_test(surface, self.mouse.col, self.mouse.row)

        for old in self.last_hits:
            if not any(_same_hit(old, new) for new in hits):
                dispatcher.handle_command(
                    try_handle_event(old[2], MouseLeave(), EventPhase.TARGET)
                )
        for new in hits:
            if not any(_same_hit(new, old) for old in self.last_hits):
                dispatcher.handle_command(
                    try_handle_event(new[2], MouseEnter(), EventPhase.TARGET)
                )
        self.last_hits = hits

    def mouse_exit(self, dispatcher: Dispatcher) -> None:
        """Send MouseLeave to every widget last under the mouse."""
        for hit in self.last_hits:
            dispatcher.handle_command(
                try_handle_event(hit[2], MouseLeave(), EventPhase.TARGET)
            )
        self.last_hits = []