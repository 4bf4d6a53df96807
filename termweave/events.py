"""Input events, framework events and commands exchanged with widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union


class Keys(enum.IntEnum):
    """Codes of keys that have no printable text of their own."""

    TAB = 0x09
    ENTER = 0x0D
    ESCAPE = 0x1B
    SPACE = 0x20
    BACKSPACE = 0x7F
    INSERT = 57348
    DELETE = 57349
    LEFT = 57350
    RIGHT = 57351
    UP = 57352
    DOWN = 57353
    PAGE_UP = 57354
    PAGE_DOWN = 57355
    HOME = 57356
    END = 57357
    F1 = 57364
    F2 = 57365
    F3 = 57366
    F4 = 57367
    F5 = 57368
    F6 = 57369
    F7 = 57370
    F8 = 57371
    F9 = 57372
    F10 = 57373
    F11 = 57374
    F12 = 57375


class Modifiers(enum.IntFlag):
    """Modifier keys held during a key or mouse event."""

    NONE = 0
    SHIFT = 1
    ALT = 2
    CTRL = 4
    SUPER = 8
    HYPER = 16
    META = 32
    CAPS_LOCK = 64
    NUM_LOCK = 128


_LOCKS = Modifiers.CAPS_LOCK | Modifiers.NUM_LOCK


class EventType(enum.IntEnum):
    """What happened to a key or mouse button."""

    PRESS = 0
    REPEAT = 1
    RELEASE = 2
    MOTION = 3
    PASTE = 4


class MouseButton(enum.IntEnum):
    """Mouse buttons and wheel directions."""

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2
    NONE = 3
    WHEEL_UP = 64
    WHEEL_DOWN = 65
    WHEEL_RIGHT = 66
    WHEEL_LEFT = 67
    BUTTON_8 = 128
    BUTTON_9 = 129
    BUTTON_10 = 130
    BUTTON_11 = 131


def _code(key: Union[str, int]) -> int:
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"expected a single character, got {key!r}")
        return ord(key)
    return int(key)


@dataclass(frozen=True)
class Key:
    """A key press, repeat or release."""

    keycode: int
    text: str = ""
    modifiers: Modifiers = Modifiers.NONE
    event_type: EventType = EventType.PRESS
    shifted_code: int = 0

    def matches(
        self, key: Union[str, int], modifiers: Modifiers = Modifiers.NONE
    ) -> bool:
        """Whether this key is ``key`` held with exactly ``modifiers``.

        Caps lock and num lock are ignored.
        """
        code = _code(key)
        held = Modifiers(self.modifiers) & ~_LOCKS
        wanted = Modifiers(modifiers) & ~_LOCKS
        if self.keycode == code and held == wanted:
            return True
        if self.shifted_code and self.shifted_code == code:
            return held & ~Modifiers.SHIFT == wanted & ~Modifiers.SHIFT
        return False


@dataclass(frozen=True)
class Mouse:
    """A mouse button, wheel or motion event at a cell."""

    col: int
    row: int
    button: MouseButton = MouseButton.NONE
    modifiers: Modifiers = Modifiers.NONE
    event_type: EventType = EventType.PRESS
    x_pixel: int = 0
    y_pixel: int = 0


@dataclass(frozen=True)
class FocusIn:
    """The terminal or a widget gained focus."""


@dataclass(frozen=True)
class FocusOut:
    """The terminal or a widget lost focus."""


@dataclass(frozen=True)
class Init:
    """Sent as the first event to the root widget."""


@dataclass(frozen=True)
class MouseEnter:
    """The mouse moved onto a widget."""


@dataclass(frozen=True)
class MouseLeave:
    """The mouse moved off a widget."""


@dataclass(frozen=True)
class RedrawCmd:
    """Ask the UI to redraw."""


@dataclass(frozen=True)
class RefreshCmd:
    """Ask the UI to flush a complete redraw."""


@dataclass(frozen=True)
class QuitCmd:
    """Ask the application to exit."""


@dataclass(frozen=True)
class ConsumeEventCmd:
    """Stop the propagation of the current event."""


class BatchCmd(tuple):
    """A sequence of commands handled in order."""

    __slots__ = ()


@dataclass(frozen=True)
class FocusWidgetCmd:
    """Move focus to a widget."""

    widget: Any


@dataclass(frozen=True)
class SetMouseShapeCmd:
    """Set the mouse pointer shape, such as "default", "text" or "pointer"."""

    shape: str


@dataclass(frozen=True)
class SetTitleCmd:
    """Set the terminal title."""

    title: str


@dataclass(frozen=True)
class CopyToClipboardCmd:
    """Copy text to the host clipboard."""

    text: str


@dataclass(frozen=True)
class SendNotificationCmd:
    """Send a system notification."""

    title: str
    body: str


@dataclass(frozen=True)
class DebugCmd:
    """Print the surface tree on the next render."""


def consume_and_redraw() -> BatchCmd:
    """A batch that redraws and stops event propagation."""
    return BatchCmd((RedrawCmd(), ConsumeEventCmd()))