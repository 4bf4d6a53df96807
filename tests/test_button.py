import pytest

from termweave.events import (
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
    QuitCmd,
    RedrawCmd,
    SetMouseShapeCmd,
)
from termweave.framework import DrawContext, EventPhase, Size
from termweave.style import Attribute, characters
from termweave.widgets.button import Button, StyleSet

PHASE = EventPhase.TARGET
CTX = DrawContext(min=Size(4, 4), max=Size(16, 16), characters=characters)


def _counting_button():
    clicks = []
    button = Button("ok", on_click=lambda: clicks.append(1) or QuitCmd())
    return button, clicks


@pytest.mark.parametrize("label", ["_", "_" * 256], ids=["button", "button-long"])
def test_button_constraints(label):
    size = Button(label).draw(CTX).size
    assert CTX.min.width <= size.width <= CTX.max.width
    assert CTX.min.height <= size.height <= CTX.max.height


def test_draw_owns_surface_and_uses_default_style():
    button = Button("ok")
    surface = button.draw(CTX)
    assert surface.widget is button
    assert all(cell.style == StyleSet().default for cell in surface.buffer)
    assert StyleSet().default.attribute == Attribute.REVERSE


def test_enter_key_clicks():
    button, clicks = _counting_button()
    assert button.handle_event(Key(Keys.ENTER), PHASE) == QuitCmd()
    assert clicks == [1]


def test_key_release_ignored():
    button, clicks = _counting_button()
    assert button.handle_event(Key(Keys.ENTER, event_type=EventType.RELEASE), PHASE) is None
    assert clicks == []


def test_mouse_press_then_release_clicks():
    button, clicks = _counting_button()
    cmd = button.handle_event(Mouse(0, 0, MouseButton.LEFT, event_type=EventType.PRESS), PHASE)
    assert ConsumeEventCmd() in cmd
    assert clicks == []
    assert button.draw(CTX).buffer[0].style == button.style.mouse_down
    result = button.handle_event(
        Mouse(0, 0, MouseButton.LEFT, event_type=EventType.RELEASE), PHASE
    )
    assert result == QuitCmd()
    assert clicks == [1]


def test_release_without_press_does_not_click():
    button, clicks = _counting_button()
    button.handle_event(Mouse(0, 0, MouseButton.LEFT, event_type=EventType.RELEASE), PHASE)
    assert clicks == []


def test_mouse_enter_and_leave_set_shape_and_hover():
    button = Button("ok")
    cmd = button.handle_event(MouseEnter(), PHASE)
    assert SetMouseShapeCmd("pointer") in cmd
    assert RedrawCmd() in cmd
    assert button.draw(CTX).buffer[0].style == button.style.hover
    cmd = button.handle_event(MouseLeave(), PHASE)
    assert SetMouseShapeCmd("default") in cmd
    assert button.draw(CTX).buffer[0].style == button.style.default


def test_focus_changes_style():
    button = Button("ok")
    button.handle_event(FocusIn(), PHASE)
    assert button.draw(CTX).buffer[0].style == button.style.focus
    button.handle_event(FocusOut(), PHASE)
    assert button.draw(CTX).buffer[0].style == button.style.default


def test_unbounded_constraints_rejected():
    with pytest.raises(ValueError):
        Button("ok").draw(DrawContext(max=Size(0xFFFF, 4)))