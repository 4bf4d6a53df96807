import pytest

from termweave.events import Init
from termweave.framework import DrawContext, EventPhase, Size
from termweave.widgets.flex import (
    FlexDirection,
    FlexItem,
    FlexLayout,
    Spacer,
    new_spacer,
)
from termweave.widgets.text import Text


def _children():
    return [
        FlexItem(Text("abc"), 0),
        FlexItem(Text("def"), 1),
        FlexItem(Text("ghi"), 1),
        FlexItem(Text("jkl\nmno"), 1),
    ]


def test_flex_row():
    layout = FlexLayout(children=_children(), direction=FlexDirection.HORIZONTAL)
    surface = layout.draw(DrawContext(max=Size(16, 16)))

    assert surface.size.width == 16
    assert surface.size.height == 2
    assert len(surface.children) == 4

    col = 0
    for child, want in zip(surface.children, [3, 3 + 1, 3 + 1, 3 + 1 + 1]):
        assert child.surface.size.width == want
        assert child.origin.col == col
        col += want


def test_flex_column():
    layout = FlexLayout(children=_children(), direction=FlexDirection.VERTICAL)
    surface = layout.draw(DrawContext(max=Size(16, 16)))

    assert surface.size.width == 3
    assert surface.size.height == 16
    assert len(surface.children) == 4

    row = 0
    for child, want in zip(surface.children, [1, 1 + 3, 1 + 3, 2 + 3 + 2]):
        assert child.surface.size.height == want
        assert child.origin.row == row
        row += want


def test_flex_layout_ignores_events():
    layout = FlexLayout(children=_children())
    assert layout.handle_event(Init(), EventPhase.TARGET) is None


def test_spacer_fills_remaining_space():
    text = Text("ab")
    layout = FlexLayout(children=[FlexItem(text), new_spacer(1)])
    surface = layout.draw(DrawContext(max=Size(10, 4)))
    assert surface.size.width == 10
    spacer = surface.children[1]
    assert isinstance(spacer.surface.widget, Spacer)
    assert spacer.origin.col == surface.children[0].surface.size.width
    assert (
        spacer.origin.col + spacer.surface.size.width == surface.size.width
    )


def test_new_spacer_keeps_flex():
    item = new_spacer(2)
    assert item.flex == 2
    assert isinstance(item.widget, Spacer)


@pytest.mark.parametrize("flex", [0, -1])
def test_new_spacer_rejects_small_flex(flex):
    with pytest.raises(ValueError, match="at least 1"):
        new_spacer(flex)


def test_spacer_draws_minimum_size():
    spacer = Spacer()
    surface = spacer.draw(DrawContext(min=Size(2, 3), max=Size(16, 16)))
    assert surface.size == Size(2, 3)
    assert surface.widget is spacer
    assert spacer.handle_event(Init(), EventPhase.TARGET) is None


def test_flex_item_delegates_draw():
    text = Text("abc")
    surface = FlexItem(text, 1).draw(DrawContext(max=Size(16, 16)))
    assert surface.widget is text
    assert surface.size == text.draw(DrawContext(max=Size(16, 16))).size