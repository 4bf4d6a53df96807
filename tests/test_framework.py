import pytest

from termweave.events import (
    ConsumeEventCmd,
    DebugCmd,
    FocusWidgetCmd,
    Key,
    Mouse,
    QuitCmd,
    RefreshCmd,
    SendNotificationCmd,
    SetMouseShapeCmd,
    SetTitleCmd,
    consume_and_redraw,
)
from termweave.framework import (
    UNBOUNDED,
    Dispatcher,
    DrawContext,
    EventPhase,
    MouseHandler,
    RelativePoint,
    Size,
    SubSurface,
    Widget,
    hit_test,
    new_surface,
    try_handle_event,
)
from termweave.style import Cell, Character, Style, characters


class Plain(Widget):
    def draw(self, ctx):
        return new_surface(1, 1, self)


class Recorder(Widget):
    def __init__(self, name, log, reply=None, capture_reply=None):
        self.name = name
        self.log = log
        self.reply = reply
        self.capture_reply = capture_reply

    def draw(self, ctx):
        return new_surface(1, 1, self)

    def handle_event(self, event, phase):
        self.log.append((self.name, type(event).__name__, phase))
        return self.reply

    def capture_event(self, event):
        self.log.append((self.name, type(event).__name__, "capture"))
        return self.capture_reply


def make_tree(log, **root_kwargs):
    root = Recorder("root", log, **root_kwargs)
    child = Recorder("child", log)
    frame = new_surface(10, 10, root)
    frame.add_child(2, 2, new_surface(3, 3, child))
    return root, child, frame


def test_size_unbounded():
    assert Size(UNBOUNDED, 3).has_unbounded_width()
    assert not Size(UNBOUNDED, 3).has_unbounded_height()
    assert Size(4, UNBOUNDED).has_unbounded_height()


def test_draw_context_constraints():
    ctx = DrawContext(min=Size(1, 1), max=Size(8, 8))
    assert ctx.characters is characters
    narrowed = ctx.with_min(Size(2, 3))
    assert narrowed.min == Size(2, 3)
    assert narrowed.max == Size(8, 8)
    widened = ctx.with_max(Size(20, 20))
    assert widened.min == Size(1, 1)
    assert widened.max == Size(20, 20)
    both = ctx.with_constraints(Size(), Size(5, 5))
    assert (both.min, both.max) == (Size(), Size(5, 5))


def test_new_surface_buffer_matches_size():
    widget = Plain()
    surface = new_surface(3, 2, widget)
    assert len(surface.buffer) == 3 * 2
    assert all(cell == Cell() for cell in surface.buffer)
    assert surface.widget is widget


def test_write_and_read_cell():
    surface = new_surface(3, 2, Plain())
    cell = Cell(Character("x", 1))
    surface.write_cell(2, 1, cell)
    assert surface.cell_at(2, 1) == cell
    surface.write_cell(3, 0, cell)
    surface.write_cell(0, 2, cell)
    assert surface.buffer.count(cell) == 1
    with pytest.raises(IndexError):
        surface.cell_at(3, 0)


def test_fill_operations():
    surface = new_surface(2, 2, Plain())
    style = Style(hyperlink="https://example.com")
    surface.fill_style(style)
    assert all(cell.style == style for cell in surface.buffer)
    ch = Character("z", 1)
    surface.fill_character(ch)
    assert all(cell == Cell(ch, style) for cell in surface.buffer)
    blank = Cell()
    surface.fill(blank)
    assert surface.buffer == [blank] * 4


def test_contains_point():
    sub = SubSurface(RelativePoint(row=2, col=2), new_surface(3, 3, Plain()))
    assert sub.contains_point(2, 2)
    assert sub.contains_point(4, 4)
    assert not sub.contains_point(5, 2)
    assert not sub.contains_point(1, 3)


def test_hit_test_reports_local_coordinates():
    root, child, frame = make_tree([])
    assert hit_test(frame, 3, 3) == [(3, 3, root), (1, 1, child)]
    assert hit_test(frame, 8, 8) == [(8, 8, root)]


def test_try_handle_event():
    log = []
    assert try_handle_event(Plain(), Key(ord("a")), EventPhase.TARGET) is None
    widget = Recorder("w", log, reply=QuitCmd())
    assert try_handle_event(widget, Key(ord("a")), EventPhase.BUBBLE) == QuitCmd()
    assert log == [("w", "Key", EventPhase.BUBBLE)]


def test_dispatcher_commands():
    d = Dispatcher(Plain())
    d.handle_command(consume_and_redraw())
    assert d.redraw and d.consume_event
    d.handle_command([QuitCmd(), RefreshCmd()])
    assert d.should_quit and d.refresh
    d.handle_command(SetTitleCmd("hello"))
    d.handle_command(SetMouseShapeCmd("pointer"))
    d.handle_command(SendNotificationCmd("t", "b"))
    assert d.title == "hello"
    assert d.mouse_shape == "pointer"
    assert d.notifications == [("t", "b")]
    d.handle_command(DebugCmd())
    assert d.debug


def test_focus_widget_sends_focus_events():
    log = []
    root, child, _ = make_tree(log)
    d = Dispatcher(root)
    d.handle_command(FocusWidgetCmd(child))
    assert d.focus.focused is child
    assert log == [
        ("root", "FocusOut", EventPhase.TARGET),
        ("child", "FocusIn", EventPhase.TARGET),
    ]
    d.focus.focus_widget(d, child)
    assert len(log) == 2


def test_event_phases_along_focus_path():
    log = []
    root, child, frame = make_tree(log)
    d = Dispatcher(root)
    d.focus.focus_widget(d, child)
    d.focus.update_path(d, frame)
    assert d.focus.path == [root, child]
    log.clear()
    d.focus.handle_event(d, Key(ord("q")))
    assert log == [
        ("root", "Key", "capture"),
        ("child", "Key", "capture"),
        ("child", "Key", EventPhase.TARGET),
        ("root", "Key", EventPhase.BUBBLE),
    ]


def test_capture_can_consume_event():
    log = []
    root, child, frame = make_tree(log, capture_reply=ConsumeEventCmd())
    d = Dispatcher(root)
    d.focus.focus_widget(d, child)
    d.focus.update_path(d, frame)
    log.clear()
    d.focus.handle_event(d, Key(ord("q")))
    assert log == [("root", "Key", "capture")]
    assert not d.consume_event


def test_update_path_refocuses_root_when_focus_lost():
    log = []
    root = Recorder("root", log)
    stray = Recorder("stray", log)
    d = Dispatcher(root)
    d.focus.focus_widget(d, stray)
    d.focus.update_path(d, new_surface(4, 4, root))
    assert d.focus.focused is root
    assert d.focus.path == [root]


def test_mouse_handler_enter_and_dispatch():
    log = []
    root, child, frame = make_tree(log)
    d = Dispatcher(root)
    handler = MouseHandler(last_frame=frame)
    handler.handle_event(d, Mouse(col=3, row=3))
    assert log == [
        ("root", "MouseEnter", EventPhase.TARGET),
        ("child", "MouseEnter", EventPhase.TARGET),
        ("root", "Mouse", "capture"),
        ("child", "Mouse", "capture"),
        ("child", "Mouse", EventPhase.TARGET),
        ("root", "Mouse", EventPhase.BUBBLE),
    ]
    assert [hit[2] for hit in handler.last_hits] == [root, child]


def test_mouse_leaving_child_and_exit():
    log = []
    root, child, frame = make_tree(log)
    d = Dispatcher(root)
    handler = MouseHandler(last_frame=frame)
    handler.handle_event(d, Mouse(col=3, row=3))
    log.clear()
    handler.mouse = Mouse(col=8, row=8)
    handler.update(d, frame)
    assert ("child", "MouseLeave", EventPhase.TARGET) in log
    assert [hit[2] for hit in handler.last_hits] == [root]
    log.clear()
    handler.mouse_exit(d)
    assert log == [("root", "MouseLeave", EventPhase.TARGET)]
    assert handler.last_hits == []


def test_mouse_update_without_mouse_does_nothing():
    log = []
    _, _, frame = make_tree(log)
    d = Dispatcher(frame.widget)
    handler = MouseHandler()
    handler.update(d, frame)
    assert handler.last_hits == []
    assert log == []