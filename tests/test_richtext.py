import pytest

from termweave.framework import DrawContext, Size
from termweave.style import Attribute, Cell, Segment, Style, characters
from termweave.widgets.richtext import (
    RichText,
    first_line_segment,
    hardwrap_lines,
    softwrap_lines,
)


def _cells(text):
    return [Cell(character=char) for char in characters(text)]


def _joined(cells):
    return "".join(cell.grapheme for cell in cells)


def _rows(surface):
    return [
        "".join(
            surface.cell_at(col, row).grapheme for col in range(surface.size.width)
        )
        for row in range(surface.size.height)
    ]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("foo", ["foo"]),
        ("each line\nfits", ["each line", "fits"]),
        ("each line\n\nfits", ["each line", "", "fits"]),
    ],
    ids=["no breaks", "single hard break", "sequential hardbreak"],
)
def test_hardwrap_lines(text, expected):
    assert [_joined(line) for line in hardwrap_lines(_cells(text))] == expected


@pytest.mark.parametrize(
    "text, expected, expected_br",
    [
        ("foo", "foo", True),
        ("foo\n", "foo\n", True),
        ("\nbar", "\n", True),
        ("foo\nbar", "foo\n", True),
        ("foo bar", "foo ", False),
        ("foo \nbar", "foo \n", True),
    ],
    ids=[
        "no breaks",
        "trailing break",
        "leading break",
        "middle break",
        "word break",
        "word break with hard break",
    ],
)
def test_first_line_segment(text, expected, expected_br):
    segment, br = first_line_segment(_cells(text))
    assert _joined(segment) == expected
    assert br == expected_br


@pytest.mark.parametrize(
    "text, width, expected",
    [
        ("foo", 3, ["foo"]),
        ("foo", 4, ["foo"]),
        ("foo bar", 3, ["foo", "bar"]),
        ("foo\nbar", 3, ["foo", "bar"]),
        ("foo         bar", 3, ["foo", "bar"]),
        (" foo\n bar", 4, [" foo", " bar"]),
        ("longwordwithnobreaks", 4, ["long", "word", "with", "nobr", "eaks"]),
        ("Line 1\nLine 2\nLine 3\n", 6, ["Line 1", "Line 2", "Line 3"]),
        ("each line\nfits", 10, ["each line", "fits"]),
    ],
    ids=[
        "no wrap, perfect width",
        "no wrap, large",
        "simple",
        "hard break",
        "lots of space",
        "hard break and leading space",
        "long word",
        "erock: 3 lines",
        "no soft wrap needed",
    ],
)
def test_softwrap_lines(text, width, expected):
    assert [_joined(line) for line in softwrap_lines(_cells(text), width)] == expected


def test_softwrap_zero_width_yields_nothing():
    assert list(softwrap_lines(_cells("foo"), 0)) == []


def test_draw_softwrap_keeps_segment_styles():
    bold = Style(attribute=Attribute.BOLD)
    italic = Style(attribute=Attribute.ITALIC)
    widget = RichText([Segment("foo ", bold), Segment("bar", italic)])
    surface = widget.draw(DrawContext(max=Size(3, 10)))
    assert _rows(surface) == ["foo", "bar"]
    assert surface.cell_at(0, 0).style == bold
    assert surface.cell_at(0, 1).style == italic
    assert surface.widget is widget


def test_draw_truncates_with_styled_ellipsis():
    style = Style(foreground=1)
    widget = RichText([Segment("abcdef", style)], softwrap=False)
    surface = widget.draw(DrawContext(max=Size(4, 4)))
    assert _rows(surface) == ["abc…"]
    assert surface.cell_at(3, 0).style == style


@pytest.mark.parametrize("content", ["_", "_" * 256])
def test_draw_respects_constraints(content):
    ctx = DrawContext(min=Size(4, 4), max=Size(16, 16))
    size = RichText([Segment(content)]).draw(ctx).size
    assert ctx.min.width <= size.width <= ctx.max.width
    assert ctx.min.height <= size.height <= ctx.max.height