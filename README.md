# termweave

Building blocks for terminal user interfaces.

## What is in the package

- **Styling** (`termweave.style`): `Style`, `Attribute`, `UnderlineStyle`,
  `Character`, `Cell` and `Segment`. `characters()` splits text into
  grapheme clusters and measures how wide each one is on screen.
  `string_width()` adds those widths up.
- **Escape sequences** (`termweave.sequences`): DEC private-mode set, reset
  and query (`decset`, `decrst`, `decrqm`), cursor positioning (`cup`),
  OSC 8 hyperlinks (`osc8`) and XTGETTCAP queries (`xtgettcap`, `hex_encode`).
  The module also holds constants for many other sequences and modes.
  `ColorSequences` builds extended foreground and background colour
  sequences (`fg_index`, `fg_rgb`, `bg_index`, `bg_rgb`). With
  `legacy=True` it uses `;` separators in place of `:`.
- **Terminal quirks** (`termweave.quirks`): `apply_quirks(term_id, caps,
  environ)` takes a `Capabilities` record and returns a `Quirks` result.
  The result holds an adjusted copy of the capabilities, the
  `ColorSequences` to use, an optional `GraphicsProtocol` override and an
  `xtwinops` flag. The capabilities you pass in are not changed.
- **Screen model** (`termweave.screen`): `Screen`, a resizable grid of cells.
  Writes that fall outside the grid are ignored.
- **Palette quantisation** (`termweave.octree`): `paletted(image, colors)`
  uses an octree quantiser to reduce a Pillow image to a `"P"` mode image
  with at most `colors` palette entries. If the image has fully transparent
  pixels, the last palette entry is kept for them and recorded in
  `info["transparency"]`.
- **Events and commands** (`termweave.events`): the input events `Key`
  (with `matches()`), `Mouse`, `FocusIn` and `FocusOut`, and the framework
  events `Init`, `MouseEnter` and `MouseLeave`. It also defines the commands
  widgets return, such as `RedrawCmd`, `ConsumeEventCmd`, `BatchCmd`,
  `FocusWidgetCmd` and `SetTitleCmd`, and `consume_and_redraw()`.
- **Widget framework** (`termweave.framework`): `Size`, `DrawContext`,
  `Surface`, `SubSurface`, `new_surface()` and `hit_test()`.
  `Dispatcher` carries out commands. `FocusHandler` and `MouseHandler`
  deliver events in capture, target and bubble phases (`EventPhase`).
- **Widgets** (`termweave.widgets`): `Text`, `RichText`, `Center`,
  `FlexLayout` with `FlexItem`, `Spacer` and `new_spacer()`, `DynamicList`,
  `TextField`, and `Button` with its `StyleSet`.

## Installation

```
pip install termweave
```

## Example

```python
from termweave.framework import DrawContext, Size
from termweave.style import characters
from termweave.widgets.flex import FlexDirection, FlexItem, FlexLayout
from termweave.widgets.text import Text

row = FlexLayout(
    children=[
        FlexItem(Text("abc"), 0),
        FlexItem(Text("def"), 1),
        FlexItem(Text("jkl\nmno"), 1),
    ],
    direction=FlexDirection.HORIZONTAL,
)
ctx = DrawContext(min=Size(0, 0), max=Size(16, 16), characters=characters)
surface = row.draw(ctx)
print(surface.size)
```

Every widget has a `draw(ctx)` method that returns a `Surface`. A surface
holds a buffer of cells and a list of child surfaces. Widgets that react to
input implement `handle_event(event, phase)`. They may also implement
`capture_event(event)`, which sees an event before its target does. Both
methods return a command or `None`.

## Environment variables

`apply_quirks()` reads these variables from `environ`, or from
`os.environ` when `environ` is not given:

- `ASCIINEMA_REC`: sets the graphics protocol to half blocks
- `VAXIS_FORCE_LEGACY_SGR`: uses legacy colour sequences
- `VAXIS_FORCE_WCWIDTH`: turns off Unicode core and explicit width
- `VAXIS_FORCE_UNICODE`: turns on Unicode core
- `VAXIS_FORCE_NOZWJ`: turns on no-ZWJ and turns off explicit width
- `VAXIS_DISABLE_NOZWJ`: turns off no-ZWJ
- `VAXIS_FORCE_XTWINOPS`: sets `xtwinops`

## What the package does not do

termweave does not drive a terminal. It does not open or configure a TTY,
query the terminal for its capabilities, read or parse input, or write
rendered frames to the screen. No application loop runs a widget tree.
`Dispatcher` only records what commands ask for, in its `title`,
`clipboard`, `mouse_shape` and `notifications` attributes and its redraw
and quit flags. A program that displays and runs widgets has to supply
those parts itself.

## Running the tests

```
pip install termweave[test]
pytest
```