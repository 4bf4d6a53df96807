"""Terminal control sequences."""

from __future__ import annotations

from dataclasses import dataclass

# Queries
DSRCPR = "\x1b[6n"
DSR = "\x1b[?%dn"
PRIMARY_ATTRIBUTES = "\x1b[c"
TERTIARY_ATTRIBUTES = "\x1b[=c"
XTVERSION = "\x1b[>0q"
KITTY_KB_QUERY = "\x1b[?u"
KITTY_KB_ENABLE = "\x1b[>%du"
KITTY_KB_POP = "\x1b[<u"
KITTY_GRAPHICS_QUERY = "\x1b_Gi=1,a=q\x1b\\"
XTSM_SIXEL_GEOMETRY = "\x1b[?2;1;0S"
USER_CURSOR_STYLE = "\x1bP$q q\x1b\\"

# Misc
CLEAR = "\x1b[H\x1b[2J"
CUP = "\x1b[%d;%dH"
OSC4 = "\x1b]4;%d;?\x1b\\"
OSC8 = "\x1b]8;%s;%s\x1b\\"
OSC10 = "\x1b]10;?\x07"
OSC11 = "\x1b]11;?\x07"
OSC52_PUT = "\x1b]52;c;%s\x1b\\"
OSC52_POP = "\x1b]52;c;?\x1b\\"
OSC9_NOTIFY = "\x1b]9;%s\x1b\\"
OSC777_NOTIFY = "\x1b]777;notify;%s;%s\x1b\\"
SET_TITLE = "\x1b]2;%s\x1b\\"
SET_CWD = "\x1b]7;%s\x1b\\"
GET_APP_ID = "\x1b]176;?\x1b\\"
SET_APP_ID = "\x1b]176;%s\x1b\\"
MOUSE_SHAPE = "\x1b]22;%s\x1b\\"
EXPLICIT_WIDTH = "\x1b]66;w=%d;%s\x1b\\"

# SGR
SGR_RESET = "\x1b[m"
BOLD_SET = "\x1b[1m"
DIM_SET = "\x1b[2m"
ITALIC_SET = "\x1b[3m"
UNDERLINE_SET = "\x1b[4m"
BLINK_SET = "\x1b[5m"
REVERSE_SET = "\x1b[7m"
HIDDEN_SET = "\x1b[8m"
STRIKETHROUGH_SET = "\x1b[9m"
BOLD_DIM_RESET = "\x1b[22m"
ITALIC_RESET = "\x1b[23m"
UNDERLINE_RESET = "\x1b[24m"
BLINK_RESET = "\x1b[25m"
REVERSE_RESET = "\x1b[27m"
HIDDEN_RESET = "\x1b[28m"
STRIKETHROUGH_RESET = "\x1b[29m"
FG_RESET = "\x1b[39m"
BG_RESET = "\x1b[49m"
UL_COLOR_RESET = "\x1b[59m"

# SGR parameterized
FG_SET = "\x1b[3%dm"
FG_BRIGHT_SET = "\x1b[9%dm"
BG_SET = "\x1b[4%dm"
BG_BRIGHT_SET = "\x1b[10%dm"
UL_INDEX_SET = "\x1b[58:5:%dm"
UL_RGB_SET = "\x1b[58:2:%d:%d:%dm"
UL_STYLE_SET = "\x1b[4:%dm"

CURSOR_STYLE_SET = "\x1b[%d q"

# Keypad
APPLICATION_MODE = "\x1b="
NUMERIC_MODE = "\x1b>"

# Private modes
CURSOR_KEYS = 1
CURSOR_VISIBILITY = 25
MOUSE_BUTTON_EVENTS = 1002
MOUSE_ALL_EVENTS = 1003
MOUSE_FOCUS_EVENTS = 1004
MOUSE_SGR = 1006
MOUSE_SGR_PIXELS = 1016
ALTERNATE_SCREEN = 1049
BRACKETED_PASTE = 2004
SYNCHRONIZED_UPDATE = 2026
UNICODE_CORE = 2027
COLOR_THEME_UPDATES = 2031
IN_BAND_RESIZE = 2048
SIXEL_SCROLLING = 8452

# DSR requests and responses
COLOR_THEME_REQUEST = 996
COLOR_THEME_RESPONSE = 997

# Pixels first, characters second
TEXT_AREA_SIZE = "\x1b[14t\x1b[18t"

_FG_INDEX_SET = "\x1b[38:5:%dm"
_FG_RGB_SET = "\x1b[38:2:%d:%d:%dm"
_BG_INDEX_SET = "\x1b[48:5:%dm"
_BG_RGB_SET = "\x1b[48:2:%d:%d:%dm"


def decset(mode: int) -> str:
    """Set a DEC private mode."""
    return f"\x1b[?{mode}h"


def decrst(mode: int) -> str:
    """Reset a DEC private mode."""
    return f"\x1b[?{mode}l"


def decrqm(mode: int) -> str:
    """Request the state of a DEC private mode."""
    return f"\x1b[?{mode}$p"


def hex_encode(cap: str) -> str:
    """Upper-case hex encoding of a capability name."""
    return cap.encode("utf-8").hex().upper()


def xtgettcap(cap: str) -> str:
    """Query for a terminfo capability."""
    return "\x1bP+q" + hex_encode(cap) + "\x1b\\"


def cup(row: int, col: int) -> str:
    """Move the cursor to a 1-based row and column."""
    return CUP % (row, col)


def osc8(params: str, url: str) -> str:
    """Start (or, with an empty url, end) a hyperlink."""
    return OSC8 % (params, url)


@dataclass(frozen=True)
class ColorSequences:
    """Extended color SGR sequences; legacy form uses ';' in place of ':'."""

    legacy: bool = False

    def _render(self, template: str, *args: int) -> str:
        if self.legacy:
            template = template.replace(":", ";")
        return template % args

    def fg_index(self, index: int) -> str:
        return self._render(_FG_INDEX_SET, index)

    def fg_rgb(self, r: int, g: int, b: int) -> str:
        return self._render(_FG_RGB_SET, r, g, b)

    def bg_index(self, index: int) -> str:
        return self._render(_BG_INDEX_SET, index)

    def bg_rgb(self, r: int, g: int, b: int) -> str:
        return self._render(_BG_RGB_SET, r, g, b)