"""Cell styling and grapheme measurement."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Tuple, Union

import regex
from wcwidth import wcwidth

# A color is either unset (terminal default), a palette index or an RGB triple.
Color = Union[int, Tuple[int, int, int], None]

_GRAPHEME = regex.compile(r"\X")
_EMOJI_PRESENTATION = "\ufe0f"


class Attribute(enum.IntFlag):
    """Bitmask of boolean text attributes."""

    NONE = 0
    BOLD = 1 << 1
    DIM = 1 << 2
    ITALIC = 1 << 3
    BLINK = 1 << 4
    REVERSE = 1 << 5
    INVISIBLE = 1 << 6
    STRIKETHROUGH = 1 << 7


class UnderlineStyle(enum.IntEnum):
    """Kind of underline drawn under a cell."""

    OFF = 0
    SINGLE = 1
    DOUBLE = 2
    CURLY = 3
    DOTTED = 4
    DASHED = 5


@dataclass(frozen=True)
class Style:
    """Everything needed to style a cell or a segment."""

    hyperlink: str = ""
    hyperlink_params: str = ""
    foreground: Color = None
    background: Color = None
    underline_color: Color = None
    underline_style: UnderlineStyle = UnderlineStyle.OFF
    attribute: Attribute = Attribute.NONE


@dataclass(frozen=True)
class Segment:
    """A run of text sharing one style."""

    text: str
    style: Style = field(default_factory=Style)


@dataclass(frozen=True)
class Character:
    """A single grapheme cluster and its display width."""

    grapheme: str = ""
    width: int = 0


@dataclass(frozen=True)
class Cell:
    """One screen cell: a character and its style."""

    character: Character = field(default_factory=Character)
    style: Style = field(default_factory=Style)

    @property
    def grapheme(self) -> str:
        return self.character.grapheme

    @property
    def width(self) -> int:
        return self.character.width


@lru_cache(maxsize=4096)
def _grapheme_width(grapheme: str) -> int:
    if not grapheme:
        return 0
    width = wcwidth(grapheme[0])
    if width < 0:
        return 0
    if width == 1 and _EMOJI_PRESENTATION in grapheme:
        return 2
    return width


def characters(text: str) -> List[Character]:
    """Split text into grapheme clusters, each measured."""
    return [Character(g, _grapheme_width(g)) for g in _GRAPHEME.findall(text)]


def string_width(text: str) -> int:
    """Display width of text, summed over its grapheme clusters."""
    return sum(_grapheme_width(g) for g in _GRAPHEME.findall(text))