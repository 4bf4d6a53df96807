"""Terminal-specific and environment-driven capability adjustments."""

from __future__ import annotations

import dataclasses
import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from termweave.sequences import ColorSequences

_log = logging.getLogger(__name__)


@dataclass
class Capabilities:
    """Features the host terminal was found to support."""

    synchronized_update: bool = False
    unicode_core: bool = False
    no_zwj: bool = False
    rgb: bool = False
    kitty_graphics: bool = False
    kitty_keyboard: bool = False
    styled_underlines: bool = False
    sixels: bool = False
    color_theme_updates: bool = False
    report_size_chars: bool = False
    report_size_pixels: bool = False
    osc4: bool = False
    osc10: bool = False
    osc11: bool = False
    osc176: bool = False
    in_band_resize: bool = False
    explicit_width: bool = False
    sgr_pixels: bool = False


class GraphicsProtocol(enum.IntEnum):
    """Image protocols, ordered from lowest to highest fidelity."""

    NONE = 0
    FULL_BLOCK = 1
    HALF_BLOCK = 2
    SIXEL = 3
    KITTY = 4


@dataclass
class Quirks:
    """Outcome of applying quirks: adjusted capabilities and overrides."""

    capabilities: Capabilities
    color_sequences: ColorSequences = field(default_factory=ColorSequences)
    graphics_protocol: Optional[GraphicsProtocol] = None
    xtwinops: bool = False


def apply_quirks(
    term_id: str,
    caps: Capabilities,
    environ: Optional[Mapping[str, str]] = None,
) -> Quirks:
    """Adjust capabilities for known terminals and environment overrides.

    The given capabilities are left untouched; an adjusted copy is returned.
    """
    env = os.environ if environ is None else environ

    def is_set(name: str) -> bool:
        return env.get(name, "") != ""

    caps = dataclasses.replace(caps)
    result = Quirks(capabilities=caps)

    if term_id.startswith("kitty"):
        _log.debug("kitty identified. applying quirks")
        caps.no_zwj = True
    elif term_id == "tmux 3.4":
        # tmux 3.4 has unicode support but does not advertise it via 2027
        caps.unicode_core = True

    if is_set("ASCIINEMA_REC"):
        result.graphics_protocol = GraphicsProtocol.HALF_BLOCK
    if is_set("VAXIS_FORCE_LEGACY_SGR"):
        result.color_sequences = ColorSequences(legacy=True)
    if is_set("VAXIS_FORCE_WCWIDTH"):
        caps.unicode_core = False
        caps.explicit_width = False
    if is_set("VAXIS_FORCE_UNICODE"):
        caps.unicode_core = True
    if is_set("VAXIS_FORCE_NOZWJ"):
        caps.no_zwj = True
        caps.explicit_width = False
    if is_set("VAXIS_DISABLE_NOZWJ"):
        caps.no_zwj = False
    if is_set("VAXIS_FORCE_XTWINOPS"):
        result.xtwinops = True
    return result