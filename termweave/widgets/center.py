"""A layout widget that centers its child."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from termweave.framework import DrawContext, Size, Surface, Widget, new_surface


@dataclass(eq=False)
class Center(Widget):
    """Draws the child centered within the space given to it."""

    child: Any

    def draw(self, ctx: DrawContext) -> Surface:
        if ctx.max.has_unbounded_height() or ctx.max.has_unbounded_width():
            raise ValueError("Center must have bounded constraints")

        # No minimum for the child, so the remaining space can surround it.
        child_surface = self.child.draw(ctx.with_min(Size()))

        surface = new_surface(ctx.max.width, ctx.max.height, self)
        off_x = (ctx.max.width - child_surface.size.width) // 2
        off_y = (ctx.max.height - child_surface.size.height) // 2
        surface.add_child(off_x, off_y, child_surface)
        return surface