"""Flex layout: children share a main axis in proportion to their flex."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List

from termweave.framework import (
    UNBOUNDED,
    DrawContext,
    EventPhase,
    RelativePoint,
    Size,
    SubSurface,
    Surface,
    Widget,
    new_surface,
)


class FlexDirection(enum.IntEnum):
    """The main axis children are laid out along."""

    HORIZONTAL = 0
    VERTICAL = 1

    def _unbounded(self, ctx: DrawContext) -> DrawContext:
        if self is FlexDirection.HORIZONTAL:
            return ctx.with_max(Size(UNBOUNDED, ctx.max.height))
        return ctx.with_max(Size(ctx.max.width, UNBOUNDED))

    def _fixed(self, ctx: DrawContext, main: int) -> DrawContext:
        if self is FlexDirection.HORIZONTAL:
            return ctx.with_constraints(
                Size(main, ctx.min.height), Size(main, ctx.max.height)
            )
        return ctx.with_constraints(
            Size(ctx.min.width, main), Size(ctx.max.width, main)
        )

    def _main(self, size: Size) -> int:
        return size.width if self is FlexDirection.HORIZONTAL else size.height

    def _cross(self, size: Size) -> int:
        return size.height if self is FlexDirection.HORIZONTAL else size.width

    def _size(self, main: int, cross: int) -> Size:
        if self is FlexDirection.HORIZONTAL:
            return Size(main, cross)
        return Size(cross, main)

    def _origin(self, offset: int) -> RelativePoint:
        if self is FlexDirection.HORIZONTAL:
            return RelativePoint(col=offset)
        return RelativePoint(row=offset)


@dataclass(eq=False)
class FlexItem(Widget):
    """A widget in a flex layout.

    A flex of 0 keeps the widget at its inherent size; remaining space is
    shared among items with a positive flex, in proportion to it.
    """

    widget: Any
    flex: int = 0

    def draw(self, ctx: DrawContext) -> Surface:
        return self.widget.draw(ctx)


@dataclass(eq=False)
class FlexLayout(Widget):
    """Lays children out along one axis, distributing spare space by flex."""

    children: List[FlexItem] = field(default_factory=list)
    direction: FlexDirection = FlexDirection.HORIZONTAL

    def handle_event(self, event: Any, phase: EventPhase) -> Any:
        return None

    def draw(self, ctx: DrawContext) -> Surface:
        direction = self.direction

        # First pass: each child's inherent size with the main axis unbounded.
        unbounded = direction._unbounded(ctx)
        inherent = [
            direction._main(child.draw(unbounded).size) for child in self.children
        ]
        total_flex = sum(child.flex for child in self.children)
        max_main = direction._main(ctx.max)
        remaining = max(0, max_main - sum(inherent))

        # Second pass: draw each child at its allotted size.
        subsurfaces: List[SubSurface] = []
        offset = 0
        cross = 0
        last = len(self.children) - 1
        for index, (child, natural) in enumerate(zip(self.children, inherent)):
            if child.flex == 0:
                allotted = natural
            elif index == last:
                allotted = max(0, max_main - offset)
            else:
                allotted = natural + remaining * child.flex // total_flex
            surface = child.draw(direction._fixed(ctx, allotted))
            subsurfaces.append(SubSurface(direction._origin(offset), surface))
            cross = max(cross, direction._cross(surface.size))
            offset += direction._main(surface.size)

        return Surface(
            size=direction._size(offset, cross), widget=self, children=subsurfaces
        )


class Spacer(Widget):
    """Takes up whatever space its flex item is given."""

    def handle_event(self, event: Any, phase: EventPhase) -> Any:
        return None

    def draw(self, ctx: DrawContext) -> Surface:
        return new_surface(ctx.min.width, ctx.min.height, self)


def new_spacer(flex: int) -> FlexItem:
    """A flex item filling space by flex, which must be at least 1."""
    if flex < 1:
        raise ValueError(f"spacer flex must be at least 1, got: {flex}")
    return FlexItem(Spacer(), flex)