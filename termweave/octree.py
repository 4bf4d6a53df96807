"""Octree color quantization into paletted images."""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Tuple

from PIL import Image

_MAX_DEPTH = 8


class _Color(NamedTuple):
    r: int = 0
    g: int = 0
    b: int = 0
    transparent: bool = False


def _new_color(r: int, g: int, b: int, a: int) -> _Color:
    if a == 0:
        return _Color(transparent=True)
    if a == 255:
        return _Color(r, g, b)
    # Premultiply as 16-bit channels, then divide back out.
    ca = a * 0x101
    return _Color(
        *(((c * 0x101 * ca) // 0xFFFF) * 255 // ca for c in (r, g, b))
    )


def _color_index(color: _Color, level: int) -> int:
    mask = 0x80 >> level
    index = 0
    if color.r & mask:
        index |= 4
    if color.g & mask:
        index |= 2
    if color.b & mask:
        index |= 1
    return index


class _Node:
    __slots__ = ("r", "g", "b", "n", "i", "children")

    def __init__(self) -> None:
        self.r = self.g = self.b = 0
        self.n = 0
        self.i = 0
        self.children: List[Optional[_Node]] = [None] * 8

    @property
    def leaf(self) -> bool:
        return self.n > 0

    def leaves(self) -> List["_Node"]:
        found: List[_Node] = []
        for child in self.children:
            if child is None:
                continue
            if child.leaf:
                found.append(child)
            else:
                found.extend(child.leaves())
        return found

    def add_color(self, color: _Color, level: int, tree: "_Tree") -> None:
        if level >= _MAX_DEPTH:
            self.r += color.r
            self.g += color.g
            self.b += color.b
            self.n += 1
            return
        index = _color_index(color, level)
        child = self.children[index]
        if child is None:
            child = tree.new_node(level)
            self.children[index] = child
        child.add_color(color, level + 1, tree)

    def palette_index(self, color: _Color, level: int) -> int:
        if self.leaf:
            return self.i
        child = self.children[_color_index(color, level)]
        if child is not None:
            return child.palette_index(color, level + 1)
        for child in self.children:
            if child is not None:
                return child.palette_index(color, level + 1)
        raise RuntimeError("octree node has no children")

    def remove_leaves(self) -> int:
        merged = 0
        for child in self.children:
            if child is None:
                continue
            self.r += child.r
            self.g += child.g
            self.b += child.b
            self.n += child.n
            merged += 1
        return merged - 1

    def average(self) -> Tuple[int, int, int]:
        return self.r // self.n, self.g // self.n, self.b // self.n


class _Tree:
    def __init__(self) -> None:
        self.levels: List[List[_Node]] = [[] for _ in range(_MAX_DEPTH)]
        self.count = 0
        self.transparent = False
        self.root = self.new_node(0)

    def new_node(self, level: int) -> _Node:
        node = _Node()
        if level < _MAX_DEPTH - 1:
            self.levels[level].append(node)
        return node

    def add_color(self, color: _Color) -> None:
        self.transparent = self.transparent or color.transparent
        self.root.add_color(color, 0, self)

    def make_palette(self, count: int) -> List[Tuple[int, int, int]]:
        palette: List[Tuple[int, int, int]] = []
        remaining = len(self.root.leaves())
        if self.transparent:
            count -= 1

        for level in range(_MAX_DEPTH - 1, -1, -1):
            nodes = self.levels[level]
            if not nodes:
                continue
            for node in nodes:
                remaining -= node.remove_leaves()
                if remaining <= count:
                    break
            if remaining <= count:
                break
            nodes.clear()

        for index, node in enumerate(self.root.leaves()):
            if index >= count:
                break
            if node.leaf:
                palette.append(node.average())
            node.i = index

        if self.transparent:
            palette.append((0, 0, 0))
        self.count = len(palette)
        return palette

    def palette_index(self, color: _Color) -> int:
        if color.transparent:
            return self.count - 1
        return self.root.palette_index(color, 0)


def paletted(image: Image.Image, colors: int) -> Image.Image:
    """Quantize image to a "P" mode image with at most ``colors`` entries.

    If any pixel is fully transparent, the last palette entry is reserved
    for transparency and recorded in ``info["transparency"]``.
    """
    rgba = image.convert("RGBA")
    raw = iter(rgba.tobytes())
    pixels = [_new_color(r, g, b, a) for r, g, b, a in zip(raw, raw, raw, raw)]

    tree = _Tree()
    for color in pixels:
        tree.add_color(color)
    palette = tree.make_palette(colors)

    cache: Dict[_Color, int] = {}
    indices = bytearray()
    for color in pixels:
        index = cache.get(color)
        if index is None:
            index = tree.palette_index(color) & 0xFF
            cache[color] = index
        indices.append(index)

    out = Image.frombytes("P", rgba.size, bytes(indices))
    if palette:
        out.putpalette([channel for entry in palette for channel in entry])
    if tree.transparent:
        out.info["transparency"] = len(palette) - 1
    return out