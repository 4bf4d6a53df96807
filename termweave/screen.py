"""A grid of cells representing one frame of the terminal."""

from __future__ import annotations

import dataclasses
from typing import Iterator, List, Tuple

from termweave.style import Cell, Style


class Screen:
    """A resizable grid of cells addressed by column and row."""

    def __init__(self, cols: int = 0, rows: int = 0) -> None:
        self._rows: List[List[Cell]] = []
        self.cols = 0
        self.rows = 0
        self.resize(cols, rows)

    def size(self) -> Tuple[int, int]:
        """Return (cols, rows)."""
        return self.cols, self.rows

    def resize(self, cols: int, rows: int) -> None:
        """Resize the grid, clearing every cell."""
        self._rows = [[Cell()] * cols for _ in range(rows)]
        self.cols = cols
        self.rows = rows

    def _contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def set_cell(self, col: int, row: int, cell: Cell) -> None:
        """Set a cell; positions outside the grid are ignored."""
        if self._contains(col, row):
            self._rows[row][col] = cell

    def set_style(self, col: int, row: int, style: Style) -> None:
        """Restyle a cell; positions outside the grid are ignored."""
        if self._contains(col, row):
            current = self._rows[row][col]
            self._rows[row][col] = dataclasses.replace(current, style=style)

    def cell(self, col: int, row: int) -> Cell:
        """Return the cell at col, row."""
        if not self._contains(col, row):
            raise IndexError(
                f"cell ({col}, {row}) outside {self.cols}x{self.rows} screen"
            )
        return self._rows[row][col]

    def __iter__(self) -> Iterator[Tuple[Cell, ...]]:
        for row in self._rows:
            yield tuple(row)