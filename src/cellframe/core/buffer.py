"""Buffer - dense 2D grid of cells covering a rectangle."""

from __future__ import annotations

import sys
import unicodedata
from dataclasses import dataclass, field
from typing import Iterator

import grapheme

from cellframe.core.cell import Cell
from cellframe.core.diff import Update, diff_buffers
from cellframe.core.geometry import Pos, Rect
from cellframe.core.style import EMPTY_STYLE, ColorMode, Style


def glyphs(text: str) -> Iterator[str]:
    """Split text into the glyphs that occupy one cell each."""
    for cluster in grapheme.graphemes(text):
        if unicodedata.category(cluster[0]) == "Cc":
            continue
        yield cluster


@dataclass
class Buffer:
    """
    The cells covering ``area``, stored row-major.

    Coordinates are absolute: the top-left cell of a buffer whose area
    starts at (4, 2) is ``buffer[4, 2]``. Writes that fall outside the area
    are silently dropped; reads outside it raise ``IndexError``.
    """
    area: Rect = Rect.ZERO
    content: list[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Fill the grid with blank cells."""
        if not self.content:
            self.content = [Cell() for _ in range(self.area.area)]
        elif len(self.content) != self.area.area:
            raise ValueError(
                f"content has {len(self.content)} cells, area {self.area} needs {self.area.area}"
            )

    @classmethod
    def empty(cls, area: Rect) -> "Buffer":
        """A buffer of blank cells."""
        return cls(area)

    @classmethod
    def filled(cls, area: Rect, cell: Cell) -> "Buffer":
        """A buffer where every cell is a copy of ``cell``."""
        return cls(area, [cell.copy() for _ in range(area.area)])

    def copy(self) -> "Buffer":
        return Buffer(self.area, [cell.copy() for cell in self.content])

    # -------------------------------------------------------------------------
    # Addressing
    # -------------------------------------------------------------------------

    def index_of(self, x: int, y: int) -> int:
        """Index into ``content`` for absolute coordinates (x, y)."""
        if not self.area.contains((x, y)):
            raise IndexError(f"({x}, {y}) outside buffer area {self.area}")
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def pos_of(self, index: int) -> Pos:
        """Absolute coordinates of ``content[index]``."""
        if not 0 <= index < len(self.content):
            raise IndexError(f"index {index} outside buffer of {len(self.content)} cells")
        return Pos(
            self.area.x + index % self.area.width,
            self.area.y + index // self.area.width,
        )

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at position (x, y)."""
        return self.content[self.index_of(x, y)]

    def __getitem__(self, pos: Pos | tuple[int, int]) -> Cell:
        """Get cell using indexing: buffer[x, y]."""
        x, y = pos
        return self.get(x, y)

    def __setitem__(self, pos: Pos | tuple[int, int], cell: Cell) -> None:
        """Set cell using indexing: buffer[x, y] = cell."""
        x, y = pos
        self.set_cell(x, y, cell)

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over all cells as (x, y, cell) tuples in row-major order."""
        for i, cell in enumerate(self.content):
            pos = self.pos_of(i)
            yield pos.x, pos.y, cell

    def rows(self) -> Iterator[list[Cell]]:
        """Iterate over rows."""
        width = self.area.width
        for start in range(0, len(self.content), width or 1):
            yield self.content[start:start + width]

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Replace one cell; positions outside the area are ignored."""
        if self.area.contains((x, y)):
            self.content[self.index_of(x, y)] = cell.copy()

    def set_string(
        self,
        x: int,
        y: int,
        text: str,
        style: Style = EMPTY_STYLE,
        mode: ColorMode = ColorMode.OVERWRITE,
    ) -> tuple[int, int]:
        """Write ``text`` left to right from (x, y), clipping at the buffer edge."""
        return self.set_stringn(x, y, text, sys.maxsize, style, mode)

    def set_stringn(
        self,
        x: int,
        y: int,
        text: str,
        max_width: int,
        style: Style = EMPTY_STYLE,
        mode: ColorMode = ColorMode.OVERWRITE,
    ) -> tuple[int, int]:
        """
        Write at most ``max_width`` glyphs of ``text`` starting at (x, y).

        Returns the position just after the last glyph placed.
        """
        if not self.area.top <= y < self.area.bottom:
            return x, y
        written = 0
        for symbol in glyphs(text):
            if written >= max_width or x >= self.area.right:
                break
            if x >= self.area.left:
                self.content[self.index_of(x, y)].set_symbol(symbol).set_style(style, mode)
            x += 1
            written += 1
        return x, y

    def set_style(
        self,
        area: Rect,
        style: Style,
        mode: ColorMode = ColorMode.OVERWRITE,
        alpha: float | None = None,
    ) -> None:
        """Apply ``style`` to every cell of ``area`` that lies inside the buffer."""
        area = self.area.intersection(area)
        for y in range(area.top, area.bottom):
            for x in range(area.left, area.right):
                self.content[self.index_of(x, y)].set_style(style, mode, alpha)

    def fill(self, area: Rect, cell: Cell) -> None:
        """Fill a rectangle with copies of a cell."""
        area = self.area.intersection(area)
        for y in range(area.top, area.bottom):
            for x in range(area.left, area.right):
                self.content[self.index_of(x, y)] = cell.copy()

    def reset(self) -> None:
        """Blank every cell."""
        for cell in self.content:
            cell.reset()

    def resize(self, area: Rect) -> None:
        """
        Cover ``area`` instead of the current area.

        Cells inside both areas keep their content, newly covered cells are
        blank and cells outside the new area are dropped.
        """
        if area == self.area:
            return
        content = [Cell() for _ in range(area.area)]
        overlap = self.area.intersection(area)
        for y in range(overlap.top, overlap.bottom):
            for x in range(overlap.left, overlap.right):
                new_index = (y - area.y) * area.width + (x - area.x)
                content[new_index] = self.content[self.index_of(x, y)]
        self.area = area
        self.content = content

    def merge(self, other: "Buffer") -> None:
        """Grow to cover ``other`` as well and copy its cells over ours."""
        self.resize(self.area.union(other.area))
        for x, y, cell in other.cells():
            self.content[self.index_of(x, y)] = cell.copy()

    def diff(self, other: "Buffer") -> list[Update]:
        """Cells that must change to turn this buffer into ``other``."""
        return diff_buffers(self, other)
