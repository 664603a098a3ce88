"""Geometry - positions, rectangles and the split algorithms used for layout."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator

from cellframe.core.errors import GeometryError

# Cell coordinates fit in 16 bits on every surface we target.
COORD_MAX = 0xFFFF


def _check_coord(name: str, value: int) -> None:
    if not 0 <= value <= COORD_MAX:
        raise GeometryError(f"{name}={value} outside 0..{COORD_MAX}")


class Axis(Enum):
    """Direction along which a rectangle is split."""
    HORIZONTAL = "horizontal"  # split along x: left/right pieces
    VERTICAL = "vertical"      # split along y: top/bottom pieces


@dataclass(frozen=True)
class Pos:
    """A cell coordinate."""
    x: int
    y: int

    def __post_init__(self) -> None:
        _check_coord("x", self.x)
        _check_coord("y", self.y)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Rect:
    """
    An axis-aligned rectangle of cells.

    ``right`` and ``bottom`` are exclusive: they name the first column and
    row outside the rectangle. A rect with zero width or height is empty
    and contains no positions.
    """
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    ZERO: ClassVar["Rect"]

    def __post_init__(self) -> None:
        _check_coord("x", self.x)
        _check_coord("y", self.y)
        _check_coord("width", self.width)
        _check_coord("height", self.height)
        if self.x + self.width > COORD_MAX or self.y + self.height > COORD_MAX:
            raise GeometryError(f"rect {self} extends past coordinate {COORD_MAX}")

    @classmethod
    def new(cls, x: int, y: int, width: int, height: int) -> "Rect":
        return cls(x, y, width, height)

    @classmethod
    def sized(cls, width: int, height: int) -> "Rect":
        """A rect of the given size at the origin."""
        return cls(0, 0, width, height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}+{self.x}+{self.y}"

    # -------------------------------------------------------------------------
    # Edges and measurements
    # -------------------------------------------------------------------------

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def extent(self, axis: Axis) -> int:
        """Length of the rect along ``axis``."""
        return self.width if axis is Axis.HORIZONTAL else self.height

    def contains(self, pos: Pos | tuple[int, int]) -> bool:
        """Half-open containment: the right and bottom edges are outside."""
        px, py = pos
        return self.x <= px < self.right and self.y <= py < self.bottom

    def positions(self) -> Iterator[Pos]:
        """Every position inside the rect in row-major order."""
        for y in range(self.top, self.bottom):
            for x in range(self.left, self.right):
                yield Pos(x, y)

    # -------------------------------------------------------------------------
    # Derived rectangles
    # -------------------------------------------------------------------------

    def inner(self, margin_x: int, margin_y: int | None = None) -> "Rect":
        """
        Shrink the rect by a margin on every side.

        When the margin does not fit the result is an empty rect at the
        original origin.
        """
        if margin_y is None:
            margin_y = margin_x
        margin_x = max(margin_x, 0)
        margin_y = max(margin_y, 0)
        if self.width < margin_x * 2 or self.height < margin_y * 2:
            return Rect(self.x, self.y, 0, 0)
        return Rect(
            self.x + margin_x,
            self.y + margin_y,
            self.width - margin_x * 2,
            self.height - margin_y * 2,
        )

    def inner_centered(self, width: int, height: int) -> "Rect":
        """A ``width`` x ``height`` rect centered inside this one, clamped to it."""
        width = min(max(width, 0), self.width)
        height = min(max(height, 0), self.height)
        x = self.x + (self.width - width) // 2
        y = self.y + (self.height - height) // 2
        return Rect(x, y, width, height)

    def offset(self, dx: int, dy: int) -> "Rect":
        """Move the rect, keeping it inside the coordinate range."""
        x = min(max(self.x + dx, 0), COORD_MAX - self.width)
        y = min(max(self.y + dy, 0), COORD_MAX - self.height)
        return Rect(x, y, self.width, self.height)

    def union(self, other: "Rect") -> "Rect":
        x1 = min(self.x, other.x)
        y1 = min(self.y, other.y)
        x2 = max(self.right, other.right)
        y2 = max(self.bottom, other.bottom)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def intersection(self, other: "Rect") -> "Rect":
        """Overlapping part of two rects; empty when they do not overlap."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return Rect(x1, y1, max(x2 - x1, 0), max(y2 - y1, 0))

    def intersects(self, other: "Rect") -> bool:
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def clamp(self, other: "Rect") -> "Rect":
        """Move and shrink this rect so it fits inside ``other``."""
        width = min(self.width, other.width)
        height = min(self.height, other.height)
        x = min(max(self.x, other.x), other.right - width)
        y = min(max(self.y, other.y), other.bottom - height)
        return Rect(x, y, width, height)

    # -------------------------------------------------------------------------
    # Splitting
    # -------------------------------------------------------------------------

    def split_len(self, axis: Axis, length: int) -> tuple["Rect", "Rect"]:
        """
        Split off the first ``length`` cells along ``axis``.

        The length is clamped to the rect's extent, so the second piece may
        be empty; it then sits at the far edge of the rect.
        """
        length = min(max(length, 0), self.extent(axis))
        if axis is Axis.HORIZONTAL:
            return (
                Rect(self.x, self.y, length, self.height),
                Rect(self.x + length, self.y, self.width - length, self.height),
            )
        return (
            Rect(self.x, self.y, self.width, length),
            Rect(self.x, self.y + length, self.width, self.height - length),
        )

    def inverse_split_len(self, axis: Axis, length: int) -> tuple["Rect", "Rect"]:
        """
        Split off the last ``length`` cells along ``axis``.

        Returns ``(trailing, leading)``: the trailing piece of the requested
        length first, then the remainder before it.
        """
        length = min(max(length, 0), self.extent(axis))
        if axis is Axis.HORIZONTAL:
            rest = self.width - length
            return (
                Rect(self.x + rest, self.y, length, self.height),
                Rect(self.x, self.y, rest, self.height),
            )
        rest = self.height - length
        return (
            Rect(self.x, self.y + rest, self.width, length),
            Rect(self.x, self.y, self.width, rest),
        )

    def split_portion(self, axis: Axis, portion: float) -> tuple["Rect", "Rect"]:
        """Like :meth:`split_len` with the length given as a fraction of the extent."""
        return self.split_len(axis, self._portion_len(axis, portion))

    def inverse_split_portion(self, axis: Axis, portion: float) -> tuple["Rect", "Rect"]:
        return self.inverse_split_len(axis, self._portion_len(axis, portion))

    def _portion_len(self, axis: Axis, portion: float) -> int:
        portion = min(max(portion, 0.0), 1.0)
        return math.floor(self.extent(axis) * portion)

    def hsplit_len(self, length: int) -> tuple["Rect", "Rect"]:
        return self.split_len(Axis.HORIZONTAL, length)

    def vsplit_len(self, length: int) -> tuple["Rect", "Rect"]:
        return self.split_len(Axis.VERTICAL, length)

    def hsplit_inverse_len(self, length: int) -> tuple["Rect", "Rect"]:
        return self.inverse_split_len(Axis.HORIZONTAL, length)

    def vsplit_inverse_len(self, length: int) -> tuple["Rect", "Rect"]:
        return self.inverse_split_len(Axis.VERTICAL, length)

    def split_even3(self, axis: Axis) -> tuple["Rect", "Rect", "Rect"]:
        """
        Split into three pieces; the first two share extent // 3 and the
        last takes the remainder. Rects shorter than 3 are returned whole
        as the last piece.
        """
        extent = self.extent(axis)
        if extent < 3:
            return Rect.ZERO, Rect.ZERO, self
        third = extent // 3
        first, rest = self.split_len(axis, third)
        second, last = rest.split_len(axis, third)
        return first, second, last

    def rows(self) -> list["Rect"]:
        """One-row rects covering this rect from top to bottom."""
        return [Rect(self.x, y, self.width, 1) for y in range(self.top, self.bottom)]

    def columns(self) -> list["Rect"]:
        """One-column rects covering this rect from left to right."""
        return [Rect(x, self.y, 1, self.height) for x in range(self.left, self.right)]


Rect.ZERO = Rect(0, 0, 0, 0)


def split_len(rect: Rect, axis: Axis, length: int) -> tuple[Rect, Rect]:
    """Module-level form of :meth:`Rect.split_len`."""
    return rect.split_len(axis, length)


def inverse_split_len(rect: Rect, axis: Axis, length: int) -> tuple[Rect, Rect]:
    """Module-level form of :meth:`Rect.inverse_split_len`."""
    return rect.inverse_split_len(axis, length)
