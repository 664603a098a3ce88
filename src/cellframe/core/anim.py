"""
Animations - effects that rewrite already rendered cells over time.

An effect owns an :class:`AnimationTimer`. Each frame the loop advances
the timer by the elapsed time and hands the effect the cells of its area
that pass its :class:`CellFilter`. Programs start effects through
:meth:`Context.start_animation`; finished effects are dropped.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterator

from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.geometry import Pos, Rect

# Punctuation that counts as text for TEXT_CELLS
_TEXT_PUNCTUATION = "?!.,:;"


class Interpolation(Enum):
    """Easing curves mapping linear progress to effect progress."""
    LINEAR = "linear"
    QUAD_IN = "quad-in"
    QUAD_OUT = "quad-out"
    QUAD_IN_OUT = "quad-in-out"

    def apply(self, a: float) -> float:
        if self is Interpolation.QUAD_IN:
            return a * a
        if self is Interpolation.QUAD_OUT:
            return 1.0 - (1.0 - a) * (1.0 - a)
        if self is Interpolation.QUAD_IN_OUT:
            return 2.0 * a * a if a < 0.5 else 1.0 - 2.0 * (1.0 - a) * (1.0 - a)
        return a


@dataclass
class AnimationTimer:
    """
    Countdown over ``total`` seconds.

    ``alpha`` runs from 0.0 to 1.0 as the timer drains, or from 1.0 down
    to 0.0 when reversed.
    """
    total: float
    remaining: float | None = None
    interpolation: Interpolation = Interpolation.LINEAR
    reverse: bool = False

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"duration must not be negative, got {self.total}")
        if self.remaining is None:
            self.remaining = self.total

    def process(self, elapsed: float) -> float | None:
        """Advance by ``elapsed`` seconds; returns the overshoot once the timer ends."""
        if self.remaining >= elapsed:
            self.remaining -= elapsed
            return None
        overflow = elapsed - self.remaining
        self.remaining = 0.0
        return overflow

    def alpha(self) -> float:
        if self.total == 0:
            return 1.0
        inverse = self.remaining / self.total
        return self.interpolation.apply(inverse if self.reverse else 1.0 - inverse)

    def done(self) -> bool:
        return self.remaining <= 0

    def reversed(self) -> "AnimationTimer":
        return replace(self, reverse=not self.reverse)


class CellFilter(ABC):
    """Chooses which cells of an effect's area the effect touches."""

    @abstractmethod
    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        ...

    def __invert__(self) -> "CellFilter":
        return Not(self)


class _All(CellFilter):
    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return True


class _Text(CellFilter):
    """Single letters, digits, spaces and light punctuation."""

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        symbol = cell.symbol
        return len(symbol) == 1 and (symbol.isalnum() or symbol == " " or symbol in _TEXT_PUNCTUATION)


ALL_CELLS: CellFilter = _All()
TEXT_CELLS: CellFilter = _Text()


@dataclass(frozen=True)
class FgColor(CellFilter):
    color: Color

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return cell.fg == self.color


@dataclass(frozen=True)
class BgColor(CellFilter):
    color: Color

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return cell.bg == self.color


@dataclass(frozen=True)
class Inner(CellFilter):
    """Cells inside the area shrunk by a margin."""
    margin_x: int
    margin_y: int | None = None

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return area.inner(self.margin_x, self.margin_y).contains(pos)


@dataclass(frozen=True)
class Outer(CellFilter):
    """Cells in the margin band along the area's edges."""
    margin_x: int
    margin_y: int | None = None

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return not area.inner(self.margin_x, self.margin_y).contains(pos)


@dataclass(frozen=True)
class AllOf(CellFilter):
    filters: tuple[CellFilter, ...]

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return all(f.matches(area, pos, cell) for f in self.filters)


@dataclass(frozen=True)
class AnyOf(CellFilter):
    filters: tuple[CellFilter, ...]

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return any(f.matches(area, pos, cell) for f in self.filters)


@dataclass(frozen=True)
class NoneOf(CellFilter):
    filters: tuple[CellFilter, ...]

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return not any(f.matches(area, pos, cell) for f in self.filters)


@dataclass(frozen=True)
class Not(CellFilter):
    filter: CellFilter

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return not self.filter.matches(area, pos, cell)


@dataclass(frozen=True)
class PositionFn(CellFilter):
    predicate: Callable[[Pos], bool]

    def matches(self, area: Rect, pos: Pos, cell: Cell) -> bool:
        return self.predicate(pos)


@dataclass
class Effect(ABC):
    """
    Base class for animations.

    ``area`` pins the effect to a fixed rect; otherwise it runs over the
    rect it was started with.
    """
    timer: AnimationTimer
    area: Rect | None = field(default=None, kw_only=True)
    cell_filter: CellFilter = field(default=ALL_CELLS, kw_only=True)

    def process(self, elapsed: float, buf: Buffer, area: Rect) -> float | None:
        """
        Advance the timer and apply the effect to ``buf``.

        Returns the part of ``elapsed`` left over after the timer ended.
        """
        overflow = self.timer.process(elapsed)
        target = (area if self.area is None else self.area).intersection(buf.area)
        self.execute(self.timer.alpha(), target, self.cells(buf, target))
        return overflow

    def cells(self, buf: Buffer, area: Rect) -> Iterator[tuple[Pos, Cell]]:
        """Cells of ``area`` that pass the filter, in row-major order."""
        for pos in area.positions():
            cell = buf.get(pos.x, pos.y)
            if self.cell_filter.matches(area, pos, cell):
                yield pos, cell

    @abstractmethod
    def execute(self, alpha: float, area: Rect, cells: Iterator[tuple[Pos, Cell]]) -> None:
        raise NotImplementedError

    def done(self) -> bool:
        return self.timer.done()

    def running(self) -> bool:
        return not self.done()

    def with_area(self, area: Rect) -> "Effect":
        self.area = area
        return self

    def with_filter(self, cell_filter: CellFilter) -> "Effect":
        self.cell_filter = cell_filter
        return self


@dataclass
class Dissolve(Effect):
    """
    Blanks cells in a scattered order as alpha rises.

    Each cell gets an activation threshold from a cycle of ``cycle_len``
    random values; a cell is blanked once alpha passes its threshold.
    """
    cycle_len: int = 16
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    thresholds: list[float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.cycle_len <= 0:
            raise ValueError(f"cycle_len must be positive, got {self.cycle_len}")
        self.thresholds = [self.rng.random() for _ in range(self.cycle_len)]

    def execute(self, alpha: float, area: Rect, cells: Iterator[tuple[Pos, Cell]]) -> None:
        for idx, (_, cell) in enumerate(cells):
            if alpha > self.thresholds[idx % self.cycle_len]:
                cell.set_symbol(" ")


def dissolve(cycle_len: int, timer: AnimationTimer, rng: random.Random | None = None) -> Dissolve:
    """Content disappears cell by cell over the timer's duration."""
    return Dissolve(timer, cycle_len=cycle_len, rng=rng or random.Random())


def coalesce(cycle_len: int, timer: AnimationTimer, rng: random.Random | None = None) -> Dissolve:
    """Content appears cell by cell: a dissolve played backwards."""
    return Dissolve(timer.reversed(), cycle_len=cycle_len, rng=rng or random.Random())
