"""Diff engine - the changed cells between two buffer snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from cellframe.core.cell import Cell
from cellframe.core.errors import BufferMismatchError
from cellframe.core.geometry import Pos

if TYPE_CHECKING:
    from cellframe.core.buffer import Buffer


class Update(NamedTuple):
    """One cell a surface has to redraw."""
    pos: Pos
    cell: Cell


def diff_buffers(old: "Buffer", new: "Buffer") -> list[Update]:
    """
    Every cell of ``new`` that differs from ``old``, in row-major order.

    Both buffers must cover the same area. Cells flagged ``skip`` are left
    out; the surface owns what is drawn there.
    """
    if old.area != new.area:
        raise BufferMismatchError(old.area, new.area)
    updates: list[Update] = []
    for index, (previous, current) in enumerate(zip(old.content, new.content)):
        if current.skip or current == previous:
            continue
        updates.append(Update(new.pos_of(index), current.copy()))
    return updates


def diff(old: "Buffer", new: "Buffer") -> list[Update]:
    """Alias of :func:`diff_buffers`."""
    return diff_buffers(old, new)


def apply(target: "Buffer", updates: list[Update]) -> None:
    """Write ``updates`` into ``target``, the way a surface would draw them."""
    for pos, cell in updates:
        target.set_cell(pos.x, pos.y, cell)
