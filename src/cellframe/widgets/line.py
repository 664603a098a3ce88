"""Straight box-drawing lines."""

from __future__ import annotations

import copy
from enum import Enum

from cellframe.core.buffer import Buffer
from cellframe.core.context import Context
from cellframe.core.geometry import Axis, Rect
from cellframe.core.style import Style
from cellframe.widgets.base import BaseWidget


class LineType(Enum):
    NORMAL = "normal"
    THICK = "thick"


class LineCapping(Enum):
    """How the two ends of a line are drawn."""
    NONE = "none"            # Run to the cell edge
    SHORTENED = "shortened"  # Stop at the middle of the end cells
    SWITCHED = "switched"    # Change to the other weight in the end cells


# (fill, (start, end) for each capping)
_GLYPHS: dict[tuple[Axis, LineType], tuple[str, dict[LineCapping, tuple[str, str]]]] = {
    (Axis.HORIZONTAL, LineType.NORMAL): ("─", {
        LineCapping.SHORTENED: ("╶", "╴"),
        LineCapping.SWITCHED: ("╾", "╼"),
    }),
    (Axis.HORIZONTAL, LineType.THICK): ("━", {
        LineCapping.SHORTENED: ("╺", "╸"),
        LineCapping.SWITCHED: ("╼", "╾"),
    }),
    (Axis.VERTICAL, LineType.NORMAL): ("│", {
        LineCapping.SHORTENED: ("╷", "╵"),
        LineCapping.SWITCHED: ("╿", "╽"),
    }),
    (Axis.VERTICAL, LineType.THICK): ("┃", {
        LineCapping.SHORTENED: ("╻", "╹"),
        LineCapping.SWITCHED: ("╽", "╿"),
    }),
}


class Line(BaseWidget):
    """
    A one-cell-wide line centered across its area.

    Build with :meth:`horizontal` or :meth:`vertical` and refine with
    :meth:`thick`, :meth:`shortened` or :meth:`switched`.
    """

    def __init__(
        self,
        direction: Axis = Axis.HORIZONTAL,
        line_type: LineType = LineType.NORMAL,
        capping: LineCapping = LineCapping.NONE,
        style: Style = Style(),
    ) -> None:
        self.direction = direction
        self.line_type = line_type
        self.capping = capping
        self.style = style

    @classmethod
    def horizontal(cls, style: Style = Style()) -> "Line":
        return cls(Axis.HORIZONTAL, style=style)

    @classmethod
    def vertical(cls, style: Style = Style()) -> "Line":
        return cls(Axis.VERTICAL, style=style)

    def _with(self, **changes) -> "Line":
        line = copy.copy(self)
        for name, value in changes.items():
            setattr(line, name, value)
        return line

    def thick(self) -> "Line":
        return self._with(line_type=LineType.THICK)

    def shortened(self) -> "Line":
        return self._with(capping=LineCapping.SHORTENED)

    def switched(self) -> "Line":
        return self._with(capping=LineCapping.SWITCHED)

    def symbols(self, length: int) -> list[str]:
        """Glyphs of a line ``length`` cells long, start first."""
        if length <= 0:
            return []
        fill, caps = _GLYPHS[(self.direction, self.line_type)]
        symbols = [fill] * length
        if self.capping is not LineCapping.NONE:
            start, end = caps[self.capping]
            symbols[0] = start
            symbols[-1] = end
        return symbols

    def render(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        if self.direction is Axis.HORIZONTAL:
            row = area.inner_centered(area.width, 1)
            for offset, symbol in enumerate(self.symbols(row.width)):
                buf.get(row.x + offset, row.y).set_symbol(symbol).set_style(self.style)
        else:
            column = area.inner_centered(1, area.height)
            for offset, symbol in enumerate(self.symbols(column.height)):
                buf.get(column.x, column.y + offset).set_symbol(symbol).set_style(self.style)
