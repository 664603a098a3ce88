"""Bordered box widget."""

from __future__ import annotations

from enum import Enum

from cellframe.core.buffer import Buffer
from cellframe.core.context import Context
from cellframe.core.geometry import Rect
from cellframe.core.style import Style
from cellframe.widgets.base import BaseWidget


class BorderType(Enum):
    """Box-drawing sets: (horizontal, vertical, top-left, top-right, bottom-left, bottom-right)."""
    PLAIN = ("─", "│", "┌", "┐", "└", "┘")
    ROUNDED = ("─", "│", "╭", "╮", "╰", "╯")
    DOUBLE = ("═", "║", "╔", "╗", "╚", "╝")
    THICK = ("━", "┃", "┏", "┓", "┗", "┛")


class Block(BaseWidget):
    """A border around an area, with an optional title on the top edge."""

    def __init__(
        self,
        title: str = "",
        style: Style = Style(),
        border: BorderType = BorderType.PLAIN,
        title_style: Style | None = None,
    ) -> None:
        self.title = title
        self.style = style
        self.border = border
        self.title_style = title_style

    @staticmethod
    def inner(area: Rect) -> Rect:
        """The part of ``area`` left inside the border."""
        return area.inner(1)

    def render(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        buf.set_style(area, self.style)
        if area.width < 2 or area.height < 2:
            return

        horizontal, vertical, top_left, top_right, bottom_left, bottom_right = self.border.value
        span = horizontal * (area.width - 2)
        buf.set_string(area.left, area.top, top_left + span + top_right)
        buf.set_string(area.left, area.bottom - 1, bottom_left + span + bottom_right)
        for y in range(area.top + 1, area.bottom - 1):
            buf.set_string(area.left, y, vertical)
            buf.set_string(area.right - 1, y, vertical)

        if self.title:
            title_style = self.style.patch(self.title_style or Style())
            buf.set_stringn(area.left + 1, area.top, self.title, area.width - 2, title_style)
