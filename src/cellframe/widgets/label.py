"""Single-line text widget."""

from __future__ import annotations

from enum import Enum

from cellframe.core.buffer import Buffer, glyphs
from cellframe.core.context import Context
from cellframe.core.geometry import Rect
from cellframe.core.style import ColorMode, Style
from cellframe.widgets.base import BaseWidget


class Align(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Label(BaseWidget):
    """
    One line of text on the first row of its area.

    Text longer than the area is cut off. ``hover_style`` is layered over
    ``style`` while the pointer rests on the label.
    """

    def __init__(
        self,
        text: str,
        style: Style = Style(),
        align: Align = Align.LEFT,
        hover_style: Style | None = None,
        mode: ColorMode = ColorMode.OVERWRITE,
    ) -> None:
        self.text = text
        self.style = style
        self.align = align
        self.hover_style = hover_style
        self.mode = mode

    def render(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        line = Rect(area.x, area.y, area.width, 1)
        style = self.style
        if self.hover_style is not None and ctx.hovered(line):
            style = style.patch(self.hover_style)

        length = min(sum(1 for _ in glyphs(self.text)), area.width)
        if self.align is Align.CENTER:
            x = area.x + (area.width - length) // 2
        elif self.align is Align.RIGHT:
            x = area.right - length
        else:
            x = area.x
        buf.set_stringn(x, area.y, self.text, length, style, self.mode)
