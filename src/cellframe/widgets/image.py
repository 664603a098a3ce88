"""Draw Pillow images with half-block cells.

Each cell shows two vertical pixels: the upper half block (▀) takes the
top pixel as its foreground and the bottom pixel as its background.
Transparent pixels leave the buffer's existing colors alone and
semi-transparent pixels are combined with them through a color mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from PIL import Image

from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.context import Context
from cellframe.core.geometry import Rect
from cellframe.core.style import ColorMode, Style
from cellframe.widgets.base import BaseWidget

UPPER_HALF = "▀"  # FG = top pixel, BG = bottom pixel
LOWER_HALF = "▄"  # FG = bottom pixel, BG = top pixel

RGBA = tuple[int, int, int, int]


class ImageWidget(BaseWidget):
    """
    An image scaled to fill its area.

    Attributes:
        image: Source image, converted to RGBA
        mode: How semi-transparent pixels combine with existing colors
        alpha_threshold: Alpha below this counts as fully transparent
    """

    def __init__(
        self,
        image: Image.Image,
        mode: ColorMode = ColorMode.BLEND,
        alpha_threshold: int = 8,
        resample: Image.Resampling = Image.Resampling.LANCZOS,
    ) -> None:
        self.image = image.convert("RGBA")
        self.mode = mode
        self.alpha_threshold = alpha_threshold
        self.resample = resample
        self._scaled: Image.Image | None = None

    @classmethod
    def open(cls, path: Union[str, Path], **kwargs) -> "ImageWidget":
        """Load an image file."""
        with Image.open(path) as img:
            img.load()
            return cls(img, **kwargs)

    def _scaled_to(self, width: int, height: int) -> Image.Image:
        if self._scaled is None or self._scaled.size != (width, height):
            self._scaled = self.image.resize((width, height), self.resample)
        return self._scaled

    def _apply(self, cell: Cell, rgba: RGBA, channel: str) -> bool:
        """Paint one pixel onto the fg or bg channel; False if it was transparent."""
        r, g, b, a = rgba
        if a < self.alpha_threshold:
            return False
        color = Color.from_rgb(r, g, b)
        mode = ColorMode.OVERWRITE if a >= 255 else self.mode
        style = Style(fg=color) if channel == "fg" else Style(bg=color)
        cell.set_style(style, mode, a / 255)
        return True

    def render(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        img = self._scaled_to(area.width, area.height * 2)
        pixels = img.load()

        for row in range(area.height):
            for col in range(area.width):
                top: RGBA = pixels[col, row * 2]
                bottom: RGBA = pixels[col, row * 2 + 1]
                top_visible = top[3] >= self.alpha_threshold
                bottom_visible = bottom[3] >= self.alpha_threshold
                if not (top_visible or bottom_visible):
                    continue

                cell = buf.get(area.x + col, area.y + row)
                if top_visible:
                    cell.set_symbol(UPPER_HALF)
                    self._apply(cell, top, "fg")
                    self._apply(cell, bottom, "bg")
                else:
                    cell.set_symbol(LOWER_HALF)
                    self._apply(cell, bottom, "fg")
