"""Tests for the bundled widgets."""

from pathlib import Path

import pytest
from PIL import Image

from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.context import Context
from cellframe.core.geometry import Axis, Pos, Rect
from cellframe.core.input import MouseMove
from cellframe.core.style import Style
from cellframe.render.text import TextRenderer
from cellframe.widgets import Align, Block, BorderType, Label, Line, LineCapping, LineType, Widget
from cellframe.widgets.image import LOWER_HALF, UPPER_HALF, ImageWidget


def draw(widget, area: Rect, buf: Buffer, ctx: Context | None = None) -> str:
    widget.draw(ctx or Context(), area, buf)
    return TextRenderer(preserve_whitespace=True).render(buf)


class TestLabel:
    """Tests for Label."""

    def test_is_widget(self) -> None:
        assert isinstance(Label("x"), Widget)

    def test_alignment(self) -> None:
        area = Rect(0, 0, 6, 1)
        assert draw(Label("hi"), area, Buffer.empty(area)) == "hi    "
        assert draw(Label("hi", align=Align.CENTER), area, Buffer.empty(area)) == "  hi  "
        assert draw(Label("hi", align=Align.RIGHT), area, Buffer.empty(area)) == "    hi"

    def test_truncates_to_area(self) -> None:
        area = Rect(0, 0, 4, 1)
        assert draw(Label("abcdefgh", align=Align.RIGHT), area, Buffer.empty(area)) == "abcd"

    def test_stays_inside_area(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 8, 2))
        text = draw(Label("abcdefgh"), Rect(2, 1, 3, 1), buf)
        assert text == "        \n  abc   "

    def test_hover_style(self) -> None:
        area = Rect(0, 0, 4, 1)
        label = Label("hi", style=Style(fg=Color.RED), hover_style=Style(bg=Color.BLUE))

        buf = Buffer.empty(area)
        draw(label, area, buf)
        assert buf[0, 0].fg == Color.RED
        assert buf[0, 0].bg == Color.RESET

        ctx = Context()
        ctx.enqueue(MouseMove(Pos(3, 0)))
        ctx.mark_ready()
        buf = Buffer.empty(area)
        draw(label, area, buf, ctx)
        assert buf[0, 0].fg == Color.RED
        assert buf[0, 0].bg == Color.BLUE

    def test_hidden_or_offscreen(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 4, 1))
        label = Label("hi")
        draw(label, Rect(10, 10, 4, 1), buf)
        label.visible = False
        draw(label, buf.area, buf)
        assert all(cell.is_blank() for cell in buf.content)


class TestBlock:
    """Tests for Block."""

    def test_border_and_title(self) -> None:
        area = Rect(0, 0, 5, 3)
        assert draw(Block("T"), area, Buffer.empty(area)) == "┌T──┐\n│   │\n└───┘"

    def test_rounded_border(self) -> None:
        area = Rect(0, 0, 3, 2)
        assert draw(Block(border=BorderType.ROUNDED), area, Buffer.empty(area)) == "╭─╮\n╰─╯"

    def test_title_clipped(self) -> None:
        area = Rect(0, 0, 6, 2)
        assert draw(Block("Long title"), area, Buffer.empty(area)).splitlines()[0] == "┌Long┐"

    def test_inner(self) -> None:
        assert Block.inner(Rect(0, 0, 5, 3)) == Rect(1, 1, 3, 1)

    def test_style_fills_area(self) -> None:
        area = Rect(0, 0, 4, 3)
        buf = Buffer.empty(area)
        draw(Block(style=Style(fg=Color.CYAN, bg=Color.BLACK)), area, buf)
        assert buf[1, 1].bg == Color.BLACK
        assert buf[0, 0].fg == Color.CYAN

    def test_too_small_for_border(self) -> None:
        area = Rect(0, 0, 1, 1)
        buf = Buffer.empty(area)
        draw(Block("x", style=Style(bg=Color.RED)), area, buf)
        assert buf[0, 0].symbol == " "
        assert buf[0, 0].bg == Color.RED


class TestImageWidget:
    """Tests for ImageWidget."""

    def test_opaque_pixels(self) -> None:
        image = Image.new("RGBA", (2, 2), (255, 0, 0, 255))
        area = Rect(0, 0, 2, 1)
        buf = Buffer.empty(area)
        ImageWidget(image).draw(Context(), area, buf)
        cell = buf[0, 0]
        assert cell.symbol == UPPER_HALF
        assert cell.fg == Color.from_rgb(255, 0, 0)
        assert cell.bg == Color.from_rgb(255, 0, 0)

    def test_transparent_pixels_leave_cell(self) -> None:
        image = Image.new("RGBA", (1, 2), (0, 0, 0, 0))
        area = Rect(0, 0, 1, 1)
        buf = Buffer.filled(area, Cell("x", bg=Color.BLUE))
        ImageWidget(image).draw(Context(), area, buf)
        assert buf[0, 0] == Cell("x", bg=Color.BLUE)

    def test_half_transparent_cells(self) -> None:
        image = Image.new("RGBA", (2, 2), (0, 0, 0, 0))
        image.putpixel((0, 0), (0, 255, 0, 255))
        image.putpixel((1, 1), (0, 0, 255, 255))
        area = Rect(0, 0, 2, 1)
        buf = Buffer.empty(area)
        ImageWidget(image, resample=Image.Resampling.NEAREST).draw(Context(), area, buf)
        assert buf[0, 0].symbol == UPPER_HALF
        assert buf[0, 0].fg == Color.from_rgb(0, 255, 0)
        assert buf[0, 0].bg == Color.RESET
        assert buf[1, 0].symbol == LOWER_HALF
        assert buf[1, 0].fg == Color.from_rgb(0, 0, 255)

    def test_semi_transparent_blends(self) -> None:
        image = Image.new("RGBA", (1, 2), (200, 100, 0, 128))
        area = Rect(0, 0, 1, 1)
        buf = Buffer.filled(area, Cell(bg=Color.from_rgb(0, 0, 0)))
        ImageWidget(image).draw(Context(), area, buf)
        assert buf[0, 0].fg == Color.from_rgb(100, 50, 0)
        assert buf[0, 0].bg == Color.from_rgb(100, 50, 0)

    @pytest.mark.parametrize("alpha", [20, 240])
    def test_pixel_alpha_weights_blend(self, alpha: int) -> None:
        image = Image.new("RGBA", (1, 2), (255, 255, 255, alpha))
        area = Rect(0, 0, 1, 1)
        buf = Buffer.filled(area, Cell(bg=Color.from_rgb(0, 0, 0)))
        ImageWidget(image).draw(Context(), area, buf)
        assert buf[0, 0].fg == Color.from_rgb(alpha, alpha, alpha)
        assert buf[0, 0].bg == Color.from_rgb(alpha, alpha, alpha)

    def test_open(self, tmp_path: Path) -> None:
        path = tmp_path / "dot.png"
        Image.new("RGB", (4, 4), (1, 2, 3)).save(path)
        widget = ImageWidget.open(path)
        assert widget.image.mode == "RGBA"
        assert widget.image.size == (4, 4)


class TestLine:
    """Tests for the Line widget."""

    def column(self, buf: Buffer, x: int) -> str:
        return "".join(buf[x, y].symbol for y in range(buf.area.height))

    def row(self, buf: Buffer, y: int) -> str:
        return "".join(buf[x, y].symbol for x in range(buf.area.width))

    def test_horizontal_centered(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 5, 3))
        Line.horizontal().draw(Context(), buf.area, buf)
        assert self.row(buf, 0) == "     "
        assert self.row(buf, 1) == "─────"
        assert self.row(buf, 2) == "     "

    def test_horizontal_caps(self) -> None:
        cases = [
            (Line.horizontal().shortened(), "╶───╴"),
            (Line.horizontal().switched(), "╾───╼"),
            (Line.horizontal().thick(), "━━━━━"),
            (Line.horizontal().thick().shortened(), "╺━━━╸"),
            (Line.horizontal().thick().switched(), "╼━━━╾"),
        ]
        for line, expected in cases:
            buf = Buffer.empty(Rect(0, 0, 5, 1))
            line.draw(Context(), buf.area, buf)
            assert self.row(buf, 0) == expected

    def test_vertical(self) -> None:
        cases = [
            (Line.vertical(), "│││"),
            (Line.vertical().shortened(), "╷│╵"),
            (Line.vertical().switched(), "╿│╽"),
            (Line.vertical().thick().shortened(), "╻┃╹"),
            (Line.vertical().thick().switched(), "╽┃╿"),
        ]
        for line, expected in cases:
            buf = Buffer.empty(Rect(0, 0, 3, 3))
            line.draw(Context(), buf.area, buf)
            assert self.column(buf, 1) == expected
            assert self.column(buf, 0) == "   "

    def test_single_cell_takes_end_cap(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 1, 1))
        Line.horizontal().shortened().draw(Context(), buf.area, buf)
        assert buf[0, 0].symbol == "╴"

    def test_builders_leave_original(self) -> None:
        line = Line.horizontal()
        line.thick().shortened()
        assert line.line_type is LineType.NORMAL
        assert line.capping is LineCapping.NONE
        assert line.direction is Axis.HORIZONTAL

    def test_style_applied(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 3, 1))
        Line.horizontal(Style(fg=Color.RED)).draw(Context(), buf.area, buf)
        assert all(buf[x, 0].fg == Color.RED for x in range(3))
