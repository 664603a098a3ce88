"""Tests for the cell buffer."""

import pytest

from cellframe.core.buffer import Buffer, glyphs
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.geometry import Pos, Rect
from cellframe.core.style import ColorMode, Modifier, Style


def row_text(buf: Buffer, y: int) -> str:
    return "".join(buf[x, y].symbol for x in range(buf.area.left, buf.area.right))


class TestCell:
    """Tests for Cell."""

    def test_default_cell(self) -> None:
        cell = Cell()
        assert cell.symbol == ' '
        assert cell.fg == Color.RESET
        assert cell.bg == Color.RESET
        assert cell.modifier == Modifier.NONE
        assert cell.is_blank()

    def test_copy(self) -> None:
        cell = Cell("X", fg=Color.RED, skip=True)
        copy = cell.copy()
        assert copy == cell
        assert copy is not cell
        assert copy.skip is True

    def test_skip_ignored_in_equality(self) -> None:
        assert Cell("a", skip=True) == Cell("a")

    def test_reset(self) -> None:
        cell = Cell("X", fg=Color.RED, bg=Color.BLUE, modifier=Modifier.BOLD, skip=True)
        cell.reset()
        assert cell.is_blank()
        assert cell.skip is False


class TestBuffer:
    """Tests for Buffer addressing and writes."""

    def test_empty(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 4, 3))
        assert len(buf.content) == 12
        assert all(cell.is_blank() for cell in buf.content)

    def test_filled_cells_are_independent(self) -> None:
        buf = Buffer.filled(Rect(0, 0, 2, 2), Cell("#"))
        buf[0, 0].symbol = "x"
        assert buf[1, 0].symbol == "#"

    def test_content_length_checked(self) -> None:
        with pytest.raises(ValueError):
            Buffer(Rect(0, 0, 2, 2), [Cell()])

    def test_absolute_addressing(self) -> None:
        buf = Buffer.empty(Rect(4, 2, 3, 3))
        assert buf.index_of(4, 2) == 0
        assert buf.index_of(6, 4) == 8
        assert buf.pos_of(5) == Pos(6, 3)
        with pytest.raises(IndexError):
            buf.get(0, 0)
        with pytest.raises(IndexError):
            buf.pos_of(9)

    def test_index_pos_roundtrip(self) -> None:
        buf = Buffer.empty(Rect(3, 1, 5, 4))
        for index in range(len(buf.content)):
            pos = buf.pos_of(index)
            assert buf.index_of(pos.x, pos.y) == index

    def test_set_string_scenario(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 10, 1))
        end = buf.set_string(8, 0, "Hi")
        assert buf[8, 0].symbol == "H"
        assert buf[9, 0].symbol == "i"
        assert end == (10, 0)

    def test_set_string_clips_right(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 10, 1))
        buf.set_string(8, 0, "Hello")
        assert row_text(buf, 0) == "        He"

    def test_set_string_clips_left(self) -> None:
        buf = Buffer.empty(Rect(2, 0, 4, 1))
        buf.set_string(0, 0, "abcdef")
        assert row_text(buf, 0) == "cdef"

    def test_set_string_outside_rows_is_noop(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 4, 2))
        before = buf.copy()
        buf.set_string(0, 5, "abc")
        assert buf == before

    def test_set_stringn_limits_width(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 10, 1))
        end = buf.set_stringn(1, 0, "abcdef", 3)
        assert row_text(buf, 0) == " abc      "
        assert end == (4, 0)

    def test_set_string_style(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 4, 1))
        buf.set_string(0, 0, "ab", Style(fg=Color.RED).add(Modifier.BOLD))
        assert buf[0, 0].fg == Color.RED
        assert Modifier.BOLD in buf[1, 0].modifier
        assert buf[2, 0].is_blank()

    def test_multi_codepoint_glyph(self) -> None:
        flag = "\U0001F1F8\U0001F1EA"
        accented = "e\u0301"
        buf = Buffer.empty(Rect(0, 0, 4, 1))
        buf.set_string(0, 0, flag + accented + "x")
        assert buf[0, 0].symbol == flag
        assert buf[1, 0].symbol == accented
        assert buf[2, 0].symbol == "x"

    def test_control_characters_skipped(self) -> None:
        assert list(glyphs("a\tb\nc")) == ["a", "b", "c"]

    def test_set_cell_stores_copy(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 2, 1))
        cell = Cell("x")
        buf[0, 0] = cell
        cell.symbol = "y"
        assert buf[0, 0].symbol == "x"

    def test_set_cell_outside_ignored(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 2, 1))
        buf.set_cell(5, 5, Cell("x"))
        assert all(cell.is_blank() for cell in buf.content)

    def test_set_style_clips_to_area(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 3, 3))
        buf.set_style(Rect(2, 2, 5, 5), Style(bg=Color.BLUE))
        assert buf[2, 2].bg == Color.BLUE
        assert buf[1, 1].bg == Color.RESET

    def test_set_style_blend(self) -> None:
        buf = Buffer.filled(Rect(0, 0, 1, 1), Cell(bg=Color.from_rgb(0, 0, 0)))
        buf.set_style(buf.area, Style(bg=Color.from_rgb(100, 50, 0)), ColorMode.BLEND)
        assert buf[0, 0].bg == Color.from_rgb(50, 25, 0)

    def test_fill(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 4, 2))
        buf.fill(Rect(1, 0, 2, 5), Cell("#"))
        assert row_text(buf, 0) == " ## "
        assert row_text(buf, 1) == " ## "

    def test_reset(self) -> None:
        buf = Buffer.filled(Rect(0, 0, 2, 2), Cell("#", fg=Color.RED))
        buf.reset()
        assert buf == Buffer.empty(Rect(0, 0, 2, 2))


class TestBufferResize:
    """Tests for resize and merge."""

    def test_resize_keeps_overlap(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 3, 2))
        buf.set_string(0, 0, "abc")
        buf.set_string(0, 1, "def")
        buf.resize(Rect(1, 0, 4, 1))
        assert buf.area == Rect(1, 0, 4, 1)
        assert row_text(buf, 0) == "bc  "

    def test_resize_same_area_is_noop(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 2, 1))
        buf.set_string(0, 0, "ab")
        buf.resize(Rect(0, 0, 2, 1))
        assert row_text(buf, 0) == "ab"

    def test_merge(self) -> None:
        left = Buffer.empty(Rect(0, 0, 2, 1))
        left.set_string(0, 0, "ab")
        right = Buffer.empty(Rect(1, 0, 2, 1))
        right.set_string(1, 0, "XY")
        left.merge(right)
        assert left.area == Rect(0, 0, 3, 1)
        assert row_text(left, 0) == "aXY"

    def test_copy_is_deep(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 1, 1))
        copy = buf.copy()
        copy[0, 0].symbol = "x"
        assert buf[0, 0].symbol == " "

    def test_rows_and_cells(self) -> None:
        buf = Buffer.empty(Rect(1, 1, 2, 2))
        assert len(list(buf.rows())) == 2
        assert [(x, y) for x, y, _ in buf.cells()] == [(1, 1), (2, 1), (1, 2), (2, 2)]
