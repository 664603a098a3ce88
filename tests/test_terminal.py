"""Tests for terminal input decoding, rendering and the terminal platform."""

import contextlib
import io
import os

from cellframe.config import RunSettings
from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.command import CursorStyle, SetCursorStyle, SetTitle
from cellframe.core.diff import Update
from cellframe.core.geometry import COORD_MAX, Pos, Rect
from cellframe.core.input import (
    KeyDown,
    KeyUp,
    MouseButton,
    MouseDown,
    MouseMove,
    MouseUp,
    Resize,
    Scancode,
    Scroll,
)
from cellframe.core.style import Modifier
from cellframe.platform.terminal import TerminalPlatform, TerminalSize
from cellframe.platform.terminal_input import TerminalInputDecoder, TerminalInputReader, tap
from cellframe.render.terminal import TerminalRenderer, sgr_transition
from cellframe.render.text import TextRenderer


class FakeReader:
    def __init__(self, *batches: list) -> None:
        self.batches = list(batches)
        self.timeouts: list[float] = []

    def read(self, timeout: float = 0.1) -> list:
        self.timeouts.append(timeout)
        return self.batches.pop(0) if self.batches else []


class TestScancode:
    """Tests for scancode lookup."""

    def test_named_codes(self) -> None:
        assert Scancode.ESC == 1
        assert Scancode.A == 30
        assert Scancode.LMB == 0x110
        assert MouseButton.MIDDLE.scancode == Scancode.MMB
        assert repr(Scancode.ENTER) == "Scancode.ENTER"
        assert repr(Scancode(999)) == "Scancode(999)"

    def test_from_char(self) -> None:
        assert Scancode.from_char("q") == (None, Scancode.Q)
        assert Scancode.from_char("Q") == (Scancode.L_SHIFT, Scancode.Q)
        assert Scancode.from_char("1") == (None, Scancode.K_1)
        assert Scancode.from_char("!") == (Scancode.L_SHIFT, Scancode.K_1)
        assert Scancode.from_name("space") == Scancode.SPACE


class TestInputDecoder:
    """Tests for TerminalInputDecoder."""

    def test_plain_key(self) -> None:
        assert TerminalInputDecoder().feed("a") == [KeyDown(Scancode.A), KeyUp(Scancode.A)]

    def test_shifted_key(self) -> None:
        assert TerminalInputDecoder().feed("A") == [
            KeyDown(Scancode.L_SHIFT),
            KeyDown(Scancode.A),
            KeyUp(Scancode.A),
            KeyUp(Scancode.L_SHIFT),
        ]

    def test_every_press_is_released(self) -> None:
        events = TerminalInputDecoder().feed("Hello, world!\r")
        downs = [e.code for e in events if isinstance(e, KeyDown)]
        ups = [e.code for e in events if isinstance(e, KeyUp)]
        assert sorted(downs) == sorted(ups)

    def test_simple_keys(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\r") == tap(Scancode.ENTER)
        assert decoder.feed("\t") == tap(Scancode.TAB)
        assert decoder.feed("\x7f") == tap(Scancode.BACKSPACE)

    def test_ctrl_letter(self) -> None:
        assert TerminalInputDecoder().feed("\x03") == tap(Scancode.C, Scancode.L_CTRL)

    def test_arrow_keys(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[A") == tap(Scancode.UP)
        assert decoder.feed("\x1bOD") == tap(Scancode.LEFT)
        assert decoder.feed("\x1b[5~") == tap(Scancode.PAGEUP)
        assert decoder.feed("\x1b[24~") == tap(Scancode.F12)

    def test_split_sequence(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[") == []
        assert decoder.pending == "\x1b["
        assert decoder.feed("B") == tap(Scancode.DOWN)
        assert decoder.pending == ""

    def test_lone_escape(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b") == []
        assert decoder.flush() == tap(Scancode.ESC)
        assert decoder.flush() == []

    def test_alt_key(self) -> None:
        assert TerminalInputDecoder().feed("\x1bx") == tap(Scancode.ESC) + tap(Scancode.X)

    def test_unknown_sequence_dropped(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[99~a") == tap(Scancode.A)

    def test_unmapped_character_dropped(self) -> None:
        assert TerminalInputDecoder().feed("é") == []

    def test_mouse_press_release(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[<0;5;3M") == [MouseDown(Pos(4, 2), MouseButton.LEFT)]
        assert decoder.feed("\x1b[<0;5;3m") == [MouseUp(Pos(4, 2), MouseButton.LEFT)]
        assert decoder.feed("\x1b[<2;1;1M") == [MouseDown(Pos(0, 0), MouseButton.RIGHT)]
        assert decoder.feed("\x1b[<1;1;1M") == [MouseDown(Pos(0, 0), MouseButton.MIDDLE)]

    def test_mouse_move_and_scroll(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[<35;10;1M") == [MouseMove(Pos(9, 0))]
        assert decoder.feed("\x1b[<64;1;2M") == [Scroll(1, Pos(0, 1))]
        assert decoder.feed("\x1b[<65;1;2M") == [Scroll(-1, Pos(0, 1))]

    def test_split_mouse_report(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[<0;12") == []
        assert decoder.feed(";4M") == [MouseDown(Pos(11, 3))]

    def test_pixel_mouse_reports_map_to_cells(self) -> None:
        decoder = TerminalInputDecoder(RunSettings(cell_width=8, cell_height=16).cell_at)
        assert decoder.feed("\x1b[<35;1;1M") == [MouseMove(Pos(0, 0))]
        assert decoder.feed("\x1b[<0;17;33M") == [MouseDown(Pos(2, 2))]
        assert decoder.feed("\x1b[<0;16;32m") == [MouseUp(Pos(1, 1))]

    def test_mouse_report_past_coordinate_range_is_clamped(self) -> None:
        decoder = TerminalInputDecoder()
        assert decoder.feed("\x1b[<35;70000;99999M") == [MouseMove(Pos(COORD_MAX, COORD_MAX))]
        assert decoder.feed("\x1b[<0;0;0M") == [MouseDown(Pos(0, 0))]


class TestInputReader:
    """Tests for TerminalInputReader over a pipe."""

    def test_multibyte_character_split_across_reads(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            reader = TerminalInputReader(read_fd)
            os.write(write_fd, "é".encode()[:1])
            assert reader._read_available() == ""
            os.write(write_fd, "é".encode()[1:] + b"a")
            assert reader._read_available() == "éa"
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_read_decodes_keys(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            reader = TerminalInputReader(read_fd)
            os.write(write_fd, b"a")
            assert reader.read(0.5) == tap(Scancode.A)
            assert reader.read(0) == []
        finally:
            os.close(read_fd)
            os.close(write_fd)


class TestTerminalRenderer:
    """Tests for escape sequence output."""

    def test_sgr_transition(self) -> None:
        default = (Color.RESET, Color.RESET, Modifier.NONE)
        assert sgr_transition(default, default) == ""
        assert sgr_transition(default, (Color.RED, Color.BLUE, Modifier.BOLD)) == "\x1b[1;31;44m"
        assert sgr_transition((Color.RED, Color.RESET, Modifier.BOLD), (Color.RED, Color.RESET, Modifier.NONE)) == "\x1b[0;31m"

    def test_updates_move_cursor_only_when_needed(self) -> None:
        updates = [
            Update(Pos(0, 0), Cell("a")),
            Update(Pos(1, 0), Cell("b")),
            Update(Pos(3, 2), Cell("c")),
        ]
        assert TerminalRenderer().render_updates(updates) == "\x1b[1;1Hab\x1b[3;4Hc"

    def test_styled_update_resets_at_end(self) -> None:
        updates = [Update(Pos(0, 0), Cell("x", fg=Color.RED))]
        assert TerminalRenderer().render_updates(updates) == "\x1b[1;1H\x1b[31mx\x1b[0m"

    def test_no_updates(self) -> None:
        assert TerminalRenderer().render_updates([]) == ""

    def test_render_buffer(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 2, 2))
        buf.set_string(0, 0, "ab")
        assert TerminalRenderer(reset_at_end=False).render(buf) == "ab\n  "
        assert TerminalRenderer().render(buf) == "ab\n  \x1b[0m"

    def test_text_renderer(self) -> None:
        buf = Buffer.empty(Rect(0, 0, 4, 3))
        buf.set_string(0, 0, "ab")
        assert TextRenderer().render(buf) == "ab"
        assert TextRenderer(preserve_whitespace=True).render(buf) == "ab  \n    \n    "


class TestTerminalPlatform:
    """Tests for TerminalPlatform with a fake stream and reader."""

    def make(self, *batches: list) -> tuple[TerminalPlatform, io.StringIO]:
        stream = io.StringIO()
        platform = TerminalPlatform(RunSettings(), stream=stream, reader=FakeReader(*batches))
        return platform, stream

    def test_size_falls_back_without_tty(self) -> None:
        platform, _ = self.make()
        assert platform.size() == Rect(0, 0, 80, 24)

    def test_draw(self) -> None:
        platform, stream = self.make()
        platform.draw([Update(Pos(2, 1), Cell("z"))])
        platform.flush()
        assert stream.getvalue() == "\x1b[2;3Hz"

    def test_poll_passes_events(self) -> None:
        platform, _ = self.make([KeyDown(Scancode.A)])
        assert platform.poll_input(0.5) == [KeyDown(Scancode.A)]
        assert platform._reader.timeouts == [0.5]

    def test_poll_reports_resize(self) -> None:
        platform, _ = self.make()
        platform.terminal.size = lambda: TerminalSize(10, 20)
        assert platform.poll_input(0) == [Resize(20, 10)]
        assert platform.poll_input(0) == []

    def test_session_restores_terminal(self) -> None:
        platform, stream = self.make()
        platform.terminal.raw_mode = contextlib.nullcontext
        with platform.session():
            stream.write("|")
        output = stream.getvalue()
        before, after = output.split("|")
        assert "\x1b[?1049h" in before
        assert "\x1b[?25l" in before
        assert "\x1b[?1003h" in before
        assert "\x1b[?1049l" in after
        assert "\x1b[?25h" in after
        assert "\x1b[?1003l" in after

    def test_session_requests_pixel_reports(self) -> None:
        stream = io.StringIO()
        settings = RunSettings(alternate_screen=False, hide_cursor=False, pixel_mouse=True)
        platform = TerminalPlatform(settings, stream=stream, reader=FakeReader())
        platform.terminal.raw_mode = contextlib.nullcontext
        with platform.session():
            pass
        assert "\x1b[?1016h" in stream.getvalue()
        assert platform._make_decoder().pixel_to_cell == settings.cell_at

    def test_session_respects_settings(self) -> None:
        stream = io.StringIO()
        settings = RunSettings(alternate_screen=False, hide_cursor=False, mouse_capture=False)
        platform = TerminalPlatform(settings, stream=stream, reader=FakeReader())
        platform.terminal.raw_mode = contextlib.nullcontext
        with platform.session():
            pass
        assert stream.getvalue() == "\x1b[0m"

    def test_title_and_cursor_style(self) -> None:
        platform, stream = self.make()
        platform.apply_commands([
            SetTitle("cell\x1bframe"),
            SetCursorStyle(CursorStyle.BLINKING_BAR),
            SetCursorStyle(CursorStyle.STEADY_BLOCK),
        ])
        assert stream.getvalue() == "\x1b]0;cellframe\x07\x1b[5 q\x1b[2 q"

    def test_cursor_shown_at_position_then_hidden(self) -> None:
        platform, stream = self.make()
        platform.set_cursor(Pos(4, 1))
        assert stream.getvalue() == "\x1b[2;5H\x1b[?25h"
        platform.set_cursor(Pos(0, 0))
        assert stream.getvalue().endswith("\x1b[2;5H\x1b[?25h\x1b[1;1H")
        platform.set_cursor(None)
        assert stream.getvalue().endswith("\x1b[?25l")
        before = stream.getvalue()
        platform.set_cursor(None)
        assert stream.getvalue() == before

    def test_session_restores_cursor_shape(self) -> None:
        platform, stream = self.make()
        platform.terminal.raw_mode = contextlib.nullcontext
        with platform.session():
            platform.apply_commands([SetCursorStyle(CursorStyle.STEADY_UNDERLINE)])
        assert "\x1b[0 q\x1b[0m" in stream.getvalue()
