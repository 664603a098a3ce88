"""Terminal platform - raw-mode terminal I/O driving the frame loop."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import ContextManager, Iterator, TextIO

from cellframe.config import RunSettings
from cellframe.core.command import Command, CursorStyle, SetCursorStyle, SetTitle
from cellframe.core.diff import Update
from cellframe.core.geometry import Pos, Rect
from cellframe.core.input import Input, Resize
from cellframe.platform.terminal_input import TerminalInputDecoder, TerminalInputReader
from cellframe.render.terminal import TerminalRenderer

logger = logging.getLogger(__name__)

# DECSCUSR shape parameters
CURSOR_SHAPES: dict[CursorStyle, int] = {
    CursorStyle.BLINKING_BLOCK: 1,
    CursorStyle.STEADY_BLOCK: 2,
    CursorStyle.BLINKING_UNDERLINE: 3,
    CursorStyle.STEADY_UNDERLINE: 4,
    CursorStyle.BLINKING_BAR: 5,
    CursorStyle.STEADY_BAR: 6,
}


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Escape-sequence helpers bound to one output stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def size(self) -> TerminalSize:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size(self.stream.fileno())
            return TerminalSize(size.lines, size.columns)
        except (OSError, ValueError, AttributeError):
            return TerminalSize(24, 80)

    def write(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()

    def clear(self) -> None:
        """Clear screen and move cursor to home."""
        self.write('\x1b[2J\x1b[H')

    def reset(self) -> None:
        """Reset all terminal attributes."""
        self.write('\x1b[0m')

    def move_cursor(self, x: int, y: int) -> None:
        """Move the cursor to a zero-based cell."""
        self.write(f'\x1b[{y + 1};{x + 1}H')

    def show_cursor(self, visible: bool) -> None:
        self.write('\x1b[?25h' if visible else '\x1b[?25l')

    def set_cursor_shape(self, shape: int) -> None:
        """DECSCUSR; 0 restores the terminal's default shape."""
        self.write(f'\x1b[{shape} q')

    def set_title(self, title: str) -> None:
        printable = ''.join(ch for ch in title if ch.isprintable())
        self.write(f'\x1b]0;{printable}\x07')

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows - no termios
            yield
            return
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @contextmanager
    def _toggle(self, enable: str, disable: str) -> Iterator[None]:
        self.write(enable)
        self.flush()
        try:
            yield
        finally:
            self.write(disable)
            self.flush()

    def alternate_screen(self) -> ContextManager:
        """Use alternate screen buffer (preserves scrollback)."""
        return self._toggle('\x1b[?1049h', '\x1b[?1049l')

    def hidden_cursor(self) -> ContextManager:
        return self._toggle('\x1b[?25l', '\x1b[?25h')

    def mouse_capture(self, pixels: bool = False) -> ContextManager:
        """Report every pointer move and click in SGR encoding, optionally in pixels."""
        if pixels:
            return self._toggle('\x1b[?1003h\x1b[?1016h', '\x1b[?1016l\x1b[?1003l')
        return self._toggle('\x1b[?1003h\x1b[?1006h', '\x1b[?1006l\x1b[?1003l')


class TerminalPlatform:
    """
    Runs programs in the controlling terminal.

    Cell diffs are written as cursor moves plus styled runs. Key presses
    are decoded to scancodes; since terminals never report key releases,
    every press is immediately followed by a synthesized release.
    """

    def __init__(
        self,
        settings: RunSettings | None = None,
        stream: TextIO | None = None,
        reader: TerminalInputReader | None = None,
    ) -> None:
        self.settings = settings or RunSettings()
        self.terminal = Terminal(stream)
        self.renderer = TerminalRenderer()
        self._reader = reader
        self._last_size = self.terminal.size()
        self._cursor_visible = False
        self._cursor_styled = False

    def size(self) -> Rect:
        size = self.terminal.size()
        return Rect(0, 0, size.cols, size.rows)

    def poll_input(self, timeout: float) -> list[Input]:
        if self._reader is None:
            self._reader = TerminalInputReader(decoder=self._make_decoder())
        events = self._reader.read(timeout)
        size = self.terminal.size()
        if size != self._last_size:
            logger.debug("terminal resized to %dx%d", size.cols, size.rows)
            self._last_size = size
            events.append(Resize(size.cols, size.rows))
        return events

    def _make_decoder(self) -> TerminalInputDecoder:
        if self.settings.pixel_mouse:
            return TerminalInputDecoder(self.settings.cell_at)
        return TerminalInputDecoder()

    def draw(self, updates: list[Update]) -> None:
        self.terminal.write(self.renderer.render_updates(updates))

    def clear(self) -> None:
        self.terminal.reset()
        self.terminal.clear()

    def apply_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, SetTitle):
                self.terminal.set_title(command.title)
            elif isinstance(command, SetCursorStyle):
                self.terminal.set_cursor_shape(CURSOR_SHAPES[command.style])
                self._cursor_styled = True
            else:
                logger.debug("ignoring unsupported command %r", command)

    def set_cursor(self, pos: Pos | None) -> None:
        """Park the visible cursor at ``pos`` after drawing, or hide it again."""
        if pos is not None:
            self.terminal.move_cursor(pos.x, pos.y)
            if not self._cursor_visible:
                self.terminal.show_cursor(True)
                self._cursor_visible = True
        elif self._cursor_visible:
            if self.settings.hide_cursor:
                self.terminal.show_cursor(False)
            self._cursor_visible = False

    def flush(self) -> None:
        self.terminal.flush()

    @contextmanager
    def session(self) -> Iterator[None]:
        """Full TUI mode: alternate screen, hidden cursor, raw input."""
        with ExitStack() as stack:
            if self.settings.alternate_screen:
                stack.enter_context(self.terminal.alternate_screen())
            if self.settings.hide_cursor:
                stack.enter_context(self.terminal.hidden_cursor())
            stack.enter_context(self.terminal.raw_mode())
            if self.settings.mouse_capture:
                stack.enter_context(self.terminal.mouse_capture(self.settings.pixel_mouse))
            try:
                yield
            finally:
                if self._cursor_styled:
                    self.terminal.set_cursor_shape(0)
                self.terminal.reset()
                self.terminal.flush()
