"""Keyboard and mouse input from a raw-mode terminal."""

from __future__ import annotations

import codecs
import logging
import os
import re
import select
import sys
import time
from typing import Callable

from cellframe.core.geometry import COORD_MAX, Pos
from cellframe.core.input import (
    Input,
    KeyDown,
    KeyUp,
    MouseButton,
    MouseDown,
    MouseMove,
    MouseUp,
    Scancode,
    Scroll,
)

logger = logging.getLogger(__name__)

# SGR mouse report: ESC [ < button ; column ; row (M = press, m = release)
_SGR_MOUSE = re.compile(r"\[<(\d+);(\d+);(\d+)([Mm])")

_MOUSE_BUTTONS = {0: MouseButton.LEFT, 1: MouseButton.MIDDLE, 2: MouseButton.RIGHT}


def _report_coord(value: str) -> int:
    """One-based terminal coordinate to a zero-based cell index."""
    return min(max(int(value) - 1, 0), COORD_MAX)


def tap(code: Scancode, modifier: Scancode | None = None) -> list[Input]:
    """
    Press and release events for one keystroke.

    Terminals only report presses, so the release is synthesized.
    """
    events: list[Input] = []
    if modifier is not None:
        events.append(KeyDown(modifier))
    events.extend((KeyDown(code), KeyUp(code)))
    if modifier is not None:
        events.append(KeyUp(modifier))
    return events


class TerminalInputDecoder:
    """
    Turns terminal byte streams into normalized input events.

    Escape sequences may arrive split across reads; an unfinished one stays
    buffered until more input arrives or :meth:`flush` is called.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Scancode] = {
        # Arrow keys (CSI)
        '[A': Scancode.UP,
        '[B': Scancode.DOWN,
        '[C': Scancode.RIGHT,
        '[D': Scancode.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Scancode.UP,
        'OB': Scancode.DOWN,
        'OC': Scancode.RIGHT,
        'OD': Scancode.LEFT,
        # Navigation
        '[H': Scancode.HOME,
        '[F': Scancode.END,
        '[1~': Scancode.HOME,
        '[4~': Scancode.END,
        '[5~': Scancode.PAGEUP,
        '[6~': Scancode.PAGEDOWN,
        '[2~': Scancode.INSERT,
        '[3~': Scancode.DELETE,
        # Function keys
        'OP': Scancode.F1,
        'OQ': Scancode.F2,
        'OR': Scancode.F3,
        'OS': Scancode.F4,
        '[15~': Scancode.F5,
        '[17~': Scancode.F6,
        '[18~': Scancode.F7,
        '[19~': Scancode.F8,
        '[20~': Scancode.F9,
        '[21~': Scancode.F10,
        '[23~': Scancode.F11,
        '[24~': Scancode.F12,
    }

    SIMPLE_KEYS: dict[str, Scancode] = {
        '\r': Scancode.ENTER,
        '\n': Scancode.ENTER,
        '\t': Scancode.TAB,
        '\x7f': Scancode.BACKSPACE,
        '\x08': Scancode.BACKSPACE,
    }

    def __init__(self, pixel_to_cell: Callable[[int, int], Pos] | None = None) -> None:
        self._buffer = ""
        # Set when mouse reports carry pixel positions instead of cells
        self.pixel_to_cell = pixel_to_cell

    @property
    def pending(self) -> str:
        """Input received but not yet decoded."""
        return self._buffer

    def feed(self, data: str) -> list[Input]:
        """Decode as much of the buffered input as possible."""
        self._buffer += data
        events: list[Input] = []
        while self._buffer:
            decoded = self._decode_one()
            if decoded is None:
                break
            events.extend(decoded)
        return events

    def flush(self) -> list[Input]:
        """Give up waiting for the rest of a sequence; a lone ESC is the Escape key."""
        if not self._buffer:
            return []
        rest, self._buffer = self._buffer, ""
        if rest == '\x1b':
            return tap(Scancode.ESC)
        logger.debug("dropping incomplete input %r", rest)
        return []

    def _decode_one(self) -> list[Input] | None:
        """Decode the event at the head of the buffer, or None if incomplete."""
        ch = self._buffer[0]

        if ch in self.SIMPLE_KEYS:
            self._buffer = self._buffer[1:]
            return tap(self.SIMPLE_KEYS[ch])

        if ch == '\x1b':
            return self._decode_escape()

        self._buffer = self._buffer[1:]

        # Ctrl+letter arrives as 0x01-0x1a
        if '\x01' <= ch <= '\x1a':
            letter = chr(ord(ch) + ord('a') - 1)
            return tap(Scancode.from_char(letter)[1], Scancode.L_CTRL)

        try:
            modifier, code = Scancode.from_char(ch)
        except KeyError:
            # Unknown or non-ASCII character - skip it
            logger.debug("no scancode for %r", ch)
            return []
        return tap(code, modifier)

    def _decode_escape(self) -> list[Input] | None:
        rest = self._buffer[1:]
        if not rest:
            return None

        if rest.startswith('[<'):
            match = _SGR_MOUSE.match(rest)
            if match is None:
                if re.fullmatch(r"\[<[\d;]*", rest):
                    return None
                self._buffer = rest
                return []
            self._buffer = rest[match.end():]
            return self._decode_mouse(*match.groups())

        if rest[0] == 'O':
            if len(rest) < 2:
                return None
            seq = rest[:2]
        elif rest[0] == '[':
            end_idx = 0
            for i, c in enumerate(rest[1:], start=1):
                if c.isalpha() or c == '~':
                    end_idx = i + 1
                    break
            if end_idx == 0:
                return None
            seq = rest[:end_idx]
        else:
            # Alt+key: report Escape, then decode the key on the next pass
            self._buffer = rest
            return tap(Scancode.ESC)

        self._buffer = rest[len(seq):]
        if seq in self.SEQUENCES:
            return tap(self.SEQUENCES[seq])
        logger.debug("unknown escape sequence %r", seq)
        return []

    def _decode_mouse(self, button: str, col: str, row: str, kind: str) -> list[Input]:
        code = int(button)
        if self.pixel_to_cell is not None:
            pos = self.pixel_to_cell(max(int(col) - 1, 0), max(int(row) - 1, 0))
        else:
            pos = Pos(_report_coord(col), _report_coord(row))
        if code & 64:
            return [Scroll(1 if (code & 1) == 0 else -1, pos)]
        if code & 32:
            return [MouseMove(pos)]
        mouse_button = _MOUSE_BUTTONS.get(code & 3)
        if mouse_button is None:
            return []
        if kind == 'M':
            return [MouseDown(pos, mouse_button)]
        return [MouseUp(pos, mouse_button)]


class TerminalInputReader:
    """
    Non-blocking reader feeding a :class:`TerminalInputDecoder`.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    def __init__(self, fd: int | None = None, decoder: TerminalInputDecoder | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self.decoder = decoder or TerminalInputDecoder()
        # Keeps the tail of a multibyte character split across reads
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def read(self, timeout: float = 0.1) -> list[Input]:
        """
        Read every event available within ``timeout``.

        Returns an empty list if no input arrived.
        """
        if not self.decoder.pending and not self._has_input(timeout):
            return []

        events = self.decoder.feed(self._read_available())
        if self.decoder.pending:
            events.extend(self._wait_for_escape_sequence())
        return events

    def _read_available(self) -> str:
        if not self._has_input(0):
            return ""
        try:
            # Read up to 1024 bytes at once - gets everything available
            data = os.read(self._fd, 1024)
        except BlockingIOError:
            return ""
        return self._utf8.decode(data)

    def _wait_for_escape_sequence(self) -> list[Input]:
        """Wait briefly for a split escape sequence to complete."""
        deadline = time.monotonic() + 0.1  # 100ms total wait
        events: list[Input] = []

        while self.decoder.pending:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                events.extend(self.decoder.flush())
                break
            if self._has_input(min(remaining, 0.025)):
                events.extend(self.decoder.feed(self._read_available()))
        return events

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
