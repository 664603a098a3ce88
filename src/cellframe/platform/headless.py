"""Headless platform - an in-memory surface with scripted input."""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from typing import Iterable, Iterator

from cellframe.core.buffer import Buffer
from cellframe.core.command import Command, SetTitle
from cellframe.core.diff import Update, apply
from cellframe.core.geometry import Pos, Rect
from cellframe.core.input import Input, Resize
from cellframe.render.text import TextRenderer


class HeadlessPlatform:
    """
    A platform without a physical surface.

    Each call to :meth:`poll_input` hands out the next scripted batch of
    events. Drawn updates are applied to :attr:`surface` and kept in
    :attr:`frames`, so a test can inspect exactly what a real surface
    would have received. Commands and the cursor position are recorded
    the same way.
    """

    def __init__(
        self,
        cols: int = 80,
        rows: int = 24,
        script: Iterable[Iterable[Input]] = (),
    ) -> None:
        self.surface = Buffer.empty(Rect(0, 0, cols, rows))
        self.frames: list[list[Update]] = []
        self.clears = 0
        self.commands: list[Command] = []
        self.title: str | None = None
        self.cursor: Pos | None = None
        self.active = False
        self._script: deque[list[Input]] = deque(list(batch) for batch in script)
        self._pending: list[Input] = []

    def push(self, *events: Input) -> None:
        """Script one more batch of input."""
        self._script.append(list(events))

    def resize(self, cols: int, rows: int) -> None:
        """Change the surface size and report it with the next poll."""
        self.surface.resize(Rect(0, 0, cols, rows))
        self._pending.append(Resize(cols, rows))

    # -------------------------------------------------------------------------
    # Platform protocol
    # -------------------------------------------------------------------------

    def size(self) -> Rect:
        return self.surface.area

    def poll_input(self, timeout: float) -> list[Input]:
        events, self._pending = self._pending, []
        if self._script:
            events.extend(self._script.popleft())
        return events

    def draw(self, updates: list[Update]) -> None:
        apply(self.surface, updates)
        self.frames.append(list(updates))

    def clear(self) -> None:
        self.surface.reset()
        self.clears += 1

    def apply_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, SetTitle):
                self.title = command.title
        self.commands.extend(commands)

    def set_cursor(self, pos: Pos | None) -> None:
        self.cursor = pos

    def flush(self) -> None:
        pass

    @contextmanager
    def session(self) -> Iterator[None]:
        self.active = True
        try:
            yield
        finally:
            self.active = False

    def text(self) -> str:
        """The surface as plain text, one line per row."""
        return TextRenderer(preserve_whitespace=True).render(self.surface)
