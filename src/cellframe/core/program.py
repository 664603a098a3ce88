"""Program and platform contracts, and the frame loop that binds them."""

from __future__ import annotations

import logging
import time
from typing import Callable, ContextManager, Protocol, runtime_checkable

from cellframe.config import RunSettings
from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.command import Command
from cellframe.core.context import Context
from cellframe.core.diff import Update, diff_buffers
from cellframe.core.errors import CellframeError
from cellframe.core.geometry import Pos, Rect
from cellframe.core.input import Input

logger = logging.getLogger(__name__)

# No glyph is ever empty, so a buffer of these differs from anything rendered.
_STALE = Cell(symbol="")


@runtime_checkable
class Program(Protocol):
    """What an application implements."""

    def render(self, ctx: Context, buf: Buffer) -> None:
        """Draw the current frame into ``buf``, in place."""
        ...

    def should_exit(self) -> bool:
        """Checked after every render; True ends the loop."""
        ...


@runtime_checkable
class Platform(Protocol):
    """A physical surface plus its input source."""

    def size(self) -> Rect:
        """Cells currently available on the surface."""
        ...

    def poll_input(self, timeout: float) -> list[Input]:
        """Events that arrived since the last call, waiting at most ``timeout``."""
        ...

    def draw(self, updates: list[Update]) -> None:
        ...

    def clear(self) -> None:
        ...

    def flush(self) -> None:
        ...

    def apply_commands(self, commands: list[Command]) -> None:
        """Carry out title and cursor requests; unsupported ones are ignored."""
        ...

    def set_cursor(self, pos: Pos | None) -> None:
        """Show the text cursor at ``pos``, or hide it."""
        ...

    def session(self) -> ContextManager[None]:
        """Acquire the surface for the duration of a run."""
        ...


class FrameLoop:
    """
    Drives a program on a platform, one tick at a time.

    Two buffers are kept: the one last shown and the one being drawn. They
    trade places only after a render succeeds, so a failed or skipped tick
    never desynchronizes the diff.
    """

    def __init__(
        self,
        platform: Platform,
        program: Program,
        settings: RunSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.platform = platform
        self.program = program
        self.settings = settings or RunSettings()
        self.context = Context()
        area = platform.size()
        self._buffers = [Buffer.filled(area, _STALE), Buffer.empty(area)]
        self._current = 1
        self.frame_count = 0
        self._clock = clock
        self._last_tick: float | None = None

    @property
    def previous_buffer(self) -> Buffer:
        """What the surface is showing."""
        return self._buffers[1 - self._current]

    @property
    def current_buffer(self) -> Buffer:
        return self._buffers[self._current]

    def feed(self, events: list[Input]) -> None:
        for event in events:
            self.context.enqueue(event)

    def tick(self) -> list[Update]:
        """Run one frame and return the updates sent to the surface."""
        self.feed(self.platform.poll_input(self.settings.poll_timeout))
        self.context.mark_ready()
        try:
            area = self.platform.size()
            if area != self.previous_buffer.area:
                self._resize(area)

            target = self.current_buffer
            target.reset()
            self.program.render(self.context, target)
            if target.area != area:
                self._buffers[self._current] = Buffer.empty(area)
                raise CellframeError(
                    f"render changed the buffer area from {area} to {target.area}"
                )

            self._animate(target)

            updates = diff_buffers(self.previous_buffer, target)
            self.platform.draw(updates)
            commands = self.context.take_commands()
            if commands:
                self.platform.apply_commands(commands)
            self.platform.set_cursor(self.context.cursor)
            self.platform.flush()
            self._current = 1 - self._current
            self.frame_count += 1
            logger.debug("frame %d: %d cells updated", self.frame_count, len(updates))
            return updates
        finally:
            self.context.end_frame()

    def run(self) -> None:
        """Tick until the program asks to exit."""
        logger.info("starting %s on %s", type(self.program).__name__, type(self.platform).__name__)
        with self.platform.session():
            while True:
                self.tick()
                if self.program.should_exit():
                    break
        logger.info("exited after %d frames", self.frame_count)

    def _elapsed(self) -> float:
        """Seconds since the previous tick; zero on the first."""
        now = self._clock()
        elapsed = 0.0 if self._last_tick is None else now - self._last_tick
        self._last_tick = now
        return elapsed

    def _animate(self, target: Buffer) -> None:
        elapsed = self._elapsed()
        animations = self.context.take_animations()
        for effect, area in animations:
            effect.process(elapsed, target, area)
        running = [(effect, area) for effect, area in animations if effect.running()]
        if len(running) < len(animations):
            logger.debug("%d animations finished", len(animations) - len(running))
        self.context.place_animations(running)

    def _resize(self, area: Rect) -> None:
        logger.info("surface resized to %s", area)
        self._buffers[1 - self._current] = Buffer.filled(area, _STALE)
        self._buffers[self._current] = Buffer.empty(area)
        self.platform.clear()


def run(platform: Platform, program: Program, settings: RunSettings | None = None) -> None:
    """Run ``program`` on ``platform`` until it exits."""
    FrameLoop(platform, program, settings).run()
