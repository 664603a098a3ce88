"""Context - per-frame input state that programs and widgets query."""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum, auto

from cellframe.core.anim import Effect
from cellframe.core.command import Command
from cellframe.core.geometry import Pos, Rect
from cellframe.core.input import (
    FocusChange,
    Input,
    KeyDown,
    KeyUp,
    MouseButton,
    MouseDown,
    MouseMove,
    MouseUp,
    Resize,
    Scancode,
)

logger = logging.getLogger(__name__)

_Extent = tuple[int, int, int, int]


def _grow(extent: _Extent, pos: Pos) -> _Extent:
    x0, y0, x1, y1 = extent
    return min(x0, pos.x), min(y0, pos.y), max(x1, pos.x), max(y1, pos.y)


class ContextState(Enum):
    """Where the context is in the current tick."""
    IDLE = auto()          # Nothing pending
    ACCUMULATING = auto()  # Events arriving, frame not yet complete
    READY = auto()         # Frame complete, queue may be drained


class Context:
    """
    Accumulated input for one run loop.

    The platform feeds events with :meth:`enqueue`, calls :meth:`mark_ready`
    once the frame's input is complete and :meth:`end_frame` after the
    program has rendered. Key state and the pointer position persist
    across frames; clicks, resize and focus notices last one frame.
    """

    def __init__(self) -> None:
        self._state = ContextState.IDLE
        self._queue: deque[Input] = deque()
        self._keys_down: set[Scancode] = set()
        self._mouse_pos: Pos | None = None
        # Bounding box (min_x, min_y, max_x, max_y) of the pointer while each button is held
        self._presses: dict[MouseButton, _Extent] = {}
        self._clicks: dict[MouseButton, list[_Extent]] = {}
        self._resized: tuple[int, int] | None = None
        self._focus: bool | None = None
        self._queried: list[Rect] = []
        self._animations: list[tuple[Effect, Rect]] = []
        self._commands: list[Command] = []
        self._cursor: Pos | None = None

    @property
    def state(self) -> ContextState:
        return self._state

    # -------------------------------------------------------------------------
    # Platform side
    # -------------------------------------------------------------------------

    def enqueue(self, event: Input) -> None:
        """Record an input event for the current tick."""
        if self._state is ContextState.IDLE:
            self._state = ContextState.ACCUMULATING
        self._queue.append(event)
        self._apply(event)

    handle_input = enqueue

    def mark_ready(self) -> None:
        """The platform has delivered every event for this frame."""
        self._state = ContextState.READY
        logger.debug("frame ready with %d pending events", len(self._queue))

    def end_frame(self) -> None:
        """Drop frame-scoped state and return to idle."""
        self._queue.clear()
        self._clicks.clear()
        self._resized = None
        self._focus = None
        self._queried.clear()
        self._commands.clear()
        self._cursor = None
        self._state = ContextState.IDLE

    def _apply(self, event: Input) -> None:
        if isinstance(event, KeyDown):
            self._keys_down.add(event.code)
        elif isinstance(event, KeyUp):
            self._keys_down.discard(event.code)
        elif isinstance(event, MouseMove):
            self._mouse_pos = event.pos
            for button, extent in self._presses.items():
                self._presses[button] = _grow(extent, event.pos)
        elif isinstance(event, MouseDown):
            self._keys_down.add(event.button.scancode)
            self._presses[event.button] = (event.pos.x, event.pos.y, event.pos.x, event.pos.y)
        elif isinstance(event, MouseUp):
            self._keys_down.discard(event.button.scancode)
            extent = self._presses.pop(event.button, None)
            if extent is not None:
                self._clicks.setdefault(event.button, []).append(_grow(extent, event.pos))
        elif isinstance(event, Resize):
            self._resized = (event.cols, event.rows)
        elif isinstance(event, FocusChange):
            self._focus = event.focused

    # -------------------------------------------------------------------------
    # Program side
    # -------------------------------------------------------------------------

    def take_last_input(self) -> Input | None:
        """
        Pop the oldest unconsumed event of a ready frame.

        Returns None before the frame is ready and once the queue is empty.
        """
        if self._state is not ContextState.READY:
            return None
        if not self._queue:
            self._state = ContextState.IDLE
            return None
        event = self._queue.popleft()
        if not self._queue:
            self._state = ContextState.IDLE
        return event

    def pending(self) -> int:
        """Number of events not yet taken."""
        return len(self._queue)

    def keys_down(self) -> frozenset[Scancode]:
        """Keys and mouse buttons pressed and not yet released."""
        return frozenset(self._keys_down)

    def is_key_down(self, code: int) -> bool:
        return code in self._keys_down

    @property
    def mouse_pos(self) -> Pos | None:
        """Last pointer position reported by a move, if any."""
        return self._mouse_pos

    def hovered(self, area: Rect) -> bool:
        """Whether the pointer rests inside ``area``."""
        self._queried.append(area)
        return self._mouse_pos is not None and area.contains(self._mouse_pos)

    def clicked(self, area: Rect, button: MouseButton) -> bool:
        """
        Whether ``button`` was pressed and released inside ``area`` this frame.

        A press that wandered outside ``area`` before release does not count.
        """
        self._queried.append(area)
        return any(
            area.contains(Pos(x0, y0)) and area.contains(Pos(x1, y1))
            for x0, y0, x1, y1 in self._clicks.get(button, ())
        )

    def left_clicked(self, area: Rect) -> bool:
        return self.clicked(area, MouseButton.LEFT)

    def right_clicked(self, area: Rect) -> bool:
        return self.clicked(area, MouseButton.RIGHT)

    def middle_clicked(self, area: Rect) -> bool:
        return self.clicked(area, MouseButton.MIDDLE)

    def newly_resized_size(self) -> tuple[int, int] | None:
        """The new (cols, rows) if the surface was resized this frame."""
        return self._resized

    def was_resized(self) -> bool:
        return self._resized is not None

    def focus_changed(self) -> bool | None:
        """New focus state if it changed this frame, else None."""
        return self._focus

    def queried_areas(self) -> list[Rect]:
        """Areas passed to hover/click queries during this frame."""
        return list(self._queried)

    # -------------------------------------------------------------------------
    # Output requests
    # -------------------------------------------------------------------------

    def send(self, command: Command) -> None:
        """Queue a command for the platform, applied after this frame is drawn."""
        self._commands.append(command)

    def take_commands(self) -> list[Command]:
        commands, self._commands = self._commands, []
        return commands

    def set_cursor(self, pos: Pos | None) -> None:
        """Show the text cursor at ``pos`` for this frame, or keep it hidden with None."""
        self._cursor = pos

    @property
    def cursor(self) -> Pos | None:
        return self._cursor

    # -------------------------------------------------------------------------
    # Animations
    # -------------------------------------------------------------------------

    def start_animation(self, effect: Effect, area: Rect) -> None:
        """Run ``effect`` over ``area`` on every frame until it finishes."""
        logger.debug("starting %s over %s", type(effect).__name__, area)
        self._animations.append((effect, area))

    def animating(self) -> bool:
        return bool(self._animations)

    def take_animations(self) -> list[tuple[Effect, Rect]]:
        """Remove and return the running animations."""
        animations, self._animations = self._animations, []
        return animations

    def place_animations(self, animations: list[tuple[Effect, Rect]]) -> None:
        """Put animations back after a frame, ahead of any started meanwhile."""
        self._animations[:0] = animations
