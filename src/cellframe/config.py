"""Run loop settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

from cellframe.core.geometry import COORD_MAX, Pos

ENV_PREFIX = "CELLFRAME_"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass
class RunSettings:
    """
    Knobs for a run loop and the platform it drives.

    Attributes:
        target_fps: Upper bound on frames per second
        alternate_screen: Terminal: draw on the alternate screen
        hide_cursor: Terminal: hide the cursor while running
        mouse_capture: Terminal: ask for mouse move/click reports
        pixel_mouse: Terminal: ask for pointer reports in pixels (SGR-Pixels)
        cell_width: Pixel surfaces: width of one cell in pixels
        cell_height: Pixel surfaces: height of one cell in pixels
    """
    target_fps: float = 30.0
    alternate_screen: bool = True
    hide_cursor: bool = True
    mouse_capture: bool = True
    pixel_mouse: bool = False
    cell_width: int = 8
    cell_height: int = 16

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.target_fps}")
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise ValueError("cell size must be positive")

    @property
    def poll_timeout(self) -> float:
        """Seconds a platform may wait for input before the next frame."""
        return 1.0 / self.target_fps

    def cell_at(self, px: int, py: int) -> Pos:
        """The cell under a zero-based pixel position."""
        return Pos(
            min(max(px, 0) // self.cell_width, COORD_MAX),
            min(max(py, 0) // self.cell_height, COORD_MAX),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RunSettings":
        """Build settings from ``CELLFRAME_*`` variables, e.g. ``CELLFRAME_TARGET_FPS``."""
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type in ("bool", bool):
                values[f.name] = _parse_bool(raw)
            elif f.type in ("int", int):
                values[f.name] = int(raw)
            else:
                values[f.name] = float(raw)
        return cls(**values)
