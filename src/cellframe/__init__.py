"""
cellframe: immediate-mode cell grid rendering

Draw styled cells into a buffer each frame and let a platform put the
changes on a terminal, a window or a canvas.

Quick Start:
    >>> import cellframe as cf
    >>> class Hello:
    ...     def render(self, ctx, buf):
    ...         buf.set_string(0, 0, "Hello", cf.Style(fg=cf.Color.CYAN))
    ...     def should_exit(self):
    ...         return False
    >>> cf.run(cf.TerminalPlatform(), Hello())  # doctest: +SKIP

Features:
    - Rect splitting and centering for layout
    - Buffer of grapheme cells with clipped writes and blend modes
    - Row-major diffs between frames for minimal redraws
    - Hover and click queries against rectangles
    - Dissolve/coalesce animations, title and cursor commands
    - Terminal and headless platforms, plus label/block/line/image widgets
"""

__version__ = "0.1.0"

# Core types
from cellframe.core.anim import AnimationTimer, coalesce, dissolve
from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.command import CursorStyle, SetCursorStyle, SetTitle
from cellframe.core.context import Context
from cellframe.core.diff import Update, diff
from cellframe.core.geometry import Axis, Pos, Rect
from cellframe.core.input import Scancode
from cellframe.core.program import FrameLoop, Platform, Program, run
from cellframe.core.style import ColorMode, Modifier, Style

# Settings
from cellframe.config import RunSettings

# Platforms
from cellframe.platform.headless import HeadlessPlatform
from cellframe.platform.terminal import TerminalPlatform

__all__ = [
    # Version
    "__version__",
    # Core types
    "Axis",
    "Buffer",
    "Cell",
    "Color",
    "ColorMode",
    "Context",
    "Modifier",
    "Pos",
    "Rect",
    "Scancode",
    "Style",
    "Update",
    "diff",
    # Output requests and animations
    "AnimationTimer",
    "CursorStyle",
    "SetCursorStyle",
    "SetTitle",
    "coalesce",
    "dissolve",
    # Running
    "FrameLoop",
    "Platform",
    "Program",
    "RunSettings",
    "run",
    "HeadlessPlatform",
    "TerminalPlatform",
]
