"""Core data structures: geometry, styles, the cell buffer and input state."""

from cellframe.core.anim import AnimationTimer, Effect, Interpolation, coalesce, dissolve
from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color, ColorKind
from cellframe.core.command import Command, CursorStyle, SetCursorStyle, SetTitle
from cellframe.core.context import Context, ContextState
from cellframe.core.diff import Update, diff
from cellframe.core.errors import (
    BufferMismatchError,
    CellframeError,
    ColorParseError,
    GeometryError,
)
from cellframe.core.geometry import Axis, Pos, Rect, inverse_split_len, split_len
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
    Scroll,
)
from cellframe.core.program import FrameLoop, Platform, Program, run
from cellframe.core.style import ColorMode, Modifier, Style, register_blender

__all__ = [
    "AnimationTimer",
    "Axis",
    "Buffer",
    "BufferMismatchError",
    "Cell",
    "CellframeError",
    "Color",
    "ColorKind",
    "ColorMode",
    "ColorParseError",
    "Command",
    "Context",
    "ContextState",
    "CursorStyle",
    "Effect",
    "FocusChange",
    "FrameLoop",
    "GeometryError",
    "Input",
    "Interpolation",
    "KeyDown",
    "KeyUp",
    "Modifier",
    "MouseButton",
    "MouseDown",
    "MouseMove",
    "MouseUp",
    "Platform",
    "Pos",
    "Program",
    "Rect",
    "Resize",
    "Scancode",
    "Scroll",
    "SetCursorStyle",
    "SetTitle",
    "Style",
    "Update",
    "coalesce",
    "diff",
    "dissolve",
    "inverse_split_len",
    "register_blender",
    "run",
    "split_len",
]
