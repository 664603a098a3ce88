"""Normalized input events shared by every platform."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from cellframe.core.geometry import Pos


class Scancode(int):
    """
    A physical key or mouse button, numbered like Linux ``evdev``.

    Any evdev code is a valid scancode; the common ones have names.
    0 is reserved and never produced by a platform.
    """

    ESC: ClassVar["Scancode"]
    BACKSPACE: ClassVar["Scancode"]
    TAB: ClassVar["Scancode"]
    ENTER: ClassVar["Scancode"]
    SPACE: ClassVar["Scancode"]
    L_CTRL: ClassVar["Scancode"]
    L_SHIFT: ClassVar["Scancode"]
    R_SHIFT: ClassVar["Scancode"]
    L_ALT: ClassVar["Scancode"]
    R_CTRL: ClassVar["Scancode"]
    R_ALT: ClassVar["Scancode"]
    HOME: ClassVar["Scancode"]
    UP: ClassVar["Scancode"]
    PAGEUP: ClassVar["Scancode"]
    LEFT: ClassVar["Scancode"]
    RIGHT: ClassVar["Scancode"]
    END: ClassVar["Scancode"]
    DOWN: ClassVar["Scancode"]
    PAGEDOWN: ClassVar["Scancode"]
    INSERT: ClassVar["Scancode"]
    DELETE: ClassVar["Scancode"]
    SCROLL_UP: ClassVar["Scancode"]
    SCROLL_DOWN: ClassVar["Scancode"]
    LMB: ClassVar["Scancode"]
    RMB: ClassVar["Scancode"]
    MMB: ClassVar["Scancode"]

    def __repr__(self) -> str:
        name = _NAMES.get(int(self))
        return f"Scancode.{name}" if name else f"Scancode({int(self)})"

    @classmethod
    def from_name(cls, name: str) -> "Scancode":
        """Look up a named scancode such as ``"ENTER"`` or ``"A"``."""
        for code, code_name in _NAMES.items():
            if code_name == name.upper():
                return cls(code)
        raise KeyError(name)

    @classmethod
    def from_char(cls, char: str) -> tuple["Scancode | None", "Scancode"]:
        """
        Scancodes that type ``char`` on a US layout.

        The first element is ``L_SHIFT`` when the character needs shift,
        otherwise None.
        """
        if char in _CHAR_KEYS:
            return None, cls(_CHAR_KEYS[char])
        if char in _SHIFTED_KEYS:
            return cls.L_SHIFT, cls(_SHIFTED_KEYS[char])
        raise KeyError(char)


_NAMES: dict[int, str] = {
    1: "ESC", 14: "BACKSPACE", 15: "TAB", 28: "ENTER", 57: "SPACE",
    29: "L_CTRL", 42: "L_SHIFT", 54: "R_SHIFT", 56: "L_ALT", 97: "R_CTRL", 100: "R_ALT",
    12: "MINUS", 13: "EQUAL", 26: "LEFTBRACE", 27: "RIGHTBRACE", 39: "SEMICOLON",
    40: "APOSTROPHE", 41: "GRAVE", 43: "BACKSLASH", 51: "COMMA", 52: "DOT", 53: "SLASH",
    102: "HOME", 103: "UP", 104: "PAGEUP", 105: "LEFT", 106: "RIGHT",
    107: "END", 108: "DOWN", 109: "PAGEDOWN", 110: "INSERT", 111: "DELETE",
    177: "SCROLL_UP", 178: "SCROLL_DOWN",
    0x110: "LMB", 0x111: "RMB", 0x112: "MMB",
    87: "F11", 88: "F12",
}
_NAMES.update({59 + i: f"F{i + 1}" for i in range(10)})
_NAMES.update({2 + i: f"K_{(i + 1) % 10}" for i in range(10)})
for _row_start, _letters in ((16, "QWERTYUIOP"), (30, "ASDFGHJKL"), (44, "ZXCVBNM")):
    _NAMES.update({_row_start + i: letter for i, letter in enumerate(_letters)})

_CHAR_KEYS: dict[str, int] = {name.lower(): code for code, name in _NAMES.items() if len(name) == 1}
_CHAR_KEYS.update({str((i + 1) % 10): 2 + i for i in range(10)})
_CHAR_KEYS.update({
    " ": 57, "-": 12, "=": 13, "[": 26, "]": 27, ";": 39, "'": 40,
    "`": 41, "\\": 43, ",": 51, ".": 52, "/": 53, "\t": 15, "\n": 28, "\r": 28,
})
_SHIFTED_KEYS: dict[str, int] = {name: code for code, name in _NAMES.items() if len(name) == 1}
_SHIFTED_KEYS.update({ch: 2 + i for i, ch in enumerate("!@#$%^&*()")})
_SHIFTED_KEYS.update({
    "_": 12, "+": 13, "{": 26, "}": 27, ":": 39, '"': 40,
    "~": 41, "|": 43, "<": 51, ">": 52, "?": 53,
})

for _code, _name in _NAMES.items():
    if _name.isidentifier():
        setattr(Scancode, _name, Scancode(_code))


class MouseButton(Enum):
    """Pointer buttons with the scancode each one reports as."""
    LEFT = 0x110
    RIGHT = 0x111
    MIDDLE = 0x112

    @property
    def scancode(self) -> Scancode:
        return Scancode(self.value)


@dataclass(frozen=True)
class KeyDown:
    code: Scancode


@dataclass(frozen=True)
class KeyUp:
    code: Scancode


@dataclass(frozen=True)
class MouseMove:
    pos: Pos


@dataclass(frozen=True)
class MouseDown:
    pos: Pos
    button: MouseButton = MouseButton.LEFT


@dataclass(frozen=True)
class MouseUp:
    pos: Pos
    button: MouseButton = MouseButton.LEFT


@dataclass(frozen=True)
class Scroll:
    """Wheel movement; positive ``delta`` scrolls up."""
    delta: int
    pos: Pos | None = None


@dataclass(frozen=True)
class Resize:
    """The surface now holds ``cols`` x ``rows`` cells."""
    cols: int
    rows: int


@dataclass(frozen=True)
class FocusChange:
    focused: bool


Input = Union[KeyDown, KeyUp, MouseMove, MouseDown, MouseUp, Scroll, Resize, FocusChange]
