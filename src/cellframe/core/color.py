"""Color representation for cells."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from cellframe.core.errors import ColorParseError


class ColorKind(Enum):
    """How a color value is interpreted."""
    RESET = "reset"      # Surface default (unset)
    NAMED = "named"      # 16-color ANSI palette (index 0-15)
    INDEXED = "256"      # Extended 256-color palette
    RGB = "rgb"          # 24-bit true color


# xterm defaults for the 16 named colors
_NAMED_RGB: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

_NAMES: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "gray": 7,
    "darkgray": 8,
    "lightred": 9,
    "lightgreen": 10,
    "lightyellow": 11,
    "lightblue": 12,
    "lightmagenta": 13,
    "lightcyan": 14,
    "white": 15,
}


def _indexed_to_rgb(index: int) -> tuple[int, int, int]:
    if index < 16:
        return _NAMED_RGB[index]
    if index < 232:
        # 6x6x6 color cube
        index -= 16
        levels = (0, 95, 135, 175, 215, 255)
        return levels[index // 36], levels[(index // 6) % 6], levels[index % 6]
    gray = 8 + (index - 232) * 10
    return gray, gray, gray


@dataclass(frozen=True)
class Color:
    """
    A foreground or background color.

    ``Color.RESET`` means "whatever the surface uses by default"; a style
    that wants to leave a channel untouched uses ``None`` instead.
    """
    kind: ColorKind
    value: int | tuple[int, int, int] = 0

    RESET: ClassVar["Color"]
    BLACK: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    MAGENTA: ClassVar["Color"]
    CYAN: ClassVar["Color"]
    GRAY: ClassVar["Color"]
    DARK_GRAY: ClassVar["Color"]
    LIGHT_RED: ClassVar["Color"]
    LIGHT_GREEN: ClassVar["Color"]
    LIGHT_YELLOW: ClassVar["Color"]
    LIGHT_BLUE: ClassVar["Color"]
    LIGHT_MAGENTA: ClassVar["Color"]
    LIGHT_CYAN: ClassVar["Color"]
    WHITE: ClassVar["Color"]

    @classmethod
    def named(cls, index: int) -> "Color":
        """Create one of the 16 ANSI colors."""
        if not 0 <= index <= 15:
            raise ValueError(f"named color index must be 0-15, got {index}")
        return cls(ColorKind.NAMED, index)

    @classmethod
    def from_256(cls, index: int) -> "Color":
        """Create a Color from a 256-color index."""
        if not 0 <= index <= 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        return cls(ColorKind.INDEXED, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a Color from RGB values."""
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(ColorKind.RGB, (r, g, b))

    @classmethod
    def from_u32(cls, value: int) -> "Color":
        """Create a Color from a packed 0xRRGGBB integer."""
        return cls.from_rgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float) -> "Color":
        """Create a Color from hue (0-360) and saturation/lightness (0-100)."""
        h = min(max(h, 0.0), 360.0) / 360.0
        s = min(max(s, 0.0), 100.0) / 100.0
        l = min(max(l, 0.0), 100.0) / 100.0
        r, g, b = colorsys.hls_to_rgb(h, l, s)
        return cls.from_rgb(round(r * 255), round(g * 255), round(b * 255))

    @classmethod
    def parse(cls, text: str) -> "Color":
        """
        Parse a color name, a 256-color index or a ``#rrggbb`` string.

        Names are matched loosely: case, spaces, dashes and underscores are
        ignored, and "bright"/"grey"/"silver" spellings are accepted.
        """
        key = text.strip().lower()
        for ch in " -_":
            key = key.replace(ch, "")
        key = (
            key.replace("bright", "light")
            .replace("grey", "gray")
            .replace("silver", "gray")
            .replace("lightblack", "darkgray")
            .replace("lightwhite", "white")
            .replace("lightgray", "white")
        )
        if key == "reset":
            return cls.RESET
        if key in _NAMES:
            return cls.named(_NAMES[key])
        if key.isdigit():
            index = int(key)
            if index <= 255:
                return cls.from_256(index)
        if key.startswith("#") and len(key) == 7:
            try:
                return cls.from_u32(int(key[1:], 16))
            except ValueError:
                pass
        raise ColorParseError(f"cannot parse color: {text!r}")

    @property
    def is_reset(self) -> bool:
        return self.kind is ColorKind.RESET

    def as_rgb(self) -> tuple[int, int, int] | None:
        """RGB approximation of this color, or None for RESET."""
        if self.kind is ColorKind.RGB:
            assert isinstance(self.value, tuple)
            return self.value
        if self.kind is ColorKind.RESET:
            return None
        assert isinstance(self.value, int)
        return _indexed_to_rgb(self.value)

    def to_sgr_fg(self) -> str:
        """Return SGR parameters for a foreground color."""
        if self.kind is ColorKind.RESET:
            return "39"
        if self.kind is ColorKind.NAMED:
            assert isinstance(self.value, int)
            return str(30 + self.value) if self.value < 8 else str(90 + self.value - 8)
        if self.kind is ColorKind.INDEXED:
            return f"38;5;{self.value}"
        assert isinstance(self.value, tuple)
        r, g, b = self.value
        return f"38;2;{r};{g};{b}"

    def to_sgr_bg(self) -> str:
        """Return SGR parameters for a background color."""
        if self.kind is ColorKind.RESET:
            return "49"
        if self.kind is ColorKind.NAMED:
            assert isinstance(self.value, int)
            return str(40 + self.value) if self.value < 8 else str(100 + self.value - 8)
        if self.kind is ColorKind.INDEXED:
            return f"48;5;{self.value}"
        assert isinstance(self.value, tuple)
        r, g, b = self.value
        return f"48;2;{r};{g};{b}"

    def __str__(self) -> str:
        if self.kind is ColorKind.RESET:
            return "reset"
        if self.kind is ColorKind.RGB:
            assert isinstance(self.value, tuple)
            return "#{:02X}{:02X}{:02X}".format(*self.value)
        if self.kind is ColorKind.NAMED:
            return next(name for name, idx in _NAMES.items() if idx == self.value)
        return str(self.value)


# Initialize class-level color constants
Color.RESET = Color(ColorKind.RESET)
Color.BLACK = Color(ColorKind.NAMED, 0)
Color.RED = Color(ColorKind.NAMED, 1)
Color.GREEN = Color(ColorKind.NAMED, 2)
Color.YELLOW = Color(ColorKind.NAMED, 3)
Color.BLUE = Color(ColorKind.NAMED, 4)
Color.MAGENTA = Color(ColorKind.NAMED, 5)
Color.CYAN = Color(ColorKind.NAMED, 6)
Color.GRAY = Color(ColorKind.NAMED, 7)
Color.DARK_GRAY = Color(ColorKind.NAMED, 8)
Color.LIGHT_RED = Color(ColorKind.NAMED, 9)
Color.LIGHT_GREEN = Color(ColorKind.NAMED, 10)
Color.LIGHT_YELLOW = Color(ColorKind.NAMED, 11)
Color.LIGHT_BLUE = Color(ColorKind.NAMED, 12)
Color.LIGHT_MAGENTA = Color(ColorKind.NAMED, 13)
Color.LIGHT_CYAN = Color(ColorKind.NAMED, 14)
Color.WHITE = Color(ColorKind.NAMED, 15)
