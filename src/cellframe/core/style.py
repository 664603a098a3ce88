"""Style composition: modifiers, color modes and blending."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, Flag, auto
from typing import Callable

from cellframe.core.color import Color

RGB = tuple[int, int, int]
Blender = Callable[[RGB, RGB, float], RGB]


class Modifier(Flag):
    """Text attributes; combine with ``|``."""
    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINED = auto()
    SLOW_BLINK = auto()
    RAPID_BLINK = auto()
    REVERSED = auto()
    HIDDEN = auto()
    CROSSED_OUT = auto()


class ColorMode(Enum):
    """How an incoming color combines with the color already in a cell."""
    OVERWRITE = "overwrite"      # Replace the existing color
    ADDITIVE = "additive"        # Add channels, saturating at 255
    SUBTRACTIVE = "subtractive"  # Subtract incoming from existing, floor at 0
    BLEND = "blend"              # Alpha-composite incoming over existing
    MIX = "mix"                  # Keep the lighter channel


BLEND_ALPHA = 0.5


def _additive(under: RGB, over: RGB, alpha: float) -> RGB:
    return tuple(min(255, round(u + o * alpha)) for u, o in zip(under, over))  # type: ignore[return-value]


def _subtractive(under: RGB, over: RGB, alpha: float) -> RGB:
    return tuple(max(0, round(u - o * alpha)) for u, o in zip(under, over))  # type: ignore[return-value]


def _blend(under: RGB, over: RGB, alpha: float) -> RGB:
    return tuple(round(o * alpha + u * (1.0 - alpha)) for u, o in zip(under, over))  # type: ignore[return-value]


def _mix(under: RGB, over: RGB, alpha: float) -> RGB:
    return tuple(round(max(u, o) * alpha + u * (1.0 - alpha)) for u, o in zip(under, over))  # type: ignore[return-value]


BLENDERS: dict[ColorMode, Blender] = {
    ColorMode.ADDITIVE: _additive,
    ColorMode.SUBTRACTIVE: _subtractive,
    ColorMode.BLEND: _blend,
    ColorMode.MIX: _mix,
}


def register_blender(mode: ColorMode, blender: Blender) -> None:
    """Replace the function used to combine colors for ``mode``."""
    if mode is ColorMode.OVERWRITE:
        raise ValueError("OVERWRITE does not blend")
    BLENDERS[mode] = blender


def blend_colors(
    under: Color,
    over: Color,
    mode: ColorMode,
    alpha: float | None = None,
) -> Color:
    """
    Combine ``over`` drawn on top of ``under``.

    ``alpha`` is the weight of the incoming color, 0.0 to 1.0. When it is
    omitted BLEND uses ``BLEND_ALPHA`` and the other modes use full weight.
    RESET on either side cannot be blended; the incoming color wins.
    """
    if mode is ColorMode.OVERWRITE:
        return over
    under_rgb = under.as_rgb()
    over_rgb = over.as_rgb()
    if under_rgb is None or over_rgb is None:
        return over
    if alpha is None:
        alpha = BLEND_ALPHA if mode is ColorMode.BLEND else 1.0
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be between 0 and 1, got {alpha}")
    return Color.from_rgb(*BLENDERS[mode](under_rgb, over_rgb, alpha))


@dataclass(frozen=True)
class Style:
    """
    Colors and modifiers to apply to a cell.

    ``None`` colors are transparent: applying the style leaves that channel
    as it is. ``sub_modifier`` lists modifiers the style switches off.
    """
    fg: Color | None = None
    bg: Color | None = None
    add_modifier: Modifier = Modifier.NONE
    sub_modifier: Modifier = Modifier.NONE

    @classmethod
    def reset(cls) -> "Style":
        """A style that restores every channel to the surface default."""
        return cls(Color.RESET, Color.RESET, Modifier.NONE, ~Modifier.NONE)

    def with_fg(self, color: Color) -> "Style":
        return replace(self, fg=color)

    def with_bg(self, color: Color) -> "Style":
        return replace(self, bg=color)

    def add(self, modifier: Modifier) -> "Style":
        return replace(
            self,
            add_modifier=self.add_modifier | modifier,
            sub_modifier=self.sub_modifier & ~modifier,
        )

    def remove(self, modifier: Modifier) -> "Style":
        return replace(
            self,
            add_modifier=self.add_modifier & ~modifier,
            sub_modifier=self.sub_modifier | modifier,
        )

    def patch(
        self,
        other: "Style",
        mode: ColorMode = ColorMode.OVERWRITE,
        alpha: float | None = None,
    ) -> "Style":
        """
        Layer ``other`` on top of this style; unset channels fall through.

        A channel set on both sides is combined with :func:`blend_colors`
        under ``mode``. With OVERWRITE the incoming color replaces it.
        """
        return Style(
            fg=_layer(self.fg, other.fg, mode, alpha),
            bg=_layer(self.bg, other.bg, mode, alpha),
            add_modifier=(self.add_modifier & ~other.sub_modifier) | other.add_modifier,
            sub_modifier=(self.sub_modifier & ~other.add_modifier) | other.sub_modifier,
        )

    def is_empty(self) -> bool:
        return self == EMPTY_STYLE


def _layer(under: Color | None, over: Color | None, mode: ColorMode, alpha: float | None) -> Color | None:
    if over is None:
        return under
    if under is None:
        return over
    return blend_colors(under, over, mode, alpha)


EMPTY_STYLE = Style()
