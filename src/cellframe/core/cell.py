"""Cell - atomic unit of a buffer."""

from dataclasses import dataclass, field

from cellframe.core.color import Color
from cellframe.core.style import ColorMode, Modifier, Style, blend_colors


@dataclass(slots=True)
class Cell:
    """
    A single grid position: one glyph plus its colors and modifiers.

    The symbol is a string rather than a character so grapheme clusters
    made of several code points survive unchanged. Cells compare equal
    when symbol and style match; ``skip`` is a rendering hint and does not
    take part in comparisons.
    """
    symbol: str = ' '
    fg: Color = Color.RESET
    bg: Color = Color.RESET
    modifier: Modifier = Modifier.NONE
    skip: bool = field(default=False, compare=False)

    def copy(self) -> "Cell":
        """Create a copy of this cell."""
        return Cell(
            symbol=self.symbol,
            fg=self.fg,
            bg=self.bg,
            modifier=self.modifier,
            skip=self.skip,
        )

    def set_symbol(self, symbol: str) -> "Cell":
        self.symbol = symbol
        return self

    def set_style(
        self,
        style: Style,
        mode: ColorMode = ColorMode.OVERWRITE,
        alpha: float | None = None,
    ) -> "Cell":
        """
        Apply ``style`` to this cell.

        In blending modes the foreground is composited over the existing
        foreground, or over the existing background when the cell has no
        foreground of its own. ``alpha`` weights the incoming colors.
        """
        if style.fg is not None:
            if mode is ColorMode.OVERWRITE:
                self.fg = style.fg
            else:
                under = self.bg if self.fg.is_reset else self.fg
                self.fg = blend_colors(under, style.fg, mode, alpha)
        if style.bg is not None:
            self.bg = blend_colors(self.bg, style.bg, mode, alpha)
        self.modifier = (self.modifier & ~style.sub_modifier) | style.add_modifier
        return self

    def style(self) -> Style:
        """The cell's full style, with every channel set."""
        return Style(fg=self.fg, bg=self.bg, add_modifier=self.modifier)

    def reset(self) -> None:
        """Return the cell to the blank state."""
        self.symbol = ' '
        self.fg = Color.RESET
        self.bg = Color.RESET
        self.modifier = Modifier.NONE
        self.skip = False

    def is_blank(self) -> bool:
        """Check if this cell is a default-styled space."""
        return self == BLANK


BLANK = Cell()
