"""Render buffers and diffs to terminal escape sequences."""

from __future__ import annotations

from typing import Iterable

from cellframe.core.buffer import Buffer
from cellframe.core.cell import Cell
from cellframe.core.color import Color
from cellframe.core.diff import Update
from cellframe.core.style import Modifier

# SGR parameter for each modifier
MODIFIER_SGR: dict[Modifier, str] = {
    Modifier.BOLD: "1",
    Modifier.DIM: "2",
    Modifier.ITALIC: "3",
    Modifier.UNDERLINED: "4",
    Modifier.SLOW_BLINK: "5",
    Modifier.RAPID_BLINK: "6",
    Modifier.REVERSED: "7",
    Modifier.HIDDEN: "8",
    Modifier.CROSSED_OUT: "9",
}

_Attrs = tuple[Color, Color, Modifier]
_DEFAULT_ATTRS: _Attrs = (Color.RESET, Color.RESET, Modifier.NONE)


def _attrs(cell: Cell) -> _Attrs:
    return cell.fg, cell.bg, cell.modifier


def sgr_transition(old: _Attrs, new: _Attrs) -> str:
    """
    Shortest SGR sequence taking the terminal from ``old`` attributes to ``new``.

    Turning a modifier off has no portable single code, so any removal
    resets everything and re-applies ``new`` in full.
    """
    if old == new:
        return ""
    old_fg, old_bg, old_mod = old
    fg, bg, mod = new
    parts: list[str] = []
    if old_mod & ~mod:
        parts.append("0")
        old_fg, old_bg, old_mod = _DEFAULT_ATTRS
    for flag, code in MODIFIER_SGR.items():
        if flag in mod and flag not in old_mod:
            parts.append(code)
    if fg != old_fg:
        parts.append(fg.to_sgr_fg())
    if bg != old_bg:
        parts.append(bg.to_sgr_bg())
    if not parts:
        return ""
    return f"\x1b[{';'.join(parts)}m"


class TerminalRenderer:
    """
    Turn cells into ANSI escape sequences.

    Optimizes output by only emitting SGR codes when attributes change and
    only moving the cursor when the next cell is not adjacent.
    """

    def __init__(self, reset_at_end: bool = True):
        self.reset_at_end = reset_at_end

    def render_updates(self, updates: Iterable[Update]) -> str:
        """Escape sequences that draw ``updates`` at their absolute positions."""
        parts: list[str] = []
        attrs = _DEFAULT_ATTRS
        cursor: tuple[int, int] | None = None
        for pos, cell in updates:
            if cursor != (pos.x, pos.y):
                # Rows and columns are 1-indexed
                parts.append(f"\x1b[{pos.y + 1};{pos.x + 1}H")
            new_attrs = _attrs(cell)
            parts.append(sgr_transition(attrs, new_attrs))
            attrs = new_attrs
            parts.append(cell.symbol)
            cursor = (pos.x + 1, pos.y)

        if parts and self.reset_at_end and attrs != _DEFAULT_ATTRS:
            parts.append("\x1b[0m")
        return "".join(parts)

    def render(self, buffer: Buffer) -> str:
        """Render a whole buffer as lines of styled text."""
        lines: list[str] = []
        for row in buffer.rows():
            attrs = _DEFAULT_ATTRS
            line_parts: list[str] = []
            for cell in row:
                new_attrs = _attrs(cell)
                line_parts.append(sgr_transition(attrs, new_attrs))
                attrs = new_attrs
                line_parts.append(cell.symbol)
            # Reset at end of each line to prevent color bleeding
            if attrs != _DEFAULT_ATTRS:
                line_parts.append("\x1b[0m")
            lines.append("".join(line_parts))

        result = "\n".join(lines)
        if self.reset_at_end and result:
            result += "\x1b[0m"
        return result
