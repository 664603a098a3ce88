"""A small interactive program showing off the widgets."""

from __future__ import annotations

from cellframe.core.buffer import Buffer
from cellframe.core.color import Color
from cellframe.core.command import SetTitle
from cellframe.core.context import Context
from cellframe.core.geometry import Axis
from cellframe.core.input import KeyDown, Scancode
from cellframe.core.style import Modifier, Style
from cellframe.widgets import Align, Block, BorderType, Label, Line

QUIT_KEYS = frozenset({Scancode.Q, Scancode.ESC})


class DemoProgram:
    """
    A bordered panel with a clickable button.

    Clicking the button counts up; ``q`` or Escape quits.
    """

    def __init__(self) -> None:
        self.clicks = 0
        self.frames = 0
        self._quit = False
        self.panel = Block(
            title=" cellframe ",
            border=BorderType.ROUNDED,
            style=Style(fg=Color.CYAN),
            title_style=Style().add(Modifier.BOLD),
        )
        self.button = Label(
            "[ click me ]",
            style=Style(fg=Color.BLACK, bg=Color.GREEN),
            align=Align.CENTER,
            hover_style=Style(bg=Color.LIGHT_GREEN).add(Modifier.BOLD),
        )

    def render(self, ctx: Context, buf: Buffer) -> None:
        while (event := ctx.take_last_input()) is not None:
            if isinstance(event, KeyDown) and event.code in QUIT_KEYS:
                self._quit = True
        if self.frames == 0:
            ctx.send(SetTitle("cellframe demo"))
        self.frames += 1

        self.panel.draw(ctx, buf.area, buf)
        body = Block.inner(buf.area)
        header, rest = body.split_len(Axis.VERTICAL, 2)
        button_row, footer = rest.split_len(Axis.VERTICAL, 1)

        title_row, rule = header.split_len(Axis.VERTICAL, 1)
        Label(f"frame {self.frames}", style=Style(fg=Color.GRAY)).draw(ctx, title_row, buf)
        Line.horizontal(Style(fg=Color.GRAY)).shortened().draw(ctx, rule, buf)
        if ctx.left_clicked(button_row):
            self.clicks += 1
        self.button.draw(ctx, button_row, buf)

        status = f"clicked {self.clicks} time{'s' if self.clicks != 1 else ''} - q to quit"
        Label(status, align=Align.CENTER).draw(ctx, footer.inner(0, 1), buf)

    def should_exit(self) -> bool:
        return self._quit
