"""Typer CLI application."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from cellframe.config import RunSettings
from cellframe.core.buffer import Buffer
from cellframe.core.context import Context
from cellframe.core.geometry import Rect
from cellframe.core.program import FrameLoop, run
from cellframe.logging_setup import configure_logging
from cellframe.platform.headless import HeadlessPlatform
from cellframe.platform.terminal import Terminal, TerminalPlatform
from cellframe.render.terminal import TerminalRenderer
from cellframe.render.text import TextRenderer


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="cellframe",
        help="Immediate-mode cell grid rendering for terminals.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console(stderr=True)

    @app.command()
    def demo(
        fps: Annotated[Optional[float], typer.Option("--fps", help="Target frames per second")] = None,
        log_level: Annotated[str, typer.Option("--log-level", "-l", help="Logging level")] = "WARNING",
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Also log to this file")] = None,
    ) -> None:
        """Run the interactive demo in this terminal (q or Esc quits)."""
        from cellframe.cli.demo import DemoProgram

        configure_logging(log_level, log_file, console=console)
        settings = RunSettings.from_env()
        if fps is not None:
            settings = replace(settings, target_fps=fps)
        program = DemoProgram()
        run(TerminalPlatform(settings), program, settings)
        console.print(f"[green]Demo ran {program.frames} frames, {program.clicks} clicks[/]")

    @app.command()
    def snapshot(
        cols: Annotated[int, typer.Option("--cols", "-c", help="Surface width in cells")] = 40,
        rows: Annotated[int, typer.Option("--rows", "-r", help="Surface height in cells")] = 8,
        color: Annotated[bool, typer.Option("--color/--no-color", help="Keep styles as ANSI escapes")] = False,
    ) -> None:
        """Render one frame of the demo off-screen and print it."""
        from cellframe.cli.demo import DemoProgram

        if cols <= 0 or rows <= 0:
            console.print("[red]Surface size must be positive[/]")
            raise typer.Exit(1)

        platform = HeadlessPlatform(cols, rows)
        loop = FrameLoop(platform, DemoProgram())
        with platform.session():
            loop.tick()

        if color:
            print(TerminalRenderer().render(platform.surface))
        else:
            print(TextRenderer().render(platform.surface))

    @app.command()
    def image(
        path: Annotated[Path, typer.Argument(help="Image file to preview")],
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Width in cells (default: terminal width)")] = None,
    ) -> None:
        """Preview an image with half-block cells (needs Pillow)."""
        from cellframe.widgets.image import ImageWidget

        if not path.exists():
            console.print(f"[red]File not found: {path}[/]")
            raise typer.Exit(1)

        widget = ImageWidget.open(path)
        cols = width or Terminal().size().cols
        img_w, img_h = widget.image.size
        # Two pixels per cell vertically
        rows = max(1, round(img_h * cols / max(img_w, 1) / 2))

        buf = Buffer.empty(Rect(0, 0, cols, rows))
        widget.draw(Context(), buf.area, buf)
        print(TerminalRenderer().render(buf))

    return app
