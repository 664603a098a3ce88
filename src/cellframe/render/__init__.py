"""Renderers for turning buffers and diffs into output formats."""

from cellframe.render.terminal import TerminalRenderer, sgr_transition
from cellframe.render.text import TextRenderer

__all__ = ["TerminalRenderer", "TextRenderer", "sgr_transition"]
