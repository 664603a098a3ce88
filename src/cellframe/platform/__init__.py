"""Platforms that put buffers on a surface and feed input back."""

from cellframe.platform.headless import HeadlessPlatform
from cellframe.platform.terminal import Terminal, TerminalPlatform, TerminalSize
from cellframe.platform.terminal_input import TerminalInputDecoder, TerminalInputReader

__all__ = [
    "HeadlessPlatform",
    "Terminal",
    "TerminalInputDecoder",
    "TerminalInputReader",
    "TerminalPlatform",
    "TerminalSize",
]
