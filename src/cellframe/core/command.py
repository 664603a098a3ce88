"""Requests a program sends to its platform alongside the drawn cells."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class CursorStyle(Enum):
    BLINKING_BLOCK = "blinking-block"
    STEADY_BLOCK = "steady-block"
    BLINKING_UNDERLINE = "blinking-underline"
    STEADY_UNDERLINE = "steady-underline"
    BLINKING_BAR = "blinking-bar"
    STEADY_BAR = "steady-bar"


@dataclass(frozen=True)
class SetTitle:
    """Change the window or terminal title."""
    title: str


@dataclass(frozen=True)
class SetCursorStyle:
    style: CursorStyle


Command = Union[SetTitle, SetCursorStyle]
