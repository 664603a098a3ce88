"""Widget contract and a clipping base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from cellframe.core.buffer import Buffer
from cellframe.core.context import Context
from cellframe.core.geometry import Rect


@runtime_checkable
class Widget(Protocol):
    """Anything that can draw itself into an area of a buffer."""

    def render(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        """Draw into ``buf``; cells outside ``area`` must not change."""
        ...


class BaseWidget(ABC):
    """
    Shared drawing entry point for the bundled widgets.

    Callers use :meth:`draw`, which clips the area to the buffer and skips
    hidden widgets; subclasses only implement :meth:`render` and may assume
    a non-empty area inside the buffer.
    """

    visible: bool = True

    def draw(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        clipped = area.intersection(buf.area)
        if not self.visible or clipped.is_empty():
            return
        self.render(ctx, clipped, buf)

    @abstractmethod
    def render(self, ctx: Context, area: Rect, buf: Buffer) -> None:
        raise NotImplementedError
