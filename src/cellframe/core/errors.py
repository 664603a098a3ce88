"""Exception types raised by the core."""


class CellframeError(Exception):
    """Base class for all cellframe errors."""


class GeometryError(CellframeError, ValueError):
    """A rectangle or position outside the addressable coordinate range."""


class BufferMismatchError(CellframeError, ValueError):
    """Two buffers that must cover the same area do not."""

    def __init__(self, left, right) -> None:
        super().__init__(f"buffer areas differ: {left} != {right}")
        self.left = left
        self.right = right


class ColorParseError(CellframeError, ValueError):
    """A color string could not be understood."""
