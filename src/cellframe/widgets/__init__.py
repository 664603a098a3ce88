"""Widgets drawn into a buffer area each frame.

``cellframe.widgets.image`` needs Pillow (``pip install cellframe[image]``)
and is not imported here.
"""

from cellframe.widgets.base import BaseWidget, Widget
from cellframe.widgets.block import Block, BorderType
from cellframe.widgets.label import Align, Label
from cellframe.widgets.line import Line, LineCapping, LineType

__all__ = [
    "Align",
    "BaseWidget",
    "Block",
    "BorderType",
    "Label",
    "Line",
    "LineCapping",
    "LineType",
    "Widget",
]
