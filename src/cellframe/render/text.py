"""Plain-text snapshots of a buffer, styles dropped."""

from cellframe.core.buffer import Buffer


class TextRenderer:
    """
    Join each row's symbols into a line.

    By default trailing spaces and trailing blank rows are trimmed; with
    ``preserve_whitespace`` every row keeps the buffer's full width.
    """

    def __init__(self, preserve_whitespace: bool = False) -> None:
        self.preserve_whitespace = preserve_whitespace

    def render(self, buffer: Buffer) -> str:
        rows = ["".join(cell.symbol for cell in row) for row in buffer.rows()]
        if self.preserve_whitespace:
            return "\n".join(rows)
        return "\n".join(row.rstrip() for row in rows).rstrip("\n")
