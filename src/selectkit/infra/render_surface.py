"""In-place rendering on a terminal through a rich console.

The surface remembers how many screen rows it has written since the
anchor was saved.  Restoring the anchor moves the cursor up by that
many rows, so the anchor survives the screen scrolling underneath it,
which an absolute ``ESC 7``/``ESC 8`` save point would not.
"""

from __future__ import annotations

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from selectkit.core.frames import Frame, StyledLine

ERASE_BELOW = "\x1b[J"


class RenderSurface:
    """Draw frames over and over at the same place on screen.

    Use as a context manager: entering hides the cursor and leaving
    shows it again whether the block ends normally or by an exception.
    """

    def __init__(self, console: Console) -> None:
        self._console: Console = console
        self._rows_since_anchor: int = 0

    @property
    def console(self) -> Console:
        return self._console

    @property
    def rows_since_anchor(self) -> int:
        return self._rows_since_anchor

    def __enter__(self) -> RenderSurface:
        self.hide_cursor()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.show_cursor()

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def hide_cursor(self) -> None:
        self._console.show_cursor(False)

    def show_cursor(self) -> None:
        self._console.show_cursor(True)

    def save_anchor(self) -> None:
        """Mark the current cursor row as the top of the widget."""
        self._rows_since_anchor = 0

    def restore_to_anchor(self) -> None:
        """Move the cursor back to column 0 of the anchor row."""
        self._console.control(Control.move_to_column(0, y=-self._rows_since_anchor))
        self._rows_since_anchor = 0

    def clear_from_anchor_to_end(self) -> None:
        """Erase from the cursor (assumed at the anchor) to the end of the screen."""
        self._console.file.write(ERASE_BELOW)
        self._console.file.flush()

    def write_line(self, line: StyledLine) -> None:
        text = Text.assemble(*line)
        self._console.control(
            Control.move_to_column(0),
            Control((ControlType.ERASE_IN_LINE, 0)),
        )
        self._console.print(text, soft_wrap=True, highlight=False)
        # The terminal wraps long lines itself; count every screen row.
        width = max(1, self._console.width)
        self._rows_since_anchor += max(1, -(-text.cell_len // width))

    # ------------------------------------------------------------------
    # Compound operations
    # ------------------------------------------------------------------

    def paint(self, frame: Frame) -> None:
        """Replace whatever was drawn since the anchor with ``frame``."""
        self.restore_to_anchor()
        self.clear_from_anchor_to_end()
        for line in frame:
            self.write_line(line)

    def erase(self) -> None:
        """Remove the widget, leaving the cursor at the anchor."""
        self.restore_to_anchor()
        self.clear_from_anchor_to_end()
