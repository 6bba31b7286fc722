"""Document cursor and the scrolling window onto the buffer."""

import logging

from .buffer import LineBuffer
from .geometry import clamp, column_cells, saturating_sub, scroll_origin
from .screen import ScreenRenderer

logger = logging.getLogger(__name__)


class ViewportCursor:
    """Owns the document cursor and the viewport origin.

    The document cursor (row, col) is authoritative; the screen cursor is
    derived from it and the origin. The origin only ever moves by the
    smallest amount that keeps the cursor visible, and the viewport is
    repainted only when the origin actually moves.
    """

    def __init__(self, buffer: LineBuffer, renderer: ScreenRenderer):
        self.buffer = buffer
        self.renderer = renderer
        self.viewport = renderer.viewport
        self.terminal = renderer.terminal
        self.row = 0
        self.col = 0
        self.viewport.width = self.terminal.width
        self.viewport.height = self.terminal.height

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col

    def cursor_cells(self) -> tuple[int, int]:
        """First and last screen cell, in line coordinates, under the cursor."""
        return column_cells(self.buffer.get_line(self.row), self.col)

    def screen_position(self) -> tuple[int, int]:
        """Screen (x, y) of the document cursor."""
        return self.viewport.to_screen(self.row, self.cursor_cells()[0])

    def place_cursor(self) -> None:
        self.terminal.move_cursor(*self.screen_position())
        self.terminal.flush()

    def show(self) -> None:
        """Full initial paint, then put the cursor in place."""
        self.viewport.width = self.terminal.width
        self.viewport.height = self.terminal.height
        self._scroll_to_cursor()
        self.renderer.print_all(self.buffer)
        self.place_cursor()

    def sync_size(self) -> bool:
        """Pick up a terminal resize; repaints everything if the size changed.

        Returns:
            True if the size changed
        """
        width, height = self.terminal.width, self.terminal.height
        if (width, height) == (self.viewport.width, self.viewport.height):
            return False
        logger.debug("viewport resized to %sx%s", width, height)
        self.viewport.width = width
        self.viewport.height = height
        self._scroll_to_cursor()
        self.renderer.print_all(self.buffer)
        self.place_cursor()
        return True

    def _scroll_to_cursor(self) -> bool:
        vp = self.viewport
        origin_row = scroll_origin(vp.origin_row, self.row, vp.height)
        first_cell, last_cell = self.cursor_cells()
        # Bring the far edge of a wide character in first, then its start
        origin_col = scroll_origin(vp.origin_col, last_cell, vp.width)
        origin_col = scroll_origin(origin_col, first_cell, vp.width)
        if (origin_row, origin_col) == (vp.origin_row, vp.origin_col):
            return False
        logger.debug(
            "scroll origin (%s, %s) -> (%s, %s)",
            vp.origin_row, vp.origin_col, origin_row, origin_col,
        )
        vp.origin_row = origin_row
        vp.origin_col = origin_col
        return True

    def goto(self, target_row: int, target_col: int) -> bool:
        """Move the document cursor, scrolling minimally if needed.

        The target is clamped to the buffer (a column may sit one past the
        last character). A shifted origin repaints the whole viewport;
        otherwise only the hardware cursor moves.

        Returns:
            True if the viewport scrolled
        """
        self.row = clamp(target_row, 0, self.buffer.line_count() - 1)
        self.col = clamp(target_col, 0, self.buffer.line_length(self.row))
        scrolled = self._scroll_to_cursor()
        if scrolled:
            self.renderer.update_line_until_eof(self.buffer, self.viewport.origin_row)
        self.place_cursor()
        return scrolled

    def _line_end(self, row: int, allow_end: bool) -> int:
        length = self.buffer.line_length(row)
        return length if allow_end else saturating_sub(length, 1)

    def move_up(self, allow_end: bool = False) -> bool:
        if self.row == 0:
            return self.goto(self.row, min(self.col, self._line_end(self.row, allow_end)))
        target = self.row - 1
        return self.goto(target, min(self.col, self._line_end(target, allow_end)))

    def move_down(self, allow_end: bool = False) -> bool:
        if self.row >= self.buffer.line_count() - 1:
            return self.goto(self.row, min(self.col, self._line_end(self.row, allow_end)))
        target = self.row + 1
        return self.goto(target, min(self.col, self._line_end(target, allow_end)))

    def move_left(self) -> bool:
        return self.goto(self.row, saturating_sub(self.col, 1))

    def move_right(self) -> bool:
        """Navigate-mode move: stops on the last character."""
        return self.goto(self.row, min(self.col + 1, self._line_end(self.row, False)))

    def move_right_for_insert(self) -> bool:
        """Insert-mode move: may stop one past the last character."""
        return self.goto(self.row, min(self.col + 1, self._line_end(self.row, True)))

    def snap_to_line_end(self) -> bool:
        """Pull the column back onto the last character, if it is past it."""
        end = self._line_end(self.row, False)
        if self.col <= end:
            return False
        return self.goto(self.row, end)
