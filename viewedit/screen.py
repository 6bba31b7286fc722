"""Painting buffer lines into the visible terminal window."""

from typing import Optional

from .buffer import LineBuffer
from .constants import EditorConstants
from .geometry import Viewport, clamp, clip_cells, render_line
from .terminal import ClearKind


class ScreenRenderer:
    """Draws the part of a LineBuffer that falls inside the viewport.

    Painting lines never moves the visible cursor: the hardware cursor is
    put back where it was found before returning. The command line (the
    bottom terminal row) is only touched by update_command_text.
    """

    def __init__(self, terminal, viewport: Viewport, filler: str = EditorConstants.FILLER_GLYPH):
        self.terminal = terminal
        self.viewport = viewport
        self.filler = filler

    def _row_text(self, buffer: LineBuffer, line_number: int) -> str:
        if line_number < buffer.line_count():
            return self.viewport.clip(buffer.get_line(line_number))
        return self.filler

    def _paint_row(self, buffer: LineBuffer, line_number: int) -> None:
        self.terminal.move_cursor(0, line_number - self.viewport.origin_row)
        self.terminal.clear(ClearKind.UNTIL_NEWLINE)
        self.terminal.write_text(self._row_text(buffer, line_number))

    def update_line(self, buffer: LineBuffer, line_number: int) -> None:
        """Repaint the single screen row showing line_number."""
        if not self.viewport.contains_row(line_number):
            return
        saved = self.terminal.cursor_position
        self._paint_row(buffer, line_number)
        self.terminal.move_cursor(*saved)
        self.terminal.flush()

    def update_line_until_eof(self, buffer: LineBuffer, line_number: int) -> None:
        """Repaint every screen row from line_number to the bottom of the view.

        Needed after a line is inserted or removed (every later row shifts)
        and after the origin moves.
        """
        start = max(line_number, self.viewport.origin_row)
        end = self.viewport.origin_row + self.viewport.height
        if start >= end:
            return
        saved = self.terminal.cursor_position
        for row in range(start, end):
            self._paint_row(buffer, row)
        self.terminal.move_cursor(*saved)
        self.terminal.flush()

    def print_all(self, buffer: LineBuffer) -> None:
        """Paint every row of the viewport.

        Each row is cleared as it is painted, so the command line keeps
        its content.
        """
        self.update_line_until_eof(buffer, self.viewport.origin_row)

    def update_command_text(self, text: str, cursor_col: Optional[int] = None) -> None:
        """Repaint the command line.

        Args:
            text: Content for the row, clipped to the terminal width.
            cursor_col: Leave the cursor on the command line before this
                character of text; when None the cursor goes back to where
                it was.
        """
        row = self.terminal.status_row
        width = self.terminal.width
        saved = self.terminal.cursor_position
        self.terminal.move_cursor(0, row)
        self.terminal.clear(ClearKind.UNTIL_NEWLINE)
        drawn, starts = render_line(text)
        self.terminal.write_text(clip_cells(drawn, 0, width))
        if cursor_col is None:
            self.terminal.move_cursor(*saved)
        else:
            cell = starts[clamp(cursor_col, 0, len(text))]
            self.terminal.move_cursor(clamp(cell, 0, width - 1), row)
        self.terminal.flush()
