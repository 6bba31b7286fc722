"""Shared fixtures: a fake terminal that records what is on screen."""

import pytest
from wcwidth import wcwidth

from viewedit.buffer import LineBuffer
from viewedit.controller import ModeController
from viewedit.geometry import Viewport
from viewedit.screen import ScreenRenderer
from viewedit.settings import EditorSettings
from viewedit.terminal import ClearKind
from viewedit.viewport import ViewportCursor


class FakeTerminal:
    """Stands in for TerminalInterface, keeping a grid of visible cells.

    height is the text area; the grid has one more row for the command line.
    Writing never wraps, matching a terminal with line wrap disabled. Like
    a real terminal, a tab jumps to the next multiple of 8 without drawing
    and a wide character fills two cells.
    """

    def __init__(self, width: int = 20, height: int = 5):
        self.width = width
        self.height = height
        self.grid = [[' '] * width for _ in range(height + 1)]
        self._x = 0
        self._y = 0
        self.cursor_shape = None
        self.moves = 0
        self.writes = 0

    @property
    def status_row(self) -> int:
        return self.height

    @property
    def cursor_position(self):
        return self._x, self._y

    def move_cursor(self, x, y):
        self.moves += 1
        self._x, self._y = x, y

    def clear(self, kind):
        if kind is ClearKind.ALL:
            self.grid = [[' '] * self.width for _ in range(self.height + 1)]
            self._x, self._y = 0, 0
        elif kind is ClearKind.CURRENT_LINE:
            self.grid[self._y] = [' '] * self.width
            self._x = 0
        elif kind is ClearKind.UNTIL_NEWLINE:
            for x in range(self._x, self.width):
                self.grid[self._y][x] = ' '
        elif kind is ClearKind.FROM_CURSOR_DOWN:
            for x in range(self._x, self.width):
                self.grid[self._y][x] = ' '
            for y in range(self._y + 1, self.height + 1):
                self.grid[y] = [' '] * self.width

    def write_text(self, text):
        self.writes += 1
        for ch in text:
            if ch == '\t':
                self._x += 8 - self._x % 8
                continue
            w = wcwidth(ch)
            if self._x + w <= self.width:
                if w:
                    self.grid[self._y][self._x] = ch
                    # The second half of a wide character draws nothing
                    for x in range(self._x + 1, self._x + w):
                        self.grid[self._y][x] = ''
                elif self._x > 0:
                    self.grid[self._y][self._x - 1] += ch
            self._x += w

    def set_cursor_shape(self, shape):
        self.cursor_shape = shape

    def flush(self):
        pass

    def resize(self, width, height):
        self.width = width
        self.height = height
        self.grid = [[' '] * width for _ in range(height + 1)]

    def row_text(self, y):
        return ''.join(self.grid[y]).rstrip()

    def screen(self):
        """Text rows currently visible, right-trimmed."""
        return [self.row_text(y) for y in range(self.height)]

    def status_text(self):
        return self.row_text(self.status_row)


def expected_screen(buffer, viewport, filler='~'):
    """What the text area should show for this buffer and viewport."""
    rows = []
    for row in range(viewport.origin_row, viewport.origin_row + viewport.height):
        if row < buffer.line_count():
            rows.append(viewport.clip(buffer.get_line(row)).rstrip())
        else:
            rows.append(filler)
    return rows


class Session:
    """Engine components wired to a FakeTerminal."""

    def __init__(self, lines, width, height):
        self.terminal = FakeTerminal(width, height)
        self.buffer = LineBuffer(lines)
        self.viewport = Viewport()
        self.renderer = ScreenRenderer(self.terminal, self.viewport)
        self.cursor = ViewportCursor(self.buffer, self.renderer)
        self.controller = ModeController(self.buffer, self.cursor, settings=EditorSettings())
        self.controller.init()

    def expected_screen(self):
        return expected_screen(self.buffer, self.viewport)

    def assert_consistent(self):
        """The screen matches the buffer window and the cursor is visible."""
        vp = self.viewport
        row, _ = self.cursor.position
        first_cell, last_cell = self.cursor.cursor_cells()
        assert self.buffer.line_count() >= 1
        assert vp.origin_row <= row < vp.origin_row + vp.height
        assert vp.origin_col <= first_cell <= last_cell < vp.origin_col + vp.width
        assert self.terminal.screen() == self.expected_screen()


@pytest.fixture
def make_session():
    """Factory: make_session(lines, width=20, height=5) -> Session."""
    def _make(lines=None, width=20, height=5):
        return Session(lines if lines is not None else [""], width, height)
    return _make
