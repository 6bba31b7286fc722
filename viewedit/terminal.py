"""Terminal interface using Blessed for display and Curtsies for input."""

import contextlib
import logging
import sys
from collections import deque
from enum import Enum
from typing import Iterator, Optional

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

from .constants import EditorConstants
from .errors import EditorIOError
from .geometry import text_cells

logger = logging.getLogger(__name__)


class ClearKind(Enum):
    """Regions the terminal can erase."""
    ALL = "all"
    CURRENT_LINE = "current_line"
    UNTIL_NEWLINE = "until_newline"
    FROM_CURSOR_DOWN = "from_cursor_down"


class CursorShape(Enum):
    """Cursor shapes used to signal the editing mode."""
    BLOCK = "block"
    BAR = "bar"


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Tracks where it last left the hardware cursor so painters can put it
    back after drawing elsewhere.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self._input: Optional[Input] = None
        self._pending_keys: deque[str] = deque()
        self._cursor_x = 0
        self._cursor_y = 0
        self.cursor_shape: Optional[CursorShape] = None

    @contextlib.contextmanager
    def session(self) -> Iterator["TerminalInterface"]:
        """Own the terminal for the duration of the block.

        Enters raw mode and the fullscreen buffer, disables line wrap and
        opens the curtsies input stream. Everything is undone in reverse
        order when the block exits, including on exceptions.
        """
        with contextlib.ExitStack() as stack:
            try:
                stack.enter_context(self.term.raw())
                self._write(self.term.enter_fullscreen)
                stack.callback(self._write_now, self.term.exit_fullscreen)
                self._write(EditorConstants.DISABLE_LINE_WRAP)
                stack.callback(self._write_now, EditorConstants.ENABLE_LINE_WRAP)
                stack.callback(self._write_now, EditorConstants.CURSOR_DEFAULT)
                self._input = stack.enter_context(Input(keynames='curtsies'))
                stack.callback(self._close_input)
                self.clear(ClearKind.ALL)
                self.flush()
            except OSError as e:
                raise EditorIOError(f"Cannot initialize terminal: {e}") from e
            logger.debug("terminal session started (%sx%s)", self.width, self.height)
            yield self
        logger.debug("terminal session released")

    def _close_input(self) -> None:
        self._input = None
        self._pending_keys.clear()

    def _write(self, text: str, flush: bool = False) -> None:
        try:
            print(text, end='', flush=flush)
        except OSError as e:
            raise EditorIOError(f"Cannot write to terminal: {e}") from e

    def _write_now(self, text: str) -> None:
        self._write(text, flush=True)

    def flush(self) -> None:
        try:
            sys.stdout.flush()
        except OSError as e:
            raise EditorIOError(f"Cannot write to terminal: {e}") from e

    @property
    def cursor_position(self) -> tuple[int, int]:
        """Screen (x, y) of the hardware cursor."""
        return self._cursor_x, self._cursor_y

    def move_cursor(self, x: int, y: int) -> None:
        """Move the cursor to a screen cell without drawing."""
        self._write(self.term.move_xy(x, y))
        self._cursor_x, self._cursor_y = x, y

    def clear(self, kind: ClearKind) -> None:
        """Erase a region of the screen."""
        if kind is ClearKind.ALL:
            self._write(self.term.home + self.term.clear)
            self._cursor_x, self._cursor_y = 0, 0
        elif kind is ClearKind.CURRENT_LINE:
            self._write(self.term.move_xy(0, self._cursor_y) + self.term.clear_eol)
            self._cursor_x = 0
        elif kind is ClearKind.UNTIL_NEWLINE:
            self._write(self.term.clear_eol)
        elif kind is ClearKind.FROM_CURSOR_DOWN:
            self._write(self.term.clear_eos)

    def write_text(self, text: str) -> None:
        """Write text at the cursor; the cursor advances past it."""
        self._write(text)
        self._cursor_x += text_cells(text)

    def set_cursor_shape(self, shape: CursorShape) -> None:
        if shape is CursorShape.BLOCK:
            self._write(EditorConstants.CURSOR_BLINKING_BLOCK)
        else:
            self._write(EditorConstants.CURSOR_BLINKING_BAR)
        self.cursor_shape = shape

    def get_key(self) -> Optional[str]:
        """Block for the next key token from curtsies.

        Paste events are unpacked so callers always see single keys.

        Returns:
            A curtsies key name, or None outside a session.
        """
        if self._pending_keys:
            return self._pending_keys.popleft()
        if self._input is None:
            return None
        try:
            evt = next(self._input)
        except OSError as e:
            raise EditorIOError(f"Cannot read from terminal: {e}") from e
        if isinstance(evt, PasteEvent):
            self._pending_keys.extend(str(e) for e in evt.events)
            return self._pending_keys.popleft() if self._pending_keys else None
        return str(evt)

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return max(self.term.width, 1)

    @property
    def height(self) -> int:
        """Terminal height in rows (excluding the command line)."""
        return max(self.term.height - EditorConstants.STATUS_ROWS, 1)

    @property
    def status_row(self) -> int:
        """Screen row of the command line."""
        return max(self.term.height - 1, 0)
