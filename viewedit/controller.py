"""Mode-driven key dispatch."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .buffer import LineBuffer
from .commands import global_registry, navigation_registry
from .keyboard import KeyEvent, KeyType
from .settings import EditorSettings
from .terminal import CursorShape
from .viewport import ViewportCursor

logger = logging.getLogger(__name__)


class ModeKind(Enum):
    NAVIGATE = "navigate"
    INSERT = "insert"
    COMMAND = "command"


@dataclass(frozen=True)
class EditorMode:
    """The current mode; only Command mode carries data (the pending text)."""
    kind: ModeKind
    pending: str = ""

    @classmethod
    def navigate(cls) -> "EditorMode":
        return cls(ModeKind.NAVIGATE)

    @classmethod
    def insert(cls) -> "EditorMode":
        return cls(ModeKind.INSERT)

    @classmethod
    def command(cls, pending: str) -> "EditorMode":
        return cls(ModeKind.COMMAND, pending)


CURSOR_SHAPES = {
    ModeKind.NAVIGATE: CursorShape.BLOCK,
    ModeKind.INSERT: CursorShape.BAR,
    ModeKind.COMMAND: CursorShape.BAR,
}


def _is_text(key_event: KeyEvent) -> bool:
    if key_event.key_type != KeyType.REGULAR or key_event.modifiers:
        return False
    ch = key_event.value
    return len(ch) == 1 and (ord(ch) >= 32 or ch == '\t') and ch != '\x7f'


class ModeController:
    """Routes key events to the buffer and cursor according to the mode.

    Positions are checked here before the buffer is touched, so buffer
    bounds errors never surface from key handling.
    """

    def __init__(
        self,
        buffer: LineBuffer,
        cursor: ViewportCursor,
        settings: Optional[EditorSettings] = None,
        on_save: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.buffer = buffer
        self.cursor = cursor
        self.renderer = cursor.renderer
        self.terminal = cursor.terminal
        self.on_save = on_save
        self.mode = EditorMode.navigate()
        self.should_quit = False
        self.command_cursor = 0
        self.status_message: Optional[str] = None
        self.global_commands = global_registry(settings)
        self.navigation_commands = navigation_registry()
        self._handlers = {
            ModeKind.NAVIGATE: self._handle_navigate,
            ModeKind.INSERT: self._handle_insert,
            ModeKind.COMMAND: self._handle_command,
        }

    def init(self) -> None:
        """Paint the first frame."""
        self.terminal.set_cursor_shape(CURSOR_SHAPES[self.mode.kind])
        self.cursor.show()

    def sync_size(self) -> bool:
        """Pick up a terminal resize, repainting the command line as well.

        Returns:
            True if the size changed
        """
        if not self.cursor.sync_size():
            return False
        if self.mode.kind is ModeKind.COMMAND:
            self.renderer.update_command_text(self.mode.pending, cursor_col=self.command_cursor)
        else:
            self.renderer.update_command_text(self.status_message or "")
        return True

    def handle_key(self, key_event: KeyEvent) -> None:
        """Process one key event to completion."""
        if self.status_message is not None and self.mode.kind is not ModeKind.COMMAND:
            self.status_message = None
            self.renderer.update_command_text("")

        if self.global_commands.execute(self, key_event):
            return
        if key_event.is_special('escape'):
            if self.mode.kind is not ModeKind.NAVIGATE:
                self.set_mode(EditorMode.navigate())
            return
        self._handlers[self.mode.kind](key_event)

    # --- mode transitions ---

    def set_mode(self, mode: EditorMode) -> None:
        previous = self.mode
        self.mode = mode
        if mode.kind != previous.kind:
            self.terminal.set_cursor_shape(CURSOR_SHAPES[mode.kind])
            logger.debug("mode %s -> %s", previous.kind.value, mode.kind.value)

        if mode.kind is ModeKind.COMMAND:
            self.command_cursor = min(self.command_cursor, len(mode.pending))
            self.renderer.update_command_text(mode.pending, cursor_col=self.command_cursor)
            return

        if previous.kind is ModeKind.COMMAND:
            self.command_cursor = 0
            self.renderer.update_command_text(self.status_message or "")
            self.cursor.place_cursor()
        if mode.kind is ModeKind.NAVIGATE and previous.kind is ModeKind.INSERT:
            self.cursor.snap_to_line_end()

    def enter_insert(self) -> None:
        self.set_mode(EditorMode.insert())

    def enter_command(self, prefix: str) -> None:
        self.command_cursor = len(prefix)
        self.set_mode(EditorMode.command(prefix))

    def request_quit(self) -> None:
        self.should_quit = True

    def request_save(self) -> None:
        if self.on_save is None:
            return
        message = self.on_save()
        if message:
            self.show_message(message)

    def show_message(self, message: str) -> None:
        """Show a message on the command line until the next key.

        While the command line is open the message waits until it closes.
        """
        self.status_message = message
        if self.mode.kind is not ModeKind.COMMAND:
            self.renderer.update_command_text(message)

    # --- per-mode handlers ---

    def _handle_navigate(self, key_event: KeyEvent) -> None:
        self.navigation_commands.execute(self, key_event)

    def _handle_insert(self, key_event: KeyEvent) -> None:
        if _is_text(key_event):
            self._insert_char(key_event.value)
        elif key_event.is_special('enter'):
            self._split_line()
        elif key_event.is_special('backspace'):
            self._backspace()
        elif key_event.is_special('delete'):
            self._delete()
        elif key_event.is_special('left'):
            self.cursor.move_left()
        elif key_event.is_special('right'):
            self.cursor.move_right_for_insert()
        elif key_event.is_special('up'):
            self.cursor.move_up(allow_end=True)
        elif key_event.is_special('down'):
            self.cursor.move_down(allow_end=True)

    def _insert_char(self, ch: str) -> None:
        row, col = self.cursor.position
        self.buffer.insert_char(row, col, ch)
        if not self.cursor.goto(row, col + 1):
            self.renderer.update_line(self.buffer, row)

    def _split_line(self) -> None:
        row, col = self.cursor.position
        self.buffer.split_line(row, col)
        if not self.cursor.goto(row + 1, 0):
            self.renderer.update_line_until_eof(self.buffer, row)

    def _backspace(self) -> None:
        row, col = self.cursor.position
        if col == 0:
            if row == 0:
                return
            join_col = self.buffer.merge_line_up(row)
            if not self.cursor.goto(row - 1, join_col):
                self.renderer.update_line_until_eof(self.buffer, row - 1)
            return
        self.buffer.delete_char(row, col - 1)
        if not self.cursor.goto(row, col - 1):
            self.renderer.update_line(self.buffer, row)

    def _delete(self) -> None:
        row, col = self.cursor.position
        if col >= self.buffer.line_length(row):
            if row >= self.buffer.line_count() - 1:
                return
            self.buffer.merge_line_up(row + 1)
            self.renderer.update_line_until_eof(self.buffer, row)
            return
        self.buffer.delete_char(row, col)
        self.renderer.update_line(self.buffer, row)

    def _handle_command(self, key_event: KeyEvent) -> None:
        pending = self.mode.pending
        pos = self.command_cursor
        if _is_text(key_event):
            self.command_cursor = pos + 1
            self.set_mode(EditorMode.command(pending[:pos] + key_event.value + pending[pos:]))
        elif key_event.is_special('backspace'):
            if pos == 0:
                return
            self.command_cursor = pos - 1
            self._edit_command(pending[:pos - 1] + pending[pos:])
        elif key_event.is_special('delete'):
            if pos < len(pending):
                self._edit_command(pending[:pos] + pending[pos + 1:])
        elif key_event.is_special('left'):
            self.command_cursor = max(pos - 1, 0)
            self.set_mode(self.mode)
        elif key_event.is_special('right'):
            self.command_cursor = min(pos + 1, len(pending))
            self.set_mode(self.mode)
        elif key_event.is_special('enter'):
            self.execute_command(pending)

    def _edit_command(self, text: str) -> None:
        if text:
            self.set_mode(EditorMode.command(text))
        else:
            self.set_mode(EditorMode.navigate())

    def execute_command(self, text: str) -> None:
        """Run a command line. No commands are defined; the text stays pending."""
        logger.debug("command line not executed: %r", text)
