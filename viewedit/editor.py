"""Editor session: wires the components together and owns the event loop."""

import logging
import os
import tempfile
from typing import Optional

from .buffer import LineBuffer
from .constants import EditorConstants
from .controller import ModeController
from .errors import EditorIOError, NoFileAssociated
from .geometry import Viewport
from .keyboard import KeyboardHandler
from .screen import ScreenRenderer
from .settings import EditorSettings, load_settings
from .terminal import TerminalInterface
from .viewport import ViewportCursor

logger = logging.getLogger(__name__)


class Editor:
    """Main editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or load_settings()
        self.filename: Optional[str] = None
        self._build(LineBuffer())

    def _build(self, buffer: LineBuffer) -> None:
        self.buffer = buffer
        self.viewport = Viewport()
        self.renderer = ScreenRenderer(self.terminal, self.viewport, filler=self.settings.filler)
        self.cursor = ViewportCursor(self.buffer, self.renderer)
        self.controller = ModeController(
            self.buffer, self.cursor, settings=self.settings, on_save=self._save_from_key
        )

    @property
    def running(self) -> bool:
        return not self.controller.should_quit

    def run(self) -> None:
        """Run the main editor loop.

        The terminal is released on every exit path; errors propagate
        to the caller after that.
        """
        with self.terminal.session():
            self.controller.init()
            while not self.controller.should_quit:
                key_event = self.keyboard.get_key_event()
                if key_event is None:
                    continue
                self.controller.sync_size()
                self.controller.handle_key(key_event)

    def load_file(self, filename: str) -> None:
        """Load a file into the editor.

        A missing file starts an empty buffer that will be created on save.

        Args:
            filename: Path to file to load
        """
        self.filename = filename
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.info("%s does not exist yet, starting empty", filename)
            self._build(LineBuffer())
            return
        except (OSError, UnicodeDecodeError) as e:
            raise EditorIOError(f"Cannot read {filename}: {e}", path=filename) from e
        self._build(LineBuffer.from_text(content))
        logger.info("loaded %s (%d lines)", filename, self.buffer.line_count())

    def save_file(self, filename: Optional[str] = None) -> str:
        """Save the buffer atomically.

        Args:
            filename: Path to save to; defaults to the associated file

        Returns:
            The path written

        Raises:
            NoFileAssociated: No path given and none associated
            EditorIOError: The write failed
        """
        path = filename or self.filename
        if not path:
            raise NoFileAssociated()

        content = self.buffer.text()
        dir_name = os.path.dirname(path) or '.'
        suffix = os.path.splitext(path)[1]
        temp_filename = None
        try:
            # Write beside the target so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except OSError as e:
            if temp_filename and os.path.exists(temp_filename):
                os.remove(temp_filename)
            raise EditorIOError(f"Cannot save to {path}: {e}", path=path) from e

        self.filename = path
        self.buffer.modified = False
        logger.info("saved %s", path)
        return path

    def _save_from_key(self) -> str:
        try:
            path = self.save_file()
        except NoFileAssociated as e:
            return str(e)
        return EditorConstants.WRITTEN_MESSAGE.format(path)
