"""Error types raised by the editing engine."""

from typing import Optional

from .constants import EditorConstants


class EditorError(Exception):
    """Base class for all editor errors."""


class InvalidPosition(EditorError):
    """A row/column lies outside the current buffer bounds.

    Key dispatch validates positions before touching the buffer, so this
    signals a broken caller contract rather than a user mistake.
    """

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        super().__init__(message)
        self.row = row
        self.col = col


class NoFileAssociated(EditorError):
    """Save was requested but the buffer has no file path."""

    def __init__(self, message: str = EditorConstants.NO_FILE_NAME_MESSAGE):
        super().__init__(message)


class EditorIOError(EditorError):
    """File or terminal I/O failed. Never retried."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
