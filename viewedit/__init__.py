"""viewedit - a small modal terminal text editor."""

import logging

from .buffer import LineBuffer
from .controller import EditorMode, ModeController, ModeKind
from .errors import EditorError, EditorIOError, InvalidPosition, NoFileAssociated
from .geometry import Viewport
from .screen import ScreenRenderer
from .viewport import ViewportCursor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'LineBuffer',
    'ScreenRenderer',
    'ViewportCursor',
    'ModeController',
    'EditorMode',
    'ModeKind',
    'Viewport',
    'EditorError',
    'EditorIOError',
    'InvalidPosition',
    'NoFileAssociated',
]
