"""viewedit CLI entry point.

Allows running via `python -m viewedit` and provides the console script
defined in `pyproject.toml`.

Usage:
    viewedit [--version | --keytest] [filename]
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import EditorConstants
from .errors import EditorError
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging() -> None:
    """Send log records to the file named by VIEWEDIT_LOG, if set.

    The terminal belongs to the editor while it runs, so logging never
    goes to stderr.
    """
    log_file = os.environ.get(EditorConstants.LOG_ENV_VAR)
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def run_keyboard_test() -> None:
    """Show how keys decode, using the editor's own input stack. Quit with ESC."""
    from .terminal import ClearKind, TerminalInterface
    from .keyboard import KeyboardHandler

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    with term.session():
        term.write_text("Keyboard test mode - press keys to see parsed events. Quit with ESC.")
        row = 1
        while True:
            ev = kb.get_key_event()
            if not ev:
                continue
            if ev.is_special('escape'):
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw='{_escape_bytes(ev.raw)}'"]
            if ev.modifiers:
                parts.append(f"mods={'+'.join(sorted(ev.modifiers))}")
            if row >= term.height:
                term.clear(ClearKind.ALL)
                row = 0
            term.move_cursor(0, row)
            term.write_text(' '.join(parts))
            term.flush()
            row += 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if len(args) > 1:
        print("usage: viewedit [--version | --keytest] [filename]", file=sys.stderr)
        return 2

    configure_logging()
    logger = logging.getLogger("viewedit")

    try:
        if args and args[0] in ('--keytest', '--keyboard-test'):
            run_keyboard_test()
            return 0

        from .editor import Editor
        editor = Editor()
        if args:
            editor.load_file(args[0])
        editor.run()
    except EditorError as e:
        logger.exception("editor terminated with an error")
        print(f"viewedit: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
