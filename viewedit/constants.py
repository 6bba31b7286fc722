"""Constants and configuration for the viewedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    FILLER_GLYPH = "~"  # Drawn on rows past the end of the buffer
    STATUS_ROWS = 1  # Bottom row is reserved for the command line
    TAB_SIZE = 8
    CONTROL_GLYPH = "?"  # Drawn in place of control characters

    # Terminal control sequences blessed has no capability for
    CURSOR_BLINKING_BLOCK = "\x1b[1 q"
    CURSOR_BLINKING_BAR = "\x1b[5 q"
    CURSOR_DEFAULT = "\x1b[0 q"
    DISABLE_LINE_WRAP = "\x1b[?7l"
    ENABLE_LINE_WRAP = "\x1b[?7h"

    # Default global bindings (combined with Ctrl)
    QUIT_KEY = "q"
    SAVE_KEY = "s"

    # Characters that open the command line from Navigate mode
    COMMAND_PREFIXES = (":", "\\")

    # Settings file
    APP_NAME = "viewedit"
    SETTINGS_FILENAME = "settings.json"

    # Environment variable naming a debug log file
    LOG_ENV_VAR = "VIEWEDIT_LOG"

    # Status messages
    NO_FILE_NAME_MESSAGE = "No file name"
    WRITTEN_MESSAGE = '"{}" written'
