"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"  # A printable character
    SPECIAL = "special"  # Named key: arrows, enter, backspace, escape...


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key: the character or special key name plus modifiers."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    modifiers: frozenset = frozenset()
    raw: str = ""

    @property
    def is_ctrl(self) -> bool:
        return "ctrl" in self.modifiers

    @property
    def is_alt(self) -> bool:
        return "alt" in self.modifiers

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name and not self.modifiers

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        return cls(KeyType.REGULAR, ch, raw=ch)

    @classmethod
    def special(cls, name: str) -> "KeyEvent":
        return cls(KeyType.SPECIAL, name, raw=f"<{name.upper()}>")

    @classmethod
    def ctrl(cls, letter: str) -> "KeyEvent":
        return cls(KeyType.REGULAR, letter, frozenset({"ctrl"}), raw=f"<Ctrl-{letter}>")


_ALIASES = {
    'esc': 'escape',
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'padenter': 'enter',
    'return': 'enter',
    'del': 'delete',
}


class KeyboardHandler:
    """Turns curtsies key names into KeyEvent values."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self) -> Optional[KeyEvent]:
        """Block for the next key and decode it."""
        key = self.terminal.get_key()
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: Token such as 'a', '<UP>', '<Ctrl-q>' or '<Esc+x>'

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', raw=key_str)
            if key_str == '\t':
                return KeyEvent(KeyType.REGULAR, '\t', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(KeyType.SPECIAL, 'backspace', raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', raw=key_str)
            if 1 <= o <= 26:
                ch = chr(ord('a') + o - 1)
                return KeyEvent(KeyType.REGULAR, ch, frozenset({"ctrl"}), raw=key_str)

        return KeyEvent(KeyType.REGULAR, key_str, raw=key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # A literal '-' or '+' is its own base key
        if name in ('-', '+'):
            return KeyEvent(KeyType.REGULAR, name, raw=key_str)
        lower = name.lower().replace('+', '-')
        parts = lower.split('-')
        base = parts[-1] or '-'
        mods = {p for p in parts[:-1] if p}
        if 'meta' in mods or 'esc' in mods:
            mods -= {'meta', 'esc'}
            mods.add('alt')
        # Keep the case of single letters (e.g. '<Esc+A>')
        if len(base) == 1:
            base = name[-1]
            if 'ctrl' in mods:
                base = base.lower()
        base = _ALIASES.get(base, base)

        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(KeyType.REGULAR, ' ', raw=' ')
            if base == 'tab':
                return KeyEvent(KeyType.REGULAR, '\t', raw='\t')

        if mods == {'ctrl'} and len(base) == 1:
            # Terminals send Ctrl-J/Ctrl-M for Enter and Ctrl-H for Backspace
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', raw=key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', raw=key_str)
            if base == '[':
                return KeyEvent(KeyType.SPECIAL, 'escape', raw=key_str)

        if len(base) == 1:
            return KeyEvent(KeyType.REGULAR, base, frozenset(mods), raw=key_str)
        return KeyEvent(KeyType.SPECIAL, base, frozenset(mods), raw=key_str)
