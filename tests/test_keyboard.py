"""Test keyboard input handling."""

import pytest

from viewedit.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self, keys=()):
        self._key_queue = list(keys)

    def get_key(self):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_regular_character(handler):
    event = handler.parse_key('a')
    assert event == KeyEvent(KeyType.REGULAR, 'a', raw='a')
    assert not event.modifiers


@pytest.mark.parametrize("token, name", [
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<BACKSPACE>', 'backspace'),
    ('<DELETE>', 'delete'),
    ('<ESC>', 'escape'),
    ('<Ctrl-j>', 'enter'),
    ('<Ctrl-m>', 'enter'),
    ('<Ctrl-h>', 'backspace'),
    ('<PAGEDOWN>', 'page_down'),
])
def test_special_keys(handler, token, name):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == name
    assert event.is_special(name)


def test_ctrl_letter(handler):
    event = handler.parse_key('<Ctrl-q>')
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'q'
    assert event.is_ctrl
    assert event == KeyEvent.ctrl('q')


def test_alt_letter_keeps_case(handler):
    event = handler.parse_key('<Esc+A>')
    assert event.value == 'A'
    assert event.is_alt
    assert not event.is_ctrl


def test_named_whitespace(handler):
    assert handler.parse_key('<SPACE>').value == ' '
    assert handler.parse_key('<TAB>').value == '\t'


@pytest.mark.parametrize("raw, expected", [
    ('\r', 'enter'),
    ('\n', 'enter'),
    ('\x7f', 'backspace'),
    ('\x1b', 'escape'),
])
def test_raw_control_bytes(handler, raw, expected):
    assert handler.parse_key(raw).is_special(expected)


def test_raw_ctrl_letter(handler):
    event = handler.parse_key('\x11')
    assert event.value == 'q'
    assert event.is_ctrl


def test_modified_special_is_not_plain(handler):
    event = handler.parse_key('<Shift-UP>')
    assert event.value == 'up'
    assert 'shift' in event.modifiers
    assert not event.is_special('up')


def test_literal_angle_bracket(handler):
    assert handler.parse_key('<').value == '<'


def test_get_key_event_reads_terminal():
    kb = KeyboardHandler(MockTerminal(['x', '<ESC>']))
    assert kb.get_key_event().value == 'x'
    assert kb.get_key_event().is_special('escape')
    assert kb.get_key_event() is None
