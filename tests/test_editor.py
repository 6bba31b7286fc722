"""Tests for the editor session: file I/O and the event loop."""

import contextlib

import pytest

from viewedit.editor import Editor
from viewedit.errors import EditorIOError, NoFileAssociated
from viewedit.settings import EditorSettings

from conftest import FakeTerminal


class ScriptedTerminal(FakeTerminal):
    """FakeTerminal that feeds a fixed list of key tokens."""

    def __init__(self, keys=(), width=20, height=5):
        super().__init__(width, height)
        self.keys = list(keys)
        self.active = False
        self.released = False

    @contextlib.contextmanager
    def session(self):
        self.active = True
        try:
            yield self
        finally:
            self.active = False
            self.released = True

    def get_key(self):
        while self.keys:
            key = self.keys.pop(0)
            if isinstance(key, Exception):
                raise key
            if callable(key):
                key()
                continue
            return key
        return '<Ctrl-q>'


def make_editor(keys=(), **kwargs):
    return Editor(terminal=ScriptedTerminal(keys, **kwargs), settings=EditorSettings())


def test_new_editor_has_one_empty_line():
    editor = make_editor()
    assert editor.buffer.lines() == ("",)
    assert editor.filename is None


def test_run_types_text_and_quits():
    editor = make_editor(['i', 'h', 'i', '<ESC>', '<Ctrl-q>'])
    editor.run()
    assert editor.buffer.lines() == ("hi",)
    assert editor.cursor.position == (0, 1)
    assert editor.terminal.released
    assert not editor.running
    assert editor.terminal.screen()[0] == "hi"


def test_run_handles_enter_tokens():
    editor = make_editor(['i', 'a', '<Ctrl-j>', 'b', '<Ctrl-q>'])
    editor.run()
    assert editor.buffer.lines() == ("a", "b")


def test_terminal_released_when_loop_fails():
    editor = make_editor(['i', EditorIOError("tty gone")])
    with pytest.raises(EditorIOError):
        editor.run()
    assert editor.terminal.released


def test_load_file_splits_lines(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("Line 1\nLine 2\nLine 3", encoding="utf-8")
    editor = make_editor()
    editor.load_file(str(path))
    assert editor.filename == str(path)
    assert editor.buffer.lines() == ("Line 1", "Line 2", "Line 3")
    assert editor.controller.buffer is editor.buffer
    assert editor.cursor.buffer is editor.buffer


def test_load_missing_file_starts_empty(tmp_path):
    path = tmp_path / "new.txt"
    editor = make_editor()
    editor.load_file(str(path))
    assert editor.buffer.lines() == ("",)
    assert editor.filename == str(path)
    assert not path.exists()


def test_load_unreadable_path_raises(tmp_path):
    editor = make_editor()
    with pytest.raises(EditorIOError):
        editor.load_file(str(tmp_path))


def test_save_round_trips_content(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("alpha\n\nbeta\n", encoding="utf-8")
    editor = make_editor()
    editor.load_file(str(path))
    assert editor.save_file() == str(path)
    assert path.read_text(encoding="utf-8") == "alpha\n\nbeta\n"


def test_save_joins_lines_and_clears_modified(tmp_path):
    path = tmp_path / "out.txt"
    editor = make_editor()
    editor.buffer.insert_char(0, 0, "x")
    editor.buffer.split_line(0, 1)
    assert editor.buffer.modified
    editor.save_file(str(path))
    assert path.read_text(encoding="utf-8") == "x\n"
    assert editor.filename == str(path)
    assert not editor.buffer.modified
    # No temp files left behind
    assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]


def test_save_without_path_fails():
    editor = make_editor()
    with pytest.raises(NoFileAssociated):
        editor.save_file()


def test_save_to_missing_directory_raises(tmp_path):
    editor = make_editor()
    with pytest.raises(EditorIOError):
        editor.save_file(str(tmp_path / "missing" / "doc.txt"))


def test_save_key_writes_file(tmp_path):
    path = tmp_path / "keyed.txt"
    seen = []
    editor = make_editor(width=200)
    editor.load_file(str(path))
    terminal = editor.terminal
    terminal.keys = ['i', 'o', 'k', '<Ctrl-s>', lambda: seen.append(terminal.status_text())]
    editor.run()
    assert path.read_text(encoding="utf-8") == "ok"
    assert seen == [f'"{path}" written']


def test_save_key_without_file_reports_message():
    seen = []
    editor = make_editor()
    terminal = editor.terminal
    terminal.keys = ['<Ctrl-s>', lambda: seen.append(terminal.status_text()), 'j']
    editor.run()
    assert seen == ["No file name"]
    # The next key clears the message
    assert terminal.status_text() == ""


def test_configured_bindings():
    terminal = ScriptedTerminal(['<Ctrl-q>', 'i', 'x', '<Ctrl-x>'])
    editor = Editor(terminal=terminal, settings=EditorSettings(quit_key='x', save_key='w'))
    editor.run()
    # Ctrl-Q is no longer special and is not text either
    assert editor.buffer.lines() == ("x",)
    assert not editor.running


def test_resize_between_keys_repaints():
    terminal = ScriptedTerminal(height=5)
    editor = Editor(terminal=terminal, settings=EditorSettings())
    for i in range(10):
        editor.buffer.insert_line(i, f"line {i}")
    terminal.keys = ['j', 'j', 'j', 'j', lambda: terminal.resize(20, 2), 'l']
    editor.run()
    assert editor.viewport.height == 2
    assert editor.cursor.position == (4, 1)
    assert editor.viewport.origin_row == 3
    assert terminal.screen() == ["line 3", "line 4"]
