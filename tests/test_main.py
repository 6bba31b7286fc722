"""Tests for the command line entry point."""

from unittest.mock import patch

from viewedit.__main__ import main
from viewedit.errors import EditorIOError


def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("viewedit ")


def test_too_many_arguments(capsys):
    assert main(["a.txt", "b.txt"]) == 2
    assert "usage:" in capsys.readouterr().err


def test_opens_file_and_runs():
    with patch('viewedit.editor.Editor') as editor_cls:
        assert main(["notes.txt"]) == 0
    editor = editor_cls.return_value
    editor.load_file.assert_called_once_with("notes.txt")
    editor.run.assert_called_once_with()


def test_no_file_starts_empty_editor():
    with patch('viewedit.editor.Editor') as editor_cls:
        assert main([]) == 0
    editor_cls.return_value.load_file.assert_not_called()
    editor_cls.return_value.run.assert_called_once_with()


def test_editor_error_exits_nonzero(capsys):
    with patch('viewedit.editor.Editor') as editor_cls:
        editor_cls.return_value.load_file.side_effect = EditorIOError("Cannot read x: denied")
        assert main(["x"]) == 1
    assert capsys.readouterr().err == "viewedit: Cannot read x: denied\n"
    editor_cls.return_value.run.assert_not_called()


def test_terminal_failure_during_run_exits_nonzero(capsys):
    with patch('viewedit.editor.Editor') as editor_cls:
        editor_cls.return_value.run.side_effect = EditorIOError("Cannot write to terminal: EIO")
        assert main([]) == 1
    assert capsys.readouterr().err == "viewedit: Cannot write to terminal: EIO\n"
