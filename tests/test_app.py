# tests/test_app.py
"""Tests for startup document selection in `ggedit.app`.

`load_document` decides what the editor starts with: an opened file, a new
named document for a path that does not exist yet, or an empty document with
an error message when the file cannot be read.
"""

from unittest.mock import MagicMock, patch

from ggedit import app
from ggedit.core.Editor import HELP_MESSAGE


def test_no_path_gives_empty_unnamed_document(config, file_store) -> None:
    document, status = app.load_document(None, config, file_store)
    assert document.is_empty()
    assert document.file_name is None
    assert not document.is_dirty()
    assert status == HELP_MESSAGE


def test_existing_path_is_opened(config, file_store) -> None:
    file_store.files["notes.txt"] = "a\nb\n"
    document, status = app.load_document("notes.txt", config, file_store)
    assert document.lines() == ["a", "b"]
    assert document.file_name == "notes.txt"
    assert not document.is_dirty()
    assert status == HELP_MESSAGE


def test_missing_path_gives_named_dirty_document(config, file_store) -> None:
    document, _ = app.load_document("new.py", config, file_store)
    assert document.is_empty()
    assert document.file_name == "new.py"
    assert document.is_dirty()
    assert document.file_type_name() == "Python"


def test_read_failure_reports_error(config, file_store) -> None:
    file_store.files["locked.txt"] = "secret\n"
    with patch.object(file_store, "read_lines", side_effect=PermissionError("Permission denied")):
        document, status = app.load_document("locked.txt", config, file_store)
    assert document.is_empty()
    assert document.file_name is None
    assert status == "Error opening file: Permission denied"


def test_main_app_runner_runs_editor_inside_guard(config, file_store) -> None:
    stdscr = MagicMock()
    events: list[str] = []
    guard = MagicMock()
    guard.return_value.__enter__.side_effect = lambda *a: events.append("enter")
    guard.return_value.__exit__.side_effect = lambda *a: events.append("exit")
    controller = MagicMock()
    controller.return_value.run.side_effect = lambda: events.append("run")

    with (
        patch.object(app, "TerminalAppMode", guard),
        patch.object(app, "EditorController", controller),
        patch.object(app, "CursesTerminal") as terminal_cls,
        patch.object(app, "signal"),
    ):
        app.main_app_runner(stdscr, config, None)

    assert events == ["enter", "run", "exit"]
    guard.assert_called_once_with(stdscr)
    terminal_cls.assert_called_once_with(stdscr, config)
    assert controller.call_args.kwargs["initial_status"] == HELP_MESSAGE
