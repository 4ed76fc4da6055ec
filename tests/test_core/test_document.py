# tests/test_core/test_document.py
"""Unit tests for `ggedit.core.Document`.
=========================================

This module verifies:
- Editing operations (insert, newline split, delete with row merge,
  delete_line) and their effect on the dirty flag.
- Out-of-range positions being silent no-ops.
- Multi-row search in both directions without wraparound.
- Persistence through a `FileStore`: `save`, `save_as` and their refusals.
- Search-term highlighting and file type refresh after a save.
"""

import pytest

from ggedit.core.Document import Document, EmptyDocumentError, NoFileNameError
from ggedit.core.Highlighter import HighlightType
from ggedit.core.Position import Position, SearchDirection

FORWARD, BACKWARD = SearchDirection.FORWARD, SearchDirection.BACKWARD


# --- Construction ---
def test_open_reads_lines_clean(file_store, config) -> None:
    file_store.files["a.txt"] = "one\ntwo\n"
    doc = Document.open("a.txt", file_store=file_store, config=config)
    assert doc.lines() == ["one", "two"]
    assert doc.file_name == "a.txt"
    assert not doc.is_dirty()


def test_open_missing_file_raises_oserror(file_store) -> None:
    with pytest.raises(OSError):
        Document.open("missing.txt", file_store=file_store)


def test_from_empty_named_is_dirty_and_empty(file_store) -> None:
    doc = Document.from_empty_named("new.py", file_store=file_store)
    assert doc.is_empty()
    assert doc.is_dirty()
    assert doc.file_type_name() == "Python"


# --- Editing ---
def test_insert_marks_dirty(make_document) -> None:
    doc = make_document(["ac"])
    doc.insert(Position(1, 0), "b")
    assert doc.lines() == ["abc"]
    assert doc.is_dirty()


def test_insert_at_row_count_appends_row(make_document) -> None:
    doc = make_document(["a"])
    doc.insert(Position(0, 1), "b")
    assert doc.lines() == ["a", "b"]


def test_insert_beyond_row_count_is_noop(make_document) -> None:
    doc = make_document(["a"])
    doc.insert(Position(0, 5), "b")
    assert doc.lines() == ["a"]
    assert not doc.is_dirty()


def test_insert_newline_splits_row(make_document) -> None:
    doc = make_document(["hello world"])
    doc.insert(Position(5, 0), "\n")
    assert doc.lines() == ["hello", " world"]
    assert doc.is_dirty()


def test_insert_newline_at_end_appends_empty_row(make_document) -> None:
    doc = make_document(["a"])
    doc.insert(Position(0, 1), "\n")
    assert doc.lines() == ["a", ""]


def test_delete_inside_row(make_document) -> None:
    doc = make_document(["abc"])
    doc.delete(Position(1, 0))
    assert doc.lines() == ["ac"]
    assert doc.is_dirty()


def test_delete_at_end_of_row_merges_next(make_document) -> None:
    doc = make_document(["ab", "cd"])
    doc.delete(Position(2, 0))
    assert doc.lines() == ["abcd"]


def test_delete_at_end_of_last_row_is_noop(make_document) -> None:
    doc = make_document(["ab"])
    doc.delete(Position(2, 0))
    doc.delete(Position(0, 3))
    assert doc.lines() == ["ab"]
    assert not doc.is_dirty()


def test_insert_then_delete_is_inverse(make_document) -> None:
    doc = make_document(["hello", "world"])
    doc.insert(Position(2, 1), "X")
    doc.delete(Position(2, 1))
    assert doc.lines() == ["hello", "world"]


def test_delete_line(make_document) -> None:
    doc = make_document(["a", "b", "c"])
    doc.delete_line(Position(0, 1))
    assert doc.lines() == ["a", "c"]
    assert doc.is_dirty()
    doc.delete_line(Position(0, 9))
    assert doc.lines() == ["a", "c"]


def test_edits_keep_highlighting_in_step(make_document) -> None:
    doc = make_document(["x = 1"], file_name="a.py")
    doc.insert(Position(5, 0), "2")
    row = doc.row(0)
    assert row is not None
    assert len(row.highlighting) == len(row)
    assert row.highlighting[4:] == [HighlightType.NUMBER, HighlightType.NUMBER]


# --- Search ---
def test_find_forward_across_rows(make_document) -> None:
    doc = make_document(["abc", "xbx", "b"])
    assert doc.find("b", Position(2, 0), FORWARD) == Position(1, 1)
    assert doc.find("b", Position(2, 1), FORWARD) == Position(0, 2)
    assert doc.find("b", Position(1, 2), FORWARD) is None


def test_find_backward_across_rows(make_document) -> None:
    doc = make_document(["b", "xbx", "abc"])
    assert doc.find("b", Position(0, 2), BACKWARD) == Position(1, 1)
    assert doc.find("b", Position(0, 1), BACKWARD) == Position(0, 0)


def test_find_backward_reaches_first_row(make_document) -> None:
    doc = make_document(["needle", "hay", "hay"])
    assert doc.find("needle", Position(3, 2), BACKWARD) == Position(0, 0)


def test_find_hello(make_document) -> None:
    doc = make_document(["hello"])
    assert doc.find("l", Position(0, 0), FORWARD) == Position(2, 0)
    assert doc.find("l", Position(3, 0), FORWARD) == Position(3, 0)
    assert doc.find("l", Position(4, 0), FORWARD) is None


def test_find_results_stay_in_bounds(make_document) -> None:
    lines = ["ab", "", "bab", "b"]
    doc = make_document(lines)
    for y, line in enumerate(lines):
        for x in range(len(line) + 1):
            for direction in (FORWARD, BACKWARD):
                hit = doc.find("b", Position(x, y), direction)
                if hit is not None:
                    assert 0 <= hit.y < len(lines)
                    assert 0 <= hit.x <= len(lines[hit.y])
                    assert lines[hit.y][hit.x] == "b"


def test_find_empty_query_or_past_end(make_document) -> None:
    doc = make_document(["abc"])
    assert doc.find("", Position(0, 0), FORWARD) is None
    assert doc.find("a", Position(0, 1), FORWARD) is None


def test_highlight_marks_and_clears_matches(make_document) -> None:
    doc = make_document(["foo bar foo"])
    doc.highlight("foo")
    row = doc.row(0)
    assert row is not None
    assert row.highlighting.count(HighlightType.MATCH) == 6
    doc.highlight(None)
    assert HighlightType.MATCH not in row.highlighting


# --- Persistence ---
def test_save_writes_rows_and_clears_dirty(make_document, file_store) -> None:
    doc = make_document(["one", "two"], file_name="a.txt", dirty=True)
    message = doc.save()
    assert file_store.files["a.txt"] == "one\ntwo\n"
    assert not doc.is_dirty()
    assert message == '"a.txt" 2L, 8B written'


def test_save_without_name_raises(make_document) -> None:
    doc = make_document(["x"], dirty=True)
    with pytest.raises(NoFileNameError):
        doc.save()
    assert doc.is_dirty()


def test_save_empty_clean_document_raises(make_document) -> None:
    with pytest.raises(EmptyDocumentError):
        make_document([], file_name="a.txt").save()


def test_save_failure_keeps_dirty(make_document, file_store) -> None:
    file_store.fail_writes = True
    doc = make_document(["x"], file_name="a.txt", dirty=True)
    with pytest.raises(OSError):
        doc.save()
    assert doc.is_dirty()


def test_save_as_other_name_writes_copy_and_keeps_identity(make_document, file_store) -> None:
    doc = make_document(["data"], file_name="a.txt", dirty=True)
    message = doc.save_as("b.txt")
    assert file_store.files == {"b.txt": "data\n"}
    assert doc.file_name == "a.txt"
    assert doc.is_dirty()
    assert message.startswith('"b.txt" 1L')


def test_save_as_unnamed_adopts_name(make_document, file_store) -> None:
    doc = make_document(["x = 1"], dirty=True)
    doc.save_as("new.py")
    assert doc.file_name == "new.py"
    assert not doc.is_dirty()
    assert doc.file_type_name() == "Python"
    assert file_store.files["new.py"] == "x = 1\n"


def test_save_as_same_name_is_a_save(make_document, file_store) -> None:
    doc = make_document(["x"], file_name="a.txt", dirty=True)
    doc.save_as("a.txt")
    assert not doc.is_dirty()
    assert file_store.files["a.txt"] == "x\n"


def test_save_as_failure_restores_name(make_document, file_store) -> None:
    file_store.fail_writes = True
    doc = make_document(["x"], file_name="a.txt", dirty=True)
    file_type = doc.file_type
    with pytest.raises(OSError):
        doc.save_as("b.py")
    assert doc.file_name == "a.txt"
    assert doc.is_dirty()
    assert doc.file_type == file_type


def test_size_in_bytes_counts_characters_and_terminators(make_document) -> None:
    assert make_document(["añ", ""]).size_in_bytes() == 4
