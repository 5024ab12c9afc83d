"""Tests for the document buffer: editing, search and loading."""

import pytest

from typotamer.model import Document, Position, Row


def create_document(lines):
    return Document([Row(line) for line in lines])


def contents(document):
    return [row.string for row in document]


def test_default_document_is_empty():
    document = Document()
    assert document.is_empty()
    assert len(document) == 0
    assert document.file_name is None
    assert not document.is_dirty()
    assert document.row(0) is None


def test_row_out_of_range_is_none():
    document = create_document(["a", "b"])
    assert document.row(1).string == "b"
    assert document.row(2) is None
    assert document.row(-1) is None


def test_open_reads_one_row_per_line(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("first\nsecond\n\nlast\n", encoding="utf-8")

    document = Document.open(str(path))

    assert contents(document) == ["first", "second", "", "last"]
    assert document.file_name == str(path)
    assert not document.is_dirty()


def test_open_without_trailing_newline(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("one\ntwo", encoding="utf-8")
    assert contents(Document.open(str(path))) == ["one", "two"]


def test_open_strips_crlf(tmp_path):
    path = tmp_path / "dos.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    assert contents(Document.open(str(path))) == ["one", "two"]


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        Document.open(str(tmp_path / "missing.txt"))


def test_insert_characters_in_order():
    document = Document()
    for i, ch in enumerate("hello"):
        document.insert(Position(i, 0), ch)
        assert len(document.row(0)) == i + 1
    assert contents(document) == ["hello"]
    assert document.is_dirty()


def test_insert_at_end_of_document_appends_row():
    document = create_document(["first"])
    document.insert(Position(0, 1), "x")
    assert contents(document) == ["first", "x"]


def test_insert_past_end_of_document_is_ignored():
    document = create_document(["first"])
    document.insert(Position(0, 5), "x")
    assert contents(document) == ["first"]
    assert not document.is_dirty()


def test_insert_newline_splits_row():
    document = create_document(["helloworld", "next"])
    document.insert(Position(5, 0), "\n")
    assert contents(document) == ["hello", "world", "next"]


def test_insert_newline_at_row_start():
    document = create_document(["text"])
    document.insert(Position(0, 0), "\n")
    assert contents(document) == ["", "text"]


def test_insert_newline_at_end_of_document_adds_empty_row():
    document = create_document(["text"])
    document.insert(Position(0, 1), "\n")
    assert contents(document) == ["text", ""]


def test_insert_then_delete_restores_content():
    document = create_document(["abc", "def"])
    document.insert(Position(1, 1), "X")
    assert contents(document) == ["abc", "dXef"]
    document.delete(Position(1, 1))
    assert contents(document) == ["abc", "def"]


def test_delete_within_row():
    document = create_document(["hello"])
    document.delete(Position(1, 0))
    assert contents(document) == ["hllo"]
    assert document.is_dirty()


def test_delete_at_row_end_joins_next_row():
    document = create_document(["hello", "world"])
    document.delete(Position(5, 0))
    assert contents(document) == ["helloworld"]
    assert len(document) == 1


def test_delete_on_empty_row_removes_it():
    document = create_document(["first", "", "third"])
    document.delete(Position(0, 1))
    assert contents(document) == ["first", "third"]


def test_delete_at_end_of_document_is_noop():
    document = create_document(["hello"])
    document.delete(Position(5, 0))
    document.delete(Position(0, 1))
    assert contents(document) == ["hello"]
    assert not document.is_dirty()


def test_find_returns_first_match_position():
    document = create_document(["hello", "world"])
    assert document.find("world", Position(0, 0)) == Position(0, 1)
    assert document.find("o") == Position(4, 0)


def test_find_missing_query_returns_none():
    document = create_document(["hello", "world"])
    assert document.find("xyz") is None


def test_find_starts_at_anchor_column():
    document = create_document(["abc abc", "abc"])
    assert document.find("abc", Position(1, 0)) == Position(4, 0)
    assert document.find("abc", Position(5, 0)) == Position(0, 1)


def test_find_does_not_wrap_around():
    document = create_document(["needle", "hay"])
    assert document.find("needle", Position(0, 1)) is None


def test_find_empty_query_returns_none():
    assert create_document(["abc"]).find("") is None
