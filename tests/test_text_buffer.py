from __future__ import annotations

import pytest

from femto.buffer import BufferValidationError, TextBuffer


def make_buffer(*lines: str) -> TextBuffer:
    return TextBuffer.from_lines(lines)


def test_empty_buffer_has_one_empty_line() -> None:
    assert TextBuffer().lines == ("",)
    assert TextBuffer.from_lines([]).lines == ("",)
    assert TextBuffer.from_lines([]).line_count == 1


def test_insert_char_shifts_following_characters() -> None:
    buffer = make_buffer("ac", "zz")

    updated = buffer.insert_char("b", 0, 1)

    assert updated.lines == ("abc", "zz")
    assert buffer.lines == ("ac", "zz")


def test_insert_char_at_end_of_line() -> None:
    assert make_buffer("ab").insert_char("c", 0, 2).lines == ("abc",)


def test_insert_char_materializes_missing_row() -> None:
    buffer = make_buffer("only")

    updated = buffer.insert_char("x", 1, 0)

    assert updated.lines == ("only", "x")


def test_insert_then_delete_is_identity() -> None:
    buffer = make_buffer("hello", "world")
    for row, line in enumerate(buffer.lines):
        for col in range(len(line) + 1):
            restored = buffer.insert_char("#", row, col).delete_char(row, col)
            assert restored.lines == buffer.lines


def test_break_line_splits_at_column() -> None:
    buffer = make_buffer("hello world", "tail")

    updated = buffer.break_line(0, 5)

    assert updated.lines == ("hello", " world", "tail")
    assert updated.line_count == buffer.line_count + 1


def test_break_line_at_end_creates_empty_line() -> None:
    assert make_buffer("ab").break_line(0, 2).lines == ("ab", "")


def test_break_then_join_is_identity() -> None:
    buffer = make_buffer("abcdef", "gh")
    for col in range(len("abcdef")):
        assert buffer.break_line(0, col).join_lines(0).lines == buffer.lines


def test_join_lines_concatenates_following_line() -> None:
    buffer = make_buffer("abc", "def", "ghi")

    assert buffer.join_lines(1).lines == ("abc", "defghi")


def test_delete_before_and_after() -> None:
    buffer = make_buffer("abcdef")

    assert buffer.delete_before(0, 2).lines == ("cdef",)
    assert buffer.delete_after(0, 2).lines == ("ab",)


def test_edits_share_untouched_lines() -> None:
    first = "x" * 50
    buffer = make_buffer(first, "edit me")

    updated = buffer.insert_char("!", 1, 0)

    assert updated.lines[0] is buffer.lines[0]


def test_delete_char_rejects_end_of_line_column() -> None:
    with pytest.raises(BufferValidationError) as excinfo:
        make_buffer("ab").delete_char(0, 2)
    assert excinfo.value.cursor == (0, 2)


def test_join_lines_requires_following_line() -> None:
    with pytest.raises(BufferValidationError):
        make_buffer("ab").join_lines(0)


def test_row_out_of_range_fails_fast() -> None:
    buffer = make_buffer("ab")

    with pytest.raises(BufferValidationError):
        buffer.break_line(3, 0)
    with pytest.raises(BufferValidationError):
        buffer.line_length(-1)
    with pytest.raises(BufferValidationError):
        buffer.insert_char("x", 0, 5)


def test_text_flattens_with_separator() -> None:
    assert make_buffer("a", "b").text("\r\n") == "a\r\nb"


def test_get_line_returns_row_text() -> None:
    buffer = make_buffer("first", "second")

    assert buffer.get_line(1) == "second"
    with pytest.raises(BufferValidationError):
        buffer.get_line(2)
