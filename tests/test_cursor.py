from __future__ import annotations

import itertools

from femto.buffer import CursorPosition, TextBuffer

BUFFER = TextBuffer.from_lines(["hello", "", "abc"])


def test_down_clamps_column_to_shorter_line() -> None:
    cursor = CursorPosition(0, 4).down(BUFFER)

    assert cursor == CursorPosition(1, 0)


def test_up_from_first_row_keeps_row_but_reclamps_column() -> None:
    cursor = CursorPosition(0, 9).up(BUFFER)

    assert cursor == CursorPosition(0, 5)


def test_down_from_last_row_is_noop() -> None:
    assert CursorPosition(2, 1).down(BUFFER) == CursorPosition(2, 1)


def test_right_wraps_to_next_line_start() -> None:
    assert CursorPosition(0, 5).right(BUFFER) == CursorPosition(1, 0)
    assert CursorPosition(0, 2).right(BUFFER) == CursorPosition(0, 3)


def test_right_at_end_of_file_is_noop() -> None:
    assert CursorPosition(2, 3).right(BUFFER) == CursorPosition(2, 3)


def test_left_wraps_to_previous_line_end() -> None:
    assert CursorPosition(1, 0).left(BUFFER) == CursorPosition(0, 5)
    assert CursorPosition(2, 2).left(BUFFER) == CursorPosition(2, 1)


def test_left_at_beginning_of_file_is_noop() -> None:
    assert CursorPosition(0, 0).left(BUFFER) == CursorPosition(0, 0)


def test_line_home_and_end() -> None:
    cursor = CursorPosition(0, 2)

    assert cursor.line_home() == CursorPosition(0, 0)
    assert cursor.line_end(BUFFER) == CursorPosition(0, 5)


def test_enter_moves_to_start_of_next_line() -> None:
    buffer = BUFFER.break_line(0, 2)

    assert CursorPosition(0, 2).enter(buffer) == CursorPosition(1, 0)


def test_predicates() -> None:
    assert CursorPosition(0, 0).beginning_of_file()
    assert not CursorPosition(0, 1).beginning_of_file()
    assert CursorPosition(0, 5).end_of_line(BUFFER)
    assert not CursorPosition(0, 5).end_of_file(BUFFER)
    assert CursorPosition(2, 3).end_of_file(BUFFER)
    assert CursorPosition(2, 0).final_line(BUFFER)


def test_navigation_always_stays_in_bounds() -> None:
    moves = [
        lambda c: c.up(BUFFER),
        lambda c: c.down(BUFFER),
        lambda c: c.left(BUFFER),
        lambda c: c.right(BUFFER),
        lambda c: c.line_end(BUFFER),
    ]
    for row, col in itertools.product(range(-2, 6), range(-2, 9)):
        cursor = CursorPosition(row, col).clamp(BUFFER)
        for move in moves:
            cursor = move(cursor)
            assert 0 <= cursor.row < BUFFER.line_count
            assert 0 <= cursor.col <= BUFFER.line_length(cursor.row)


def test_clamp_returns_same_instance_when_valid() -> None:
    cursor = CursorPosition(2, 1)

    assert cursor.clamp(BUFFER) is cursor
