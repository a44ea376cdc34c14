from __future__ import annotations

import pytest

from femto.buffer import CursorPosition, TextBuffer, ViewportBuffer


def make_viewport(line_count: int = 10, *, rows: int = 3, cols: int = 4) -> ViewportBuffer:
    lines = [f"line-{index:02d}" for index in range(line_count)]
    return ViewportBuffer(lines=tuple(lines), rows=rows, cols=cols)


def test_visible_lines_are_cropped_to_window() -> None:
    viewport = make_viewport()

    assert viewport.visible_lines() == ("line", "line", "line")


def test_follow_scrolls_down_to_cursor() -> None:
    viewport = make_viewport().follow(CursorPosition(5, 0))

    assert viewport.offset_y == 3
    assert viewport.screen_position(CursorPosition(5, 0)) == (2, 0)


def test_follow_scrolls_back_up_and_horizontally() -> None:
    viewport = make_viewport().follow(CursorPosition(6, 7))
    assert (viewport.offset_y, viewport.offset_x) == (4, 4)
    assert viewport.visible_lines()[0] == "-04"

    viewport = viewport.follow(CursorPosition(1, 0))
    assert (viewport.offset_y, viewport.offset_x) == (1, 0)


def test_follow_returns_same_instance_when_cursor_visible() -> None:
    viewport = make_viewport()

    assert viewport.follow(CursorPosition(1, 2)) is viewport


def test_scroll_operations_clamp_offsets() -> None:
    viewport = make_viewport(2)

    assert viewport.scroll_up().offset_y == 0
    assert viewport.scroll_left().offset_x == 0
    assert viewport.scroll_down().scroll_down().scroll_down().offset_y == 1
    assert viewport.scroll_right().offset_x == 1


def test_edits_preserve_window_and_type() -> None:
    viewport = make_viewport().follow(CursorPosition(5, 0))

    edited = viewport.insert_char("x", 5, 0)

    assert isinstance(edited, ViewportBuffer)
    assert edited.offset_y == viewport.offset_y
    assert edited.lines[5] == "xline-05"
    assert viewport.lines[5] == "line-05"


def test_join_keeps_offset_within_line_count() -> None:
    viewport = ViewportBuffer(lines=("a", "b"), rows=1, cols=5).scroll_down()

    joined = viewport.join_lines(0)

    assert joined.offset_y == 0
    assert joined.lines == ("ab",)


def test_wrap_plain_buffer_and_resize() -> None:
    viewport = ViewportBuffer.wrap(TextBuffer.from_lines(["abc"]), rows=5, cols=6)

    assert (viewport.rows, viewport.cols) == (5, 6)
    assert viewport.resized(5, 6) is viewport
    assert ViewportBuffer.wrap(viewport, rows=2, cols=2).rows == 2


def test_rejects_empty_window() -> None:
    with pytest.raises(ValueError):
        ViewportBuffer(lines=("a",), rows=0, cols=3)
