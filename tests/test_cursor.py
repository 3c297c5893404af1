from modal_engine.buffer import Cursor


def test_moves_saturate_at_zero() -> None:
    cursor = Cursor()

    cursor.move_left(3)
    cursor.move_up(2)

    assert cursor.position == (0, 0)


def test_move_to_uses_col_row_order() -> None:
    cursor = Cursor()

    cursor.move_to(4, 2)

    assert cursor.position == (2, 4)
    assert cursor.readable_position() == (5, 3)


def test_horizontal_moves_record_snapback() -> None:
    cursor = Cursor()

    cursor.move_right(6)
    cursor.move_down(1)

    assert cursor.snapback_col == 6


def test_snap_clamps_then_restores() -> None:
    cursor = Cursor(0, 6, snapback_col=6)

    cursor.maybe_snap_to_col(2)
    assert cursor.col == 2
    assert cursor.snapback_col == 6

    cursor.maybe_snap_to_col(4)
    assert cursor.col == 4

    cursor.maybe_snap_to_col(10)
    assert cursor.col == 6


def test_line_end_on_empty_line_is_column_zero() -> None:
    cursor = Cursor(0, 3)

    cursor.move_to_line_end(0)
    assert cursor.col == 0

    cursor.move_to_line_end(5)
    assert cursor.col == 4


def test_newline_start_moves_down_to_column_zero() -> None:
    cursor = Cursor(1, 7)

    cursor.move_to_newline_start()

    assert cursor.position == (2, 0)


def test_render_offsets_do_not_move_the_cursor() -> None:
    cursor = Cursor(1, 2)

    cursor.set_row_offset(10)
    cursor.set_col_offset(4)

    assert cursor.position == (1, 2)
    assert cursor.row_with_offset() == 11
    assert cursor.col_with_offset() == 6
