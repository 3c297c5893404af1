"""Verbs that mutate the buffer and then re-seat the cursor."""

from __future__ import annotations

from .context import ModeContext, ModeResult
from .models import Action


def _edited(context: ModeContext) -> ModeResult:
    context.clamp_row()
    context.snap()
    return ModeResult(consumed=True, status="edit")


def insert_char(context: ModeContext, action: Action) -> ModeResult:
    if action.char is None:
        raise ValueError("InsertChar requires a character")
    context.buffer.insert_char(action.char, context.cursor)
    context.cursor.move_right(1)
    return ModeResult(consumed=True, status="edit")


def insert_tab(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.insert_text(" " * context.tab_width, context.cursor)
    context.cursor.move_right(context.tab_width)
    return ModeResult(consumed=True, status="edit")


def insert_line(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.insert_newline(context.cursor)
    context.cursor.move_to_newline_start()
    return ModeResult(consumed=True, status="edit")


def insert_line_below(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.insert_line_below(context.cursor, context.oracle)
    context.cursor.move_down(1)
    return _edited(context)


def insert_line_above(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.insert_line_above(context.cursor)
    return _edited(context)


def delete_previous_char(context: ModeContext, action: Action) -> ModeResult:
    del action
    cursor = context.cursor
    if cursor.col == 0 and cursor.row == 0:
        return ModeResult(consumed=True, status="noop")
    if cursor.col == 0:
        joined_at = context.buffer.line_len(cursor.row - 1)
        context.buffer.erase_previous_char(cursor)
        cursor.move_to(joined_at, cursor.row - 1)
    else:
        context.buffer.erase_previous_char(cursor)
        cursor.move_left(1)
    return _edited(context)


def delete_previous_non_wrapping(context: ModeContext, action: Action) -> ModeResult:
    del action
    if context.cursor.col == 0:
        return ModeResult(consumed=True, status="noop")
    context.buffer.erase_backwards_up_to_line_start(context.cursor)
    context.cursor.move_left(1)
    return _edited(context)


def delete_current_char(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.erase_current_char(context.cursor)
    return _edited(context)


def delete_until_eol(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.erase_until_eol(context.cursor)
    return _edited(context)


def delete_word(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.delete_word(context.cursor)
    return _edited(context)


def delete_back(context: ModeContext, action: Action) -> ModeResult:
    del action
    delta = context.buffer.delete_word_backwards(context.cursor)
    context.cursor.move_to_col(context.cursor.col + delta)
    return _edited(context)


def delete_line(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.buffer.delete_line(context.cursor.row)
    return _edited(context)


def delete_curr_and_below(context: ModeContext, action: Action) -> ModeResult:
    del action
    row = context.cursor.row
    if row < context.buffer.len_lines() - 1:
        context.buffer.delete_line(row + 1)
    context.buffer.delete_line(row)
    return _edited(context)


def delete_curr_and_above(context: ModeContext, action: Action) -> ModeResult:
    del action
    row = context.cursor.row
    context.buffer.delete_line(row)
    if row > 0:
        context.buffer.delete_line(row - 1)
        context.cursor.move_up(1)
    return _edited(context)


__all__ = [
    "insert_char",
    "insert_tab",
    "insert_line",
    "insert_line_below",
    "insert_line_above",
    "delete_previous_char",
    "delete_previous_non_wrapping",
    "delete_current_char",
    "delete_until_eol",
    "delete_word",
    "delete_back",
    "delete_line",
    "delete_curr_and_below",
    "delete_curr_and_above",
]
