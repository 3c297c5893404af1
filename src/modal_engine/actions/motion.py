"""Cursor-only verbs: every handler here leaves the buffer untouched."""

from __future__ import annotations

from modal_engine.buffer import Position

from .context import ModeContext, ModeResult
from .models import Action, EditorMode


def _moved(status: str = "motion") -> ModeResult:
    return ModeResult(consumed=True, status=status)


def _jump(context: ModeContext, target: Position) -> ModeResult:
    col, row = target
    context.cursor.move_to(col, row)
    context.snap()
    return _moved()


def move_left(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_left(1)
    return _moved()


def move_right(context: ModeContext, action: Action) -> ModeResult:
    del action
    if context.cursor.col < context.col_limit():
        context.cursor.move_right(1)
    return _moved()


def move_up(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_up(1)
    context.snap()
    return _moved()


def move_down(context: ModeContext, action: Action) -> ModeResult:
    del action
    if context.cursor.row < context.buffer.len_lines() - 1:
        context.cursor.move_down(1)
    context.snap()
    return _moved()


def move_to_top(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_to_row(0)
    context.snap()
    return _moved()


def move_to_bottom(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_to_row(context.buffer.len_lines() - 1)
    context.snap()
    return _moved()


def move_to_line_start(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_to_line_start()
    return _moved()


def move_to_line_end(context: ModeContext, action: Action) -> ModeResult:
    del action
    line_len = context.buffer.line_len(context.cursor.row)
    context.cursor.move_to_line_end(line_len)
    if context.mode is EditorMode.INSERT and line_len > 0:
        context.cursor.move_right(1)
    return _moved()


def page_down(context: ModeContext, action: Action) -> ModeResult:
    del action
    last_row = context.buffer.len_lines() - 1
    context.cursor.move_to_row(min(last_row, context.cursor.row + context.half_page))
    context.snap()
    return _moved()


def page_up(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_up(context.half_page)
    context.snap()
    return _moved()


def next_word(context: ModeContext, action: Action) -> ModeResult:
    del action
    return _jump(context, context.buffer.find_char_after_separator(context.cursor))


def previous_word(context: ModeContext, action: Action) -> ModeResult:
    del action
    return _jump(context, context.buffer.find_char_before_separator(context.cursor))


def move_after_whitespace(context: ModeContext, action: Action) -> ModeResult:
    del action
    return _jump(context, context.buffer.find_char_after_whitespace(context.cursor))


def move_after_whitespace_reverse(context: ModeContext, action: Action) -> ModeResult:
    del action
    return _jump(context, context.buffer.find_char_before_whitespace(context.cursor))


def jump_to_closing(context: ModeContext, action: Action) -> ModeResult:
    del action
    col, row = context.buffer.find_oposing_token(context.cursor)
    if (col, row) == (context.cursor.col, context.cursor.row):
        return ModeResult(consumed=True, status="no_match")
    context.cursor.move_to(col, row)
    return _moved()


def jump_to_empty_line_below(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_to_row(context.buffer.find_empty_line_below(context.cursor))
    context.snap()
    return _moved()


def jump_to_empty_line_above(context: ModeContext, action: Action) -> ModeResult:
    del action
    context.cursor.move_to_row(context.buffer.find_empty_line_above(context.cursor))
    context.snap()
    return _moved()


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_to_top",
    "move_to_bottom",
    "move_to_line_start",
    "move_to_line_end",
    "page_down",
    "page_up",
    "next_word",
    "previous_word",
    "move_after_whitespace",
    "move_after_whitespace_reverse",
    "jump_to_closing",
    "jump_to_empty_line_below",
    "jump_to_empty_line_above",
]
