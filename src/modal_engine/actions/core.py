"""Mode transitions and the verbs that open insert mode."""

from __future__ import annotations

from .context import ModeContext, ModeResult
from .models import Action, EditorMode


def _switch(context: ModeContext, mode: EditorMode, message: str) -> ModeResult:
    context.mode = mode
    return ModeResult(consumed=True, switch_to=mode.value, message=message)


def enter_mode(context: ModeContext, action: Action) -> ModeResult:
    if action.mode is EditorMode.INSERT:
        return _switch(context, EditorMode.INSERT, "enter_insert")
    line_len = context.buffer.line_len(context.cursor.row)
    if context.cursor.col >= line_len:
        context.cursor.move_left(1)
    return _switch(context, EditorMode.NORMAL, "exit_insert")


def insert_ahead(context: ModeContext, action: Action) -> ModeResult:
    del action
    if context.buffer.line_len(context.cursor.row) > 0:
        context.cursor.move_right(1)
    return _switch(context, EditorMode.INSERT, "enter_insert")


def insert_at_eol(context: ModeContext, action: Action) -> ModeResult:
    del action
    line_len = context.buffer.line_len(context.cursor.row)
    context.cursor.move_to_col(line_len)
    return _switch(context, EditorMode.INSERT, "enter_insert")


def noop_action(context: ModeContext, action: Action) -> ModeResult:
    del context
    return ModeResult(consumed=True, status="noop", message=str(action))


__all__ = ["enter_mode", "insert_ahead", "insert_at_eol", "noop_action"]
