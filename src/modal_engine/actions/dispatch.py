"""Maps every verb to its handler and runs ordered action lists."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

from modal_engine.runtime import telemetry

from . import core, edit, motion
from .context import ModeContext, ModeResult
from .models import Action, ActionKind

ActionHandler = Callable[[ModeContext, Action], ModeResult]

HANDLERS: Dict[ActionKind, ActionHandler] = {
    ActionKind.UNDO: core.noop_action,
    ActionKind.FIND_NEXT: core.noop_action,
    ActionKind.FIND_PREVIOUS: core.noop_action,
    ActionKind.PASTE_BELOW: core.noop_action,
    ActionKind.ENTER_MODE: core.enter_mode,
    ActionKind.INSERT_AHEAD: core.insert_ahead,
    ActionKind.INSERT_AT_EOL: core.insert_at_eol,
    ActionKind.NEXT_WORD: motion.next_word,
    ActionKind.PREVIOUS_WORD: motion.previous_word,
    ActionKind.MOVE_LEFT: motion.move_left,
    ActionKind.MOVE_DOWN: motion.move_down,
    ActionKind.MOVE_UP: motion.move_up,
    ActionKind.MOVE_RIGHT: motion.move_right,
    ActionKind.MOVE_TO_BOTTOM: motion.move_to_bottom,
    ActionKind.MOVE_TO_TOP: motion.move_to_top,
    ActionKind.MOVE_TO_LINE_END: motion.move_to_line_end,
    ActionKind.MOVE_TO_LINE_START: motion.move_to_line_start,
    ActionKind.PAGE_DOWN: motion.page_down,
    ActionKind.PAGE_UP: motion.page_up,
    ActionKind.MOVE_AFTER_WHITESPACE: motion.move_after_whitespace,
    ActionKind.MOVE_AFTER_WHITESPACE_REVERSE: motion.move_after_whitespace_reverse,
    ActionKind.JUMP_TO_CLOSING: motion.jump_to_closing,
    ActionKind.JUMP_TO_EMPTY_LINE_BELOW: motion.jump_to_empty_line_below,
    ActionKind.JUMP_TO_EMPTY_LINE_ABOVE: motion.jump_to_empty_line_above,
    ActionKind.INSERT_CHAR: edit.insert_char,
    ActionKind.INSERT_TAB: edit.insert_tab,
    ActionKind.INSERT_LINE: edit.insert_line,
    ActionKind.INSERT_LINE_BELOW: edit.insert_line_below,
    ActionKind.INSERT_LINE_ABOVE: edit.insert_line_above,
    ActionKind.DELETE_PREVIOUS_CHAR: edit.delete_previous_char,
    ActionKind.DELETE_PREVIOUS_NON_WRAPPING: edit.delete_previous_non_wrapping,
    ActionKind.DELETE_CURRENT_CHAR: edit.delete_current_char,
    ActionKind.DELETE_UNTIL_EOL: edit.delete_until_eol,
    ActionKind.DELETE_WORD: edit.delete_word,
    ActionKind.DELETE_BACK: edit.delete_back,
    ActionKind.DELETE_LINE: edit.delete_line,
    ActionKind.DELETE_CURR_AND_BELOW: edit.delete_curr_and_below,
    ActionKind.DELETE_CURR_AND_ABOVE: edit.delete_curr_and_above,
}


def dispatch(context: ModeContext, action: Action) -> ModeResult:
    """Run one action; emits ``buffer.changed`` if the text changed."""

    version = context.buffer.document.version
    with telemetry.span(
        "actions::dispatch",
        component="actions",
        metadata={"action": str(action), "mode": context.mode.value},
    ):
        result = HANDLERS[action.kind](context, action)
    if context.buffer.document.version != version:
        context.bus.emit("buffer.changed", context.buffer.to_string())
    return result


def run_actions(context: ModeContext, actions: Iterable[Action]) -> ModeResult:
    """Apply ``actions`` in order, folding their results into one.

    The last non-empty ``switch_to``/``message`` wins so a binding such as
    ``[InsertLineBelow, InsertAtEOL]`` reports the mode it ends in.
    """

    outcome = ModeResult(consumed=True, status="noop")
    for action in actions:
        result = dispatch(context, action)
        outcome = ModeResult(
            consumed=True,
            switch_to=result.switch_to or outcome.switch_to,
            status=result.status,
            message=result.message or outcome.message,
        )
    return outcome


__all__ = ["ActionHandler", "HANDLERS", "dispatch", "run_actions"]
