from __future__ import annotations

from typing import Optional

import pytest

from modal_engine.actions import Action, EditorMode
from modal_engine.buffer import Buffer, Cursor
from modal_engine.keymaps import Binding, Keymap, default_keymap
from modal_engine.modes import (
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    NormalMode,
    key_to_token,
    printable_text,
)
from modal_engine.modes.mode_manager import ModeManager


def make_context(
    keymap: Optional[Keymap] = None,
    *,
    text: str = "",
    cursor: Optional[Cursor] = None,
) -> ModeContext:
    return ModeContext(
        buffer=Buffer.from_text(text).with_write(),
        cursor=cursor or Cursor(),
        bus=ModeBus(),
        extras={"keymap": keymap or default_keymap()},
    )


def make_manager(text: str = "", cursor: Optional[Cursor] = None) -> ModeManager:
    keymap = default_keymap()
    return ModeManager(make_context(keymap, text=text, cursor=cursor), keymap)


def test_key_to_token_uses_keymap_notation() -> None:
    assert key_to_token(KeyInput("w")) == "w"
    assert key_to_token(KeyInput("G")) == "S-G"
    assert key_to_token(KeyInput("g", modifiers=("shift",))) == "S-G"
    assert key_to_token(KeyInput("d", modifiers=("ctrl",))) == "C-d"
    assert key_to_token(KeyInput("W", modifiers=("ctrl",))) == "C-w"
    assert key_to_token(KeyInput("Esc")) == "Esc"
    assert key_to_token(KeyInput("x", modifiers=("alt",))) == "x"


def test_printable_text_ignores_control_chords() -> None:
    assert printable_text(KeyInput("a", text="a")) == "a"
    assert printable_text(KeyInput("a", modifiers=("shift",))) == "A"
    assert printable_text(KeyInput("w", modifiers=("ctrl",))) is None
    assert printable_text(KeyInput("Tab")) is None


def test_normal_mode_uses_keymap_binding() -> None:
    context = make_context()
    mode = NormalMode(context)

    result = mode.handle_key(KeyInput(key="i"))

    assert result.switch_to == "insert"
    assert result.consumed is True
    assert context.mode is EditorMode.INSERT


def test_insert_mode_escape_binding() -> None:
    context = make_context(text="ab", cursor=Cursor(0, 2))
    context.mode = EditorMode.INSERT
    mode = InsertMode(context)

    result = mode.handle_key(KeyInput(key="Esc"))

    assert result.switch_to == "normal"
    assert result.consumed is True
    assert context.cursor.position == (0, 1)


def test_insert_mode_ctrl_w_deletes_word() -> None:
    context = make_context(text="foo bar", cursor=Cursor(0, 7))
    context.mode = EditorMode.INSERT
    mode = InsertMode(context)

    mode.handle_key(KeyInput(key="w", modifiers=("ctrl",)))

    assert context.buffer.to_string() == "foo "
    assert context.cursor.position == (0, 4)


def test_insert_mode_types_unbound_printable_keys() -> None:
    context = make_context(text="ac", cursor=Cursor(0, 1))
    context.mode = EditorMode.INSERT
    mode = InsertMode(context)

    mode.handle_key(KeyInput(key="b", text="b"))
    mode.handle_key(KeyInput(key="B", text="B"))

    assert context.buffer.to_string() == "abBc"
    assert context.cursor.position == (0, 3)


def test_insert_mode_reports_unbound_control_keys() -> None:
    mode = InsertMode(make_context())

    result = mode.handle_key(KeyInput(key="z", modifiers=("ctrl",)))

    assert result.consumed is False
    assert result.status == "unbound"


def test_normal_mode_pending_sequence() -> None:
    context = make_context(text="foo bar")
    mode = NormalMode(context, pending_timeout_ms=250)

    pending = mode.handle_key(KeyInput(key="d"))
    assert pending.status == "pending"
    assert pending.consumed is True
    assert pending.timeout_ms == 250
    assert mode.pending == ("d",)

    mode.handle_key(KeyInput(key="w"))

    assert context.buffer.to_string() == "bar"
    assert mode.pending == ()


def test_normal_mode_abandoned_prefix_runs_last_key() -> None:
    context = make_context(text="abc")
    mode = NormalMode(context)

    mode.handle_key(KeyInput(key="d"))
    result = mode.handle_key(KeyInput(key="x"))

    assert result.consumed is True
    assert context.buffer.to_string() == "bc"


def test_timeout_drops_pending_prefix() -> None:
    context = make_context(text="abc")
    mode = NormalMode(context)
    mode.handle_key(KeyInput(key="d"))

    result = mode.handle_timeout()

    assert result.status == "timeout"
    assert result.message == "pending_timeout"
    assert mode.pending == ()
    assert context.buffer.to_string() == "abc"


def test_mode_manager_expires_pending_sequence_at_deadline() -> None:
    manager = make_manager("a\nb")

    assert manager.process_timeouts() is None

    pending = manager.handle_key(KeyInput(key="g"))
    assert pending.status == "pending"
    deadline = manager.deadline
    assert deadline is not None

    assert manager.process_timeouts(now=deadline - 0.01) is None

    expired = manager.process_timeouts(now=deadline)
    assert expired is not None
    assert expired.status == "timeout"
    assert expired.consumed is False
    assert manager.deadline is None
    assert manager.active_mode.pending == ()
    assert manager.handle_key(KeyInput(key="g")).status == "pending"


def test_completed_sequence_disarms_deadline() -> None:
    manager = make_manager("a\nb", cursor=Cursor(1, 0))

    manager.handle_key(KeyInput(key="g"))
    manager.handle_key(KeyInput(key="g"))

    assert manager.deadline is None
    assert manager.context.cursor.row == 0


def test_mode_manager_switches_to_insert_and_back() -> None:
    manager = make_manager("abc")

    result = manager.handle_key(KeyInput(key="S-A"))

    assert result.switch_to == "insert"
    assert manager.active_mode.name == "insert"
    assert manager.context.cursor.position == (0, 3)

    manager.handle_key(KeyInput(key="c", modifiers=("ctrl",)))

    assert manager.active_mode.name == "normal"
    assert manager.context.mode is EditorMode.NORMAL
    assert manager.context.cursor.position == (0, 2)


def test_mode_manager_execute_applies_mode_switch() -> None:
    manager = make_manager("abc")

    manager.execute(Action.parse("MoveToLineEnd"), Action.enter_mode("Insert"))

    assert manager.active_mode.name == "insert"
    assert manager.context.cursor.position == (0, 2)


def test_mode_manager_custom_binding_runs_action_list() -> None:
    keymap = default_keymap()
    keymap.bind(Binding.create("normal", ["S-Y"], "MoveToBottom", "MoveToLineEnd"))
    manager = ModeManager(make_context(keymap, text="one\ntwo\nthree"), keymap)

    manager.handle_key(KeyInput(key="y", modifiers=("shift",)))

    assert manager.context.cursor.position == (2, 4)


def test_mode_manager_publishes_keymap_to_modes() -> None:
    keymap = default_keymap()
    context = ModeContext(buffer=Buffer.from_text("").with_write())

    manager = ModeManager(context, keymap)

    assert context.extras["keymap"] is keymap
    assert set(manager.modes) == {"normal", "insert"}


def test_modes_require_keymap_in_context() -> None:
    context = ModeContext(buffer=Buffer.from_text("").with_write())

    with pytest.raises(RuntimeError):
        NormalMode(context)
