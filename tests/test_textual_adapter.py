from __future__ import annotations

from typing import List

from modal_engine import FieldEditor
from modal_engine.adapters.textual import (
    TextualFieldAdapter,
    TextualUIHooks,
    translate_key,
)
from modal_engine.buffer import BufferMirror, BufferSync


def make_adapter(
    text: str = "", **hooks: object
) -> tuple[FieldEditor, TextualFieldAdapter]:
    editor = FieldEditor.from_text(text)
    hooks.setdefault("update_buffer", lambda mirror: None)
    ui_hooks = TextualUIHooks(**hooks)  # type: ignore[arg-type]
    adapter = TextualFieldAdapter(editor, ui_hooks)
    return editor, adapter


def test_translate_key_maps_textual_names() -> None:
    assert translate_key("escape").key == "Esc"
    assert translate_key("enter").key == "Enter"
    assert translate_key("backspace").key == "Backspace"
    assert translate_key("left").key == "Left"

    ctrl = translate_key("ctrl+d")
    assert (ctrl.key, ctrl.modifiers) == ("d", ("ctrl",))

    dollar = translate_key("dollar_sign", "$")
    assert (dollar.key, dollar.text) == ("$", "$")

    upper = translate_key("G", "G")
    assert upper.modifiers == ("shift",)


def test_adapter_updates_buffer_and_status() -> None:
    updates: List[BufferMirror] = []
    statuses: List[str] = []
    editor, adapter = make_adapter(
        update_buffer=lambda mirror: updates.append(mirror),
        update_status=lambda status: statuses.append(status),
    )

    adapter.handle_textual_key("i", "i")
    adapter.handle_textual_key("h", "h")
    adapter.handle_textual_key("i", "i")
    adapter.handle_textual_key("escape")

    assert editor.to_string() == "hi"
    assert updates[-1].text == "hi"
    assert updates[-1].mode == "normal"
    assert updates[-1].cursor == (0, 1)
    assert "enter_insert" in statuses
    assert "exit_insert" in statuses


def test_adapter_relays_buffer_change_events() -> None:
    events: List[tuple[str, object | None]] = []
    editor, adapter = make_adapter(
        "abc",
        handle_event=lambda name, payload: events.append((name, payload)),
    )

    adapter.handle_textual_key("x", "x")
    adapter.handle_textual_key("l", "l")

    assert events == [("buffer.changed", "bc")]
    assert editor.cursor.position == (0, 1)


def test_adapter_runs_shifted_and_control_bindings() -> None:
    editor, adapter = make_adapter("one\ntwo\nthree")

    adapter.handle_textual_key("G", "G")
    assert editor.cursor.row == 2

    adapter.handle_textual_key("g", "g")
    adapter.handle_textual_key("g", "g")
    assert editor.cursor.row == 0


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    _, adapter = make_adapter(log=lambda line: logs.append(line))

    adapter.handle_textual_key("i", "i")

    assert any(line.startswith("key ->") for line in logs)
    assert any("mode='insert'" in line for line in logs)


def test_adapter_is_a_buffer_sync_source() -> None:
    editor, adapter = make_adapter("ab\ncd")
    sync: BufferSync = adapter

    editor.press("j", "l")
    mirror = sync.pull_buffer()

    assert mirror.cursor == (1, 1)
    assert mirror.mode == "normal"


def test_adapter_ctrl_w_deletes_word_in_insert_mode() -> None:
    editor, adapter = make_adapter("foo bar")

    adapter.handle_textual_key("A", "A")
    adapter.handle_textual_key("ctrl+w")

    assert editor.to_string() == "foo "


def test_adapter_process_timeouts_without_pending_keys() -> None:
    statuses: List[str] = []
    editor, adapter = make_adapter(
        "abc", update_status=lambda status: statuses.append(status)
    )

    assert adapter.process_timeouts() is None
    assert statuses == []
    assert editor.manager.deadline is None


def test_adapter_log_lines_show_pending_keys() -> None:
    logs: List[str] = []
    _, adapter = make_adapter("abc", log=lambda line: logs.append(line))

    adapter.handle_textual_key("d", "d")

    assert logs[-1].startswith("result <-")
    assert "pending='d'" in logs[-1]
    assert "status='pending'" in logs[-1]
