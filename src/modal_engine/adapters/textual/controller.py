"""Minimal Textual adapter that wires a FieldEditor into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from modal_engine.buffer import BufferMirror
from modal_engine.editor import FieldEditor
from modal_engine.modes import KeyInput, ModeResult

# Textual key names -> keymap key names
TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "escape": "Esc",
    "enter": "Enter",
    "return": "Enter",
    "backspace": "Backspace",
    "tab": "Tab",
    "left": "Left",
    "right": "Right",
    "up": "Up",
    "down": "Down",
    "home": "Home",
    "end": "End",
    "delete": "Delete",
    "pageup": "PageUp",
    "pagedown": "PageDown",
}

_TEXTUAL_MODIFIERS = {"ctrl": "ctrl", "shift": "shift"}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_key(key: str, character: Optional[str] = None) -> KeyInput:
    """Turn a Textual ``Key`` event's ``key``/``character`` into a KeyInput.

    ``ctrl+d`` becomes ``C-d``, ``G`` becomes ``S-G`` and punctuation such as
    ``dollar_sign`` is taken from ``character``.
    """

    parts = key.split("+")
    name = parts[-1]
    modifiers = tuple(
        _TEXTUAL_MODIFIERS[part] for part in parts[:-1] if part in _TEXTUAL_MODIFIERS
    )
    if name in TEXTUAL_KEY_NAMES:
        return KeyInput(TEXTUAL_KEY_NAMES[name], modifiers=modifiers)
    if "ctrl" in modifiers:
        return KeyInput(name, modifiers=modifiers)
    if character is not None and len(character) == 1 and character.isprintable():
        shifted = ("shift",) if character.isalpha() and character.isupper() else ()
        return KeyInput(character, modifiers=shifted, text=character)
    return KeyInput(name, modifiers=modifiers)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualFieldAdapter:
    """Bridges a FieldEditor and its bus events to a Textual-friendly surface."""

    def __init__(self, editor: FieldEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self, key: str, character: Optional[str] = None
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = translate_key(key, character)
        self._log_state("key ->", key=key_input.key, mods=key_input.modifiers)
        result = self.editor.handle_key(key_input)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
            timeout_ms=result.timeout_ms,
        )
        return result

    def process_timeouts(self) -> Optional[ModeResult]:
        """Expire a stale pending sequence and surface it to the UI."""

        result = self.editor.process_timeouts()
        if result is not None:
            self._log_state("timeout ->", status=result.status)
            self._after_mode_result(result)
        return result

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        self.editor.bus.subscribe(
            "buffer.changed",
            lambda payload: self._handle_event("buffer.changed", payload),
        )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def pull_buffer(self) -> BufferMirror:
        return self.editor.mirror()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "mode": self.editor.mode.value,
            "pending": " ".join(self.editor.manager.active_mode.pending),
            "cursor": self.editor.cursor.position,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = [
    "TextualFieldAdapter",
    "TextualUIHooks",
    "TEXTUAL_KEY_NAMES",
    "translate_key",
]
