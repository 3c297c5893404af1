"""Composition root: one buffer, one cursor and the modes editing them."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from modal_engine.actions import Action, EditorMode, ModeBus, ModeContext, ModeResult
from modal_engine.buffer import (
    Buffer,
    BufferMirror,
    BufferValidationError,
    Cursor,
    WritableBuffer,
    ensure_cursor,
)
from modal_engine.keymaps import Binding, Keymap, default_keymap, load_keymap_file
from modal_engine.modes import KeyInput, ModeManager
from modal_engine.runtime import telemetry
from modal_engine.settings import EditorSettings
from modal_engine.syntax import IndentationOracle, NullIndentationOracle


class FieldEditor:
    """Exclusive owner of one field's buffer and cursor.

    Keys go through :meth:`handle_key`; hosts that already know which verbs
    to run call :meth:`apply`. Both validate the cursor before touching the
    buffer, so a cursor left outside the text raises
    :class:`~modal_engine.buffer.BufferValidationError` instead of editing
    the wrong place.
    """

    def __init__(
        self,
        buffer: Buffer,
        *,
        oracle: Optional[IndentationOracle] = None,
        settings: Optional[EditorSettings] = None,
        keymap: Optional[Keymap] = None,
        extra_bindings: Iterable[Binding] | None = None,
        cursor: Optional[Cursor] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=buffer.with_write(),
            cursor=cursor or Cursor(),
            bus=self.bus,
            oracle=oracle or NullIndentationOracle(),
            viewport_height=self.settings.viewport_height,
            tab_width=self.settings.tab_width,
        )
        if keymap is None:
            bindings = list(extra_bindings or ())
            if self.settings.keymap_path is not None:
                bindings.extend(load_keymap_file(self.settings.keymap_path))
            keymap = default_keymap(bindings)
        self.manager = ModeManager(
            self.context,
            keymap,
            pending_timeout_ms=self.settings.pending_timeout_ms,
        )

        refresh = getattr(self.context.oracle, "refresh", None)
        if callable(refresh):
            self.bus.subscribe("buffer.changed", lambda text: refresh(str(text)))

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        oracle: Optional[IndentationOracle] = None,
        settings: Optional[EditorSettings] = None,
        name: str = "default",
        **kwargs: Any,
    ) -> "FieldEditor":
        settings = settings or EditorSettings()
        buffer = Buffer.from_text(text, name=name, indent_width=settings.indent_width)
        return cls(buffer, oracle=oracle, settings=settings, **kwargs)

    @property
    def buffer(self) -> WritableBuffer:
        return self.context.buffer

    @property
    def cursor(self) -> Cursor:
        return self.context.cursor

    @property
    def mode(self) -> EditorMode:
        return self.context.mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._validate()
        return self.manager.handle_key(key)

    def press(self, *tokens: str) -> ModeResult:
        """Feed keys written as single characters or names like ``"Esc"``."""

        result = ModeResult(consumed=False)
        for token in tokens:
            text = token if len(token) == 1 else None
            result = self.handle_key(KeyInput(token, text=text))
        return result

    def type_text(self, text: str) -> ModeResult:
        result = ModeResult(consumed=False)
        for char in text:
            result = self.handle_key(KeyInput(char, text=char))
        return result

    def apply(self, *actions: Action | str | Dict[str, str]) -> ModeResult:
        self._validate()
        return self.manager.execute(*(Action.parse(action) for action in actions))

    def process_timeouts(self, now: Optional[float] = None) -> Optional[ModeResult]:
        return self.manager.process_timeouts(now)

    def to_string(self) -> str:
        return self.context.buffer.to_string()

    def mirror(self) -> BufferMirror:
        snapshot = self.context.buffer.mirror(self.cursor)
        snapshot.mode = self.mode.value
        return snapshot

    def _validate(self) -> None:
        try:
            ensure_cursor(
                self.context.buffer, self.cursor, limit=self.context.col_limit()
            )
        except BufferValidationError as exc:
            telemetry.record_event(
                "editor.invalid_cursor",
                level="error",
                data={"cursor": self.cursor.position, "reason": str(exc)},
            )
            raise


__all__ = ["FieldEditor"]
