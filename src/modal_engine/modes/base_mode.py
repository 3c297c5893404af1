"""Key handling shared by the normal and insert modes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from modal_engine.actions import Action, ModeBus, ModeContext, ModeResult, run_actions
from modal_engine.keymaps import Keymap
from modal_engine.runtime import telemetry

from .keymap_helpers import key_to_token, require_keymap


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


class KeymapMode:
    """Mode that turns key sequences into actions through the keymap.

    Keys are collected until they name a binding. A key that continues no
    sequence drops whatever was pending and is looked up on its own.
    """

    name: str = "mode"

    def __init__(self, context: ModeContext, *, pending_timeout_ms: int = 1000) -> None:
        self.context = context
        self._keymap: Keymap = require_keymap(context)
        self._pending: List[str] = []
        self._pending_timeout_ms = pending_timeout_ms

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self) -> None:
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        resolution = self._keymap.resolve(self.name, self._pending)

        # an abandoned prefix ("d" then "x") still lets "x" run on its own
        if resolution.status == "miss" and len(self._pending) > 1:
            self._pending = [token]
            resolution = self._keymap.resolve(self.name, self._pending)

        if resolution.status == "match" and resolution.binding:
            self._pending.clear()
            return self.execute(resolution.actions, label=resolution.binding.id)

        if resolution.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=self._pending_timeout_ms,
            )

        self._pending.clear()
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="unbound")

    def execute(self, actions: tuple[Action, ...], *, label: str) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={
                "binding_id": label,
                "actions": ",".join(str(action) for action in actions),
            },
        ):
            return run_actions(self.context, actions)

    def handle_timeout(self) -> ModeResult:
        """Drop a pending prefix whose follow-up key never came."""

        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        telemetry.record_event(
            "keymaps.pending_dropped",
            level="debug",
            data={"mode": self.name, "keys": " ".join(self._pending)},
        )
        self._pending.clear()
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")


__all__ = [
    "KeyInput",
    "KeymapMode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
]
