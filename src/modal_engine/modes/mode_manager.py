"""Mode manager coordinating the normal and insert modes."""

from __future__ import annotations

import time
from typing import Dict, Optional

from modal_engine.actions import Action, run_actions
from modal_engine.keymaps import Keymap
from modal_engine.runtime import telemetry

from .base_mode import KeyInput, KeymapMode, ModeContext, ModeResult
from .insert_mode import InsertMode
from .normal_mode import NormalMode


class ModeManager:
    """Routes keys to the mode named by ``context.mode``.

    Actions switch modes by setting ``context.mode`` themselves; the manager
    notices the change afterwards, clears the old mode's pending keys and
    records a ``mode.switch`` event. A pending sequence arms one deadline
    which :meth:`process_timeouts` checks.
    """

    def __init__(
        self,
        context: ModeContext,
        keymap: Keymap,
        *,
        pending_timeout_ms: int = 1000,
    ) -> None:
        self.context = context
        self.keymap = keymap
        self.context.extras["keymap"] = keymap
        self.modes: Dict[str, KeymapMode] = {
            mode.name: mode
            for mode in (
                NormalMode(context, pending_timeout_ms=pending_timeout_ms),
                InsertMode(context, pending_timeout_ms=pending_timeout_ms),
            )
        }
        self._deadline: Optional[float] = None

    @property
    def active_mode(self) -> KeymapMode:
        return self.modes[self.context.mode.value]

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._settle(mode, result)

    def execute(self, *actions: Action) -> ModeResult:
        """Run ``actions`` directly, bypassing the keymap, in the active mode."""

        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"actions": ",".join(str(action) for action in actions)},
        ):
            result = run_actions(self.context, actions)
        return self._settle(mode, result)

    def process_timeouts(self, now: Optional[float] = None) -> Optional[ModeResult]:
        """Expire the pending sequence once its deadline has passed."""

        if self._deadline is None:
            return None
        if now is None:
            now = time.monotonic()
        if now < self._deadline:
            return None
        self._deadline = None
        mode = self.active_mode
        with telemetry.span(
            name=f"mode_timeout::{mode.name}",
            component=True,
            metadata={"mode": mode.name},
        ):
            return mode.handle_timeout()

    def _settle(self, mode: KeymapMode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self._deadline = time.monotonic() + (result.timeout_ms / 1000.0)
        else:
            self._deadline = None
        current = self.context.mode.value
        if current != mode.name:
            mode.on_exit()
            telemetry.record_event(
                "mode.switch", data={"mode": current, "previous": mode.name}
            )
        return result


__all__ = ["ModeManager"]
