"""Editor settings with ``MODAL_ENGINE_*`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from modal_engine.buffer import INDENT_WIDTH
from modal_engine.runtime.telemetry import ENV_PREFIX


@dataclass(frozen=True, slots=True)
class EditorSettings:
    viewport_height: int = 24
    tab_width: int = 2
    indent_width: int = INDENT_WIDTH
    pending_timeout_ms: int = 1000
    keymap_path: Optional[Path] = None

    def __post_init__(self) -> None:
        for name in ("viewport_height", "tab_width", "pending_timeout_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.indent_width < 0:
            raise ValueError("indent_width cannot be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EditorSettings":
        """Read overrides such as ``MODAL_ENGINE_TAB_WIDTH=4``.

        Unset variables keep their defaults; malformed numbers raise
        ``ValueError`` naming the variable.
        """

        env = os.environ if environ is None else environ
        defaults = cls()

        def _int(name: str, default: int) -> int:
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is None or not raw.strip():
                return default
            try:
                return int(raw)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
                ) from exc

        keymap = env.get(f"{ENV_PREFIX}KEYMAP")
        return cls(
            viewport_height=_int("VIEWPORT_HEIGHT", defaults.viewport_height),
            tab_width=_int("TAB_WIDTH", defaults.tab_width),
            indent_width=_int("INDENT_WIDTH", defaults.indent_width),
            pending_timeout_ms=_int("PENDING_TIMEOUT_MS", defaults.pending_timeout_ms),
            keymap_path=Path(keymap).expanduser() if keymap else None,
        )


__all__ = ["EditorSettings"]
