"""Normal mode: every key is a motion, an edit or a mode change."""

from __future__ import annotations

from .base_mode import KeymapMode


class NormalMode(KeymapMode):
    name = "normal"


__all__ = ["NormalMode"]
