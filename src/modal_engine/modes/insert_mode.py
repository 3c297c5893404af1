"""Insert mode: bound keys run actions, printable keys become text."""

from __future__ import annotations

from modal_engine.actions import Action
from modal_engine.keymaps.models import MODIFIER_ALIASES

from .base_mode import KeyInput, KeymapMode, ModeResult


def printable_text(key: KeyInput) -> str | None:
    """The single character ``key`` would type, if any."""

    modifiers = {MODIFIER_ALIASES.get(m.strip().lower()) for m in key.modifiers}
    if "C" in modifiers:
        return None
    text = key.text if key.text is not None else key.key
    if len(text) != 1 or not text.isprintable():
        return None
    if "S" in modifiers and key.text is None:
        return text.upper()
    return text


class InsertMode(KeymapMode):
    name = "insert"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="unbound")
        return self.execute((Action.insert_char(text),), label="insert.text")


__all__ = ["InsertMode", "printable_text"]
