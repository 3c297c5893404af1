"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modal_engine.actions import ModeContext
from modal_engine.keymaps import Keymap, KeyStroke
from modal_engine.keymaps.models import MODIFIER_ALIASES

if TYPE_CHECKING:
    from .base_mode import KeyInput


def key_to_token(key: "KeyInput") -> str:
    """Render ``key`` in keymap notation (``"C-d"``, ``"S-G"``, ``"Esc"``).

    Modifiers the keymap cannot express are dropped, and a bare uppercase
    letter is treated as shifted.
    """

    modifiers = [
        modifier
        for modifier in key.modifiers
        if modifier.strip().lower() in MODIFIER_ALIASES
    ]
    if len(key.key) == 1 and key.key.isalpha() and key.key.isupper():
        modifiers.append("shift")
    return KeyStroke(key.key, tuple(modifiers)).token


def require_keymap(context: ModeContext) -> Keymap:
    keymap = context.extras.get("keymap")
    if not isinstance(keymap, Keymap):
        raise RuntimeError("ModeContext.extras missing 'keymap'")
    return keymap


__all__ = ["key_to_token", "require_keymap"]
