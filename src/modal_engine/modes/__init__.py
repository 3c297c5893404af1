"""Normal/insert modes and the manager that switches between them."""

from .base_mode import KeyInput, KeymapMode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode, printable_text
from .keymap_helpers import key_to_token
from .mode_manager import ModeManager

__all__ = [
    "KeyInput",
    "KeymapMode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "printable_text",
    "key_to_token",
    "ModeManager",
]
