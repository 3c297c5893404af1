"""Textual host adapter; the demo app lives in ``app`` and imports Textual."""

from .controller import (
    TEXTUAL_KEY_NAMES,
    TextualFieldAdapter,
    TextualUIHooks,
    translate_key,
)

__all__ = [
    "TEXTUAL_KEY_NAMES",
    "TextualFieldAdapter",
    "TextualUIHooks",
    "translate_key",
]
