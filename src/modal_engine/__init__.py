"""UI-agnostic modal editing engine for the editable fields of an API client."""

from .editor import FieldEditor
from .settings import EditorSettings

__all__ = [
    "FieldEditor",
    "EditorSettings",
    "adapters",
    "buffer",
    "actions",
    "modes",
    "keymaps",
    "runtime",
    "syntax",
]

__version__ = "0.1.0"
