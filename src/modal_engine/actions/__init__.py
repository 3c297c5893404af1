"""Editing verbs and the handlers that carry them out."""

from .context import ModeBus, ModeContext, ModeResult
from .models import Action, ActionKind, EditorMode, is_action_mapping
from .dispatch import HANDLERS, ActionHandler, dispatch, run_actions

__all__ = [
    "Action",
    "ActionKind",
    "EditorMode",
    "is_action_mapping",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "HANDLERS",
    "ActionHandler",
    "dispatch",
    "run_actions",
]
