"""Editing verbs a keymap can resolve to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class EditorMode(str, Enum):
    """The two editing modes of a field."""

    NORMAL = "normal"
    INSERT = "insert"

    @property
    def label(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, value: str) -> "EditorMode":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown editor mode '{value}'") from exc


class ActionKind(str, Enum):
    UNDO = "Undo"
    FIND_NEXT = "FindNext"
    FIND_PREVIOUS = "FindPrevious"
    NEXT_WORD = "NextWord"
    PREVIOUS_WORD = "PreviousWord"
    MOVE_LEFT = "MoveLeft"
    MOVE_DOWN = "MoveDown"
    MOVE_UP = "MoveUp"
    MOVE_RIGHT = "MoveRight"
    MOVE_TO_BOTTOM = "MoveToBottom"
    MOVE_TO_TOP = "MoveToTop"
    MOVE_TO_LINE_END = "MoveToLineEnd"
    MOVE_TO_LINE_START = "MoveToLineStart"
    PAGE_DOWN = "PageDown"
    PAGE_UP = "PageUp"
    DELETE_WORD = "DeleteWord"
    DELETE_LINE = "DeleteLine"
    DELETE_BACK = "DeleteBack"
    DELETE_UNTIL_EOL = "DeleteUntilEOL"
    DELETE_CURRENT_CHAR = "DeleteCurrentChar"
    INSERT_LINE_BELOW = "InsertLineBelow"
    INSERT_LINE_ABOVE = "InsertLineAbove"
    PASTE_BELOW = "PasteBelow"
    INSERT_AHEAD = "InsertAhead"
    ENTER_MODE = "EnterMode"
    INSERT_AT_EOL = "InsertAtEOL"
    MOVE_AFTER_WHITESPACE_REVERSE = "MoveAfterWhitespaceReverse"
    MOVE_AFTER_WHITESPACE = "MoveAfterWhitespace"
    DELETE_PREVIOUS_NON_WRAPPING = "DeletePreviousNonWrapping"
    DELETE_CURR_AND_BELOW = "DeleteCurrAndBelow"
    DELETE_CURR_AND_ABOVE = "DeleteCurrAndAbove"
    INSERT_CHAR = "InsertChar"
    INSERT_TAB = "InsertTab"
    INSERT_LINE = "InsertLine"
    DELETE_PREVIOUS_CHAR = "DeletePreviousChar"
    JUMP_TO_CLOSING = "JumpToClosing"
    JUMP_TO_EMPTY_LINE_BELOW = "JumpToEmptyLineBelow"
    JUMP_TO_EMPTY_LINE_ABOVE = "JumpToEmptyLineAbove"


@dataclass(frozen=True, slots=True)
class Action:
    """One verb, with its argument for ``InsertChar`` and ``EnterMode``."""

    kind: ActionKind
    char: Optional[str] = None
    mode: Optional[EditorMode] = None

    def __post_init__(self) -> None:
        if self.kind is ActionKind.INSERT_CHAR and (
            self.char is None or len(self.char) != 1
        ):
            raise ValueError("InsertChar requires exactly one character")
        if self.kind is ActionKind.ENTER_MODE and self.mode is None:
            raise ValueError("EnterMode requires a target mode")

    @classmethod
    def insert_char(cls, char: str) -> "Action":
        return cls(ActionKind.INSERT_CHAR, char=char)

    @classmethod
    def enter_mode(cls, mode: EditorMode | str) -> "Action":
        target = mode if isinstance(mode, EditorMode) else EditorMode.parse(mode)
        return cls(ActionKind.ENTER_MODE, mode=target)

    @classmethod
    def parse(cls, value: Any) -> "Action":
        """Build an action from its config form.

        ``"MoveLeft"`` names a plain verb; ``{"EnterMode": "Insert"}`` and
        ``{"InsertChar": "x"}`` carry an argument.
        """

        if isinstance(value, Action):
            return value
        if isinstance(value, str):
            kind = _kind(value)
            if kind in (ActionKind.INSERT_CHAR, ActionKind.ENTER_MODE):
                raise ValueError(f"Action '{value}' requires an argument")
            return cls(kind)
        if isinstance(value, Mapping) and len(value) == 1:
            ((name, argument),) = value.items()
            kind = _kind(str(name))
            if kind is ActionKind.ENTER_MODE:
                return cls.enter_mode(str(argument))
            if kind is ActionKind.INSERT_CHAR:
                return cls.insert_char(str(argument))
            raise ValueError(f"Action '{name}' does not take an argument")
        raise ValueError(f"Cannot parse action from {value!r}")

    def __str__(self) -> str:
        if self.kind is ActionKind.ENTER_MODE and self.mode is not None:
            return f"EnterMode({self.mode.label})"
        if self.kind is ActionKind.INSERT_CHAR:
            return f"InsertChar({self.char!r})"
        return self.kind.value


def _kind(name: str) -> ActionKind:
    try:
        return ActionKind(name)
    except ValueError as exc:
        raise ValueError(f"Unknown action '{name}'") from exc


def is_action_mapping(value: Any) -> bool:
    """True for ``{"EnterMode": ...}``-style values, as opposed to key tables."""

    if not isinstance(value, Mapping) or len(value) != 1:
        return False
    (name,) = value.keys()
    return name in (ActionKind.ENTER_MODE.value, ActionKind.INSERT_CHAR.value)


__all__ = ["Action", "ActionKind", "EditorMode", "is_action_mapping"]
