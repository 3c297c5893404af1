"""Built-in keymap that seeds both modes."""

from __future__ import annotations

from typing import Iterable

from .config import parse_keymap
from .keymap import Keymap
from .models import Binding

DEFAULT_KEYMAP_TOML = """
[editor_keys.normal]
"u" = "Undo"
"n" = "FindNext"
"S-N" = "FindPrevious"
"w" = "NextWord"
"b" = "PreviousWord"
"h" = "MoveLeft"
"Left" = "MoveLeft"
"j" = "MoveDown"
"Down" = "MoveDown"
"k" = "MoveUp"
"Up" = "MoveUp"
"l" = "MoveRight"
"Right" = "MoveRight"
"S-G" = "MoveToBottom"
"g" = { "g" = "MoveToTop" }
"$" = "MoveToLineEnd"
"End" = "MoveToLineEnd"
"Home" = "MoveToLineStart"
"0" = "MoveToLineStart"
"C-d" = "PageDown"
"C-u" = "PageUp"
"S-D" = "DeleteUntilEOL"
"x" = "DeleteCurrentChar"
"o" = ["InsertLineBelow", "InsertAtEOL"]
"S-O" = "InsertLineAbove"
"p" = "PasteBelow"
"a" = "InsertAhead"
"i" = { EnterMode = "Insert" }
"S-I" = ["MoveToLineStart", { EnterMode = "Insert" }]
"S-A" = "InsertAtEOL"
"S-B" = "MoveAfterWhitespaceReverse"
"S-W" = "MoveAfterWhitespace"
"S-X" = "DeletePreviousNonWrapping"
"%" = "JumpToClosing"
"{" = "JumpToEmptyLineAbove"
"}" = "JumpToEmptyLineBelow"

[editor_keys.normal.d]
"w" = "DeleteWord"
"d" = "DeleteLine"
"b" = "DeleteBack"
"j" = "DeleteCurrAndBelow"
"k" = "DeleteCurrAndAbove"
"l" = "DeleteCurrentChar"
"h" = "DeletePreviousChar"

[editor_keys.insert]
"Tab" = "InsertTab"
"Enter" = "InsertLine"
"Backspace" = "DeletePreviousChar"
"Esc" = { EnterMode = "Normal" }
"C-c" = { EnterMode = "Normal" }
"C-W" = "DeleteBack"
"""

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    parse_keymap(DEFAULT_KEYMAP_TOML, source="defaults")
)


def default_keymap(
    extra_bindings: Iterable[Binding] = (),
    *,
    logger_name: str | None = "modal_engine.keymaps",
) -> Keymap:
    """The built-in keymap with ``extra_bindings`` layered on top.

    Extra bindings (typically a user keymap file) displace whatever
    defaults they collide with.
    """

    keymap = Keymap(DEFAULT_BINDINGS, logger_name=logger_name)
    for binding in extra_bindings:
        keymap.bind(binding, replace=True)
    return keymap


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_KEYMAP_TOML", "default_keymap"]
