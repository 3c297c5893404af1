"""Pure scanning functions behind cursor motions.

Every function takes a document and an absolute character offset and
returns an absolute offset (or row). None of them mutate the document, and
all of them degrade to "no move" at document boundaries.
"""

from __future__ import annotations

from typing import Dict

from .document import BufferDocument

TOKEN_PAIRS: tuple[tuple[str, str], ...] = (
    ("(", ")"),
    ("{", "}"),
    ("[", "]"),
    ("<", ">"),
)

_OPENING: Dict[str, str] = {open_: close for open_, close in TOKEN_PAIRS}
_CLOSING: Dict[str, str] = {close: open_ for open_, close in TOKEN_PAIRS}


def is_word_char(char: str) -> bool:
    return char.isalnum()


def after_whitespace(document: BufferDocument, offset: int) -> int:
    """Offset of the first non-whitespace character after the next whitespace run."""

    seen_whitespace = False
    index = offset
    for char in document.chars_from(offset):
        if char.isspace():
            seen_whitespace = True
        elif seen_whitespace:
            return index
        index += 1
    return index


def before_whitespace(document: BufferDocument, offset: int) -> int:
    """Offset of the start of the whitespace-delimited run before ``offset``."""

    inside_run = False
    index = offset
    for char in document.chars_before(offset):
        if not char.isspace():
            inside_run = True
        elif inside_run:
            return index
        index -= 1
    return index


def after_separator(document: BufferDocument, offset: int) -> int:
    """Offset of the next word start.

    The scan first leaves the run the cursor sits in; a word character that
    follows a separator ends it. Crossing a line break ends it at the first
    non-whitespace character, word or not.
    """

    first = document.char_at(offset)
    if first is None:
        return offset
    in_initial_run = is_word_char(first)
    crossed_line = first == "\n"
    index = offset + 1
    for char in document.chars_from(index):
        if char == "\n":
            crossed_line = True
            in_initial_run = False
        elif crossed_line and not char.isspace():
            return index
        elif is_word_char(char):
            if not in_initial_run:
                return index
        else:
            in_initial_run = False
        index += 1
    return index


def before_separator(document: BufferDocument, offset: int) -> int:
    """Offset of the start of the word before ``offset``.

    Separators are skipped first; if a line break was crossed the first
    non-whitespace character ends the scan. Otherwise the scan walks to the
    first character of the word run it lands in.
    """

    crossed_line = False
    in_word = False
    index = offset
    for char in document.chars_before(offset):
        if in_word:
            if not is_word_char(char):
                return index
        elif is_word_char(char):
            in_word = True
        elif char == "\n":
            crossed_line = True
        elif crossed_line and not char.isspace():
            return index - 1
        index -= 1
    return index


def opposing_token(document: BufferDocument, offset: int) -> int:
    """Offset of the bracket matching the one at ``offset``.

    Returns ``offset`` unchanged when the character is not a token or the
    brackets are unbalanced.
    """

    token = document.char_at(offset)
    if token is None:
        return offset

    if token in _OPENING:
        mirror = _OPENING[token]
        depth = 1
        index = offset + 1
        for char in document.chars_from(index):
            if char == token:
                depth += 1
            elif char == mirror:
                depth -= 1
                if depth == 0:
                    return index
            index += 1
        return offset

    if token in _CLOSING:
        mirror = _CLOSING[token]
        depth = 1
        index = offset - 1
        for char in document.chars_before(offset):
            if char == token:
                depth += 1
            elif char == mirror:
                depth -= 1
                if depth == 0:
                    return index
            index -= 1
        return offset

    return offset


def empty_line_above(document: BufferDocument, row: int, line_break: str) -> int:
    for candidate in range(min(row, document.line_count) - 1, -1, -1):
        if document.get_line(candidate) == line_break:
            return candidate
    return 0


def empty_line_below(document: BufferDocument, row: int, line_break: str) -> int:
    last_row = document.line_count - 1
    for candidate in range(max(row + 1, 0), document.line_count):
        if document.get_line(candidate) == line_break:
            return candidate
    return last_row


__all__ = [
    "TOKEN_PAIRS",
    "is_word_char",
    "after_whitespace",
    "before_whitespace",
    "after_separator",
    "before_separator",
    "opposing_token",
    "empty_line_above",
    "empty_line_below",
]
