"""Text buffers, cursors and the motions that scan them."""

from .buffer import INDENT_WIDTH, Buffer, WritableBuffer
from .cursor import Cursor, Position
from .document import BufferDocument
from .linebreak import LineBreak
from .motions import TOKEN_PAIRS
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import ensure_cursor

__all__ = [
    "Buffer",
    "WritableBuffer",
    "BufferDocument",
    "Cursor",
    "Position",
    "LineBreak",
    "TOKEN_PAIRS",
    "INDENT_WIDTH",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_cursor",
]
