"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Optional

from .buffer import Buffer
from .cursor import Cursor
from .sync import BufferValidationError


def ensure_cursor(
    buffer: Buffer, cursor: Cursor, *, limit: Optional[int] = None
) -> Cursor:
    """Check ``cursor`` addresses visible text of ``buffer``.

    ``limit`` overrides the largest accepted column (defaults to the visible
    line length, the insert-mode bound).
    """

    row, col = cursor.position
    if row < 0 or row >= buffer.len_lines():
        raise BufferValidationError("Row out of range", cursor=(row, col))
    max_col = buffer.line_len(row) if limit is None else limit
    if col < 0 or col > max_col:
        raise BufferValidationError("Column out of range", cursor=(row, col))
    return cursor
