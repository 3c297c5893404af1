"""Cursor position shared by every buffer motion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]  # (col, row), the order buffer motions return


@dataclass(slots=True)
class Cursor:
    """A (row, col) position with saturating arithmetic.

    The cursor never looks at a buffer: callers hand in line lengths, so the
    same type can address any buffer. ``snapback_col`` remembers the column
    of the last horizontal move so vertical motion through a short line can
    restore it on a longer one.
    """

    row: int = 0
    col: int = 0
    snapback_col: int = 0
    # offsets only shift where renderers draw the cursor
    row_offset: int = 0
    col_offset: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def move_left(self, amount: int) -> None:
        self.col = max(self.col - amount, 0)
        self.snapback_col = self.col

    def move_right(self, amount: int) -> None:
        self.col = max(self.col + amount, 0)
        self.snapback_col = self.col

    def move_up(self, amount: int) -> None:
        self.row = max(self.row - amount, 0)

    def move_down(self, amount: int) -> None:
        self.row = max(self.row + amount, 0)

    def move_to(self, col: int, row: int) -> None:
        self.move_to_row(row)
        self.move_to_col(col)

    def move_to_col(self, col: int) -> None:
        self.col = max(col, 0)
        self.snapback_col = self.col

    def move_to_row(self, row: int) -> None:
        self.row = max(row, 0)

    def move_to_line_start(self) -> None:
        self.move_to_col(0)

    def move_to_line_end(self, line_len: int) -> None:
        """Place the cursor on the last visible character of the line."""

        self.move_to_col(line_len - 1)

    def move_to_newline_start(self) -> None:
        self.row += 1
        self.move_to_col(0)

    def maybe_snap_to_col(self, limit: int) -> None:
        """Re-establish ``col <= limit`` after the line under the cursor changed.

        Moving into a shorter line clamps the column down; moving back into a
        longer one restores the remembered column as far as ``limit`` allows.
        ``snapback_col`` is left untouched.
        """

        limit = max(limit, 0)
        if self.col > limit:
            self.col = limit
        elif self.col < self.snapback_col:
            self.col = min(self.snapback_col, limit)

    def row_with_offset(self) -> int:
        return self.row + self.row_offset

    def col_with_offset(self) -> int:
        return self.col + self.col_offset

    def set_row_offset(self, offset: int) -> None:
        self.row_offset = offset

    def set_col_offset(self, offset: int) -> None:
        self.col_offset = offset

    def readable_position(self) -> Position:
        """1-based ``(col, row)`` for status lines."""

        return (self.col + 1, self.row + 1)


__all__ = ["Cursor", "Position"]
