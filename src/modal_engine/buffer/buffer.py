"""Read-only and writable buffers over a line-indexed document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from modal_engine.runtime import telemetry

from . import motions
from .cursor import Cursor, Position
from .document import BufferDocument
from .linebreak import LineBreak, terminator_width
from .sync import BufferMirror

if TYPE_CHECKING:  # pragma: no cover - typing only
    from modal_engine.syntax.indentation import IndentationOracle

INDENT_WIDTH = 2


class Buffer:
    """Read-only text of one editable field.

    Built with :meth:`from_text` and upgraded with :meth:`with_write` before
    any edit. Queries never raise for out-of-range rows; cursors handed in
    are clamped to the document.
    """

    def __init__(
        self,
        document: BufferDocument,
        line_break: LineBreak = LineBreak.LF,
        *,
        name: str = "default",
        indent_width: int = INDENT_WIDTH,
    ) -> None:
        self.document = document
        self.line_break = line_break
        self.name = name
        self.indent_width = indent_width

    @classmethod
    def from_text(
        cls, content: str, *, name: str = "default", indent_width: int = INDENT_WIDTH
    ) -> "Buffer":
        return cls(
            BufferDocument.from_text(content),
            LineBreak.detect(content),
            name=name,
            indent_width=indent_width,
        )

    def with_write(self) -> "WritableBuffer":
        return WritableBuffer(
            self.document,
            self.line_break,
            name=self.name,
            indent_width=self.indent_width,
        )

    def to_string(self) -> str:
        return self.document.text()

    def __str__(self) -> str:
        return self.to_string()

    def chars(self) -> Iterator[str]:
        return self.document.chars_from(0)

    def mirror(
        self, cursor: Cursor, *, attributes: Optional[dict[str, str]] = None
    ) -> BufferMirror:
        return BufferMirror(
            text=self.to_string(),
            row=cursor.row,
            col=cursor.col,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    # -- line indexing -------------------------------------------------

    def len_lines(self) -> int:
        return self.document.line_count

    def len_chars(self) -> int:
        return self.document.len_chars()

    def line(self, row: int) -> Optional[str]:
        if row < 0 or row >= self.document.line_count:
            return None
        return self.document.get_line(row)

    def current_line(self, cursor: Cursor) -> Optional[str]:
        return self.line(cursor.row)

    def line_len(self, row: int) -> int:
        """Visible length of ``row``, line break excluded."""

        line = self.line(row)
        if line is None:
            return 0
        return len(line) - terminator_width(line)

    def line_len_with_linebreak(self, row: int) -> int:
        line = self.line(row)
        return 0 if line is None else len(line)

    def line_to_char(self, row: int) -> int:
        return self.document.line_to_char(row)

    def char_to_line(self, offset: int) -> int:
        return self.document.char_to_line(offset)

    def char_to_byte(self, offset: int) -> int:
        return self.document.char_to_byte(offset)

    def offset_of(self, cursor: Cursor) -> int:
        """Absolute offset of ``cursor``, clamped into its line's visible text."""

        row = min(max(cursor.row, 0), self.len_lines() - 1)
        col = min(max(cursor.col, 0), self.line_len(row))
        return self.document.line_to_char(row) + col

    def position_of(self, offset: int) -> Position:
        offset = min(max(offset, 0), self.len_chars())
        row = self.document.char_to_line(offset)
        return (offset - self.document.line_to_char(row), row)

    # -- motions -------------------------------------------------------

    def find_char_after_whitespace(self, cursor: Cursor) -> Position:
        return self.position_of(
            motions.after_whitespace(self.document, self.offset_of(cursor))
        )

    def find_char_before_whitespace(self, cursor: Cursor) -> Position:
        return self.position_of(
            motions.before_whitespace(self.document, self.offset_of(cursor))
        )

    def find_char_after_separator(self, cursor: Cursor) -> Position:
        return self.position_of(
            motions.after_separator(self.document, self.offset_of(cursor))
        )

    def find_char_before_separator(self, cursor: Cursor) -> Position:
        return self.position_of(
            motions.before_separator(self.document, self.offset_of(cursor))
        )

    def find_oposing_token(self, cursor: Cursor) -> Position:
        offset = self.offset_of(cursor)
        target = motions.opposing_token(self.document, offset)
        if target == offset:
            return (cursor.col, cursor.row)
        return self.position_of(target)

    def find_empty_line_above(self, cursor: Cursor) -> int:
        return motions.empty_line_above(
            self.document, cursor.row, self.line_break.value
        )

    def find_empty_line_below(self, cursor: Cursor) -> int:
        return motions.empty_line_below(
            self.document, cursor.row, self.line_break.value
        )


class WritableBuffer(Buffer):
    """Buffer variant that owns the mutation methods.

    Every delete computes its range from validated line/offset conversions
    and saturates at line and document boundaries, so no operation leaves a
    line break split across the removed range.
    """

    def with_write(self) -> "WritableBuffer":
        return self

    def insert_text(self, text: str, cursor: Cursor) -> None:
        self._insert(self.offset_of(cursor), text, label="insert_text")

    def insert_char(self, char: str, cursor: Cursor) -> None:
        self._insert(self.offset_of(cursor), char, label="insert_char")

    def insert_newline(self, cursor: Cursor) -> None:
        offset = self.offset_of(cursor)
        self._insert(offset, self.line_break.value, label="insert_newline")

    def erase_previous_char(self, cursor: Cursor) -> None:
        """Remove the character before the cursor, joining lines at column 0."""

        offset = self.offset_of(cursor)
        row = self.char_to_line(offset)
        if offset == self.line_to_char(row):
            if row == 0:
                return
            previous = self.line_to_char(row - 1) + self.line_len(row - 1)
            self._remove(previous, offset, label="erase_previous_char")
            return
        self._remove(offset - 1, offset, label="erase_previous_char")

    def erase_current_char(self, cursor: Cursor) -> None:
        offset = self.offset_of(cursor)
        row = self.char_to_line(offset)
        line_end = self.line_to_char(row) + self.line_len(row)
        self._remove(offset, min(offset + 1, line_end), label="erase_current_char")

    def erase_until_eol(self, cursor: Cursor) -> None:
        offset = self.offset_of(cursor)
        row = self.char_to_line(offset)
        line_end = self.line_to_char(row) + self.line_len(row)
        self._remove(offset, line_end, label="erase_until_eol")

    def erase_backwards_up_to_line_start(self, cursor: Cursor) -> None:
        offset = self.offset_of(cursor)
        line_start = self.line_to_char(self.char_to_line(offset))
        self._remove(max(offset - 1, line_start), offset, label="erase_backwards")

    def delete_line(self, row: int) -> None:
        if row < 0 or row >= self.len_lines():
            return
        self._remove(
            self.line_to_char(row), self.line_to_char(row + 1), label="delete_line"
        )

    def insert_line_below(
        self, cursor: Cursor, oracle: Optional["IndentationOracle"] = None
    ) -> int:
        """Open an indented line after the cursor row; returns the indent width."""

        depth = 0
        if oracle is not None:
            byte_offset = self.char_to_byte(self.offset_of(cursor))
            depth = oracle.ancestor_depth_at(byte_offset)
        indentation = " " * (self.indent_width * max(depth, 0))
        row = min(max(cursor.row, 0), self.len_lines() - 1)
        line = self.document.get_line(row)
        if terminator_width(line):
            inserted = indentation + self.line_break.value
            self._insert(
                self.line_to_char(row + 1), inserted, label="insert_line_below"
            )
        else:
            inserted = self.line_break.value + indentation
            self._insert(self.len_chars(), inserted, label="insert_line_below")
        return len(indentation)

    def insert_line_above(self, cursor: Cursor) -> None:
        row = min(max(cursor.row, 0), self.len_lines() - 1)
        self._insert(
            self.line_to_char(row), self.line_break.value, label="insert_line_above"
        )

    def delete_word(self, cursor: Cursor) -> None:
        offset = self.offset_of(cursor)
        row = self.char_to_line(offset)
        line_end = self.line_to_char(row) + self.line_len(row)
        target = motions.after_separator(self.document, offset)
        self._remove(offset, min(target, line_end), label="delete_word")

    def delete_word_backwards(self, cursor: Cursor) -> int:
        """Delete back to the previous word start; returns the column delta."""

        offset = self.offset_of(cursor)
        line_start = self.line_to_char(self.char_to_line(offset))
        target = max(motions.before_separator(self.document, offset), line_start)
        self._remove(target, offset, label="delete_word_backwards")
        return target - offset

    def _insert(self, offset: int, text: str, *, label: str) -> None:
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, "offset": offset},
        ):
            self.document.insert(offset, text)

    def _remove(self, start: int, end: int, *, label: str) -> None:
        if start >= end:
            return
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, "start": start, "end": end},
        ):
            self.document.remove(start, end)


__all__ = ["Buffer", "WritableBuffer", "INDENT_WIDTH"]
