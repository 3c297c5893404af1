"""Line-indexed character storage backing every buffer."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence


def split_lines(text: str, *, keep_tail: bool = True) -> List[str]:
    """Split ``text`` into lines that keep their ``\\n`` terminator.

    Only the final piece may lack a terminator. With ``keep_tail`` disabled an
    empty final piece is dropped, which is what splicing into the middle of a
    document needs.
    """

    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if keep_tail or pieces[-1]:
        lines.append(pieces[-1])
    return lines


@dataclass(slots=True)
class BufferDocument:
    """Mutable text storage with rope-style line indexing.

    Lines are stored with their terminators; every line but the last ends
    with ``\\n``, so an empty document is a single empty line and a document
    ending in a line break has an empty last line. Line start offsets are
    cached and searched with ``bisect``, keeping offset->line lookups at
    O(log n). An edit only invalidates the starts from its first line on.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False
    _starts: List[int] = field(default_factory=list, repr=False)
    # first row whose start offset is stale; None once the table is current
    _stale_from: Optional[int] = field(default=0, repr=False)

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=split_lines(text), version=0, dirty=False)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def text(self) -> str:
        return "".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def len_chars(self) -> int:
        starts = self._line_starts()
        return starts[-1] + len(self._lines[-1])

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_to_char(self, row: int) -> int:
        """Offset of the first character of ``row``; past the end -> length."""

        if row <= 0:
            return 0
        if row >= len(self._lines):
            return self.len_chars()
        return self._line_starts()[row]

    def char_to_line(self, offset: int) -> int:
        starts = self._line_starts()
        row = bisect_right(starts, max(offset, 0)) - 1
        return min(max(row, 0), len(self._lines) - 1)

    def char_at(self, offset: int) -> Optional[str]:
        if offset < 0 or offset >= self.len_chars():
            return None
        row = self.char_to_line(offset)
        return self._lines[row][offset - self._line_starts()[row]]

    def chars_from(self, offset: int) -> Iterator[str]:
        """Yield characters starting at ``offset`` towards the document end."""

        if offset >= self.len_chars():
            return
        offset = max(offset, 0)
        row = self.char_to_line(offset)
        yield from self._lines[row][offset - self._line_starts()[row] :]
        for line in self._lines[row + 1 :]:
            yield from line

    def chars_before(self, offset: int) -> Iterator[str]:
        """Yield characters preceding ``offset``, nearest first."""

        offset = min(offset, self.len_chars())
        if offset <= 0:
            return
        row = self.char_to_line(offset - 1)
        head = self._lines[row][: offset - self._line_starts()[row]]
        yield from reversed(head)
        for line in reversed(self._lines[:row]):
            yield from reversed(line)

    def slice(self, start: int, end: int) -> str:
        length = self.len_chars()
        start = min(max(start, 0), length)
        end = min(max(end, 0), length)
        if start >= end:
            return ""
        starts = self._line_starts()
        first = self.char_to_line(start)
        last = self.char_to_line(end)
        if first == last:
            return self._lines[first][start - starts[first] : end - starts[first]]
        return (
            self._lines[first][start - starts[first] :]
            + "".join(self._lines[first + 1 : last])
            + self._lines[last][: end - starts[last]]
        )

    def char_to_byte(self, offset: int) -> int:
        """UTF-8 byte offset of the character offset ``offset``."""

        offset = min(max(offset, 0), self.len_chars())
        row = self.char_to_line(offset)
        head = self._lines[row][: offset - self._line_starts()[row]]
        before = sum(len(line.encode("utf-8")) for line in self._lines[:row])
        return before + len(head.encode("utf-8"))

    def insert(self, offset: int, text: str) -> None:
        if not text:
            return
        offset = min(max(offset, 0), self.len_chars())
        row = self.char_to_line(offset)
        local = offset - self._line_starts()[row]
        line = self._lines[row]
        merged = line[:local] + text + line[local:]
        last = row == len(self._lines) - 1
        self._lines[row : row + 1] = split_lines(merged, keep_tail=last)
        self._touch(row)

    def remove(self, start: int, end: int) -> None:
        """Remove the half-open range ``[start, end)``; empty ranges are no-ops."""

        length = self.len_chars()
        start = min(max(start, 0), length)
        end = min(max(end, 0), length)
        if start >= end:
            return
        starts = self._line_starts()
        first = self.char_to_line(start)
        last = self.char_to_line(end)
        merged = (
            self._lines[first][: start - starts[first]]
            + self._lines[last][end - starts[last] :]
        )
        keep_tail = last == len(self._lines) - 1
        self._lines[first : last + 1] = split_lines(merged, keep_tail=keep_tail)
        self._touch(first)

    def _line_starts(self) -> List[int]:
        if self._stale_from is not None:
            keep = min(self._stale_from, len(self._lines) - 1) + 1
            starts = self._starts[:keep] or [0]
            offset = starts[-1]
            for line in self._lines[len(starts) - 1 : -1]:
                offset += len(line)
                starts.append(offset)
            self._starts = starts
            self._stale_from = None
        return self._starts

    def _touch(self, row: int) -> None:
        if self._stale_from is None or row < self._stale_from:
            self._stale_from = row
        self.version += 1
        self.dirty = True


__all__ = ["BufferDocument", "split_lines"]
