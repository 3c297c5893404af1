"""Line-break policy fixed once per buffer."""

from __future__ import annotations

from enum import Enum


class LineBreak(str, Enum):
    """Line terminator used for every line the buffer inserts."""

    LF = "\n"
    CRLF = "\r\n"

    @classmethod
    def detect(cls, content: str) -> "LineBreak":
        """Inspect the first line of ``content`` for a ``\\r\\n`` terminator."""

        first_break = content.find("\n")
        if first_break > 0 and content[first_break - 1] == "\r":
            return cls.CRLF
        return cls.LF

    @property
    def width(self) -> int:
        return len(self.value)


def terminator_width(line: str) -> int:
    """Number of trailing line-break characters ``line`` carries."""

    if line.endswith("\r\n"):
        return 2
    if line.endswith("\n"):
        return 1
    return 0


__all__ = ["LineBreak", "terminator_width"]
