"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of a buffer and the cursor addressing it."""

    text: str
    row: int
    col: int
    version: int = 0
    mode: Optional[str] = None
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def cursor(self) -> Tuple[int, int]:
        return (self.row, self.col)

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines() or [""]


class BufferSync(Protocol):
    """Protocol describing how renderers pull buffer state."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the engine a cursor outside the buffer."""

    def __init__(
        self, message: str, *, cursor: Tuple[int, int] | None = None
    ) -> None:
        super().__init__(message)
        self.cursor = cursor
