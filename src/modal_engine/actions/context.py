"""State every action handler works against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from modal_engine.buffer import Cursor, WritableBuffer
from modal_engine.syntax import IndentationOracle, NullIndentationOracle

from .models import EditorMode


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``KeymapMode.handle_key`` and action handlers."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """The buffer/cursor pair of one field plus the services around it."""

    buffer: WritableBuffer
    cursor: Cursor = field(default_factory=Cursor)
    bus: ModeBus = field(default_factory=ModeBus)
    oracle: IndentationOracle = field(default_factory=NullIndentationOracle)
    mode: EditorMode = EditorMode.NORMAL
    viewport_height: int = 24
    tab_width: int = 2
    extras: Dict[str, object] = field(default_factory=dict)

    def col_limit(self, row: Optional[int] = None) -> int:
        """Largest column the cursor may occupy on ``row`` in the current mode.

        Insert mode may sit one past the last character; normal mode may not.
        """

        line_len = self.buffer.line_len(self.cursor.row if row is None else row)
        if self.mode is EditorMode.INSERT:
            return line_len
        return max(line_len - 1, 0)

    def snap(self) -> None:
        self.cursor.maybe_snap_to_col(self.col_limit())

    def clamp_row(self) -> None:
        last_row = self.buffer.len_lines() - 1
        if self.cursor.row > last_row:
            self.cursor.move_to_row(last_row)

    @property
    def half_page(self) -> int:
        return max((self.viewport_height - 2) // 2, 1)


__all__ = ["ModeBus", "ModeContext", "ModeResult"]
