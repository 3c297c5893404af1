"""Executable Textual app that edits one file with the modal engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_engine.adapters.textual.app"
    ) from exc

from modal_engine.buffer import BufferMirror
from modal_engine.editor import FieldEditor
from modal_engine.runtime import telemetry
from modal_engine.settings import EditorSettings
from modal_engine.syntax import IndentationOracle

from .controller import TextualFieldAdapter, TextualUIHooks


def render_mirror(mirror: BufferMirror) -> Text:
    """Render buffer text with the cursor cell shown in reverse video."""

    lines = mirror.text.split("\n")
    rendered = Text()
    for row, line in enumerate(lines):
        line = line.rstrip("\r")
        if row == mirror.row:
            col = mirror.col
            rendered.append(line[:col])
            rendered.append(line[col : col + 1] or " ", style="reverse")
            rendered.append(line[col + 1 :])
        else:
            rendered.append(line)
        if row < len(lines) - 1:
            rendered.append("\n")
    return rendered


def _load_oracle(path: Optional[Path], text: str) -> Optional[IndentationOracle]:
    if path is None or path.suffix != ".json":
        return None
    from modal_engine.syntax import JsonIndentationOracle

    try:
        return JsonIndentationOracle.from_text(text)
    except ImportError:
        telemetry.record_event(
            "adapter.syntax_unavailable",
            level="warning",
            data={"path": str(path), "extra": "syntax"},
        )
        return None


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


class FieldEditorApp(App[None]):
    """Minimal Textual UI embedding one field editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        path: Optional[Path] = None,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self._settings = settings or EditorSettings.from_env()
        self.editor: FieldEditor | None = None
        self.adapter: TextualFieldAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        text = ""
        if self._path is not None and self._path.exists():
            text = self._path.read_text(encoding="utf-8")
        self.editor = FieldEditor.from_text(
            text,
            oracle=_load_oracle(self._path, text),
            settings=self._settings,
            name=self._path.name if self._path else "scratch",
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualFieldAdapter(self.editor, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        if event.key == "ctrl+s":
            self._save()
        else:
            self.adapter.handle_textual_key(event.key, event.character)
        event.stop()

    def _save(self) -> None:
        if self.editor is None or self._path is None:
            self._update_status("no file to save")
            return
        self._path.write_text(self.editor.to_string(), encoding="utf-8")
        self._update_status(f"saved {self._path}")

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = mirror.text
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        if self.editor is not None:
            col, row = self.editor.cursor.readable_position()
            status = f"{self.editor.mode.label} {row}:{col} {status}"
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        del payload
        self.sub_title = f"{name} (unsaved)"

    def _log_line(self, line: str) -> None:
        telemetry.record_event("adapter.key", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file with the modal engine.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="File to edit; .json files get syntax-aware indentation",
    )
    parser.add_argument(
        "--keymap",
        type=Path,
        default=None,
        help="TOML keymap loaded on top of the defaults",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        default=None,
        help="Telemetry preset (default: MODAL_ENGINE_* environment)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = EditorSettings.from_env()
    if args.keymap is not None:
        settings = replace(settings, keymap_path=args.keymap)
    FieldEditorApp(path=args.path, settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
