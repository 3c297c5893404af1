"""Loads user keymaps from TOML files.

The layout is one table per mode under ``editor_keys``::

    [editor_keys.normal]
    "w" = "NextWord"
    "o" = ["InsertLineBelow", "InsertAtEOL"]
    "i" = { EnterMode = "Insert" }
    "S-I" = ["MoveToLineStart", { EnterMode = "Insert" }]
    "g" = { "g" = "MoveToTop" }

    [editor_keys.normal.d]
    "w" = "DeleteWord"

A string value is one verb, an array is several verbs run in order, and a
nested table continues a multi-key sequence. Arrays may mix plain verbs
and inline tables, which needs a TOML 1.0 reader.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Iterator, Mapping

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from modal_engine.actions import Action, EditorMode, is_action_mapping
from modal_engine.runtime.telemetry import record_event

from .models import Binding


class KeymapConfigError(ValueError):
    """Raised when a keymap document cannot be turned into bindings."""

    def __init__(self, message: str, *, source: str | None = None):
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


def bindings_from_config(
    document: Mapping[str, Any], *, source: str | None = None
) -> list[Binding]:
    editor_keys = document.get("editor_keys", document)
    if not isinstance(editor_keys, Mapping):
        raise KeymapConfigError("'editor_keys' must be a table", source=source)

    bindings: list[Binding] = []
    for mode_name, table in editor_keys.items():
        try:
            mode = EditorMode.parse(str(mode_name))
        except ValueError as exc:
            raise KeymapConfigError(str(exc), source=source) from exc
        if not isinstance(table, Mapping):
            raise KeymapConfigError(
                f"keys for mode '{mode_name}' must be a table", source=source
            )
        for keys, value in _walk(table, ()):
            try:
                actions = _parse_actions(value)
                binding = Binding.create(mode.value, keys, *actions, source=source)
            except ValueError as exc:
                raise KeymapConfigError(
                    f"{mode.value} {' '.join(keys)}: {exc}", source=source
                ) from exc
            bindings.append(binding)
    return bindings


def parse_keymap(text: str, *, source: str | None = None) -> list[Binding]:
    """Parse keymap TOML held in memory."""

    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise KeymapConfigError(str(exc), source=source) from exc
    return bindings_from_config(document, source=source)


def load_keymap_file(path: str | Path) -> list[Binding]:
    """Parse ``path`` and return its bindings; missing files yield nothing."""

    file_path = Path(path).expanduser()
    if not file_path.exists():
        record_event(
            "keymaps.config_missing",
            level="debug",
            data={"path": str(file_path)},
        )
        return []
    try:
        with file_path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise KeymapConfigError(str(exc), source=str(file_path)) from exc
    bindings = bindings_from_config(document, source=str(file_path))
    record_event(
        "keymaps.config_loaded",
        data={"path": str(file_path), "bindings": len(bindings)},
    )
    return bindings


def _walk(
    table: Mapping[str, Any], prefix: tuple[str, ...]
) -> Iterator[tuple[tuple[str, ...], Any]]:
    for key, value in table.items():
        keys = prefix + (str(key),)
        if isinstance(value, Mapping) and not is_action_mapping(value):
            yield from _walk(value, keys)
        else:
            yield keys, value


def _parse_actions(value: Any) -> tuple[Action, ...]:
    if isinstance(value, list):
        if not value:
            raise ValueError("empty action list")
        return tuple(Action.parse(item) for item in value)
    return (Action.parse(value),)


__all__ = [
    "KeymapConfigError",
    "bindings_from_config",
    "load_keymap_file",
    "parse_keymap",
]
