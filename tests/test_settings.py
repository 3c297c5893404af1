from __future__ import annotations

from pathlib import Path

import pytest

from modal_engine import EditorSettings
from modal_engine.buffer import INDENT_WIDTH


def test_defaults() -> None:
    settings = EditorSettings.from_env({})

    assert settings == EditorSettings()
    assert settings.indent_width == INDENT_WIDTH
    assert settings.keymap_path is None


def test_environment_overrides() -> None:
    settings = EditorSettings.from_env(
        {
            "MODAL_ENGINE_VIEWPORT_HEIGHT": "40",
            "MODAL_ENGINE_TAB_WIDTH": "4",
            "MODAL_ENGINE_INDENT_WIDTH": "0",
            "MODAL_ENGINE_PENDING_TIMEOUT_MS": "250",
            "MODAL_ENGINE_KEYMAP": "/etc/modal/keys.toml",
        }
    )

    assert settings.viewport_height == 40
    assert settings.tab_width == 4
    assert settings.indent_width == 0
    assert settings.pending_timeout_ms == 250
    assert settings.keymap_path == Path("/etc/modal/keys.toml")


def test_blank_values_keep_defaults() -> None:
    settings = EditorSettings.from_env({"MODAL_ENGINE_TAB_WIDTH": "  "})

    assert settings.tab_width == 2


def test_malformed_integer_names_the_variable() -> None:
    with pytest.raises(ValueError, match="MODAL_ENGINE_TAB_WIDTH"):
        EditorSettings.from_env({"MODAL_ENGINE_TAB_WIDTH": "wide"})


@pytest.mark.parametrize(
    "overrides",
    [
        {"viewport_height": 0},
        {"tab_width": -1},
        {"pending_timeout_ms": 0},
        {"indent_width": -2},
    ],
)
def test_invalid_values_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        EditorSettings(**overrides)
