"""Declarative keymaps, the default bindings and TOML loading."""

from .models import Binding, KeyStroke
from .keymap import Keymap, KeymapConflictError, Resolution
from .config import (
    KeymapConfigError,
    bindings_from_config,
    load_keymap_file,
    parse_keymap,
)
from .defaults import DEFAULT_BINDINGS, DEFAULT_KEYMAP_TOML, default_keymap

__all__ = [
    "Binding",
    "KeyStroke",
    "Keymap",
    "KeymapConflictError",
    "Resolution",
    "KeymapConfigError",
    "bindings_from_config",
    "load_keymap_file",
    "parse_keymap",
    "DEFAULT_BINDINGS",
    "DEFAULT_KEYMAP_TOML",
    "default_keymap",
]
