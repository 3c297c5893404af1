"""Dataclasses describing key strokes and the actions bound to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from modal_engine.actions import Action, EditorMode

MODIFIER_ALIASES = {
    "c": "C",
    "ctrl": "C",
    "control": "C",
    "s": "S",
    "shift": "S",
}
# control wraps shift ("C-S-x" is never produced by hosts)
_MODIFIER_ORDER = ("C", "S")


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = set()
    for modifier in modifiers:
        cleaned = modifier.strip().lower()
        if not cleaned:
            continue
        if cleaned not in MODIFIER_ALIASES:
            raise ValueError(f"Unsupported modifier '{modifier}'")
        values.add(MODIFIER_ALIASES[cleaned])
    return tuple(m for m in _MODIFIER_ORDER if m in values)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, written ``C-d``/``S-G`` as a token.

    Letter case follows the modifiers: ``S-g`` and ``S-G`` are the same
    stroke, and so are ``C-W`` and ``C-w``.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        modifiers = normalize_modifiers(self.modifiers)
        object.__setattr__(self, "modifiers", modifiers)
        if len(self.key) == 1:
            if "S" in modifiers:
                object.__setattr__(self, "key", self.key.upper())
            elif "C" in modifiers:
                object.__setattr__(self, "key", self.key.lower())

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Parse ``"C-d"``/``"S-N"``/``"Esc"``; a bare ``"-"`` is a key."""

        modifiers: list[str] = []
        rest = token
        while len(rest) > 2 and rest[1] == "-" and rest[0].lower() in ("c", "s"):
            modifiers.append(rest[0])
            rest = rest[2:]
        return cls(rest, tuple(modifiers))

    @property
    def token(self) -> str:
        return "".join(f"{m}-" for m in self.modifiers) + self.key


def normalize_keys(keys: Iterable[str]) -> tuple[str, ...]:
    return tuple(KeyStroke.parse(key).token for key in keys if key)


@dataclass(frozen=True, slots=True)
class Binding:
    """A key sequence in one mode and the verbs it runs, in order."""

    mode: str
    keys: tuple[str, ...]
    actions: tuple[Action, ...]
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", EditorMode.parse(self.mode).value)
        keys = normalize_keys(self.keys)
        if not keys:
            raise ValueError("binding needs at least one key")
        object.__setattr__(self, "keys", keys)
        if not self.actions:
            raise ValueError(f"binding '{self.id}' has no actions")
        object.__setattr__(
            self, "actions", tuple(Action.parse(action) for action in self.actions)
        )

    @classmethod
    def create(
        cls,
        mode: str,
        keys: Iterable[str],
        *actions: object,
        source: str | None = None,
    ) -> "Binding":
        return cls(
            mode=mode,
            keys=tuple(keys),
            actions=tuple(actions),  # type: ignore[arg-type]
            source=source,
        )

    @property
    def id(self) -> str:
        return f"{self.mode}.{' '.join(self.keys)}"


__all__ = [
    "MODIFIER_ALIASES",
    "KeyStroke",
    "Binding",
    "normalize_keys",
    "normalize_modifiers",
]
