"""Per-mode key tables resolved one key at a time.

Every mode owns a nested table shaped like the ``editor_keys`` config: a
key maps either to a :class:`Binding`, which ends the sequence, or to a
deeper table that waits for more keys. A key can therefore never be both
bound and a prefix, so a pending sequence is never a match on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Literal, Optional, Sequence, Union

from modal_engine.actions import Action
from modal_engine.runtime.telemetry import span

from .models import Binding

Node = Union[Binding, Dict[str, "Node"]]


class KeymapConflictError(ValueError):
    """Raised when a binding would displace bindings already in the keymap."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of looking up the keys typed so far."""

    status: Literal["match", "pending", "miss"]
    binding: Optional[Binding] = None
    next_expected: tuple[str, ...] = ()

    @property
    def actions(self) -> tuple[Action, ...]:
        return self.binding.actions if self.binding else ()


class Keymap:
    def __init__(
        self, bindings: Iterable[Binding] = (), *, logger_name: str | None = None
    ) -> None:
        self._tables: Dict[str, Dict[str, Node]] = {}
        self._logger_name = logger_name
        for binding in bindings:
            self.bind(binding)

    def __len__(self) -> int:
        return sum(1 for _ in self.bindings())

    def bind(self, binding: Binding, *, replace: bool = False) -> tuple[Binding, ...]:
        """Add ``binding`` and return the bindings it displaced.

        A binding displaces another with the same keys, a shorter binding
        that is a prefix of its keys, and every longer binding its keys are
        a prefix of. Without ``replace`` any of those raises
        :class:`KeymapConflictError` and the keymap is left untouched.
        """

        with span(
            "keymaps::bind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            conflicts = self._conflicts(binding)
            if conflicts:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                if not replace:
                    raise KeymapConflictError(binding, conflicts)

            table = self._tables.setdefault(binding.mode, {})
            *prefix, last = binding.keys
            for key in prefix:
                node = table.get(key)
                if not isinstance(node, dict):
                    node = table[key] = {}
                table = node
            table[last] = binding
            return conflicts

    def bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        modes = self._tables if mode is None else (mode,)
        for name in modes:
            yield from _leaves(self._tables.get(name, {}))

    def resolve(self, mode: str, tokens: Sequence[str]) -> Resolution:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(tokens)},
        ) as handle:
            node: Node = self._tables.get(mode, {})
            for token in tokens:
                if not isinstance(node, dict) or token not in node:
                    handle.add_metadata("status", "miss")
                    return Resolution(status="miss")
                node = node[token]

            if isinstance(node, Binding):
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", node.id)
                return Resolution(status="match", binding=node)
            if node:
                handle.add_metadata("status", "pending")
                return Resolution(status="pending", next_expected=tuple(sorted(node)))
            handle.add_metadata("status", "miss")
            return Resolution(status="miss")

    def _conflicts(self, binding: Binding) -> tuple[Binding, ...]:
        node: Node = self._tables.get(binding.mode, {})
        for key in binding.keys:
            if isinstance(node, Binding):
                return (node,)
            if key not in node:
                return ()
            node = node[key]
        if isinstance(node, Binding):
            return (node,)
        return tuple(_leaves(node))


def _leaves(table: Dict[str, Node]) -> Iterator[Binding]:
    for node in table.values():
        if isinstance(node, Binding):
            yield node
        else:
            yield from _leaves(node)


__all__ = ["Keymap", "KeymapConflictError", "Resolution"]
