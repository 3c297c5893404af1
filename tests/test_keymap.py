from __future__ import annotations

import pytest

from modal_engine.actions import Action, ActionKind, EditorMode
from modal_engine.keymaps import (
    DEFAULT_BINDINGS,
    Binding,
    Keymap,
    KeymapConflictError,
    KeyStroke,
    default_keymap,
)


def make_binding(
    *keys: str,
    mode: str = "normal",
    actions: tuple[object, ...] = ("MoveToTop",),
) -> Binding:
    return Binding.create(mode, keys or ("g", "g"), *actions)


def test_binding_id_is_mode_and_keys() -> None:
    binding = make_binding("g", "g")

    assert binding.id == "normal.g g"
    assert binding.keys == ("g", "g")


def test_binding_parses_action_config_forms() -> None:
    binding = make_binding(
        "S-I", actions=("MoveToLineStart", {"EnterMode": "Insert"})
    )

    assert [action.kind for action in binding.actions] == [
        ActionKind.MOVE_TO_LINE_START,
        ActionKind.ENTER_MODE,
    ]


def test_binding_requires_actions_and_keys() -> None:
    with pytest.raises(ValueError):
        make_binding("x", actions=())
    with pytest.raises(ValueError):
        Binding.create("normal", [], "MoveLeft")


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("S-g", "S-G"),
        ("s-G", "S-G"),
        ("C-W", "C-w"),
        ("c-d", "C-d"),
        ("Esc", "Esc"),
        ("-", "-"),
    ],
)
def test_keystroke_case_follows_modifiers(token: str, expected: str) -> None:
    assert KeyStroke.parse(token).token == expected


def test_control_chord_written_upper_case_matches_lower_case_key() -> None:
    keymap = Keymap([make_binding("C-W", mode="insert", actions=("DeleteBack",))])

    resolution = keymap.resolve("insert", (KeyStroke("w", ("ctrl",)).token,))

    assert resolution.status == "match"
    assert resolution.actions == (Action(ActionKind.DELETE_BACK),)


def test_resolve_exact_sequence() -> None:
    binding = make_binding("g", "g")
    keymap = Keymap([binding])

    resolution = keymap.resolve("normal", ("g", "g"))

    assert resolution.status == "match"
    assert resolution.binding == binding
    assert resolution.actions == (Action(ActionKind.MOVE_TO_TOP),)


def test_resolve_prefix_is_pending() -> None:
    keymap = Keymap([make_binding("g", "g")])

    resolution = keymap.resolve("normal", ("g",))

    assert resolution.status == "pending"
    assert resolution.next_expected == ("g",)
    assert resolution.actions == ()


def test_resolve_past_a_binding_misses() -> None:
    keymap = Keymap([make_binding("x", actions=("DeleteCurrentChar",))])

    assert keymap.resolve("normal", ("x", "x")).status == "miss"
    assert keymap.resolve("normal", ("g", "x")).status == "miss"


def test_bindings_are_scoped_by_mode() -> None:
    keymap = Keymap([make_binding("g", "g")])

    assert keymap.resolve("insert", ("g",)).status == "miss"
    assert {binding.mode for binding in keymap.bindings()} == {"normal"}


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    keymap = Keymap([make_binding("g", "g"), make_binding("g", "g", mode="insert")])

    assert len(keymap) == 2
    assert [binding.mode for binding in keymap.bindings()] == ["normal", "insert"]


def test_exact_conflict_raises_and_leaves_keymap_untouched() -> None:
    binding = make_binding("g", "g")
    keymap = Keymap([binding])

    with pytest.raises(KeymapConflictError) as excinfo:
        keymap.bind(make_binding("g", "g", actions=("MoveToBottom",)))

    assert excinfo.value.conflicts == (binding,)
    assert list(keymap.bindings()) == [binding]


def test_bound_prefix_conflicts_with_longer_sequence() -> None:
    short = make_binding("d", actions=("DeleteLine",))
    keymap = Keymap([short])

    with pytest.raises(KeymapConflictError) as excinfo:
        keymap.bind(make_binding("d", "w", actions=("DeleteWord",)))

    assert excinfo.value.conflicts == (short,)


def test_replace_returns_displaced_bindings() -> None:
    keymap = Keymap(
        [
            make_binding("d", "w", actions=("DeleteWord",)),
            make_binding("d", "d", actions=("DeleteLine",)),
        ]
    )

    displaced = keymap.bind(make_binding("d", actions=("DeleteLine",)), replace=True)

    assert [binding.id for binding in displaced] == ["normal.d w", "normal.d d"]
    assert [binding.id for binding in keymap.bindings()] == ["normal.d"]
    assert keymap.resolve("normal", ("d",)).status == "match"


def test_replace_swaps_exact_binding() -> None:
    keymap = Keymap([make_binding("x", actions=("DeleteCurrentChar",))])

    keymap.bind(make_binding("x", actions=("MoveRight",)), replace=True)

    assert keymap.resolve("normal", ("x",)).actions == (
        Action(ActionKind.MOVE_RIGHT),
    )


def test_default_keymap_delete_prefix_lists_every_target() -> None:
    resolution = default_keymap().resolve("normal", ("d",))

    assert resolution.status == "pending"
    assert resolution.next_expected == ("b", "d", "h", "j", "k", "l", "w")


def test_default_keymap_holds_every_default_binding() -> None:
    keymap = default_keymap()

    assert len(keymap) == len(DEFAULT_BINDINGS)
    assert {binding.mode for binding in keymap.bindings()} == {"normal", "insert"}
    assert keymap.resolve("insert", ("Esc",)).actions == (
        Action.enter_mode(EditorMode.NORMAL),
    )


def test_default_keymap_extra_bindings_replace_defaults() -> None:
    keymap = default_keymap([make_binding("x", actions=("MoveRight",))])

    assert keymap.resolve("normal", ("x",)).actions == (
        Action(ActionKind.MOVE_RIGHT),
    )
    assert len(keymap) == len(DEFAULT_BINDINGS)
