import pytest

from keymode.commands import Custom, DeleteLine, Motion, Move, NoOp
from keymode.keymaps import (
    DEFAULT_BINDINGS,
    Binding,
    KeyEvent,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def make_binding(
    *,
    binding_id: str,
    table: str = "normal",
    key: str = "q",
    command=NoOp(),
    when: tuple[WhenClause, ...] = (),
    any_modifiers: bool = False,
) -> Binding:
    return Binding(
        id=binding_id,
        table=table,
        key=KeyEvent.parse(key),
        command=command,
        when=when,
        any_modifiers=any_modifiers,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    binding = make_binding(binding_id="normal.q")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings("normal")) == [binding]
    assert registry.revision() == 1


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="normal.q"))

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding(binding_id="normal.q.duplicate"))

    assert [binding.id for binding in info.value.conflicts] == ["normal.q"]


def test_same_key_in_other_table_is_not_a_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="normal.q"))
    registry.register_binding(make_binding(binding_id="visual.q", table="visual"))

    assert registry.stats().tables == ("normal", "visual")


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()

    binding_panel = make_binding(
        binding_id="panel",
        when=(WhenClause("panel_open"),),
    )
    binding_no_panel = make_binding(
        binding_id="no_panel",
        when=(WhenClause.parse("!panel_open"),),
    )

    registry.register_binding(binding_panel)
    registry.register_binding(binding_no_panel)

    assert registry.stats().binding_count == 2


def test_register_binding_replace_drops_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="old"))

    registry.register_binding(
        make_binding(binding_id="new", command=Custom("quit")), replace=True
    )

    assert [binding.id for binding in registry.iter_bindings()] == ["new"]
    found = registry.lookup("normal", KeyEvent.key("q"))
    assert found is not None and found.command == Custom("quit")


def test_duplicate_id_without_replace_raises() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="same", key="q"))

    with pytest.raises(ValueError):
        registry.register_binding(make_binding(binding_id="same", key="w"))


def test_unregister_binding_removes_index() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="normal.q"))

    removed = registry.unregister_binding("normal.q")

    assert removed is not None
    assert registry.lookup("normal", KeyEvent.key("q")) is None
    assert registry.unregister_binding("normal.q") is None
    assert registry.stats().tables == ()


def test_update_binding_rejects_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="first", key="q"))
    registry.register_binding(make_binding(binding_id="second", key="w"))

    with pytest.raises(KeymapConflictError):
        registry.update_binding("second", key=KeyEvent.key("q"))

    assert registry.lookup("normal", KeyEvent.key("w")).id == "second"


def test_update_missing_binding_raises_key_error() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.update_binding("missing", description="nope")
    with pytest.raises(KeyError):
        registry.get_binding("missing")


def test_lookup_respects_when_flags() -> None:
    registry = KeymapRegistry()
    registry.register_binding(
        make_binding(binding_id="gated", when=(WhenClause("enable_search"),))
    )

    assert registry.lookup("normal", KeyEvent.key("q")) is None
    assert registry.lookup("normal", KeyEvent.key("q"), {"enable_search": False}) is None
    assert (
        registry.lookup("normal", KeyEvent.key("q"), {"enable_search": True}).id
        == "gated"
    )


def test_lookup_prefers_exact_modifiers_over_wildcard() -> None:
    registry = KeymapRegistry()
    registry.register_binding(
        make_binding(
            binding_id="any_left",
            key="left",
            command=Move(Motion.left()),
            any_modifiers=True,
        )
    )
    registry.register_binding(
        make_binding(binding_id="ctrl_left", key="ctrl+left", command=Custom("word"))
    )

    assert registry.lookup("normal", KeyEvent.parse("shift+left")).id == "any_left"
    assert registry.lookup("normal", KeyEvent.parse("left")).id == "any_left"
    assert registry.lookup("normal", KeyEvent.parse("ctrl+left")).id == "ctrl_left"


def test_lookup_normalizes_shift_on_characters() -> None:
    registry = KeymapRegistry()
    registry.register_binding(make_binding(binding_id="big_g", key="G"))
    registry.register_binding(make_binding(binding_id="dollar", key="$"))

    assert registry.lookup("normal", KeyEvent.key("G")).id == "big_g"
    assert registry.lookup("normal", KeyEvent.parse("shift+g")).id == "big_g"
    assert registry.lookup("normal", KeyEvent.parse("shift+$")).id == "dollar"
    assert registry.lookup("normal", KeyEvent.key("g")) is None


def test_load_default_keymaps_registers_every_table() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.stats().tables == (
        "insert",
        "normal",
        "normal.pending.change",
        "normal.pending.delete",
        "normal.pending.g",
        "normal.pending.yank",
        "visual",
    )
    assert registry.lookup("normal.pending.delete", KeyEvent.key("d")).command == DeleteLine()


def test_load_default_keymaps_filters_and_extras() -> None:
    registry = load_default_keymaps(
        KeymapRegistry(),
        exclude_bindings=("normal.undo",),
        extra_bindings=(
            make_binding(binding_id="custom.quit", key="Q", command=Custom("quit")),
        ),
    )

    assert registry.lookup("normal", KeyEvent.key("u")) is None
    assert registry.lookup("normal", KeyEvent.key("Q")).command == Custom("quit")

    only = load_default_keymaps(KeymapRegistry(), include_bindings=("normal.undo",))
    assert only.stats().binding_count == 1
