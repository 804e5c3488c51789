from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pytest

from keymode.sequences import (
    GOTO_HINTS,
    Cancelled,
    Completed,
    KeyHint,
    KeySequenceAction,
    KeySequenceHandler,
    NotConsumed,
    PendingKey,
    SequenceGrammar,
    Started,
    goto_grammar,
    goto_sequence_handler,
    hints_from_pairs,
)


@dataclass
class FakeClock:
    now_ms: int = 100_000

    def __call__(self) -> float:
        return self.now_ms / 1000

    def advance_ms(self, ms: int) -> None:
        self.now_ms += ms


class TablePrefix(Enum):
    TABLE = "t"


class TableAction(Enum):
    SELECT = "select"
    DESCRIBE = "describe"
    DROP = "drop"


def make_goto(timeout_ms: int = 500) -> tuple[KeySequenceHandler, FakeClock]:
    clock = FakeClock()
    return goto_sequence_handler(timeout_ms=timeout_ms, clock=clock), clock


def make_table_grammar(**kwargs) -> SequenceGrammar:
    return SequenceGrammar(
        prefixes={"s": TablePrefix.TABLE},
        actions={
            TablePrefix.TABLE: {
                "s": TableAction.SELECT,
                "d": TableAction.DESCRIBE,
                "x": TableAction.DROP,
            }
        },
        **kwargs,
    )


def test_goto_completions() -> None:
    expected = {
        "g": KeySequenceAction.GOTO_FIRST,
        "e": KeySequenceAction.GOTO_EDITOR,
        "c": KeySequenceAction.GOTO_CONNECTIONS,
        "t": KeySequenceAction.GOTO_TABLES,
        "r": KeySequenceAction.GOTO_RESULTS,
    }

    for key, action in expected.items():
        tracker, _ = make_goto()
        assert tracker.process_first_key("g") == Started(PendingKey.G)
        assert tracker.is_waiting()
        assert tracker.process_second_key(key) == Completed(action, None)
        assert not tracker.is_waiting()


def test_invalid_second_key_cancels() -> None:
    tracker, _ = make_goto()

    tracker.process_first_key("g")

    assert tracker.process_second_key("x") == Cancelled()
    assert not tracker.is_waiting()
    assert tracker.pending is None


def test_keys_outside_the_grammar_are_not_consumed() -> None:
    tracker, _ = make_goto()

    assert tracker.process_first_key("h") == NotConsumed()
    assert tracker.process_second_key("g") == NotConsumed()
    assert not tracker.is_waiting()


def test_restarting_replaces_pending_sequence() -> None:
    tracker = KeySequenceHandler(make_table_grammar(), clock=FakeClock())

    assert tracker.process_first_key("s", context="users") == Started(
        TablePrefix.TABLE
    )
    assert tracker.process_first_key("s", context="orders") == Started(
        TablePrefix.TABLE
    )

    assert tracker.process_second_key("d") == Completed(
        TableAction.DESCRIBE, "orders"
    )
    assert tracker.process_second_key("d") == NotConsumed()


def test_hint_is_false_until_timeout_then_latched() -> None:
    tracker, clock = make_goto(timeout_ms=500)

    tracker.start(PendingKey.G)
    assert not tracker.should_show_hint()

    clock.advance_ms(499)
    assert not tracker.should_show_hint()

    clock.advance_ms(1)
    assert tracker.should_show_hint()

    # latched even if the timeout grows afterwards
    tracker.set_timeout(10_000)
    assert tracker.should_show_hint()
    assert tracker.should_show_hint()

    tracker.cancel()
    assert not tracker.should_show_hint()


def test_completion_clears_hint_latch() -> None:
    tracker, clock = make_goto(timeout_ms=100)

    tracker.process_first_key("g")
    clock.advance_ms(150)
    assert tracker.should_show_hint()
    tracker.mark_hint_shown()
    assert tracker.is_hint_shown()

    tracker.process_second_key("e")

    assert not tracker.should_show_hint()
    assert not tracker.is_hint_shown()


def test_start_resets_window_and_latch() -> None:
    tracker, clock = make_goto(timeout_ms=100)

    tracker.start(PendingKey.G)
    clock.advance_ms(200)
    assert tracker.should_show_hint()
    tracker.mark_hint_shown()

    tracker.start(PendingKey.G)

    assert not tracker.should_show_hint()
    assert not tracker.is_hint_shown()


def test_hint_never_shown_without_pending_sequence() -> None:
    tracker, clock = make_goto(timeout_ms=0)

    clock.advance_ms(1000)

    assert not tracker.should_show_hint()


def test_goto_hints_are_exposed_while_pending() -> None:
    tracker, _ = make_goto()

    assert tracker.hints() == ()
    tracker.process_first_key("g")

    assert tracker.hints() == GOTO_HINTS
    assert [hint.description for hint in tracker.hints()] == [
        "first row",
        "editor",
        "connections",
        "tables",
        "results",
    ]
    assert PendingKey.G.display_char == "g"


def test_families_without_hints_report_none() -> None:
    tracker = KeySequenceHandler(make_table_grammar(), clock=FakeClock())

    tracker.start_with_context(TablePrefix.TABLE, {"table": "users"})

    assert tracker.hints() == ()
    assert tracker.context == {"table": "users"}
    assert tracker.process_second_key("x") == Completed(
        TableAction.DROP, {"table": "users"}
    )
    assert tracker.context is None


def test_timeout_accessors() -> None:
    tracker, _ = make_goto()

    assert tracker.timeout_ms == 500
    tracker.set_timeout(250)
    assert tracker.timeout_ms == 250

    with pytest.raises(ValueError):
        tracker.set_timeout(-1)
    with pytest.raises(ValueError):
        goto_sequence_handler(timeout_ms=-5)


def test_grammar_validation() -> None:
    with pytest.raises(ValueError):
        make_table_grammar(hints={TablePrefix.TABLE: (KeyHint("q", "quit"),)})
    with pytest.raises(ValueError):
        SequenceGrammar(prefixes={"gg": PendingKey.G}, actions={PendingKey.G: {"g": 1}})
    with pytest.raises(ValueError):
        SequenceGrammar(prefixes={"g": PendingKey.G}, actions={})
    with pytest.raises(ValueError):
        KeyHint("ab", "two keys")


def test_start_rejects_unknown_prefix() -> None:
    tracker = KeySequenceHandler(goto_grammar(), clock=FakeClock())

    with pytest.raises(ValueError):
        tracker.start(TablePrefix.TABLE)


def test_table_family_hints_built_from_pairs() -> None:
    hints = hints_from_pairs((("s", "select"), ("d", "describe"), ("x", "drop")))
    tracker = KeySequenceHandler(
        make_table_grammar(hints={TablePrefix.TABLE: hints}), clock=FakeClock()
    )

    tracker.process_first_key("s")

    assert [hint.key for hint in tracker.hints()] == ["s", "d", "x"]
    assert tracker.hints()[2] == KeyHint("x", "drop")
    with pytest.raises(ValueError):
        hints_from_pairs((("sd", "two keys"),))
