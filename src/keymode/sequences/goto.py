"""The built-in ``g`` prefix family used to jump between panes."""

from __future__ import annotations

from enum import Enum

from .grammar import KeyHint, SequenceGrammar, hints_from_pairs
from .tracker import DEFAULT_TIMEOUT_MS, Clock, KeySequenceHandler


class PendingKey(str, Enum):
    G = "g"

    @property
    def display_char(self) -> str:
        return self.value


class KeySequenceAction(str, Enum):
    GOTO_FIRST = "goto_first"
    GOTO_EDITOR = "goto_editor"
    GOTO_CONNECTIONS = "goto_connections"
    GOTO_TABLES = "goto_tables"
    GOTO_RESULTS = "goto_results"


GOTO_ACTIONS = {
    "g": KeySequenceAction.GOTO_FIRST,
    "e": KeySequenceAction.GOTO_EDITOR,
    "c": KeySequenceAction.GOTO_CONNECTIONS,
    "t": KeySequenceAction.GOTO_TABLES,
    "r": KeySequenceAction.GOTO_RESULTS,
}

GOTO_HINTS: tuple[KeyHint, ...] = hints_from_pairs(
    (
        ("g", "first row"),
        ("e", "editor"),
        ("c", "connections"),
        ("t", "tables"),
        ("r", "results"),
    )
)


def goto_grammar() -> SequenceGrammar[PendingKey, KeySequenceAction]:
    return SequenceGrammar(
        prefixes={PendingKey.G.display_char: PendingKey.G},
        actions={PendingKey.G: GOTO_ACTIONS},
        hints={PendingKey.G: GOTO_HINTS},
    )


def goto_sequence_handler(
    *, timeout_ms: int = DEFAULT_TIMEOUT_MS, clock: Clock | None = None
) -> KeySequenceHandler[PendingKey, KeySequenceAction, None]:
    return KeySequenceHandler(goto_grammar(), timeout_ms=timeout_ms, clock=clock)


__all__ = [
    "GOTO_ACTIONS",
    "GOTO_HINTS",
    "KeySequenceAction",
    "PendingKey",
    "goto_grammar",
    "goto_sequence_handler",
]
