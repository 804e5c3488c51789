"""Generic two-key sequence tracking and the built-in goto family."""

from .grammar import KeyHint, SequenceGrammar, hints_from_pairs
from .tracker import (
    Cancelled,
    Completed,
    KeySequenceHandler,
    KeySequenceResult,
    NotConsumed,
    Started,
)
from .goto import (
    GOTO_HINTS,
    KeySequenceAction,
    PendingKey,
    goto_grammar,
    goto_sequence_handler,
)

__all__ = [
    "KeyHint",
    "SequenceGrammar",
    "hints_from_pairs",
    "KeySequenceHandler",
    "KeySequenceResult",
    "NotConsumed",
    "Started",
    "Completed",
    "Cancelled",
    "GOTO_HINTS",
    "KeySequenceAction",
    "PendingKey",
    "goto_grammar",
    "goto_sequence_handler",
]
