"""Two-key sequence tracking with a timeout-gated hint signal.

A ``KeySequenceHandler`` is driven with raw characters. The first key opens a
prefix, the second either completes it with an action or cancels it. The hint
signal is evaluated lazily against an injected clock, so nothing here owns a
timer and tests never need to sleep.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar, Union

from keymode.runtime import telemetry

from .grammar import KeyHint, SequenceGrammar

P = TypeVar("P", bound=Hashable)
A = TypeVar("A")
C = TypeVar("C")

Clock = Callable[[], float]

DEFAULT_TIMEOUT_MS = 500


@dataclass(frozen=True, slots=True)
class NotConsumed:
    """The key was not part of a sequence; the caller handles it."""


@dataclass(frozen=True, slots=True)
class Started(Generic[P]):
    prefix: P


@dataclass(frozen=True, slots=True)
class Completed(Generic[A, C]):
    action: A
    context: Optional[C] = None


@dataclass(frozen=True, slots=True)
class Cancelled:
    """An invalid second key ended the pending sequence."""


KeySequenceResult = Union[NotConsumed, Started, Completed, Cancelled]


def _check_timeout(timeout_ms: int) -> int:
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int):
        raise ValueError(f"timeout must be whole milliseconds, got {timeout_ms!r}")
    if timeout_ms < 0:
        raise ValueError(f"timeout cannot be negative, got {timeout_ms}")
    return timeout_ms


class KeySequenceHandler(Generic[P, A, C]):
    """Tracks one pending prefix at a time for a single grammar."""

    def __init__(
        self,
        grammar: SequenceGrammar[P, A],
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        clock: Clock | None = None,
        logger_name: str | None = None,
    ) -> None:
        self._grammar = grammar
        self._timeout_ms = _check_timeout(timeout_ms)
        self._clock: Clock = clock or time.monotonic
        self._pending: Optional[P] = None
        self._pending_since: Optional[float] = None
        self._context: Optional[C] = None
        self._hint_due = False
        self._hint_shown = False
        self.logger = telemetry.get_logger(logger_name or "keymode.sequences")

    @property
    def grammar(self) -> SequenceGrammar[P, A]:
        return self._grammar

    @property
    def pending(self) -> Optional[P]:
        return self._pending

    @property
    def context(self) -> Optional[C]:
        return self._context

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def set_timeout(self, timeout_ms: int) -> None:
        self._timeout_ms = _check_timeout(timeout_ms)

    def is_waiting(self) -> bool:
        return self._pending is not None

    def start(self, prefix: P) -> None:
        self.start_with_context(prefix, None)

    def start_with_context(self, prefix: P, context: Optional[C]) -> None:
        if not self._grammar.knows(prefix):
            raise ValueError(f"prefix {prefix!r} is not part of this grammar")
        if self._pending is not None:
            self.logger.debug("sequence::replaced prefix=%s", self._pending)
        self._pending = prefix
        self._pending_since = self._clock()
        self._context = context
        self._hint_due = False
        self._hint_shown = False
        self.logger.debug("sequence::start prefix=%s", prefix)

    def cancel(self) -> None:
        if self._pending is not None:
            self.logger.debug("sequence::cancel prefix=%s", self._pending)
        self._clear()

    def should_show_hint(self) -> bool:
        """True once the timeout has elapsed, and until the sequence ends."""

        if self._pending is None or self._pending_since is None:
            return False
        if not self._hint_due:
            elapsed_ms = (self._clock() - self._pending_since) * 1000.0
            self._hint_due = elapsed_ms >= self._timeout_ms
        return self._hint_due

    def is_hint_shown(self) -> bool:
        return self._hint_shown

    def mark_hint_shown(self) -> None:
        self._hint_shown = True

    def hints(self) -> tuple[KeyHint, ...]:
        if self._pending is None:
            return ()
        return self._grammar.hints_for(self._pending)

    def process_first_key(
        self, char: str, context: Optional[C] = None
    ) -> KeySequenceResult:
        prefix = self._grammar.prefix_for(char)
        if prefix is None:
            return NotConsumed()
        self.start_with_context(prefix, context)
        return Started(prefix)

    def process_second_key(self, char: str) -> KeySequenceResult:
        if self._pending is None:
            return NotConsumed()
        prefix = self._pending
        context = self._context
        action = self._grammar.action_for(prefix, char)
        self._clear()
        if action is None:
            self.logger.debug("sequence::cancel prefix=%s key=%r", prefix, char)
            return Cancelled()
        self.logger.debug("sequence::complete prefix=%s action=%s", prefix, action)
        return Completed(action, context)

    def _clear(self) -> None:
        self._pending = None
        self._pending_since = None
        self._context = None
        self._hint_due = False
        self._hint_shown = False


__all__ = [
    "Cancelled",
    "Clock",
    "Completed",
    "DEFAULT_TIMEOUT_MS",
    "KeySequenceHandler",
    "KeySequenceResult",
    "NotConsumed",
    "Started",
]
