"""Caller-side glue that owns mode state and routes Textual keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from textual import events

from keymode.commands import Mode, VimCommand
from keymode.keymaps import KeyEvent, Modifiers
from keymode.modes import VimHandler, mode_after
from keymode.runtime import telemetry
from keymode.sequences import (
    Cancelled,
    Completed,
    KeyHint,
    KeySequenceHandler,
    KeySequenceResult,
    NotConsumed,
    Started,
)

from .keys import from_textual_event, key_event_from_textual


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    apply_command: Callable[[VimCommand], None]
    update_mode: Callable[[Mode], None] = _noop
    sequence_completed: Callable[[Any, Any], None] = _noop
    show_hint: Callable[[tuple[KeyHint, ...]], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


KeyOutcome = Union[VimCommand, KeySequenceResult, None]


class TextualKeyController:
    """Feeds Textual key events to a ``VimHandler`` and an optional tracker.

    With a sequence tracker attached, plain characters in Normal mode are
    offered to it first; keys it does not consume reach the handler.
    """

    def __init__(
        self,
        hooks: TextualUIHooks,
        *,
        handler: VimHandler | None = None,
        sequences: KeySequenceHandler | None = None,
        mode: Mode = Mode.NORMAL,
    ) -> None:
        self.hooks = hooks
        self.handler = handler or VimHandler()
        self.sequences = sequences
        self._mode = mode
        self.logger = telemetry.get_logger("keymode.adapters.textual")

    @property
    def mode(self) -> Mode:
        return self._mode

    def handle_textual_event(self, event: events.Key) -> KeyOutcome:
        return self._dispatch(from_textual_event(event), event.key)

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> KeyOutcome:
        """Translate a Textual key name and dispatch it."""

        return self._dispatch(key_event_from_textual(key, character), key)

    def handle_key_event(self, event: KeyEvent) -> KeyOutcome:
        return self._dispatch(event, event.token)

    def set_mode(self, mode: Mode) -> None:
        """Force a mode switch, dropping any half-typed prefix."""

        self.handler.reset()
        if self.sequences is not None:
            self.sequences.cancel()
        self._switch_mode(mode)

    def poll(self) -> bool:
        """Raise the hint for a pending sequence once its timeout elapsed."""

        tracker = self.sequences
        if tracker is None or not tracker.should_show_hint():
            return False
        if tracker.is_hint_shown():
            return False
        tracker.mark_hint_shown()
        hints = tracker.hints()
        self._log_state("hint ->", prefix=tracker.pending, hints=len(hints))
        self.hooks.show_hint(hints)
        return True

    def _dispatch(self, event: Optional[KeyEvent], raw: str) -> KeyOutcome:
        if event is None:
            self._log_state("key ignored", key=raw)
            return None
        with telemetry.span(
            "adapter::key",
            logger_name="keymode.adapters.textual",
            component="adapters.textual",
            metadata={"key": event.token, "mode": self._mode.value},
        ):
            sequence_result = self._offer_to_sequences(event)
            if sequence_result is not None:
                return sequence_result
            command = self.handler.handle_key(event, self._mode)
            self._log_state("command <-", key=event.token, command=command.name)
            self.hooks.apply_command(command)
            self._switch_mode(mode_after(command, self._mode))
            return command

    def _offer_to_sequences(self, event: KeyEvent) -> Optional[KeySequenceResult]:
        tracker = self.sequences
        if tracker is None or not self._mode.is_normal:
            return None
        plain_char = event.is_char and not (
            event.modifiers & (Modifiers.CONTROL | Modifiers.ALT)
        )
        if tracker.is_waiting():
            if not plain_char:
                tracker.cancel()
                self._log_state("sequence <-", result="cancelled", key=event.token)
                return Cancelled()
            result = tracker.process_second_key(event.char or "")
            if isinstance(result, Completed):
                self._log_state("sequence <-", action=result.action)
                self.hooks.sequence_completed(result.action, result.context)
            else:
                self._log_state("sequence <-", result="cancelled", key=event.token)
            return result
        if not plain_char or self.handler.has_pending():
            return None
        result = tracker.process_first_key(event.char or "")
        if isinstance(result, NotConsumed):
            return None
        if isinstance(result, Started):
            self._log_state("sequence ->", prefix=result.prefix)
        return result

    def _switch_mode(self, mode: Mode) -> None:
        if mode is self._mode:
            return
        previous = self._mode
        self._mode = mode
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.value, "to": mode.value},
            logger_name="keymode.adapters.textual",
        )
        self.hooks.update_mode(mode)

    def _log_state(self, label: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self._mode.value,
            "pending": self.handler.pending.value,
        }
        if self.sequences is not None:
            snapshot["sequence"] = self.sequences.pending
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [label]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        line = " ".join(parts)
        self.logger.debug(line)
        self.hooks.log(line)


__all__ = ["TextualKeyController", "TextualUIHooks", "KeyOutcome"]
