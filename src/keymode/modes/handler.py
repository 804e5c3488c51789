"""Modal key handler turning key events into ``VimCommand`` values."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from keymode.commands import Mode, NoOp, PassThrough, VimCommand, custom
from keymode.keymaps import (
    Binding,
    INSERT_TABLE,
    KeyCode,
    KeyEvent,
    KeymapRegistry,
    Modifiers,
    NORMAL_TABLE,
    VISUAL_TABLE,
    load_default_keymaps,
    pending_table,
)
from keymode.keymaps.defaults import pending_tag
from keymode.runtime import telemetry

from .config import VimConfig


class PendingOp(str, Enum):
    """Prefix key waiting for its second key in Normal mode."""

    NONE = "none"
    DELETE = "delete"
    CHANGE = "change"
    YANK = "yank"
    G = "g"

    @property
    def table(self) -> str:
        return pending_table(self.value)

    @classmethod
    def from_tag(cls, tag: str) -> Optional["PendingOp"]:
        try:
            op = cls(tag)
        except ValueError:
            return None
        return None if op is cls.NONE else op


class VimHandler:
    """Routes key events through the binding table of the current mode.

    The handler keeps only the pending prefix and the double-Esc latch; the
    caller owns the mode and passes it with every key.
    """

    def __init__(
        self,
        config: VimConfig | None = None,
        *,
        registry: KeymapRegistry | None = None,
        extra_bindings: Iterable[Binding] | None = None,
    ) -> None:
        self._config = config or VimConfig()
        self._flags = self._config.flags()
        self.logger = telemetry.get_logger("keymode.modes")
        if registry is None:
            registry = load_default_keymaps(
                KeymapRegistry(logger_name="keymode.keymaps"),
                extra_bindings=extra_bindings,
            )
        elif extra_bindings:
            for binding in extra_bindings:
                registry.register_binding(binding, replace=True)
        self._registry = registry
        self._pending = PendingOp.NONE
        self._esc_pressed = False

    @property
    def config(self) -> VimConfig:
        return self._config

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    @property
    def pending(self) -> PendingOp:
        return self._pending

    def has_pending(self) -> bool:
        return self._pending is not PendingOp.NONE

    def clear_pending(self) -> None:
        if self._pending is not PendingOp.NONE:
            self.logger.debug("pending::clear op=%s", self._pending.value)
        self._pending = PendingOp.NONE

    def reset(self) -> None:
        """Drop the pending prefix and the Esc latch."""

        self.clear_pending()
        self._esc_pressed = False

    def handle_key(self, event: KeyEvent, mode: Mode) -> VimCommand:
        """Interpret ``event`` in ``mode``. Unrecognised input yields ``NoOp``."""

        if mode is Mode.NORMAL:
            return self._handle_normal(event)

        if self._pending is not PendingOp.NONE:
            # a prefix from Normal mode never carries over into another mode
            self.logger.debug(
                "pending::dropped op=%s mode=%s", self._pending.value, mode.value
            )
            self._pending = PendingOp.NONE

        if mode is Mode.INSERT:
            binding = self._lookup(INSERT_TABLE, event)
            if binding is None:
                return PassThrough()
            return binding.resolve(self._config)

        binding = self._lookup(VISUAL_TABLE, event)
        if binding is None:
            return NoOp()
        return binding.resolve(self._config)

    def _handle_normal(self, event: KeyEvent) -> VimCommand:
        if event.code is not KeyCode.ESC:
            self._esc_pressed = False

        if self._pending is not PendingOp.NONE:
            return self._handle_pending(event)

        if event.code is KeyCode.ESC and event.modifiers == Modifiers.NONE:
            return self._handle_escape()

        binding = self._lookup(NORMAL_TABLE, event)
        if binding is None:
            return NoOp()

        tag = pending_tag(binding)
        if tag is not None:
            op = PendingOp.from_tag(tag)
            if op is None:
                self.logger.warning(
                    "pending::unknown tag=%s binding=%s", tag, binding.id
                )
                return NoOp()
            self._pending = op
            self.logger.debug("pending::set op=%s key=%s", op.value, event.token)
        return binding.resolve(self._config)

    def _handle_pending(self, event: KeyEvent) -> VimCommand:
        op = self._pending
        self._pending = PendingOp.NONE
        binding = self._lookup(op.table, event)
        if binding is None:
            self.logger.debug("pending::cancel op=%s key=%s", op.value, event.token)
            return NoOp()
        self.logger.debug("pending::complete op=%s binding=%s", op.value, binding.id)
        return binding.resolve(self._config)

    def _handle_escape(self) -> VimCommand:
        if not self._config.double_esc_to_exit:
            return NoOp()
        if self._esc_pressed:
            self._esc_pressed = False
            return custom("cancel")
        self._esc_pressed = True
        return NoOp()

    def _lookup(self, table: str, event: KeyEvent) -> Optional[Binding]:
        return self._registry.lookup(table, event, self._flags)


__all__ = ["PendingOp", "VimHandler"]
