"""Mode a caller should be in after applying a command."""

from __future__ import annotations

from keymode.commands import (
    CancelVisual,
    ChangeMode,
    EnterInsertAt,
    Mode,
    StartVisual,
    VimCommand,
    VisualDelete,
    VisualYank,
)

_LEAVES_VISUAL = (CancelVisual, VisualYank, VisualDelete)


def mode_after(command: VimCommand, mode: Mode) -> Mode:
    """Return the mode following ``command``, or ``mode`` when it is unchanged."""

    if isinstance(command, ChangeMode):
        return command.mode
    if isinstance(command, EnterInsertAt):
        return command.mode
    if command.enters_insert_mode:
        return Mode.INSERT
    if isinstance(command, StartVisual):
        return Mode.VISUAL
    if isinstance(command, _LEAVES_VISUAL):
        return Mode.NORMAL
    return mode


__all__ = ["mode_after"]
