"""Commands emitted by the modal handler.

Each command is a small frozen dataclass; ``VimCommand`` is the common base
and ``Command`` the closed union hosts can match on. Hosts apply commands to
their own buffer, selection, and mode state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .mode import Mode
from .motion import Motion


class Operator(str, Enum):
    """Operators that combine with a motion or double up for whole lines."""

    DELETE = "d"
    CHANGE = "c"
    YANK = "y"

    @property
    def key(self) -> str:
        return self.value


class VimCommand:
    """Base class for every command the handler can return."""

    __slots__ = ()

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def enters_insert_mode(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class NoOp(VimCommand):
    """Nothing to do; also returned while an operator waits for its motion."""


@dataclass(frozen=True, slots=True)
class Move(VimCommand):
    motion: Motion


@dataclass(frozen=True, slots=True)
class ChangeMode(VimCommand):
    mode: Mode

    @property
    def enters_insert_mode(self) -> bool:
        return self.mode is Mode.INSERT


@dataclass(frozen=True, slots=True)
class EnterInsertAt(VimCommand):
    """Apply ``motion`` (if any), then switch to ``mode``."""

    motion: Optional[Motion] = None
    mode: Mode = Mode.INSERT

    @property
    def enters_insert_mode(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class OpenLine(VimCommand):
    above: bool = False

    @property
    def enters_insert_mode(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class DeleteChar(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class DeleteCharBefore(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class DeleteToEnd(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class DeleteLine(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class DeleteMotion(VimCommand):
    motion: Motion


@dataclass(frozen=True, slots=True)
class ChangeToEnd(VimCommand):
    @property
    def enters_insert_mode(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ChangeLine(VimCommand):
    @property
    def enters_insert_mode(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ChangeMotion(VimCommand):
    motion: Motion

    @property
    def enters_insert_mode(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class YankLine(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class YankMotion(VimCommand):
    motion: Motion


@dataclass(frozen=True, slots=True)
class PasteAfter(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class PasteBefore(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class Undo(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class Redo(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class StartVisual(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class CancelVisual(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class VisualYank(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class VisualDelete(VimCommand):
    pass


@dataclass(frozen=True, slots=True)
class VisualChange(VimCommand):
    @property
    def enters_insert_mode(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class PassThrough(VimCommand):
    """Forward the raw keystroke to the host's text input unchanged."""


@dataclass(frozen=True, slots=True)
class Custom(VimCommand):
    """Host-specific action such as ``save`` or ``search``.

    Tags are not validated; hosts ignore tags they do not recognise.
    """

    tag: str

    @property
    def name(self) -> str:
        return f"Custom({self.tag})"


def custom(tag: str) -> Custom:
    return Custom(tag)


Command = Union[
    NoOp,
    Move,
    ChangeMode,
    EnterInsertAt,
    OpenLine,
    DeleteChar,
    DeleteCharBefore,
    DeleteToEnd,
    DeleteLine,
    DeleteMotion,
    ChangeToEnd,
    ChangeLine,
    ChangeMotion,
    YankLine,
    YankMotion,
    PasteAfter,
    PasteBefore,
    Undo,
    Redo,
    StartVisual,
    CancelVisual,
    VisualYank,
    VisualDelete,
    VisualChange,
    PassThrough,
    Custom,
]

COMMAND_TYPES: tuple[type[VimCommand], ...] = Command.__args__  # type: ignore[attr-defined]


def operator_line_command(operator: Operator) -> VimCommand:
    """Whole-line command for a doubled operator (``dd``, ``cc``, ``yy``)."""

    return {
        Operator.DELETE: DeleteLine(),
        Operator.CHANGE: ChangeLine(),
        Operator.YANK: YankLine(),
    }[operator]


def operator_motion_command(operator: Operator, motion: Motion) -> VimCommand:
    """Motion-scoped command for an operator (``dw``, ``c$``, ``y0``...)."""

    if operator is Operator.DELETE:
        return DeleteMotion(motion)
    if operator is Operator.CHANGE:
        return ChangeMotion(motion)
    return YankMotion(motion)


__all__ = [
    "Operator",
    "VimCommand",
    "Command",
    "COMMAND_TYPES",
    "NoOp",
    "Move",
    "ChangeMode",
    "EnterInsertAt",
    "OpenLine",
    "DeleteChar",
    "DeleteCharBefore",
    "DeleteToEnd",
    "DeleteLine",
    "DeleteMotion",
    "ChangeToEnd",
    "ChangeLine",
    "ChangeMotion",
    "YankLine",
    "YankMotion",
    "PasteAfter",
    "PasteBefore",
    "Undo",
    "Redo",
    "StartVisual",
    "CancelVisual",
    "VisualYank",
    "VisualDelete",
    "VisualChange",
    "PassThrough",
    "Custom",
    "custom",
    "operator_line_command",
    "operator_motion_command",
]
