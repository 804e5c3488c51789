"""Command vocabulary: modes, motions, text objects, operators, commands."""

from .mode import Mode
from .motion import CursorMove, Motion
from .text_object import TextObject, TextObjectKind
from .command import (
    COMMAND_TYPES,
    CancelVisual,
    ChangeLine,
    ChangeMode,
    ChangeMotion,
    ChangeToEnd,
    Command,
    Custom,
    DeleteChar,
    DeleteCharBefore,
    DeleteLine,
    DeleteMotion,
    DeleteToEnd,
    EnterInsertAt,
    Move,
    NoOp,
    OpenLine,
    Operator,
    PassThrough,
    PasteAfter,
    PasteBefore,
    Redo,
    StartVisual,
    Undo,
    VimCommand,
    VisualChange,
    VisualDelete,
    VisualYank,
    YankLine,
    YankMotion,
    custom,
    operator_line_command,
    operator_motion_command,
)

__all__ = [
    "Mode",
    "CursorMove",
    "Motion",
    "TextObject",
    "TextObjectKind",
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
