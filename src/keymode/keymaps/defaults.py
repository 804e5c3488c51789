"""Built-in binding tables for Normal, operator-pending, Insert and Visual."""

from __future__ import annotations

from typing import Iterable, Sequence

from keymode.commands import (
    CancelVisual,
    ChangeLine,
    ChangeMode,
    ChangeToEnd,
    Custom,
    DeleteChar,
    DeleteCharBefore,
    DeleteLine,
    DeleteToEnd,
    EnterInsertAt,
    Mode,
    Motion,
    Move,
    NoOp,
    OpenLine,
    Operator,
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
    operator_line_command,
    operator_motion_command,
)

from .models import Binding, CommandSpec, KeyEvent, WhenClause
from .registry import KeymapRegistry

NORMAL_TABLE = "normal"
INSERT_TABLE = "insert"
VISUAL_TABLE = "visual"
PENDING_TABLE_PREFIX = "normal.pending."
PENDING_TAG_PREFIX = "pending:"

VISUAL_ENABLED = WhenClause("enable_visual")
SEARCH_ENABLED = WhenClause("enable_search")


def pending_table(pending: str) -> str:
    """Table id consulted while ``pending`` (``delete``, ``g``...) waits."""

    return f"{PENDING_TABLE_PREFIX}{pending}"


def _bind(
    table: str,
    name: str,
    key: str,
    command: CommandSpec,
    description: str,
    *,
    when: tuple[WhenClause, ...] = (),
    any_modifiers: bool = False,
    tags: tuple[str, ...] = (),
) -> Binding:
    return Binding(
        id=f"{table}.{name}",
        table=table,
        key=KeyEvent.parse(key),
        command=command,
        description=description,
        when=when,
        any_modifiers=any_modifiers,
        tags=tags,
    )


def _half_page_up(config) -> VimCommand:
    return Move(Motion.up_by(config.half_page_lines))


def _half_page_down(config) -> VimCommand:
    return Move(Motion.down_by(config.half_page_lines))


def _page_up(config) -> VimCommand:
    return Move(Motion.up_by(config.full_page_lines))


def _page_down(config) -> VimCommand:
    return Move(Motion.down_by(config.full_page_lines))


_OPERATOR_NAMES = {
    Operator.DELETE: "delete",
    Operator.CHANGE: "change",
    Operator.YANK: "yank",
}

_OPERATOR_MOTIONS: tuple[tuple[str, str, Motion], ...] = (
    ("w", "word_forward", Motion.word_forward()),
    ("e", "word_end", Motion.word_end()),
    ("b", "word_back", Motion.word_back()),
    ("$", "line_end", Motion.line_end()),
    ("0", "line_start", Motion.line_start()),
)


def _operator_bindings(operator: Operator) -> tuple[Binding, ...]:
    name = _OPERATOR_NAMES[operator]
    table = pending_table(name)
    bindings = [
        _bind(
            table,
            "line",
            operator.key,
            operator_line_command(operator),
            f"{name.capitalize()} the whole line",
        )
    ]
    for key, motion_name, motion in _OPERATOR_MOTIONS:
        bindings.append(
            _bind(
                table,
                motion_name,
                key,
                operator_motion_command(operator, motion),
                f"{name.capitalize()} to {motion_name.replace('_', ' ')}",
            )
        )
    return tuple(bindings)


NORMAL_BINDINGS: tuple[Binding, ...] = (
    _bind(NORMAL_TABLE, "insert", "i", ChangeMode(Mode.INSERT), "Insert before cursor"),
    _bind(
        NORMAL_TABLE,
        "append",
        "a",
        EnterInsertAt(Motion.right()),
        "Insert after cursor",
    ),
    _bind(
        NORMAL_TABLE,
        "insert_line_start",
        "I",
        EnterInsertAt(Motion.line_start()),
        "Insert at line start",
    ),
    _bind(
        NORMAL_TABLE,
        "append_line_end",
        "A",
        EnterInsertAt(Motion.line_end()),
        "Insert at line end",
    ),
    _bind(NORMAL_TABLE, "open_below", "o", OpenLine(above=False), "Open line below"),
    _bind(NORMAL_TABLE, "open_above", "O", OpenLine(above=True), "Open line above"),
    _bind(NORMAL_TABLE, "left", "h", Move(Motion.left()), "Move left"),
    _bind(NORMAL_TABLE, "down", "j", Move(Motion.down()), "Move down"),
    _bind(NORMAL_TABLE, "up", "k", Move(Motion.up()), "Move up"),
    _bind(NORMAL_TABLE, "right", "l", Move(Motion.right()), "Move right"),
    _bind(
        NORMAL_TABLE,
        "arrow_left",
        "left",
        Move(Motion.left()),
        "Move left",
        any_modifiers=True,
    ),
    _bind(
        NORMAL_TABLE,
        "arrow_down",
        "down",
        Move(Motion.down()),
        "Move down",
        any_modifiers=True,
    ),
    _bind(
        NORMAL_TABLE,
        "arrow_up",
        "up",
        Move(Motion.up()),
        "Move up",
        any_modifiers=True,
    ),
    _bind(
        NORMAL_TABLE,
        "arrow_right",
        "right",
        Move(Motion.right()),
        "Move right",
        any_modifiers=True,
    ),
    _bind(NORMAL_TABLE, "word_forward", "w", Move(Motion.word_forward()), "Next word"),
    _bind(NORMAL_TABLE, "word_back", "b", Move(Motion.word_back()), "Previous word"),
    _bind(NORMAL_TABLE, "word_end", "e", Move(Motion.word_end()), "End of word"),
    _bind(NORMAL_TABLE, "line_start", "0", Move(Motion.line_start()), "Line start"),
    _bind(
        NORMAL_TABLE,
        "first_non_blank",
        "^",
        Move(Motion.line_start()),
        "Line start",
    ),
    _bind(
        NORMAL_TABLE,
        "home",
        "home",
        Move(Motion.line_start()),
        "Line start",
        any_modifiers=True,
    ),
    _bind(NORMAL_TABLE, "line_end", "$", Move(Motion.line_end()), "Line end"),
    _bind(
        NORMAL_TABLE,
        "end",
        "end",
        Move(Motion.line_end()),
        "Line end",
        any_modifiers=True,
    ),
    _bind(
        NORMAL_TABLE,
        "document_end",
        "G",
        Move(Motion.document_end()),
        "Last line",
    ),
    _bind(NORMAL_TABLE, "half_page_up", "ctrl+u", _half_page_up, "Half page up"),
    _bind(
        NORMAL_TABLE, "half_page_down", "ctrl+d", _half_page_down, "Half page down"
    ),
    _bind(NORMAL_TABLE, "page_up", "ctrl+b", _page_up, "Page up"),
    _bind(NORMAL_TABLE, "page_down", "ctrl+f", _page_down, "Page down"),
    _bind(
        NORMAL_TABLE,
        "pageup_key",
        "pageup",
        _page_up,
        "Page up",
        any_modifiers=True,
    ),
    _bind(
        NORMAL_TABLE,
        "pagedown_key",
        "pagedown",
        _page_down,
        "Page down",
        any_modifiers=True,
    ),
    _bind(NORMAL_TABLE, "delete_char", "x", DeleteChar(), "Delete character"),
    _bind(
        NORMAL_TABLE,
        "delete_char_before",
        "X",
        DeleteCharBefore(),
        "Delete character before cursor",
    ),
    _bind(NORMAL_TABLE, "delete_to_end", "D", DeleteToEnd(), "Delete to line end"),
    _bind(NORMAL_TABLE, "change_to_end", "C", ChangeToEnd(), "Change to line end"),
    _bind(NORMAL_TABLE, "change_line", "S", ChangeLine(), "Change whole line"),
    _bind(NORMAL_TABLE, "yank_line", "Y", YankLine(), "Yank whole line"),
    _bind(NORMAL_TABLE, "paste_after", "p", PasteAfter(), "Paste after cursor"),
    _bind(NORMAL_TABLE, "paste_before", "P", PasteBefore(), "Paste before cursor"),
    _bind(NORMAL_TABLE, "undo", "u", Undo(), "Undo"),
    _bind(NORMAL_TABLE, "redo", "ctrl+r", Redo(), "Redo"),
    _bind(
        NORMAL_TABLE,
        "start_visual",
        "v",
        StartVisual(),
        "Start visual selection",
        when=(VISUAL_ENABLED,),
    ),
    _bind(
        NORMAL_TABLE,
        "search",
        "/",
        Custom("search"),
        "Search forward",
        when=(SEARCH_ENABLED,),
    ),
    _bind(
        NORMAL_TABLE,
        "search_next",
        "n",
        Custom("search_next"),
        "Next match",
        when=(SEARCH_ENABLED,),
    ),
    _bind(
        NORMAL_TABLE,
        "search_prev",
        "N",
        Custom("search_prev"),
        "Previous match",
        when=(SEARCH_ENABLED,),
    ),
    _bind(NORMAL_TABLE, "command", ":", Custom("command"), "Open command prompt"),
    _bind(NORMAL_TABLE, "save", "ctrl+s", Custom("save"), "Save"),
    _bind(NORMAL_TABLE, "enter", "enter", Custom("enter"), "Confirm"),
    _bind(
        NORMAL_TABLE,
        "operator_delete",
        "d",
        NoOp(),
        "Delete operator",
        tags=(f"{PENDING_TAG_PREFIX}delete",),
    ),
    _bind(
        NORMAL_TABLE,
        "operator_change",
        "c",
        NoOp(),
        "Change operator",
        tags=(f"{PENDING_TAG_PREFIX}change",),
    ),
    _bind(
        NORMAL_TABLE,
        "operator_yank",
        "y",
        NoOp(),
        "Yank operator",
        tags=(f"{PENDING_TAG_PREFIX}yank",),
    ),
    _bind(
        NORMAL_TABLE,
        "prefix_g",
        "g",
        NoOp(),
        "Go-to prefix",
        tags=(f"{PENDING_TAG_PREFIX}g",),
    ),
)

PENDING_BINDINGS: tuple[Binding, ...] = (
    *_operator_bindings(Operator.DELETE),
    *_operator_bindings(Operator.CHANGE),
    *_operator_bindings(Operator.YANK),
    _bind(
        pending_table("g"),
        "document_start",
        "g",
        Move(Motion.document_start()),
        "First line",
    ),
)

INSERT_BINDINGS: tuple[Binding, ...] = (
    _bind(INSERT_TABLE, "exit", "esc", ChangeMode(Mode.NORMAL), "Leave insert mode"),
    _bind(INSERT_TABLE, "page_down", "ctrl+f", _page_down, "Page down"),
    _bind(INSERT_TABLE, "page_up", "ctrl+b", _page_up, "Page up"),
    _bind(INSERT_TABLE, "save", "ctrl+s", Custom("save"), "Save"),
    _bind(INSERT_TABLE, "save_enter", "ctrl+enter", Custom("save"), "Save"),
)

VISUAL_BINDINGS: tuple[Binding, ...] = (
    _bind(VISUAL_TABLE, "exit", "esc", CancelVisual(), "Leave visual mode"),
    _bind(VISUAL_TABLE, "toggle", "v", CancelVisual(), "Leave visual mode"),
    _bind(VISUAL_TABLE, "left", "h", Move(Motion.left()), "Extend left"),
    _bind(VISUAL_TABLE, "down", "j", Move(Motion.down()), "Extend down"),
    _bind(VISUAL_TABLE, "up", "k", Move(Motion.up()), "Extend up"),
    _bind(VISUAL_TABLE, "right", "l", Move(Motion.right()), "Extend right"),
    _bind(
        VISUAL_TABLE,
        "arrow_left",
        "left",
        Move(Motion.left()),
        "Extend left",
        any_modifiers=True,
    ),
    _bind(
        VISUAL_TABLE,
        "arrow_down",
        "down",
        Move(Motion.down()),
        "Extend down",
        any_modifiers=True,
    ),
    _bind(
        VISUAL_TABLE,
        "arrow_up",
        "up",
        Move(Motion.up()),
        "Extend up",
        any_modifiers=True,
    ),
    _bind(
        VISUAL_TABLE,
        "arrow_right",
        "right",
        Move(Motion.right()),
        "Extend right",
        any_modifiers=True,
    ),
    _bind(VISUAL_TABLE, "word_forward", "w", Move(Motion.word_forward()), "Next word"),
    _bind(VISUAL_TABLE, "word_back", "b", Move(Motion.word_back()), "Previous word"),
    _bind(VISUAL_TABLE, "word_end", "e", Move(Motion.word_end()), "End of word"),
    _bind(VISUAL_TABLE, "line_start", "0", Move(Motion.line_start()), "Line start"),
    _bind(VISUAL_TABLE, "line_end", "$", Move(Motion.line_end()), "Line end"),
    _bind(
        VISUAL_TABLE,
        "document_start",
        "g",
        Move(Motion.document_start()),
        "First line",
    ),
    _bind(
        VISUAL_TABLE,
        "document_end",
        "G",
        Move(Motion.document_end()),
        "Last line",
    ),
    _bind(VISUAL_TABLE, "yank", "y", VisualYank(), "Yank selection"),
    _bind(VISUAL_TABLE, "delete", "d", VisualDelete(), "Delete selection"),
    _bind(VISUAL_TABLE, "delete_x", "x", VisualDelete(), "Delete selection"),
    _bind(VISUAL_TABLE, "change", "c", VisualChange(), "Change selection"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *NORMAL_BINDINGS,
    *PENDING_BINDINGS,
    *INSERT_BINDINGS,
    *VISUAL_BINDINGS,
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
) -> KeymapRegistry:
    """Register the built-in tables, then ``extra_bindings`` on top.

    Extra bindings replace defaults that claim the same key.
    """

    filters = _build_filters(include_bindings, exclude_bindings)
    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, filters):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=True)
    return registry


def pending_tag(binding: Binding) -> str | None:
    """Name of the pending state a binding opens, if it is a prefix key."""

    for tag in binding.tags:
        if tag.startswith(PENDING_TAG_PREFIX):
            return tag[len(PENDING_TAG_PREFIX) :]
    return None


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "DEFAULT_BINDINGS",
    "NORMAL_BINDINGS",
    "PENDING_BINDINGS",
    "INSERT_BINDINGS",
    "VISUAL_BINDINGS",
    "NORMAL_TABLE",
    "INSERT_TABLE",
    "VISUAL_TABLE",
    "load_default_keymaps",
    "pending_table",
    "pending_tag",
]
