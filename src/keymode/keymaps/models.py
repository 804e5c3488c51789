"""Dataclasses describing key events, binding conditions, and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, MutableMapping, Union

if TYPE_CHECKING:
    from keymode.commands import VimCommand
    from keymode.modes.config import VimConfig


class KeyCode(str, Enum):
    """Key identities understood by the engine."""

    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    TAB = "tab"
    BACK_TAB = "backtab"
    INSERT = "insert"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


class Modifiers(IntFlag):
    """Modifier bitset carried by every key event."""

    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


_KEY_ALIASES: Mapping[str, KeyCode] = MappingProxyType(
    {
        "enter": KeyCode.ENTER,
        "return": KeyCode.ENTER,
        "tab": KeyCode.TAB,
        "backtab": KeyCode.BACK_TAB,
        "backspace": KeyCode.BACKSPACE,
        "bs": KeyCode.BACKSPACE,
        "delete": KeyCode.DELETE,
        "del": KeyCode.DELETE,
        "esc": KeyCode.ESC,
        "escape": KeyCode.ESC,
        "up": KeyCode.UP,
        "down": KeyCode.DOWN,
        "left": KeyCode.LEFT,
        "right": KeyCode.RIGHT,
        "home": KeyCode.HOME,
        "end": KeyCode.END,
        "pageup": KeyCode.PAGE_UP,
        "pgup": KeyCode.PAGE_UP,
        "pagedown": KeyCode.PAGE_DOWN,
        "pgdn": KeyCode.PAGE_DOWN,
        "insert": KeyCode.INSERT,
        "ins": KeyCode.INSERT,
        **{f"f{n}": KeyCode(f"f{n}") for n in range(1, 13)},
    }
)

_MODIFIER_ALIASES: Mapping[str, Modifiers] = MappingProxyType(
    {
        "ctrl": Modifiers.CONTROL,
        "control": Modifiers.CONTROL,
        "alt": Modifiers.ALT,
        "meta": Modifiers.ALT,
        "shift": Modifiers.SHIFT,
    }
)

_KEY_LABELS: Mapping[KeyCode, str] = MappingProxyType(
    {
        KeyCode.ENTER: "Enter",
        KeyCode.TAB: "Tab",
        KeyCode.BACK_TAB: "BackTab",
        KeyCode.BACKSPACE: "Backspace",
        KeyCode.DELETE: "Delete",
        KeyCode.ESC: "Esc",
        KeyCode.UP: "↑",
        KeyCode.DOWN: "↓",
        KeyCode.LEFT: "←",
        KeyCode.RIGHT: "→",
        KeyCode.HOME: "Home",
        KeyCode.END: "End",
        KeyCode.PAGE_UP: "PgUp",
        KeyCode.PAGE_DOWN: "PgDn",
        KeyCode.INSERT: "Insert",
    }
)


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Single key press: a key code, its character, and modifiers.

    ``char`` is set only for ``KeyCode.CHAR`` and must be a single character.
    """

    code: KeyCode
    char: str | None = None
    modifiers: Modifiers = Modifiers.NONE

    def __post_init__(self) -> None:
        if self.code is KeyCode.CHAR:
            if not self.char or len(self.char) != 1:
                raise ValueError("character keys require exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.code.name} keys do not carry a character")
        object.__setattr__(self, "modifiers", Modifiers(self.modifiers))

    @classmethod
    def key(cls, char: str, modifiers: Modifiers = Modifiers.NONE) -> "KeyEvent":
        return cls(KeyCode.CHAR, char, modifiers)

    @classmethod
    def ctrl(cls, char: str) -> "KeyEvent":
        return cls(KeyCode.CHAR, char, Modifiers.CONTROL)

    @classmethod
    def special(
        cls, code: KeyCode, modifiers: Modifiers = Modifiers.NONE
    ) -> "KeyEvent":
        return cls(code, None, modifiers)

    @classmethod
    def parse(cls, expression: str) -> "KeyEvent":
        """Parse ``"ctrl+s"``, ``"g"``, ``"shift+tab"`` style key strings."""

        text = expression.strip()
        if not text:
            raise ValueError("key expression cannot be empty")
        # "+" on its own (or as the last part of "ctrl++") is the plus key.
        if text == "+" or text.endswith("++"):
            modifier_text, key_part = text[:-1].rstrip("+"), "+"
        else:
            modifier_text, _, key_part = text.rpartition("+")
            key_part = key_part.strip()

        modifiers = Modifiers.NONE
        for part in modifier_text.split("+") if modifier_text else ():
            modifier = _MODIFIER_ALIASES.get(part.strip().lower())
            if modifier is None:
                raise ValueError(f"Unknown modifier '{part}' in '{expression}'")
            modifiers |= modifier

        lowered = key_part.lower()
        if lowered == "space":
            return cls(KeyCode.CHAR, " ", modifiers)
        code = _KEY_ALIASES.get(lowered)
        if code is KeyCode.TAB and modifiers & Modifiers.SHIFT:
            return cls(KeyCode.BACK_TAB, None, modifiers & ~Modifiers.SHIFT)
        if code is not None:
            return cls(code, None, modifiers)
        if len(key_part) == 1:
            return cls(KeyCode.CHAR, key_part, modifiers)
        raise ValueError(f"Unknown key '{key_part}' in '{expression}'")

    def normalized(self) -> "KeyEvent":
        """Return the event with SHIFT implied by the character itself.

        Uppercase letters always carry SHIFT (``shift+g`` becomes ``G``);
        every other character never does, so ``$`` matches whether or not
        the terminal reported SHIFT.
        """

        if self.code is not KeyCode.CHAR or self.char is None:
            return self
        char = self.char
        if self.modifiers & Modifiers.SHIFT and char.islower():
            upper = char.upper()
            if len(upper) == 1:
                char = upper
        if char.isalpha() and char.isupper():
            modifiers = self.modifiers | Modifiers.SHIFT
        else:
            modifiers = self.modifiers & ~Modifiers.SHIFT
        if char == self.char and modifiers == self.modifiers:
            return self
        return KeyEvent(self.code, char, Modifiers(modifiers))

    @property
    def is_char(self) -> bool:
        return self.code is KeyCode.CHAR

    @property
    def token(self) -> str:
        """Stable lookup token, e.g. ``ctrl+s`` or ``shift+G``."""

        key = self.char if self.code is KeyCode.CHAR else self.code.value
        names = [
            name
            for flag, name in (
                (Modifiers.CONTROL, "ctrl"),
                (Modifiers.ALT, "alt"),
                (Modifiers.SHIFT, "shift"),
            )
            if self.modifiers & flag
        ]
        return "+".join([*names, str(key)])

    @property
    def label(self) -> str:
        """Human readable form, e.g. ``Ctrl+S``."""

        parts = [
            name
            for flag, name in (
                (Modifiers.CONTROL, "Ctrl"),
                (Modifiers.ALT, "Alt"),
                (Modifiers.SHIFT, "Shift"),
            )
            if self.modifiers & flag
        ]
        if self.code is KeyCode.CHAR:
            key = "Space" if self.char == " " else str(self.char).upper()
        else:
            key = _KEY_LABELS.get(self.code, self.code.value.upper())
        parts.append(key)
        return "+".join(parts)

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Simple boolean condition used to gate bindings."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        expected = True
        if expr.startswith("!"):
            expected = False
            expr = expr[1:]
        return cls(expr, expected)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


CommandFactory = Callable[["VimConfig"], "VimCommand"]
CommandSpec = Union["VimCommand", CommandFactory]


def _normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: MutableMapping[str, None] = {}
    result: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
            result.append(cleaned)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key in one binding table with the command it produces.

    ``command`` is either a ready command or a factory receiving the active
    ``VimConfig`` (page sizes and similar settings). With ``any_modifiers``
    the binding matches its key whatever modifiers are held.
    """

    id: str
    table: str
    key: KeyEvent
    command: CommandSpec
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    any_modifiers: bool = False
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.table:
            raise ValueError("binding table cannot be empty")
        object.__setattr__(self, "key", self.key.normalized())
        object.__setattr__(self, "tags", _normalize_tags(self.tags))
        normalized_when = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized_when)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        if self.any_modifiers:
            return f"*+{KeyEvent(self.key.code, self.key.char).token}"
        return self.key.token

    def resolve(self, config: "VimConfig") -> "VimCommand":
        if callable(self.command):
            return self.command(config)
        return self.command


def wildcard_signature(event: KeyEvent) -> str:
    return f"*+{KeyEvent(event.code, event.char).token}"


__all__ = [
    "KeyCode",
    "Modifiers",
    "KeyEvent",
    "WhenClause",
    "Binding",
    "CommandFactory",
    "CommandSpec",
    "wildcard_signature",
]
