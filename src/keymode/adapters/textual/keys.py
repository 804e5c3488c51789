"""Translate Textual key events into engine ``KeyEvent`` values."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from textual import events
from textual.keys import key_to_character

from keymode.keymaps import KeyCode, KeyEvent, Modifiers

_SPECIAL_KEYS: Mapping[str, KeyCode] = MappingProxyType(
    {
        "escape": KeyCode.ESC,
        "esc": KeyCode.ESC,
        "enter": KeyCode.ENTER,
        "return": KeyCode.ENTER,
        "tab": KeyCode.TAB,
        "backtab": KeyCode.BACK_TAB,
        "backspace": KeyCode.BACKSPACE,
        "delete": KeyCode.DELETE,
        "left": KeyCode.LEFT,
        "right": KeyCode.RIGHT,
        "up": KeyCode.UP,
        "down": KeyCode.DOWN,
        "home": KeyCode.HOME,
        "end": KeyCode.END,
        "pageup": KeyCode.PAGE_UP,
        "pagedown": KeyCode.PAGE_DOWN,
        "insert": KeyCode.INSERT,
        **{f"f{n}": KeyCode(f"f{n}") for n in range(1, 13)},
    }
)

_MODIFIERS: Mapping[str, Modifiers] = MappingProxyType(
    {
        "ctrl": Modifiers.CONTROL,
        "control": Modifiers.CONTROL,
        "alt": Modifiers.ALT,
        "meta": Modifiers.ALT,
        "shift": Modifiers.SHIFT,
    }
)


def key_event_from_textual(
    key: str, character: Optional[str] = None
) -> Optional[KeyEvent]:
    """Build a ``KeyEvent`` from a Textual key name and its character.

    Returns ``None`` for keys the engine has no representation for.
    """

    if not key:
        return None
    if key == "+" or key.endswith("++"):
        modifier_names, base = key[:-1].rstrip("+"), "+"
    else:
        modifier_names, _, base = key.rpartition("+")

    modifiers = Modifiers.NONE
    for name in modifier_names.split("+") if modifier_names else ():
        modifier = _MODIFIERS.get(name)
        if modifier is None:
            return None
        modifiers |= modifier

    if base == "tab" and modifiers & Modifiers.SHIFT:
        return KeyEvent(KeyCode.BACK_TAB, None, modifiers & ~Modifiers.SHIFT)
    code = _SPECIAL_KEYS.get(base)
    if code is not None:
        return KeyEvent(code, None, modifiers)
    if base == "space":
        return KeyEvent(KeyCode.CHAR, " ", modifiers).normalized()

    chord = modifiers & (Modifiers.CONTROL | Modifiers.ALT)
    if (
        not chord
        and character is not None
        and len(character) == 1
        and character.isprintable()
    ):
        return KeyEvent(KeyCode.CHAR, character, modifiers).normalized()
    if len(base) == 1:
        return KeyEvent(KeyCode.CHAR, base, modifiers).normalized()

    resolved = key_to_character(base)
    if resolved is not None and len(resolved) == 1 and resolved.isprintable():
        return KeyEvent(KeyCode.CHAR, resolved, modifiers).normalized()
    return None


def from_textual_event(event: events.Key) -> Optional[KeyEvent]:
    return key_event_from_textual(event.key, event.character)


__all__ = ["key_event_from_textual", "from_textual_event"]
