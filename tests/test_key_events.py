from __future__ import annotations

import pytest

from keymode.keymaps import KeyCode, KeyEvent, Modifiers, WhenClause


def test_parse_characters_and_modifiers() -> None:
    assert KeyEvent.parse("g") == KeyEvent.key("g")
    assert KeyEvent.parse("ctrl+s") == KeyEvent.ctrl("s")
    assert KeyEvent.parse("Control+Alt+x") == KeyEvent.key(
        "x", Modifiers.CONTROL | Modifiers.ALT
    )
    assert KeyEvent.parse("meta+x").modifiers == Modifiers.ALT
    assert KeyEvent.parse("space") == KeyEvent.key(" ")


def test_parse_special_key_aliases() -> None:
    aliases = {
        "enter": KeyCode.ENTER,
        "return": KeyCode.ENTER,
        "bs": KeyCode.BACKSPACE,
        "del": KeyCode.DELETE,
        "esc": KeyCode.ESC,
        "escape": KeyCode.ESC,
        "pgup": KeyCode.PAGE_UP,
        "pgdn": KeyCode.PAGE_DOWN,
        "ins": KeyCode.INSERT,
        "f12": KeyCode.F12,
        "Home": KeyCode.HOME,
    }

    for text, code in aliases.items():
        assert KeyEvent.parse(text) == KeyEvent.special(code), text


def test_parse_plus_key() -> None:
    assert KeyEvent.parse("+") == KeyEvent.key("+")
    assert KeyEvent.parse("ctrl++") == KeyEvent.key("+", Modifiers.CONTROL)


def test_parse_rejects_malformed_keys() -> None:
    for text in ("", "   ", "hyper+x", "ctrl+nope", "banana"):
        with pytest.raises(ValueError):
            KeyEvent.parse(text)


def test_event_validation() -> None:
    with pytest.raises(ValueError):
        KeyEvent(KeyCode.CHAR)
    with pytest.raises(ValueError):
        KeyEvent(KeyCode.CHAR, "ab")
    with pytest.raises(ValueError):
        KeyEvent(KeyCode.ENTER, "x")


def test_normalized_implies_shift_from_character() -> None:
    assert KeyEvent.parse("shift+g").normalized() == KeyEvent.key("G", Modifiers.SHIFT)
    assert KeyEvent.key("G").normalized().modifiers == Modifiers.SHIFT
    assert KeyEvent.parse("shift+$").normalized() == KeyEvent.key("$")
    assert KeyEvent.parse("ctrl+shift+u").normalized().token == "ctrl+shift+U"
    assert KeyEvent.special(KeyCode.TAB, Modifiers.SHIFT).normalized().modifiers == (
        Modifiers.SHIFT
    )


def test_tokens_and_labels() -> None:
    assert KeyEvent.parse("ctrl+s").token == "ctrl+s"
    assert KeyEvent.parse("ctrl+s").label == "Ctrl+S"
    assert KeyEvent.parse("G").normalized().token == "shift+G"
    assert KeyEvent.parse("up").label == "↑"
    assert KeyEvent.parse("pagedown").label == "PgDn"
    assert KeyEvent.parse("alt+space").label == "Alt+Space"
    assert KeyEvent.parse("f5").label == "F5"
    assert str(KeyEvent.parse("esc")) == "Esc"


def test_when_clause_parse_and_evaluate() -> None:
    clause = WhenClause.parse("!enable_search")

    assert clause == WhenClause("enable_search", expected=False)
    assert clause.evaluate({"enable_search": False})
    assert clause.evaluate({})
    assert not clause.evaluate({"enable_search": True})

    with pytest.raises(ValueError):
        WhenClause.parse(" ")


def test_parse_shift_tab_is_back_tab() -> None:
    assert KeyEvent.parse("shift+tab") == KeyEvent.special(KeyCode.BACK_TAB)
    assert KeyEvent.parse("ctrl+shift+tab") == KeyEvent.special(
        KeyCode.BACK_TAB, Modifiers.CONTROL
    )
    assert KeyEvent.parse("tab") == KeyEvent.special(KeyCode.TAB)
