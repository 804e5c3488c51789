"""Textual integration: key translation and a mode-owning controller."""

from .controller import KeyOutcome, TextualKeyController, TextualUIHooks
from .keys import from_textual_event, key_event_from_textual

__all__ = [
    "KeyOutcome",
    "TextualKeyController",
    "TextualUIHooks",
    "from_textual_event",
    "key_event_from_textual",
]
