"""Key events, declarative binding tables and the registry that holds them."""

from .models import Binding, KeyCode, KeyEvent, Modifiers, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import (
    DEFAULT_BINDINGS,
    INSERT_TABLE,
    NORMAL_TABLE,
    VISUAL_TABLE,
    load_default_keymaps,
    pending_table,
)

__all__ = [
    "Binding",
    "KeyCode",
    "KeyEvent",
    "Modifiers",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_BINDINGS",
    "NORMAL_TABLE",
    "INSERT_TABLE",
    "VISUAL_TABLE",
    "load_default_keymaps",
    "pending_table",
]
