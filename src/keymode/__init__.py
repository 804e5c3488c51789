"""UI-agnostic modal keystroke interpretation engine."""

__all__ = [
    "adapters",
    "commands",
    "keymaps",
    "modes",
    "runtime",
    "sequences",
]

__version__ = "0.1.0"
