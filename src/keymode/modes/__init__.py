"""Modal handling: modes, handler configuration and the key handler."""

from keymode.commands.mode import Mode

from .config import VimConfig
from .handler import PendingOp, VimHandler
from .transitions import mode_after

__all__ = [
    "Mode",
    "VimConfig",
    "PendingOp",
    "VimHandler",
    "mode_after",
]
