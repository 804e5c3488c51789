"""Editing modes."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """The current editing mode. Callers own it and pass it on every key."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"

    @classmethod
    def default(cls) -> "Mode":
        return cls.NORMAL

    @property
    def is_normal(self) -> bool:
        return self is Mode.NORMAL

    @property
    def is_insert(self) -> bool:
        return self is Mode.INSERT

    @property
    def is_visual(self) -> bool:
        return self is Mode.VISUAL

    @property
    def label(self) -> str:
        """Status-line label, e.g. ``NORMAL``."""

        return self.value.upper()


__all__ = ["Mode"]
