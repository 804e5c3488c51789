"""Cursor motions named by commands and applied by the host buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CursorMove(str, Enum):
    """Primitive cursor relocations every host buffer must provide."""

    BACK = "back"
    FORWARD = "forward"
    UP = "up"
    DOWN = "down"
    WORD_FORWARD = "word_forward"
    WORD_BACK = "word_back"
    WORD_END = "word_end"
    HEAD = "head"
    END = "end"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True, slots=True)
class Motion:
    """Either a single ``CursorMove`` or a counted vertical move.

    Exactly one of ``cursor`` or ``(direction, count)`` is populated; use the
    constructors below rather than building instances by hand.
    """

    cursor: Optional[CursorMove] = None
    direction: Optional[CursorMove] = None
    count: int = 0

    def __post_init__(self) -> None:
        if self.cursor is not None:
            if self.direction is not None or self.count:
                raise ValueError("cursor motions do not take a count")
            return
        if self.direction not in (CursorMove.UP, CursorMove.DOWN):
            raise ValueError("counted motions move up or down")
        if self.count <= 0:
            raise ValueError("counted motions require a positive count")

    @property
    def is_counted(self) -> bool:
        return self.cursor is None

    @classmethod
    def of(cls, move: CursorMove) -> "Motion":
        return cls(cursor=move)

    @classmethod
    def up_by(cls, count: int) -> "Motion":
        return cls(direction=CursorMove.UP, count=count)

    @classmethod
    def down_by(cls, count: int) -> "Motion":
        return cls(direction=CursorMove.DOWN, count=count)

    @classmethod
    def left(cls) -> "Motion":
        return cls.of(CursorMove.BACK)

    @classmethod
    def right(cls) -> "Motion":
        return cls.of(CursorMove.FORWARD)

    @classmethod
    def up(cls) -> "Motion":
        return cls.of(CursorMove.UP)

    @classmethod
    def down(cls) -> "Motion":
        return cls.of(CursorMove.DOWN)

    @classmethod
    def line_start(cls) -> "Motion":
        return cls.of(CursorMove.HEAD)

    @classmethod
    def line_end(cls) -> "Motion":
        return cls.of(CursorMove.END)

    @classmethod
    def document_start(cls) -> "Motion":
        return cls.of(CursorMove.TOP)

    @classmethod
    def document_end(cls) -> "Motion":
        return cls.of(CursorMove.BOTTOM)

    @classmethod
    def word_forward(cls) -> "Motion":
        return cls.of(CursorMove.WORD_FORWARD)

    @classmethod
    def word_back(cls) -> "Motion":
        return cls.of(CursorMove.WORD_BACK)

    @classmethod
    def word_end(cls) -> "Motion":
        return cls.of(CursorMove.WORD_END)

    def __repr__(self) -> str:
        if self.cursor is not None:
            return f"Motion({self.cursor.value})"
        assert self.direction is not None
        return f"Motion({self.direction.value} x{self.count})"


__all__ = ["CursorMove", "Motion"]
