"""Text object declarations (``iw``, ``a"``, ``i(``...).

Only the vocabulary lives here; resolving an object to a span of text is the
host buffer's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

QUOTE_CHARS = frozenset({'"', "'", "`"})
BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}", "<": ">"}
_CLOSING_TO_OPENING = {close: open_ for open_, close in BRACKET_PAIRS.items()}


class TextObjectKind(str, Enum):
    INNER_WORD = "iw"
    A_WORD = "aw"
    INNER_BIG_WORD = "iW"
    A_BIG_WORD = "aW"
    INNER_PARAGRAPH = "ip"
    A_PARAGRAPH = "ap"
    INNER_QUOTES = "i_quote"
    A_QUOTES = "a_quote"
    INNER_BRACKETS = "i_bracket"
    A_BRACKETS = "a_bracket"

    @property
    def is_inner(self) -> bool:
        return self.value.startswith("i")

    @property
    def takes_delimiter(self) -> bool:
        return self in _DELIMITED_KINDS


_DELIMITED_KINDS = frozenset(
    {
        TextObjectKind.INNER_QUOTES,
        TextObjectKind.A_QUOTES,
        TextObjectKind.INNER_BRACKETS,
        TextObjectKind.A_BRACKETS,
    }
)


@dataclass(frozen=True, slots=True)
class TextObject:
    kind: TextObjectKind
    delimiter: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.kind.takes_delimiter:
            if self.delimiter is not None:
                raise ValueError(f"{self.kind.name} does not take a delimiter")
            return
        if self.kind in (TextObjectKind.INNER_QUOTES, TextObjectKind.A_QUOTES):
            if self.delimiter not in QUOTE_CHARS:
                raise ValueError(f"Unsupported quote character {self.delimiter!r}")
            return
        opening = _CLOSING_TO_OPENING.get(self.delimiter or "", self.delimiter)
        if opening not in BRACKET_PAIRS:
            raise ValueError(f"Unsupported bracket character {self.delimiter!r}")
        object.__setattr__(self, "delimiter", opening)

    @property
    def closing(self) -> Optional[str]:
        """Closing delimiter for bracket objects, the quote itself for quotes."""

        if self.delimiter is None:
            return None
        return BRACKET_PAIRS.get(self.delimiter, self.delimiter)

    @classmethod
    def inner_word(cls) -> "TextObject":
        return cls(TextObjectKind.INNER_WORD)

    @classmethod
    def a_word(cls) -> "TextObject":
        return cls(TextObjectKind.A_WORD)

    @classmethod
    def inner_big_word(cls) -> "TextObject":
        return cls(TextObjectKind.INNER_BIG_WORD)

    @classmethod
    def a_big_word(cls) -> "TextObject":
        return cls(TextObjectKind.A_BIG_WORD)

    @classmethod
    def inner_paragraph(cls) -> "TextObject":
        return cls(TextObjectKind.INNER_PARAGRAPH)

    @classmethod
    def a_paragraph(cls) -> "TextObject":
        return cls(TextObjectKind.A_PARAGRAPH)

    @classmethod
    def inner_quotes(cls, quote: str) -> "TextObject":
        return cls(TextObjectKind.INNER_QUOTES, quote)

    @classmethod
    def a_quotes(cls, quote: str) -> "TextObject":
        return cls(TextObjectKind.A_QUOTES, quote)

    @classmethod
    def inner_brackets(cls, bracket: str) -> "TextObject":
        return cls(TextObjectKind.INNER_BRACKETS, bracket)

    @classmethod
    def a_brackets(cls, bracket: str) -> "TextObject":
        return cls(TextObjectKind.A_BRACKETS, bracket)

    @classmethod
    def from_keys(cls, scope: str, target: str) -> Optional["TextObject"]:
        """Build an object from vim key pairs such as ``("i", "w")``.

        Returns ``None`` for pairs that do not name a text object.
        """

        if scope not in ("i", "a"):
            return None
        inner = scope == "i"
        simple = {
            "w": (TextObjectKind.INNER_WORD, TextObjectKind.A_WORD),
            "W": (TextObjectKind.INNER_BIG_WORD, TextObjectKind.A_BIG_WORD),
            "p": (TextObjectKind.INNER_PARAGRAPH, TextObjectKind.A_PARAGRAPH),
        }
        if target in simple:
            return cls(simple[target][0 if inner else 1])
        if target in QUOTE_CHARS:
            return cls.inner_quotes(target) if inner else cls.a_quotes(target)
        if target in BRACKET_PAIRS or target in _CLOSING_TO_OPENING:
            return cls.inner_brackets(target) if inner else cls.a_brackets(target)
        if target == "b":
            return cls.inner_brackets("(") if inner else cls.a_brackets("(")
        if target == "B":
            return cls.inner_brackets("{") if inner else cls.a_brackets("{")
        return None


__all__ = ["TextObject", "TextObjectKind", "QUOTE_CHARS", "BRACKET_PAIRS"]
