"""Lookup tables describing one family of two-key sequences."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Hashable, Iterable, Mapping, TypeVar

P = TypeVar("P", bound=Hashable)
A = TypeVar("A")


@dataclass(frozen=True, slots=True)
class KeyHint:
    """A second key and what it does, for a "which key" style popup."""

    key: str
    description: str

    def __post_init__(self) -> None:
        if len(self.key) != 1:
            raise ValueError(f"hint key must be a single character, got {self.key!r}")
        if not self.description.strip():
            raise ValueError(f"hint for {self.key!r} needs a description")


def _check_char(char: str, what: str) -> None:
    if not isinstance(char, str) or len(char) != 1:
        raise ValueError(f"{what} must be a single character, got {char!r}")


@dataclass(frozen=True, slots=True)
class SequenceGrammar(Generic[P, A]):
    """First keys that open a prefix, and second keys that complete it.

    ``hints`` is optional per prefix; a prefix without hints simply reports
    none. Every hint key must also be a legal second key for its prefix.
    """

    prefixes: Mapping[str, P]
    actions: Mapping[P, Mapping[str, A]]
    hints: Mapping[P, tuple[KeyHint, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for char, prefix in self.prefixes.items():
            _check_char(char, "prefix key")
            if prefix not in self.actions:
                raise ValueError(f"prefix {prefix!r} has no second-key table")

        actions: dict[P, Mapping[str, A]] = {}
        for prefix, table in self.actions.items():
            if not table:
                raise ValueError(f"prefix {prefix!r} has an empty second-key table")
            for char in table:
                _check_char(char, "second key")
            actions[prefix] = MappingProxyType(dict(table))

        hints: dict[P, tuple[KeyHint, ...]] = {}
        for prefix, entries in self.hints.items():
            if prefix not in actions:
                raise ValueError(f"hints given for unknown prefix {prefix!r}")
            entries = tuple(entries)
            for hint in entries:
                if hint.key not in actions[prefix]:
                    raise ValueError(
                        f"hint key {hint.key!r} is not a second key of {prefix!r}"
                    )
            hints[prefix] = entries

        object.__setattr__(self, "prefixes", MappingProxyType(dict(self.prefixes)))
        object.__setattr__(self, "actions", MappingProxyType(actions))
        object.__setattr__(self, "hints", MappingProxyType(hints))

    def prefix_for(self, char: str) -> P | None:
        return self.prefixes.get(char)

    def action_for(self, prefix: P, char: str) -> A | None:
        table = self.actions.get(prefix)
        if table is None:
            return None
        return table.get(char)

    def hints_for(self, prefix: P) -> tuple[KeyHint, ...]:
        return self.hints.get(prefix, ())

    def knows(self, prefix: P) -> bool:
        return prefix in self.actions


def hints_from_pairs(pairs: Iterable[tuple[str, str]]) -> tuple[KeyHint, ...]:
    return tuple(KeyHint(key, description) for key, description in pairs)


__all__ = ["KeyHint", "SequenceGrammar", "hints_from_pairs"]
