"""Handler configuration and its presets."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class VimConfig:
    """Options consulted by ``VimHandler`` and the default binding tables."""

    half_page_lines: int = 10
    full_page_lines: int = 20
    enable_visual: bool = True
    enable_search: bool = True
    double_esc_to_exit: bool = False

    def __post_init__(self) -> None:
        for name in ("half_page_lines", "full_page_lines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def double_esc(cls) -> "VimConfig":
        """Preset where a second consecutive Esc in Normal mode cancels."""

        return cls(double_esc_to_exit=True)

    @classmethod
    def json_editor(cls) -> "VimConfig":
        """Preset for embedded JSON editing: single Esc, no search."""

        return cls(enable_search=False, double_esc_to_exit=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VimConfig":
        """Build a config from plain data such as a parsed TOML table.

        Unknown keys raise ``ValueError`` so typos do not pass silently.
        """

        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown vim config keys: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key.startswith("enable_") or key == "double_esc_to_exit":
                if not isinstance(value, bool):
                    raise ValueError(f"{key} must be a boolean, got {value!r}")
            values[key] = value
        return cls(**values)

    def with_overrides(self, **changes: Any) -> "VimConfig":
        return replace(self, **changes)

    def flags(self) -> dict[str, bool]:
        """Boolean flags evaluated by binding ``when`` clauses."""

        return {
            "enable_visual": self.enable_visual,
            "enable_search": self.enable_search,
            "double_esc_to_exit": self.double_esc_to_exit,
        }


__all__ = ["VimConfig"]
