"""Keymap registry storing bindings per table and resolving key lookups."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from keymode.runtime.telemetry import span

from .models import Binding, KeyEvent, wildcard_signature


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    tables: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns bindings, indexed by table id and key signature."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._table_index: Dict[str, Dict[str, list[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "table": binding.table},
        ) as handle:
            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._remove_binding(conflict)
                    self._bindings.pop(conflict.id, None)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._remove_binding(existing)
                    self._bindings.pop(existing.id, None)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._touch_bindings()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            binding = self._bindings.pop(binding_id, None)
            if not binding:
                return None
            self._remove_binding(binding)
            self._touch_bindings()
            return binding

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ) as handle:
            if binding_id not in self._bindings:
                handle.fail("missing_binding")
                raise KeyError(f"Binding '{binding_id}' not found")

            current = self._bindings[binding_id]
            updated = replace(current, **changes)

            self._remove_binding(current)
            conflicts = self.detect_conflicts(updated, ignore=(binding_id,))
            if conflicts:
                self._index_binding(current)
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(updated, conflicts)

            self._bindings[binding_id] = updated
            self._index_binding(updated)
            self._touch_bindings()
            return updated

    def iter_bindings(self, table: Optional[str] = None) -> Iterator[Binding]:
        if table is None:
            yield from self._bindings.values()
            return
        for bucket in self._table_index.get(table, {}).values():
            for binding_id in bucket:
                yield self._bindings[binding_id]

    def lookup(
        self,
        table: str,
        event: KeyEvent,
        context: Optional[Mapping[str, bool]] = None,
    ) -> Optional[Binding]:
        """Return the binding ``event`` selects in ``table``, if any.

        Exact modifier matches win over ``any_modifiers`` bindings.
        """

        signatures = self._table_index.get(table)
        if not signatures:
            return None
        flags = context or {}
        normalized = event.normalized()
        for signature in (normalized.token, wildcard_signature(normalized)):
            for binding_id in signatures.get(signature, ()):
                binding = self._bindings[binding_id]
                if binding.allows(flags):
                    return binding
        return None

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._bindings),
            tables=tuple(sorted(self._table_index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        conflicts: list[Binding] = []
        for match_id in self._table_index.get(binding.table, {}).get(
            binding.key_signature, ()
        ):
            if match_id in ignored:
                continue
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def _index_binding(self, binding: Binding) -> None:
        by_signature = self._table_index.setdefault(binding.table, {})
        bucket = by_signature.setdefault(binding.key_signature, [])
        bucket.append(binding.id)

    def _remove_binding(self, binding: Binding) -> None:
        table_bucket = self._table_index.get(binding.table)
        if not table_bucket:
            return
        signatures = table_bucket.get(binding.key_signature)
        if not signatures:
            return
        if binding.id in signatures:
            signatures.remove(binding.id)
        if not signatures:
            table_bucket.pop(binding.key_signature, None)
        if not table_bucket:
            self._table_index.pop(binding.table, None)

    def _touch_bindings(self) -> None:
        self._revision += 1


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    left_map = left.when_map
    right_map = right.when_map

    if not left.when and not right.when:
        return True

    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    for flag, expected in right_map.items():
        if flag in left_map and left_map[flag] != expected:
            return False

    if not left.when or not right.when:
        return False

    return left_map == right_map


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
