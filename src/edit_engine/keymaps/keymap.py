"""Explicit key to action table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from edit_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class KeymapStats:
    """Lightweight snapshot describing keymap state."""

    action_count: int
    binding_count: int


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a stroke that is already bound."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.token!r}"
        )
        self.binding = binding
        self.existing = existing


class Keymap:
    """Owns action references and the stroke -> binding table.

    Built explicitly at start-up and handed to the session; lookups are plain
    dictionary reads.
    """

    def __init__(self, *, logger_name: str | None = "edit_engine.keymaps") -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_token: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            existing_id = self._by_token.get(binding.token)
            if existing_id is not None and existing_id != binding.id:
                if not replace:
                    handle.add_metadata("conflict", existing_id)
                    raise KeymapConflictError(binding, self._bindings[existing_id])
                self._bindings.pop(existing_id, None)

            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._by_token.pop(self._bindings[binding.id].token, None)

            self._bindings[binding.id] = binding
            self._by_token[binding.token] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        self._by_token.pop(binding.token, None)
        self._revision += 1
        return binding

    def find(self, token: str) -> Optional[ActionRef]:
        """Return the action bound to ``token`` or ``None``."""

        binding_id = self._by_token.get(token)
        if binding_id is None:
            return None
        return self.get_action(self._bindings[binding_id].action_id)

    def binding_for(self, token: str) -> Optional[Binding]:
        binding_id = self._by_token.get(token)
        return None if binding_id is None else self._bindings[binding_id]

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def stats(self) -> KeymapStats:
        return KeymapStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
        )


__all__ = ["Keymap", "KeymapConflictError", "KeymapStats"]
