"""Key map for the navigating mode of a session."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """Key tokens from ``read_key`` that all trigger one session action."""

    keys: tuple[str, ...]
    action: Callable[[], object]


class KeyMap:
    """Dispatch table from key tokens to session actions.

    A token may be bound once; rebinding it raises ``ValueError`` so two
    actions never silently compete for the same key.
    """

    def __init__(self, *bindings: KeyBinding) -> None:
        self._actions: dict[str, Callable[[], object]] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> KeyMap:
        taken = [key for key in binding.keys if key in self._actions]
        if taken:
            raise ValueError(f"key {taken[0]!r} is already bound")
        for key in binding.keys:
            self._actions[key] = binding.action
        return self

    def __contains__(self, key: str) -> bool:
        return key in self._actions

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; return whether one was bound."""
        action = self._actions.get(key)
        if action is None:
            return False
        action()
        return True
