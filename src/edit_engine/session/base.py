"""Key input, command results and the session event bus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from edit_engine.keymaps.models import KeyStroke


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to the session."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def stroke(self) -> KeyStroke:
        return KeyStroke(self.key, self.modifiers)

    @property
    def token(self) -> str:
        return self.stroke.token


@dataclass(slots=True)
class CommandResult:
    """Result returned from ``EditorSession.handle_key``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    recorded: bool = False


class EventBus:
    """Minimal event bus letting the session signal its host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["CommandResult", "EventBus", "KeyInput"]
