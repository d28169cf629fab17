"""Dataclasses describing key strokes, actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional

if TYPE_CHECKING:
    from edit_engine.buffer.undo import Scrap
    from edit_engine.session.editor import EditorSession

EditorCommand = Callable[["EditorSession"], Optional["Scrap"]]

NAMED_KEYS = frozenset(
    {
        "BACKSPACE",
        "DELETE",
        "DOWN",
        "END",
        "ENTER",
        "ESC",
        "HOME",
        "LEFT",
        "PAGEDOWN",
        "PAGEUP",
        "RIGHT",
        "TAB",
        "UP",
    }
)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def _normalize_key(key: str) -> str:
    if len(key) > 1 and key.upper() in NAMED_KEYS:
        return key.upper()
    return key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press.

    Named keys are upper-cased (``"enter"`` becomes ``"ENTER"``), modifiers are
    lower-cased and sorted, so ``KeyStroke("z", ("CTRL",)).token == "ctrl+z"``.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def ctrl(cls, key: str) -> "KeyStroke":
        return cls(key.lower() if len(key) == 1 else key, ("ctrl",))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+z"`` style text; ``"+"`` alone is a key."""

        if len(token) > 2 and token.endswith("++"):
            return cls("+", tuple(token[:-2].split("+")))
        head, sep, key = token.rpartition("+")
        if sep and head and key:
            return cls(key, tuple(head.split("+")))
        return cls(token)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named command that a binding can point at."""

    id: str
    handler: EditorCommand
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, session: "EditorSession") -> Optional["Scrap"]:
        return self.handler(session)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one key stroke with an action."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def token(self) -> str:
        return self.stroke.token


__all__ = [
    "ActionRef",
    "Binding",
    "EditorCommand",
    "KeyStroke",
    "NAMED_KEYS",
]
