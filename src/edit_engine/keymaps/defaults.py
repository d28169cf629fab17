"""Built-in key bindings for the editor."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Iterable, Optional

from edit_engine.commands import editing
from edit_engine.commands.editing import Direction

from .keymap import Keymap
from .models import ActionRef, Binding, KeyStroke

if TYPE_CHECKING:
    from edit_engine.config import EditorConfig

PRINTABLE = tuple(chr(code) for code in range(32, 127))

_MOVES = {direction: f"move.{direction.value}" for direction in Direction}


def _insert_action_id(ch: str) -> str:
    return f"insert.{ord(ch):02x}"


def _base_actions() -> tuple[ActionRef, ...]:
    actions = [
        ActionRef(
            id=_insert_action_id(ch),
            handler=partial(editing.insert_char, ch=ch),
            description=f"Insert {ch!r}",
        )
        for ch in PRINTABLE + ("\n",)
    ]
    actions.extend(
        ActionRef(
            id=action_id,
            handler=partial(editing.move, direction=direction),
            description=f"Move {direction.value}",
        )
        for direction, action_id in _MOVES.items()
    )
    actions.extend(
        (
            ActionRef(
                id="delete.left",
                handler=partial(editing.delete, direction=Direction.LEFT),
                description="Delete the character before the point",
            ),
            ActionRef(
                id="delete.right",
                handler=partial(editing.delete, direction=Direction.RIGHT),
                description="Delete the character at the point",
            ),
            ActionRef(
                id="delete.kill_line",
                handler=editing.kill_line,
                description="Delete to the end of the line",
            ),
            ActionRef(id="history.undo", handler=editing.undo, description="Undo"),
            ActionRef(id="history.redo", handler=editing.redo, description="Redo"),
            ActionRef(id="session.beep", handler=editing.beep, description="Beep"),
            ActionRef(
                id="session.quit", handler=editing.quit_editor, description="Quit"
            ),
            ActionRef(
                id="session.save", handler=editing.save, description="Save the text"
            ),
            ActionRef(
                id="session.replace",
                handler=editing.replace_file,
                description="Reload the text from the file",
            ),
        )
    )
    return tuple(actions)


def _bind(action_id: str, stroke: KeyStroke, description: str = "") -> Binding:
    return Binding(
        id=f"{action_id}@{stroke.token}",
        stroke=stroke,
        action_id=action_id,
        description=description,
        source="defaults",
    )


def _base_bindings() -> tuple[Binding, ...]:
    bindings = [_bind(_insert_action_id(ch), KeyStroke(ch)) for ch in PRINTABLE]
    bindings.append(_bind(_insert_action_id("\n"), KeyStroke("ENTER")))

    for direction, action_id in _MOVES.items():
        bindings.append(_bind(action_id, KeyStroke(direction.name)))

    bindings.extend(
        (
            _bind("delete.left", KeyStroke("BACKSPACE")),
            _bind("delete.right", KeyStroke("DELETE")),
            _bind(_MOVES[Direction.HOME], KeyStroke.ctrl("a")),
            _bind(_MOVES[Direction.LEFT], KeyStroke.ctrl("b")),
            _bind("delete.right", KeyStroke.ctrl("d")),
            _bind(_MOVES[Direction.END], KeyStroke.ctrl("e")),
            _bind(_MOVES[Direction.RIGHT], KeyStroke.ctrl("f")),
            _bind("session.beep", KeyStroke.ctrl("g")),
            _bind("delete.kill_line", KeyStroke.ctrl("k")),
            _bind(_MOVES[Direction.DOWN], KeyStroke.ctrl("n")),
            _bind(_MOVES[Direction.UP], KeyStroke.ctrl("p")),
            _bind("session.quit", KeyStroke.ctrl("q")),
            _bind("session.replace", KeyStroke.ctrl("r")),
            _bind("session.save", KeyStroke.ctrl("w")),
            _bind("history.redo", KeyStroke.ctrl("y")),
            _bind("history.undo", KeyStroke.ctrl("z")),
        )
    )
    return tuple(bindings)


DEFAULT_ACTIONS: tuple[ActionRef, ...] = _base_actions()
DEFAULT_BINDINGS: tuple[Binding, ...] = _base_bindings()


def load_default_keymap(
    keymap: Keymap,
    *,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Iterable[str] = (),
) -> Keymap:
    """Register the built-in actions and bindings, then any extras."""

    excluded = set(exclude_bindings)
    for action in DEFAULT_ACTIONS:
        keymap.register_action(action, replace=True)
    for binding in DEFAULT_BINDINGS:
        if binding.id not in excluded:
            keymap.register_binding(binding)
    for binding in extra_bindings or ():
        keymap.register_binding(binding, replace=True)
    return keymap


def build_default_keymap(config: Optional["EditorConfig"] = None) -> Keymap:
    extras = config.extra_bindings if config is not None else ()
    return load_default_keymap(Keymap(), extra_bindings=extras)


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "build_default_keymap",
    "load_default_keymap",
]
