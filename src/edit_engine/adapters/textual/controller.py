"""Adapter wiring an EditorSession into UI callbacks.

The adapter owns the repaint policy: after each key it pulls a snapshot
through ``BufferSync`` and repaints nothing, one line, or everything
depending on the damage it reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from edit_engine.buffer import BufferMirror, BufferSync, Damage
from edit_engine.session import CommandResult, EditorSession, KeyInput


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_line: Callable[[int, str], None] = _noop
    update_cursor: Callable[[int, int], None] = _noop
    update_status: Callable[[str], None] = _noop
    beep: Callable[[], None] = _noop
    scroll: Callable[[int], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges key events and session events to a widget-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.sync: BufferSync = session
        self.hooks = hooks
        self._notice: Optional[str] = None
        self._subscribe_events()
        self.session.document.mark_damaged(full=True)
        self.repaint()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a host key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        self._notice = None
        result = self.session.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self.repaint()
        self.hooks.update_status(self._notice or result.message or result.status)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def repaint(self) -> BufferMirror:
        mirror = self.sync.pull_buffer()
        if mirror.damage == Damage.FULL:
            self.hooks.update_buffer(mirror)
        elif mirror.damage == Damage.LINE and mirror.line is not None:
            self.hooks.update_line(*mirror.line)
        self.hooks.update_cursor(*mirror.cursor)
        return mirror

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        bus.subscribe("session.beep", lambda _payload: self.hooks.beep())
        bus.subscribe("session.confirm", self._handle_confirm)
        bus.subscribe("view.scroll", self._handle_scroll)
        events = ("session.quit", "session.save", "session.replace", "session.loaded")
        for event in events:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_confirm(self, payload: object) -> None:
        self._notice = str(payload)
        self.hooks.update_status(self._notice)

    def _handle_scroll(self, payload: object) -> None:
        if isinstance(payload, int):
            self.hooks.scroll(payload)

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.update_status(name)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "point": session.point,
            "length": session.document.length,
            "lines": session.document.line_count,
            "history": len(session.timeline),
            "modified": session.modified,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
