"""Editing session: document, point, history and keymap in one place."""

from __future__ import annotations

from functools import partial
from typing import Optional

from edit_engine.buffer import (
    BufferMirror,
    Damage,
    DamageReport,
    EditableDocument,
    EditorState,
    Scrap,
    UndoTimeline,
)
from edit_engine.buffer.gap import CharSink, CharSource
from edit_engine.commands.editing import insert_char
from edit_engine.commands.executor import CommandExecutor
from edit_engine.config import EditorConfig
from edit_engine.keymaps import Keymap, build_default_keymap
from edit_engine.keymaps.models import EditorCommand
from edit_engine.runtime import telemetry

from .base import CommandResult, EventBus, KeyInput


class EditorSession:
    """Owns one document and everything needed to edit it from key events.

    Events emitted on ``bus``: ``session.beep``, ``session.confirm``,
    ``session.quit``, ``session.replace``, ``session.save``, ``session.loaded``
    and ``view.scroll``.
    """

    def __init__(
        self,
        *,
        config: Optional[EditorConfig] = None,
        keymap: Optional[Keymap] = None,
        document: Optional[EditableDocument] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.document = document or EditableDocument(
            capacity=self.config.initial_capacity
        )
        if keymap is None:
            keymap = build_default_keymap(self.config)
        self.keymap = keymap
        self.bus = bus or EventBus()
        self.state = EditorState()
        self.timeline = UndoTimeline()
        self.executor = CommandExecutor(self)
        self._logger_name = "edit_engine.session"
        self.filename = ""
        self.modified = False
        self.alive = True
        self._goal = -1
        self._prev_goal = -1
        self._confirm: str | None = None
        self._prev_confirm: str | None = None

    @property
    def point(self) -> int:
        return self.state.point

    @point.setter
    def point(self, value: int) -> None:
        self.state.set_point(value)

    # Key dispatch

    def handle_key(self, key: KeyInput) -> CommandResult:
        token = key.token
        action = self.keymap.find(token)
        if action is not None:
            return self._run(action, action.id)

        typed = _typed_character(key)
        if typed is not None:
            return self._run(partial(insert_char, ch=typed), "insert.typed")

        telemetry.record_event(
            "keymap.unbound",
            level="debug",
            data={"token": token},
            logger_name=self._logger_name,
        )
        self.beep()
        return CommandResult(consumed=False, status="unbound", message=token)

    def perform(
        self, command: EditorCommand, *, label: str | None = None
    ) -> Optional[Scrap]:
        """Run a command outside key dispatch, recording it for undo."""

        return self.executor.execute(command, label=label)

    def _run(self, command: EditorCommand, label: str) -> CommandResult:
        scrap = self.executor.execute(command, label=label)
        return CommandResult(
            consumed=True,
            status="recorded" if scrap is not None else "ok",
            message=label,
            recorded=scrap is not None,
        )

    # History

    def undo(self) -> bool:
        with telemetry.span(
            "history::undo", logger_name=self._logger_name, component="history"
        ):
            done = self.timeline.undo()
        if not done:
            self.beep()
        return done

    def redo(self) -> bool:
        with telemetry.span(
            "history::redo", logger_name=self._logger_name, component="history"
        ):
            done = self.timeline.redo()
        if not done:
            self.beep()
        return done

    # Command protocol helpers

    def begin_command(self) -> None:
        self._prev_goal = self._goal
        self._goal = -1
        self._prev_confirm = self._confirm
        self._confirm = None

    def goal_column(self) -> int:
        """Column that consecutive vertical moves aim for."""

        if self._goal < 0:
            if self._prev_goal >= 0:
                self._goal = self._prev_goal
            else:
                self._goal = self.document.column_of(self.point)
        return self._goal

    def beep(self) -> None:
        self.bus.emit("session.beep", None)

    def check_clean(self, action: str) -> bool:
        """True when ``action`` may discard the text.

        A modified buffer needs the same command twice in a row: the first
        attempt only emits ``session.confirm`` with the question to show.
        """

        if not self.modified or self._prev_confirm == action:
            return True
        self._confirm = action
        self.bus.emit("session.confirm", f"Buffer modified -- really {action}?")
        return False

    def request_quit(self) -> None:
        if not self.check_clean("quit"):
            return
        self.alive = False
        self.bus.emit("session.quit", {"modified": self.modified})

    # Loading and saving

    def load(self, source: CharSource, *, filename: str | None = None) -> int:
        """Replace the text with everything read from ``source``."""

        if filename is not None:
            self.filename = filename
        with telemetry.span(
            "session::load",
            logger_name=self._logger_name,
            component="session",
            metadata={"filename": self.filename},
        ):
            self.point = 0
            self.document.clear()
            try:
                count = self.document.insert_from_stream(
                    0, source, chunk_size=self.config.stream_chunk_size
                )
            finally:
                self.timeline.reset()
                self.modified = False
        telemetry.record_event(
            "session.load",
            data={"filename": self.filename, "chars": count},
            logger_name=self._logger_name,
        )
        self.bus.emit("session.loaded", self.filename)
        return count

    def save(self, sink: CharSink, *, filename: str | None = None) -> None:
        if filename is not None:
            self.filename = filename
        self.document.write_out(sink)
        self.modified = False
        telemetry.record_event(
            "session.save",
            data={"filename": self.filename, "chars": self.document.length},
            logger_name=self._logger_name,
        )

    # Display queries

    def refresh(self) -> DamageReport:
        """Collect damage since the last refresh, anchored at the point."""

        return self.document.query_damage_and_clear(self.point)

    def pull_buffer(self) -> BufferMirror:
        """Snapshot for the renderer; consumes the pending damage."""

        report = self.refresh()
        line = None
        if report.damage is Damage.LINE:
            line = (report.row, self.document.line_text(report.row))
        return BufferMirror(
            text=self.document.text(),
            cursor=report.cursor,
            damage=int(report.damage),
            line=line,
            attributes={"modified": "yes" if self.modified else "no"},
        )


def _typed_character(key: KeyInput) -> Optional[str]:
    text = key.text
    if not text or len(text) != 1 or not text.isprintable():
        return None
    if any(mod.lower() in {"ctrl", "alt", "meta"} for mod in key.modifiers):
        return None
    return text


__all__ = ["EditorSession"]
