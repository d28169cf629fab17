"""Command execution protocol shared by every key binding."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from edit_engine.buffer.scraps import CompositeScrap
from edit_engine.buffer.undo import Scrap
from edit_engine.runtime import telemetry

if TYPE_CHECKING:
    from edit_engine.keymaps.models import EditorCommand
    from edit_engine.session.editor import EditorSession


class CommandExecutor:
    """Runs commands through the undo timeline.

    The editor state is snapshotted on both sides of each command, and any
    scrap the command returns is wrapped so undo and redo also put the point
    back where it was.
    """

    def __init__(self, session: "EditorSession") -> None:
        self.session = session
        self._logger_name = "edit_engine.commands"

    def execute(
        self, command: EditorCommand, *, label: str | None = None
    ) -> Optional[Scrap]:
        name = label or getattr(command, "id", None) or "command"
        with telemetry.span(
            f"command::{name}",
            logger_name=self._logger_name,
            component="commands",
            metadata={"point": self.session.point},
        ) as handle:
            scrap = self.session.timeline.perform(lambda: self._obey(command))
            handle.add_metadata("recorded", scrap is not None)
            return scrap

    def _obey(self, command: EditorCommand) -> Optional[Scrap]:
        self.session.begin_command()
        before = self.session.state.snapshot()
        change = command(self.session)
        after = self.session.state.snapshot()
        if change is None:
            return None
        return CompositeScrap(change=change, before=before, after=after)


__all__ = ["CommandExecutor"]
