"""Editing position and the snapshots undo uses to restore it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class EditorState:
    """Mutable state that undo and redo must put back exactly.

    Only the editing position (``point``) is recorded. The modified flag and
    the file name live on the session and are not restored.
    """

    point: int = 0

    def set_point(self, point: int) -> None:
        self.point = point

    def snapshot(self) -> "StateSnapshot":
        return StateSnapshot(owner=self, point=self.point)


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Immutable record of the state at one moment."""

    owner: EditorState
    point: int

    def restore(self) -> None:
        self.owner.point = self.point
