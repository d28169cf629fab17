"""Linear undo/redo history of reversible scraps."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from edit_engine.runtime import telemetry


class Scrap(Protocol):
    """One reversible change plus the logic to replay it."""

    def undo(self) -> None:
        """Put the target back into the state before the change."""
        ...

    def redo(self) -> None:
        """Put the target back into the state after the change."""
        ...

    def merge(self, other: "Scrap") -> bool:
        """Absorb ``other``, the next scrap, if it continues this one."""
        ...


Action = Callable[[], Optional[Scrap]]


class UndoTimeline:
    """Stack of scraps with a pointer splitting done from undone.

    ``history[:pointer]`` have been executed and not undone; ``history[pointer:]``
    have been undone and are available to redo.
    """

    def __init__(self, *, logger_name: str | None = "edit_engine.undo") -> None:
        self._history: List[Scrap] = []
        self._pointer = 0
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._history)

    @property
    def pointer(self) -> int:
        return self._pointer

    def can_undo(self) -> bool:
        return self._pointer > 0

    def can_redo(self) -> bool:
        return self._pointer < len(self._history)

    def perform(self, action: Action) -> Optional[Scrap]:
        """Run ``action`` and record the scrap it returns, if any."""

        scrap = action()
        if scrap is None:
            return None

        del self._history[self._pointer :]
        if self._history and self._history[-1].merge(scrap):
            return scrap

        self._history.append(scrap)
        self._pointer += 1
        return scrap

    def undo(self) -> bool:
        """Undo the latest change; ``False`` means there was nothing to undo."""

        if self._pointer == 0:
            self._boundary("undo")
            return False
        self._pointer -= 1
        self._history[self._pointer].undo()
        return True

    def redo(self) -> bool:
        """Redo the next change; ``False`` means there was nothing to redo."""

        if self._pointer == len(self._history):
            self._boundary("redo")
            return False
        scrap = self._history[self._pointer]
        self._pointer += 1
        scrap.redo()
        return True

    def reset(self) -> None:
        self._history.clear()
        self._pointer = 0

    def _boundary(self, direction: str) -> None:
        telemetry.record_event(
            "undo.boundary",
            level="debug",
            data={"direction": direction, "size": len(self._history)},
            logger_name=self._logger_name,
        )


__all__ = ["Action", "Scrap", "UndoTimeline"]
