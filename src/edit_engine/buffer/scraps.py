"""Concrete undo scraps for document edits.

Scraps capture text by value. None of them keep gap offsets, so they stay
valid however the buffer is edited or reallocated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from .document import EditableDocument
from .state import StateSnapshot
from .undo import Scrap


@dataclass(slots=True)
class Insertion:
    """Text inserted in one piece (paste, bulk insert)."""

    document: EditableDocument
    pos: int
    text: str

    def undo(self) -> None:
        self.document.delete_range(self.pos, len(self.text))

    def redo(self) -> None:
        self.document.insert_string(self.pos, self.text)

    def merge(self, other: Scrap) -> bool:
        return False


@dataclass(slots=True)
class TypedInsertion:
    """Keystroke insertion that absorbs the keystrokes typed after it.

    A run keeps growing while the next insertion lands right after it and
    the run has not yet taken in a newline.
    """

    document: EditableDocument
    pos: int
    text: str

    def undo(self) -> None:
        self.document.delete_range(self.pos, len(self.text))

    def redo(self) -> None:
        self.document.insert_string(self.pos, self.text)

    def merge(self, other: Scrap) -> bool:
        if not isinstance(other, TypedInsertion):
            return False
        if self.text.endswith("\n") or other.pos != self.pos + len(self.text):
            return False
        self.text += other.text
        return True


@dataclass(slots=True)
class Deletion:
    """A single deleted character."""

    document: EditableDocument
    pos: int
    char: str

    def undo(self) -> None:
        self.document.insert_char(self.pos, self.char)

    def redo(self) -> None:
        self.document.delete_char(self.pos)

    def merge(self, other: Scrap) -> bool:
        return False


@dataclass(slots=True)
class RangeDeletion:
    document: EditableDocument
    pos: int
    text: str

    def undo(self) -> None:
        self.document.insert_string(self.pos, self.text)

    def redo(self) -> None:
        self.document.delete_range(self.pos, len(self.text))

    def merge(self, other: Scrap) -> bool:
        return False


@dataclass(slots=True)
class CompositeScrap:
    """Wraps a change with the editor state on either side of it.

    Undo replays the change backwards and restores ``before``; redo replays it
    forwards and restores ``after``.
    """

    change: Scrap
    before: StateSnapshot
    after: StateSnapshot

    def undo(self) -> None:
        self.change.undo()
        self.before.restore()

    def redo(self) -> None:
        self.change.redo()
        self.after.restore()

    def merge(self, other: Scrap) -> bool:
        if not isinstance(other, CompositeScrap):
            return False
        if not self.change.merge(other.change):
            return False
        self.after = other.after
        return True


__all__ = [
    "CompositeScrap",
    "Deletion",
    "Insertion",
    "RangeDeletion",
    "TypedInsertion",
]
