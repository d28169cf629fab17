"""Editing commands bound to keys.

Each command takes the session, edits through its document and returns the
scrap that reverses the edit, or ``None`` when nothing undoable happened.
Parameterised commands are bound with ``functools.partial``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from edit_engine.buffer.scraps import Deletion, Insertion, RangeDeletion, TypedInsertion
from edit_engine.buffer.undo import Scrap

if TYPE_CHECKING:
    from edit_engine.session.editor import EditorSession


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGEUP = "pageup"
    PAGEDOWN = "pagedown"


def insert_char(session: "EditorSession", ch: str) -> Scrap:
    point = session.point
    session.document.insert_char(point, ch)
    session.point = point + 1
    session.modified = True
    return TypedInsertion(session.document, point, ch)


def insert_text(session: "EditorSession", text: str) -> Optional[Scrap]:
    if not text:
        return None
    point = session.point
    session.document.insert_string(point, text)
    session.point = point + len(text)
    session.modified = True
    return Insertion(session.document, point, text)


def delete(session: "EditorSession", direction: Direction) -> Optional[Scrap]:
    """Backspace (``LEFT``) or delete forward (``RIGHT``)."""

    document = session.document
    point = session.point

    if direction is Direction.LEFT:
        if point == 0:
            session.beep()
            return None
        point -= 1
        deleted = document.delete_char(point)
        session.point = point
    elif direction is Direction.RIGHT:
        if point == document.length:
            session.beep()
            return None
        deleted = document.delete_char(point)
    else:
        raise ValueError(f"Bad direction for delete: {direction}")

    session.modified = True
    return Deletion(document, point, deleted)


def kill_line(session: "EditorSession") -> Optional[Scrap]:
    """Delete to the end of the line, or the newline itself when already there."""

    document = session.document
    point = session.point
    row = document.row_of(point)
    line_end = document.position_of(row, document.line_length(row) - 1)
    count = line_end - point
    if count == 0:
        if point == document.length:
            session.beep()
            return None
        count = 1

    text = document.get_range(point, count)
    document.delete_range(point, count)
    session.modified = True
    return RangeDeletion(document, point, text)


def move(session: "EditorSession", direction: Direction) -> None:
    document = session.document
    point = session.point
    row = document.row_of(point)
    scroll = session.config.page_scroll

    if direction is Direction.LEFT:
        if point > 0:
            point -= 1
    elif direction is Direction.RIGHT:
        if point < document.length:
            point += 1
    elif direction is Direction.UP:
        point = document.position_of(row - 1, session.goal_column())
    elif direction is Direction.DOWN:
        point = document.position_of(row + 1, session.goal_column())
    elif direction is Direction.HOME:
        point = document.position_of(row, 0)
    elif direction is Direction.END:
        point = document.position_of(row, document.line_length(row) - 1)
    elif direction is Direction.PAGEDOWN:
        point = document.position_of(row + scroll, 0)
        session.bus.emit("view.scroll", scroll)
    elif direction is Direction.PAGEUP:
        point = document.position_of(row - scroll, 0)
        session.bus.emit("view.scroll", -scroll)
    else:
        raise ValueError(f"Bad direction for move: {direction}")

    session.point = point


def undo(session: "EditorSession") -> None:
    session.undo()


def redo(session: "EditorSession") -> None:
    session.redo()


def beep(session: "EditorSession") -> None:
    session.beep()


def quit_editor(session: "EditorSession") -> None:
    session.request_quit()


def save(session: "EditorSession") -> None:
    session.bus.emit("session.save", session.filename)


def replace_file(session: "EditorSession") -> None:
    """Ask the host to reload the text from ``session.filename``."""

    if session.check_clean("overwrite"):
        session.bus.emit("session.replace", session.filename)


__all__ = [
    "Direction",
    "beep",
    "delete",
    "insert_char",
    "insert_text",
    "kill_line",
    "move",
    "quit_editor",
    "redo",
    "replace_file",
    "save",
    "undo",
]
