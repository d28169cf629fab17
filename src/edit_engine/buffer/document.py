"""Editable text document composing a gap buffer with its line map."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .gap import DEFAULT_CAPACITY, STREAM_CHUNK, CharSink, CharSource, GapBuffer
from .lines import LineIndex
from .state import Cursor


class Damage(IntEnum):
    """How much of the view is out of date."""

    CLEAN = 0
    LINE = 1
    FULL = 2


@dataclass(frozen=True, slots=True)
class DamageReport:
    damage: Damage
    anchor: int
    row: int
    column: int

    @property
    def cursor(self) -> Cursor:
        return (self.row, self.column)


class EditableDocument:
    """Addressable text with row/column queries and damage tracking.

    Every mutation changes the text first and then the line map, and folds
    a damage level: single non-newline characters damage one line, anything
    that can add or remove lines damages the whole view.
    """

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY) -> None:
        self._text = GapBuffer(capacity)
        self._lines = LineIndex(self._text)
        self._damage = Damage.CLEAN
        self.version = 0

    @classmethod
    def from_text(cls, text: str) -> "EditableDocument":
        document = cls(capacity=max(len(text), 16))
        if text:
            document.insert_string(0, text)
        document.query_damage_and_clear(0)
        return document

    # Queries

    @property
    def length(self) -> int:
        return len(self._text)

    def __len__(self) -> int:
        return len(self._text)

    def char_at(self, pos: int) -> str:
        return self._text.char_at(pos)

    def text(self) -> str:
        return self._text.text()

    def get_range(self, start: int, count: int) -> str:
        return self._text.get_range(start, count)

    def write_out(self, sink: CharSink) -> None:
        self._text.write_out(sink)

    @property
    def line_count(self) -> int:
        return self._lines.line_count()

    def line_length(self, row: int) -> int:
        return self._lines.line_length(row)

    def row_of(self, pos: int) -> int:
        return self._lines.row_of(pos)

    def column_of(self, pos: int) -> int:
        return self._lines.column_of(pos)

    def cursor_of(self, pos: int) -> Cursor:
        return (self._lines.row_of(pos), self._lines.column_of(pos))

    def position_of(self, row: int, col: int) -> int:
        return self._lines.position_of(row, col)

    def fetch_line(self, row: int, target: GapBuffer) -> None:
        """Copy line ``row`` without its terminator into ``target``."""

        start = self._lines.line_start(row)
        self._text.get_range_into(start, self._lines.line_length(row) - 1, target)

    def line_text(self, row: int) -> str:
        start = self._lines.line_start(row)
        return self._text.get_range(start, self._lines.line_length(row) - 1)

    # Damage

    @property
    def damage(self) -> Damage:
        return self._damage

    def mark_damaged(self, *, full: bool = True) -> None:
        self._damage = max(self._damage, Damage.FULL if full else Damage.LINE)

    def query_damage_and_clear(self, anchor: int) -> DamageReport:
        """Return accumulated damage with the cursor resolved at ``anchor``."""

        report = DamageReport(
            damage=self._damage,
            anchor=anchor,
            row=self._lines.row_of(anchor),
            column=self._lines.column_of(anchor),
        )
        self._damage = Damage.CLEAN
        return report

    # Mutators

    def insert_char(self, pos: int, ch: str) -> None:
        self._text.insert_char(pos, ch)
        self._lines.after_insert_char(pos, ch)
        self._touch(full=ch == "\n")

    def insert_string(self, pos: int, text: str) -> None:
        self._text.insert_string(pos, text)
        self._lines.after_bulk_change()
        self._touch(full=True)

    def insert_range(self, pos: int, source: GapBuffer, start: int, count: int) -> None:
        self._text.insert_range(pos, source, start, count)
        self._lines.after_bulk_change()
        self._touch(full=True)

    def insert_from_stream(
        self, pos: int, source: CharSource, *, chunk_size: int = STREAM_CHUNK
    ) -> int:
        """Bulk-load ``source`` at ``pos``; the line map is rebuilt even on error."""

        try:
            return self._text.insert_from_stream(pos, source, chunk_size=chunk_size)
        finally:
            self._lines.after_bulk_change()
            self._touch(full=True)

    def delete_char(self, pos: int) -> str:
        """Delete and return the character at ``pos``."""

        ch = self._text.char_at(pos)
        self._text.delete_char(pos)
        self._lines.after_delete_char(pos, ch)
        self._touch(full=ch == "\n")
        return ch

    def delete_range(self, start: int, count: int) -> None:
        self._text.delete_range(start, count)
        self._lines.after_delete_range(start, count)
        self._touch(full=True)

    def clear(self) -> None:
        self._text.clear()
        self._lines.reset()
        self._touch(full=True)

    def _touch(self, *, full: bool) -> None:
        self.version += 1
        self.mark_damaged(full=full)


__all__ = ["Damage", "DamageReport", "EditableDocument"]
