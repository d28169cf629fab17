"""Line map layered over a gap buffer.

Each newline counts as part of the line it ends, and an imaginary terminator
follows the last character, so every line has length >= 1 and the lengths
always sum to ``len(text) + 1``. A text ending in a newline therefore has one
more line than it has newline characters.

The most recently visited line is cached as ``(current_line, line_start)``
with ``line_start == sum(lengths[:current_line])``. Lookups walk from there
one line at a time, which is cheap because queries cluster around the point.
"""

from __future__ import annotations

from typing import List

from edit_engine.runtime import telemetry

from .gap import GapBuffer
from .validation import ensure_offset


class LineIndex:
    """Per-line lengths plus a single-line position cache."""

    def __init__(self, text: GapBuffer) -> None:
        self._text = text
        self._lengths: List[int] = [1]
        self._current_line = 0
        self._line_start = 0
        self.remap()

    def line_count(self) -> int:
        """Number of lines, including the synthetic last line."""

        return len(self._lengths)

    def line_length(self, row: int) -> int:
        ensure_offset(row, len(self._lengths))
        return self._lengths[row]

    def line_start(self, row: int) -> int:
        self._seek_line(row)
        return self._line_start

    def lengths(self) -> tuple[int, ...]:
        return tuple(self._lengths)

    def row_of(self, pos: int) -> int:
        self._seek_offset(pos)
        return self._current_line

    def column_of(self, pos: int) -> int:
        self._seek_offset(pos)
        return pos - self._line_start

    def position_of(self, row: int, col: int) -> int:
        """Return the editing position closest to ``(row, col)``."""

        row = min(max(row, 0), len(self._lengths) - 1)
        self._seek_line(row)
        col = min(max(col, 0), self._lengths[row] - 1)
        return self._line_start + col

    # Maintenance hooks, called after the text has changed

    def reset(self) -> None:
        self._lengths = [1]
        self._current_line = 0
        self._line_start = 0

    def after_insert_char(self, pos: int, ch: str) -> None:
        if ch == "\n":
            self.remap()
            return
        self._seek_offset(pos)
        self._lengths[self._current_line] += 1

    def after_delete_char(self, pos: int, ch: str) -> None:
        if ch == "\n":
            self.remap()
            return
        self._seek_offset(pos)
        self._lengths[self._current_line] -= 1

    def after_delete_range(self, start: int, count: int) -> None:
        # Lengths still describe the text before the deletion here.
        self._seek_offset(start)
        line_end = self._line_start + self._lengths[self._current_line]
        if start + count < line_end:
            self._lengths[self._current_line] -= count
        else:
            self.remap()

    def after_bulk_change(self) -> None:
        self.remap()

    def remap(self) -> None:
        """Rebuild the map by scanning the whole text."""

        lengths: List[int] = []
        run = 0
        for ch in self._text:
            run += 1
            if ch == "\n":
                lengths.append(run)
                run = 0
        lengths.append(run + 1)

        self._lengths = lengths
        self._current_line = 0
        self._line_start = 0
        telemetry.record_event(
            "lines.remap",
            level="debug",
            data={"lines": len(lengths), "length": len(self._text)},
            logger_name="edit_engine.lines",
        )

    # Cache movement

    def _seek_line(self, row: int) -> None:
        ensure_offset(row, len(self._lengths))
        while row > self._current_line:
            self._line_start += self._lengths[self._current_line]
            self._current_line += 1
        while row < self._current_line:
            self._current_line -= 1
            self._line_start -= self._lengths[self._current_line]

    def _seek_offset(self, pos: int) -> None:
        ensure_offset(pos, len(self._text), inclusive=True)
        while pos < self._line_start:
            self._current_line -= 1
            self._line_start -= self._lengths[self._current_line]
        while pos >= self._line_start + self._lengths[self._current_line]:
            self._line_start += self._lengths[self._current_line]
            self._current_line += 1


__all__ = ["LineIndex"]
