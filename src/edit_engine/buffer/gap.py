"""Gap buffer character store.

A ``GapBuffer`` represents the sequence::

    storage[0:gap] + storage[capacity - length + gap:capacity]

The free region in between is moved to the edit point before every mutation,
so runs of edits at one place cost O(1) each. Storage is never handed out;
every read copies.
"""

from __future__ import annotations

from itertools import chain, islice
from typing import Iterator, List, Protocol

from .validation import ensure_capacity, ensure_offset, ensure_range
from .sync import BufferValidationError

DEFAULT_CAPACITY = 10000
STREAM_CHUNK = 4096


class CharSource(Protocol):
    def read(self, size: int = ..., /) -> str: ...


class CharSink(Protocol):
    def write(self, data: str, /) -> object: ...


class GapBuffer:
    """Mutable character sequence with a movable free region."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        ensure_capacity(capacity)
        self._storage: List[str] = [""] * capacity
        self._length = 0
        self._gap = 0

    @classmethod
    def from_text(cls, text: str) -> "GapBuffer":
        buf = cls(len(text))
        buf.insert_string(0, text)
        return buf

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} length={self._length} "
            f"capacity={self.capacity} gap={self._gap}>"
        )

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[str]:
        return chain(
            islice(self._storage, 0, self._gap),
            islice(self._storage, self._suffix_start, self.capacity),
        )

    def __str__(self) -> str:
        return self.text()

    @property
    def capacity(self) -> int:
        return len(self._storage)

    @property
    def gap(self) -> int:
        return self._gap

    @property
    def _suffix_start(self) -> int:
        return self.capacity - self._length + self._gap

    # Queries

    def char_at(self, pos: int) -> str:
        ensure_offset(pos, self._length)
        if pos < self._gap:
            return self._storage[pos]
        return self._storage[self.capacity - self._length + pos]

    def text(self) -> str:
        return self.get_range(0, self._length)

    def get_range(self, start: int, count: int) -> str:
        """Copy ``[start, start + count)`` out as an independent string."""

        ensure_range(start, count, self._length)
        return "".join(self._copy(start, count))

    def get_range_into(self, start: int, count: int, target: "GapBuffer") -> None:
        """Replace the contents of ``target`` with ``[start, start + count)``."""

        target.clear()
        target.insert_range(0, self, start, count)

    def write_out(self, sink: CharSink) -> None:
        """Emit the text in at most two writes without moving the gap."""

        if self._gap > 0:
            sink.write("".join(self._storage[: self._gap]))
        if self._length > self._gap:
            sink.write("".join(self._storage[self._suffix_start :]))

    # Mutators

    def clear(self) -> None:
        self._gap = self._length = 0

    def insert_char(self, pos: int, ch: str) -> None:
        ensure_offset(pos, self._length, inclusive=True)
        if len(ch) != 1:
            raise BufferValidationError(
                f"Expected a single character, got {ch!r}", offset=pos
            )
        self._make_room(1)
        self._move_gap(pos)
        self._storage[self._gap] = ch
        self._gap += 1
        self._length += 1

    def insert_string(self, pos: int, text: str) -> None:
        ensure_offset(pos, self._length, inclusive=True)
        self._write_gap(pos, list(text))

    def insert_range(
        self, pos: int, source: "GapBuffer", start: int, count: int
    ) -> None:
        """Insert ``[start, start + count)`` of another buffer at ``pos``."""

        if source is self:
            raise BufferValidationError(
                "Cannot insert a buffer into itself", offset=pos
            )
        ensure_offset(pos, self._length, inclusive=True)
        ensure_range(start, count, len(source))
        self._write_gap(pos, source._copy(start, count))

    def insert_from_stream(
        self, pos: int, source: CharSource, *, chunk_size: int = STREAM_CHUNK
    ) -> int:
        """Read ``source`` to exhaustion into the buffer at ``pos``.

        Characters already read stay in the buffer if ``source.read`` raises.
        Returns the number of characters inserted.
        """

        ensure_offset(pos, self._length, inclusive=True)
        if chunk_size <= 0:
            raise BufferValidationError(
                f"Chunk size must be positive, got {chunk_size}"
            )
        self._move_gap(pos)
        total = 0
        while True:
            self._make_room(chunk_size)
            data = source.read(self.capacity - self._length)
            if not data:
                break
            count = len(data)
            self._storage[self._gap : self._gap + count] = list(data)
            self._gap += count
            self._length += count
            total += count
        return total

    def delete_char(self, pos: int) -> None:
        ensure_offset(pos, self._length)
        self._move_gap(pos)
        self._length -= 1

    def delete_range(self, start: int, count: int) -> None:
        ensure_range(start, count, self._length)
        self._move_gap(start)
        self._length -= count

    # Internals

    def _copy(self, start: int, count: int) -> List[str]:
        gap = self._gap
        offset = self.capacity - self._length
        if start + count <= gap:
            return self._storage[start : start + count]
        if start >= gap:
            return self._storage[offset + start : offset + start + count]
        head = gap - start
        tail_start = offset + gap
        return self._storage[start:gap] + self._storage[
            tail_start : tail_start + count - head
        ]

    def _write_gap(self, pos: int, chars: List[str]) -> None:
        count = len(chars)
        self._make_room(count)
        self._move_gap(pos)
        self._storage[self._gap : self._gap + count] = chars
        self._gap += count
        self._length += count

    def _move_gap(self, pos: int) -> None:
        gap = self._gap
        offset = self.capacity - self._length
        if gap < pos:
            # storage[gap:pos] := storage[offset + gap:offset + pos]
            self._storage[gap:pos] = self._storage[offset + gap : offset + pos]
        elif gap > pos:
            # storage[offset + pos:offset + gap] := storage[pos:gap]
            self._storage[offset + pos : offset + gap] = self._storage[pos:gap]
        self._gap = pos

    def _make_room(self, needed: int) -> None:
        capacity = self.capacity
        if capacity - self._length >= needed:
            return

        new_capacity = max(2 * capacity, self._length + needed)
        storage: List[str] = [""] * new_capacity
        tail = self._length - self._gap
        storage[: self._gap] = self._storage[: self._gap]
        if tail:
            storage[new_capacity - tail :] = self._storage[capacity - tail :]
        self._storage = storage


__all__ = ["GapBuffer", "CharSource", "CharSink", "DEFAULT_CAPACITY", "STREAM_CHUNK"]
