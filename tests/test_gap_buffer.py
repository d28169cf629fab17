from __future__ import annotations

import io
import random
from typing import List

import pytest

from edit_engine.buffer import BufferValidationError, GapBuffer


class RecordingSink:
    def __init__(self) -> None:
        self.writes: List[str] = []

    def write(self, data: str) -> int:
        self.writes.append(data)
        return len(data)


class TrickleReader:
    """Returns at most ``step`` characters per read, then optionally fails."""

    def __init__(self, text: str, *, step: int = 3, fail_after: int | None = None):
        self._text = text
        self._pos = 0
        self._step = step
        self._fail_after = fail_after

    def read(self, size: int = -1) -> str:
        if self._fail_after is not None and self._pos >= self._fail_after:
            raise OSError("device went away")
        chunk = self._text[self._pos : self._pos + min(size, self._step)]
        self._pos += len(chunk)
        return chunk


def assert_gap_invariant(buf: GapBuffer, expected: str) -> None:
    assert 0 <= buf.gap <= len(buf) <= buf.capacity
    assert buf.text() == expected
    assert "".join(buf) == expected
    for i, ch in enumerate(expected):
        assert buf.char_at(i) == ch


def test_insert_string_and_char_at() -> None:
    buf = GapBuffer(8)

    buf.insert_string(0, "hello")
    buf.insert_char(5, "!")
    buf.insert_char(0, ">")

    assert_gap_invariant(buf, ">hello!")


def test_growth_doubles_or_fits_exactly() -> None:
    buf = GapBuffer(4)

    buf.insert_string(0, "abcdefghij")
    assert buf.capacity == 10

    buf.insert_char(5, "-")
    assert buf.capacity == 20
    assert_gap_invariant(buf, "abcde-fghij")


def test_zero_capacity_buffer_grows() -> None:
    buf = GapBuffer(0)

    buf.insert_char(0, "x")

    assert buf.capacity == 1
    assert_gap_invariant(buf, "x")


def test_growth_preserves_gap_position_and_suffix() -> None:
    buf = GapBuffer(6)
    buf.insert_string(0, "abcdef")
    buf.delete_char(2)  # gap now sits at offset 2

    buf.insert_string(2, "XYZW")

    assert buf.gap == 6
    assert_gap_invariant(buf, "abXYZWdef")


def test_delete_char_and_range() -> None:
    buf = GapBuffer.from_text("abcdefgh")

    buf.delete_char(0)
    buf.delete_range(2, 3)

    assert_gap_invariant(buf, "bcgh")


def test_clear_keeps_capacity() -> None:
    buf = GapBuffer.from_text("some text")
    capacity = buf.capacity

    buf.clear()

    assert len(buf) == 0
    assert buf.capacity == capacity
    assert buf.text() == ""


def test_get_range_is_an_independent_copy() -> None:
    buf = GapBuffer.from_text("abcdef")

    copied = buf.get_range(1, 3)
    buf.delete_range(0, 6)
    buf.insert_string(0, "zzzzzzzzzzzzzzzzzzzz")

    assert copied == "bcd"


def test_reads_do_not_move_the_gap() -> None:
    buf = GapBuffer(32)
    buf.insert_string(0, "abcdef")
    buf.insert_char(3, "-")
    gap = buf.gap

    assert buf.get_range(0, 7) == "abc-def"
    assert buf.get_range(2, 4) == "c-de"
    list(buf)
    buf.write_out(RecordingSink())

    assert buf.gap == gap


def test_write_out_uses_two_segments_at_most() -> None:
    buf = GapBuffer(32)
    buf.insert_string(0, "abcdef")
    buf.insert_char(3, "-")
    sink = RecordingSink()

    buf.write_out(sink)

    assert sink.writes == ["abc-", "def"]


def test_write_out_single_segment_when_gap_at_end() -> None:
    buf = GapBuffer.from_text("abc")
    sink = RecordingSink()

    buf.write_out(sink)

    assert sink.writes == ["abc"]


def test_write_out_empty_buffer_writes_nothing() -> None:
    sink = RecordingSink()

    GapBuffer(4).write_out(sink)

    assert sink.writes == []


def test_insert_range_from_other_buffer() -> None:
    source = GapBuffer.from_text("0123456789")
    target = GapBuffer.from_text("ab")

    target.insert_range(1, source, 3, 4)

    assert_gap_invariant(target, "a3456b")


def test_insert_range_rejects_self_insertion() -> None:
    buf = GapBuffer.from_text("abc")

    with pytest.raises(BufferValidationError):
        buf.insert_range(0, buf, 0, 1)


def test_get_range_into_replaces_target() -> None:
    source = GapBuffer.from_text("hello world")
    target = GapBuffer.from_text("junk")

    source.get_range_into(6, 5, target)

    assert target.text() == "world"


def test_insert_from_stream_reads_everything() -> None:
    buf = GapBuffer.from_text("<>")
    text = "x" * 10000 + "\nend"

    count = buf.insert_from_stream(1, io.StringIO(text), chunk_size=512)

    assert count == len(text)
    assert buf.gap == 1 + len(text)
    assert buf.text() == "<" + text + ">"


def test_insert_from_stream_tolerates_short_reads() -> None:
    buf = GapBuffer(2)
    reader = TrickleReader("abcdefghij", step=3)

    count = buf.insert_from_stream(0, reader, chunk_size=4)

    assert count == 10
    assert_gap_invariant(buf, "abcdefghij")


def test_insert_from_stream_keeps_partial_content_on_error() -> None:
    buf = GapBuffer(4)

    with pytest.raises(OSError):
        buf.insert_from_stream(0, TrickleReader("abcdefghij", step=2, fail_after=6))

    assert_gap_invariant(buf, "abcdef")


@pytest.mark.parametrize(
    "operation",
    [
        lambda buf: buf.char_at(3),
        lambda buf: buf.char_at(-1),
        lambda buf: buf.insert_char(4, "x"),
        lambda buf: buf.insert_string(-1, "x"),
        lambda buf: buf.delete_char(3),
        lambda buf: buf.delete_range(1, 3),
        lambda buf: buf.delete_range(0, -1),
        lambda buf: buf.get_range(2, 2),
        lambda buf: buf.insert_char(0, "xy"),
    ],
)
def test_precondition_violations_fail_fast(operation) -> None:
    buf = GapBuffer.from_text("abc")

    with pytest.raises(BufferValidationError):
        operation(buf)

    assert buf.text() == "abc"


def test_random_edits_match_reference_list() -> None:
    rng = random.Random(1234)
    buf = GapBuffer(1)
    reference: List[str] = []

    for _ in range(2000):
        choice = rng.random()
        if choice < 0.45 or not reference:
            pos = rng.randint(0, len(reference))
            ch = rng.choice("ab\ncd")
            buf.insert_char(pos, ch)
            reference.insert(pos, ch)
        elif choice < 0.6:
            pos = rng.randint(0, len(reference))
            text = "".join(rng.choice("xyz\n") for _ in range(rng.randint(0, 6)))
            buf.insert_string(pos, text)
            reference[pos:pos] = list(text)
        elif choice < 0.85:
            pos = rng.randrange(len(reference))
            buf.delete_char(pos)
            del reference[pos]
        else:
            start = rng.randrange(len(reference))
            count = rng.randint(0, len(reference) - start)
            buf.delete_range(start, count)
            del reference[start : start + count]

        assert 0 <= buf.gap <= len(buf) <= buf.capacity

    sink = RecordingSink()
    buf.write_out(sink)
    assert "".join(sink.writes) == "".join(reference)
