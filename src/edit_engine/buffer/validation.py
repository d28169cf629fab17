"""Precondition checks shared by the gap buffer and line index."""

from __future__ import annotations

from .sync import BufferValidationError


def ensure_offset(offset: int, limit: int, *, inclusive: bool = False) -> int:
    """Check ``0 <= offset < limit`` (``<= limit`` when ``inclusive``)."""

    upper_ok = offset <= limit if inclusive else offset < limit
    if offset < 0 or not upper_ok:
        raise BufferValidationError(
            f"Offset {offset} out of range for length {limit}", offset=offset
        )
    return offset


def ensure_range(start: int, count: int, limit: int) -> None:
    if count < 0:
        raise BufferValidationError(f"Negative count {count}", offset=start)
    if start < 0 or start + count > limit:
        raise BufferValidationError(
            f"Range [{start}, {start + count}) out of range for length {limit}",
            offset=start,
        )


def ensure_capacity(capacity: int) -> int:
    if capacity < 0:
        raise BufferValidationError(f"Negative capacity {capacity}")
    return capacity
