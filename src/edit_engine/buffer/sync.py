"""Adapter boundary types for syncing documents with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Cursor


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the renderer should show."""

    text: str
    cursor: Cursor
    damage: int
    line: Optional[tuple[int, str]] = None
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """Protocol describing how adapters exchange data with the session."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest snapshot the host should render."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-bounds offset or count."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
