"""Editor configuration, built once at program start and passed down."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Optional

from edit_engine.buffer.gap import DEFAULT_CAPACITY, STREAM_CHUNK

if TYPE_CHECKING:
    from edit_engine.keymaps.models import Binding

ENV_PREFIX = "EDIT_ENGINE_"


def _env_int(
    name: str, default: int, environ: Optional[Mapping[str, str]] = None
) -> int:
    source = os.environ if environ is None else environ
    raw = source.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables for one editing session.

    ``page_scroll`` is the number of rows PAGEUP/PAGEDOWN move; the default
    matches a 24-row terminal less the status lines. ``extra_bindings`` are
    applied over the default keymap.
    """

    initial_capacity: int = DEFAULT_CAPACITY
    stream_chunk_size: int = STREAM_CHUNK
    page_scroll: int = 21
    extra_bindings: tuple["Binding", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.initial_capacity < 0:
            raise ValueError("initial_capacity cannot be negative")
        if self.stream_chunk_size <= 0:
            raise ValueError("stream_chunk_size must be positive")
        if self.page_scroll <= 0:
            raise ValueError("page_scroll must be positive")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: object,
    ) -> "EditorConfig":
        values: dict[str, object] = {
            "initial_capacity": _env_int(
                "INITIAL_CAPACITY", DEFAULT_CAPACITY, environ
            ),
            "stream_chunk_size": _env_int("STREAM_CHUNK", STREAM_CHUNK, environ),
            "page_scroll": _env_int("PAGE_SCROLL", 21, environ),
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


__all__ = ["EditorConfig", "ENV_PREFIX"]
