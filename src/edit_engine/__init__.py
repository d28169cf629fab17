"""Gap-buffer text engine with line indexing and undo/redo."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "config",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
