"""Explicit keymap table and default bindings."""

from .models import ActionRef, Binding, EditorCommand, KeyStroke
from .keymap import Keymap, KeymapConflictError, KeymapStats
from .defaults import build_default_keymap, load_default_keymap

__all__ = [
    "ActionRef",
    "Binding",
    "EditorCommand",
    "KeyStroke",
    "Keymap",
    "KeymapConflictError",
    "KeymapStats",
    "build_default_keymap",
    "load_default_keymap",
]
