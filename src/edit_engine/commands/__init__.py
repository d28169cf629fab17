"""Editing commands and the executor that records them for undo."""

from .editing import (
    Direction,
    beep,
    delete,
    insert_char,
    insert_text,
    kill_line,
    move,
    quit_editor,
    redo,
    replace_file,
    save,
    undo,
)
from .executor import CommandExecutor

__all__ = [
    "CommandExecutor",
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
