"""Text storage, line map, damage tracking and undo data structures."""

from .document import Damage, DamageReport, EditableDocument
from .gap import GapBuffer
from .lines import LineIndex
from .scraps import CompositeScrap, Deletion, Insertion, RangeDeletion, TypedInsertion
from .state import Cursor, EditorState, StateSnapshot
from .sync import BufferMirror, BufferSync, BufferValidationError
from .undo import Action, Scrap, UndoTimeline
from .validation import ensure_offset, ensure_range

__all__ = [
    "Action",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "CompositeScrap",
    "Cursor",
    "Damage",
    "DamageReport",
    "Deletion",
    "EditableDocument",
    "EditorState",
    "GapBuffer",
    "Insertion",
    "LineIndex",
    "RangeDeletion",
    "Scrap",
    "StateSnapshot",
    "TypedInsertion",
    "UndoTimeline",
    "ensure_offset",
    "ensure_range",
]
