"""Editing session, key input and event bus."""

from .base import CommandResult, EventBus, KeyInput
from .editor import EditorSession

__all__ = ["CommandResult", "EditorSession", "EventBus", "KeyInput"]
