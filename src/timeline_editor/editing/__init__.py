"""Interaction editing domain exports."""

from timeline_editor.boundaries import FormBinding, ItemCollection, item_path, parse_item_path
from timeline_editor.editing.controller import InteractionController
from timeline_editor.editing.facade import TimelineEditor
from timeline_editor.editing.machine import MachineContext, transition
from timeline_editor.editing.state import DragSession, EditorState, PendingActivation

__all__ = [
    "DragSession",
    "EditorState",
    "FormBinding",
    "InteractionController",
    "ItemCollection",
    "MachineContext",
    "PendingActivation",
    "TimelineEditor",
    "item_path",
    "parse_item_path",
    "transition",
]
