"""Placement suggestion exports."""

from timeline_editor.placement.suggester import (
    DEFAULT_LENGTH,
    PlacementSettings,
    last_entry,
    partial_from_item,
    suggest_position,
)

__all__ = [
    "DEFAULT_LENGTH",
    "PlacementSettings",
    "last_entry",
    "partial_from_item",
    "suggest_position",
]
