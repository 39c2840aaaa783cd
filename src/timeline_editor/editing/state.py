"""Interaction state value object plus the events and effects it exchanges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from timeline_editor.layout.geometry import PixelRect
from timeline_editor.models import PartialItem, TimelineItem

DEFAULT_CURSOR = "default"


@dataclass(frozen=True, slots=True)
class DragSession:
    index: int
    item_id: str
    version: int


@dataclass(frozen=True, slots=True)
class PendingActivation:
    item_id: str
    version: int


@dataclass(frozen=True, slots=True)
class EditorState:
    active_item: int | None = None
    viewport_width: int = 0
    offset_x: float = 0.0
    cursor: str = DEFAULT_CURSOR
    drag: DragSession | None = None
    pending: tuple[PendingActivation, ...] = ()

    @property
    def is_idle(self) -> bool:
        return self.active_item is None


# Events ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Mount:
    width: int


@dataclass(frozen=True, slots=True)
class SelectItem:
    index: int


@dataclass(frozen=True, slots=True)
class DragStart:
    index: int


@dataclass(frozen=True, slots=True)
class DragEnd:
    index: int
    rect: PixelRect


@dataclass(frozen=True, slots=True)
class DragCancel:
    pass


@dataclass(frozen=True, slots=True)
class ChangeField:
    field: str
    value: Any


@dataclass(frozen=True, slots=True)
class AddItem:
    partial: PartialItem = field(default_factory=PartialItem)


@dataclass(frozen=True, slots=True)
class DuplicateCurrent:
    pass


@dataclass(frozen=True, slots=True)
class DeleteCurrent:
    pass


@dataclass(frozen=True, slots=True)
class AppendAccepted:
    item_id: str
    version: int


@dataclass(frozen=True, slots=True)
class CollectionCommitted:
    version: int


@dataclass(frozen=True, slots=True)
class SetCursor:
    style: str


@dataclass(frozen=True, slots=True)
class Pan:
    x: float


Event = Union[
    Mount,
    SelectItem,
    DragStart,
    DragEnd,
    DragCancel,
    ChangeField,
    AddItem,
    DuplicateCurrent,
    DeleteCurrent,
    AppendAccepted,
    CollectionCommitted,
    SetCursor,
    Pan,
]


# Effects ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LoadForm:
    path: str
    value: Any


@dataclass(frozen=True, slots=True)
class ChangeForm:
    path: str
    value: Any


@dataclass(frozen=True, slots=True)
class AppendItem:
    item: TimelineItem


@dataclass(frozen=True, slots=True)
class UpdateItem:
    index: int
    fields: Mapping[str, Any]
    item_id: str | None = None


@dataclass(frozen=True, slots=True)
class RemoveItem:
    index: int


@dataclass(frozen=True, slots=True)
class ApplyCursor:
    style: str


Effect = Union[LoadForm, ChangeForm, AppendItem, UpdateItem, RemoveItem, ApplyCursor]
