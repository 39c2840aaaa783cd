"""Timeline item models shared by layout, placement and editing."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping
from uuid import uuid4

GEOMETRY_FIELDS: tuple[str, ...] = ("start", "stop", "priority")


class MissingFieldPolicy(str, Enum):
    UNDEFINED = "undefined"
    FALSY = "falsy"


def _new_item_id() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True)
class TimelineItem:
    start: int
    stop: int
    priority: int
    attributes: Mapping[str, Any] = field(default_factory=dict)
    item_id: str = field(default_factory=_new_item_id)

    @property
    def length(self) -> int:
        return self.stop - self.start

    def with_fields(self, fields: Mapping[str, Any]) -> TimelineItem:
        geometry = {key: int(value) for key, value in fields.items() if key in GEOMETRY_FIELDS}
        extra = {key: value for key, value in fields.items() if key not in GEOMETRY_FIELDS}
        attributes = {**self.attributes, **extra} if extra else self.attributes
        return replace(self, attributes=attributes, **geometry)

    def form_values(self) -> dict[str, Any]:
        return {**self.attributes, "start": self.start, "stop": self.stop, "priority": self.priority}


@dataclass(slots=True)
class PartialItem:
    start: int | None = None
    stop: int | None = None
    priority: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> PartialItem:
        attributes = {key: value for key, value in data.items() if key not in GEOMETRY_FIELDS}
        return PartialItem(
            start=data.get("start"),
            stop=data.get("stop"),
            priority=data.get("priority"),
            attributes=attributes,
        )


@dataclass(frozen=True, slots=True)
class TimelineSnapshot:
    items: tuple[TimelineItem, ...] = ()
    version: int = 0

    def __len__(self) -> int:
        return len(self.items)

    def get(self, index: int | None) -> TimelineItem | None:
        if index is None or index < 0 or index >= len(self.items):
            return None
        return self.items[index]

    def index_of(self, item_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.item_id == item_id:
                return index
        return None
