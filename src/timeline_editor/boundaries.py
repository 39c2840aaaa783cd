"""Contracts between the interaction controller and its collaborators."""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Protocol

from timeline_editor.models import TimelineItem, TimelineSnapshot

CommitCallback = Callable[[TimelineSnapshot], None]
CursorSink = Callable[[str], None]

_ITEM_PATH = re.compile(r"^(?P<model>.+)\[(?P<index>\d+)\](?:\.(?P<field>\w+))?$")


class ItemCollection(Protocol):
    @property
    def version(self) -> int: ...

    @property
    def requested_version(self) -> int: ...

    def snapshot(self) -> TimelineSnapshot: ...

    def append(self, item: TimelineItem) -> int: ...

    def update(self, index: int, fields: Mapping[str, Any], item_id: str | None = None) -> None: ...

    def remove(self, index: int) -> None: ...

    def when_version(self, version: int, callback: CommitCallback) -> None: ...


class FormBinding(Protocol):
    def load(self, path: str, value: Any) -> None: ...

    def change(self, path: str, value: Any) -> None: ...


def item_path(model: str, index: int, field: str | None = None) -> str:
    path = f"{model}[{index}]"
    if field:
        path = f"{path}.{field}"
    return path


def parse_item_path(path: str) -> tuple[str, int, str | None] | None:
    match = _ITEM_PATH.match(path)
    if match is None:
        return None
    return match.group("model"), int(match.group("index")), match.group("field")
