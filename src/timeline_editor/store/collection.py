"""Versioned in-memory item collection used as the editor's backing store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from timeline_editor.boundaries import CommitCallback
from timeline_editor.models import TimelineItem, TimelineSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[TimelineSnapshot], None]


@dataclass(frozen=True, slots=True)
class _Request:
    kind: str  # "append" | "update" | "remove"
    index: int
    item: TimelineItem | None = None
    fields: Mapping[str, Any] | None = None
    item_id: str | None = None


class ItemStore:
    def __init__(self, items: Iterable[TimelineItem] = (), auto_commit: bool = True) -> None:
        self._items: list[TimelineItem] = list(items)
        self._version = 0
        self._auto_commit = auto_commit
        self._queue: list[_Request] = []
        self._projected_length = len(self._items)
        self._listeners: list[Listener] = []
        self._waiters: list[tuple[int, CommitCallback]] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def requested_version(self) -> int:
        return self._version + len(self._queue)

    def snapshot(self) -> TimelineSnapshot:
        return TimelineSnapshot(items=tuple(self._items), version=self._version)

    def append(self, item: TimelineItem) -> int:
        index = self._projected_length
        self._projected_length += 1
        self._enqueue(_Request(kind="append", index=index, item=item))
        return index

    def update(self, index: int, fields: Mapping[str, Any], item_id: str | None = None) -> None:
        """Queue a field update; ``item_id``, when given, wins over ``index`` at commit."""
        self._enqueue(_Request(kind="update", index=index, fields=dict(fields), item_id=item_id))

    def remove(self, index: int) -> None:
        if 0 <= index < self._projected_length:
            self._projected_length -= 1
        self._enqueue(_Request(kind="remove", index=index))

    def commit(self) -> int:
        """Apply queued requests in order; returns the number applied."""
        applied = 0
        while self._queue:
            request = self._queue.pop(0)
            self._apply(request)
            self._version += 1
            applied += 1
        if applied:
            self._notify()
        return applied

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def when_version(self, version: int, callback: CommitCallback) -> None:
        if self._version >= version:
            callback(self.snapshot())
            return
        self._waiters.append((version, callback))

    def _enqueue(self, request: _Request) -> None:
        self._queue.append(request)
        if self._auto_commit:
            self.commit()

    def _apply(self, request: _Request) -> None:
        if request.kind == "append" and request.item is not None:
            self._items.append(request.item)
            return
        index = request.index
        if request.item_id is not None:
            index = next((i for i, item in enumerate(self._items) if item.item_id == request.item_id), -1)
            if index < 0:
                logger.warning("ignoring %s of removed item %s", request.kind, request.item_id)
                return
        if not 0 <= index < len(self._items):
            logger.warning("ignoring %s of missing item index %s", request.kind, index)
            return
        if request.kind == "update" and request.fields is not None:
            self._items[index] = self._items[index].with_fields(request.fields)
        elif request.kind == "remove":
            del self._items[index]

    def _notify(self) -> None:
        snapshot = self.snapshot()
        ready = [callback for version, callback in self._waiters if version <= self._version]
        self._waiters = [(version, callback) for version, callback in self._waiters if version > self._version]
        for listener in list(self._listeners):
            listener(snapshot)
        for callback in ready:
            callback(snapshot)
