"""Fill in missing start/stop/layer for new timeline items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from timeline_editor.models import MissingFieldPolicy, PartialItem, TimelineItem

DEFAULT_LENGTH = 100


@dataclass(frozen=True, slots=True)
class PlacementSettings:
    default_length: int = DEFAULT_LENGTH
    policy: MissingFieldPolicy = MissingFieldPolicy.UNDEFINED


@dataclass(frozen=True, slots=True)
class _LastEntry:
    stop: int
    priority: int


_EMPTY_TIMELINE = _LastEntry(stop=0, priority=-1)


def _is_missing(value: Any, policy: MissingFieldPolicy) -> bool:
    if value is None:
        return True
    return policy == MissingFieldPolicy.FALSY and not value


def last_entry(items: Sequence[TimelineItem]) -> _LastEntry:
    if not items:
        return _EMPTY_TIMELINE
    # sorted() is stable, so equal (start, priority) keys keep collection order.
    latest = sorted(items, key=lambda item: (item.start, item.priority))[-1]
    return _LastEntry(stop=latest.stop, priority=latest.priority)


def suggest_position(
    items: Sequence[TimelineItem],
    partial: PartialItem,
    layer_count: int,
    default_length: int = DEFAULT_LENGTH,
    policy: MissingFieldPolicy = MissingFieldPolicy.UNDEFINED,
) -> TimelineItem:
    if layer_count <= 0:
        raise ValueError("layer_count must be positive")
    previous = last_entry(items)

    start = previous.stop if _is_missing(partial.start, policy) else int(partial.start)
    stop = start + default_length if _is_missing(partial.stop, policy) else int(partial.stop)
    if _is_missing(partial.priority, policy):
        priority = (previous.priority + 1) % layer_count
    else:
        priority = int(partial.priority)

    return TimelineItem(start=start, stop=stop, priority=priority, attributes=dict(partial.attributes))


def partial_from_item(item: TimelineItem) -> PartialItem:
    return PartialItem(attributes=dict(item.attributes))
