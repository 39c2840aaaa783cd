import pytest

from timeline_editor.models import MissingFieldPolicy, PartialItem, TimelineItem
from timeline_editor.placement.suggester import last_entry, partial_from_item, suggest_position


def _fields(item: TimelineItem) -> tuple[int, int, int]:
    return item.start, item.stop, item.priority


def test_empty_timeline_starts_at_zero_on_first_layer() -> None:
    item = suggest_position([], PartialItem(), layer_count=3, default_length=100)
    assert _fields(item) == (0, 100, 0)


def test_new_item_follows_last_entry_on_next_layer() -> None:
    existing = [TimelineItem(start=0, stop=100, priority=0)]
    item = suggest_position(existing, PartialItem(), layer_count=3)
    assert _fields(item) == (100, 200, 1)


def test_priority_wraps_when_layers_are_exhausted() -> None:
    existing = [TimelineItem(start=0, stop=100, priority=2)]
    item = suggest_position(existing, PartialItem(), layer_count=3)
    assert item.priority == 0


def test_last_entry_sorts_by_start_then_priority() -> None:
    existing = [
        TimelineItem(start=500, stop=550, priority=0),
        TimelineItem(start=0, stop=80, priority=0),
        TimelineItem(start=500, stop=520, priority=1),
    ]
    entry = last_entry(existing)
    assert (entry.stop, entry.priority) == (520, 1)

    item = suggest_position(existing, PartialItem(), layer_count=3)
    assert _fields(item) == (520, 620, 2)


def test_last_entry_keeps_collection_order_for_equal_keys() -> None:
    existing = [
        TimelineItem(start=0, stop=40, priority=1),
        TimelineItem(start=0, stop=90, priority=1),
    ]
    assert last_entry(existing).stop == 90


def test_missing_stop_is_measured_from_resolved_start() -> None:
    existing = [TimelineItem(start=0, stop=100, priority=0)]
    item = suggest_position(existing, PartialItem(start=300), layer_count=3, default_length=50)
    assert _fields(item) == (300, 350, 1)


def test_present_fields_are_preserved() -> None:
    existing = [TimelineItem(start=0, stop=100, priority=0)]
    partial = PartialItem(start=10, stop=20, priority=2, attributes={"label": "intro"})
    item = suggest_position(existing, partial, layer_count=3)
    assert _fields(item) == (10, 20, 2)
    assert item.attributes == {"label": "intro"}


def test_zero_is_a_present_value_by_default() -> None:
    existing = [TimelineItem(start=0, stop=100, priority=1)]
    partial = PartialItem(start=0, stop=0, priority=0)
    item = suggest_position(existing, partial, layer_count=3)
    assert _fields(item) == (0, 0, 0)


def test_falsy_policy_treats_zero_as_missing() -> None:
    existing = [TimelineItem(start=0, stop=100, priority=1)]
    partial = PartialItem(start=0, stop=0, priority=0)
    item = suggest_position(existing, partial, layer_count=3, policy=MissingFieldPolicy.FALSY)
    assert _fields(item) == (100, 200, 2)


def test_suggestion_does_not_mutate_inputs() -> None:
    existing = [TimelineItem(start=50, stop=60, priority=0), TimelineItem(start=0, stop=10, priority=0)]
    partial = PartialItem(attributes={"label": "x"})
    item = suggest_position(existing, partial, layer_count=3)
    assert [entry.start for entry in existing] == [50, 0]
    assert partial.start is None
    item.attributes["label"] = "changed"  # type: ignore[index]
    assert partial.attributes == {"label": "x"}


def test_duplicate_partial_keeps_attributes_and_clears_geometry() -> None:
    partial = partial_from_item(TimelineItem(start=10, stop=50, priority=1, attributes={"label": "x"}))
    assert (partial.start, partial.stop, partial.priority) == (None, None, None)
    assert partial.attributes == {"label": "x"}


def test_layer_count_must_be_positive() -> None:
    with pytest.raises(ValueError):
        suggest_position([], PartialItem(), layer_count=0)
