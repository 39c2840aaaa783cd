from timeline_editor.models import TimelineItem, TimelineSnapshot
from timeline_editor.store.collection import ItemStore


def _item(start: int, stop: int, priority: int = 0, **attributes: object) -> TimelineItem:
    return TimelineItem(start=start, stop=stop, priority=priority, attributes=attributes)


def test_snapshot_is_immutable_view() -> None:
    store = ItemStore([_item(0, 100)])
    snapshot = store.snapshot()
    store.append(_item(100, 200))

    assert len(snapshot) == 1
    assert len(store.snapshot()) == 2
    assert store.snapshot().version == 1


def test_deferred_requests_become_visible_on_commit() -> None:
    store = ItemStore(auto_commit=False)
    assert store.append(_item(0, 100)) == 0
    assert store.append(_item(100, 200)) == 1
    assert store.requested_version == 2
    assert len(store.snapshot()) == 0

    assert store.commit() == 2
    assert store.version == 2
    assert [item.start for item in store.snapshot().items] == [0, 100]


def test_append_index_accounts_for_queued_removal() -> None:
    store = ItemStore([_item(0, 100), _item(100, 200)], auto_commit=False)
    store.remove(0)
    assert store.append(_item(200, 300)) == 1
    store.commit()
    assert [item.start for item in store.snapshot().items] == [100, 200]


def test_update_merges_geometry_and_attributes() -> None:
    store = ItemStore([_item(0, 100, label="a")])
    store.update(0, {"start": "20", "label": "b", "color": "red"})

    item = store.snapshot().items[0]
    assert (item.start, item.stop) == (20, 100)
    assert item.attributes == {"label": "b", "color": "red"}


def test_update_by_id_follows_item_past_queued_removal() -> None:
    first, second, third = _item(0, 100), _item(100, 200), _item(200, 300)
    store = ItemStore([first, second, third], auto_commit=False)
    store.remove(0)
    store.update(2, {"start": 500}, item_id=third.item_id)
    store.update(1, {"start": 700}, item_id=first.item_id)
    store.commit()

    assert [(item.item_id, item.start) for item in store.snapshot().items] == [
        (second.item_id, 100),
        (third.item_id, 500),
    ]
    assert store.version == 3


def test_out_of_range_requests_are_skipped_but_versioned() -> None:
    store = ItemStore([_item(0, 100)])
    store.update(5, {"start": 1})
    store.remove(7)

    assert store.version == 2
    assert store.snapshot().items[0].start == 0


def test_when_version_fires_once_version_is_reached() -> None:
    store = ItemStore(auto_commit=False)
    seen: list[int] = []
    store.when_version(1, lambda snapshot: seen.append(snapshot.version))
    store.when_version(0, lambda snapshot: seen.append(-1))
    assert seen == [-1]

    store.append(_item(0, 100))
    assert seen == [-1]
    store.commit()
    store.append(_item(100, 200))
    store.commit()
    assert seen == [-1, 1]


def test_subscribe_and_unsubscribe() -> None:
    store = ItemStore()
    received: list[TimelineSnapshot] = []
    unsubscribe = store.subscribe(received.append)

    store.append(_item(0, 10))
    unsubscribe()
    store.append(_item(10, 20))

    assert len(received) == 1
    assert received[0].version == 1


def test_commit_without_requests_does_not_bump_version() -> None:
    store = ItemStore(auto_commit=False)
    assert store.commit() == 0
    assert store.version == 0
