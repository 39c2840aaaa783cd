from timeline_editor.config import StageConfig
from timeline_editor.editing.facade import TimelineEditor
from timeline_editor.layout.geometry import Position
from timeline_editor.models import MissingFieldPolicy, PartialItem, TimelineItem
from timeline_editor.store.collection import ItemStore


def test_add_select_and_edit_through_form() -> None:
    editor = TimelineEditor()
    editor.mount(800)

    assert editor.add(PartialItem(attributes={"label": "intro"})) == 0
    assert editor.state.active_item == 0
    assert editor.active_form_values()["label"] == "intro"

    editor.change_field("stop", "180")
    assert editor.snapshot().items[0].stop == 180


def test_item_added_after_delete_does_not_inherit_form_values() -> None:
    editor = TimelineEditor()
    editor.add()
    editor.change_field("label", "gone")
    editor.delete_current()

    assert editor.add() == 0
    assert editor.snapshot().items[0].attributes == {}
    assert editor.active_form_values() == {"start": 0, "stop": 100, "priority": 0}


def test_drag_then_positions_reflect_snapped_layer() -> None:
    editor = TimelineEditor(store=ItemStore([TimelineItem(start=0, stop=100, priority=0)]))
    editor.drag_start(0)
    editor.drag_end(0, x=60, y=130, width=100)

    assert editor.positions() == [Position(x=60, y=120, w=100)]
    assert editor.active_form_values()["priority"] == 2


def test_falsy_policy_from_config_reaches_placement() -> None:
    editor = TimelineEditor(
        config=StageConfig(missing_field_policy=MissingFieldPolicy.FALSY),
        store=ItemStore([TimelineItem(start=0, stop=100, priority=0)]),
    )
    editor.add(PartialItem(start=0))
    added = editor.snapshot().items[1]
    assert added.start == 100


def test_duplicate_and_delete_cycle() -> None:
    editor = TimelineEditor(store=ItemStore([TimelineItem(start=10, stop=50, priority=1, attributes={"label": "x"})]))
    editor.select(0)
    assert editor.duplicate_current() == 1
    assert editor.state.active_item == 1

    editor.delete_current()
    assert len(editor.snapshot()) == 1
    assert editor.state.is_idle

    editor.delete_current()
    assert len(editor.snapshot()) == 1


def test_cursor_sink_and_frame() -> None:
    cursors: list[str] = []
    editor = TimelineEditor(cursor_sink=cursors.append)
    editor.set_cursor("move")
    assert cursors == ["move"]

    editor.mount(500)
    assert editor.pan(123) == 80
    assert editor.frame().offset_x == 80
