from timeline_editor.config import StageConfig
from timeline_editor.editing.state import EditorState
from timeline_editor.layout.geometry import LayerGeometry
from timeline_editor.models import TimelineItem, TimelineSnapshot
from timeline_editor.ui.scene import (
    GRAY,
    ITEM_ACTIVE_FILL,
    ITEM_FILL,
    WHITE,
    LineShape,
    RectShape,
    TextShape,
    background_scene,
    build_frame,
    item_scene,
)


def test_background_has_alternating_hundred_unit_stripes() -> None:
    shapes = background_scene(StageConfig())
    rects = [shape for shape in shapes if isinstance(shape, RectShape)]
    labels = [shape.text for shape in shapes if isinstance(shape, TextShape)]

    assert len(rects) == 21
    assert rects[0].x == -99.5
    assert rects[0].fill == GRAY
    assert rects[1].fill == WHITE
    assert labels[0] == "-100"
    assert labels[-1] == "1900"


def test_background_baseline_spans_configured_range() -> None:
    baseline = background_scene(StageConfig())[-1]
    assert isinstance(baseline, LineShape)
    assert baseline.y == 199.5
    assert baseline.points == (-100, 0, 2000, 0)


def test_item_scene_highlights_active_item() -> None:
    config = StageConfig()
    geometry = LayerGeometry.from_config(config)
    snapshot = TimelineSnapshot(
        items=(
            TimelineItem(start=50, stop=150, priority=2, attributes={"label": "a"}),
            TimelineItem(start=0, stop=40, priority=0),
        )
    )

    shapes = item_scene(snapshot, active_item=0, geometry=geometry)
    rects = [shape for shape in shapes if isinstance(shape, RectShape)]

    assert (rects[0].x, rects[0].y, rects[0].width, rects[0].height) == (50, 120, 100, 30)
    assert rects[0].fill == ITEM_ACTIVE_FILL
    assert rects[1].fill == ITEM_FILL
    assert [shape.text for shape in shapes if isinstance(shape, TextShape)] == ["a"]


def test_build_frame_carries_items_and_active_index() -> None:
    snapshot = TimelineSnapshot(items=(TimelineItem(start=0, stop=10, priority=0),), version=3)
    frame = build_frame(snapshot, EditorState(active_item=0, viewport_width=640, offset_x=-20), StageConfig())

    assert frame.items == snapshot.items
    assert frame.active_item == 0
    assert (frame.width, frame.height, frame.offset_x) == (640, 200, -20)
    assert frame.background
    assert frame.shapes
