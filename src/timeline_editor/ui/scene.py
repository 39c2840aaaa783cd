"""Drawable primitives for the timeline stage (background grid and items)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from timeline_editor.config import StageConfig
from timeline_editor.layout.geometry import LayerGeometry
from timeline_editor.models import TimelineItem, TimelineSnapshot

if TYPE_CHECKING:
    from timeline_editor.editing.state import EditorState

WHITE = "#ffffff"
GRAY = "#f2f2f2"
MUTED = "#8c8c8c"
OUTLINE = "#c8c8c8"
ITEM_FILL = "#d6e4f5"
ITEM_ACTIVE_FILL = "#4a90d9"
ITEM_STROKE = "#2f6fb3"

GRID_STEP = 100
GRID_CELLS = range(-1, 20)


@dataclass(frozen=True, slots=True)
class RectShape:
    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: str | None = None


@dataclass(frozen=True, slots=True)
class TextShape:
    x: float
    y: float
    text: str
    color: str
    size: int = 10


@dataclass(frozen=True, slots=True)
class LineShape:
    x: float
    y: float
    points: tuple[float, float, float, float]
    color: str
    width: int = 1


Shape = Union[RectShape, TextShape, LineShape]


@dataclass(frozen=True, slots=True)
class Frame:
    items: tuple[TimelineItem, ...]
    active_item: int | None
    width: int
    height: int
    offset_x: float
    padding: int
    background: tuple[Shape, ...] = ()
    shapes: tuple[Shape, ...] = field(default_factory=tuple)


def background_scene(config: StageConfig) -> list[Shape]:
    height = config.height
    shapes: list[Shape] = []
    for i in GRID_CELLS:
        left = i * GRID_STEP
        shapes.append(
            RectShape(x=left + 0.5, y=0, width=GRID_STEP, height=height, fill=WHITE if i % 2 == 0 else GRAY)
        )
        shapes.append(TextShape(x=left + 6, y=height - 16, text=f"{left}", color=MUTED))
        shapes.append(LineShape(x=left + 0.5, y=0, points=(0, 0, 0, height), color=GRAY))
    shapes.append(
        LineShape(x=0, y=height - 0.5, points=(config.range.min, 0, config.range.max, 0), color=OUTLINE)
    )
    return shapes


def item_scene(snapshot: TimelineSnapshot, active_item: int | None, geometry: LayerGeometry) -> list[Shape]:
    shapes: list[Shape] = []
    for index, item in enumerate(snapshot.items):
        position = geometry.calc_position(item.start, item.stop, item.priority)
        active = index == active_item
        shapes.append(
            RectShape(
                x=position.x,
                y=position.y,
                width=max(position.w, 1),
                height=geometry.layer_height,
                fill=ITEM_ACTIVE_FILL if active else ITEM_FILL,
                stroke=ITEM_STROKE,
            )
        )
        label = str(item.attributes.get("label", ""))
        if label:
            shapes.append(
                TextShape(
                    x=position.x + 6,
                    y=position.y + geometry.layer_height / 2 + 4,
                    text=label,
                    color=WHITE if active else ITEM_STROKE,
                    size=11,
                )
            )
    return shapes


def build_frame(snapshot: TimelineSnapshot, state: EditorState, config: StageConfig) -> Frame:
    geometry = LayerGeometry.from_config(config)
    return Frame(
        items=snapshot.items,
        active_item=state.active_item,
        width=state.viewport_width,
        height=config.height,
        offset_x=state.offset_x,
        padding=config.padding,
        background=tuple(background_scene(config)),
        shapes=tuple(item_scene(snapshot, state.active_item, geometry)),
    )
