"""Public editor facade wiring configuration, store, form and controller."""

from __future__ import annotations

from timeline_editor.boundaries import CursorSink, item_path
from timeline_editor.config import StageConfig
from timeline_editor.editing.controller import InteractionController
from timeline_editor.editing.state import EditorState
from timeline_editor.layout.geometry import LayerGeometry, PixelRect, Position
from timeline_editor.layout.viewport import Viewport
from timeline_editor.models import PartialItem, TimelineSnapshot
from timeline_editor.placement.suggester import PlacementSettings
from timeline_editor.store.collection import ItemStore
from timeline_editor.store.form import FormModel, bind_form_to_collection
from timeline_editor.ui.scene import Frame, build_frame


class TimelineEditor:
    def __init__(
        self,
        config: StageConfig | None = None,
        store: ItemStore | None = None,
        form: FormModel | None = None,
        cursor_sink: CursorSink | None = None,
    ) -> None:
        self.config = config or StageConfig()
        self.store = store or ItemStore()
        self.form = form or FormModel(model=self.config.form_model)
        bind_form_to_collection(self.form, self.store)
        self.geometry = LayerGeometry.from_config(self.config)
        self._controller = InteractionController(
            collection=self.store,
            form=self.form,
            geometry=self.geometry,
            viewport=Viewport.from_config(self.config, width=0),
            placement=PlacementSettings(
                default_length=self.config.default_length,
                policy=self.config.missing_field_policy,
            ),
            cursor_sink=cursor_sink,
            form_model=self.form.model,
        )

    @property
    def state(self) -> EditorState:
        return self._controller.state

    @property
    def controller(self) -> InteractionController:
        return self._controller

    def snapshot(self) -> TimelineSnapshot:
        return self.store.snapshot()

    def layer_count(self) -> int:
        return self.geometry.layer_count()

    def positions(self) -> list[Position]:
        return [
            self.geometry.calc_position(item.start, item.stop, item.priority) for item in self.snapshot().items
        ]

    def frame(self) -> Frame:
        return build_frame(self.snapshot(), self.state, self.config)

    def active_form_values(self) -> dict[str, object]:
        if self.state.active_item is None:
            return {}
        return self.form.values_for(item_path(self.form.model, self.state.active_item))

    def mount(self, width: int) -> None:
        self._controller.mount(width)

    def select(self, index: int) -> None:
        self._controller.select_item(index)

    def drag_start(self, index: int) -> None:
        self._controller.drag_start(index)

    def drag_end(self, index: int, x: float, y: float, width: float) -> None:
        self._controller.drag_end(index, PixelRect(x=x, y=y, width=width))

    def drag_cancel(self) -> None:
        self._controller.drag_cancel()

    def change_field(self, field: str, value: object) -> None:
        self._controller.change_field(field, value)

    def add(self, partial: PartialItem | None = None) -> int | None:
        return self._controller.add(partial)

    def duplicate_current(self) -> int | None:
        return self._controller.duplicate_current()

    def delete_current(self) -> None:
        self._controller.delete_current()

    def set_cursor(self, style: str) -> None:
        self._controller.set_cursor(style)

    def pan(self, x: float) -> float:
        return self._controller.pan(x)
