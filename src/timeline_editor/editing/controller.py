"""Interaction controller: runs editor transitions and executes their effects."""

from __future__ import annotations

import logging
from collections import deque

from timeline_editor.boundaries import CursorSink, FormBinding, ItemCollection
from timeline_editor.editing.machine import MachineContext, transition
from timeline_editor.editing.state import (
    AddItem,
    AppendAccepted,
    AppendItem,
    ApplyCursor,
    ChangeField,
    ChangeForm,
    CollectionCommitted,
    DeleteCurrent,
    DragCancel,
    DragEnd,
    DragStart,
    DuplicateCurrent,
    EditorState,
    Effect,
    Event,
    LoadForm,
    Mount,
    Pan,
    RemoveItem,
    SelectItem,
    SetCursor,
    UpdateItem,
)
from timeline_editor.layout.geometry import LayerGeometry, PixelRect
from timeline_editor.layout.viewport import Viewport
from timeline_editor.models import PartialItem, TimelineSnapshot
from timeline_editor.placement.suggester import PlacementSettings

logger = logging.getLogger(__name__)


class InteractionController:
    def __init__(
        self,
        collection: ItemCollection,
        form: FormBinding,
        geometry: LayerGeometry,
        viewport: Viewport | None = None,
        placement: PlacementSettings | None = None,
        cursor_sink: CursorSink | None = None,
        form_model: str = "local.timeline",
    ) -> None:
        self._collection = collection
        self._form = form
        self._geometry = geometry
        self._viewport = viewport
        self._placement = placement or PlacementSettings()
        self._cursor_sink = cursor_sink
        self._form_model = form_model

        self._state = EditorState()
        self._queue: deque[Event] = deque()
        self._draining = False
        self._last_append_index: int | None = None

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def geometry(self) -> LayerGeometry:
        return self._geometry

    @property
    def viewport(self) -> Viewport | None:
        return self._viewport

    def snapshot(self) -> TimelineSnapshot:
        return self._collection.snapshot()

    def mount(self, width: int) -> None:
        if self._viewport is not None:
            self._viewport = self._viewport.with_width(width)
        self._dispatch(Mount(width))

    def select_item(self, index: int) -> None:
        self._dispatch(SelectItem(index))

    def drag_start(self, index: int) -> None:
        self._dispatch(DragStart(index))

    def drag_end(self, index: int, rect: PixelRect) -> None:
        self._dispatch(DragEnd(index, rect))

    def drag_cancel(self) -> None:
        self._dispatch(DragCancel())

    def change_field(self, field: str, value: object) -> None:
        self._dispatch(ChangeField(field, value))

    def add(self, partial: PartialItem | None = None) -> int | None:
        """Request a new item and return the index it will land at.

        The item becomes active only once the collection reports the append
        as committed, which may happen after this call returns.
        """
        self._last_append_index = None
        self._dispatch(AddItem(partial or PartialItem()))
        return self._last_append_index

    def duplicate_current(self) -> int | None:
        self._last_append_index = None
        self._dispatch(DuplicateCurrent())
        return self._last_append_index

    def delete_current(self) -> None:
        self._dispatch(DeleteCurrent())

    def set_cursor(self, style: str) -> None:
        self._dispatch(SetCursor(style))

    def pan(self, x: float) -> float:
        self._dispatch(Pan(x))
        return self._state.offset_x

    def _dispatch(self, event: Event) -> None:
        self._queue.append(event)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._step(self._queue.popleft())
        finally:
            self._draining = False

    def _step(self, event: Event) -> None:
        context = MachineContext(
            snapshot=self._collection.snapshot(),
            geometry=self._geometry,
            viewport=self._viewport,
            placement=self._placement,
            form_model=self._form_model,
        )
        previous = self._state
        self._state, effects = transition(previous, event, context)
        if previous.active_item != self._state.active_item:
            logger.debug("active item %s -> %s", previous.active_item, self._state.active_item)
        if not effects and isinstance(event, DragEnd):
            logger.warning("drag of item %s rejected against collection version %s", event.index, context.snapshot.version)
        for effect in effects:
            self._execute(effect)

    def _execute(self, effect: Effect) -> None:
        if isinstance(effect, LoadForm):
            self._form.load(effect.path, effect.value)
        elif isinstance(effect, ChangeForm):
            self._form.change(effect.path, effect.value)
        elif isinstance(effect, UpdateItem):
            self._collection.update(effect.index, effect.fields, item_id=effect.item_id)
        elif isinstance(effect, RemoveItem):
            self._collection.remove(effect.index)
        elif isinstance(effect, AppendItem):
            self._request_append(effect)
        elif isinstance(effect, ApplyCursor):
            if self._cursor_sink is not None:
                self._cursor_sink(effect.style)
        else:
            raise TypeError(f"Unsupported editor effect {type(effect).__name__}")

    def _request_append(self, effect: AppendItem) -> None:
        index = self._collection.append(effect.item)
        version = self._collection.requested_version
        self._last_append_index = index
        logger.debug("append requested at index %s, awaiting version %s", index, version)
        self._queue.append(AppendAccepted(item_id=effect.item.item_id, version=version))
        self._collection.when_version(version, lambda _snapshot: self._dispatch(CollectionCommitted(version)))
