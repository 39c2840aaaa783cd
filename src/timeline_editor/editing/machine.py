"""Pure ``(state, event) -> (state, effects)`` transitions for the stage editor.

Every handler receives the collection snapshot the event is evaluated
against and never mutates it; mutations leave as effects for the controller
to execute. Calls that make no sense in the current state (editing a field
or deleting while nothing is selected) are no-ops rather than errors, so
callers never need to track state themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from timeline_editor.boundaries import item_path
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
    DragSession,
    DragStart,
    DuplicateCurrent,
    EditorState,
    Effect,
    Event,
    LoadForm,
    Mount,
    Pan,
    PendingActivation,
    RemoveItem,
    SelectItem,
    SetCursor,
    UpdateItem,
)
from timeline_editor.layout.geometry import LayerGeometry
from timeline_editor.layout.viewport import Viewport
from timeline_editor.models import GEOMETRY_FIELDS, PartialItem, TimelineSnapshot
from timeline_editor.placement.suggester import PlacementSettings, partial_from_item, suggest_position

Transition = tuple[EditorState, list[Effect]]


@dataclass(frozen=True, slots=True)
class MachineContext:
    snapshot: TimelineSnapshot
    geometry: LayerGeometry
    viewport: Viewport | None = None
    placement: PlacementSettings = PlacementSettings()
    form_model: str = "local.timeline"


def transition(state: EditorState, event: Event, context: MachineContext) -> Transition:
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported editor event {type(event).__name__}")
    return handler(state, event, context)


def _mount(state: EditorState, event: Mount, _context: MachineContext) -> Transition:
    return replace(state, viewport_width=max(int(event.width), 0)), []


def _activate(state: EditorState, index: int, context: MachineContext) -> Transition:
    item = context.snapshot.get(index)
    if item is None or index == state.active_item:
        return state, []
    effects: list[Effect] = [LoadForm(item_path(context.form_model, index), item.form_values())]
    return replace(state, active_item=index), effects


def _select_item(state: EditorState, event: SelectItem, context: MachineContext) -> Transition:
    return _activate(state, event.index, context)


def _drag_start(state: EditorState, event: DragStart, context: MachineContext) -> Transition:
    item = context.snapshot.get(event.index)
    if item is None:
        return state, []
    selected, effects = _activate(state, event.index, context)
    session = DragSession(index=event.index, item_id=item.item_id, version=context.snapshot.version)
    return replace(selected, drag=session), effects


def _resolve_drag_index(state: EditorState, event: DragEnd, snapshot: TimelineSnapshot) -> int | None:
    session = state.drag
    if session is None or session.index != event.index:
        return event.index if snapshot.get(event.index) is not None else None
    if session.version == snapshot.version:
        return session.index
    # The collection moved on during the drag; follow the item, not the index.
    return snapshot.index_of(session.item_id)


def _drag_end(state: EditorState, event: DragEnd, context: MachineContext) -> Transition:
    index = _resolve_drag_index(state, event, context.snapshot)
    cleared = replace(state, drag=None)
    if index is None:
        return cleared, []

    item = context.snapshot.get(index)
    fields = context.geometry.rect_to_fields(event.rect)
    # Address the update by id too: removals may still be queued ahead of it.
    effects: list[Effect] = [UpdateItem(index, fields, item.item_id if item is not None else None)]
    for name in GEOMETRY_FIELDS:
        effects.append(LoadForm(item_path(context.form_model, index, name), fields[name]))

    if state.drag is not None and state.active_item == state.drag.index:
        cleared = replace(cleared, active_item=index)
    return cleared, effects


def _drag_cancel(state: EditorState, _event: DragCancel, _context: MachineContext) -> Transition:
    return replace(state, drag=None), []


def _change_field(state: EditorState, event: ChangeField, context: MachineContext) -> Transition:
    if state.active_item is None:
        return state, []
    path = item_path(context.form_model, state.active_item, event.field)
    return state, [ChangeForm(path, event.value)]


def _append(state: EditorState, partial: PartialItem, context: MachineContext) -> Transition:
    item = suggest_position(
        context.snapshot.items,
        partial,
        layer_count=context.geometry.layer_count(),
        default_length=context.placement.default_length,
        policy=context.placement.policy,
    )
    return state, [AppendItem(item)]


def _add_item(state: EditorState, event: AddItem, context: MachineContext) -> Transition:
    return _append(state, event.partial, context)


def _duplicate_current(state: EditorState, _event: DuplicateCurrent, context: MachineContext) -> Transition:
    current = context.snapshot.get(state.active_item)
    if current is None:
        return state, []
    return _append(state, partial_from_item(current), context)


def _delete_current(state: EditorState, _event: DeleteCurrent, context: MachineContext) -> Transition:
    if state.active_item is None:
        return state, []
    # An in-flight drag keeps its session; drag end reconciles it by item id.
    idle = replace(state, active_item=None)
    if context.snapshot.get(state.active_item) is None:
        return idle, []
    return idle, [RemoveItem(state.active_item)]


def _append_accepted(state: EditorState, event: AppendAccepted, _context: MachineContext) -> Transition:
    pending = state.pending + (PendingActivation(item_id=event.item_id, version=event.version),)
    return replace(state, pending=pending), []


def _collection_committed(state: EditorState, event: CollectionCommitted, context: MachineContext) -> Transition:
    ready = [entry for entry in state.pending if entry.version <= event.version]
    if not ready:
        return state, []
    waiting = tuple(entry for entry in state.pending if entry.version > event.version)
    newest = max(ready, key=lambda entry: entry.version)
    index = context.snapshot.index_of(newest.item_id)
    cleared = replace(state, pending=waiting)
    if index is None:
        return cleared, []
    return _activate(cleared, index, context)


def _set_cursor(state: EditorState, event: SetCursor, _context: MachineContext) -> Transition:
    if event.style == state.cursor:
        return state, []
    return replace(state, cursor=event.style), [ApplyCursor(event.style)]


def _pan(state: EditorState, event: Pan, context: MachineContext) -> Transition:
    viewport = context.viewport
    if viewport is None:
        return state, []
    return replace(state, offset_x=viewport.clamp_offset(event.x)), []


_HANDLERS: dict[type, Callable[[EditorState, Event, MachineContext], Transition]] = {
    Mount: _mount,
    SelectItem: _select_item,
    DragStart: _drag_start,
    DragEnd: _drag_end,
    DragCancel: _drag_cancel,
    ChangeField: _change_field,
    AddItem: _add_item,
    DuplicateCurrent: _duplicate_current,
    DeleteCurrent: _delete_current,
    AppendAccepted: _append_accepted,
    CollectionCommitted: _collection_committed,
    SetCursor: _set_cursor,
    Pan: _pan,
}
