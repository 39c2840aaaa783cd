"""HTTP control surface for driving a timeline editor remotely."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from timeline_editor.api.schemas import (
    AddItemRequest,
    AddItemResponse,
    DragRequest,
    FieldChangeRequest,
    ItemPayload,
    LayoutResponse,
    PanRequest,
    PanResponse,
    PositionPayload,
    SelectRequest,
    TimelineResponse,
)
from timeline_editor.config import StageConfig
from timeline_editor.editing.facade import TimelineEditor
from timeline_editor.models import PartialItem

logger = logging.getLogger(__name__)


def create_app(editor: TimelineEditor | None = None, width: int = 800) -> FastAPI:
    app = FastAPI(title="timeline-editor API", version="0.1.0")
    stage = editor or TimelineEditor(config=StageConfig.from_env())
    if stage.state.viewport_width == 0:
        stage.mount(width)

    def timeline_response() -> TimelineResponse:
        snapshot = stage.snapshot()
        return TimelineResponse(
            items=[
                ItemPayload(
                    start=item.start,
                    stop=item.stop,
                    priority=item.priority,
                    attributes=dict(item.attributes),
                )
                for item in snapshot.items
            ],
            active_item=stage.state.active_item,
            version=snapshot.version,
            layer_count=stage.layer_count(),
        )

    def require_index(index: int) -> None:
        if stage.snapshot().get(index) is None:
            raise HTTPException(status_code=404, detail=f"Item index {index} not found")

    @app.get("/")
    def root() -> dict[str, str]:
        return {
            "service": "timeline-editor API",
            "status": "ok",
            "docs": "/docs",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        return Response(status_code=204)

    @app.get("/v1/timeline", response_model=TimelineResponse)
    def get_timeline() -> TimelineResponse:
        return timeline_response()

    @app.get("/v1/timeline/layout", response_model=LayoutResponse)
    def get_layout() -> LayoutResponse:
        return LayoutResponse(
            positions=[PositionPayload(x=pos.x, y=pos.y, w=pos.w) for pos in stage.positions()],
            active_item=stage.state.active_item,
        )

    @app.post("/v1/timeline/items", response_model=AddItemResponse)
    def add_item(payload: AddItemRequest) -> AddItemResponse:
        partial = PartialItem(
            start=payload.start,
            stop=payload.stop,
            priority=payload.priority,
            attributes=dict(payload.attributes),
        )
        index = stage.add(partial)
        logger.info("item added at index %s", index)
        return AddItemResponse(index=index, timeline=timeline_response())

    @app.post("/v1/timeline/select", response_model=TimelineResponse)
    def select_item(payload: SelectRequest) -> TimelineResponse:
        require_index(payload.index)
        stage.select(payload.index)
        return timeline_response()

    @app.post("/v1/timeline/drag", response_model=TimelineResponse)
    def drag_item(payload: DragRequest) -> TimelineResponse:
        require_index(payload.index)
        stage.drag_end(payload.index, payload.x, payload.y, payload.width)
        return timeline_response()

    @app.post("/v1/timeline/field", response_model=TimelineResponse)
    def change_field(payload: FieldChangeRequest) -> TimelineResponse:
        stage.change_field(payload.field, payload.value)
        return timeline_response()

    @app.post("/v1/timeline/duplicate", response_model=AddItemResponse)
    def duplicate_item() -> AddItemResponse:
        index = stage.duplicate_current()
        return AddItemResponse(index=index, timeline=timeline_response())

    @app.delete("/v1/timeline/active", response_model=TimelineResponse)
    def delete_active() -> TimelineResponse:
        stage.delete_current()
        return timeline_response()

    @app.post("/v1/viewport/pan", response_model=PanResponse)
    def pan(payload: PanRequest) -> PanResponse:
        offset = stage.pan(payload.x)
        viewport = stage.controller.viewport
        low, high = viewport.pan_bounds() if viewport is not None else (offset, offset)
        return PanResponse(offset_x=offset, low=low, high=high)

    return app


app = create_app()
