"""FastAPI request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ItemPayload(BaseModel):
    start: int
    stop: int
    priority: int
    attributes: dict[str, Any] = Field(default_factory=dict)


class TimelineResponse(BaseModel):
    items: list[ItemPayload]
    active_item: int | None = None
    version: int
    layer_count: int


class PositionPayload(BaseModel):
    x: int
    y: int
    w: int


class LayoutResponse(BaseModel):
    positions: list[PositionPayload]
    active_item: int | None = None


class AddItemRequest(BaseModel):
    start: int | None = None
    stop: int | None = None
    priority: int | None = Field(default=None, ge=0)
    attributes: dict[str, Any] = Field(default_factory=dict)


class AddItemResponse(BaseModel):
    index: int | None = None
    timeline: TimelineResponse


class SelectRequest(BaseModel):
    index: int = Field(ge=0)


class DragRequest(BaseModel):
    index: int = Field(ge=0)
    x: float
    y: float
    width: float = Field(ge=0)


class FieldChangeRequest(BaseModel):
    field: str = Field(min_length=1)
    value: Any = None


class PanRequest(BaseModel):
    x: float


class PanResponse(BaseModel):
    offset_x: float
    low: float
    high: float
