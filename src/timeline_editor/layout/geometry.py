"""Conversion between (start, stop, layer) and pixel rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass

from timeline_editor.config import StageConfig
from timeline_editor.models import TimelineItem


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class Position:
    x: int
    y: int
    w: int


@dataclass(frozen=True, slots=True)
class PixelRect:
    x: float
    y: float
    width: float


@dataclass(frozen=True, slots=True)
class LayerGeometry:
    height: int
    padding: int
    layer_height: int
    layer_gutter: int

    def __post_init__(self) -> None:
        if self.layer_height <= 0:
            raise ValueError("layer_height must be positive")
        if self.layer_gutter < 0:
            raise ValueError("layer_gutter must be >= 0")

    @staticmethod
    def from_config(config: StageConfig) -> LayerGeometry:
        return LayerGeometry(
            height=config.height,
            padding=config.padding,
            layer_height=config.layer_height,
            layer_gutter=config.layer_gutter,
        )

    @property
    def layer_pitch(self) -> int:
        return self.layer_height + self.layer_gutter

    def layer_y(self, layer: int) -> int:
        return layer * self.layer_pitch + self.padding

    def closest_layer(self, y: float) -> int:
        # The bottom 3 * padding strip is reserved and never holds a layer.
        upper = self.height - 3 * self.padding
        clamped = max(min(y, upper), self.padding)
        return round_half_up((clamped - self.padding) / self.layer_pitch)

    def closest_layer_y(self, y: float) -> int:
        return self.layer_y(self.closest_layer(y))

    def layer_count(self, height: int | None = None) -> int:
        return self.closest_layer(self.height if height is None else height) + 1

    def calc_position(self, start: int | str, stop: int | str, layer: int) -> Position:
        x = int(start)
        return Position(x=x, y=self.layer_y(layer), w=int(stop) - x)

    def item_rect(self, item: TimelineItem) -> PixelRect:
        position = self.calc_position(item.start, item.stop, item.priority)
        return PixelRect(x=position.x, y=position.y, width=position.w)

    def rect_to_fields(self, rect: PixelRect) -> dict[str, int]:
        start = round_half_up(rect.x)
        return {
            "start": start,
            "stop": start + round_half_up(rect.width),
            "priority": self.closest_layer(rect.y),
        }
