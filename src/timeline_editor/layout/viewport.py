"""Horizontal pan bounds for the stage."""

from __future__ import annotations

from dataclasses import dataclass

from timeline_editor.config import StageConfig, TimeRange


@dataclass(frozen=True, slots=True)
class Viewport:
    range: TimeRange
    width: int
    padding: int

    @staticmethod
    def from_config(config: StageConfig, width: int) -> Viewport:
        return Viewport(range=config.range, width=width, padding=config.padding)

    def with_width(self, width: int) -> Viewport:
        return Viewport(range=self.range, width=width, padding=self.padding)

    def pan_bounds(self) -> tuple[int, int]:
        """Return ``(low, high)`` for the stage offset.

        Signs are reversed because dragging the right-hand side of the stage
        moves it leftwards. When the range is narrower than the viewport the
        bounds cross; in that case both collapse onto ``high`` so that
        ``range.min`` stays pinned to the left edge.
        """
        low = -(self.range.max - self.width + self.padding)
        high = -(self.range.min + self.padding)
        if low > high:
            return high, high
        return low, high

    def clamp_offset(self, x: float) -> float:
        low, high = self.pan_bounds()
        return min(max(x, low), high)

    def clamp_drag(self, x: float, _y: float = 0.0) -> tuple[float, float]:
        return self.clamp_offset(x), 0.0

    def visible_range(self, offset_x: float) -> tuple[float, float]:
        left = -offset_x - self.padding
        return left, left + self.width
