"""Layout geometry exports."""

from timeline_editor.layout.geometry import LayerGeometry, PixelRect, Position, round_half_up
from timeline_editor.layout.viewport import Viewport

__all__ = [
    "LayerGeometry",
    "PixelRect",
    "Position",
    "Viewport",
    "round_half_up",
]
