"""
Screen-space to grid-space conversion.
"""

from dataclasses import dataclass
from typing import Tuple

from turnkeep.config import CONFIG
from turnkeep.entities.components import Position


@dataclass
class Viewport:
    """Camera offset owned by the presentation layer.

    The presentation side scrolls the view by changing the offsets; the engine
    only reads them when converting a pointer position.
    """

    offset_x: int = 0
    offset_y: int = 0
    tile_size: int = CONFIG.tile_pixel_size


def screen_to_grid(point: Tuple[int, int], viewport: Viewport) -> Position:
    """Convert a pixel coordinate into the grid tile under it."""
    x, y = point
    return Position(
        (x - viewport.offset_x) // viewport.tile_size,
        (y - viewport.offset_y) // viewport.tile_size,
    )
