import math

import numpy as np

from valuemap.config import CellShape, GridConfig, ScaleConfig, Settings
from valuemap.frame import PixelBuffer
from valuemap.sampling import luminance_plane, sample_circle, sample_rect

ValueMap = list[list[int]]


def to_value(darkness: float, scale: ScaleConfig) -> int:
    """Map darkness (0-1) onto the scale, rounding half up and clamping.

    Only ``scale.max`` takes part in the linear mapping; ``scale.min`` acts
    purely as a floor.
    """
    value = math.floor(darkness * scale.max + 0.5)
    return max(scale.min, min(scale.max, value))


def value_map_from_plane(
    plane: np.ndarray,
    grid: GridConfig,
    scale: ScaleConfig,
    cell_shape: CellShape,
    invert: bool,
) -> ValueMap:
    """Average each grid cell of a luminance plane and map it onto the scale."""
    height, width = plane.shape
    cell_width = width / grid.columns
    cell_height = height / grid.rows
    radius = min(cell_width, cell_height) / 2
    circle = cell_shape == CellShape.CIRCLE

    value_map = []
    for row in range(grid.rows):
        y = row * cell_height
        row_values = []
        for col in range(grid.columns):
            x = col * cell_width
            if circle:
                avg = sample_circle(plane, x + cell_width / 2, y + cell_height / 2, radius)
            else:
                avg = sample_rect(plane, x, y, cell_width, cell_height)
            darkness = 1 - avg
            if invert:
                darkness = 1 - darkness
            row_values.append(to_value(darkness, scale))
        value_map.append(row_values)
    return value_map


def compute_value_map(
    pixels,
    width: int,
    height: int,
    grid: GridConfig,
    scale: ScaleConfig,
    cell_shape: CellShape = CellShape.RECTANGLE,
    invert: bool = False,
) -> ValueMap | None:
    """Convert one RGBA frame into a rows x columns grid of integers.

    Returns None when the frame has no pixels yet (zero width or height);
    callers should skip that tick and try again with the next frame.
    """
    if width == 0 or height == 0:
        return None
    rgba = PixelBuffer(data=pixels, width=width, height=height).as_array()
    return value_map_from_plane(luminance_plane(rgba), grid, scale, cell_shape, invert)


class FrameSampler:
    """Samples successive frames, reusing one luminance plane between calls."""

    def __init__(self):
        self._plane: np.ndarray | None = None

    def sample(self, frame: PixelBuffer, settings: Settings) -> ValueMap | None:
        if not frame.is_ready:
            return None
        self._plane = luminance_plane(frame.as_array(), out=self._plane)
        return value_map_from_plane(self._plane, settings.grid, settings.scale, settings.cell_shape, settings.invert)
