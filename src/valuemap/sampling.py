import math

import numpy as np

# ITU-R BT.709 weights for red, green, blue
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

# Candidate boxes with more pixels than this are visited with STRIDE in both axes
STRIDE_THRESHOLD = 2000
STRIDE = 2

# Returned when a region includes no pixels at all
NEUTRAL_LUMINANCE = 0.5

Window = tuple[slice, slice]


def luminance(r: int, g: int, b: int) -> float:
    """Perceptual brightness of one pixel, normalized to 0-1."""
    return (LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b) / 255


def luminance_plane(rgba: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """Luminance of every pixel of an (h, w, 3+) array as an (h, w) float64 plane.

    ``out`` may be a previously returned plane of the same shape; it is
    overwritten in place instead of allocating a new one.
    """
    height, width = rgba.shape[:2]
    if out is None or out.shape != (height, width):
        out = np.empty((height, width), dtype=np.float64)
    np.multiply(rgba[:, :, 0], LUMA_WEIGHTS[0], out=out)
    out += LUMA_WEIGHTS[1] * rgba[:, :, 1]
    out += LUMA_WEIGHTS[2] * rgba[:, :, 2]
    out /= 255
    return out


def _window(shape: tuple[int, int], x0: float, y0: float, x1: float, y1: float) -> Window:
    """Clamp a real-valued box to the plane and pick the visiting stride."""
    h, w = shape
    left, top = max(0, math.floor(x0)), max(0, math.floor(y0))
    # Never let a box left of or above the plane turn into a negative index
    right, bottom = max(left, min(w, math.floor(x1))), max(top, min(h, math.floor(y1)))
    area = (right - left) * (bottom - top)
    step = STRIDE if area > STRIDE_THRESHOLD else 1
    return slice(top, bottom, step), slice(left, right, step)


def rect_window(shape: tuple[int, int], x: float, y: float, width: float, height: float) -> Window:
    return _window(shape, x, y, x + width, y + height)


def circle_window(shape: tuple[int, int], cx: float, cy: float, radius: float) -> tuple[Window, np.ndarray]:
    """Candidate window of a circle plus the boolean mask of visited pixels inside it."""
    rows, cols = _window(shape, cx - radius, cy - radius, cx + radius, cy + radius)
    ys = np.arange(rows.start, rows.stop, rows.step)[:, None]
    xs = np.arange(cols.start, cols.stop, cols.step)[None, :]
    mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius * radius
    return (rows, cols), mask


def sample_rect(plane: np.ndarray, x: float, y: float, width: float, height: float) -> float:
    """Average luminance of the pixels inside a rectangle."""
    region = plane[rect_window(plane.shape, x, y, width, height)]
    if region.size == 0:
        return NEUTRAL_LUMINANCE
    return float(region.mean())


def sample_circle(plane: np.ndarray, cx: float, cy: float, radius: float) -> float:
    """Average luminance of the pixels within a circle."""
    window, mask = circle_window(plane.shape, cx, cy, radius)
    values = plane[window][mask]
    if values.size == 0:
        return NEUTRAL_LUMINANCE
    return float(values.mean())
