import numpy as np
import pytest

from valuemap.frame import PixelBuffer


def solid(width: int, height: int, rgb: tuple[int, int, int]) -> np.ndarray:
    """An (h, w, 4) opaque frame filled with one colour."""
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[:, :, :3] = rgb
    arr[:, :, 3] = 255
    return arr


@pytest.fixture
def make_frame():
    def _make(width, height, rgb=(0, 0, 0)):
        return PixelBuffer.from_array(solid(width, height, rgb))

    return _make


@pytest.fixture
def noise_frame():
    rng = np.random.default_rng(42)
    return PixelBuffer.from_array(rng.integers(0, 256, size=(37, 53, 4), dtype=np.uint8))
