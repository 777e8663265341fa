from dataclasses import dataclass

import numpy as np
from PIL import Image

CHANNELS = 4  # red, green, blue, alpha


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA bytes for one frame, 4 bytes per pixel."""

    data: bytes | bytearray | memoryview | np.ndarray
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative frame size: {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS
        size = self.data.size if isinstance(self.data, np.ndarray) else memoryview(self.data).nbytes
        if size != expected:
            raise ValueError(f"Expected {expected} bytes for a {self.width}x{self.height} RGBA frame, got {size}")

    @property
    def is_ready(self) -> bool:
        return self.width > 0 and self.height > 0

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width, 4) uint8 view of the pixel data."""
        if isinstance(self.data, np.ndarray):
            arr = self.data.astype(np.uint8, copy=False).reshape(self.height, self.width, CHANNELS)
        else:
            arr = np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)
        arr = arr.view()
        arr.flags.writeable = False
        return arr

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        image = image.convert("RGBA")
        return cls(data=image.tobytes(), width=image.width, height=image.height)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap an (h, w, 4) array; (h, w, 3) arrays get an opaque alpha channel."""
        if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
            raise ValueError(f"Expected an (h, w, 3) or (h, w, 4) array, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8, copy=False), alpha], axis=2)
        array = np.ascontiguousarray(array, dtype=np.uint8)
        height, width = array.shape[:2]
        return cls(data=array, width=width, height=height)
