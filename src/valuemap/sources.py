from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol

import numpy as np
from PIL import Image, ImageSequence

from valuemap.frame import PixelBuffer

logger = logging.getLogger(__name__)


class FrameSource(Protocol):
    def frames(self) -> Iterator[PixelBuffer]:
        """Yield frames in display order."""
        ...

    def close(self) -> None: ...


class ImageSource:
    """Frames from a still or animated image file (GIF, APNG, WebP, ...)."""

    def __init__(self, path: str | Path, loop: bool = False):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")
        self.loop = loop
        self._image = Image.open(self.path)
        self.n_frames = getattr(self._image, "n_frames", 1)
        logger.debug("Opened %s (%dx%d, %d frame(s))", self.path, *self._image.size, self.n_frames)

    def frames(self) -> Iterator[PixelBuffer]:
        passes = itertools.count() if self.loop else range(1)
        for _ in passes:
            for frame in ImageSequence.Iterator(self._image):
                yield PixelBuffer.from_image(frame)

    def close(self) -> None:
        self._image.close()


class ArraySource:
    """Frames from arrays or PixelBuffers the caller already holds."""

    def __init__(self, frames: Iterable[np.ndarray | PixelBuffer]):
        self._frames = frames

    def frames(self) -> Iterator[PixelBuffer]:
        for frame in self._frames:
            if isinstance(frame, PixelBuffer):
                yield frame
            elif frame.size == 0:
                yield PixelBuffer(data=b"", width=0, height=0)
            else:
                yield PixelBuffer.from_array(frame)

    def close(self) -> None:
        pass
