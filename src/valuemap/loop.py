import logging
import time
from collections.abc import Callable

from valuemap.config import Settings
from valuemap.sampler import FrameSampler, ValueMap
from valuemap.sources import FrameSource

logger = logging.getLogger(__name__)


class FpsCounter:
    """Counts completed frames and publishes a rate once per window."""

    def __init__(self, window: float = 1.0, clock: Callable[[], float] = time.perf_counter):
        self.window = window
        self.clock = clock
        self.fps = 0
        self.total = 0
        self._count = 0
        self._start = clock()

    def reset(self) -> None:
        self.fps = 0
        self._count = 0
        self._start = self.clock()

    def tick(self) -> int:
        self._count += 1
        self.total += 1
        now = self.clock()
        elapsed = now - self._start
        if elapsed >= self.window:
            self.fps = round(self._count / elapsed)
            self._count = 0
            self._start = now
        return self.fps


def run(
    source: FrameSource,
    settings: Settings | Callable[[], Settings],
    on_map: Callable[[ValueMap, int], None],
    frozen: Callable[[], bool] = lambda: False,
    max_frames: int | None = None,
    sampler: FrameSampler | None = None,
    counter: FpsCounter | None = None,
) -> int:
    """Sample frames from ``source`` and pass each value map to ``on_map``.

    ``settings`` may be a callable so configuration can change between
    frames. Frames that are not ready, or arrive while ``frozen()`` is true,
    are skipped. Returns the number of value maps produced.
    """
    get_settings = settings if callable(settings) else lambda: settings
    sampler = sampler or FrameSampler()
    counter = counter or FpsCounter()
    produced = 0
    for frame in source.frames():
        if max_frames is not None and produced >= max_frames:
            break
        if frozen():
            continue
        value_map = sampler.sample(frame, get_settings())
        if value_map is None:
            logger.debug("Frame not ready, skipping")
            continue
        produced += 1
        on_map(value_map, counter.tick())
    logger.debug("Produced %d value map(s)", produced)
    return produced
