from __future__ import annotations
import logging
import math
import random
from typing import Callable, Optional

from startlights import const
from startlights.timing.scheduler import FrameScheduler, Handle

logger = logging.getLogger(__name__)


class LightSequencer:
    """
    Drives the lights-on sequence and the randomized lights out.

    Progress is derived from elapsed time on every tick rather than counted,
    so frame jitter can delay a light but never reorder or drift the sequence.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        rng: Optional[random.Random] = None,
        light_count: int = const.LIGHT_COUNT,
        interval_ms: float = const.LIGHT_INTERVAL_MS,
        min_delay_ms: float = const.MIN_DELAY_MS,
        max_delay_ms: float = const.MAX_DELAY_MS,
    ):
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.light_count = light_count
        self.interval_ms = interval_ms
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms

        self.t0: Optional[float] = None
        self.progress: int = 0
        self.last_delay_ms: Optional[float] = None
        self._tick_handle: Optional[Handle] = None
        self._out_handle: Optional[Handle] = None
        self._on_lights_out: Optional[Callable[[float], None]] = None
        self._on_progress: Optional[Callable[[int], None]] = None

    @property
    def active(self) -> bool:
        return any(h is not None and h.active for h in (self._tick_handle, self._out_handle))

    def start(self, on_lights_out: Callable[[float], None], on_progress: Callable[[int], None]) -> bool:
        """Begin a sequence anchored at the current scheduler time. No-op while one is running."""
        if self.active:
            return False

        self._on_lights_out = on_lights_out
        self._on_progress = on_progress
        self.t0 = self.scheduler.now()
        self.progress = 0
        self.last_delay_ms = None
        self._tick_handle = self.scheduler.every_tick(self._on_tick)
        return True

    def cancel(self) -> None:
        for handle in (self._tick_handle, self._out_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = None
        self._out_handle = None

    def pick_delay(self) -> float:
        delay = self.min_delay_ms + self.rng.random() * (self.max_delay_ms - self.min_delay_ms)
        # float rounding can land exactly on max for random() just below 1
        return min(delay, math.nextafter(self.max_delay_ms, self.min_delay_ms))

    def lit_at(self, now: float) -> int:
        """Lights that should be showing at `now` for the running sequence."""
        if self.t0 is None:
            return 0
        k = math.floor((now - self.t0) / self.interval_ms)
        return max(0, min(self.light_count, k))

    # ---------- callbacks ----------
    def _on_tick(self, now: float) -> None:
        k = self.lit_at(now)
        if k <= self.progress:
            return
        self.progress = k
        self._on_progress(k)

        if k == self.light_count and self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
            self.last_delay_ms = self.pick_delay()
            # anchor to the last light's boundary, not to the (late) tick
            due = self.t0 + self.light_count * self.interval_ms + self.last_delay_ms
            logger.debug("all %d lights on; lights out in %.1f ms", k, self.last_delay_ms)
            self._out_handle = self.scheduler.call_at(due, self._fire_lights_out)

    def _fire_lights_out(self, now: float) -> None:
        self._out_handle = None
        self.progress = 0
        self._on_lights_out(now)
