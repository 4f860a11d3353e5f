from __future__ import annotations
import logging
import time
from typing import Callable, List, Optional

from startlights.errors import SchedulingError

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]


def monotonic_ms() -> float:
    """Host clock in float milliseconds (monotonic, arbitrary epoch)."""
    return time.perf_counter() * 1000.0


class Handle:
    """
    Cancellation handle for one scheduled callback.
    Cancelling removes the callback from its scheduler immediately, so it can
    never be invoked afterwards, not even later in the same tick.
    """

    def __init__(self, scheduler: "FrameScheduler", callback: TickCallback, due_ms: Optional[float]):
        self._scheduler = scheduler
        self.callback = callback
        self.due_ms = due_ms          # None for per-tick callbacks
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._scheduler._discard(self)


class FrameScheduler:
    """
    Cooperative scheduler pumped by the host frame loop.

    Two kinds of work:
      - one-shot timers (call_at / call_later), fired on the first tick at or after their due time
      - per-tick callbacks (every_tick), fired on every tick until cancelled
    Every callback receives the tick timestamp in ms.
    """

    def __init__(self, clock: Callable[[], float] = monotonic_ms):
        self.clock = clock
        self._timers: List[Handle] = []
        self._tickers: List[Handle] = []
        self._closed = False

    def now(self) -> float:
        return self.clock()

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        """Number of live handles (timers + per-tick callbacks)."""
        return len(self._timers) + len(self._tickers)

    # ---------- scheduling ----------
    def call_at(self, due_ms: float, callback: TickCallback) -> Handle:
        self._check_open()
        handle = Handle(self, callback, due_ms)
        self._timers.append(handle)
        return handle

    def call_later(self, delay_ms: float, callback: TickCallback) -> Handle:
        return self.call_at(self.now() + max(0.0, delay_ms), callback)

    def every_tick(self, callback: TickCallback) -> Handle:
        self._check_open()
        handle = Handle(self, callback, None)
        self._tickers.append(handle)
        return handle

    # ---------- pumping ----------
    def tick(self, now: Optional[float] = None) -> float:
        """Run everything that is due. Returns the timestamp used for this tick."""
        if now is None:
            now = self.now()

        for handle in list(self._tickers):
            # an earlier callback in this tick may have cancelled it
            if handle.cancelled:
                continue
            handle.callback(now)

        due = sorted((h for h in self._timers if h.due_ms <= now), key=lambda h: h.due_ms)
        for handle in due:
            if handle.cancelled:
                continue
            handle.fired = True
            self._discard(handle)
            handle.callback(now)
        return now

    def cancel_all(self) -> None:
        for handle in list(self._timers) + list(self._tickers):
            handle.cancel()

    def close(self) -> None:
        """Cancel everything and refuse new work."""
        self.cancel_all()
        self._closed = True

    # ---------- internals ----------
    def _check_open(self):
        if self._closed:
            raise SchedulingError("scheduler is closed")

    def _discard(self, handle: Handle) -> None:
        if handle in self._timers:
            self._timers.remove(handle)
        elif handle in self._tickers:
            self._tickers.remove(handle)
