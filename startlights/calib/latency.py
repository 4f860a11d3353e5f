from __future__ import annotations
import asyncio
import logging
import time
from typing import Callable, List, Sequence

import numpy as np

from startlights import const

logger = logging.getLogger(__name__)

# sampler(n) -> n delays in ms
Sampler = Callable[[int], Sequence[float]]


async def _measure_yields(trials: int, timeout_sec: float) -> List[float]:
    samples = []
    for _ in range(trials):
        start = time.perf_counter()
        await asyncio.wait_for(asyncio.sleep(0), timeout=timeout_sec)
        samples.append((time.perf_counter() - start) * 1000.0)
    return samples


def asyncio_sampler(trials: int, timeout_sec: float = const.CALIBRATION_TIMEOUT_SEC) -> List[float]:
    """
    Time `trials` minimal-delay round trips through a fresh asyncio event loop.
    Raises RuntimeError when called from inside a running loop.
    """
    return asyncio.run(_measure_yields(trials, timeout_sec))


def lower_median(samples: Sequence[float]) -> float:
    """Middle element of the sorted samples; the lower of the two central ones for even counts."""
    ordered = np.sort(np.asarray(samples, dtype=np.float64))
    return float(ordered[(len(ordered) - 1) // 2])


class LatencyCalibrator:
    """
    Estimates how late the host runs a callback that asked for no delay at all.
    The median of several trials is used so that an occasional stall does not
    inflate every later reaction time.
    """

    def __init__(
        self,
        trials: int = const.CALIBRATION_TRIALS,
        buffer_ms: float = const.LATENCY_BUFFER_MS,
        sampler: Sampler = asyncio_sampler,
    ):
        if trials < 10:
            raise ValueError("calibration needs at least 10 trials")
        if buffer_ms < 0:
            raise ValueError("buffer_ms must not be negative")
        self.trials = trials
        self.buffer_ms = buffer_ms
        self.sampler = sampler

    def compensation_for(self, samples: Sequence[float]) -> float:
        return max(0.0, lower_median(samples)) + self.buffer_ms

    def calibrate(self) -> float:
        """Returns latency compensation in ms; 0.0 if the host could not be sampled."""
        try:
            samples = list(self.sampler(self.trials))
        except (RuntimeError, OSError, asyncio.TimeoutError) as e:
            logger.warning("latency calibration failed (%s); using 0 ms", e)
            return 0.0

        if not samples:
            logger.warning("latency calibration produced no samples; using 0 ms")
            return 0.0

        compensation = self.compensation_for(samples)
        logger.info("calibrated host latency: median %.3f ms + buffer %.1f ms = %.3f ms",
                    lower_median(samples), self.buffer_ms, compensation)
        return compensation
