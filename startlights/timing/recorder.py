from __future__ import annotations
import math
from datetime import datetime
from typing import Optional

from startlights.api.snapshot import Attempt


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def calibrated_elapsed(raw_ms: float, compensation_ms: float) -> int:
    """Raw reaction minus host latency, rounded to whole ms and never negative."""
    return max(0, round_half_up(raw_ms - compensation_ms))


class ReactionRecorder:
    """
    Turns a reaction signal into an Attempt.
    Pure with respect to time: callers pass in every timestamp.
    """

    def __init__(self, compensation_ms: float = 0.0):
        self.compensation_ms = compensation_ms
        self.lights_out_at: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self.lights_out_at is not None

    def arm_at(self, timestamp: float) -> None:
        self.lights_out_at = timestamp

    def reset(self) -> None:
        self.lights_out_at = None

    def react(self, now: float, recorded_at: datetime) -> Attempt:
        if self.lights_out_at is None:
            return Attempt(elapsed_ms=None, is_jump_start=True, recorded_at=recorded_at)
        raw = now - self.lights_out_at
        return Attempt(
            elapsed_ms=calibrated_elapsed(raw, self.compensation_ms),
            is_jump_start=False,
            recorded_at=recorded_at,
        )
