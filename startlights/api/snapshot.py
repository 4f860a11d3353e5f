from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class GameState(Enum):
    Idle = 1
    Countdown = 2   # lights coming on one by one
    Waiting = 3     # all lights lit, random hold running
    Reacting = 4    # lights out; the clock is running
    Result = 5


@dataclass(frozen=True, slots=True)
class Attempt:
    elapsed_ms: Optional[int]   # calibrated reaction time; None for a jump start
    is_jump_start: bool
    recorded_at: datetime

    def __post_init__(self):
        if self.is_jump_start:
            if self.elapsed_ms is not None:
                raise ValueError("a jump start has no elapsed time")
        elif self.elapsed_ms is None or self.elapsed_ms < 0:
            raise ValueError(f"invalid elapsed_ms for a timed attempt: {self.elapsed_ms!r}")


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the trainer handed to the presentation layer."""
    state: GameState
    progress: int                       # lights currently lit
    calibrating: bool
    reaction_time_ms: Optional[int]     # latest timed reaction, None otherwise
    jump_start: bool                    # latest round ended in a jump start
    latency_compensation_ms: float
    history: Tuple[Attempt, ...]        # newest first
    average_ms: Optional[float]
    best_ms: Optional[int]
    hint: Optional[str] = None
