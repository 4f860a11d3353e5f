from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from startlights import const
from startlights.api.snapshot import Attempt
from startlights.errors import StorageError
from startlights.results.store import KeyValueStore

logger = logging.getLogger(__name__)


def parse_best(raw: Optional[str]) -> Optional[int]:
    """Stored best time, or None when missing or unusable."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(round(value))


def numbered(history: Sequence[Attempt]) -> List[Tuple[int, Attempt]]:
    """(attempt number, attempt) pairs, newest first; the newest has the highest number."""
    n = len(history)
    return [(n - i, a) for i, a in enumerate(history)]


class ResultLedger:
    """
    Most recent attempts (newest first, bounded) plus the all-time best time.
    The best is read from `store` once, here, and written back on every improvement.
    """

    def __init__(self, store: KeyValueStore, capacity: int = const.HISTORY_SIZE, best_key: str = const.BEST_KEY):
        self.store = store
        self.capacity = capacity
        self.best_key = best_key
        self._history: List[Attempt] = []
        try:
            self._best = parse_best(store.get(best_key))
        except StorageError as e:
            logger.warning("could not read best time: %s", e)
            self._best = None

    @property
    def history(self) -> Tuple[Attempt, ...]:
        return tuple(self._history)

    @property
    def best(self) -> Optional[int]:
        return self._best

    def record(self, attempt: Attempt) -> Tuple[Tuple[Attempt, ...], Optional[int]]:
        self._history.insert(0, attempt)
        del self._history[self.capacity:]

        if not attempt.is_jump_start and (self._best is None or attempt.elapsed_ms < self._best):
            self._best = attempt.elapsed_ms
            logger.info("new best time: %d ms", self._best)
            self._persist_best()

        return self.history, self._best

    def average_of_valid(self) -> Optional[float]:
        times = [a.elapsed_ms for a in self._history if not a.is_jump_start]
        if not times:
            return None
        return float(np.mean(times))

    def numbered(self) -> List[Tuple[int, Attempt]]:
        return numbered(self._history)

    def _persist_best(self) -> None:
        try:
            self.store.set(self.best_key, str(self._best))
        except Exception as e:
            # fire-and-forget: the in-memory best stands for this session
            logger.warning("could not save best time: %s", e)
