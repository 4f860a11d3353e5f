import random
from datetime import datetime

import pytest

from startlights.api.config import TrainerConfig
from startlights.app.machine import build_machine
from startlights.results.store import MemoryStore
from startlights.timing.scheduler import FrameScheduler


class ManualClock:
    def __init__(self, start=0.0):
        self.t = start

    def __call__(self):
        return self.t

    def advance(self, ms):
        self.t += ms
        return self.t


class FixedRandom(random.Random):
    """random() always returns `value`, pinning the lights-out delay."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def run_until(clock, scheduler, until_ms, step_ms=16.0):
    while clock.t < until_ms:
        clock.advance(step_ms)
        scheduler.tick()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return FrameScheduler(clock=clock)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def machine(scheduler, store):
    # delay pinned to 1000 + 0.5 * 4000 = 3000 ms
    cfg = TrainerConfig()
    m = build_machine(cfg, scheduler=scheduler, store=store,
                      sampler=lambda n: [1.0] * n, rng=FixedRandom(0.5))
    m.wall_clock = lambda: datetime(2024, 5, 1, 12, 0, 0)
    return m
