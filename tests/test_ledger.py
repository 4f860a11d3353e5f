from datetime import datetime

import pytest

from startlights.api.snapshot import Attempt
from startlights.errors import StorageError
from startlights.results.ledger import ResultLedger, parse_best
from startlights.results.store import MemoryStore

WHEN = datetime(2024, 5, 1, 12, 0, 0)


def timed(ms):
    return Attempt(elapsed_ms=ms, is_jump_start=False, recorded_at=WHEN)


def jump():
    return Attempt(elapsed_ms=None, is_jump_start=True, recorded_at=WHEN)


class FailingStore(MemoryStore):
    def set(self, key, value):
        raise StorageError("disk full")


def test_history_is_capped_and_newest_first(store):
    ledger = ResultLedger(store)
    for ms in range(100, 111):   # 11 attempts
        ledger.record(timed(ms))
    history = ledger.history
    assert len(history) == 10
    assert [a.elapsed_ms for a in history] == list(range(110, 100, -1))
    assert all(a.elapsed_ms != 100 for a in history)


def test_best_only_improves_and_is_persisted(store):
    ledger = ResultLedger(store)
    bests = [ledger.record(timed(ms))[1] for ms in (250, 300, 220, 220, 240)]
    assert bests == [250, 250, 220, 220, 220]
    assert store.get("best") == "220"


def test_jump_start_never_touches_best(store):
    ledger = ResultLedger(store)
    _, best = ledger.record(jump())
    assert best is None
    assert store.get("best") is None
    ledger.record(timed(300))
    _, best = ledger.record(jump())
    assert best == 300


def test_average_covers_only_visible_valid_attempts(store):
    ledger = ResultLedger(store, capacity=3)
    assert ledger.average_of_valid() is None
    ledger.record(timed(100))
    ledger.record(jump())
    ledger.record(timed(200))
    assert ledger.average_of_valid() == pytest.approx(150.0)
    ledger.record(timed(400))     # pushes 100 out of the window
    assert ledger.average_of_valid() == pytest.approx(300.0)


def test_only_jump_starts_have_no_average(store):
    ledger = ResultLedger(store)
    ledger.record(jump())
    assert ledger.average_of_valid() is None


def test_best_is_loaded_from_store():
    ledger = ResultLedger(MemoryStore({"best": "180"}))
    assert ledger.best == 180
    _, best = ledger.record(timed(190))
    assert best == 180


@pytest.mark.parametrize("raw", [None, "", "fast", "-5", "nan", "inf"])
def test_corrupt_best_means_no_best(raw):
    assert parse_best(raw) is None


def test_write_failure_keeps_in_memory_best():
    ledger = ResultLedger(FailingStore())
    _, best = ledger.record(timed(210))
    assert best == 210
    assert ledger.best == 210


def test_attempt_numbers_count_down_from_newest(store):
    ledger = ResultLedger(store)
    ledger.record(timed(300))
    ledger.record(jump())
    ledger.record(timed(250))
    assert [n for n, _ in ledger.numbered()] == [3, 2, 1]
    assert ledger.numbered()[0][1].elapsed_ms == 250


class OSErrorStore(MemoryStore):
    def set(self, key, value):
        raise OSError("disk full")


def test_foreign_write_error_is_not_raised():
    ledger = ResultLedger(OSErrorStore())
    _, best = ledger.record(timed(230))
    assert best == 230
