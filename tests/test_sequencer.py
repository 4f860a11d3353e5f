from conftest import FixedRandom, run_until

from startlights.timing.sequencer import LightSequencer


def make(scheduler, value=0.5):
    return LightSequencer(scheduler, rng=FixedRandom(value))


def test_lights_come_on_at_one_second_boundaries(clock, scheduler):
    seq = make(scheduler)
    progress = []
    seq.start(lambda now: None, progress.append)

    run_until(clock, scheduler, 999, step_ms=1)
    assert progress == []
    run_until(clock, scheduler, 1000, step_ms=1)
    assert progress == [1]
    run_until(clock, scheduler, 5000, step_ms=10)
    assert progress == [1, 2, 3, 4, 5]


def test_skipped_frames_never_move_progress_backward(clock, scheduler):
    seq = make(scheduler)
    progress = []
    seq.start(lambda now: None, progress.append)

    # one long stall straight past three boundaries
    clock.advance(3500)
    scheduler.tick()
    assert progress == [3]
    clock.advance(100)
    scheduler.tick()
    clock.advance(1000)
    scheduler.tick()
    assert progress == [3, 4]
    assert progress == sorted(progress)


def test_lights_out_once_after_pinned_delay(clock, scheduler):
    seq = make(scheduler, value=0.25)   # 1000 + 0.25 * 4000 = 2000 ms
    outs = []
    seq.start(outs.append, lambda k: None)

    run_until(clock, scheduler, 6990, step_ms=10)
    assert outs == []
    assert seq.last_delay_ms == 2000
    run_until(clock, scheduler, 7000, step_ms=10)
    assert outs == [7000]
    assert seq.progress == 0
    run_until(clock, scheduler, 20000, step_ms=100)
    assert outs == [7000]
    assert not seq.active
    assert scheduler.pending() == 0


def test_delay_stays_in_range():
    for value in (0.0, 0.5, 0.999999):
        seq = LightSequencer(scheduler=None, rng=FixedRandom(value))
        assert 1000 <= seq.pick_delay() < 5000


def test_second_start_while_running_is_ignored(clock, scheduler):
    seq = make(scheduler)
    assert seq.start(lambda now: None, lambda k: None)
    pending = scheduler.pending()
    assert not seq.start(lambda now: None, lambda k: None)
    assert scheduler.pending() == pending


def test_cancel_drops_every_handle(clock, scheduler):
    seq = make(scheduler)
    outs = []
    seq.start(outs.append, lambda k: None)
    run_until(clock, scheduler, 5500)   # waiting for lights out
    seq.cancel()
    assert scheduler.pending() == 0
    run_until(clock, scheduler, 20000, step_ms=100)
    assert outs == []


def test_delay_never_reaches_max_at_float_edge():
    seq = LightSequencer(scheduler=None, rng=FixedRandom(1 - 2 ** -53),
                         min_delay_ms=1000, max_delay_ms=5000)
    assert seq.pick_delay() < 5000
